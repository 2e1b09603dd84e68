"""
Argument parsing utilities for competitor_graph CLI.

Provides standard argument patterns used across scripts.
"""

from pathlib import Path

from competitor_graph.constants import OUTPUT_FORMATS


def add_execute_argument(parser):
    """
    Add standard --execute argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually write the output artifact (default is dry-run)",
    )


def add_input_output_arguments(parser):
    """
    Add path overrides for the compile inputs and output.

    Unset arguments fall back to settings (environment / .env).

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--survey-dir",
        type=Path,
        help="Directory of survey JSON files (default: SURVEY_DIR setting)",
    )
    parser.add_argument(
        "--financials",
        type=Path,
        help="Financial metadata JSON file (default: FINANCIALS_FILE setting)",
    )
    parser.add_argument(
        "--no-financials",
        action="store_true",
        help="Compile without financial metadata",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output artifact path (default: OUTPUT_FILE setting)",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: OUTPUT_FORMAT setting)",
    )
