#!/usr/bin/env python3
"""
Compile competitor survey files into the competitor graph artifact.

This script:
1. Loads the optional financial metadata table
2. Loads and validates every survey JSON file (any invalid file aborts the run)
3. Builds entities, mention relationships and industry tags
4. Writes the graph as a script (data.js) or JSON file for the viewer

Usage:
    python scripts/compile_graph.py                      # Dry-run (compile + summary only)
    python scripts/compile_graph.py --execute            # Compile and write the artifact
    python scripts/compile_graph.py --execute --format json --output data/graph.json
"""

import argparse
import sys

from competitor_graph.cli import (
    add_execute_argument,
    add_input_output_arguments,
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)
from competitor_graph.config import (
    get_financials_file,
    get_log_dir,
    get_output_file,
    get_output_format,
    get_survey_dir,
)
from competitor_graph.exceptions import FinancialDataError, SurveyValidationError
from competitor_graph.graph import compile_from_paths, summarize, write_artifact


def main():
    """Compile the competitor graph."""
    parser = argparse.ArgumentParser(description="Compile competitor surveys into a graph")
    add_execute_argument(parser)
    add_input_output_arguments(parser)
    args = parser.parse_args()

    logger = setup_logging("compile_graph", execute=args.execute, log_dir=get_log_dir())

    survey_dir = args.survey_dir or get_survey_dir()
    financials_file = None if args.no_financials else (args.financials or get_financials_file())
    output_file = args.output or get_output_file()
    output_format = args.format or get_output_format()

    if args.execute:
        print_execute_header("Competitor Graph Compilation", logger)
    else:
        print_dry_run_header("Competitor Graph Compilation", logger)

    logger.info(f"Surveys:    {survey_dir}")
    logger.info(f"Financials: {financials_file or '(none)'}")
    logger.info(f"Output:     {output_file} ({output_format})")
    logger.info("")

    if not survey_dir.exists():
        logger.error(f"Survey directory not found at {survey_dir}")
        sys.exit(1)

    try:
        graph = compile_from_paths(survey_dir, financials_file)
    except (SurveyValidationError, FinancialDataError) as e:
        logger.error(f"✗ {e}")
        logger.error("Aborting: no output written")
        sys.exit(1)

    logger.info("")
    if args.execute:
        write_artifact(graph, output_file, output_format)
    else:
        logger.info(f"Would write {output_file} (use --execute to write)")

    for line in summarize(graph):
        logger.info(line)


if __name__ == "__main__":
    main()
