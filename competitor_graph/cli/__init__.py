"""
CLI utilities for competitor_graph.

This package provides shared functionality for scripts:
- Logging setup
- Argument parsing
- Command entry points
"""

from competitor_graph.cli.args import add_execute_argument, add_input_output_arguments
from competitor_graph.cli.commands import run_compile_graph
from competitor_graph.cli.logging import (
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)

__all__ = [
    # Logging
    "setup_logging",
    "print_dry_run_header",
    "print_execute_header",
    # Arguments
    "add_execute_argument",
    "add_input_output_arguments",
    # Commands
    "run_compile_graph",
]
