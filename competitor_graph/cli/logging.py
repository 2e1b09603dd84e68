"""
Logging utilities for competitor_graph CLI.

Provides logging setup and header printing functions with tqdm compatibility.
"""

import logging
import sys
import time
from pathlib import Path

from tqdm import tqdm


class TqdmLoggingHandler(logging.StreamHandler):
    """Console handler that writes through tqdm.write() so progress bars stay intact."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


class FlushingFileHandler(logging.FileHandler):
    """File handler that flushes after every record."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def setup_logging(
    script_name: str,
    execute: bool = False,
    log_dir: Path = Path("logs"),
    tqdm_compatible: bool = True,
) -> logging.Logger:
    """
    Set up logging for a script.

    Args:
        script_name: Name of the script (for log file naming)
        execute: If True, log to file + console. If False, only console.
        log_dir: Directory for log files
        tqdm_compatible: If True, use TqdmLoggingHandler for clean progress bar output

    Returns:
        Configured logger instance
    """
    if not execute:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            stream=sys.stdout,
        )
        return logging.getLogger(script_name)

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{script_name}_{timestamp}.log"

    logger = logging.getLogger(script_name)
    logger.setLevel(logging.DEBUG)
    logger.handlers = []

    # File handler: DEBUG and above (detailed logs)
    file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))

    # Console handler: INFO and above (summary only)
    console_formatter = logging.Formatter("%(message)s")
    if tqdm_compatible:
        console_handler: logging.Handler = TqdmLoggingHandler(sys.stderr)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    logger.propagate = False

    # Route package loggers (competitor_graph.*) to the same file.
    # Console shows INFO progress; data-quality warnings go to the file only.
    pkg_logger = logging.getLogger("competitor_graph")
    pkg_logger.setLevel(logging.DEBUG)
    pkg_logger.handlers = []
    pkg_logger.addHandler(file_handler)
    pkg_console_handler = (
        TqdmLoggingHandler(sys.stderr) if tqdm_compatible else logging.StreamHandler(sys.stderr)
    )
    pkg_console_handler.setLevel(logging.INFO)
    pkg_console_handler.addFilter(lambda record: record.levelno != logging.WARNING)
    pkg_console_handler.setFormatter(console_formatter)
    pkg_logger.addHandler(pkg_console_handler)
    pkg_logger.propagate = False

    logger.info(f"Log file: {log_file}")
    return logger


def print_dry_run_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard dry-run header.

    Args:
        title: Title for the dry-run section
        logger: Optional logger instance (if None, uses module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(f"{title} (Dry Run)")
    logger.info("=" * 70)


def print_execute_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard execute mode header.

    Args:
        title: Title for the execute section
        logger: Optional logger instance (if None, uses module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(title)
    logger.info("=" * 70)
