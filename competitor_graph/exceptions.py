"""
Errors that abort a compilation run.

Only structural input problems are errors. Missing financial data, missing
industry matches and degenerate names are absorbed and logged instead.
"""

from pathlib import Path


class SurveyValidationError(ValueError):
    """A survey file is unreadable or missing a required field."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid survey file {self.path}: {reason}")


class FinancialDataError(ValueError):
    """The financial metadata file exists but cannot be used at all."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid financial metadata file {self.path}: {reason}")
