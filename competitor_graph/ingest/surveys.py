"""
Survey file loading.

Each `*.json` file in the survey directory holds one survey record. Files
are read in name order so that compilation is deterministic. The first
invalid file aborts loading: a graph built from a partial input set would
under-count mentions without any sign that it had.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError
from tqdm import tqdm

from competitor_graph.domain.survey import SurveyRecord
from competitor_graph.exceptions import SurveyValidationError
from competitor_graph.utils.file_discovery import find_files

logger = logging.getLogger(__name__)


def find_survey_files(survey_dir: Path, limit: int | None = None) -> list[Path]:
    """Find survey JSON files in name order."""
    return find_files(Path(survey_dir), extensions=[".json"], limit=limit)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(p) for p in detail["loc"]) or "<root>"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def load_survey_file(path: Path) -> SurveyRecord:
    """
    Read and validate one survey file.

    Raises:
        SurveyValidationError: If the file cannot be read or a required field is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SurveyValidationError(path, f"cannot read file ({e})") from e
    except json.JSONDecodeError as e:
        raise SurveyValidationError(path, f"not valid JSON ({e})") from e

    if not isinstance(data, dict):
        raise SurveyValidationError(path, "expected a JSON object")

    try:
        return SurveyRecord.model_validate(data)
    except ValidationError as e:
        raise SurveyValidationError(path, _describe_validation_error(e)) from e


def load_surveys(
    survey_dir: Path,
    limit: int | None = None,
    show_progress: bool = True,
) -> list[SurveyRecord]:
    """
    Load every survey record in a directory.

    Args:
        survey_dir: Directory of survey JSON files
        limit: Optional limit on number of files (for quick test runs)
        show_progress: Show a tqdm progress bar

    Returns:
        Survey records in file-name order

    Raises:
        SurveyValidationError: On the first invalid file
    """
    files = find_survey_files(survey_dir, limit=limit)
    logger.info(f"Processing {len(files)} JSON files...")

    records = []
    for path in tqdm(files, desc="Loading surveys", unit="file", disable=not show_progress):
        records.append(load_survey_file(path))
    return records
