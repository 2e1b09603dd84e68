"""Reading survey records from disk."""

from competitor_graph.ingest.surveys import (
    find_survey_files,
    load_survey_file,
    load_surveys,
)

__all__ = ["find_survey_files", "load_survey_file", "load_surveys"]
