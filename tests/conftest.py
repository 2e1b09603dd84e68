"""
Pytest configuration and shared fixtures for competitor_graph tests.
"""

import json
from pathlib import Path

import pytest

from competitor_graph.config import get_settings
from competitor_graph.domain.financials import FinancialMetadata
from competitor_graph.domain.survey import SurveyRecord
from competitor_graph.financials.lookup import FinancialTable


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are lru_cached; reset so env changes in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_record(
    company: str,
    ticker: str,
    year: int,
    competitors: list[tuple[str, str]] | None = None,
    context: str = "",
) -> SurveyRecord:
    """Build a SurveyRecord from (name, notes) competitor pairs."""
    return SurveyRecord.model_validate(
        {
            "company": company,
            "ticker": ticker,
            "year": year,
            "search_query": f"{company} competitors {year}",
            "search_date": f"{year}-06-01",
            "context": context,
            "sources": [f"https://example.com/{ticker.lower()}/{year}"],
            "competitors": [{"name": n, "notes": notes} for n, notes in (competitors or [])],
        }
    )


@pytest.fixture
def record_factory():
    """Factory fixture for SurveyRecord objects."""
    return make_record


@pytest.fixture
def survey_dir(tmp_path) -> Path:
    """Empty directory for survey files."""
    directory = tmp_path / "competitor_searches"
    directory.mkdir()
    return directory


@pytest.fixture
def write_survey(survey_dir):
    """Factory fixture writing one survey JSON file into survey_dir."""

    def _write(filename: str, data: dict | list | str) -> Path:
        path = survey_dir / filename
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_financials_data() -> dict:
    """Raw financial metadata in file shape."""
    return {
        "entities": {
            "acme": {
                "type": "company",
                "ownership": "public",
                "ticker": "ACME",
                "financials_by_year": {
                    "2023": {
                        "revenue": "$1.0B",
                        "market_cap": "$5.0B",
                        "revenue_raw": 1_000_000_000,
                        "market_cap_raw": 5_000_000_000,
                    },
                    "2024": {
                        "revenue": "$1.2B",
                        "market_cap": "$6.0B",
                        "revenue_raw": 1_200_000_000,
                        "market_cap_raw": 6_000_000_000,
                    },
                },
            },
            "gadget-pro": {
                "type": "product",
                "ownership": "public",
                "parent_company": "Acme Inc",
                "parent_slug": "acme",
            },
            "stealth-inc": {
                "type": "company",
                "ownership": "private",
                "financials_by_year": {
                    "2022": {"revenue": "$40M", "revenue_raw": 40_000_000},
                },
            },
            "megacorp": {
                "type": "company",
                "ownership": "public",
                "ticker": "MEGA",
                "financials_by_year": {
                    "2024": {"revenue": "$90B", "market_cap": "$1.1T"},
                },
            },
        }
    }


@pytest.fixture
def financial_table(sample_financials_data) -> FinancialTable:
    """FinancialTable built from sample_financials_data."""
    return FinancialTable(
        {
            slug: FinancialMetadata.model_validate(raw)
            for slug, raw in sample_financials_data["entities"].items()
        }
    )
