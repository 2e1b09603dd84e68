"""
Survey record models.

One survey record is one company's self-reported competitor list for one
year. `company`, `ticker`, `year` and each competitor's `name` are
required; everything else defaults when absent.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompetitorMention(BaseModel):
    """A claim that `name` competes with the surveyed company."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    notes: str = ""

    @field_validator("notes", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class SurveyRecord(BaseModel):
    """One company's competitor survey for one year."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    company: str = Field(min_length=1)
    ticker: str = Field(min_length=1)
    year: int
    # Passed through to the output as-is; only identity fields can fail a file
    search_query: Any = None
    search_date: Any = None
    context: str = ""
    sources: list[Any] = Field(default_factory=list)
    competitors: list[CompetitorMention] = Field(default_factory=list)

    @field_validator("company", "ticker", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        """Strip whitespace from identifying strings."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("year", mode="before")
    @classmethod
    def reject_bool_year(cls, v):
        # JSON true/false is not a year
        if isinstance(v, bool):
            raise ValueError("year must be an integer, not a boolean")
        return v

    @field_validator("context", mode="before")
    @classmethod
    def context_to_text(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("sources", mode="before")
    @classmethod
    def sources_to_list(cls, v):
        if v is None:
            return []
        return v if isinstance(v, list) else [v]

    @field_validator("competitors", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return [] if v is None else v
