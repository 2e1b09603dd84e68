"""
Financial metadata models.

The metadata table is keyed by slug and carries an entity's type,
ownership, optional ticker and parent link, and a per-year table of
financial snapshots. Year keys arrive as JSON strings and are parsed
to integers here so that "latest year" is always a numeric comparison.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from competitor_graph.constants import ENTITY_TYPES


class FinancialSnapshot(BaseModel):
    """Financial figures for one entity in one year."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    revenue: str | int | float | None = None  # Display form, e.g. "$4.2B"
    market_cap: str | int | float | None = None
    revenue_raw: int | float | None = None
    market_cap_raw: int | float | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "revenue": self.revenue,
            "market_cap": self.market_cap,
            "revenue_raw": self.revenue_raw,
            "market_cap_raw": self.market_cap_raw,
        }


class FinancialMetadata(BaseModel):
    """One entry of the financial metadata table."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = "unknown"
    ownership: Literal["public", "private"] | None = None
    ticker: str | None = None
    parent_company: str | None = None
    parent_slug: str | None = None
    financials_by_year: dict[int, FinancialSnapshot] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v):
        """Map missing or unrecognized types to 'unknown'."""
        if isinstance(v, str) and v.strip().lower() in ENTITY_TYPES:
            return v.strip().lower()
        return "unknown"

    @field_validator("ownership", mode="before")
    @classmethod
    def known_ownership(cls, v):
        """Map unrecognized ownership values to None."""
        if isinstance(v, str) and v.strip().lower() in ("public", "private"):
            return v.strip().lower()
        return None

    @field_validator("ticker", "parent_company", "parent_slug", mode="before")
    @classmethod
    def empty_string_to_none(cls, v):
        """Convert empty strings to None for optional fields."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v

    @field_validator("financials_by_year", mode="before")
    @classmethod
    def none_to_dict(cls, v):
        return {} if v is None else v

    @property
    def is_public(self) -> bool:
        """Public only when marked public and a ticker is known."""
        return self.ownership == "public" and self.ticker is not None
