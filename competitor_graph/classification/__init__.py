"""Keyword-based industry tagging for survey subjects."""

from competitor_graph.classification.industries import (
    INDUSTRY_KEYWORDS,
    classify,
    classify_entities,
)

__all__ = ["INDUSTRY_KEYWORDS", "classify", "classify_entities"]
