"""
Domain models for the competitor graph.

Input records (surveys, financial metadata) are pydantic models so that
structural problems surface at load time; compiled graph nodes are plain
dataclasses built up during one compilation pass.
"""

from competitor_graph.domain.financials import FinancialMetadata, FinancialSnapshot
from competitor_graph.domain.models import (
    CompetitorRef,
    CompiledGraph,
    Entity,
    EntityType,
    MentionRef,
    NoteEntry,
    Ownership,
    PrivateCompany,
    Product,
    PublicCompany,
    Relationship,
    UnknownEntity,
    YearSurvey,
)
from competitor_graph.domain.survey import CompetitorMention, SurveyRecord

__all__ = [
    # Inputs
    "SurveyRecord",
    "CompetitorMention",
    "FinancialMetadata",
    "FinancialSnapshot",
    # Graph
    "Entity",
    "EntityType",
    "Ownership",
    "PublicCompany",
    "PrivateCompany",
    "Product",
    "UnknownEntity",
    "MentionRef",
    "CompetitorRef",
    "NoteEntry",
    "YearSurvey",
    "Relationship",
    "CompiledGraph",
]
