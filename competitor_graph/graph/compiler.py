"""
Graph compiler.

Builds the competitor graph from survey records in two passes:

Pass 1 (subjects): one public entity per ticker, holding that ticker's
records by year. A later record for the same (ticker, year) replaces the
earlier one.

Pass 2 (edges): for every subject, year (ascending) and mention (in file
order), resolve the mention to an entity and record:
- a Relationship (every mention, no de-duplication)
- a mentionedBy entry on the target (once per (subject, year))
- a note on the target when it is not a survey subject
- a competitor reference on the subject (once per target)

Relationship order is therefore (subject discovery order, year, mention
order) and is not sorted by year across subjects.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from competitor_graph.classification.industries import classify_entities
from competitor_graph.domain.models import (
    CompiledGraph,
    Entity,
    MentionRef,
    NoteEntry,
    Relationship,
    YearSurvey,
)
from competitor_graph.domain.survey import SurveyRecord
from competitor_graph.entity_resolution.registry import EntityRegistry
from competitor_graph.entity_resolution.resolver import EntityResolver
from competitor_graph.financials.lookup import FinancialTable, load_financial_table
from competitor_graph.graph.report import compute_meta, sort_entities
from competitor_graph.ingest.surveys import load_surveys

logger = logging.getLogger(__name__)


@dataclass
class CompilationState:
    """Everything accumulated during one run; owned by the compiler."""

    registry: EntityRegistry = field(default_factory=EntityRegistry)
    subjects: list[Entity] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)


def ingest_subjects(
    records: Iterable[SurveyRecord],
    resolver: EntityResolver,
    state: CompilationState,
) -> list[Entity]:
    """
    Pass 1: create one public entity per ticker and file its yearly records.

    Two tickers whose company names share a slug are merged into the entity
    created first, since a slug identifies exactly one entity.
    """
    by_ticker: dict[str, Entity] = {}

    for record in records:
        subject = by_ticker.get(record.ticker)
        if subject is None:
            candidate = resolver.create_subject(record)
            existing = state.registry.get(candidate.slug)
            if existing is not None:
                logger.warning(
                    f"⚠ {record.ticker} ('{record.company}') shares slug '{candidate.slug}' "
                    f"with {existing.ticker} ('{existing.name}'), merging"
                )
                subject = existing
            else:
                subject = state.registry.add(candidate)
                state.subjects.append(subject)
            by_ticker[record.ticker] = subject

        if record.year in subject.years:
            logger.warning(
                f"⚠ Duplicate survey for {record.ticker} {record.year}, keeping the later file"
            )
        subject.years[record.year] = YearSurvey.from_record(record)

    logger.info(f"Found {len(state.subjects)} public companies")
    return state.subjects


def extract_relationships(resolver: EntityResolver, state: CompilationState) -> None:
    """Pass 2: resolve every competitor mention and record the edges."""
    for subject in state.subjects:
        for year in sorted(subject.years):
            for mention in subject.years[year].competitors:
                target = resolver.resolve(mention.name, state.registry).entity

                state.relationships.append(
                    Relationship(
                        source=subject.slug,
                        target=target.slug,
                        year=year,
                        notes=mention.notes,
                    )
                )

                target.add_mention(
                    MentionRef(
                        slug=subject.slug,
                        name=subject.name,
                        ticker=subject.ticker,
                        year=year,
                        notes=mention.notes,
                    )
                )

                if not target.is_subject:
                    target.add_note(year, NoteEntry(from_name=subject.name, note=mention.notes))

                subject.add_competitor(target)


def compile_graph(
    records: Iterable[SurveyRecord],
    financials: FinancialTable | None = None,
    generated: datetime | None = None,
) -> CompiledGraph:
    """
    Compile survey records into the competitor graph.

    Args:
        records: Validated survey records, in a fixed order
        financials: Optional financial metadata table
        generated: Timestamp for meta.generated (default: now)

    Returns:
        CompiledGraph with entities sorted public-first, then by mention count
    """
    resolver = EntityResolver(financials=financials)
    state = CompilationState()

    ingest_subjects(records, resolver, state)
    extract_relationships(resolver, state)

    entities = state.registry.entities()
    logger.info(f"Found {len(entities)} total entities")
    logger.info(f"Found {len(state.relationships)} relationships")
    if resolver.stats:
        breakdown = ", ".join(f"{k}={v}" for k, v in sorted(resolver.stats.items()))
        logger.info(f"Resolution: {breakdown}")

    industries = classify_entities(state.registry.public_entities())

    sorted_entities = sort_entities(entities)
    return CompiledGraph(
        meta=compute_meta(sorted_entities, state.relationships, generated=generated),
        entities=sorted_entities,
        relationships=list(state.relationships),
        industries=industries,
    )


def compile_from_paths(
    survey_dir: Path,
    financials_file: Path | None = None,
    show_progress: bool = True,
) -> CompiledGraph:
    """
    Load inputs from disk and compile.

    Raises:
        SurveyValidationError: If any survey file is invalid
        FinancialDataError: If the financial file exists but is unusable
    """
    financials = load_financial_table(financials_file)
    records = load_surveys(survey_dir, show_progress=show_progress)
    return compile_graph(records, financials=financials)
