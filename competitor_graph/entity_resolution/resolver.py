"""
Entity Resolver Module.

Maps a raw competitor name to its canonical Entity:
1. Public entity with the same slug
2. Public entity whose display name has the same comparison key
3. Any entity already created with the same slug
4. Otherwise a new entity, seeded from financial metadata when available

Resolution only ever adds to the registry; an existing entity's identity
is never changed.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from competitor_graph.domain.financials import FinancialMetadata
from competitor_graph.domain.models import (
    Entity,
    EntityProfile,
    EntityType,
    Ownership,
    PrivateCompany,
    Product,
    PublicCompany,
    UnknownEntity,
)
from competitor_graph.domain.survey import SurveyRecord
from competitor_graph.entity_resolution.matchers import (
    EntityMatcher,
    KnownEntityMatcher,
    MatchType,
    default_matchers,
    match_entity,
)
from competitor_graph.entity_resolution.registry import EntityRegistry
from competitor_graph.financials.lookup import FinancialTable, attach_financials
from competitor_graph.normalize import create_slug

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one name."""

    name: str
    slug: str
    entity: Entity
    match_type: MatchType

    @property
    def created(self) -> bool:
        return self.match_type == MatchType.CREATED


def build_profile(metadata: FinancialMetadata | None, name: str = "") -> EntityProfile:
    """
    Choose the entity variant for a name that is not a survey subject.

    Args:
        metadata: Financial metadata entry, if the table has one
        name: Display name (for logging only)

    Returns:
        Profile variant; UnknownEntity when nothing is known
    """
    if metadata is None:
        return UnknownEntity()

    entity_type = EntityType(metadata.type)
    if entity_type in (EntityType.PRODUCT, EntityType.DIVISION):
        return Product(
            entity_type=entity_type,
            parent_company=metadata.parent_company,
            parent_slug=metadata.parent_slug,
            ownership=Ownership(metadata.ownership) if metadata.ownership else None,
        )
    if metadata.is_public:
        return PublicCompany(
            ticker=metadata.ticker,
            entity_type=EntityType.COMPANY,
        )
    if metadata.ownership == "public":
        logger.warning(f"⚠ '{name}' is marked public without a ticker, treating as private")
        return PrivateCompany()
    if entity_type == EntityType.COMPANY or metadata.ownership == "private":
        return PrivateCompany()
    return UnknownEntity()


class EntityResolver:
    """
    Resolves names to entities against an explicit registry.

    The resolver holds only read-only inputs (financial table, matchers) and
    per-run counters; all graph state lives in the registry it is given.
    """

    def __init__(
        self,
        financials: FinancialTable | None = None,
        matchers: list[EntityMatcher] | None = None,
    ):
        """
        Initialize resolver.

        Args:
            financials: Financial metadata table (default: empty)
            matchers: Matchers to try before creating an entity (default: standard matchers)
        """
        self.financials = financials if financials is not None else FinancialTable()
        self.matchers = matchers or default_matchers()
        self.stats: Counter[str] = Counter()

    def resolve(self, name: str, registry: EntityRegistry) -> ResolutionResult:
        """
        Resolve a competitor name, creating the entity if needed.

        Never raises for odd names: a name that normalizes to an empty slug
        still resolves (to a single degenerate node) and is logged.
        """
        slug = create_slug(name)
        matchers = self.matchers
        if not slug:
            self.stats["degenerate"] += 1
            logger.warning(f"⚠ Name '{name}' normalizes to an empty slug")
            # Degenerate names share one best-effort node, never a public company
            matchers = [m for m in matchers if isinstance(m, KnownEntityMatcher)]

        match = match_entity(name, slug, registry, matchers)
        if match.matched and match.entity is not None:
            self.stats[match.match_type.value] += 1
            return ResolutionResult(name, slug, match.entity, match.match_type)

        entity = registry.add(self.create_entity(name, slug))
        self.stats[MatchType.CREATED.value] += 1
        logger.debug(f"Created {type(entity.profile).__name__} '{slug}' for '{name}'")
        return ResolutionResult(name, slug, entity, MatchType.CREATED)

    def create_entity(self, name: str, slug: str) -> Entity:
        """Build (but do not register) an entity for a name seen only as a competitor."""
        metadata = self.financials.lookup(name, slug)
        entity = Entity(slug=slug, name=name, profile=build_profile(metadata, name))
        attach_financials(entity, metadata)
        return entity

    def create_subject(self, record: SurveyRecord) -> Entity:
        """Build (but do not register) the public entity for a survey subject."""
        slug = create_slug(record.company)
        if not slug:
            self.stats["degenerate"] += 1
            slug = create_slug(record.ticker) or record.ticker.lower()
            logger.warning(
                f"⚠ Company '{record.company}' normalizes to an empty slug, using '{slug}'"
            )

        metadata = self.financials.lookup(record.company, slug)
        entity_type = EntityType.COMPANY
        if metadata is not None and metadata.type != EntityType.UNKNOWN.value:
            entity_type = EntityType(metadata.type)

        entity = Entity(
            slug=slug,
            name=record.company,
            profile=PublicCompany(ticker=record.ticker, entity_type=entity_type),
        )
        attach_financials(entity, metadata)
        return entity
