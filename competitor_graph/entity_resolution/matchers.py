"""
Entity Matching Module.

Matches a competitor name against entities already in the registry.
Each matching strategy is isolated and testable; matchers are tried in
priority order and the first match wins.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from competitor_graph.domain.models import Entity
from competitor_graph.entity_resolution.registry import EntityRegistry
from competitor_graph.normalize import normalize_company_name

logger = logging.getLogger(__name__)


class MatchType(Enum):
    """Ways a name can resolve to an entity."""

    NO_MATCH = "no_match"
    PUBLIC_SLUG = "public_slug"
    PUBLIC_NAME = "public_name"
    KNOWN_ENTITY = "known_entity"
    CREATED = "created"


@dataclass(frozen=True)
class MatchResult:
    """Result of attempting to match a name."""

    name: str
    slug: str
    matched: bool
    match_type: MatchType
    entity: Entity | None = None
    matcher_name: str = ""


class EntityMatcher(ABC):
    """Abstract base class for entity matchers."""

    @abstractmethod
    def match(self, name: str, slug: str, registry: EntityRegistry) -> MatchResult:
        """
        Attempt to match a name.

        Args:
            name: Raw competitor name
            slug: Slug derived from the name
            registry: Entities created so far

        Returns:
            MatchResult with match details
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this matcher for debugging."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Priority (lower = tried first)."""
        ...

    def _no_match(self, name: str, slug: str) -> MatchResult:
        return MatchResult(
            name=name,
            slug=slug,
            matched=False,
            match_type=MatchType.NO_MATCH,
            matcher_name=self.name,
        )


class PublicSlugMatcher(EntityMatcher):
    """
    Matches the slug against public entities.

    Most precise match type.
    """

    @property
    def name(self) -> str:
        return "public_slug"

    @property
    def priority(self) -> int:
        return 1

    def match(self, name: str, slug: str, registry: EntityRegistry) -> MatchResult:
        entity = registry.find_public_by_slug(slug)
        if entity is None:
            return self._no_match(name, slug)
        return MatchResult(
            name=name,
            slug=slug,
            matched=True,
            match_type=MatchType.PUBLIC_SLUG,
            entity=entity,
            matcher_name=self.name,
        )


class PublicNameMatcher(EntityMatcher):
    """
    Matches the comparison key against public entities' display names.

    Catches spelling and casing drift that still slugifies differently.
    Two names sharing a key are treated as one entity; the merge is logged
    because it is a heuristic.
    """

    @property
    def name(self) -> str:
        return "public_name"

    @property
    def priority(self) -> int:
        return 2

    def match(self, name: str, slug: str, registry: EntityRegistry) -> MatchResult:
        entity = registry.find_public_by_key(normalize_company_name(name))
        if entity is None:
            return self._no_match(name, slug)
        if entity.slug != slug:
            logger.info(f"Merged '{name}' ({slug}) into '{entity.name}' ({entity.slug}) by name")
        return MatchResult(
            name=name,
            slug=slug,
            matched=True,
            match_type=MatchType.PUBLIC_NAME,
            entity=entity,
            matcher_name=self.name,
        )


class KnownEntityMatcher(EntityMatcher):
    """
    Matches the slug against entities created earlier in the run.

    The same misspelled name seen twice resolves to the same node.
    """

    @property
    def name(self) -> str:
        return "known_entity"

    @property
    def priority(self) -> int:
        return 3

    def match(self, name: str, slug: str, registry: EntityRegistry) -> MatchResult:
        entity = registry.get(slug)
        if entity is None:
            return self._no_match(name, slug)
        return MatchResult(
            name=name,
            slug=slug,
            matched=True,
            match_type=MatchType.KNOWN_ENTITY,
            entity=entity,
            matcher_name=self.name,
        )


def default_matchers() -> list[EntityMatcher]:
    return [PublicSlugMatcher(), PublicNameMatcher(), KnownEntityMatcher()]


def match_entity(
    name: str,
    slug: str,
    registry: EntityRegistry,
    matchers: list[EntityMatcher] | None = None,
) -> MatchResult:
    """
    Try matchers in priority order.

    Returns:
        The first successful MatchResult, or a NO_MATCH result
    """
    if matchers is None:
        matchers = default_matchers()

    for matcher in sorted(matchers, key=lambda m: m.priority):
        result = matcher.match(name, slug, registry)
        if result.matched:
            return result

    return MatchResult(name=name, slug=slug, matched=False, match_type=MatchType.NO_MATCH)
