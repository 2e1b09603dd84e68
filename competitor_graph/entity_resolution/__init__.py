"""
Entity Resolution Module.

Maps competitor names to canonical entities.

This module separates concerns into distinct, testable components:
- Registry (the entities created so far in one run)
- Matchers (public slug, public name, known entity)
- Resolver (match or create, seeding new entities from financial metadata)
"""

from competitor_graph.entity_resolution.matchers import (
    EntityMatcher,
    MatchResult,
    MatchType,
    match_entity,
)
from competitor_graph.entity_resolution.registry import EntityRegistry
from competitor_graph.entity_resolution.resolver import (
    EntityResolver,
    ResolutionResult,
    build_profile,
)

__all__ = [
    # Registry
    "EntityRegistry",
    # Matchers
    "EntityMatcher",
    "MatchResult",
    "MatchType",
    "match_entity",
    # Main resolver
    "EntityResolver",
    "ResolutionResult",
    "build_profile",
]
