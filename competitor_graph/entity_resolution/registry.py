"""
Entity registry for one compilation run.

Holds every entity created so far, keyed by slug in creation order, plus an
index of public entities by comparison key. The compiler creates one
registry per run and passes it to the resolver explicitly.
"""

from competitor_graph.domain.models import Entity
from competitor_graph.normalize import normalize_company_name


class EntityRegistry:
    """Mutable slug -> Entity map with a public-company name index."""

    def __init__(self):
        self._by_slug: dict[str, Entity] = {}
        self._public: list[Entity] = []
        self._public_by_key: dict[str, Entity] = {}

    def __contains__(self, slug: str) -> bool:
        return slug in self._by_slug

    def __len__(self) -> int:
        return len(self._by_slug)

    def get(self, slug: str) -> Entity | None:
        return self._by_slug.get(slug)

    def add(self, entity: Entity) -> Entity:
        """
        Register a new entity.

        Raises:
            ValueError: If an entity with the same slug is already registered
        """
        if entity.slug in self._by_slug:
            raise ValueError(f"Entity already registered for slug '{entity.slug}'")
        self._by_slug[entity.slug] = entity
        if entity.is_public:
            self._public.append(entity)
            key = normalize_company_name(entity.name)
            # First public entity with a given key wins
            if key and key not in self._public_by_key:
                self._public_by_key[key] = entity
        return entity

    def find_public_by_slug(self, slug: str) -> Entity | None:
        entity = self._by_slug.get(slug)
        if entity is not None and entity.is_public:
            return entity
        return None

    def find_public_by_key(self, key: str) -> Entity | None:
        if not key:
            return None
        return self._public_by_key.get(key)

    def public_entities(self) -> list[Entity]:
        """Public entities in creation order."""
        return list(self._public)

    def entities(self) -> list[Entity]:
        """All entities in creation order."""
        return list(self._by_slug.values())
