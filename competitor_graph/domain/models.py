"""
Compiled graph models.

An `Entity` is one node of the graph. What kind of thing it is lives in its
`profile`, a tagged variant carrying only the identity fields that make
sense for that kind:

- PublicCompany: has a ticker (survey subjects, or metadata marked public)
- PrivateCompany: a company known to the metadata table, not public
- Product: a product or division, optionally linked to its parent
- UnknownEntity: a name seen only as a competitor mention

Profiles are frozen; only an entity's mentions, competitors and notes grow
once it has been created.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from competitor_graph.domain.financials import FinancialSnapshot
from competitor_graph.domain.survey import CompetitorMention, SurveyRecord


class EntityType(str, Enum):
    """Kinds of entity reported by the financial metadata."""

    COMPANY = "company"
    DIVISION = "division"
    PRODUCT = "product"
    UNKNOWN = "unknown"


class Ownership(str, Enum):
    """Ownership of an entity."""

    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class PublicCompany:
    """A listed company."""

    ticker: str
    entity_type: EntityType = EntityType.COMPANY


@dataclass(frozen=True)
class PrivateCompany:
    """A company the metadata table knows to be privately held."""


@dataclass(frozen=True)
class Product:
    """A product or division, optionally owned by a parent entity."""

    entity_type: EntityType = EntityType.PRODUCT
    parent_company: str | None = None
    parent_slug: str | None = None  # lookup only, the parent is not owned
    ownership: Ownership | None = None


@dataclass(frozen=True)
class UnknownEntity:
    """A name with nothing known about it beyond being mentioned."""


EntityProfile = PublicCompany | PrivateCompany | Product | UnknownEntity


@dataclass(frozen=True)
class YearSurvey:
    """One year of a subject's survey content."""

    query: Any
    date: Any
    context: str
    sources: tuple[Any, ...]
    competitors: tuple[CompetitorMention, ...]

    @classmethod
    def from_record(cls, record: SurveyRecord) -> "YearSurvey":
        return cls(
            query=record.search_query,
            date=record.search_date,
            context=record.context,
            sources=tuple(record.sources),
            competitors=tuple(record.competitors),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "date": self.date,
            "context": self.context,
            "sources": list(self.sources),
            "competitors": [{"name": c.name, "notes": c.notes} for c in self.competitors],
        }


@dataclass(frozen=True)
class MentionRef:
    """A (company, year) that named an entity as a competitor."""

    slug: str
    name: str
    ticker: str | None
    year: int
    notes: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "ticker": self.ticker,
            "year": self.year,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class NoteEntry:
    """Why a company mentioned a non-subject entity."""

    from_name: str
    note: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_name, "note": self.note}


@dataclass(frozen=True)
class CompetitorRef:
    """Lightweight copy of a competitor's identity, taken when first referenced."""

    slug: str
    name: str
    ticker: str | None
    is_public: bool
    entity_type: EntityType
    parent_slug: str | None
    financials: FinancialSnapshot | None
    financials_by_year: dict[int, FinancialSnapshot] | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "ticker": self.ticker,
            "isPublic": self.is_public,
            "entityType": self.entity_type.value,
            "parentSlug": self.parent_slug,
            "financials": self.financials.to_dict() if self.financials else None,
            "financialsByYear": _financials_by_year_dict(self.financials_by_year),
        }


@dataclass(frozen=True)
class Relationship:
    """Directed, year-stamped edge: `source` named `target` as a competitor."""

    source: str
    target: str
    year: int
    notes: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "year": self.year,
            "notes": self.notes,
        }


@dataclass
class Entity:
    """A canonical graph node."""

    slug: str
    name: str
    profile: EntityProfile
    financials: FinancialSnapshot | None = None
    financials_by_year: dict[int, FinancialSnapshot] | None = None
    years: dict[int, YearSurvey] = field(default_factory=dict)
    notes: dict[int, list[NoteEntry]] = field(default_factory=dict)
    mentioned_by: list[MentionRef] = field(default_factory=list)
    competitors: list[CompetitorRef] = field(default_factory=list)

    _mention_keys: set[tuple[str, int]] = field(
        default_factory=set, init=False, repr=False, compare=False
    )
    _competitor_slugs: set[str] = field(
        default_factory=set, init=False, repr=False, compare=False
    )

    # -------------------------------------------------------------------------
    # Identity (derived from the profile)
    # -------------------------------------------------------------------------

    @property
    def ticker(self) -> str | None:
        if isinstance(self.profile, PublicCompany):
            return self.profile.ticker
        return None

    @property
    def is_public(self) -> bool:
        return isinstance(self.profile, PublicCompany)

    @property
    def ownership(self) -> Ownership | None:
        if isinstance(self.profile, PublicCompany):
            return Ownership.PUBLIC
        if isinstance(self.profile, Product):
            return self.profile.ownership
        return Ownership.PRIVATE

    @property
    def entity_type(self) -> EntityType:
        if isinstance(self.profile, (PublicCompany, Product)):
            return self.profile.entity_type
        if isinstance(self.profile, PrivateCompany):
            return EntityType.COMPANY
        return EntityType.UNKNOWN

    @property
    def parent_company(self) -> str | None:
        if isinstance(self.profile, Product):
            return self.profile.parent_company
        return None

    @property
    def parent_slug(self) -> str | None:
        if isinstance(self.profile, Product):
            return self.profile.parent_slug
        return None

    @property
    def is_subject(self) -> bool:
        """True if this entity has survey records of its own."""
        return bool(self.years)

    # -------------------------------------------------------------------------
    # Accumulation
    # -------------------------------------------------------------------------

    def add_mention(self, mention: MentionRef) -> bool:
        """Record a mention; returns False if (slug, year) was already recorded."""
        key = (mention.slug, mention.year)
        if key in self._mention_keys:
            return False
        self._mention_keys.add(key)
        self.mentioned_by.append(mention)
        return True

    def add_competitor(self, competitor: "Entity") -> bool:
        """Reference a competitor; the first reference to a slug is kept."""
        if competitor.slug in self._competitor_slugs:
            return False
        self._competitor_slugs.add(competitor.slug)
        self.competitors.append(competitor.to_reference())
        return True

    def add_note(self, year: int, note: NoteEntry) -> None:
        self.notes.setdefault(year, []).append(note)

    def to_reference(self) -> CompetitorRef:
        return CompetitorRef(
            slug=self.slug,
            name=self.name,
            ticker=self.ticker,
            is_public=self.is_public,
            entity_type=self.entity_type,
            parent_slug=self.parent_slug,
            financials=self.financials,
            financials_by_year=(
                dict(self.financials_by_year) if self.financials_by_year is not None else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the shape the viewer reads."""
        data: dict[str, Any] = {
            "slug": self.slug,
            "name": self.name,
            "ticker": self.ticker,
            "isPublic": self.is_public,
            "entityType": self.entity_type.value,
            "ownership": self.ownership.value if self.ownership else None,
            "parentCompany": self.parent_company,
            "parentSlug": self.parent_slug,
            "financials": self.financials.to_dict() if self.financials else None,
            "financialsByYear": _financials_by_year_dict(self.financials_by_year),
        }
        if self.is_subject:
            data["years"] = {
                str(year): survey.to_dict() for year, survey in sorted(self.years.items())
            }
        else:
            data["notes"] = {
                str(year): [n.to_dict() for n in entries]
                for year, entries in sorted(self.notes.items())
            }
        data["mentionedBy"] = [m.to_dict() for m in self.mentioned_by]
        data["competitors"] = [c.to_dict() for c in self.competitors]
        return data


@dataclass
class CompiledGraph:
    """The output of one compilation run."""

    meta: dict[str, Any]
    entities: list[Entity]
    relationships: list[Relationship]
    industries: dict[str, list[str]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": dict(self.meta),
            "entities": [e.to_dict() for e in self.entities],
            "relationships": [r.to_dict() for r in self.relationships],
            "industries": {slug: list(tags) for slug, tags in self.industries.items()},
        }


def _financials_by_year_dict(
    by_year: dict[int, FinancialSnapshot] | None,
) -> dict[str, dict] | None:
    if by_year is None:
        return None
    return {str(year): snapshot.to_dict() for year, snapshot in sorted(by_year.items())}
