"""
Financial metadata table.

The table is read from an optional JSON file shaped like:

    {"entities": {"<slug>": {"type": ..., "ownership": ..., "ticker": ...,
                             "parent_company": ..., "parent_slug": ...,
                             "financials_by_year": {"2024": {...}}}}}

Lookups probe, in order:
1. the entity's slug
2. the slug derived from the entity's name
3. both of those with a trailing -inc / -corp / -llc removed
4. table keys that match once their own trailing suffix is removed
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from competitor_graph.constants import FINANCIAL_SLUG_SUFFIXES
from competitor_graph.domain.financials import FinancialMetadata, FinancialSnapshot
from competitor_graph.domain.models import Entity
from competitor_graph.normalize import create_slug
from competitor_graph.exceptions import FinancialDataError

logger = logging.getLogger(__name__)


def _strip_suffix(key: str) -> str:
    for suffix in FINANCIAL_SLUG_SUFFIXES:
        if key.endswith(suffix) and len(key) > len(suffix):
            return key[: -len(suffix)]
    return key


class FinancialTable:
    """Read-only financial metadata keyed by slug."""

    def __init__(self, entries: Mapping[str, FinancialMetadata] | None = None):
        self._entries: dict[str, FinancialMetadata] = dict(entries or {})
        # Table keys carrying a corporate suffix, indexed without it
        self._aliases: dict[str, str] = {}
        for key in self._entries:
            stripped = _strip_suffix(key)
            if stripped != key and stripped not in self._entries:
                self._aliases.setdefault(stripped, key)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> FinancialMetadata | None:
        return self._entries.get(key)

    def lookup(self, name: str, slug: str) -> FinancialMetadata | None:
        """
        Find metadata for an entity by slug or name.

        Args:
            name: Display name of the entity
            slug: The entity's slug

        Returns:
            First matching entry, or None if the entity is not in the table
        """
        if not self._entries:
            return None

        candidates = _candidate_keys(name, slug)
        for key in candidates:
            if key in self._entries:
                return self._entries[key]
        for key in candidates:
            if key in self._aliases:
                return self._entries[self._aliases[key]]
        return None


def _candidate_keys(name: str, slug: str) -> list[str]:
    """Ordered, de-duplicated probe keys for a lookup."""
    direct = [slug, create_slug(name)]
    keys = direct + [_strip_suffix(key) for key in direct]
    seen: set[str] = set()
    ordered = []
    for key in keys:
        if key and key not in seen:
            seen.add(key)
            ordered.append(key)
    return ordered


def latest_snapshot(metadata: FinancialMetadata | None) -> FinancialSnapshot | None:
    """
    Get the snapshot for the most recent year.

    Year keys are integers, so "most recent" is a numeric comparison and does
    not depend on the order years appeared in the file.
    """
    if metadata is None or not metadata.financials_by_year:
        return None
    return metadata.financials_by_year[max(metadata.financials_by_year)]


def snapshot_for_year(metadata: FinancialMetadata | None, year: int) -> FinancialSnapshot | None:
    """
    Get the snapshot for `year`, falling back to the latest available year.

    Public helper for consumers of `financialsByYear`: the compiled graph itself
    stores only the latest snapshot in `financials`.
    """
    if metadata is None:
        return None
    snapshot = metadata.financials_by_year.get(year)
    if snapshot is not None:
        return snapshot
    return latest_snapshot(metadata)


def attach_financials(entity: Entity, metadata: FinancialMetadata | None) -> None:
    """Attach latest and per-year snapshots; no-op when there is no data."""
    if metadata is None or not metadata.financials_by_year:
        return
    entity.financials = latest_snapshot(metadata)
    entity.financials_by_year = dict(sorted(metadata.financials_by_year.items()))


def load_financial_table(path: Path | None) -> FinancialTable:
    """
    Load the financial metadata table.

    Args:
        path: JSON file path, or None when no table is configured

    Returns:
        FinancialTable (empty when the file is not configured or missing)

    Raises:
        FinancialDataError: If the file exists but is not a usable table
    """
    if path is None:
        logger.info("No financial metadata configured")
        return FinancialTable()

    path = Path(path)
    if not path.exists():
        logger.info(f"Financial metadata not found at {path}, continuing without it")
        return FinancialTable()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FinancialDataError(path, str(e)) from e

    if not isinstance(data, dict) or not isinstance(data.get("entities"), dict):
        raise FinancialDataError(path, "expected an object with an 'entities' object")

    entries: dict[str, FinancialMetadata] = {}
    skipped = 0
    for slug, raw in data["entities"].items():
        try:
            entries[slug] = FinancialMetadata.model_validate(raw)
        except ValidationError as e:
            skipped += 1
            logger.warning(f"⚠ Skipping financial entry '{slug}': {e.error_count()} error(s)")
            logger.debug(f"  {e}")

    logger.info(f"Loaded financial metadata for {len(entries)} entities from {path}")
    if skipped:
        logger.warning(f"⚠ Skipped {skipped} invalid financial entries")
    return FinancialTable(entries)
