"""
Graph output: ordering, summary counts and the generated artifact.

All counts in `meta` are derived from the entity and relationship lists
themselves so they cannot drift from the data they describe.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from competitor_graph.constants import (
    DEFAULT_SUMMARY_TOP_N,
    OUTPUT_FORMATS,
    OUTPUT_VARIABLE_NAME,
)
from competitor_graph.domain.models import CompiledGraph, Entity, EntityType, Relationship

logger = logging.getLogger(__name__)


def sort_entities(entities: list[Entity]) -> list[Entity]:
    """
    Public entities first, then by mention count (descending).

    The sort is stable: ties keep their creation order.
    """
    return sorted(entities, key=lambda e: (not e.is_public, -len(e.mentioned_by)))


def format_timestamp(moment: datetime | None = None) -> str:
    """UTC ISO-8601 with millisecond precision and a 'Z' suffix."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def compute_meta(
    entities: list[Entity],
    relationships: list[Relationship],
    generated: datetime | None = None,
) -> dict[str, Any]:
    """
    Summary counts for the output artifact.

    Args:
        entities: All entities in the graph
        relationships: All relationships in the graph
        generated: Generation time (default: now)

    Returns:
        Dictionary of counts plus the 'generated' timestamp
    """
    public = sum(1 for e in entities if e.is_public)
    return {
        "generated": format_timestamp(generated),
        "totalEntities": len(entities),
        "publicCompanies": public,
        "privateEntities": len(entities) - public,
        "totalRelationships": len(relationships),
        "companies": sum(1 for e in entities if e.entity_type == EntityType.COMPANY),
        "products": sum(
            1 for e in entities if e.entity_type in (EntityType.PRODUCT, EntityType.DIVISION)
        ),
        "unknown": sum(1 for e in entities if e.entity_type == EntityType.UNKNOWN),
        "withFinancials": sum(1 for e in entities if e.financials is not None),
    }


def render_artifact(graph: CompiledGraph, output_format: str = "js") -> str:
    """
    Render the graph as text.

    'js' produces a script that defines COMPETITOR_DATA for the browser and
    exports it for CommonJS; 'json' produces the bare object.

    Raises:
        ValueError: If the format is not supported
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unsupported output format '{output_format}'. Use one of {OUTPUT_FORMATS}"
        )

    body = json.dumps(graph.to_dict(), indent=2, ensure_ascii=False)
    if output_format == "json":
        return body + "\n"

    return (
        "// Auto-generated competitor data\n"
        f"// Generated: {graph.meta.get('generated', '')}\n"
        f"const {OUTPUT_VARIABLE_NAME} = {body};\n"
        "\n"
        f"if (typeof module !== 'undefined') module.exports = {OUTPUT_VARIABLE_NAME};\n"
    )


def write_artifact(graph: CompiledGraph, path: Path, output_format: str = "js") -> Path:
    """Write the rendered graph, creating parent directories as needed."""
    path = Path(path)
    content = render_artifact(graph, output_format)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Written to {path}")
    return path


def summarize(graph: CompiledGraph, top_n: int = DEFAULT_SUMMARY_TOP_N) -> list[str]:
    """Human-readable summary lines for the CLI."""
    meta = graph.meta
    lines = [
        f"  - {meta['publicCompanies']} public companies",
        f"  - {meta['privateEntities']} private/other entities",
        f"  - {meta['totalRelationships']} relationships",
        f"  - {meta['products']} products/divisions, {meta['unknown']} unknown",
        f"  - {meta['withFinancials']} entities with financials",
        f"  - {len(graph.industries)} companies with industry tags",
    ]

    most_mentioned = sorted(graph.entities, key=lambda e: -len(e.mentioned_by))[:top_n]
    if most_mentioned:
        lines.append(f"Most mentioned (top {len(most_mentioned)}):")
        for entity in most_mentioned:
            label = f"{entity.name} ({entity.ticker})" if entity.ticker else entity.name
            lines.append(f"  {len(entity.mentioned_by):4d}  {label}")
    return lines
