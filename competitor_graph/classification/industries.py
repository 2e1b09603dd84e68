"""
Industry inference from survey context.

A subject's context text from every surveyed year is joined and
lower-cased; a category applies if any of its keywords occurs anywhere in
that text. Matching is plain substring containment: trailing spaces in
keywords such as "ai " and "hr " are significant and keep them from
matching inside longer words.
"""

import logging

from competitor_graph.domain.models import Entity

logger = logging.getLogger(__name__)

# =============================================================================
# INDUSTRY KEYWORDS (category order is the order tags are emitted in)
# =============================================================================

INDUSTRY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Cloud & Infrastructure": (
        "cloud",
        "infrastructure",
        "iaas",
        "paas",
        "hosting",
        "cdn",
        "edge",
    ),
    "Cybersecurity": (
        "security",
        "cybersecurity",
        "endpoint",
        "firewall",
        "threat",
        "malware",
        "antivirus",
    ),
    "Enterprise Software": ("erp", "enterprise", "business software", "sap", "oracle"),
    "Data & Analytics": (
        "data",
        "analytics",
        "warehouse",
        "database",
        "bi ",
        "business intelligence",
    ),
    "DevOps & Development": (
        "devops",
        "developer",
        "git",
        "ci/cd",
        "code",
        "software development",
    ),
    "HR & Payroll": ("payroll", "hr ", "human resources", "hcm", "workforce"),
    "CRM & Marketing": ("crm", "marketing", "customer", "salesforce", "hubspot"),
    "Financial Software": ("financial", "accounting", "fintech", "payment", "billing"),
    "Design & Engineering": ("cad", "plm", "simulation", "design", "engineering"),
    "Collaboration": ("collaboration", "communication", "video", "meeting", "document"),
    "AI & Machine Learning": ("ai ", "artificial intelligence", "machine learning", "ml "),
    "Healthcare & Life Sciences": (
        "healthcare",
        "life sciences",
        "pharma",
        "medical",
        "clinical",
    ),
}


def classify(entity: Entity) -> list[str]:
    """
    Infer industry tags for a survey subject.

    Args:
        entity: Entity to classify

    Returns:
        Matching categories in definition order; empty for entities that
        are not public survey subjects
    """
    if not entity.is_public or not entity.is_subject:
        return []

    text = " ".join(
        (survey.context or "").lower() for _, survey in sorted(entity.years.items())
    )
    return [
        industry
        for industry, keywords in INDUSTRY_KEYWORDS.items()
        if any(keyword in text for keyword in keywords)
    ]


def classify_entities(entities: list[Entity]) -> dict[str, list[str]]:
    """
    Classify every public subject.

    Returns:
        slug -> tags, only for entities with at least one tag
    """
    industries: dict[str, list[str]] = {}
    for entity in entities:
        tags = classify(entity)
        if tags:
            industries[entity.slug] = tags

    logger.info(f"Tagged {len(industries)} companies with industries")
    return industries
