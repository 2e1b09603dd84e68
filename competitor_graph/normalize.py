"""
Company name normalization.

Every name in the graph is reduced to two forms:
- a comparison key, used only for equality tests between names
- a slug, the URL-safe identifier that joins entities across the graph

The viewer derives slugs from names with the same rules, and slugs are
used as hash-routing tokens, so these functions must not change output
for existing names.

Examples:
    "Acme, Inc." -> key "acme", slug "acme"
    "Totally Unknown LLC" -> key "totally unknown", slug "totally-unknown"
    "Palo Alto Networks" -> key "palo alto networks", slug "palo-alto-networks"
"""

import re

from competitor_graph.constants import CORPORATE_STOPWORDS, NAME_PUNCTUATION

_PUNCTUATION_PATTERN = re.compile(f"[{re.escape(NAME_PUNCTUATION)}]")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_HYPHEN_RUN_PATTERN = re.compile(r"-+")
# ASCII word boundaries, so "co" inside "cocoa" or "café" is left alone
_STOPWORD_PATTERN = re.compile(
    r"\b(?:" + "|".join(CORPORATE_STOPWORDS) + r")\b",
    re.IGNORECASE | re.ASCII,
)


def normalize_company_name(name: str) -> str:
    """
    Reduce a company name to its comparison key.

    Lower-cases, strips punctuation, collapses whitespace, removes corporate
    suffix words and trims. Never raises; a name made only of punctuation or
    suffix words yields an empty string.

    Args:
        name: Free-text company name

    Returns:
        Comparison key (may contain internal double spaces where a suffix
        word was removed from the middle of the name)
    """
    if not name:
        return ""
    key = name.lower()
    key = _PUNCTUATION_PATTERN.sub("", key)
    key = _WHITESPACE_PATTERN.sub(" ", key)
    key = _STOPWORD_PATTERN.sub("", key)
    return key.strip()


def create_slug(name: str) -> str:
    """
    Create the canonical slug for a company name.

    Pure and idempotent on names: the same name always gives the same slug.
    """
    slug = _WHITESPACE_PATTERN.sub("-", normalize_company_name(name))
    return _HYPHEN_RUN_PATTERN.sub("-", slug)

