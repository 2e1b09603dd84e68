"""
Constants for competitor_graph package.

Centralizes fixed word lists and output defaults.
"""

# Characters removed before comparing names
NAME_PUNCTUATION = ".,/#!$%^&*;:{}=-_`~()"

# Corporate suffix words removed (whole words, case-insensitive)
CORPORATE_STOPWORDS = (
    "inc",
    "corp",
    "corporation",
    "ltd",
    "llc",
    "co",
    "company",
    "technologies",
    "technology",
    "software",
    "systems",
    "holdings",
    "group",
    "plc",
    "nv",
    "sa",
)

# Trailing slug suffixes stripped when probing the financial table
FINANCIAL_SLUG_SUFFIXES = ("-inc", "-corp", "-llc")

# Entity types accepted from financial metadata
ENTITY_TYPES = ("company", "division", "product", "unknown")

# Output artifact
OUTPUT_FORMATS = ("js", "json")
OUTPUT_VARIABLE_NAME = "COMPETITOR_DATA"

# Number of most-mentioned entities listed in the run summary
DEFAULT_SUMMARY_TOP_N = 10
