"""
Competitor Graph - compiles competitor surveys into a single entity graph.

This package provides utilities for:
- Normalizing company names into comparison keys and slugs
- Resolving competitor mentions to canonical entities
- Attaching optional financial metadata to entities
- Inferring industry tags from survey context
- Serializing the compiled graph for the browser viewer
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from competitor_graph.config import (
    get_financials_file,
    get_output_file,
    get_survey_dir,
)
from competitor_graph.normalize import (
    create_slug,
    normalize_company_name,
)
from competitor_graph.graph.compiler import compile_graph

__all__ = [
    "__version__",
    # Config
    "get_survey_dir",
    "get_financials_file",
    "get_output_file",
    # Names
    "normalize_company_name",
    "create_slug",
    # Compilation
    "compile_graph",
]
