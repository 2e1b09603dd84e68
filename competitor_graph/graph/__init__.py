"""
Graph compilation and output.

- compiler: builds entities and relationships from survey records
- report: sorting, summary statistics and the output artifact
"""

from competitor_graph.graph.compiler import (
    CompilationState,
    compile_from_paths,
    compile_graph,
)
from competitor_graph.graph.report import (
    compute_meta,
    render_artifact,
    sort_entities,
    summarize,
    write_artifact,
)

__all__ = [
    # Compiler
    "CompilationState",
    "compile_graph",
    "compile_from_paths",
    # Report
    "compute_meta",
    "render_artifact",
    "sort_entities",
    "summarize",
    "write_artifact",
]
