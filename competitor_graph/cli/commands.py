"""
CLI command entry points for competitor_graph.

These functions are registered as console scripts in pyproject.toml.
Each function delegates to the corresponding script in scripts/.
"""

import subprocess
import sys
from pathlib import Path


def _run_script(script_name: str) -> int:
    """
    Helper to run a script with arguments.

    Args:
        script_name: Name of script file (without .py extension)

    Returns:
        The script's exit code
    """
    script = Path(__file__).parent.parent.parent / "scripts" / f"{script_name}.py"
    # Safe: sys.argv[1:] passed as list (not shell=True), arguments validated by argparse
    result = subprocess.run([sys.executable, str(script)] + sys.argv[1:], check=False)
    return result.returncode


def run_compile_graph():
    """Entry point for compile-competitor-graph command."""
    sys.exit(_run_script("compile_graph"))
