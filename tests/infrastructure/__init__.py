"""
Shared test infrastructure for routegen.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Utilities for running the CLI in a subprocess
"""

from .file_utils import write
from .cli_utils import run_cli, jload

__all__ = ["write", "run_cli", "jload"]
