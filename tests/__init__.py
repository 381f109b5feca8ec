"""Test suite package configuration.

Ensures the repository root is importable when :mod:`pytest` is launched via
its console script, which does not always put the project root on
``sys.path``.
"""

from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT: Path = Path(__file__).resolve().parent.parent


def _ensure_repo_on_path() -> None:
    """Insert the repository root to ``sys.path`` when it is missing.

    ``insert`` rather than ``append`` so the local package shadows any
    installed copy.
    """

    repo_root_str: str = str(_REPO_ROOT)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_on_path()
