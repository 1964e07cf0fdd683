"""Pytest bootstrap: puts local src packages on `sys.path`.

Lets the tests run from a checkout without installing the package: the
`packages/*/src` directories are prepended to `sys.path` so that
`import scorekeeper` resolves to the working tree.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Iterable


def _extend_sys_path(paths: Iterable[Path]) -> None:
    """Prepends directories to `sys.path`, skipping ones already present.

    Args:
        paths: Directories to add.
    """

    for p in paths:
        str_path = str(p)
        if str_path not in sys.path:
            sys.path.insert(0, str_path)


def _collect_src_paths(root: Path) -> list[Path]:
    """Collects local package src directories.

    Args:
        root: Repository root.

    Returns:
        Existing src directories.
    """

    candidates: list[Path] = [
        root / "packages" / "scorekeeper" / "src",
    ]
    return [p for p in candidates if p.exists()]


# Runs when pytest imports this conftest
_extend_sys_path(_collect_src_paths(Path(__file__).parent.resolve()))
