# fakeshell/lib/tree.py
# Directory walk for the tree built-in (no Core dependency).

from __future__ import annotations

from pathlib import Path
from typing import List

from fakeshell.model.schema import TREE_IGNORED


def _visible(p: Path) -> bool:
    return not p.name.startswith(".") and p.name not in TREE_IGNORED


def tree_lines(root: Path) -> List[str]:
    """Return the listing under root, first line is the root as given."""
    out: List[str] = [str(root)]

    def rec(directory: Path, prefix: str):
        entries = sorted((p for p in directory.iterdir() if _visible(p)), key=lambda p: p.name)
        for i, p in enumerate(entries):
            is_last = i == len(entries) - 1
            out.append(prefix + ("└── " if is_last else "├── ") + p.name)
            if p.is_dir() and not p.is_symlink():
                rec(p, prefix + ("    " if is_last else "│   "))

    rec(root, "")
    return out
