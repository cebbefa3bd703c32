# fakeshell/topics/files.py
#
#   sort <numbers...>    numeric sort, printed space-separated
#   sort <file> [opts]   handed to the system sort
#   tree [dir]           directory listing (dot-entries skipped)

from __future__ import annotations

import shlex
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional, Tuple

from fakeshell.lib import tree as tree_lib
from fakeshell.lib.calc import format_decimal

SORT_USAGE = (
    "Usage: sort <filename> or sort <numbers...>",
    "Example: sort file.txt",
    "Example: sort 5 2 8 1 9",
)


def _number(tok: str) -> Optional[Decimal]:
    try:
        d = Decimal(tok)
    except InvalidOperation:
        return None
    return d if d.is_finite() else None


def sort(core, *args):
    if not args:
        for line in SORT_USAGE:
            core.err(line)
        return None

    if Path(args[0]).is_file():
        res = core.proc.run("sort " + " ".join(shlex.quote(a) for a in args))
        return res.stdout.rstrip("\n")

    numbers: List[Tuple[Decimal, str]] = []
    for tok in args:
        d = _number(tok)
        if d is None:
            core.err(f"Invalid number: {tok}")
            return None
        numbers.append((d, format_decimal(d)))
    numbers.sort(key=lambda t: t[0])
    return " ".join(text for _, text in numbers)


def tree(core, path="."):
    root = Path(path)
    if not root.is_dir():
        raise ValueError(f"Not a directory: {path}")
    return tree_lib.tree_lines(root)


COMMANDS = {
    "sort": (sort, "Sort numbers or the lines of a file", "sort 5 2 8 1 9\nsort file.txt"),
    "tree": (tree, "Show the file and directory tree", "tree\ntree src"),
}
