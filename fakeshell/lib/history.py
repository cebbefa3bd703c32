# fakeshell/lib/history.py
# Store-based primitives (no Core dependency).
# store shape: list[str], append-only, position = index + 1
#
# Reference forms (expand):
#   !!        last entry
#   !<n>      entry n (1-based)
#   !<text>   most recent entry starting with <text>
# Anything unmatched comes back unchanged; nothing here raises.

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Tuple

from fakeshell.model.schema import HISTORY_TIME_FORMAT

_POSITION_RE = re.compile(r"[0-9]+")


def append(store: List[str], text: str) -> None:
    store.append(text)


def entry(store: List[str], position: int) -> Optional[str]:
    if 1 <= position <= len(store):
        return store[position - 1]
    return None


def last(store: List[str]) -> Optional[str]:
    return store[-1] if store else None


def latest_with_prefix(store: List[str], prefix: str) -> Optional[str]:
    for text in reversed(store):
        if text.startswith(prefix):
            return text
    return None


def expand(store: List[str], line: str) -> str:
    if not line.startswith("!"):
        return line

    ref = line[1:]
    if ref == "!":
        found = last(store)
    elif _POSITION_RE.fullmatch(ref):
        found = entry(store, int(ref))
    else:
        found = latest_with_prefix(store, ref)
    return line if found is None else found


def render(store: List[str], now: Optional[datetime] = None) -> List[Tuple[str, str, str]]:
    """Return (position, timestamp, text) rows.

    The timestamp is the render time, shared by every row; entries do not
    record when they were typed.
    """
    stamp = (now or datetime.now()).strftime(HISTORY_TIME_FORMAT)
    width = len(str(len(store)))
    return [
        (str(i).rjust(width), stamp, text)
        for i, text in enumerate(store, start=1)
    ]


def format_lines(rows: List[Tuple[str, str, str]]) -> List[str]:
    return [f"{pos}  {stamp}  {text}" for pos, stamp, text in rows]
