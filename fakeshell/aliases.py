# fakeshell/aliases.py
#
# User aliases. Expansion is token0 replacement: the leading word of a
# command is swapped for the words of its alias text.
#
# Write rule: following name -> first word of its text -> ... must never come
# back to name. Only a walk that returns to the name being defined is
# rejected; a loop elsewhere in the chain ends the walk without error.

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')


class AliasError(ValueError):
    def __init__(self, kind: str, name: str, message: str):
        self.kind = kind
        self.name = name
        super().__init__(message)


def clean_text(text: str) -> str:
    """Strip a leading '=' and one surrounding quote char at each end."""
    s = text.strip()
    if s.startswith("="):
        s = s[1:].strip()
    if s[:1] in _QUOTES:
        s = s[1:]
    if s[-1:] in _QUOTES:
        s = s[:-1]
    return s.strip()


def first_word(text: str) -> str:
    parts = text.split()
    return parts[0] if parts else ""


def has_cycle(aliases: Mapping[str, str], name: str) -> bool:
    """Walk name -> first word -> ... over a snapshot; True if it returns to name."""
    visited = set()
    cur = name
    while True:
        if cur in visited:
            return cur == name
        visited.add(cur)
        if cur not in aliases:
            return False
        cur = first_word(aliases[cur])


class AliasTable:
    def __init__(self, aliases: Optional[Mapping[str, str]] = None):
        self.aliases: Dict[str, str] = dict(aliases or {})

    def __len__(self) -> int:
        return len(self.aliases)

    def define(self, name: str, text: str) -> str:
        expansion = clean_text(text)
        if not expansion:
            raise AliasError("EmptyAlias", name, f"Error: Empty alias text for '{name}'")
        if first_word(expansion) == name:
            raise AliasError("RecursiveAlias", name, f"Error: Cannot create recursive alias '{name}'")

        proposed = dict(self.aliases)
        proposed[name] = expansion
        if has_cycle(proposed, name):
            logger.debug("alias %s=%r rejected: chain returns to %s", name, expansion, name)
            raise AliasError("CircularAlias", name, f"Error: Circular alias detected for '{name}'")

        self.aliases[name] = expansion
        logger.debug("alias %s=%r", name, expansion)
        return expansion

    def lookup(self, name: str) -> Optional[str]:
        return self.aliases.get(name)

    def list(self) -> List[Tuple[str, str]]:
        return list(self.aliases.items())

    def expand(self, parts: List[str]) -> List[str]:
        if not parts:
            return parts
        exp = self.aliases.get(parts[0])
        if not exp:
            return parts
        return exp.split() + parts[1:]
