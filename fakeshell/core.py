"""fakeshell/core.py

Core runtime + init_core() wiring.

A Core owns everything a session mutates (history, aliases, command table),
so independent instances never share state.

Important: avoid importing fakeshell.topics (ALL_COMMANDS) at module import
time; init_core() pulls it in late.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from fakeshell.aliases import AliasTable
from fakeshell.lib import history as hist
from fakeshell.model.schema import (
    CHAIN_OPERATORS,
    CONFIG_KEYS,
    CONFIG_PATH,
    EXPAND_MAX_PASSES,
    PROMPT,
)
from fakeshell.modules.proc import ProcConfig, ProcError, ProcRunner, UnknownCommand

logger = logging.getLogger(__name__)

_CHAIN_RE = re.compile("(" + "|".join(re.escape(op) for op in CHAIN_OPERATORS) + ")")

HELP_HINT = 'Use "help" to list available commands.'


class Segment(NamedTuple):
    op: Optional[str]   # None for the first segment, else "&&" / "||"
    text: str


def split_chain(line: str) -> List[Segment]:
    parts = [p.strip() for p in _CHAIN_RE.split(line)]
    segments = [Segment(None, parts[0])]
    for i in range(1, len(parts), 2):
        segments.append(Segment(parts[i], parts[i + 1]))
    return segments


def _print_out(text: str) -> None:
    print(text)


def _print_err(text: str) -> None:
    print(text, file=sys.stderr)


class Core:
    def __init__(
        self,
        out: Optional[Callable[[str], None]] = None,
        err: Optional[Callable[[str], None]] = None,
        proc: Optional[ProcRunner] = None,
    ):
        self.history: List[str] = []
        self.alias_mgr = AliasTable()
        self.commands: Dict[str, Dict[str, Any]] = {}   # cmd -> {handler, help, usage}
        self.proc = proc or ProcRunner()

        self.out = out or _print_out
        self.err = err or _print_err

        self.expand_max_passes = EXPAND_MAX_PASSES  # can be overridden by config/core.json
        self.prompt = PROMPT
        self.log_level: Optional[str] = None

        # Serialize run() if a caller drives the core from several threads
        self.exec_lock = threading.RLock()

    def register(self, name, handler, help_text="", usage=""):
        self.commands[name] = {"handler": handler, "help": help_text, "usage": usage}

    def emit(self, result) -> None:
        if result is None or result == "":
            return
        if isinstance(result, (list, tuple)):
            for line in result:
                self.out(str(line))
        else:
            self.out(str(result))

    def _expand(self, parts):
        seen = set()
        for _ in range(self.expand_max_passes):
            head = parts[0] if parts else None
            if head in seen:
                raise ValueError("Expansion loop detected")
            seen.add(head)

            new_parts = self.alias_mgr.expand(parts)
            if new_parts == parts:
                return parts
            parts = new_parts

        raise ValueError(f"Expansion depth exceeded (max_passes={self.expand_max_passes})")

    def _run_external(self, cmdline: str) -> bool:
        try:
            res = self.proc.run(cmdline)
        except UnknownCommand as e:
            self.err(str(e))
            self.err(HELP_HINT)
            return False
        except ProcError as e:
            if e.result is not None:
                self.emit(e.result.stdout.rstrip("\n"))
            self.err(f"Error: {e}")
            return False

        self.emit(res.stdout.rstrip("\n"))
        if res.stderr.strip():
            self.err(res.stderr.rstrip("\n"))
        return True

    def execute(self, text: str) -> bool:
        """Run one chain segment. Returns its success flag."""
        words = text.split(None, 1)
        if not words:
            self.err("Syntax error: empty command")
            return False

        head = words[0]
        tail = words[1] if len(words) > 1 else ""
        try:
            resolved = self._expand([head])
        except ValueError as e:
            self.err(f"Error: {e}")
            return False
        if not resolved:
            self.err("Syntax error: empty command")
            return False

        cmd = resolved[0]
        entry = self.commands.get(cmd)
        if not entry:
            cmdline = " ".join(resolved + ([tail] if tail else []))
            return self._run_external(cmdline)

        args = resolved[1:] + tail.split()
        try:
            out = entry["handler"](self, *args)
        except Exception as e:
            logger.debug("built-in %s failed", cmd, exc_info=True)
            self.err(f"Error: {e}")
            return False

        self.emit(out)
        return True

    def run(self, raw: str) -> bool:
        """Expand, record and execute one input line (possibly a && / || chain)."""
        with self.exec_lock:
            # blank input is not recorded
            if not raw.strip():
                return True

            line = hist.expand(self.history, raw)
            if line != raw:
                self.out(line)
            hist.append(self.history, line)

            last_success = True
            for seg in split_chain(line):
                if seg.op == "&&" and not last_success:
                    break
                if seg.op == "||" and last_success:
                    break
                last_success = self.execute(seg.text)
            return last_success


# ---------- help ----------
def help_cmd(core, name=None):
    if name:
        entry = core.commands.get(name)
        if entry is None:
            core.err(f"Unknown command: {name}")
            core.err(HELP_HINT)
            return None
        lines = [f"Help for: {name}", "-------------------", entry["help"]]
        if entry["usage"]:
            lines.append("")
            lines.append("Examples:")
            lines.extend("  " + u for u in entry["usage"].splitlines())
        return lines

    lines = ["Available commands:", "-------------------"]
    for cmd, entry in core.commands.items():
        lines.append(f"{cmd.ljust(10)} : {entry['help']}")
    lines.append("")
    lines.append('Use "help <command>" for details on a specific command.')
    return lines


def load_core_config(path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("ignoring %s: %s", p, e)
        return {}
    if not isinstance(raw, dict):
        logger.warning("ignoring %s: expected a JSON object", p)
        return {}
    unknown = sorted(set(raw) - set(CONFIG_KEYS))
    if unknown:
        logger.warning("%s: unknown keys %s", p, ", ".join(unknown))
    return {k: raw[k] for k in CONFIG_KEYS if k in raw}


def init_core(config_path=CONFIG_PATH, out=None, err=None, proc=None):
    # Late import to avoid circular-import issues.
    from fakeshell.topics import ALL_COMMANDS

    cfg = load_core_config(config_path) if config_path else {}

    if proc is None:
        shell = cfg.get("shell")
        proc = ProcRunner(ProcConfig(shell=str(shell))) if shell else ProcRunner()

    core = Core(out=out, err=err, proc=proc)

    if "expand_max_passes" in cfg:
        try:
            core.expand_max_passes = max(1, int(cfg["expand_max_passes"]))
        except (TypeError, ValueError):
            logger.warning("expand_max_passes must be an integer, keeping %s", core.expand_max_passes)
    if isinstance(cfg.get("prompt"), str):
        core.prompt = cfg["prompt"]
    if isinstance(cfg.get("log_level"), str):
        core.log_level = cfg["log_level"].upper()

    # register built-ins
    for name, (handler, help_text, usage) in ALL_COMMANDS.items():
        core.register(name, handler, help_text, usage)

    core.register(
        "help",
        help_cmd,
        "Show available commands",
        "help\nhelp calc",
    )

    return core
