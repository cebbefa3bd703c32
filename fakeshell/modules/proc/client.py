# modules/proc/client.py
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# POSIX shells exit with this when the program does not exist
NOT_FOUND_CODE = 127


@dataclass(frozen=True)
class ProcConfig:
    shell: Optional[str] = None     # None -> /bin/sh (or COMSPEC on Windows)
    encoding: str = "utf-8"


@dataclass(frozen=True)
class ProcResult:
    cmdline: str
    returncode: int
    stdout: str
    stderr: str


class ProcError(RuntimeError):
    def __init__(self, message: str, result: Optional[ProcResult] = None):
        self.result = result
        super().__init__(message)


class UnknownCommand(ProcError):
    pass


class ExternalCommandFailed(ProcError):
    pass


class ProcRunner:
    """
    Blocking runner for command lines the interpreter does not handle itself.
    Returns captured output on exit code 0, raises ProcError otherwise.

    No timeout: a child that never exits blocks the caller.
    """

    def __init__(self, cfg: Optional[ProcConfig] = None):
        self.cfg = cfg or ProcConfig()

    def run(self, cmdline: str) -> ProcResult:
        parts = cmdline.split()
        word = parts[0] if parts else ""
        try:
            cp = subprocess.run(
                cmdline,
                shell=True,
                executable=self.cfg.shell,
                capture_output=True,
                text=True,
                encoding=self.cfg.encoding,
                errors="replace",
            )
        except FileNotFoundError as e:
            # only reached when the configured shell itself is missing
            raise UnknownCommand(f"Unknown command: {word}") from e

        result = ProcResult(cmdline, cp.returncode, cp.stdout or "", cp.stderr or "")
        logger.debug("external %r -> %s", cmdline, cp.returncode)

        if cp.returncode == NOT_FOUND_CODE:
            raise UnknownCommand(f"Unknown command: {word}", result)
        if cp.returncode != 0:
            detail = result.stderr.strip() or f"exit status {cp.returncode}"
            raise ExternalCommandFailed(f"{word}: {detail}", result)
        return result
