from fakeshell.modules.proc.client import (
    ExternalCommandFailed,
    ProcConfig,
    ProcError,
    ProcResult,
    ProcRunner,
    UnknownCommand,
)

__all__ = [
    "ExternalCommandFailed",
    "ProcConfig",
    "ProcError",
    "ProcResult",
    "ProcRunner",
    "UnknownCommand",
]
