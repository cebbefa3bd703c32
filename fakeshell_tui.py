# fakeshell_tui.py
import logging
import os
import readline  # noqa: F401  (line editing for input())
import signal
import sys

from fakeshell.core import init_core
from fakeshell.model.schema import EXIT_WORDS


def _on_sigterm(signum, frame):
    raise SystemExit(0)


def _configure_logging(level_name):
    level = getattr(logging, (level_name or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    core = init_core()
    _configure_logging(os.environ.get("FAKESHELL_LOG_LEVEL") or core.log_level)
    signal.signal(signal.SIGTERM, _on_sigterm)

    print("Welcome to FakeShell!")
    print("Available commands: " + ", ".join(core.commands))
    print('Type "help" for more information')
    print('Type "exit" to quit\n')

    while True:
        try:
            line = input(core.prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if line.strip().lower() in EXIT_WORDS:
            break
        try:
            core.run(line)
        except KeyboardInterrupt:
            print()
            break
    return 0


if __name__ == "__main__":
    sys.exit(main())
