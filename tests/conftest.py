import pytest

from fakeshell.core import init_core
from fakeshell.modules.proc import ExternalCommandFailed, ProcResult, UnknownCommand


class FakeProc:
    """Stands in for ProcRunner: records command lines, answers from a table."""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = dict(responses or {})

    def run(self, cmdline):
        self.calls.append(cmdline)
        word = cmdline.split()[0] if cmdline.split() else ""
        if cmdline in self.responses:
            code, stdout, stderr = self.responses[cmdline]
        elif word in self.responses:
            code, stdout, stderr = self.responses[word]
        else:
            code, stdout, stderr = 127, "", f"sh: 1: {word}: not found"
        result = ProcResult(cmdline, code, stdout, stderr)
        if code == 127:
            raise UnknownCommand(f"Unknown command: {word}", result)
        if code != 0:
            raise ExternalCommandFailed(f"{word}: {stderr.strip()}", result)
        return result


class Sink:
    def __init__(self):
        self.lines = []

    def __call__(self, text):
        self.lines.append(text)

    def __contains__(self, text):
        return text in self.lines


@pytest.fixture
def proc():
    return FakeProc({
        "true": (0, "", ""),
        "false": (1, "", ""),
        "echo": (0, "hi\n", ""),
    })


@pytest.fixture
def out():
    return Sink()


@pytest.fixture
def err():
    return Sink()


@pytest.fixture
def core(proc, out, err):
    return init_core(config_path=None, out=out, err=err, proc=proc)
