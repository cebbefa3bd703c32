import signal

import pytest

import fakeshell_tui


def feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


@pytest.fixture(autouse=True)
def no_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(signal, "signal", lambda *a: None)


def test_exit_stops_before_later_lines(monkeypatch, capsys):
    feed(monkeypatch, ["calc 1 + 1", "EXIT", "calc 2 + 2"])
    assert fakeshell_tui.main() == 0
    out = capsys.readouterr().out
    assert "Welcome to FakeShell!" in out
    assert "1 + 1 = 2" in out
    assert "2 + 2 = 4" not in out


def test_eof_ends_session(monkeypatch, capsys):
    feed(monkeypatch, ["sort 2 1"])
    assert fakeshell_tui.main() == 0
    assert "1 2" in capsys.readouterr().out


def test_interrupt_ends_session(monkeypatch, capsys):
    def interrupted(prompt=""):
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", interrupted)
    assert fakeshell_tui.main() == 0


def test_sigterm_handler_exits_cleanly():
    with pytest.raises(SystemExit) as e:
        fakeshell_tui._on_sigterm(signal.SIGTERM, None)
    assert e.value.code == 0
