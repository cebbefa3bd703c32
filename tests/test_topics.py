import re

from fakeshell.topics.procs import PS_HEADER, PS_RULER


# ---------------------------
# alias
# ---------------------------

def test_alias_create(core, out):
    core.run("alias ll ls -l")
    assert core.alias_mgr.lookup("ll") == "ls -l"
    assert "Alias 'll' created" in out


def test_alias_bash_spelling(core):
    core.run('alias ll="ls -l"')
    assert core.alias_mgr.lookup("ll") == "ls -l"


def test_alias_list(core, out):
    core.alias_mgr.define("ll", "ls -l")
    core.alias_mgr.define("la", "ls -la")
    core.run("alias")
    assert out.lines == ["ll='ls -l'", "la='ls -la'"]


def test_alias_list_empty(core, out):
    core.run("alias")
    assert out.lines == ["No aliases defined"]


def test_alias_show_one(core, out):
    core.alias_mgr.define("ll", "ls -l")
    core.run("alias ll")
    assert out.lines == ["ll='ls -l'"]


def test_alias_not_found(core, out):
    assert core.run("alias nonexistent") is True
    assert out.lines == ["Alias 'nonexistent' not found"]


def test_alias_recursive_reported(core, err):
    assert core.run("alias test test") is True
    assert err.lines == ["Error: Cannot create recursive alias 'test'"]
    assert core.alias_mgr.lookup("test") is None


def test_alias_circular_reported(core, err):
    core.alias_mgr.define("a", "b")
    core.run("alias b a")
    assert "Circular alias detected" in err.lines[0]


def test_alias_missing_name(core, err):
    core.run("alias =ls")
    assert err.lines == ["Error: Missing alias name"]


# ---------------------------
# calc
# ---------------------------

def test_calc_prints_result(core, out):
    core.run("calc 2 + 3")
    assert out.lines == ["2 + 3 = 5"]


def test_calc_quoted_expression(core, out):
    core.run('calc "2 + 2 * 3"')
    assert out.lines == ["2 + 2 * 3 = 8"]


def test_calc_invalid_expression(core, err):
    core.run("calc 2 + abc")
    assert err.lines == ["Invalid expression. Only numbers and basic operators are allowed."]


def test_calc_usage(core, err):
    core.run("calc")
    assert err.lines[0] == "Usage: calc <expression>"


# ---------------------------
# history
# ---------------------------

def test_history_lists_entries(core, out):
    core.run("sort 1")
    out.lines.clear()
    core.run("history")
    assert re.match(r"^1\s+\d{2}:\d{2}:\d{2}\s+sort 1$", out.lines[0])
    assert re.match(r"^2\s+\d{2}:\d{2}:\d{2}\s+history$", out.lines[1])


def test_history_empty(core, out):
    from fakeshell.topics.history import history

    assert history(core) == "No commands in history"


# ---------------------------
# sort
# ---------------------------

def test_sort_numbers(core, out):
    core.run("sort 5 2 8 1 9")
    assert out.lines == ["1 2 5 8 9"]


def test_sort_decimals_and_negatives(core, out):
    core.run("sort 2.50 -1 10")
    assert out.lines == ["-1 2.5 10"]


def test_sort_invalid_number(core, out, err):
    assert core.run("sort 5 abc 8") is True
    assert err.lines == ["Invalid number: abc"]
    assert out.lines == []


def test_sort_rejects_nan(core, err):
    core.run("sort 1 NaN")
    assert err.lines == ["Invalid number: NaN"]


def test_sort_usage(core, err):
    core.run("sort")
    assert err.lines[0] == "Usage: sort <filename> or sort <numbers...>"


def test_sort_file_uses_system_sort(core, proc, out, tmp_path):
    f = tmp_path / "data.txt"
    f.write_text("b\na\n")
    proc.responses["sort"] = (0, "a\nb\n", "")
    core.run(f"sort {f}")
    assert proc.calls == [f"sort {f}"]
    assert out.lines == ["a\nb"]


# ---------------------------
# tree
# ---------------------------

def test_tree(core, out, tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("")
    (tmp_path / "README").write_text("")
    (tmp_path / ".git").mkdir()
    (tmp_path / "node_modules").mkdir()

    core.run(f"tree {tmp_path}")
    assert out.lines == [
        str(tmp_path),
        "├── README",
        "└── src",
        "    └── main.py",
    ]


def test_tree_default_root(core, out, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    core.run("tree")
    assert out.lines == ["."]


# ---------------------------
# ps
# ---------------------------

def test_ps_reformats_header(core, proc, out):
    proc.responses["ps -l"] = (
        0,
        "F S   UID     PID    PPID  C PRI  NI ADDR SZ WCHAN  TTY          TIME CMD\n"
        "0 S  1000    4242    4241  0  80   0 -  2000 -      pts/0    00:00:00 bash\n",
        "",
    )
    core.run("ps")
    assert out.lines[0] == PS_HEADER
    assert out.lines[1] == PS_RULER
    assert out.lines[2].endswith("bash")
    assert len(out.lines) == 3


def test_ps_failure_fails_segment(core, proc, err):
    proc.responses["ps -l"] = (1, "", "ps: broken")
    assert core.run("ps") is False
    assert err.lines == ["Error: ps: ps: broken"]
