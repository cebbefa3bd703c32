# fakeshell/topics/procs.py
#
#   ps    system `ps -l` under a fixed header

PS_HEADER = "F S UID   PID  PPID  C PRI  NI ADDR SZ WCHAN TTY        TIME CMD"
PS_RULER = "- - --- ---- ----- --- --- --- ---- -- ----- --- ----------- ---"


def ps(core):
    res = core.proc.run("ps -l")
    rows = [line for line in res.stdout.splitlines()[1:] if line.strip()]
    return [PS_HEADER, PS_RULER] + rows


COMMANDS = {
    "ps": (ps, "Show running processes", "ps"),
}
