# fakeshell/topics/history.py

from fakeshell.lib import history as hist


def history(core):
    if not core.history:
        return "No commands in history"
    return hist.format_lines(hist.render(core.history))


COMMANDS = {
    "history": (
        history,
        "Show command history",
        "history\n!5        # run command #5\n!!        # run the last command\n"
        "!calc     # run the last command starting with \"calc\"",
    ),
}
