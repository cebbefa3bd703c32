# fakeshell/topics/calc.py
#
#   calc <expression...>
#
# Arithmetic lives in fakeshell.lib.calc; this wrapper only reports.
# A CalcError is printed and the command still counts as run.

from fakeshell.lib.calc import CalcError, evaluate

USAGE = (
    "Usage: calc <expression>",
    "Example: calc 2 + 2",
    "Supported operators: +, -, *, /, %, ^",
)


def _unquote(words):
    # calc "2 + 2 * 3" arrives as ['"2', '+', '2', '*', '3"']
    text = " ".join(words).strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return [text[1:-1]]
    return list(words)


def calc(core, *words):
    if not words:
        for line in USAGE:
            core.err(line)
        return None
    try:
        return evaluate(_unquote(words))
    except CalcError as e:
        if e.kind == "CalcInvalidCharacter":
            core.err(e.message)
        else:
            core.err(f"Error in calculation: {e.message}")
        return None


COMMANDS = {
    "calc": (
        calc,
        "Arbitrary-precision calculator",
        "calc 2 + 2\ncalc 10 * 5\ncalc \"2 + 2 * 3\"\ncalc 2 ^ 3    # power (2 ** 3)",
    ),
}
