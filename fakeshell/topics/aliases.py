# fakeshell/topics/aliases.py
#
#   alias                    list all aliases as name='text'
#   alias <name>             show one alias
#   alias <name> <words...>  define (quotes and a leading '=' are stripped)
#   alias <name>=<words...>  same, bash spelling
#
# Alias errors are reported, they do not fail the command.

from fakeshell.aliases import AliasError


def _show(name, text):
    return f"{name}='{text}'"


def alias(core, *args):
    table = core.alias_mgr

    if not args:
        if not len(table):
            return "No aliases defined"
        return [_show(n, t) for n, t in table.list()]

    name, rest = args[0], list(args[1:])
    if "=" in name:
        name, head = name.split("=", 1)
        rest.insert(0, head)
    elif not rest:
        text = table.lookup(name)
        if text is None:
            return f"Alias '{name}' not found"
        return _show(name, text)

    if not name:
        core.err("Error: Missing alias name")
        return None

    try:
        table.define(name, " ".join(rest))
    except AliasError as e:
        core.err(str(e))
        return None
    return f"Alias '{name}' created"


COMMANDS = {
    "alias": (
        alias,
        "Define or show aliases",
        "alias ll=\"ls -l\"\nalias ll ls -l\nalias\nalias ll",
    ),
}
