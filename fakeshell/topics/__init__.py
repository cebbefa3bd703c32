# fakeshell/topics
#
# Built-in command surface. Each topic module exports
#   COMMANDS = {name: (handler, help_text, usage)}
# and handlers are called as handler(core, *args).

from fakeshell.topics import aliases, calc, files, history, procs

ALL_COMMANDS = {}
for _mod in (files, aliases, procs, history, calc):
    ALL_COMMANDS.update(_mod.COMMANDS)
