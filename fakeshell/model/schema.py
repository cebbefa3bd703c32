# fakeshell/model/schema.py
#
# Interpreter limits and defaults.
#
# Keep names stable: topics, lib and the REPL import these directly and
# config/core.json only overrides the ones listed in CONFIG_KEYS.

# -----------------------------
# calculator limits
# -----------------------------

CALC_MAX_INPUT = 10_000       # joined expression length (chars)
CALC_MAX_DIGITS = 1_000       # digits per numeral
CALC_MAX_EXPONENT = 1_000     # right operand of ^
CALC_MAX_POWER_DIGITS = 10_000  # digits a single ^ may produce
CALC_DIV_PLACES = 50          # fractional digits kept by non-terminating division

# -----------------------------
# chain / alias
# -----------------------------

CHAIN_OPERATORS = ("&&", "||")

EXPAND_MAX_PASSES = 10

# -----------------------------
# REPL
# -----------------------------

PROMPT = "fakeshell> "
EXIT_WORDS = ("exit", "quit")
HISTORY_TIME_FORMAT = "%H:%M:%S"

# skipped by the tree printer
TREE_IGNORED = ("node_modules", "__pycache__", "package-lock.json")

# -----------------------------
# config/core.json
# -----------------------------

CONFIG_PATH = "config/core.json"
CONFIG_KEYS = (
    "expand_max_passes",
    "prompt",
    "log_level",
    "shell",
)
