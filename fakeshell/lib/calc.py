# fakeshell/lib/calc.py
#
# Arbitrary-precision calculator (no Core dependency).
#
# Pipeline:
#   words -> validate -> echo text (^ shown as **) -> tokens -> tiered fold
#
# The token stream is folded left to right once per tier: ** first, then
# * / %, then + -. Parentheses pass validation but are dropped by the
# tokenizer, so they never group anything.
#
# Numbers are decimal.Decimal; every operation runs in its own context sized
# so that + - * % ^ are exact. Division keeps CALC_DIV_PLACES fractional
# digits (round-half-even) when the quotient does not terminate before that.

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import Callable, Dict, List, Sequence, Tuple, Union

from fakeshell.model.schema import (
    CALC_DIV_PLACES,
    CALC_MAX_DIGITS,
    CALC_MAX_EXPONENT,
    CALC_MAX_INPUT,
    CALC_MAX_POWER_DIGITS,
)


class CalcError(ValueError):
    """Calculator failure tagged with one of the Calc* kinds."""

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Token:
    kind: str                      # "num" | "op"
    value: Union[Decimal, str]
    text: str


_VALID_RE = re.compile(r"[0-9 +\-*/%()^]*")
_PIECE_RE = re.compile(r"\d+|\*\*|[-+*/%]")

INVALID_EXPRESSION = "Invalid expression. Only numbers and basic operators are allowed."


# ----------------- stages -----------------

def normalize(words: Sequence[str]) -> str:
    if not words:
        raise CalcError("CalcEmptyExpression", "Empty expression")
    text = " ".join(" ".join(words).split())
    if not text:
        raise CalcError("CalcEmptyExpression", "Empty expression")
    if len(text) > CALC_MAX_INPUT:
        raise CalcError("CalcTooLong", f"Expression too long (max {CALC_MAX_INPUT} characters)")
    if not _VALID_RE.fullmatch(text):
        raise CalcError("CalcInvalidCharacter", INVALID_EXPRESSION)
    return text


def echo_text(text: str) -> str:
    return text.replace("^", "**")


def tokenize(text: str) -> List[Token]:
    pieces = _PIECE_RE.findall(text)
    tokens: List[Token] = []
    i = 0
    while i < len(pieces):
        piece = pieces[i]
        if piece.isdigit():
            tokens.append(Token("num", Decimal(piece), piece))
        elif (
            piece in ("+", "-")
            and (not tokens or tokens[-1].kind == "op")
            and i + 1 < len(pieces)
            and pieces[i + 1].isdigit()
        ):
            # sign of the next numeral
            signed = piece + pieces[i + 1]
            tokens.append(Token("num", Decimal(signed), signed))
            i += 1
        else:
            tokens.append(Token("op", piece, piece))
        i += 1
    return tokens


def check_structure(tokens: List[Token]) -> None:
    if len(tokens) < 3:
        raise CalcError("CalcMalformed", "Malformed expression: expected <number> <operator> <number>")
    for tok in tokens:
        if tok.kind == "num" and len(tok.text.lstrip("+-")) > CALC_MAX_DIGITS:
            raise CalcError("CalcNumberTooLong", f"Number too long (max {CALC_MAX_DIGITS} digits)")


def split_operands(tokens: List[Token]) -> Tuple[List[Decimal], List[str]]:
    """Check the number/operator alternation and pull the two streams apart."""
    first = tokens[0]
    if first.kind != "num":
        raise CalcError("CalcMalformed", f"Malformed expression: expected a number, got '{first.text}'")

    values: List[Decimal] = [first.value]  # type: ignore[list-item]
    ops: List[str] = []
    i = 1
    while i < len(tokens):
        op = tokens[i]
        if op.kind != "op" or op.value not in OPERATORS:
            raise CalcError("CalcInvalidOperator", f"Expected an operator, got '{op.text}'")
        if i + 1 >= len(tokens):
            raise CalcError("CalcMissingOperand", f"Missing operand after '{op.text}'")
        rhs = tokens[i + 1]
        if rhs.kind != "num":
            raise CalcError("CalcMalformed", f"Malformed expression: expected a number, got '{rhs.text}'")
        ops.append(op.value)  # type: ignore[arg-type]
        values.append(rhs.value)  # type: ignore[arg-type]
        i += 2
    return values, ops


def _fold_tier(values: List[Decimal], ops: List[str], tier: Tuple[str, ...]):
    out_values = [values[0]]
    out_ops: List[str] = []
    for op, rhs in zip(ops, values[1:]):
        if op in tier:
            out_values[-1] = OPERATORS[op](out_values[-1], rhs)
        else:
            out_ops.append(op)
            out_values.append(rhs)
    return out_values, out_ops


def fold(tokens: List[Token]) -> Decimal:
    values, ops = split_operands(tokens)
    for tier in TIERS:
        values, ops = _fold_tier(values, ops, tier)
    return values[0]


def evaluate(words: Sequence[str]) -> str:
    """calc words -> "<expression> = <result>" (raises CalcError)."""
    text = normalize(words)
    shown = echo_text(text)
    tokens = tokenize(shown)
    check_structure(tokens)
    return f"{shown} = {format_decimal(fold(tokens))}"


def format_decimal(value: Decimal) -> str:
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


# ----------------- arithmetic -----------------

def _context(prec: int) -> Context:
    return Context(
        prec=max(prec, 1),
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow],
    )


def _digits(x: Decimal) -> int:
    return len(x.as_tuple().digits)


def _exp(x: Decimal) -> int:
    return x.as_tuple().exponent  # type: ignore[return-value]


def _span(a: Decimal, b: Decimal) -> int:
    # digits between the highest leading digit and the lowest exponent
    return max(a.adjusted(), b.adjusted()) - min(_exp(a), _exp(b)) + 2


def _add(a: Decimal, b: Decimal) -> Decimal:
    return _context(_span(a, b)).add(a, b)


def _sub(a: Decimal, b: Decimal) -> Decimal:
    return _context(_span(a, b)).subtract(a, b)


def _mul(a: Decimal, b: Decimal) -> Decimal:
    return _context(_digits(a) + _digits(b)).multiply(a, b)


def _quotient(a: Decimal, b: Decimal) -> Decimal:
    # a / b rounded half-even to CALC_DIV_PLACES fractional digits, computed
    # on integer coefficients so there is exactly one rounding step.
    ta, tb = a.as_tuple(), b.as_tuple()
    ma = int("".join(map(str, ta.digits))) * (-1 if ta.sign else 1)
    mb = int("".join(map(str, tb.digits))) * (-1 if tb.sign else 1)
    if mb < 0:
        ma, mb = -ma, -mb

    shift = ta.exponent - tb.exponent + CALC_DIV_PLACES  # type: ignore[operator]
    num, den = ma, mb
    if shift >= 0:
        num *= 10 ** shift
    else:
        den *= 10 ** -shift

    q, r = divmod(num, den)
    if 2 * r > den or (2 * r == den and q % 2 == 1):
        q += 1
    return Decimal(f"{q}E-{CALC_DIV_PLACES}")


def _div(a: Decimal, b: Decimal) -> Decimal:
    if not b:
        raise CalcError("CalcDivisionByZero", "Division by zero")
    return _quotient(a, b)


def _mod(a: Decimal, b: Decimal) -> Decimal:
    if not b:
        raise CalcError("CalcModuloByZero", "Modulo by zero")
    prec = max(a.adjusted() - b.adjusted(), 0) + _span(a, b) + 1
    return _context(prec).remainder(a, b)


def _pow(a: Decimal, b: Decimal) -> Decimal:
    if abs(b) > CALC_MAX_EXPONENT:
        raise CalcError("CalcExponentTooLarge", f"Exponent too large (max {CALC_MAX_EXPONENT})")
    n = int(b)
    if n == 0:
        return Decimal(1)
    if n < 0:
        if not a:
            raise CalcError("CalcDivisionByZero", "Division by zero")
        return _quotient(Decimal(1), _pow(a, Decimal(-n)))
    prec = _digits(a) * n + 1
    if prec > CALC_MAX_POWER_DIGITS:
        raise CalcError("CalcNumberTooLong", f"Result too long (max {CALC_MAX_POWER_DIGITS} digits)")
    return _context(prec).power(a, n)


OPERATORS: Dict[str, Callable[[Decimal, Decimal], Decimal]] = {
    "+": _add,
    "-": _sub,
    "*": _mul,
    "/": _div,
    "%": _mod,
    "**": _pow,
}

TIERS: Tuple[Tuple[str, ...], ...] = (
    ("**",),
    ("*", "/", "%"),
    ("+", "-"),
)
