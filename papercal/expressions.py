"""
The ((...)) mini language used inside special day text, icon and font fields.

An expression is a left to right chain of integer operands joined by + or -,
no precedence and no grouping:

    ((year - 2011))º Aniversario    ->  13º Aniversario   (year 2024)

Operands are integer literals or one of the names `year`, `month`, `day`
(the date the special day lands on) and `cfg.year`, `cfg.month` (the
configured rendering period). Names are case-insensitive.
"""

import re
from datetime import date
from typing import Callable, Dict, Iterator, List, NamedTuple, Tuple

from .errors import ExpressionSyntaxError


MARKER_PATTERN = re.compile(r"\(\(([^)]+)\)\)")

_TOKEN_PATTERN = re.compile(
    r"\s*(?:(?P<number>\d+)|(?P<name>[A-Za-z_][A-Za-z0-9_.]*)|(?P<op>[+-])|(?P<other>\S))"
)


class ExpressionContext(NamedTuple):
    date: date
    cfg_year: int
    cfg_month: int


class Evaluation(NamedTuple):
    text: str
    skip: bool


VARIABLES: Dict[str, Callable[[ExpressionContext], int]] = {
    "year": lambda ctx: ctx.date.year,
    "month": lambda ctx: ctx.date.month,
    "day": lambda ctx: ctx.date.day,
    "cfg.year": lambda ctx: ctx.cfg_year,
    "cfg.month": lambda ctx: ctx.cfg_month,
}


def tokenize(expr: str) -> List[Tuple[str, str]]:
    tokens = []
    pos = 0
    expr = expr.rstrip()
    while pos < len(expr):
        match = _TOKEN_PATTERN.match(expr, pos)
        kind = match.lastgroup
        value = match.group(kind)
        if kind == "other":
            if value in "*/%^":
                raise ExpressionSyntaxError(
                    f"unsupported operator {value!r} in {expr.strip()!r} (only + and - are supported)"
                )
            raise ExpressionSyntaxError(f"malformed token {value!r} in {expr.strip()!r}")
        tokens.append((kind, value))
        pos = match.end()
    return tokens


def _operand(tokens: Iterator[Tuple[str, str]], expr: str, context: ExpressionContext) -> int:
    kind, value = next(tokens, (None, None))
    sign = 1
    if kind == "op":
        sign = -1 if value == "-" else 1
        kind, value = next(tokens, (None, None))

    if kind == "number":
        return sign * int(value)
    if kind == "name":
        resolve = VARIABLES.get(value.lower())
        if resolve is None:
            raise ExpressionSyntaxError(
                f"unknown variable {value!r} (supported: {', '.join(VARIABLES)})"
            )
        return sign * resolve(context)
    if kind is None:
        raise ExpressionSyntaxError(f"incomplete expression {expr.strip()!r}: missing operand")
    raise ExpressionSyntaxError(f"unexpected {value!r} in {expr.strip()!r}")


def evaluate(expr: str, context: ExpressionContext) -> int:
    """Evaluates the inside of one ((...)) marker."""
    tokens = tokenize(expr)
    if not tokens:
        raise ExpressionSyntaxError("empty expression")

    stream = iter(tokens)
    result = _operand(stream, expr, context)
    for kind, value in stream:
        if kind != "op":
            raise ExpressionSyntaxError(
                f"expected + or - before {value!r} in {expr.strip()!r}"
            )
        operand = _operand(stream, expr, context)
        result = result + operand if value == "+" else result - operand
    return result


def evaluate_expressions(text: str, context: ExpressionContext) -> Evaluation:
    """
    Replaces every ((...)) in `text` with its value.

    `skip` is True when any of the expressions is zero or negative; the text
    is still fully substituted in that case. A syntax error in any expression
    raises and no substituted text is returned.
    """
    if not text:
        return Evaluation(text, False)

    skip = False

    def substitute(match: "re.Match[str]") -> str:
        nonlocal skip
        value = evaluate(match.group(1), context)
        if value <= 0:
            skip = True
        return str(value)

    result = MARKER_PATTERN.sub(substitute, text)
    return Evaluation(result, skip)
