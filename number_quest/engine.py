"""
Pure game logic (no HTTP, no storage, no randomness).

Two jobs live here:
- arithmetic for one move: apply an operation, round the result to 2 decimals
- the hint engine: try a small set of operands with every operation and mark
  which results bring the player closer to the target

Rounding rule: half away from zero, 2 decimal places.
  2.675 -> 2.68 (Decimal works on the float's shortest repr, so 2.675 is
  really 2.675 here and not 2.67499999...)
"""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, List, Optional, Set, Union

from .types import Feedback, Operation

OPERATIONS: List[Operation] = ["+", "-", "*", "/"]

# Curated operands for hints: small, friendly numbers a kid would try
HINT_OPERANDS = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 12, 15, 20, 25, 50]

# Hints above this are not worth showing for targets under 200
HINT_RESULT_CEILING = 1000

_OPERATION_ALIASES = {
    "+": "+",
    "-": "-",
    "*": "*",
    "x": "*",
    "×": "*",
    "/": "/",
    "÷": "/",
}

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Suggestion:
    operation: Operation
    operand: int
    result: float
    is_useful: bool


def normalize_operation(symbol: str) -> Operation:
    """
    Map what the player typed/clicked to one of "+", "-", "*", "/".
    Accepts the pretty symbols too ("×", "x", "÷").
    """
    key = (symbol or "").strip().lower()
    if key not in _OPERATION_ALIASES:
        raise ValueError(f"Unknown operation: {symbol!r}")
    return _OPERATION_ALIASES[key]


def calculate(current: float, operation: Operation, operand: float) -> float:
    """Raw result, no rounding. Caller guarantees operand > 0."""
    if operation == "+":
        return current + operand
    if operation == "-":
        return current - operand
    if operation == "*":
        return current * operand
    if operation == "/":
        return current / operand
    raise ValueError(f"Unknown operation: {operation!r}")


def round_result(value: float) -> float:
    """
    Round to 2 decimal places, half away from zero.
    Example: 10 / 3 -> 3.33, 2.675 -> 2.68, -0.005 -> -0.01
    Non-finite values are returned unchanged so the caller can reject them.
    """
    if not math.isfinite(value):
        return value
    # big floats have up to ~310 digits before the point
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return float(rounded)


def parse_operand(raw: Union[str, int, float, None]) -> Optional[float]:
    """
    Turn the operand box contents into a number.
    Returns None when it is not a positive finite number:
      "5" -> 5.0, " 2.5 " -> 2.5, "abc" -> None, "0" -> None, "-3" -> None
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, str):
        raw = raw.strip()
        if raw == "":
            return None

    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None

    if not math.isfinite(value) or value <= 0:
        return None
    return value


def distance(value: float, target: float) -> float:
    return abs(value - target)


def is_progress(current: float, result: float, target: float) -> bool:
    """A move helps when it hits the target or strictly shrinks the gap."""
    return result == target or distance(result, target) < distance(current, target)


def classify_move(previous: float, result: float, target: float) -> Feedback:
    """
    won        -> result is the target
    closer     -> gap got strictly smaller
    not_closer -> gap stayed the same or grew
    """
    if result == target:
        return "won"
    if distance(result, target) < distance(previous, target):
        return "closer"
    return "not_closer"


def rating_for_moves(move_count: int) -> int:
    """
    Stars for a win, from the number of moves only:
      1 move -> 3 stars, 2-3 moves -> 2 stars, 4+ moves -> 1 star
    0 moves means no win yet -> 0 stars.
    """
    if move_count <= 0:
        return 0
    if move_count == 1:
        return 3
    if move_count <= 3:
        return 2
    return 1


def compute_suggestions(current: float, target: float) -> List[Suggestion]:
    """
    Try every operation with every hint operand.

    Order is fixed: operations "+", "-", "*", "/" on the outside, operands in
    HINT_OPERANDS order on the inside. Same input -> same list.

    Dropped: results that are not finite, <= 0, or > HINT_RESULT_CEILING.
    Kept results are not rounded and not de-duplicated
    (e.g. 4 + 4 and 4 * 2 both show up as 8).

    Example (current=10, target=15):
      (+, 5)  -> 15, useful (exact hit)
      (+, 1)  -> 11, useful (gap 4 < 5)
      (-, 1)  -> 9,  not useful (gap 6 > 5)
    """
    suggestions: List[Suggestion] = []

    for operation in OPERATIONS:
        for operand in HINT_OPERANDS:
            result = calculate(current, operation, operand)

            if not math.isfinite(result):
                continue
            if result <= 0 or result > HINT_RESULT_CEILING:
                continue

            suggestions.append(
                Suggestion(
                    operation=operation,
                    operand=operand,
                    result=result,
                    is_useful=is_progress(current, result, target),
                )
            )

    return suggestions


def useful_suggestions(suggestions: Iterable[Suggestion], limit: Optional[int] = None) -> List[Suggestion]:
    """Keep only the helpful ones, same order, optionally capped."""
    picked = []
    for suggestion in suggestions:
        if limit is not None and len(picked) >= limit:
            break
        if suggestion.is_useful:
            picked.append(suggestion)
    return picked


def useful_operation_set(suggestions: Iterable[Suggestion]) -> Set[Operation]:
    """Operations with at least one useful suggestion ("these can help you")."""
    return {s.operation for s in suggestions if s.is_useful}
