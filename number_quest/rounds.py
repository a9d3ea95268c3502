"""
Round state + the transition function that applies one move.

A Round is a frozen value. apply_move() never changes the Round it is given;
it hands back a new one (or the same one, untouched, with a rejection).
Whoever owns the "current round" publishes the new value before taking the
next move, so two moves can never be applied to the same snapshot.

States:
  not_started --initialize_round--> in_progress --winning move--> won
  in_progress --other accepted move--> in_progress
  won is final until a new round is initialized.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Protocol, Tuple, Union

from .engine import (
    calculate,
    classify_move,
    distance,
    normalize_operation,
    parse_operand,
    rating_for_moves,
    round_result,
)
from .types import Difficulty, Feedback, MoveRejection, Operation, RoundStatus

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with randint(low, high), both ends included (random.Random fits)."""

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class DifficultyPreset:
    target_range: Tuple[int, int]
    start_range: Tuple[int, int]


# Inclusive ranges used when sampling a new round
DIFFICULTY_PRESETS: Dict[str, DifficultyPreset] = {
    "easy": DifficultyPreset(target_range=(10, 39), start_range=(1, 15)),
    "medium": DifficultyPreset(target_range=(20, 89), start_range=(1, 25)),
    "hard": DifficultyPreset(target_range=(50, 199), start_range=(1, 40)),
}


@dataclass(frozen=True)
class Move:
    from_number: float
    operation: Operation
    operand: float
    to_number: float
    distance_after: float
    feedback: Feedback


@dataclass(frozen=True)
class Round:
    difficulty: Difficulty
    start: int
    target: int
    current: float
    history: Tuple[Move, ...] = field(default_factory=tuple)
    status: RoundStatus = "in_progress"
    rating: int = 0

    @property
    def move_count(self) -> int:
        return len(self.history)

    @property
    def is_won(self) -> bool:
        return self.status == "won"

    @property
    def distance(self) -> float:
        return distance(self.current, self.target)


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of apply_move().
      accepted  -> round is the new Round, feedback is set
      rejected  -> round is the old Round (or None), rejection says why
    """
    round: Optional[Round]
    feedback: Optional[Feedback] = None
    rejection: Optional[MoveRejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @property
    def move(self) -> Optional[Move]:
        if not self.accepted or self.round is None or not self.round.history:
            return None
        return self.round.history[-1]


def get_preset(difficulty: str) -> DifficultyPreset:
    preset = DIFFICULTY_PRESETS.get(difficulty)
    if preset is None:
        raise ValueError(f"Unknown difficulty: {difficulty!r}")
    return preset


def initialize_round(difficulty: Difficulty, rng: RandomSource) -> Round:
    """
    Sample target then start from the difficulty's ranges.

    A round that is already won before the first move is no fun, so when
    start comes out equal to target, start moves one step inside its range
    (down if it can, otherwise up). No resampling loop: a fake rng that always
    returns the same number still gets a valid round.

    Reachability is not checked; some targets need many moves.
    """
    preset = get_preset(difficulty)

    target_low, target_high = preset.target_range
    start_low, start_high = preset.start_range

    target = rng.randint(target_low, target_high)
    start = rng.randint(start_low, start_high)

    if start == target:
        if start > start_low:
            start -= 1
        else:
            start += 1

    logger.info("New %s round: start=%s target=%s", difficulty, start, target)

    return Round(
        difficulty=difficulty,
        start=start,
        target=target,
        current=start,
    )


def apply_move(
    current_round: Optional[Round],
    operation: str,
    operand: Union[str, int, float, None],
) -> MoveResult:
    """
    Validate and apply one move.

    Checks run in this order and the first failure wins:
      1. there is a round           -> else round_not_started
      2. the round is not won       -> else round_already_won
      3. operand is a number > 0    -> else invalid_operand
      4. rounded result is > 0 and finite -> else non_positive_result

    Operand validation happens before any arithmetic, so "/" never sees 0.

    Example:
      start=10, target=15, apply_move(r, "+", "5")
      -> current=15, status="won", rating=3, feedback="won"
    """
    # 1. Round must exist and still be running
    if current_round is None:
        return MoveResult(round=None, rejection="round_not_started")
    if current_round.status == "won":
        return MoveResult(round=current_round, rejection="round_already_won")

    op = normalize_operation(operation)

    # 2. Operand must be a positive, finite number
    value = parse_operand(operand)
    if value is None:
        logger.debug("Rejected operand %r", operand)
        return MoveResult(round=current_round, rejection="invalid_operand")

    # 3. Do the math and keep 2 decimals
    result = round_result(calculate(current_round.current, op, value))
    if not math.isfinite(result) or result <= 0:
        logger.debug("Rejected %s %s %s -> %s", current_round.current, op, value, result)
        return MoveResult(round=current_round, rejection="non_positive_result")

    # 4. Record the move and publish a new Round
    feedback = classify_move(current_round.current, result, current_round.target)
    move = Move(
        from_number=current_round.current,
        operation=op,
        operand=value,
        to_number=result,
        distance_after=distance(result, current_round.target),
        feedback=feedback,
    )
    history = current_round.history + (move,)

    if feedback == "won":
        updated = replace(
            current_round,
            current=result,
            history=history,
            status="won",
            rating=rating_for_moves(len(history)),
        )
        logger.info("Round won in %d move(s)", len(history))
    else:
        updated = replace(current_round, current=result, history=history)

    return MoveResult(round=updated, feedback=feedback)
