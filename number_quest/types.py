"""
Labels for clarity.
"""

from typing import Literal

Operation = Literal["+", "-", "*", "/"]
Difficulty = Literal["easy", "medium", "hard"]
# "not started" has no label: before initialize_round there is no Round at all
RoundStatus = Literal["in_progress", "won"]

# How a move changed things (the UI picks a message from this)
Feedback = Literal["won", "closer", "not_closer"]

# Why a move was refused; the round is left untouched
MoveRejection = Literal[
    "round_not_started",
    "round_already_won",
    "invalid_operand",
    "non_positive_result",
]
