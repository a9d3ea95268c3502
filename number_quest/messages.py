"""
Friendly text for the player. The engine only says "won" / "closer" /
"not_closer" or why a move was rejected; this picks what to show.
"""

import random
from typing import Optional

from .types import Feedback, MoveRejection

ENCOURAGEMENT_MESSAGES = [
    "You're doing great! Keep going!",
    "Awesome try! You can do it!",
    "Super job! Try another number!",
    "You're a math star!",
    "Keep it up, champion!",
    "That's the spirit!",
    "You're so close!",
    "Amazing effort!",
]

WIN_MESSAGES = [
    "YOU'RE A MATH WIZARD!",
    "INCREDIBLE! YOU DID IT!",
    "WOW! YOU'RE AMAZING!",
    "SUPER STAR MATHEMATICIAN!",
    "FANTASTIC JOB, CHAMP!",
    "YOU'RE BRILLIANT!",
]

NOT_CLOSER_MESSAGE = "Try a different operation!"

REJECTION_MESSAGES = {
    "invalid_operand": "Oops! Please enter a positive number!",
    "non_positive_result": "Try a different number! Keep it positive!",
    "round_already_won": "You already won! Start a new game to play again.",
    "round_not_started": "Start a game first!",
}


def feedback_message(feedback: Feedback, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    if feedback == "won":
        return rng.choice(WIN_MESSAGES)
    if feedback == "closer":
        return rng.choice(ENCOURAGEMENT_MESSAGES)
    return NOT_CLOSER_MESSAGE


def rejection_message(rejection: MoveRejection) -> str:
    return REJECTION_MESSAGES[rejection]
