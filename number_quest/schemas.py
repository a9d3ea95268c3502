"""
Explicit validation & Pydantic models
- Validate what the client sends (operation symbol, operand text)
- Describe every response the API returns
"""

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator

from .engine import normalize_operation

OperationOut = Literal["+", "-", "*", "/"]
DifficultyOut = Literal["easy", "medium", "hard"]


# 1. One accepted move
class MoveOut(BaseModel):
    from_number: float = Field(..., description="Number before the move")
    operation: OperationOut = Field(..., description="Operation applied")
    operand: float = Field(..., description="Number used with the operation")
    to_number: float = Field(..., description="Number after the move (2 decimals)")
    distance_after: float = Field(..., description="How far the new number is from the target")
    feedback: Literal["won", "closer", "not_closer"] = Field(
        ..., description="Whether this move won, got closer, or did not get closer"
    )


# 2. Full state of a round
class RoundState(BaseModel):
    round_id: str = Field(..., description="Unique ID for the round")
    difficulty: DifficultyOut = Field(..., description="Chosen difficulty level")
    start: int = Field(..., description="Starting number")
    target: int = Field(..., description="Number to reach")
    current: float = Field(..., description="Where the player is now")
    status: Literal["in_progress", "won"] = Field(..., description="Current state of the round")
    rating: int = Field(..., ge=0, le=3, description="Stars earned (0 until won)")
    move_count: int = Field(..., description="Moves applied so far")
    history: List[MoveOut] = Field(..., description="All accepted moves, oldest first")


# 3. Player's move
class MoveRequest(BaseModel):
    operation: str = Field(..., description='One of "+", "-", "*", "/" (also "×", "x", "÷")')
    # Strict types keep the raw value (true stays a bool, null stays None);
    # the engine turns anything that is not a positive number into a rejection
    operand: Union[StrictStr, StrictInt, StrictFloat, StrictBool, None] = Field(
        ..., description="Positive number, as typed"
    )

    @field_validator("operation")
    @classmethod
    def validate_operation(cls, value: str) -> str:
        return normalize_operation(value)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"operation": "+", "operand": "5"},
                {"operation": "÷", "operand": "2"},
            ]
        }
    }


# 4. Result of a move (accepted or not)
class MoveResponse(BaseModel):
    accepted: bool = Field(..., description="False if the move was rejected")
    rejection: Optional[
        Literal["round_not_started", "round_already_won", "invalid_operand", "non_positive_result"]
    ] = Field(None, description="Why the move was rejected")
    feedback: Optional[Literal["won", "closer", "not_closer"]] = Field(
        None, description="How the move changed the distance to the target"
    )
    message: str = Field(..., description="Text to show the player")
    move: Optional[MoveOut] = Field(None, description="The move just applied")
    state: RoundState = Field(..., description="Round after the move")


# 5. Hints
class SuggestionOut(BaseModel):
    operation: OperationOut
    operand: int
    result: float
    is_useful: bool
    is_winner: bool = Field(..., description="True when the result is exactly the target")


class HintsOut(BaseModel):
    current: float
    target: int
    useful_operations: List[OperationOut] = Field(
        ..., description='Operations that can help right now, in "+ - * /" order'
    )
    suggestions: List[SuggestionOut]


# 6. Scoreboard
class StatsOut(BaseModel):
    rounds_started: int = Field(..., description="Rounds started this session")
    rounds_won: int = Field(..., description="Rounds won this session")

    total_stars: int = Field(..., description="Stars earned across all wins")
    average_moves_to_win: Optional[float] = Field(None, description="Average moves used in wins")
    fastest_win_moves: Optional[int] = Field(None, description="Fewest moves taken to win a round")

    easy_started: int = Field(..., description="Rounds started on Easy difficulty")
    medium_started: int = Field(..., description="Rounds started on Medium difficulty")
    hard_started: int = Field(..., description="Rounds started on Hard difficulty")

    easy_won: int = Field(..., description="Rounds won on Easy difficulty")
    medium_won: int = Field(..., description="Rounds won on Medium difficulty")
    hard_won: int = Field(..., description="Rounds won on Hard difficulty")
