'''
Number Quest API

Endpoints:
POST /rounds                 -> start a round
GET  /rounds/{id}            -> read state & history
POST /rounds/{id}/moves      -> apply one move
GET  /rounds/{id}/hints      -> suggestions for the current number

Extras:
GET  /stats                  -> scoreboard
POST /stats/reset            -> reset scoreboard

State lives in memory (RoundStore); nothing survives a restart.
'''

import logging

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .engine import compute_suggestions, useful_operation_set, useful_suggestions, OPERATIONS
from .messages import feedback_message, rejection_message
from .random_client import make_random_source
from .rounds import Move, Round
from .store import RoundRecord, RoundStore
from .types import Difficulty

from .schemas import (
    HintsOut,
    MoveOut,
    MoveRequest,
    MoveResponse,
    RoundState,
    StatsOut,
    SuggestionOut,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Hint panel shows at most this many at once
MAX_HINTS_SHOWN = 20

app = FastAPI(title="Number Quest API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

_store = RoundStore()


def get_store() -> RoundStore:
    return _store


# --- DTO builders ---

def _to_move_out(move: Move) -> MoveOut:
    return MoveOut(
        from_number=move.from_number,
        operation=move.operation,
        operand=move.operand,
        to_number=move.to_number,
        distance_after=move.distance_after,
        feedback=move.feedback,
    )


def _to_round_state(round_id: str, current_round: Round) -> RoundState:
    return RoundState(
        round_id=round_id,
        difficulty=current_round.difficulty,
        start=current_round.start,
        target=current_round.target,
        current=current_round.current,
        status=current_round.status,
        rating=current_round.rating,
        move_count=current_round.move_count,
        history=[_to_move_out(m) for m in current_round.history],
    )


def _get_record_or_404(store: RoundStore, round_id: str) -> RoundRecord:
    record = store.get(round_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Round not found")
    return record

# ---------------- Routes ----------------

@app.post("/rounds", response_model=RoundState, summary="Start a new round")
def start_round(
    difficulty: Difficulty = "easy",
    store: RoundStore = Depends(get_store),
) -> RoundState:
    """
    Difficulty presets (inclusive):
      easy   -> target 10-39,  start 1-15
      medium -> target 20-89,  start 1-25
      hard   -> target 50-199, start 1-40
    """
    rng = make_random_source()            # random.org w/ secure fallback
    record = store.create(difficulty, rng)
    return _to_round_state(record.id, record.round)


@app.get("/rounds/{round_id}", response_model=RoundState, summary="Get current round state")
def get_round(
    round_id: str,
    store: RoundStore = Depends(get_store),
) -> RoundState:
    record = _get_record_or_404(store, round_id)
    return _to_round_state(record.id, record.round)


@app.post("/rounds/{round_id}/moves", response_model=MoveResponse, summary="Apply a move")
def submit_move(
    round_id: str,
    payload: MoveRequest,
    store: RoundStore = Depends(get_store),
) -> MoveResponse:
    # A rejected move is a normal answer (200), the round just stays the same
    result = store.move(round_id, payload.operation, payload.operand)
    if result is None:
        raise HTTPException(status_code=404, detail="Round not found")

    state = _to_round_state(round_id, result.round)

    if not result.accepted:
        return MoveResponse(
            accepted=False,
            rejection=result.rejection,
            message=rejection_message(result.rejection),
            state=state,
        )

    return MoveResponse(
        accepted=True,
        feedback=result.feedback,
        message=feedback_message(result.feedback),
        move=_to_move_out(result.move),
        state=state,
    )


@app.get("/rounds/{round_id}/hints", response_model=HintsOut, summary="Get hints for the current number")
def get_hints(
    round_id: str,
    useful_only: bool = Query(True, description="Only return moves that help"),
    store: RoundStore = Depends(get_store),
) -> HintsOut:
    record = _get_record_or_404(store, round_id)
    current_round = record.round
    if current_round.is_won:
        raise HTTPException(status_code=409, detail="Round finished. No hints available.")

    suggestions = compute_suggestions(current_round.current, current_round.target)
    useful_ops = useful_operation_set(suggestions)
    if useful_only:
        suggestions = useful_suggestions(suggestions, limit=MAX_HINTS_SHOWN)

    return HintsOut(
        current=current_round.current,
        target=current_round.target,
        useful_operations=[op for op in OPERATIONS if op in useful_ops],
        suggestions=[
            SuggestionOut(
                operation=s.operation,
                operand=s.operand,
                result=s.result,
                is_useful=s.is_useful,
                is_winner=(s.result == current_round.target),
            )
            for s in suggestions
        ],
    )


@app.get("/stats", response_model=StatsOut, summary="Get scoreboard")
def get_stats(store: RoundStore = Depends(get_store)) -> StatsOut:
    stats = store.get_stats()
    return StatsOut(
        rounds_started=stats.rounds_started,
        rounds_won=stats.rounds_won,
        total_stars=stats.total_stars,
        average_moves_to_win=stats.average_moves_to_win,
        fastest_win_moves=stats.fastest_win_moves,
        easy_started=stats.easy_started,
        medium_started=stats.medium_started,
        hard_started=stats.hard_started,
        easy_won=stats.easy_won,
        medium_won=stats.medium_won,
        hard_won=stats.hard_won,
    )


@app.post("/stats/reset", summary="Reset the scoreboard")
def reset_stats(store: RoundStore = Depends(get_store)) -> dict:
    store.reset_stats()
    return {"message": "Stats reset."}
