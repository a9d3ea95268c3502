"""
In-memory store
Holds the active rounds (by id) and a session scoreboard. Nothing is saved;
restart the process and everything is gone.

Rounds are frozen values. A move swaps in the new Round while the lock is
held, so the next move always starts from the latest snapshot.
"""

from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Dict, Optional
from uuid import uuid4

from .rounds import MoveResult, RandomSource, Round, apply_move, initialize_round
from .types import Difficulty


@dataclass
class RoundRecord:
    id: str
    round: Round
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)


# Scoreboard for this process only
@dataclass
class Stats:
    rounds_started: int = 0
    rounds_won: int = 0

    total_stars: int = 0
    total_moves_in_wins: int = 0
    fastest_win_moves: Optional[int] = None

    # per-difficulty counters
    easy_started: int = 0
    medium_started: int = 0
    hard_started: int = 0
    easy_won: int = 0
    medium_won: int = 0
    hard_won: int = 0

    @property
    def average_moves_to_win(self) -> Optional[float]:
        if self.rounds_won == 0:
            return None
        return self.total_moves_in_wins / self.rounds_won


class RoundStore:
    def __init__(self) -> None:
        self._rounds: Dict[str, RoundRecord] = {}
        self._lock = RLock()
        self._stats = Stats()

    def create(self, difficulty: Difficulty, rng: RandomSource) -> RoundRecord:
        new_round = initialize_round(difficulty, rng)
        record = RoundRecord(id=str(uuid4()), round=new_round)

        with self._lock:
            self._rounds[record.id] = record

            self._stats.rounds_started += 1
            if difficulty == "easy":
                self._stats.easy_started += 1
            elif difficulty == "hard":
                self._stats.hard_started += 1
            else:
                self._stats.medium_started += 1
        return record

    def get(self, round_id: str) -> Optional[RoundRecord]:
        with self._lock:
            return self._rounds.get(round_id)

    def move(self, round_id: str, operation: str, operand) -> Optional[MoveResult]:
        """
        Apply one move to a stored round.
        Returns None if the id is unknown, otherwise the MoveResult
        (accepted or rejected; rejected leaves the stored round alone).
        """
        with self._lock:
            record = self._rounds.get(round_id)
            if record is None:
                return None

            was_won = record.round.is_won
            result = apply_move(record.round, operation, operand)

            if not result.accepted:
                return result

            record.round = result.round
            record.updated_at = time()

            # Update scoreboard exactly once, on the winning move
            if not was_won and record.round.is_won:
                self._update_stats_on_win(record.round)

            return result

    def _update_stats_on_win(self, won_round: Round) -> None:
        self._stats.rounds_won += 1

        if won_round.difficulty == "easy":
            self._stats.easy_won += 1
        elif won_round.difficulty == "hard":
            self._stats.hard_won += 1
        else:
            self._stats.medium_won += 1

        moves_used = won_round.move_count
        self._stats.total_stars += won_round.rating
        self._stats.total_moves_in_wins += moves_used
        if self._stats.fastest_win_moves is None or moves_used < self._stats.fastest_win_moves:
            self._stats.fastest_win_moves = moves_used

    def get_stats(self) -> Stats:
        return self._stats

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = Stats()
