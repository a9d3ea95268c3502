"""
Testing in-memory store
- Create a round, apply moves, and check current/history/status and the scoreboard.
"""

from number_quest.store import RoundStore


def test_store_create_and_move_basic(fixed_random):
    store = RoundStore()

    record = store.create("easy", fixed_random(15, 10))
    round_id = record.id

    assert record.round.status == "in_progress"
    assert record.round.current == 10
    assert store.get(round_id) is record

    # Not a win yet: history grows, stored round is replaced
    result = store.move(round_id, "+", "2")
    assert result.accepted
    stored = store.get(round_id).round
    assert stored.current == 12
    assert stored.move_count == 1

    # Rejected move leaves the stored round alone
    result = store.move(round_id, "-", "oops")
    assert result.rejection == "invalid_operand"
    assert store.get(round_id).round is stored

    # Winning move ends the round
    result = store.move(round_id, "+", "3")
    assert result.feedback == "won"
    final = store.get(round_id).round
    assert final.status == "won"
    assert final.rating == 2

    # Nothing more is accepted
    result = store.move(round_id, "+", "1")
    assert result.rejection == "round_already_won"
    assert store.get(round_id).round is final


def test_store_unknown_round():
    store = RoundStore()
    assert store.get("nope") is None
    assert store.move("nope", "+", "1") is None


def test_store_stats_update_on_win(fixed_random):
    store = RoundStore()

    # Round A: easy, win in 1 move (3 stars)
    a = store.create("easy", fixed_random(15, 10))
    store.move(a.id, "+", "5")

    # Round B: hard, win in 4 moves (1 star)
    b = store.create("hard", fixed_random(60, 10))
    store.move(b.id, "+", "10")
    store.move(b.id, "+", "10")
    store.move(b.id, "+", "10")
    store.move(b.id, "+", "20")
    # extra move after the win must not count twice
    store.move(b.id, "+", "1")

    # Round C: medium, started but not finished
    store.create("medium", fixed_random(50, 5))

    stats = store.get_stats()
    assert stats.rounds_started == 3
    assert stats.rounds_won == 2
    assert stats.easy_started == 1
    assert stats.medium_started == 1
    assert stats.hard_started == 1
    assert stats.easy_won == 1
    assert stats.medium_won == 0
    assert stats.hard_won == 1
    assert stats.total_stars == 4
    assert stats.total_moves_in_wins == 5
    assert stats.fastest_win_moves == 1
    assert stats.average_moves_to_win == 2.5


def test_store_reset_stats(fixed_random):
    store = RoundStore()
    store.create("easy", fixed_random(15, 10))
    store.reset_stats()

    stats = store.get_stats()
    assert stats.rounds_started == 0
    assert stats.average_moves_to_win is None
