"""Unit tests for src/wordchain/player.py"""

import pytest

from src.wordchain.player import Player


def test_new_player_starts_at_zero() -> None:
    player = Player(id=1, name="Ada")
    assert player.score == 0


def test_award_adds_a_point() -> None:
    player = Player(id=1, name="Ada", score=2)
    delta = player.award()
    assert delta == 1
    assert player.score == 3


@pytest.mark.parametrize(
    "score, expected_score, expected_delta",
    [
        (3, 2, -1),
        (1, 0, -1),
        (0, 0, 0),  # floored: nothing to lose
    ],
)
def test_penalize_is_floored_at_zero(
    score: int, expected_score: int, expected_delta: int
) -> None:
    player = Player(id=2, name="Grace", score=score)
    delta = player.penalize()
    assert player.score == expected_score
    assert delta == expected_delta


def test_record_roundtrip() -> None:
    player = Player(id=2, name="Grace", score=5)
    record = player.to_record()
    assert record == {"id": 2, "name": "Grace", "score": 5}
    assert Player.from_record(record) == player
