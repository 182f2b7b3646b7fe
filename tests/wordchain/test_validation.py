"""Unit tests for src/wordchain/validation.py"""

import pytest

from src.wordchain.game import Game
from src.wordchain.validation import required_first_letter, validate_structure

LENGTH_ERROR = "Word must be at least 4 letters long"
USED_ERROR = "Word has already been used"


@pytest.fixture
def fresh_game() -> Game:
    game = Game.new_game()
    game.start()
    return game


@pytest.fixture
def tiger_game() -> Game:
    """Game in which 'tiger' was the last accepted word."""
    game = Game.new_game()
    game.start()
    game.used_words = ["plane", "eagle", "tiger"]
    game.last_word = "tiger"
    return game


@pytest.mark.parametrize("word", ["", "a", "at", "bat", "BAT"])
def test_short_words_report_length(fresh_game: Game, word: str) -> None:
    assert LENGTH_ERROR in validate_structure(word, fresh_game)


@pytest.mark.parametrize("word", ["bat", "rat", "ox"])
def test_short_words_report_length_whatever_the_chain(tiger_game: Game, word: str) -> None:
    assert LENGTH_ERROR in validate_structure(word, tiger_game)


def test_first_word_can_start_with_anything(fresh_game: Game) -> None:
    assert validate_structure("zebra", fresh_game) == []


def test_chain_violation(tiger_game: Game) -> None:
    """'tiger' ends with 'r', so 'snake' does not continue the chain."""
    assert validate_structure("snake", tiger_game) == ["Word must start with 'R'"]


def test_chain_is_case_insensitive(tiger_game: Game) -> None:
    assert validate_structure("RHINO", tiger_game) == []
    assert validate_structure("Rhino", tiger_game) == []


def test_used_word_is_rejected(tiger_game: Game) -> None:
    tiger_game.last_word = "ride"
    assert validate_structure("Eagle", tiger_game) == [USED_ERROR]


def test_all_violations_are_reported_together(tiger_game: Game) -> None:
    """Used, wrong start, and too short at once: used word 'ego' after 'tiger'."""
    tiger_game.used_words.append("ego")
    violations = validate_structure("ego", tiger_game)
    assert violations == [LENGTH_ERROR, "Word must start with 'R'", USED_ERROR]


def test_validation_does_not_mutate_the_game(tiger_game: Game) -> None:
    before = tiger_game.to_model()
    validate_structure("snake", tiger_game)
    assert tiger_game.to_model() == before


@pytest.mark.parametrize(
    "last_word, expected", [("", ""), ("tiger", "r"), ("PLANE", "e")]
)
def test_required_first_letter(last_word: str, expected: str) -> None:
    assert required_first_letter(last_word) == expected
