"""
Structural rules for a candidate word.

A word is structurally valid if it is long enough, continues the chain and has not been played before.
Whether it is an actual word is decided later by the dictionary lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.config import MIN_WORD_LENGTH

if TYPE_CHECKING:
    from src.wordchain.game import Game


def validate_structure(word: str, game: Game) -> list[str]:
    """
    Check a word against all structural rules.
    ----
    All rules are checked, so the player sees every problem at once. An empty list means the word is structurally valid.
    Does not care whose turn it is.
    """
    candidate = word.lower()
    violations: list[str] = []

    if len(candidate) < MIN_WORD_LENGTH:
        violations.append(f"Word must be at least {MIN_WORD_LENGTH} letters long")

    required = required_first_letter(game.last_word)
    if required and candidate[:1] != required:
        violations.append(f"Word must start with '{required.upper()}'")

    if candidate in game.used_words:
        violations.append("Word has already been used")

    return violations


def required_first_letter(last_word: str) -> str:
    """Letter the next word has to start with (empty string before the first word of the game)."""
    return last_word[-1:].lower()
