"""A player seated at the word chain table"""

from dataclasses import dataclass
from typing import Any, Self

# Points gained / lost on every completed turn
TURN_POINTS = 1


@dataclass
class Player:
    id: int
    name: str
    score: int = 0

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        return cls(id=int(record["id"]), name=record["name"], score=int(record["score"]))

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "score": self.score}

    def award(self, points: int = TURN_POINTS) -> int:
        """Add points and return the change actually applied."""
        self.score += points
        return points

    def penalize(self, points: int = TURN_POINTS) -> int:
        """Subtract points, but never below zero. Returns the (non-positive) change actually applied."""
        new_score = max(0, self.score - points)
        delta = new_score - self.score
        self.score = new_score
        return delta

    def reset_score(self) -> None:
        self.score = 0
