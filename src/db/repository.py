"""
Storage seam of the service layer: where word chain games live between two requests.

SQLGameRepository (sql_repository.py) is the implementation the API uses. The service tests use a dictionary-backed fake.
"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Games keyed by UUID. Each call stands on its own: no transaction spans two calls."""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Snapshot of a game (players, scores, used words, pending ticket), or None for an unknown id."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a freshly seated game. The repository hands out the game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the whole state of a game after a transition. None if the game does not exist."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop a game and return its last state. None if there was nothing to drop."""
        ...
