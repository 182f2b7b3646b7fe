"""Implementation of (Game)Repository using SQLAlchemy"""

import threading
from contextlib import AbstractContextManager
from copy import deepcopy
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame

# The default in-memory database is a single SQLite connection shared by every thread (StaticPool).
# Every transaction on it must run start to finish without another thread using the connection.
connection_lock = threading.Lock()


class SQLGameRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy

    NOTE each method is one complete transaction, run while holding the connection lock.
    No transaction is left open between calls, so closing the Session never touches the connection.
    """

    def __init__(
        self,
        db_session: Session,
        lock: AbstractContextManager = connection_lock,
    ) -> None:
        self.db = db_session
        self.lock = lock

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self.lock, self.db.begin():
            game_db = self._fetch_game(game_id)
            return self._to_model(game_db) if game_db else None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        with self.lock, self.db.begin():
            game_db = DBGame(
                id=new_id,
                players=deepcopy(game.players),
                current_player=game.current_player,
                used_words=list(game.used_words),
                last_word=game.last_word,
                status=game.status,
                winner=game.winner,
                pending=deepcopy(game.pending),
                target_score=game.target_score,
            )
            self.db.add(game_db)
            self.db.flush()
            return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the state of an existing record."""
        with self.lock, self.db.begin():
            game_db = self._fetch_game(game_id)
            if not game_db:
                return None
            # NOTE assign new objects: SQLAlchemy does not track in-place changes of JSON columns
            game_db.players = deepcopy(game.players)
            game_db.current_player = game.current_player
            game_db.used_words = list(game.used_words)
            game_db.last_word = game.last_word
            game_db.status = game.status
            game_db.winner = game.winner
            game_db.pending = deepcopy(game.pending)
            game_db.target_score = game.target_score
            self.db.flush()
            return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        with self.lock, self.db.begin():
            game_db = self._fetch_game(game_id)
            if not game_db:
                return None
            game_model = self._to_model(game_db)
            self.db.delete(game_db)
            return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            players=deepcopy(game_db.players),
            current_player=game_db.current_player,
            used_words=list(game_db.used_words),
            last_word=game_db.last_word,
            status=game_db.status,
            winner=game_db.winner,
            pending=deepcopy(game_db.pending),
            target_score=game_db.target_score,
        )
