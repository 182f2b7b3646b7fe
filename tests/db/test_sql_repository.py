"""Unit tests for src/db/sql_repository.py"""

import threading
from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from src.core.shared_types import Status
from src.db.sql_repository import GameModel, SQLGameRepository


@pytest.fixture
def model() -> GameModel:
    """Mock game data: a game halfway through, with a word waiting for its lookup."""
    return GameModel(
        players=[
            {"id": 1, "name": "Ada", "score": 2},
            {"id": 2, "name": "Grace", "score": 1},
        ],
        current_player=2,
        used_words=["plane", "eagle", "elephant"],
        last_word="elephant",
        status=Status.IN_PROGRESS,
        winner=None,
        pending={"token": "abc123", "word": "tiger", "player_id": 2},
        target_score=10,
    )


def test_create_game(db_session_repo: Session, model: GameModel) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model


def test_get_game_by_id(db_session_repo: Session, model: GameModel) -> None:
    """Create a game, then fetch it from db."""
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(model)
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(db_session_repo: Session, model: GameModel) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(model)
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session, model: GameModel) -> None:
    """Update an earlier created record, including the JSON columns."""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)

    model.used_words.append("tiger")
    model.last_word = "tiger"
    model.players[1]["score"] = 2
    model.pending = None
    model.current_player = 1

    updated = repo.update_game(game_id, model)
    assert updated == model

    # A fresh session must see the same thing
    repo.db.expire_all()
    stored = repo.get_game(game_id)
    assert stored is not None
    assert stored.used_words == ["plane", "eagle", "elephant", "tiger"]
    assert stored.players[1]["score"] == 2
    assert stored.pending is None
    assert stored.current_player == 1


def test_update_unknown_game(db_session_repo: Session, model: GameModel) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), model) is None


def test_returned_model_is_detached_from_record(
    db_session_repo: Session, model: GameModel
) -> None:
    """Mutating a fetched model must not leak into the database without update_game."""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)
    fetched = repo.get_game(game_id)
    assert fetched is not None
    fetched.used_words.append("tiger")
    fetched.players[0]["score"] = 99

    again = repo.get_game(game_id)
    assert again is not None
    assert again.used_words == ["plane", "eagle", "elephant"]
    assert again.players[0]["score"] == 2


def test_delete_game(db_session_repo: Session, model: GameModel) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)
    deleted = repo.delete_game(game_id)
    assert deleted == model
    assert repo.get_game(game_id) is None
    assert repo.delete_game(game_id) is None


def test_shared_database(db_session_shared: Session, model: GameModel) -> None:
    """Two repositories on the same engine see each other's games."""
    writer = SQLGameRepository(db_session_shared)
    _, game_id = writer.create_game(model)

    reader_session = Session(bind=db_session_shared.get_bind())
    try:
        reader = SQLGameRepository(reader_session)
        assert reader.get_game(game_id) == model
    finally:
        reader_session.close()
        writer.delete_game(game_id)


def test_no_transaction_left_open(db_session_repo: Session, model: GameModel) -> None:
    """
    Every call is a complete transaction. With one shared connection,
    a transaction left open would be rolled back by whichever session closes next.
    """
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)
    assert not db_session_repo.in_transaction()
    repo.get_game(game_id)
    assert not db_session_repo.in_transaction()
    repo.update_game(game_id, model)
    assert not db_session_repo.in_transaction()
    repo.delete_game(game_id)
    assert not db_session_repo.in_transaction()


def test_calls_hold_the_connection_lock(db_session_repo: Session, model: GameModel) -> None:
    """While another thread holds the connection lock, the repository waits for it."""
    lock = threading.Lock()
    repo = SQLGameRepository(db_session_repo, lock=lock)
    finished = threading.Event()

    def create() -> None:
        repo.create_game(model)
        finished.set()

    with lock:
        worker = threading.Thread(target=create)
        worker.start()
        assert not finished.wait(timeout=0.2)
    worker.join(timeout=5)
    assert finished.is_set()
