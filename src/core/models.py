"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Any, Optional

# Type aliases to make GameModel easier to read
PlayerRecord = dict[str, Any]  # {"id": int, "name": str, "score": int}
PendingRecord = dict[str, Any]  # {"token": str, "word": str, "player_id": int}


@dataclass
class GameModel:
    """Transport-safe representation of a word chain game used between API, Service, DB, and Game layers."""

    players: list[PlayerRecord]
    current_player: int
    used_words: list[str]
    last_word: str
    status: str
    winner: Optional[int] = None
    pending: Optional[PendingRecord] = None
    target_score: Optional[int] = None
