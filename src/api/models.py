"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status


def _validate_word(value: str) -> str:
    """Words are plain letters. Surrounding whitespace is forgiven."""
    word = value.strip()
    if not word.isalpha():
        raise InvalidRequestError(f"Cannot interpret {value!r} as a word: letters only.")
    return word


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_names: Optional[list[str]] = None
    target_score: Optional[int] = None

    @field_validator("player_names")
    @classmethod
    def validate_player_names(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return value

        names = [name.strip() for name in value]
        if any(name == "" for name in names):
            raise InvalidRequestError("Player names cannot be empty.")
        return names

    @field_validator("target_score")
    @classmethod
    def validate_target_score(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise InvalidRequestError(f"Target score must be positive. Got {value}.")
        return value


class SubmitWordRequest(BaseModel):
    player_id: int
    word: str

    @field_validator("word")
    @classmethod
    def validate_word(cls, value: str) -> str:
        return _validate_word(value)


class ConfirmWordRequest(BaseModel):
    player_id: int
    word: str
    is_valid_meaning: bool
    ticket: str

    @field_validator("word")
    @classmethod
    def validate_word(cls, value: str) -> str:
        return _validate_word(value)


class TimeoutRequest(BaseModel):
    player_id: int


class ValidateWordRequest(BaseModel):
    word: str

    @field_validator("word")
    @classmethod
    def validate_word(cls, value: str) -> str:
        return _validate_word(value)


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    id: int
    name: str
    score: int


class GameResponse(BaseModel):
    game_id: UUID
    players: list[PlayerResponse]
    current_player: int
    used_words: list[str]
    last_word: str
    status: Status
    game_started: bool
    game_over: bool
    winner: Optional[int]
    awaiting_confirmation: Optional[str]
    target_score: Optional[int]
    turn_time_seconds: int


class TurnResponse(BaseModel):
    success: bool
    message: str
    errors: list[str] = []
    valid_structure: bool = False
    word: Optional[str] = None
    ticket: Optional[str] = None
    meaning: Optional[str] = None
    score_delta: int = 0
    game_state: GameResponse


class MeaningResponse(BaseModel):
    word: str
    is_valid: bool
    meaning: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
