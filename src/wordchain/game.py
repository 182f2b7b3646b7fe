"""
The Game class is the entrypoint into the domain layer for the service layer.
It holds the state of one word chain game and owns every turn transition: start / reset, submitting a word,
confirming a word once its meaning has been looked up, and timing out.

A word submission is split in two: submit_word checks the structure of the word, and (if fine) hands out a ticket.
The dictionary lookup then happens outside of the domain layer, and confirm_word completes the turn when the ticket is presented.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Self
from uuid import uuid4

from src.config import DEFAULT_PLAYER_NAMES
from src.core.exceptions import (
    GameNotInProgressError,
    GameStateError,
    InvalidTicketError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Status
from src.wordchain.player import Player
from src.wordchain.validation import validate_structure

MIN_PLAYERS = 2

INVALID_WORD_MESSAGE = "Invalid word! Lost 1 point."
VALID_STRUCTURE_MESSAGE = "Word structure is valid. Please validate meaning."
WORD_ACCEPTED_MESSAGE = "Word accepted! +1 point"
INVALID_MEANING_MESSAGE = "Invalid word meaning! -1 point"
TIMEOUT_MESSAGE = "Time out! -1 point."


@dataclass(frozen=True)
class PendingWord:
    """Ticket binding a structurally valid word to the player who submitted it, until the turn is confirmed."""

    token: str
    word: str
    player_id: int

    @classmethod
    def issue(cls, word: str, player_id: int) -> Self:
        return cls(token=uuid4().hex, word=word.lower(), player_id=player_id)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        return cls(
            token=record["token"],
            word=record["word"],
            player_id=int(record["player_id"]),
        )

    def to_record(self) -> dict[str, Any]:
        return {"token": self.token, "word": self.word, "player_id": self.player_id}


@dataclass
class TurnOutcome:
    """What happened during a transition. The service passes this on to the API layer."""

    success: bool
    message: str
    errors: list[str] = field(default_factory=list)
    valid_structure: bool = False
    word: Optional[str] = None
    ticket: Optional[str] = None
    score_delta: int = 0


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    players: list[Player]
    current_player: int
    used_words: list[str]
    last_word: str
    status: Status
    winner: Optional[int] = None
    pending: Optional[PendingWord] = None
    target_score: Optional[int] = None

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in set(Status):
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(Status)}"
            )
        players = [Player.from_record(record) for record in model.players]
        cls._validate_players(players)
        seats = {player.id for player in players}
        if model.current_player not in seats:
            raise GameStateError(
                f"Current player {model.current_player} is not seated. Seated: {sorted(seats)}."
            )
        pending = PendingWord.from_record(model.pending) if model.pending else None
        if pending is not None and pending.player_id not in seats:
            raise GameStateError(
                f"Pending word belongs to unknown player {pending.player_id}."
            )

        return cls(
            players=players,
            current_player=model.current_player,
            used_words=list(model.used_words),
            last_word=model.last_word,
            status=Status(model.status),
            winner=model.winner,
            pending=pending,
            target_score=model.target_score,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            players=[player.to_record() for player in self.players],
            current_player=self.current_player,
            used_words=list(self.used_words),
            last_word=self.last_word,
            status=self.status.value,
            winner=self.winner,
            pending=self.pending.to_record() if self.pending else None,
            target_score=self.target_score,
        )

    @classmethod
    def new_game(
        cls,
        player_names: Optional[list[str]] = None,
        target_score: Optional[int] = None,
    ) -> Self:
        """Seat the players (ids 1, 2, ... in seating order). The game waits in the lobby until it is started."""

        names = player_names or DEFAULT_PLAYER_NAMES
        players = [Player(id=seat, name=name) for seat, name in enumerate(names, start=1)]
        cls._validate_players(players)
        if target_score is not None and target_score < 1:
            raise GameStateError(f"Target score must be positive. Got {target_score}.")

        return cls(
            players=players,
            current_player=players[0].id,
            used_words=[],
            last_word="",
            status=Status.NOT_STARTED,
            target_score=target_score,
        )

    @property
    def game_started(self) -> bool:
        return self.status != Status.NOT_STARTED

    @property
    def game_over(self) -> bool:
        return self.status == Status.OVER

    def start(self) -> TurnOutcome:
        """Start over with a clean slate. Allowed at any moment."""
        self._clear_board(Status.IN_PROGRESS)
        return TurnOutcome(success=True, message="Game started")

    def reset(self) -> TurnOutcome:
        """Same clean slate as start, but back to the lobby."""
        self._clear_board(Status.NOT_STARTED)
        return TurnOutcome(success=True, message="Game reset")

    def submit_word(self, word: str, player_id: int) -> TurnOutcome:
        """
        First half of a turn: check the structure of the word.
        -----

        1. game must be in progress, and it must be your turn
        2. only one word can wait for a dictionary lookup at a time
        3. structurally invalid: lose a point, turn passes to the next player (turn is complete)
        4. structurally valid: hand out a ticket. Nothing else changes until confirm_word is called.
        """
        self._assert_in_progress()
        self._assert_your_turn(player_id)
        if self.pending is not None:
            raise GameStateError(
                f"Word {self.pending.word!r} is still waiting for confirmation."
            )

        violations = validate_structure(word, self)
        if violations:
            delta = self._get_player(player_id).penalize()
            self._advance_turn()
            return TurnOutcome(
                success=False,
                message=INVALID_WORD_MESSAGE,
                errors=violations,
                score_delta=delta,
            )

        self.pending = PendingWord.issue(word, player_id)
        return TurnOutcome(
            success=True,
            message=VALID_STRUCTURE_MESSAGE,
            valid_structure=True,
            word=self.pending.word,
            ticket=self.pending.token,
        )

    def confirm_word(
        self, word: str, player_id: int, is_valid_meaning: bool, ticket: str
    ) -> TurnOutcome:
        """
        Second half of a turn, once the meaning of the word has been looked up.
        -----

        NOTE the verdict is taken as given. Whoever calls this decides whether the word has a meaning.
        """
        self._assert_in_progress()
        self._assert_your_turn(player_id)
        self._assert_ticket(word, player_id, ticket)

        player = self._get_player(player_id)
        word_lower = word.lower()
        if is_valid_meaning:
            delta = player.award()
            self.used_words.append(word_lower)
            self.last_word = word_lower
        else:
            delta = player.penalize()

        self.pending = None
        self._update_game_status(player)
        self._advance_turn()
        return TurnOutcome(
            success=is_valid_meaning,
            message=WORD_ACCEPTED_MESSAGE if is_valid_meaning else INVALID_MEANING_MESSAGE,
            word=word_lower,
            score_delta=delta,
        )

    def timeout(self, player_id: int) -> TurnOutcome:
        """The turn timer ran out. A word still waiting for its lookup is forfeited."""
        self._assert_in_progress()
        self._assert_your_turn(player_id)

        delta = self._get_player(player_id).penalize()
        self.pending = None
        self._advance_turn()
        return TurnOutcome(success=False, message=TIMEOUT_MESSAGE, score_delta=delta)

    # -- PRIVATE HELPERS ---
    @staticmethod
    def _validate_players(players: list[Player]) -> None:
        if len(players) < MIN_PLAYERS:
            raise GameStateError(
                f"A game needs at least {MIN_PLAYERS} players. Got {len(players)}."
            )
        ids = [player.id for player in players]
        if len(set(ids)) != len(ids):
            raise GameStateError(f"Player ids must be unique. Got {ids}.")

    def _get_player(self, player_id: int) -> Player:
        return next(player for player in self.players if player.id == player_id)

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameNotInProgressError(f"Game not in progress. status: {self.status}")

    def _assert_your_turn(self, player_id: int) -> None:
        """Only the turn player can submit, confirm, or time out."""
        if player_id != self.current_player:
            raise NotYourTurnError(
                f"Not your turn. Waiting for player {self.current_player}."
            )

    def _assert_ticket(self, word: str, player_id: int, ticket: str) -> None:
        """The confirmation must match the word that was handed a ticket, for the same player."""
        pending = self.pending
        if pending is None:
            raise InvalidTicketError("No word is waiting for confirmation.")
        if (
            ticket != pending.token
            or word.lower() != pending.word
            or player_id != pending.player_id
        ):
            raise InvalidTicketError(
                f"Ticket does not match the word waiting for confirmation: {pending.word!r}."
            )

    def _advance_turn(self) -> None:
        """Next player in seating order (a simple toggle with two players)."""
        seats = [player.id for player in self.players]
        next_seat = (seats.index(self.current_player) + 1) % len(seats)
        self.current_player = seats[next_seat]

    def _update_game_status(self, player: Player) -> None:
        """Only the player who just scored can have reached the target."""
        if self.target_score is not None and player.score >= self.target_score:
            self.status = Status.OVER
            self.winner = player.id

    def _clear_board(self, status: Status) -> None:
        for player in self.players:
            player.reset_score()
        self.current_player = self.players[0].id
        self.used_words = []
        self.last_word = ""
        self.status = status
        self.winner = None
        self.pending = None
