"""Orchestration of communication from API router to business logic, dictionary lookup and persistence layers (and the reverse direction)."""

import logging
import threading
from typing import Callable
from uuid import UUID

from src.api.models import (
    ConfirmWordRequest,
    CreateGameRequest,
    GameResponse,
    MeaningResponse,
    PlayerResponse,
    SubmitWordRequest,
    TimeoutRequest,
    TurnResponse,
    ValidateWordRequest,
)
from src.config import TARGET_SCORE, TURN_TIME_SECONDS
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.repository import GameRepository
from src.dictionary.lookup import MeaningLookup
from src.wordchain.game import Game, TurnOutcome

logger = logging.getLogger(__name__)

Transition = Callable[[Game], TurnOutcome]


class GameLocks:
    """One lock per game, so the read-modify-write of a game's state never interleaves with another request for the same game."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[UUID, threading.Lock] = {}

    def for_game(self, game_id: UUID) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(game_id, threading.Lock())

    def discard(self, game_id: UUID) -> None:
        with self._guard:
            self._locks.pop(game_id, None)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


class WordChainService:
    """Orchestration of layers for the word chain game."""

    def __init__(
        self,
        repository: GameRepository,
        dictionary: MeaningLookup,
        locks: GameLocks | None = None,
    ) -> None:
        self.repo = repository
        self.dictionary = dictionary
        # NOTE locks must outlive a single request: share one GameLocks between service instances
        self.locks = locks or GameLocks()

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Seat the players at a new table. The game still needs to be started."""

        target_score = (
            request.target_score if request.target_score is not None else TARGET_SCORE
        )
        new_game = Game.new_game(
            player_names=request.player_names, target_score=target_score
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            "Created game %s for players %s",
            game_id,
            [player["name"] for player in stored_game.players],
        )
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, game_id: UUID) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(game_id)
        return self._create_game_response(game_id, game_model)

    def start_game(self, game_id: UUID) -> GameResponse:
        """(Re)start a game with a clean slate."""
        _, model = self._apply(game_id, lambda game: game.start())
        logger.info("Game %s started", game_id)
        return self._create_game_response(game_id, model)

    def reset_game(self, game_id: UUID) -> GameResponse:
        """Back to the lobby."""
        _, model = self._apply(game_id, lambda game: game.reset())
        logger.info("Game %s reset", game_id)
        return self._create_game_response(game_id, model)

    def submit_word(self, game_id: UUID, request: SubmitWordRequest) -> TurnResponse:
        """
        First half of a turn.
        ----
        A structurally valid word comes back with a ticket: the caller looks up the meaning and then calls confirm_word.
        """
        outcome, model = self._apply(
            game_id, lambda game: game.submit_word(request.word, request.player_id)
        )
        self._log_outcome(game_id, request.player_id, outcome)
        return self._create_turn_response(game_id, model, outcome)

    def confirm_word(self, game_id: UUID, request: ConfirmWordRequest) -> TurnResponse:
        """Second half of a turn, with the verdict of a meaning lookup performed by the caller."""
        outcome, model = self._apply(
            game_id,
            lambda game: game.confirm_word(
                request.word,
                request.player_id,
                request.is_valid_meaning,
                request.ticket,
            ),
        )
        self._log_outcome(game_id, request.player_id, outcome)
        return self._create_turn_response(game_id, model, outcome)

    def play_word(self, game_id: UUID, request: SubmitWordRequest) -> TurnResponse:
        """
        Play a complete turn: submit, look the meaning up ourselves, confirm.
        ----
        The lookup happens between the two transitions, without holding the game lock.
        If the turn moved on in the meantime (e.g. timeout), the confirmation is rejected by the ticket check.
        """
        submitted = self.submit_word(game_id, request)
        if not submitted.valid_structure:
            return submitted

        word = submitted.word or request.word
        result = self.dictionary.lookup(word)
        confirmation = ConfirmWordRequest(
            player_id=request.player_id,
            word=word,
            is_valid_meaning=result.is_valid,
            ticket=submitted.ticket or "",
        )
        response = self.confirm_word(game_id, confirmation)
        response.meaning = result.meaning
        return response

    def timeout(self, game_id: UUID, request: TimeoutRequest) -> TurnResponse:
        """The turn clock of the client ran out."""
        outcome, model = self._apply(
            game_id, lambda game: game.timeout(request.player_id)
        )
        self._log_outcome(game_id, request.player_id, outcome)
        return self._create_turn_response(game_id, model, outcome)

    def check_meaning(self, request: ValidateWordRequest) -> MeaningResponse:
        """Look up a word without touching any game."""
        result = self.dictionary.lookup(request.word)
        return MeaningResponse(
            word=request.word.lower(), is_valid=result.is_valid, meaning=result.meaning
        )

    def delete_game(self, game_id: UUID) -> None:
        """Handle a request to delete a Game record."""
        with self.locks.for_game(game_id):
            deleted = self.repo.delete_game(game_id)
        self.locks.discard(game_id)
        if deleted is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        logger.info("Game %s deleted", game_id)

    # -- Internal helpers --
    def _apply(self, game_id: UUID, transition: Transition) -> tuple[TurnOutcome, GameModel]:
        """Load, transition and store a game while holding its lock. Nothing is stored if the transition raises."""
        with self.locks.for_game(game_id):
            stored_model = self.repo.get_game(game_id)
            if stored_model is None:
                # no lock is kept around for ids that do not exist
                self.locks.discard(game_id)
                raise RepositoryError(f"Game with {game_id=} not found.")
            game = Game.from_model(stored_model)
            outcome = transition(game)
            updated_model = game.to_model()
            self.repo.update_game(game_id, updated_model)
        return outcome, updated_model

    def _log_outcome(self, game_id: UUID, player_id: int, outcome: TurnOutcome) -> None:
        if outcome.errors:
            logger.info(
                "Game %s: player %s rejected (%s)",
                game_id,
                player_id,
                "; ".join(outcome.errors),
            )
        else:
            logger.info("Game %s: player %s: %s", game_id, player_id, outcome.message)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        # NOTE only the pending word is shown: the ticket itself goes to the submitting player only
        return GameResponse(
            game_id=game_id,
            players=[PlayerResponse(**player) for player in model.players],
            current_player=model.current_player,
            used_words=model.used_words,
            last_word=model.last_word,
            status=Status(model.status),
            game_started=model.status != Status.NOT_STARTED,
            game_over=model.status == Status.OVER,
            winner=model.winner,
            awaiting_confirmation=model.pending["word"] if model.pending else None,
            target_score=model.target_score,
            turn_time_seconds=TURN_TIME_SECONDS,
        )

    def _create_turn_response(
        self, game_id: UUID, model: GameModel, outcome: TurnOutcome
    ) -> TurnResponse:
        return TurnResponse(
            success=outcome.success,
            message=outcome.message,
            errors=outcome.errors,
            valid_structure=outcome.valid_structure,
            word=outcome.word,
            ticket=outcome.ticket,
            score_delta=outcome.score_delta,
            game_state=self._create_game_response(game_id, model),
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
