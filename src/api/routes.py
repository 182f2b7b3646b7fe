"""
FastAPI router - REST API for the word chain frontend.

Endpoints:
    POST   /api/games                         Create game (players seated, not started)
    GET    /api/games/{id}                    Get game state
    DELETE /api/games/{id}                    Delete game
    POST   /api/games/{id}/start              Start (or restart) the game
    POST   /api/games/{id}/reset              Back to the lobby
    POST   /api/games/{id}/submit-word        First half of a turn: structure check, returns a ticket
    POST   /api/games/{id}/confirm-word       Second half of a turn: caller supplies the meaning verdict
    POST   /api/games/{id}/play-word          Whole turn, meaning looked up by the server
    POST   /api/games/{id}/timeout            Turn clock ran out
    POST   /api/word/validate                 Dictionary lookup only
    GET    /api/health                        Liveness
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from src.api.models import (
    ConfirmWordRequest,
    CreateGameRequest,
    GameResponse,
    HealthResponse,
    MeaningResponse,
    SubmitWordRequest,
    TimeoutRequest,
    TurnResponse,
    ValidateWordRequest,
)
from src.config import ALLOWED_ORIGINS, LOG_LEVEL
from src.core.exceptions import GameError, RepositoryError
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.dictionary.client import DictionaryClient
from src.dictionary.lookup import MeaningLookup
from src.services.word_chain_service import GameLocks, WordChainService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_service(request: Request, db: Session = Depends(get_db)) -> WordChainService:
    """A service per request, sharing the dictionary client and the game locks of the app."""
    return WordChainService(
        SQLGameRepository(db),
        dictionary=request.app.state.dictionary,
        locks=request.app.state.game_locks,
    )


# --- GAMES ---
@router.post("/games", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(
    request: CreateGameRequest, service: WordChainService = Depends(get_service)
) -> GameResponse:
    return service.create_game(request)


@router.get("/games/{game_id}", response_model=GameResponse)
def get_game_state(
    game_id: UUID, service: WordChainService = Depends(get_service)
) -> GameResponse:
    return service.get_game_state(game_id)


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: UUID, service: WordChainService = Depends(get_service)) -> Response:
    service.delete_game(game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/games/{game_id}/start", response_model=GameResponse)
def start_game(
    game_id: UUID, service: WordChainService = Depends(get_service)
) -> GameResponse:
    return service.start_game(game_id)


@router.post("/games/{game_id}/reset", response_model=GameResponse)
def reset_game(
    game_id: UUID, service: WordChainService = Depends(get_service)
) -> GameResponse:
    return service.reset_game(game_id)


# --- TURNS ---
@router.post("/games/{game_id}/submit-word", response_model=TurnResponse)
def submit_word(
    game_id: UUID,
    request: SubmitWordRequest,
    service: WordChainService = Depends(get_service),
) -> TurnResponse:
    return service.submit_word(game_id, request)


@router.post("/games/{game_id}/confirm-word", response_model=TurnResponse)
def confirm_word(
    game_id: UUID,
    request: ConfirmWordRequest,
    service: WordChainService = Depends(get_service),
) -> TurnResponse:
    return service.confirm_word(game_id, request)


@router.post("/games/{game_id}/play-word", response_model=TurnResponse)
def play_word(
    game_id: UUID,
    request: SubmitWordRequest,
    service: WordChainService = Depends(get_service),
) -> TurnResponse:
    return service.play_word(game_id, request)


@router.post("/games/{game_id}/timeout", response_model=TurnResponse)
def timeout(
    game_id: UUID,
    request: TimeoutRequest,
    service: WordChainService = Depends(get_service),
) -> TurnResponse:
    return service.timeout(game_id, request)


# --- DICTIONARY ---
@router.post("/word/validate", response_model=MeaningResponse)
def validate_word(
    request: ValidateWordRequest, service: WordChainService = Depends(get_service)
) -> MeaningResponse:
    return service.check_meaning(request)


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()


# --- APP ---
def create_app(dictionary: MeaningLookup | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        dictionary: Optional MeaningLookup (the Free Dictionary API client if not provided)
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
    )

    app = FastAPI(title="Word Chain API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.dictionary = dictionary or DictionaryClient()
    app.state.game_locks = GameLocks()

    @app.exception_handler(RepositoryError)
    async def handle_not_found(request: Request, exc: RepositoryError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})

    @app.exception_handler(GameError)
    async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})

    app.include_router(router)
    return app
