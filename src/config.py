"""
Configuration constants for the word chain backend.

Every setting can be overridden with an environment variable (a local .env file is loaded first, if present).
"""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


# =============================================================================
# Persistence
# =============================================================================

# Games only live as long as the process: the default is an in-memory SQLite database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() == "true"

# =============================================================================
# Dictionary lookup
# =============================================================================

DICTIONARY_API_URL = os.getenv(
    "DICTIONARY_API_URL", "https://api.dictionaryapi.dev/api/v2/entries/en"
)
DICTIONARY_TIMEOUT = float(os.getenv("DICTIONARY_TIMEOUT", "5"))

# =============================================================================
# Game rules
# =============================================================================

MIN_WORD_LENGTH = int(os.getenv("MIN_WORD_LENGTH", "4"))

# Seconds a player gets before the client reports a timeout
TURN_TIME_SECONDS = int(os.getenv("TURN_TIME_SECONDS", "30"))

# First player to reach this score wins. Unset: the game runs until reset.
TARGET_SCORE = _optional_int("TARGET_SCORE")

DEFAULT_PLAYER_NAMES = [
    name.strip()
    for name in os.getenv("DEFAULT_PLAYER_NAMES", "Player 1,Player 2").split(",")
    if name.strip()
]

# =============================================================================
# API
# =============================================================================

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "5000"))
