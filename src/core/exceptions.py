"""Custom exceptions shared across layers. Every exception raised on purpose by this project derives from GameError."""


class GameError(Exception):
    """Top-level exception for anything the game backend raises on purpose."""


class GameStateError(GameError):
    """The game is in a state that does not allow the requested action."""


class GameNotInProgressError(GameStateError):
    """Turn transition attempted before the game started or after it ended."""


class NotYourTurnError(GameError):
    """A player attempted to act while it is the other player's turn."""


class InvalidTicketError(GameError):
    """A word confirmation did not present the ticket issued for the pending word."""


class InvalidRequestError(GameError):
    """Input received from the API layer could not be interpreted."""


class RepositoryError(GameError):
    """Requested record could not be found / stored."""
