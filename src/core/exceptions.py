"""
Errors raised across layers.

Move rejections and off-board lookups are NOT errors: they come back as result values
(see src/chess/results.py). These exceptions are for misuse of the API or bad requests.
"""


class GameError(Exception):
    """Base class for everything the application raises on purpose"""


class GameStateError(GameError):
    """The game (or a snapshot of it) is not in a state that allows the requested operation"""


class NotYourTurnError(GameError):
    """A player tried to move while it is the opponent's turn"""


class InvalidRequestError(GameError, ValueError):
    """Request data could not be interpreted (also a ValueError so pydantic reports it as a validation error)"""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested record"""
