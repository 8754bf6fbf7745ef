"""
Exceptions raised across the layers.

NOTE: A rejected placement is NOT an exception. The Match reports it through the PlacementResult.
These exceptions are reserved for misuse of an API (writing outside the board, unknown match ID, malformed requests).
"""


class GameError(Exception):
    """Base class: the service/API layer can catch this one to cover everything raised by the game."""


class InvalidCoordinateError(GameError):
    """Attempted to write to a square outside the board."""


class MatchStateError(GameError):
    """The match is not in a state that allows the requested operation."""


class RepositoryError(GameError):
    """Something went wrong looking up / storing a match."""


class MatchNotFoundError(RepositoryError):
    """No match recorded under the given ID."""


class InvalidRequestError(GameError):
    """Request could be parsed, but the contents make no sense."""
