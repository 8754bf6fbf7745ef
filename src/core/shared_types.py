"""
Type definitions used across layers
"""

from enum import StrEnum


class Side(StrEnum):
    """The two seats at the table. The domain layer uses its own Player enum (which also has a NONE option for templates)."""

    ONE = "one"
    TWO = "two"


class MatchStatus(StrEnum):
    NOT_STARTED = "not started"
    IN_PROGRESS = "in progress"
    WON = "won"
    DRAW = "draw"


class RejectionReason(StrEnum):
    """Why a placement attempt was turned down. Ordinary outcomes, reported back to the player."""

    INACTIVE_MATCH = "match is not active"
    WRONG_TURN = "not your turn"
    INVALID_COORDINATE = "coordinate outside the board"
    ILLEGAL_PLACEMENT = "square occupied or nothing to flip"
