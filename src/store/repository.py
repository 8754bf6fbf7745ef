"""Protocol repository (can implement later for SQL Alchemy / simple file storage etc.)"""

from typing import Protocol
from uuid import UUID

from src.reversi.match import Match


class MatchRepository(Protocol):
    """Keeps every running match apart: one Match (with its own board, health and turn) per ID."""

    def get_match(self, match_id: UUID) -> Match | None:
        """Get match by ID, if record exists."""
        ...

    def add_match(self, match: Match) -> UUID:
        """Store a new match and return the newly created match ID."""
        ...

    def delete_match(self, match_id: UUID) -> Match | None:
        """Remove a match's record."""
        ...
