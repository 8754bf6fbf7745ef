"""Implementation of (Match)Repository that keeps the matches in memory for the lifetime of the process"""

from uuid import UUID, uuid4

from src.reversi.match import Match


class InMemoryMatchRepository:
    """Matches stored in a dictionary keyed by ID"""

    def __init__(self) -> None:
        self._matches: dict[UUID, Match] = {}

    def get_match(self, match_id: UUID) -> Match | None:
        return self._matches.get(match_id)

    def add_match(self, match: Match) -> UUID:
        new_id = uuid4()
        self._matches[new_id] = match
        return new_id

    def delete_match(self, match_id: UUID) -> Match | None:
        return self._matches.pop(match_id, None)

    def __len__(self) -> int:
        return len(self._matches)
