"""Orchestration of communication from the presentation layer to the rules engine (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateMatchRequest,
    DeleteMatchRequest,
    GetMatchRequest,
    LegalPlacementsRequest,
    LegalPlacementsResponse,
    MatchResponse,
    PlacePieceRequest,
    PlacementResponse,
    RestartMatchRequest,
)
from src.core.exceptions import MatchNotFoundError, MatchStateError
from src.core.models import MatchModel
from src.core.shared_types import Side
from src.reversi.match import Match
from src.reversi.pieces import Player
from src.store.repository import MatchRepository

logger = logging.getLogger(__name__)


class MatchService:
    """Orchestration of layers for the board game. Every match lives in the repository on its own, nothing is shared between them."""

    def __init__(self, repository: MatchRepository) -> None:
        self.repo = repository

    # -- Presentation layer calls ---
    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        """Create and start a new match with the requested settings."""
        match = Match.new_match(request.config)
        match_id = self.repo.add_match(match)
        logger.info("Created match %s", match_id)
        return self._create_match_response(match_id, match.to_model())

    def get_match_state(self, request: GetMatchRequest) -> MatchResponse:
        """
        Retrieve current match state.
        ----
        Used by the presentation layer to (re)render the board.
        """
        match = self._fetch_match(request.match_id)
        return self._create_match_response(request.match_id, match.to_model())

    def restart_match(self, request: RestartMatchRequest) -> MatchResponse:
        """Start over: full health, fresh board, player one to move."""
        match = self._fetch_match(request.match_id)
        match.start_game()
        logger.info("Restarted match %s", request.match_id)
        return self._create_match_response(request.match_id, match.to_model())

    def legal_placements(
        self, request: LegalPlacementsRequest
    ) -> LegalPlacementsResponse:
        """Squares the player could place a piece on (used to highlight them)."""
        match = self._fetch_match(request.match_id)
        if not match.is_active:
            raise MatchStateError(f"Match is not in progress. status: {match.status}")

        squares = match.legal_placements(Player[request.player.name])
        return LegalPlacementsResponse(
            match_id=request.match_id,
            player=request.player,
            placements=[(square.x, square.y) for square in squares],
        )

    def place_piece(self, request: PlacePieceRequest) -> PlacementResponse:
        """Placement attempt. A rejected placement is a normal response (accepted=False), not an error."""
        match = self._fetch_match(request.match_id)
        template = request.piece or match.config.starting_template

        result = match.try_place_piece(
            request.x, request.y, Player[request.player.name], template
        )
        return PlacementResponse(
            match_id=request.match_id,
            accepted=result.accepted,
            reason=result.reason,
            flipped=[(square.x, square.y) for square in result.flipped],
            damage=result.damage,
            match=self._create_match_response(request.match_id, match.to_model()),
        )

    def delete_match(self, request: DeleteMatchRequest) -> None:
        """Handle a request to delete a Match record."""
        self._fetch_match(request.match_id)
        self.repo.delete_match(request.match_id)
        logger.info("Deleted match %s", request.match_id)

    # -- Internal helpers --
    def _create_match_response(self, match_id: UUID, model: MatchModel) -> MatchResponse:
        """Convert info in MatchModel to a MatchResponse (for match with given ID.)"""
        return MatchResponse(
            match_id=match_id,
            board_layout=model.board_layout,
            health={Side(side): hp for side, hp in model.health.items()},
            piece_count={
                Side(side): count for side, count in model.piece_count.items()
            },
            current_player=Side(model.current_player),
            status=model.status,
            winner=Side(model.winner) if model.winner else None,
        )

    def _fetch_match(self, match_id: UUID) -> Match:
        """Attempt to find the match in the repository and raise error if it fails."""
        match = self.repo.get_match(match_id)
        if match is None:
            raise MatchNotFoundError(f"Match with {match_id=} not found.")
        return match
