"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.core.config import MatchConfig, PieceTemplate
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import MatchStatus, RejectionReason, Side

Coordinate = tuple[int, int]


# --- REQUEST MODELS ---
class CreateMatchRequest(BaseModel):
    config: MatchConfig = Field(default_factory=MatchConfig)


class GetMatchRequest(BaseModel):
    match_id: UUID


class RestartMatchRequest(BaseModel):
    match_id: UUID


class DeleteMatchRequest(BaseModel):
    match_id: UUID


class LegalPlacementsRequest(BaseModel):
    match_id: UUID
    player: Side


class PlacePieceRequest(BaseModel):
    """NOTE: coordinates outside the board are not rejected here. The match reports those as a rejected placement."""

    match_id: UUID
    player: Side
    x: int
    y: int
    # falls back to the match's starting template
    piece: Optional[PieceTemplate] = None

    @field_validator("piece")
    @classmethod
    def validate_piece(cls, value: Optional[PieceTemplate]) -> Optional[PieceTemplate]:
        if value is None:
            return value

        if not value.name.strip():
            raise InvalidRequestError("A piece needs a (non-blank) name.")
        return value


# --- RESPONSE MODELS ---
class MatchResponse(BaseModel):
    match_id: UUID
    board_layout: list[str]
    health: dict[Side, int]
    piece_count: dict[Side, int]
    current_player: Side
    status: MatchStatus
    winner: Optional[Side]


class PlacementResponse(BaseModel):
    match_id: UUID
    accepted: bool
    reason: Optional[RejectionReason]
    flipped: list[Coordinate]
    damage: int
    match: MatchResponse


class LegalPlacementsResponse(BaseModel):
    match_id: UUID
    player: Side
    placements: list[Coordinate]
