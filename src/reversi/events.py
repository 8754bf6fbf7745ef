"""
Notifications sent out to whoever renders the match.

The Match collects these while processing a placement and hands them to its listeners once the placement is committed.
A rejected placement produces no events.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.reversi.pieces import Piece, Player
from src.reversi.square import Square


@dataclass(frozen=True)
class MatchStarted:
    current_player: Player
    health: dict[Player, int]


@dataclass(frozen=True)
class PiecePlaced:
    square: Square
    piece: Piece


@dataclass(frozen=True)
class PieceFlipped:
    square: Square
    piece: Piece
    new_owner: Player


@dataclass(frozen=True)
class DamageApplied:
    target: Player
    amount: int
    new_health: int


@dataclass(frozen=True)
class TurnChanged:
    current_player: Player


@dataclass(frozen=True)
class GameEnded:
    # None means a draw
    winner: Optional[Player]


MatchEvent = (
    MatchStarted | PiecePlaced | PieceFlipped | DamageApplied | TurnChanged | GameEnded
)
MatchListener = Callable[[MatchEvent], None]
