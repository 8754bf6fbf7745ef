"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and the domain layer (lower) use the model defined here to send/receive a match snapshot.
(Decouples the data model specific to the API layer from the information the domain layer needs to keep track of.)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make MatchModel easier to read
SideName = str
HealthPoints = int


@dataclass
class MatchModel:
    """Transport-safe snapshot of a match used between API, Service and Match layers.

    The board layout is stored row by row (y = 0 first), with one character per square:
    '.' for an empty square, '1' / '2' for a piece owned by player one / two.
    """

    board_layout: list[str]
    health: dict[SideName, HealthPoints]
    piece_count: dict[SideName, int]
    current_player: SideName
    status: str
    winner: Optional[SideName]
