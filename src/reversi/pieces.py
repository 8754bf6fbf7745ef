"""Defines the players and the pieces they place"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.core.config import PieceTemplate


class Player(Enum):
    """Owner of a piece. NONE only appears on templates, never on a piece that stands on the board."""

    NONE = 0
    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> "Player":
        if self == Player.ONE:
            return Player.TWO
        if self == Player.TWO:
            return Player.ONE
        return Player.NONE


ACTIVE_PLAYERS: tuple[Player, ...] = (Player.ONE, Player.TWO)

LAYOUT_EMPTY = "."
PLAYER_TO_LAYOUT: dict[Player, str] = {Player.ONE: "1", Player.TWO: "2"}
LAYOUT_TO_PLAYER: dict[str, Player] = {
    value: key for key, value in PLAYER_TO_LAYOUT.items()
}


@dataclass
class Piece:
    id: int
    name: str
    attack_power: int
    attribute: int
    owner: Player = Player.NONE

    @classmethod
    def from_template(cls, template: PieceTemplate, owner: Player) -> Self:
        """Every placement creates a fresh piece. The template itself is never put on the board."""
        return cls(
            id=template.id,
            name=template.name,
            attack_power=template.attack_power,
            attribute=template.attribute,
            owner=owner,
        )

    def set_owner(self, new_owner: Player) -> None:
        """The only mutation a piece goes through: being flipped to the other side."""
        self.owner = new_owner

    def to_layout(self) -> str:
        return PLAYER_TO_LAYOUT.get(self.owner, LAYOUT_EMPTY)
