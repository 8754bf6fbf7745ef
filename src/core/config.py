"""
Configuration surface of a match.

Validated with pydantic, so a Match never has to double check these values.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_HP = 1000
DEFAULT_COMBO_MULTIPLIER = 0.5
# Reference board is 6x6. Smaller than 4 leaves no room around the starting block to place anything
DEFAULT_BOARD_SIZE = 6
MIN_BOARD_SIZE = 4


class PieceTemplate(BaseModel):
    """Stats used to instantiate a new piece at placement time."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str = "Pawn"
    attack_power: int = Field(default=10, ge=0)
    attribute: int = 0


class MatchConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_hp: int = Field(default=DEFAULT_MAX_HP, gt=0)
    combo_multiplier: float = Field(
        default=DEFAULT_COMBO_MULTIPLIER, ge=0, allow_inf_nan=False
    )
    board_size: int = Field(default=DEFAULT_BOARD_SIZE, ge=MIN_BOARD_SIZE)
    starting_template: PieceTemplate = Field(default_factory=PieceTemplate)
