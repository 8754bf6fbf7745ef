"""The Board implements all rules that affect the grid: where pieces stand, and which of them get flipped by a placement."""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.config import DEFAULT_BOARD_SIZE, PieceTemplate
from src.core.exceptions import InvalidCoordinateError, InvalidRequestError
from src.reversi.pieces import LAYOUT_EMPTY, LAYOUT_TO_PLAYER, Piece, Player
from src.reversi.square import DIRECTIONS, Square

Grid = list[list[Optional[Piece]]]


@dataclass
class Board:
    size: int = DEFAULT_BOARD_SIZE
    grid: Grid = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.initialize()

    @classmethod
    def from_layout(
        cls, rows: list[str], template: Optional[PieceTemplate] = None
    ) -> Self:
        """Construct a board from a text layout.

        One string per row, the first string is y = 0. Within a row, the first character is x = 0.
        * '.' is an empty square
        * '1' is a piece owned by player one
        * '2' is a piece owned by player two
        ex. the starting position on the 6x6 board:
            ......
            ......
            ..21..
            ..12..
            ......
            ......
        Every piece is created from the same template (defaults to the starting Pawn).
        """
        template = template or PieceTemplate()
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise InvalidRequestError(
                f"Board layout must be square. Got rows of length {[len(row) for row in rows]} for {size} rows."
            )

        board = cls(size)
        for y, row in enumerate(rows):
            for x, character in enumerate(row):
                if character == LAYOUT_EMPTY:
                    continue
                if character not in LAYOUT_TO_PLAYER:
                    raise InvalidRequestError(
                        f"Cannot interpret {character!r} at ({x}, {y}). Use one of '{LAYOUT_EMPTY}', {', '.join(repr(c) for c in LAYOUT_TO_PLAYER)}."
                    )
                board.place_at(
                    x, y, Piece.from_template(template, LAYOUT_TO_PLAYER[character])
                )
        return board

    def to_layout(self) -> list[str]:
        """Reverse operation of from_layout"""
        return [self._row_to_layout(y) for y in range(self.size)]

    def _row_to_layout(self, y: int) -> str:
        return "".join(
            piece.to_layout() if piece is not None else LAYOUT_EMPTY
            for piece in (self.grid[x][y] for x in range(self.size))
        )

    # --- GRID STORAGE ---
    def initialize(self) -> None:
        """Clear all slots. Overwrites whatever was on the board before."""
        self.grid = [[None for _ in range(self.size)] for _ in range(self.size)]

    def is_valid_coordinate(self, x: int, y: int) -> bool:
        return Square(x, y).is_within_bounds(self.size)

    def place_at(self, x: int, y: int, piece: Piece) -> None:
        """Write the piece into the slot. No legality check: that is up to the caller (see can_place)."""
        if not self.is_valid_coordinate(x, y):
            raise InvalidCoordinateError(f"Invalid coordinate: ({x}, {y})")
        self.grid[x][y] = piece

    def piece_at(self, x: int, y: int) -> Optional[Piece]:
        """Lenient read: out-of-range simply reads as an empty square."""
        if not self.is_valid_coordinate(x, y):
            return None
        return self.grid[x][y]

    def is_occupied(self, x: int, y: int) -> bool:
        return self.piece_at(x, y) is not None

    # --- CAPTURE LINES ---
    def can_place(self, x: int, y: int, player: Player) -> bool:
        """
        A placement is legal when
        * the square lies on the board (NOTE: checked here, callers do not have to range check first)
        * the square is empty
        * at least one opponent piece gets flipped
        """
        if not self.is_valid_coordinate(x, y):
            return False
        if self.is_occupied(x, y):
            return False
        return len(self.flippable_squares(x, y, player)) > 0

    def flippable_squares(self, x: int, y: int, player: Player) -> list[Square]:
        """
        Squares of the pieces that would flip if 'player' placed a piece at (x, y).
        ----

        Scan outward along each of the 8 directions (in the order of DIRECTIONS).
        Consecutive opponent pieces are collected as candidates; they only count if the run is closed off by one of the player's own pieces.
        Hitting an empty square or running off the board throws the candidates of that direction away.

        NOTE: the starting square itself is never inspected, so the result is the same before and after a piece is put there.
        """
        start = Square(x, y)
        flippable: list[Square] = []
        for dx, dy in DIRECTIONS:
            flippable.extend(self._scan_direction(start, dx, dy, player))
        return flippable

    def flippable_pieces(self, x: int, y: int, player: Player) -> list[Piece]:
        """Same scan as flippable_squares, but hands back the pieces themselves."""
        return [
            self.grid[square.x][square.y]
            for square in self.flippable_squares(x, y, player)
        ]

    def _scan_direction(
        self, start: Square, dx: int, dy: int, player: Player
    ) -> list[Square]:
        """The run of opponent pieces that gets captured in one direction (possibly none)."""
        candidates: list[Square] = []
        current = start.offset(dx, dy)
        while current.is_within_bounds(self.size):
            piece = self.grid[current.x][current.y]

            # empty square: nothing is bracketed in this direction
            if piece is None:
                return []

            # own piece closes off the run (which may be empty if the own piece is directly adjacent)
            if piece.owner == player:
                return candidates

            candidates.append(current)
            current = current.offset(dx, dy)

        # ran off the board without closing the run
        return []

    # --- QUERIES ---
    def legal_placements(self, player: Player) -> list[Square]:
        """All squares the player can place a piece on, read row by row."""
        return [
            Square(x, y)
            for y in range(self.size)
            for x in range(self.size)
            if self.can_place(x, y, player)
        ]

    def has_legal_move(self, player: Player) -> bool:
        return any(
            self.can_place(x, y, player)
            for y in range(self.size)
            for x in range(self.size)
        )

    def count(self, player: Player) -> int:
        """Tally the pieces a player owns on the board"""
        return sum(
            1
            for column in self.grid
            for piece in column
            if piece is not None and piece.owner == player
        )
