"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Offsets used to scan for capture lines, in the fixed scan order:
# upper-left, up, upper-right, left, right, lower-left, down, lower-right
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@dataclass(frozen=True)
class Square:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Square:
        return Square(self.x + dx, self.y + dy)

    def is_within_bounds(self, size: int) -> bool:
        return (0 <= self.x < size) and (0 <= self.y < size)
