"""Grid coordinates and the geometry shared by the board and its tiles."""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import NamedTuple


class Coord(NamedTuple):
    row: int
    col: int


class Direction(StrEnum):
    """Direction a *tile* travels when it slides into the blank."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Offset from the blank to the tile that slides when moving in a direction.
# UP    → tile below the blank moves up
# DOWN  → tile above the blank moves down
# LEFT  → tile right of the blank moves left
# RIGHT → tile left of the blank moves right
_SOURCE_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


# -- row-major indexing -------------------------------------------------------


def to_index(coord: Coord, size: int) -> int:
    """Row-major order value of *coord* on a ``size``×``size`` grid."""
    return coord.row * size + coord.col


def from_index(index: int, size: int) -> Coord:
    return Coord(*divmod(index, size))


def iter_coords(size: int) -> Iterator[Coord]:
    """Yield every coordinate of the grid in row-major scan order."""
    for r in range(size):
        for c in range(size):
            yield Coord(r, c)


def in_bounds(coord: Coord, size: int) -> bool:
    return 0 <= coord.row < size and 0 <= coord.col < size


# -- relations between cells --------------------------------------------------


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


def is_adjacent(a: Coord, b: Coord) -> bool:
    """True for the four orthogonal neighbours only (no diagonals)."""
    return manhattan(a, b) == 1


def is_in_line(a: Coord, b: Coord) -> bool:
    """True if *a* and *b* are distinct cells sharing a row or a column."""
    return a != b and (a.row == b.row or a.col == b.col)


def slide_path(origin: Coord, target: Coord) -> list[Coord]:
    """Cells between *origin* (exclusive) and *target* (inclusive).

    The list starts at the neighbour of *origin* and walks outward, e.g.::

        slide_path(Coord(2, 2), Coord(2, 0)) == [Coord(2, 1), Coord(2, 0)]

    Returns ``[]`` when the two cells are not in line.
    """
    if not is_in_line(origin, target):
        return []
    dr = (target.row > origin.row) - (target.row < origin.row)
    dc = (target.col > origin.col) - (target.col < origin.col)
    steps = manhattan(origin, target)
    return [
        Coord(origin.row + dr * i, origin.col + dc * i) for i in range(1, steps + 1)
    ]


def source_of(blank: Coord, direction: Direction) -> Coord:
    """Cell whose tile would slide into *blank* when moved in *direction*.

    The result may lie outside the grid; callers check bounds.
    """
    dr, dc = _SOURCE_OFFSETS[direction]
    return Coord(blank.row + dr, blank.col + dc)
