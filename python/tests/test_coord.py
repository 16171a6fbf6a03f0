"""Coordinate helpers."""

from __future__ import annotations

import pytest

from backend.models.coord import (
    Coord,
    Direction,
    from_index,
    in_bounds,
    is_adjacent,
    is_in_line,
    iter_coords,
    slide_path,
    source_of,
    to_index,
)


def test_row_major_index_round_trip() -> None:
    coords = list(iter_coords(3))
    assert coords[0] == Coord(0, 0)
    assert coords[1] == Coord(0, 1)
    assert coords[-1] == Coord(2, 2)
    assert [to_index(c, 3) for c in coords] == list(range(9))
    assert from_index(5, 3) == Coord(1, 2)


@pytest.mark.parametrize(
    "coord, expected",
    [((0, 0), True), ((3, 3), True), ((-1, 0), False), ((0, 4), False), ((4, 4), False)],
)
def test_in_bounds(coord: tuple[int, int], expected: bool) -> None:
    assert in_bounds(Coord(*coord), 4) is expected


@pytest.mark.parametrize(
    "other, adjacent, in_line",
    [
        ((1, 2), True, True),
        ((3, 2), True, True),
        ((2, 1), True, True),
        ((2, 3), True, True),
        ((0, 2), False, True),
        ((2, 0), False, True),
        ((1, 1), False, False),
        ((3, 3), False, False),
        ((2, 2), False, False),
    ],
)
def test_neighbour_relations(
    other: tuple[int, int], adjacent: bool, in_line: bool
) -> None:
    centre = Coord(2, 2)
    assert is_adjacent(Coord(*other), centre) is adjacent
    assert is_in_line(Coord(*other), centre) is in_line


@pytest.mark.parametrize(
    "origin, target, expected",
    [
        ((2, 2), (2, 0), [(2, 1), (2, 0)]),
        ((0, 0), (0, 3), [(0, 1), (0, 2), (0, 3)]),
        ((3, 1), (0, 1), [(2, 1), (1, 1), (0, 1)]),
        ((0, 1), (1, 1), [(1, 1)]),
        ((0, 0), (1, 1), []),
        ((1, 1), (1, 1), []),
    ],
)
def test_slide_path_walks_outward_from_origin(
    origin: tuple[int, int], target: tuple[int, int], expected: list[tuple[int, int]]
) -> None:
    assert slide_path(Coord(*origin), Coord(*target)) == expected


def test_source_of_points_at_the_tile_that_moves() -> None:
    blank = Coord(1, 1)
    assert source_of(blank, Direction.UP) == Coord(2, 1)
    assert source_of(blank, Direction.DOWN) == Coord(0, 1)
    assert source_of(blank, Direction.LEFT) == Coord(1, 2)
    assert source_of(blank, Direction.RIGHT) == Coord(1, 0)
