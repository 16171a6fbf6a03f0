"""Tracks the grid, the blank and the move counter of a puzzle."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from backend.engine.errors import ReentrantMutationError
from backend.engine.gamegenerator import GameGenerator
from backend.events import Signal
from backend.models.coord import (
    Coord,
    from_index,
    in_bounds,
    is_adjacent,
    is_in_line,
    iter_coords,
    slide_path,
    to_index,
)
from backend.models.tile import Tile

logger = logging.getLogger(__name__)

MIN_SIZE = 2
MAX_SIZE = 10


class PuzzleState:
    """Owns the tiles of one ``size``×``size`` puzzle and every move on it.

    Cells are stored in a dense row-major list holding a :class:`Tile` or
    ``None`` for the blank.  That list is the only record of positions:
    tiles look themselves up in it, and ``empty_cell`` is kept in step by
    :meth:`place`.

    Observers subscribe to ``moves_changed``, ``solved_changed`` and each
    tile's ``coord_changed``.  Callbacks run synchronously and must not
    call back into a mutating method; doing so raises
    :class:`ReentrantMutationError`.
    """

    def __init__(
        self,
        size: int = 4,
        asset_ref: Any = None,
        shuffle: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self.moves_changed = Signal("moves_changed")
        self.solved_changed = Signal("solved_changed")
        self.asset_ref: Any = None
        self._rng = rng or random.Random()
        self._size = MIN_SIZE
        self._cells: list[Tile | None] = []
        self._empty: Coord | None = None
        self._move_count = 0
        self._solved = False
        self._busy = False
        self.initialize(size, asset_ref, shuffle)

    @classmethod
    def from_flat(
        cls,
        size: int,
        flat: Sequence[int],
        asset_ref: Any = None,
        rng: random.Random | None = None,
    ) -> PuzzleState:
        """Create a puzzle from a flat row-major list of tile labels.

        Labels run from 1 to ``size*size - 1`` in solved order; 0 is the
        blank.  Example::

            PuzzleState.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        if not MIN_SIZE <= size <= MAX_SIZE:
            raise ValueError(f"Size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}.")
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        if sorted(flat) != list(range(size * size)):
            raise ValueError(
                f"Tiles must be a permutation of 0..{size * size - 1}, got {list(flat)}."
            )

        state = cls(size, asset_ref, shuffle=False, rng=rng)
        by_label = {t.label: t for t in state.tiles}
        with state._mutating("from_flat"):
            state._cells = [by_label.get(label) for label in flat]
            state._empty = from_index(list(flat).index(0), size)
        if __debug__:
            state.check_invariants()
        return state

    def __repr__(self) -> str:
        return (
            f"PuzzleState(size={self._size}, empty={self._empty}, "
            f"moves={self._move_count}, solved={self._solved})"
        )

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def empty_cell(self) -> Coord | None:
        """Coordinate of the blank, ``None`` after :meth:`teardown`."""
        return self._empty

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def solved(self) -> bool:
        return self._solved

    @property
    def is_initialized(self) -> bool:
        return self._empty is not None

    @property
    def tiles(self) -> tuple[Tile, ...]:
        """Live tiles in current row-major order."""
        return tuple(t for t in self._cells if t is not None)

    def get_tile(self, coord: Coord | tuple[int, int]) -> Tile | None:
        """Tile at *coord*, or ``None`` for the blank or an off-grid cell."""
        coord = Coord(*coord)
        if not self.is_initialized or not in_bounds(coord, self._size):
            return None
        return self._cells[to_index(coord, self._size)]

    def locate(self, tile: Tile) -> Coord | None:
        """Current coordinate of *tile*, ``None`` if it is not on this grid."""
        # Linear scan; the grid never exceeds 10×10.
        try:
            index = self._cells.index(tile)
        except ValueError:
            return None
        return from_index(index, self._size)

    def is_adjacent_to_empty(self, coord: Coord | tuple[int, int]) -> bool:
        return self._empty is not None and is_adjacent(Coord(*coord), self._empty)

    def is_in_line_with_empty(self, coord: Coord | tuple[int, int]) -> bool:
        return self._empty is not None and is_in_line(Coord(*coord), self._empty)

    def test_solved(self) -> bool:
        """True if every tile sits on its solved position; False when torn down."""
        if not self.is_initialized:
            return False
        return all(
            tile is None or tile.true_value == index
            for index, tile in enumerate(self._cells)
        )

    def to_flat(self) -> list[int]:
        """Row-major tile labels with 0 for the blank."""
        return [0 if tile is None else tile.label for tile in self._cells]

    # -- lifecycle ------------------------------------------------------------

    def initialize(
        self, size: int, asset_ref: Any = None, shuffle: bool = True
    ) -> None:
        """Discard the current tiles and build a fresh ``size``×``size`` grid.

        *size* is clamped to ``[MIN_SIZE, MAX_SIZE]``.  Tiles are spawned on
        their solved positions with the blank in the bottom-right corner;
        when *shuffle* is true the board is shuffled straight away.
        """
        with self._mutating("initialize"):
            clamped = max(MIN_SIZE, min(MAX_SIZE, int(size)))
            if clamped != size:
                logger.debug("size %s clamped to %d", size, clamped)
            previous = (self._move_count, self._solved)

            self._release_tiles()
            self._size = clamped
            self.asset_ref = asset_ref
            last = Coord(clamped - 1, clamped - 1)
            self._cells = [
                None if coord == last else Tile(self, coord)
                for coord in iter_coords(clamped)
            ]
            self._empty = last
            self._move_count = 0
            self._solved = False
            logger.debug("initialized %d×%d puzzle", clamped, clamped)

            moved = self._shuffle() if shuffle else []
            self._dispatch(moved, *previous)
        if __debug__:
            self.check_invariants()

    def teardown(self) -> None:
        """Release every tile and leave the puzzle uninitialized."""
        with self._mutating("teardown"):
            previous = (self._move_count, self._solved)
            self._release_tiles()
            self._cells = []
            self._empty = None
            self._move_count = 0
            self._solved = False
            logger.debug("torn down %d×%d puzzle", self._size, self._size)
            self._dispatch([], *previous)

    # -- mutation -------------------------------------------------------------

    def place(self, coord: Coord | tuple[int, int], tile: Tile | None) -> None:
        """Write *tile* (or the blank) into the cell at *coord*.

        Low-level write behind moves and shuffles: it fires no
        notifications and restoring the grid invariants is up to the
        caller.

        Raises:
            IndexError: if *coord* lies outside the grid or the puzzle is
                torn down.
        """
        with self._mutating("place"):
            coord = Coord(*coord)
            if not self.is_initialized:
                raise IndexError("Cannot place on a torn-down puzzle.")
            if not in_bounds(coord, self._size):
                raise IndexError(
                    f"Cell {tuple(coord)} is outside the {self._size}×{self._size} grid."
                )
            self._put(coord, tile)

    def shuffle(self) -> None:
        """Replace the layout with a random solvable, unsolved one.

        Does nothing unless the board holds exactly ``size*size - 1``
        tiles.  Observers only ever see the accepted arrangement.
        """
        with self._mutating("shuffle"):
            if len(self.tiles) != self._size * self._size - 1:
                logger.debug("shuffle skipped: board not initialized")
                return
            previous = (self._move_count, self._solved)
            moved = self._shuffle()
            self._dispatch(moved, *previous)
        if __debug__:
            self.check_invariants()

    def activate(self, coord: Coord | tuple[int, int]) -> bool:
        """Handle a gesture on the tile at *coord*.

        A tile next to the blank swaps with it.  A tile further along the
        blank's row or column pushes every tile between it and the blank
        one step toward the blank.  Either gesture counts as one move.
        Any other cell is ignored.

        Returns True if tiles moved.
        """
        with self._mutating("activate"):
            coord = Coord(*coord)
            if self._empty is None or not in_bounds(coord, self._size):
                return False
            if self.is_adjacent_to_empty(coord):
                path = [coord]
            elif self.is_in_line_with_empty(coord):
                path = slide_path(self._empty, coord)
            else:
                logger.debug("gesture at %s ignored, blank at %s", coord, self._empty)
                return False

            logger.debug("gesture at %s shifts %d tile(s)", coord, len(path))
            previous = (self._move_count, self._solved)
            moved = [self._step(cell) for cell in path]
            self._move_count += 1
            self._solved = self.test_solved()
            self._dispatch(moved, *previous)
        if __debug__:
            self.check_invariants()
        return True

    # -- invariants -----------------------------------------------------------

    def check_invariants(self) -> None:
        """Assert the grid is a consistent bijection; no-op when torn down."""
        if self._empty is None:
            return
        n = self._size
        cells = self._cells
        assert len(cells) == n * n, f"{len(cells)} cells on a {n}×{n} grid"

        blanks = [from_index(i, n) for i, tile in enumerate(cells) if tile is None]
        assert blanks == [self._empty], f"blanks at {blanks}, empty_cell {self._empty}"

        tiles = [tile for tile in cells if tile is not None]
        assert len(set(map(id, tiles))) == len(tiles), "tile stored twice"
        assert sorted(t.true_value for t in tiles) == list(range(n * n - 1)), (
            "true coordinates are not a bijection"
        )
        assert all(t.current_coord is not None for t in tiles), "released tile on grid"

    # -- helpers --------------------------------------------------------------

    @contextmanager
    def _mutating(self, operation: str) -> Iterator[None]:
        if self._busy:
            raise ReentrantMutationError(operation)
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _put(self, coord: Coord, tile: Tile | None) -> None:
        self._cells[to_index(coord, self._size)] = tile
        if tile is None:
            self._empty = coord

    def _step(self, cell: Coord) -> Tile:
        """Slide the tile at *cell* into the adjacent blank and return it."""
        tile = self._cells[to_index(cell, self._size)]
        assert tile is not None and self._empty is not None
        assert is_adjacent(cell, self._empty), f"{cell} not next to {self._empty}"
        self._put(self._empty, tile)
        self._put(cell, None)
        return tile

    def _shuffle(self) -> list[Tile]:
        """Commit a fresh arrangement; returns the tiles whose cell changed."""
        before = {tile: i for i, tile in enumerate(self._cells) if tile is not None}
        arrangement = GameGenerator.draw(self.tiles, self._size, self._rng)

        last = Coord(self._size - 1, self._size - 1)
        for index, tile in enumerate(arrangement):
            self._put(from_index(index, self._size), tile)
        self._put(last, None)
        self._move_count = 0
        self._solved = False
        return [tile for index, tile in enumerate(arrangement) if before[tile] != index]

    def _dispatch(self, moved: list[Tile], moves: int, solved: bool) -> None:
        # The grid and counters are committed before this runs; a raising
        # callback cuts the tile events short but never the counter events.
        try:
            for tile in moved:
                tile.coord_changed.emit()
        finally:
            try:
                if self._move_count != moves:
                    self.moves_changed.emit()
            finally:
                if self._solved != solved:
                    self.solved_changed.emit()

    def _release_tiles(self) -> None:
        for tile in self._cells:
            if tile is not None:
                tile.release()
