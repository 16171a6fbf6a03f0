"""Tile identity record."""

from __future__ import annotations

from typing import TYPE_CHECKING

from backend.events import Signal
from backend.models.coord import Coord, to_index

if TYPE_CHECKING:
    from backend.engine.gamestate.state import PuzzleState


class Tile:
    """A single puzzle piece.

    A tile knows where it belongs (``true_coord``, fixed for its whole
    lifetime) and asks the board that owns it where it currently is.  The
    board's cell list is the only record of positions, so a tile can never
    disagree with the grid about its own location.
    """

    def __init__(self, owner: PuzzleState, true_coord: Coord) -> None:
        self._owner: PuzzleState | None = owner
        self._size = owner.size
        self._true_coord = Coord(*true_coord)
        self.coord_changed = Signal("coord_changed")

    def __repr__(self) -> str:
        return f"Tile(label={self.label}, true={tuple(self._true_coord)}, current={self.current_coord})"

    # -- identity -------------------------------------------------------------

    @property
    def true_coord(self) -> Coord:
        return self._true_coord

    @property
    def true_value(self) -> int:
        """Row-major order value of the solved position."""
        return to_index(self._true_coord, self._size)

    @property
    def label(self) -> int:
        """Human-facing tile number; the blank is 0 in flat layouts."""
        return self.true_value + 1

    # -- position -------------------------------------------------------------

    @property
    def current_coord(self) -> Coord | None:
        """Current grid position, or ``None`` once the tile is released."""
        if self._owner is None:
            return None
        return self._owner.locate(self)

    @property
    def current_value(self) -> int | None:
        coord = self.current_coord
        return None if coord is None else to_index(coord, self._size)

    @property
    def is_correct(self) -> bool:
        return self.current_coord == self._true_coord

    @property
    def released(self) -> bool:
        return self._owner is None

    # -- lifecycle ------------------------------------------------------------

    def release(self) -> None:
        """Detach from the owning board and drop every subscriber."""
        self._owner = None
        self.coord_changed.clear()
