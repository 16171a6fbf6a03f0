"""A single play session: one puzzle, its play clock, and keyboard moves."""

from __future__ import annotations

import random
import time
from collections.abc import Sequence
from typing import Any

from backend.engine.gamestate import PuzzleState
from backend.models.coord import Coord, Direction, in_bounds, source_of


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(
        self,
        size: int,
        asset_ref: Any = None,
        shuffle: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self._attach(PuzzleState(size, asset_ref, shuffle=shuffle, rng=rng))

    @classmethod
    def from_flat(cls, size: int, flat: Sequence[int]) -> GamePlay:
        """Create a session on a prepared layout (see ``PuzzleState.from_flat``)."""
        obj = object.__new__(cls)
        obj._attach(PuzzleState.from_flat(size, flat))
        return obj

    @property
    def size(self) -> int:
        return self.state.size

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- movement -------------------------------------------------------------

    def activate(self, coord: Coord | tuple[int, int]) -> bool:
        """Forward a gesture at *coord* to the puzzle."""
        return self.state.activate(coord)

    def move(self, direction: Direction) -> bool:
        """Slide the tile next to the blank in *direction*.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid.
        """
        blank = self.state.empty_cell
        if blank is None:
            return False
        source = source_of(blank, direction)
        if not in_bounds(source, self.state.size):
            return False
        return self.state.activate(source)

    def restart(self, shuffle: bool = True) -> None:
        """Rebuild the puzzle at the same size and restart the clock."""
        self.state.initialize(self.state.size, self.state.asset_ref, shuffle=shuffle)
        self._reset_clock()

    def reshuffle(self) -> None:
        """Shuffle the current tiles in place and restart the clock."""
        self.state.shuffle()
        self._reset_clock()

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.solved

    # -- helpers --------------------------------------------------------------

    def _attach(self, state: PuzzleState) -> None:
        self._reset_clock()
        self.state = state
        self.state.solved_changed.subscribe(self._on_solved_changed)

    def _reset_clock(self) -> None:
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    def _on_solved_changed(self) -> None:
        if self.state.solved:
            self.pause()
        else:
            self.resume()
