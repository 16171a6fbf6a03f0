"""Generates solvable sliding puzzle arrangements."""

from __future__ import annotations

import logging
import random
from bisect import bisect_left, insort
from collections.abc import Sequence

from backend.engine.errors import ShuffleExhaustedError
from backend.models.tile import Tile

logger = logging.getLogger(__name__)

MAX_SHUFFLE_ATTEMPTS = 10_000
_WARN_ATTEMPTS = 100


# -- solvability --------------------------------------------------------------


def count_inversions(values: Sequence[int]) -> int:
    """Number of pairs that appear in *values* in decreasing order."""
    inversions = 0
    seen: list[int] = []
    for v in values:
        inversions += len(seen) - bisect_left(seen, v)
        insort(seen, v)
    return inversions


def is_solvable(values: Sequence[int], size: int, blank_row: int) -> bool:
    """Return True if the arrangement can reach the goal state.

    *values* are the tiles' solved-position order values listed in current
    row-major order with the blank skipped; *blank_row* is the blank's row
    counted from the top.  The goal keeps the blank in the bottom-right
    corner.
    """
    inversions = count_inversions(values)
    if size % 2 == 1:
        return inversions % 2 == 0
    return (inversions + blank_row) % 2 == 1


class GameGenerator:
    """Draws random solvable arrangements by rejection sampling."""

    @staticmethod
    def solved_layout(size: int) -> list[int]:
        """Flat row-major labels of the goal state, 0 for the blank."""
        return [*range(1, size * size), 0]

    @staticmethod
    def draw(
        tiles: Sequence[Tile], size: int, rng: random.Random | None = None
    ) -> list[Tile]:
        """Return *tiles* in a random, solvable, unsolved order.

        Position *i* of the result is the tile for the *i*-th cell in
        row-major order, the bottom-right cell being left blank.  Every draw
        is a fresh uniform permutation; rejected draws are discarded.
        """
        rng = rng or random.Random()
        arrangement = list(tiles)
        goal = list(range(len(arrangement)))

        for attempt in range(1, MAX_SHUFFLE_ATTEMPTS + 1):
            rng.shuffle(arrangement)
            values = [t.true_value for t in arrangement]
            if values != goal and is_solvable(values, size, blank_row=size - 1):
                if attempt > _WARN_ATTEMPTS:
                    logger.warning(
                        "%d×%d shuffle needed %d draws", size, size, attempt
                    )
                logger.debug("accepted %d×%d shuffle after %d draw(s)", size, size, attempt)
                return arrangement

        logger.error(
            "giving up on %d×%d shuffle after %d draws", size, size, MAX_SHUFFLE_ATTEMPTS
        )
        raise ShuffleExhaustedError(size, MAX_SHUFFLE_ATTEMPTS)
