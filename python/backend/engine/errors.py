"""Exceptions raised for programming defects in the puzzle engine.

Expected edge conditions (clamped sizes, moves that go nowhere, empty-cell
queries) are silent no-ops and never raise.
"""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for puzzle engine errors."""


class ReentrantMutationError(PuzzleError, RuntimeError):
    """A change callback tried to mutate the board while it was mutating."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"{operation}() called while the puzzle is mutating or "
            f"dispatching notifications."
        )
        self.operation = operation


class ShuffleExhaustedError(PuzzleError, RuntimeError):
    """Rejection sampling failed to find an acceptable arrangement."""

    def __init__(self, size: int, attempts: int) -> None:
        super().__init__(
            f"No solvable, unsolved {size}×{size} arrangement found "
            f"after {attempts} draws."
        )
        self.size = size
        self.attempts = attempts
