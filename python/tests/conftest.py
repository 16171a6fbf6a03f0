from __future__ import annotations

import random

import pytest

from backend.engine.gamestate import PuzzleState


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def solved3() -> PuzzleState:
    """3×3 board on its goal layout, blank at (2, 2)."""
    return PuzzleState(3, shuffle=False)
