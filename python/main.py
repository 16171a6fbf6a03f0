#!/usr/bin/env python3
"""Sliding Puzzle.

Usage::

    python main.py                  # 4×4, shuffled
    python main.py -s 3             # 3×3
    python main.py --no-shuffle     # start from the solved board
    python main.py --seed 42        # reproducible shuffle
"""

import sys
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamestate import MAX_SIZE, MIN_SIZE  # noqa: E402
from backend.logging_config import setup_logging  # noqa: E402

app = typer.Typer(add_completion=False)


def _run_frontend(size: int, shuffle: bool, seed: Optional[int]) -> None:
    from frontend.cli.rich.app import run

    run(size=size, shuffle=shuffle, seed=seed)


@app.command()
def main(
    size: int = typer.Option(
        4, "-s", "--size",
        min=MIN_SIZE, max=MAX_SIZE, clamp=True,
        envvar="SLIDE_PUZZLE_SIZE",
        help=f"Grid size ({MIN_SIZE}-{MAX_SIZE}); out-of-range values are clamped.",
    ),
    shuffle: bool = typer.Option(
        True, "--shuffle/--no-shuffle",
        help="Shuffle the board before play.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for reproducible shuffles.",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar="SLIDE_PUZZLE_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Sliding Puzzle."""
    setup_logging(log_level)
    _run_frontend(size, shuffle, seed)


if __name__ == "__main__":
    app()
