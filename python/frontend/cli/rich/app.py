"""Rich terminal frontend: draws the puzzle and feeds it gestures.

The view is a plain observer of the puzzle: it subscribes to the solved and
per-tile coordinate signals and reads state back through the public
queries only.  Arrow keys steer a cursor; activating a cell sends a
gesture, so a single keypress can slide a whole row or column.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from functools import partial

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.models.coord import Coord, Direction, in_bounds
from backend.models.tile import Tile
from frontend.cli.input_handler import get_key

logger = logging.getLogger(__name__)

console = Console()

_CURSOR_STEPS: dict[str, tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


# -- view ---------------------------------------------------------------------


class BoardView:
    """Watches a :class:`GamePlay` and renders its puzzle."""

    def __init__(self, game: GamePlay) -> None:
        self.game = game
        self.cursor = Coord(0, 0)
        self.status = ""
        self.moved: set[Tile] = set()
        self._tile_callbacks: dict[Tile, Callable[[], None]] = {}
        game.state.solved_changed.subscribe(self._on_solved_changed)
        self.watch_tiles()

    def watch_tiles(self) -> None:
        """(Re)subscribe to every tile; call after the puzzle is rebuilt."""
        for tile, callback in self._tile_callbacks.items():
            tile.coord_changed.unsubscribe(callback)
        self._tile_callbacks = {}
        self.moved.clear()
        for tile in self.game.state.tiles:
            callback = partial(self._on_tile_moved, tile)
            tile.coord_changed.subscribe(callback)
            self._tile_callbacks[tile] = callback
        self.cursor = Coord(
            min(self.cursor.row, self.game.size - 1),
            min(self.cursor.col, self.game.size - 1),
        )

    def detach(self) -> None:
        state = self.game.state
        state.solved_changed.unsubscribe(self._on_solved_changed)
        for tile, callback in self._tile_callbacks.items():
            tile.coord_changed.unsubscribe(callback)
        self._tile_callbacks = {}

    def begin_gesture(self) -> None:
        self.moved.clear()
        self.status = ""

    def move_cursor(self, key: str) -> None:
        dr, dc = _CURSOR_STEPS[key]
        target = Coord(self.cursor.row + dr, self.cursor.col + dc)
        if in_bounds(target, self.game.size):
            self.cursor = target

    # -- signal handlers ------------------------------------------------------

    def _on_tile_moved(self, tile: Tile) -> None:
        self.moved.add(tile)

    def _on_solved_changed(self) -> None:
        if self.game.state.solved:
            self.status = "[bold green]Solved![/bold green]"

    # -- rendering ------------------------------------------------------------

    def render_board(self) -> Table:
        """Return a Rich Table representing the puzzle grid."""
        state = self.game.state
        width = len(str(state.size * state.size - 1))
        table = Table(
            show_header=False,
            show_edge=True,
            pad_edge=True,
            box=rich.box.HEAVY,
            border_style="bright_blue",
            padding=(0, 1),
        )
        for _ in range(state.size):
            table.add_column(width=width + 1, justify="center")

        for r in range(state.size):
            cells: list[Text] = []
            for c in range(state.size):
                coord = Coord(r, c)
                tile = state.get_tile(coord)
                if tile is None:
                    cell = Text("·", style="dim")
                elif tile in self.moved:
                    cell = Text(f"{tile.label:>{width}}", style="bold yellow")
                elif tile.is_correct:
                    cell = Text(f"{tile.label:>{width}}", style="bold green")
                else:
                    cell = Text(f"{tile.label:>{width}}", style="bold white")
                if coord == self.cursor:
                    cell.stylize("reverse")
                cells.append(cell)
            table.add_row(*cells)

        return table

    def draw(self) -> None:
        console.clear()
        state = self.game.state

        stats = Text()
        stats.append("  Moves: ", style="dim")
        stats.append(str(state.move_count), style="bold yellow")
        stats.append("    Time: ", style="dim")
        stats.append(_format_time(self.game.elapsed_time), style="bold yellow")

        controls = Text()
        controls.append("  ↑↓←→", style="bold cyan")
        controls.append("  cursor   ", style="dim")
        controls.append("Enter", style="bold cyan")
        controls.append("  slide   ", style="dim")
        controls.append("WASD", style="bold cyan")
        controls.append("  move   ", style="dim")
        controls.append("R", style="bold cyan")
        controls.append("  shuffle   ", style="dim")
        controls.append("Q", style="bold cyan")
        controls.append("  quit", style="dim")

        border = "bold green" if state.solved else "bright_blue"
        panel = Panel(
            Align.center(self.render_board()),
            title=f"[bold cyan]Sliding Puzzle  {state.size}×{state.size}[/bold cyan]",
            border_style=border,
            padding=(1, 2),
        )

        parts = [Align.center(panel), Align.center(stats)]
        if self.status:
            parts.append(Align.center(Text.from_markup(f"  {self.status}")))
        parts.append(Align.center(controls))

        console.print()
        console.print(Group(*parts))


# -- game loop ----------------------------------------------------------------


def handle_key(game: GamePlay, view: BoardView, key: str) -> bool:
    """Apply one key action; returns False when the player quits."""
    view.begin_gesture()

    if key in _CURSOR_STEPS:
        view.move_cursor(key)
    elif key.startswith("slide_"):
        if not game.move(Direction(key.removeprefix("slide_"))):
            view.status = "[dim]Nothing to slide that way.[/dim]"
    elif key == "activate":
        if not game.activate(view.cursor):
            view.status = "[dim]That tile is not in line with the gap.[/dim]"
    elif key == "shuffle":
        game.reshuffle()
        view.status = "[yellow]Shuffled![/yellow]"
    elif key == "quit":
        return False
    return True


def _play(game: GamePlay, view: BoardView) -> None:
    while True:
        view.draw()
        if not handle_key(game, view, get_key()):
            return


# -- public entry point -------------------------------------------------------


def run(size: int = 4, shuffle: bool = True, seed: int | None = None) -> None:
    """Launch the Rich terminal frontend."""
    game = GamePlay(size, shuffle=shuffle, rng=random.Random(seed))
    logger.info("starting %d×%d game (seed=%s)", game.size, game.size, seed)
    view = BoardView(game)
    try:
        _play(game, view)
    finally:
        view.detach()
        game.state.teardown()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
