"""Change notifications and the reentrancy guard."""

from __future__ import annotations

import pytest

from backend.engine.errors import ReentrantMutationError
from backend.engine.gamestate import PuzzleState
from backend.events import Signal


# -- Signal -------------------------------------------------------------------


def test_signal_dispatches_in_subscription_order() -> None:
    signal = Signal("test")
    calls: list[str] = []
    signal.subscribe(lambda: calls.append("a"))
    signal.subscribe(lambda: calls.append("b"))

    signal.emit()

    assert calls == ["a", "b"]


def test_signal_ignores_duplicate_and_unknown_callbacks() -> None:
    signal = Signal("test")
    calls: list[int] = []

    def callback() -> None:
        calls.append(1)

    signal.subscribe(callback)
    signal.subscribe(callback)
    signal.unsubscribe(lambda: None)
    signal.emit()

    assert calls == [1]
    assert len(signal) == 1


def test_unsubscribe_during_dispatch_finishes_current_round() -> None:
    signal = Signal("test")
    calls: list[str] = []

    def first() -> None:
        calls.append("first")
        signal.unsubscribe(second)

    def second() -> None:
        calls.append("second")

    signal.subscribe(first)
    signal.subscribe(second)

    signal.emit()
    signal.emit()

    assert calls == ["first", "second", "first"]


# -- puzzle notifications -----------------------------------------------------


def test_slide_fires_one_moves_change_and_one_event_per_tile(solved3: PuzzleState) -> None:
    events: list[str] = []
    solved3.moves_changed.subscribe(lambda: events.append("moves"))
    solved3.solved_changed.subscribe(lambda: events.append("solved"))
    for tile in solved3.tiles:
        tile.coord_changed.subscribe(lambda tile=tile: events.append(f"tile {tile.label}"))

    solved3.activate((2, 0))

    assert events == ["tile 8", "tile 7", "moves"]


def test_ignored_gesture_fires_nothing(solved3: PuzzleState) -> None:
    events: list[str] = []
    solved3.moves_changed.subscribe(lambda: events.append("moves"))
    solved3.solved_changed.subscribe(lambda: events.append("solved"))

    solved3.activate((0, 0))

    assert events == []


def test_solved_change_fires_on_transitions_only() -> None:
    state = PuzzleState.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
    seen: list[bool] = []
    state.solved_changed.subscribe(lambda: seen.append(state.solved))

    state.activate((2, 2))  # solves
    state.activate((2, 1))  # unsolves
    state.activate((2, 0))  # still unsolved

    assert seen == [True, False]


def test_initialize_notifies_only_values_that_changed(solved3: PuzzleState) -> None:
    events: list[str] = []
    solved3.moves_changed.subscribe(lambda: events.append("moves"))
    solved3.solved_changed.subscribe(lambda: events.append("solved"))

    solved3.initialize(3, shuffle=False)
    assert events == []

    solved3.activate((2, 1))
    events.clear()
    solved3.initialize(3, shuffle=False)
    assert events == ["moves"]


def test_initialize_drops_subscribers_of_old_tiles(solved3: PuzzleState) -> None:
    tile = solved3.tiles[0]
    tile.coord_changed.subscribe(lambda: None)

    solved3.initialize(3)

    assert len(tile.coord_changed) == 0


def test_callbacks_see_a_consistent_board(solved3: PuzzleState) -> None:
    tile = solved3.get_tile((2, 1))
    assert tile is not None
    seen: list[tuple] = []
    tile.coord_changed.subscribe(
        lambda: seen.append((tile.current_coord, solved3.empty_cell, solved3.get_tile((2, 2))))
    )

    solved3.activate((2, 1))

    assert seen == [((2, 2), (2, 1), tile)]


@pytest.mark.parametrize(
    "mutation",
    [
        lambda state: state.activate((2, 1)),
        lambda state: state.shuffle(),
        lambda state: state.initialize(3),
        lambda state: state.teardown(),
        lambda state: state.place((0, 0), None),
    ],
)
def test_mutating_from_a_callback_raises(solved3: PuzzleState, mutation) -> None:
    def reenter() -> None:
        mutation(solved3)

    solved3.moves_changed.subscribe(reenter)

    with pytest.raises(ReentrantMutationError):
        solved3.activate((1, 2))

    solved3.moves_changed.unsubscribe(reenter)
    assert solved3.activate((1, 1)) is True
    solved3.check_invariants()


def test_reentry_from_a_tile_callback_leaves_the_slide_committed(solved3: PuzzleState) -> None:
    first = solved3.get_tile((2, 1))
    assert first is not None
    first.coord_changed.subscribe(lambda: solved3.activate((0, 0)))
    moves: list[int] = []
    solved3.moves_changed.subscribe(lambda: moves.append(solved3.move_count))

    with pytest.raises(ReentrantMutationError):
        solved3.activate((2, 0))

    assert solved3.to_flat() == [1, 2, 3, 4, 5, 6, 0, 7, 8]
    assert solved3.empty_cell == (2, 0)
    assert solved3.move_count == 1
    assert moves == [1]
    solved3.check_invariants()
    assert solved3.activate((2, 1)) is True


def test_failing_tile_callback_during_shuffle_still_resets_moves(solved3: PuzzleState) -> None:
    solved3.activate((2, 1))
    moves: list[int] = []
    solved3.moves_changed.subscribe(lambda: moves.append(solved3.move_count))

    def fail() -> None:
        raise RuntimeError("observer failed")

    for tile in solved3.tiles:
        tile.coord_changed.subscribe(fail)

    with pytest.raises(RuntimeError, match="observer failed"):
        solved3.shuffle()

    assert solved3.move_count == 0
    assert moves == [0]
    assert solved3.empty_cell == (2, 2)
    assert solved3.solved is False
    solved3.check_invariants()
