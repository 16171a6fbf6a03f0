from backend.engine.gamestate.state import MAX_SIZE, MIN_SIZE, PuzzleState

__all__ = ["MAX_SIZE", "MIN_SIZE", "PuzzleState"]
