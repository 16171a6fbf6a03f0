from backend.engine.gamegenerator.generator import (
    MAX_SHUFFLE_ATTEMPTS,
    GameGenerator,
    count_inversions,
    is_solvable,
)

__all__ = ["MAX_SHUFFLE_ATTEMPTS", "GameGenerator", "count_inversions", "is_solvable"]
