from backend.models.coord import Coord, Direction
from backend.models.tile import Tile

__all__ = ["Coord", "Direction", "Tile"]
