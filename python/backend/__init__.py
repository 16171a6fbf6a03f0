"""Sliding puzzle core: tiles, board state, moves and shuffling."""
