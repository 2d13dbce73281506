# -*- coding: utf-8 -*-
"""
Rules of the 2048 game.

It includes the tile and grid types, the move directions with their traversal helpers,
and the engine applying a move: sliding, merging, spawning a new tile and detecting the end of the game.
"""

from .engine import TILE_SPAWN_PROBS, WINNING_VALUE, MoveEngine, MoveOutcome
from .gamemove import Direction, build_traversals, find_farthest_position, moves_available, tile_matches_available
from .grid import Grid
from .tile import Position, Tile

__all__ = [
    "TILE_SPAWN_PROBS",
    "WINNING_VALUE",
    "Direction",
    "Grid",
    "MoveEngine",
    "MoveOutcome",
    "Position",
    "Tile",
    "build_traversals",
    "find_farthest_position",
    "moves_available",
    "tile_matches_available",
]
