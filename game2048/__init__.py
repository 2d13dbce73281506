# -*- coding: utf-8 -*-
"""
Python implementation of the rules of the 2048 game.

The `game2048.core` package holds the grid, the tiles and the move engine. The `game2048.envs` package holds
the game session consumed by input, rendering and persistence adapters.
"""

from .core import Direction, Grid, MoveEngine, MoveOutcome, Position, Tile
from .envs import Command, GameSession, SessionConfig, Snapshot

__all__ = [
    "Command",
    "Direction",
    "GameSession",
    "Grid",
    "MoveEngine",
    "MoveOutcome",
    "Position",
    "SessionConfig",
    "Snapshot",
    "Tile",
]
