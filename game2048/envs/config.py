# -*- coding: utf-8 -*-
"""
Session specific configuration.
"""
from dataclasses import dataclass

from game2048.core.engine import WINNING_VALUE


@dataclass
class SessionConfig:
    """
    Configuration of a game session.

    Attributes
    ----------
    size : int
        Number of cells on each side of the grid.
    start_tiles : int
        Number of random tiles placed when a game starts.
    winning_value : int
        Value of the tile that wins the game.
    reset_best_on_new_game : bool
        Whether starting a new game resets the stored best score to 0. A restart never does.
    seed : int, optional
        Seed of the random generator used for spawned tiles.
    """

    size: int = 4
    start_tiles: int = 2
    winning_value: int = WINNING_VALUE
    reset_best_on_new_game: bool = False
    seed: int | None = None

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be at least 2, got {self.size}')
        if self.start_tiles < 0:
            raise ValueError(f'start_tiles must be >= 0, got {self.start_tiles}')
