"""
Application of a move on the grid: slide, merge, spawn and terminal detection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from numpy.random import PCG64DXSM, default_rng

from game2048.core.gamemove import (
    Direction,
    build_traversals,
    find_farthest_position,
    moves_available,
    tile_matches_available,
)
from game2048.core.grid import Grid
from game2048.core.tile import Position, Tile

# ##>: Tile spawn probabilities (75% for 2, 25% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.75, 4: 0.25}

# ##>: Value of the tile that wins the game.
WINNING_VALUE = 2048

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` used to spawn tiles."""

    def random(self) -> float: ...

    def integers(self, high: int) -> int: ...


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of a move.

    Attributes
    ----------
    moved : bool
        Whether at least one tile changed position. A move that moved nothing changed nothing.
    score : int
        Points gained by the merges of the move.
    merges : int
        Number of merges performed.
    spawned : Tile, optional
        Tile added after the move, if any.
    won : bool
        Whether a merge produced the winning tile.
    over : bool
        Whether no move remains once the new tile is added.
    """

    moved: bool = False
    score: int = 0
    merges: int = 0
    spawned: Tile | None = None
    won: bool = False
    over: bool = False


class MoveEngine:
    """
    Apply moves to a grid.

    Parameters
    ----------
    grid : Grid
        The grid to mutate.
    rng : RandomSource, optional
        Source of randomness for spawned tiles, a fresh ``numpy`` generator by default.
    winning_value : int, optional
        Value of the tile that wins the game (default is 2048).
    """

    def __init__(self, grid: Grid, rng: RandomSource | None = None, winning_value: int = WINNING_VALUE):
        self.grid = grid
        self._rng = rng if rng is not None else default_rng(PCG64DXSM())
        self.winning_value = winning_value

    def add_random_tile(self) -> Tile | None:
        """
        Place a new tile on a random empty cell.

        Returns
        -------
        Tile or None
            The new tile, or None if the grid is full.

        Notes
        -----
        The value is drawn first (2 with a 75% chance, 4 otherwise), then the cell.
        """
        if not self.grid.has_available_cells():
            return None

        value = 2 if self._rng.random() < TILE_SPAWN_PROBS[2] else 4
        tile = Tile(self.grid.random_available_cell(self._rng), value)
        self.grid.insert(tile)

        _logger.debug('Spawned %s', tile)
        return tile

    def prepare_tiles(self) -> None:
        """Forget last move merges and remember the current positions."""
        for tile in self.grid.tiles():
            tile.merged_from = None
            tile.save()

    def tile_matches_available(self) -> bool:
        """Check if two adjacent tiles could merge."""
        return tile_matches_available(self.grid)

    def moves_available(self) -> bool:
        """Check if any move can still change the grid."""
        return moves_available(self.grid)

    def _slide(self, tile: Tile, cell: Position) -> None:
        self.grid.remove(tile)
        tile.update_position(cell)
        self.grid.insert(tile)

    def move(self, direction: Direction | str) -> MoveOutcome:
        """
        Slide every tile toward a direction and merge equal neighbours.

        Parameters
        ----------
        direction : Direction or str
            Direction of the move.

        Returns
        -------
        MoveOutcome
            What the move did. If no tile moved, nothing is spawned and the terminal state is not evaluated.

        Raises
        ------
        ValueError
            If the direction is unknown.
        """
        direction = Direction.parse(direction)
        xs, ys = build_traversals(self.grid.size, direction)

        self.prepare_tiles()

        moved = False
        score = 0
        merges = 0
        won = False

        for x in xs:
            for y in ys:
                cell = Position(x, y)
                tile = self.grid.cell_content(cell)
                if tile is None:
                    continue

                farthest, following = find_farthest_position(self.grid, cell, direction)
                other = self.grid.cell_content(following)

                # ##: Only one merge per target tile.
                if other is not None and other.value == tile.value and other.merged_from is None:
                    merged = Tile(following, tile.value * 2)
                    merged.merged_from = (tile, other)

                    self.grid.insert(merged)
                    self.grid.remove(tile)

                    # ##: Converge the two tiles' positions.
                    tile.update_position(following)

                    score += merged.value
                    merges += 1
                    if merged.value == self.winning_value:
                        won = True
                else:
                    self._slide(tile, farthest)

                if tile.position != cell:
                    moved = True

        if not moved:
            return MoveOutcome()

        spawned = self.add_random_tile()
        over = not self.moves_available()
        _logger.debug('Moved %s: score=%d merges=%d', direction.value, score, merges)
        return MoveOutcome(moved=True, score=score, merges=merges, spawned=spawned, won=won, over=over)
