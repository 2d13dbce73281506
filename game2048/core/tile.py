"""
Tile and position value types for the 2048 grid.
"""

from __future__ import annotations

from typing import NamedTuple


class Position(NamedTuple):
    """Cell coordinates, ``x`` is the column and ``y`` the row."""

    x: int
    y: int


class Tile:
    """
    A numbered piece placed on the grid.

    A tile created by a merge keeps a reference to the two tiles it replaces in ``merged_from``
    until the next move starts. ``previous_position`` is the position held when the current move started.

    Parameters
    ----------
    position : tuple[int, int]
        Cell of the tile.
    value : int, optional
        Value of the tile (default is 2). Callers supply powers of two.
    """

    __slots__ = ('position', 'value', 'merged_from', 'previous_position')

    def __init__(self, position: tuple[int, int], value: int = 2):
        self.position = Position(*position)
        self.value = value
        self.merged_from: tuple[Tile, Tile] | None = None
        self.previous_position: Position | None = None

    def __repr__(self) -> str:
        return f'Tile(position=({self.position.x}, {self.position.y}), value={self.value})'

    @property
    def is_merged(self) -> bool:
        """True if the tile was created by a merge during the last move."""
        return self.merged_from is not None

    @property
    def is_new(self) -> bool:
        """True if the tile was spawned after the last move started."""
        return self.merged_from is None and self.previous_position is None

    def save(self) -> None:
        """Remember the current position as the previous one."""
        self.previous_position = self.position

    def update_position(self, position: tuple[int, int]) -> None:
        """
        Move the tile to another cell.

        Only the tile is updated, the grid must be kept in sync by the caller.

        Parameters
        ----------
        position : tuple[int, int]
            New cell of the tile.
        """
        self.position = Position(*position)
