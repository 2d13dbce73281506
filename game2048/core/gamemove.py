"""
Move directions and the helpers used to resolve a move on the grid: traversal order,
farthest position search and detection of mergeable neighbours.
"""

from __future__ import annotations

from enum import Enum

from game2048.core.grid import Grid
from game2048.core.tile import Position


class Direction(str, Enum):
    """Direction of a move."""

    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'
    LEFT = 'left'

    @property
    def vector(self) -> Position:
        """Unit step of the direction, y grows downward."""
        return VECTORS[self]

    @classmethod
    def parse(cls, token: Direction | str) -> Direction:
        """
        Convert a token into a direction.

        Parameters
        ----------
        token : Direction or str
            A direction or its name (case insensitive).

        Returns
        -------
        Direction
            The matching direction.

        Raises
        ------
        ValueError
            If the token does not name a direction.
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            try:
                return cls(token.strip().lower())
            except ValueError:
                pass
        raise ValueError(f'Unknown direction: {token!r}')


VECTORS: dict[Direction, Position] = {
    Direction.UP: Position(0, -1),
    Direction.RIGHT: Position(1, 0),
    Direction.DOWN: Position(0, 1),
    Direction.LEFT: Position(-1, 0),
}


def build_traversals(size: int, direction: Direction) -> tuple[list[int], list[int]]:
    """
    Build the order in which columns and rows are visited during a move.

    Parameters
    ----------
    size : int
        Size of the grid.
    direction : Direction
        Direction of the move.

    Returns
    -------
    tuple[list[int], list[int]]
        The x sequence (outer loop) and the y sequence (inner loop).

    Notes
    -----
    Cells are always visited starting from the edge tiles move toward, so a tile is finalized
    before the tiles behind it are processed.
    """
    vector = direction.vector
    xs = list(range(size))
    ys = list(range(size))

    if vector.x == 1:
        xs.reverse()
    if vector.y == 1:
        ys.reverse()
    return xs, ys


def find_farthest_position(grid: Grid, cell: Position, direction: Direction) -> tuple[Position, Position]:
    """
    Find how far a tile can slide from a cell.

    Parameters
    ----------
    grid : Grid
        The grid holding the tiles.
    cell : Position
        Starting cell.
    direction : Direction
        Direction of the move.

    Returns
    -------
    farthest : Position
        Last empty cell reached, or the starting cell if the tile cannot slide.
    next : Position
        First cell after ``farthest``, either occupied or out of bounds.
    """
    vector = direction.vector

    # ##: Progress towards the vector direction until an obstacle is found.
    previous = cell
    cell = Position(previous.x + vector.x, previous.y + vector.y)
    while grid.is_available(cell):
        previous = cell
        cell = Position(previous.x + vector.x, previous.y + vector.y)

    return previous, cell


def tile_matches_available(grid: Grid) -> bool:
    """
    Check if two orthogonally adjacent tiles share a value.

    Parameters
    ----------
    grid : Grid
        The grid to inspect.

    Returns
    -------
    bool
        True if at least one pair of neighbours could merge.
    """
    for position, tile in grid.iter_cells():
        if tile is None:
            continue

        for vector in VECTORS.values():
            other = grid.cell_content(Position(position.x + vector.x, position.y + vector.y))
            if other is not None and other.value == tile.value:
                return True
    return False


def moves_available(grid: Grid) -> bool:
    """Check if any move can still change the grid."""
    return grid.has_available_cells() or tile_matches_available(grid)
