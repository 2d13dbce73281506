"""
Fixed size square grid owning the placement of tiles.
"""

from __future__ import annotations

from typing import Iterator, Protocol, Sequence

from numpy import int64, ndarray, zeros
from numpy.random import PCG64DXSM, default_rng

from game2048.core.tile import Position, Tile

# ##>: Module-level generator used when no generator is injected.
_GENERATOR = default_rng(PCG64DXSM())


class IndexSource(Protocol):
    """Anything able to draw a uniform integer in ``[0, high)``, such as ``numpy.random.Generator``."""

    def integers(self, high: int) -> int: ...


class Grid:
    """
    Square grid of ``size`` x ``size`` cells, each holding at most one tile.

    Cells are stored column first: ``cells[x][y]``.

    Parameters
    ----------
    size : int
        Number of cells on each side, at least 2.

    Raises
    ------
    ValueError
        If size is lower than 2.
    """

    def __init__(self, size: int):
        if size < 2:
            raise ValueError(f'Grid size must be at least 2, got {size}')
        self.size = size
        self.cells: list[list[Tile | None]] = [[None for _ in range(size)] for _ in range(size)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Grid:
        """
        Build a grid from a list of rows.

        Parameters
        ----------
        rows : Sequence[Sequence[int]]
            Tile values indexed ``rows[y][x]``, 0 meaning an empty cell.

        Returns
        -------
        Grid
            Grid holding a new tile for every non-zero value.

        Raises
        ------
        ValueError
            If the rows do not form a square.
        """
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError('Rows must form a square board')

        grid = cls(size)
        for y, row in enumerate(rows):
            for x, value in enumerate(row):
                if value:
                    grid.insert(Tile(Position(x, y), int(value)))
        return grid

    def is_in_bounds(self, position: tuple[int, int]) -> bool:
        """Check if the position lies inside the grid."""
        x, y = position
        return 0 <= x < self.size and 0 <= y < self.size

    def cell_content(self, position: tuple[int, int]) -> Tile | None:
        """
        Get the tile at the given position.

        Parameters
        ----------
        position : tuple[int, int]
            Cell to read. May lie outside the grid.

        Returns
        -------
        Tile or None
            The tile, or None if the cell is empty or out of bounds.
        """
        if not self.is_in_bounds(position):
            return None
        x, y = position
        return self.cells[x][y]

    def is_occupied(self, position: tuple[int, int]) -> bool:
        """Check if a tile sits at the given position."""
        return self.cell_content(position) is not None

    def is_available(self, position: tuple[int, int]) -> bool:
        """Check if the position is inside the grid and empty."""
        return self.is_in_bounds(position) and not self.is_occupied(position)

    def iter_cells(self) -> Iterator[tuple[Position, Tile | None]]:
        """
        Iterate over every cell, x outer and y inner.

        Yields
        ------
        tuple[Position, Tile or None]
            The position of the cell and its content.
        """
        for x in range(self.size):
            for y in range(self.size):
                yield Position(x, y), self.cells[x][y]

    def tiles(self) -> list[Tile]:
        """Every tile of the grid, in the order of ``iter_cells``."""
        return [tile for _, tile in self.iter_cells() if tile is not None]

    def available_cells(self) -> list[Position]:
        """Every empty position, in the order of ``iter_cells``."""
        return [position for position, tile in self.iter_cells() if tile is None]

    def has_available_cells(self) -> bool:
        """Check if at least one cell is empty."""
        return bool(self.available_cells())

    def random_available_cell(self, rng: IndexSource | None = None) -> Position | None:
        """
        Uniformly choose an empty position.

        Parameters
        ----------
        rng : IndexSource, optional
            Source of randomness, the module generator is used when omitted.

        Returns
        -------
        Position or None
            A random empty position, or None if the grid is full.
        """
        cells = self.available_cells()
        if not cells:
            return None

        rng = rng if rng is not None else _GENERATOR
        return cells[int(rng.integers(len(cells)))]

    def insert(self, tile: Tile) -> None:
        """Place the tile at its own position, replacing any occupant."""
        x, y = tile.position
        self.cells[x][y] = tile

    def remove(self, tile: Tile) -> None:
        """Empty the cell at the tile's position, whatever occupies it."""
        x, y = tile.position
        self.cells[x][y] = None

    def as_array(self) -> ndarray:
        """
        Get the values of the grid.

        Returns
        -------
        ndarray
            Array of shape (size, size) indexed ``[y, x]``, 0 for empty cells.
        """
        board = zeros((self.size, self.size), dtype=int64)
        for tile in self.tiles():
            board[tile.position.y, tile.position.x] = tile.value
        return board
