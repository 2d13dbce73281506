"""
Game session: the state of one game of 2048 and the operations exposed to input, rendering and persistence adapters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from numpy import int64, ndarray, zeros
from numpy.random import default_rng

from game2048.core.engine import MoveEngine, MoveOutcome, RandomSource
from game2048.core.gamemove import Direction
from game2048.core.grid import Grid
from game2048.core.tile import Position, Tile
from game2048.envs.commands import Command, parse_token
from game2048.envs.config import SessionConfig
from game2048.envs.storage import BestScoreStore, parse_best_score

# ##>: Module logger.
_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TileSnapshot:
    """
    Render-ready view of a tile.

    Attributes
    ----------
    position : Position
        Current cell of the tile.
    value : int
        Value of the tile.
    is_merged : bool
        Whether the tile was created by a merge during the last move.
    is_new : bool
        Whether the tile was spawned after the last move.
    previous_position : Position, optional
        Cell held when the last move started, None for merged and new tiles.
    merged_from : tuple[Position, ...]
        Cells the two merged tiles came from, empty unless ``is_merged``.
    """

    position: Position
    value: int
    is_merged: bool
    is_new: bool
    previous_position: Position | None
    merged_from: tuple[Position, ...] = ()

    @classmethod
    def from_tile(cls, tile: Tile) -> TileSnapshot:
        merged_from = ()
        if tile.merged_from is not None:
            merged_from = tuple(source.previous_position or source.position for source in tile.merged_from)
        return cls(
            position=tile.position,
            value=tile.value,
            is_merged=tile.is_merged,
            is_new=tile.is_new,
            previous_position=tile.previous_position,
            merged_from=merged_from,
        )


@dataclass(frozen=True)
class Snapshot:
    """Read-only state of a session handed to renderers."""

    size: int
    tiles: tuple[TileSnapshot, ...]
    score: int
    best_score: int
    is_game_over: bool
    is_win: bool

    def as_array(self) -> ndarray:
        """Tile values as an array indexed ``[y, x]``, 0 for empty cells."""
        board = zeros((self.size, self.size), dtype=int64)
        for tile in self.tiles:
            board[tile.position.y, tile.position.x] = tile.value
        return board


Renderer = Callable[[Snapshot], None]


class GameSession:
    """
    One game of 2048.

    The session owns the grid, the score and the terminal flags. A renderer, if any, is called with a
    ``Snapshot`` after every new game, restart and accepted move. A best score store, if any, is read once
    and offered every score increase.

    Parameters
    ----------
    config : SessionConfig, optional
        Configuration of the session.
    renderer : Callable[[Snapshot], None], optional
        Called after every state change.
    store : BestScoreStore, optional
        Storage of the best score.
    rng : RandomSource, optional
        Source of randomness for spawned tiles. A ``numpy`` generator seeded with ``config.seed`` by default.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        renderer: Renderer | None = None,
        store: BestScoreStore | None = None,
        rng: RandomSource | None = None,
    ):
        self.config = config if config is not None else SessionConfig()
        self._renderer = renderer
        self._store = store
        self._rng = rng if rng is not None else default_rng(self.config.seed)

        self._grid: Grid | None = None
        self._engine: MoveEngine | None = None
        self._score = 0
        self._best_score = parse_best_score(store.load()) if store is not None else 0
        self._is_game_over = False
        self._is_win = False

        self._initialize()

    # ##: Read-only state.
    @property
    def grid(self) -> Grid:
        """
        Get the grid of the current game.

        Returns
        -------
        Grid
            The grid mutated by moves. It is replaced by every new game and restart.
        """
        return self._grid

    @property
    def size(self) -> int:
        """
        Get the size of the grid.

        Returns
        -------
        int
            Number of cells on each side of the grid.
        """
        return self.config.size

    @property
    def score(self) -> int:
        """
        Get the score of the current game.

        Returns
        -------
        int
            Sum of the values of every tile created by a merge since the game started.
        """
        return self._score

    @property
    def best_score(self) -> int:
        """
        Get the best score.

        Returns
        -------
        int
            The best score read from the store, raised by every better score.
        """
        return self._best_score

    @property
    def is_game_over(self) -> bool:
        """
        Check if the game is lost.

        Returns
        -------
        bool
            True if no move remained after the last accepted move, False otherwise.
        """
        return self._is_game_over

    @property
    def is_win(self) -> bool:
        """
        Check if the game is won.

        Returns
        -------
        bool
            True if a merge produced the winning tile, False otherwise.
        """
        return self._is_win

    @property
    def is_terminal(self) -> bool:
        """True once the game is won or lost, moves are then ignored."""
        return self._is_game_over or self._is_win

    def _initialize(self, config: SessionConfig | None = None, best_score: int | None = None) -> None:
        """
        Start a game and render it.

        Parameters
        ----------
        config : SessionConfig, optional
            Configuration of the game, the current one by default.
        best_score : int, optional
            Best score shown with the game, the current one by default.

        Notes
        -----
        The new game is built and handed to the renderer before it replaces the current one. If the renderer
        raises, the session is left untouched.
        """
        config = config if config is not None else self.config
        best_score = best_score if best_score is not None else self._best_score

        grid = Grid(config.size)
        engine = MoveEngine(grid, rng=self._rng, winning_value=config.winning_value)
        for _ in range(config.start_tiles):
            engine.add_random_tile()

        if self._renderer is not None:
            self._renderer(self._build_snapshot(grid, 0, best_score, False, False))

        # ##: Commit the new game.
        self.config = config
        self._grid = grid
        self._engine = engine
        self._score = 0
        self._best_score = best_score
        self._is_game_over = False
        self._is_win = False

        _logger.debug('New %dx%d game with %d tiles', config.size, config.size, len(grid.tiles()))

    def _render(self) -> None:
        if self._renderer is not None:
            self._renderer(self.snapshot())

    def new_game(self, size: int | None = None, start_tiles: int | None = None) -> Snapshot:
        """
        Start a new game.

        Parameters
        ----------
        size : int, optional
            Size of the new grid, kept for later restarts. The configured size by default.
        start_tiles : int, optional
            Number of random tiles to start with, kept for later restarts. The configured number by default.

        Returns
        -------
        Snapshot
            State of the new game.

        Raises
        ------
        ValueError
            If the size or the number of tiles is invalid.

        Notes
        -----
        If the renderer rejects the new game, for instance a window drawn for another size, the error is raised
        and the current game, configuration and best score are kept.
        """
        changes = {}
        if size is not None:
            changes['size'] = size
        if start_tiles is not None:
            changes['start_tiles'] = start_tiles
        config = replace(self.config, **changes)

        reset_best = config.reset_best_on_new_game
        self._initialize(config, best_score=0 if reset_best else None)

        if reset_best and self._store is not None:
            self._store.save(0)
        return self.snapshot()

    def restart(self) -> Snapshot:
        """Start the game again with the same configuration, the best score is kept."""
        self._initialize()
        return self.snapshot()

    def move(self, direction: Direction | str) -> MoveOutcome:
        """
        Apply a move.

        Parameters
        ----------
        direction : Direction or str
            Direction of the move.

        Returns
        -------
        MoveOutcome
            What the move did. An idle outcome when the game is over, won, or when no tile could move.

        Raises
        ------
        ValueError
            If the direction is unknown.

        Notes
        -----
        Score, best score and terminal flags are updated and rendered before a better score is handed to the
        store. An error raised by the store leaves the move fully applied.
        """
        direction = Direction.parse(direction)
        if self.is_terminal:
            return MoveOutcome()

        outcome = self._engine.move(direction)
        if not outcome.moved:
            return outcome

        self._score += outcome.score
        improved = self._score > self._best_score
        if improved:
            self._best_score = self._score

        if outcome.won:
            self._is_win = True
            _logger.info('Game won with a score of %d', self._score)
        if outcome.over:
            self._is_game_over = True
            _logger.info('Game over with a score of %d', self._score)

        self._render()

        if improved and self._store is not None:
            self._store.save(self._best_score)
        return outcome

    def handle(self, token: Direction | Command | str) -> MoveOutcome | Snapshot:
        """
        Dispatch a token from an input adapter.

        Parameters
        ----------
        token : Direction, Command or str
            A direction, ``restart`` or ``new_game``.

        Returns
        -------
        MoveOutcome or Snapshot
            The outcome of a move, or the state of the game started by a command.

        Raises
        ------
        ValueError
            If the token is unknown.
        """
        action = parse_token(token)
        if action is Command.RESTART:
            return self.restart()
        if action is Command.NEW_GAME:
            return self.new_game()
        return self.move(action)

    @staticmethod
    def _build_snapshot(grid: Grid, score: int, best_score: int, is_game_over: bool, is_win: bool) -> Snapshot:
        return Snapshot(
            size=grid.size,
            tiles=tuple(TileSnapshot.from_tile(tile) for tile in grid.tiles()),
            score=score,
            best_score=best_score,
            is_game_over=is_game_over,
            is_win=is_win,
        )

    def snapshot(self) -> Snapshot:
        """Current state of the game."""
        return self._build_snapshot(self._grid, self._score, self._best_score, self._is_game_over, self._is_win)
