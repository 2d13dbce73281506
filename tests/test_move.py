"""
Tests for move resolution: traversal order, farthest position search, merges, spawns and terminal detection.
"""

from unittest import TestCase, main

import numpy as np
from numpy import array

from game2048.core.engine import MoveEngine, TILE_SPAWN_PROBS
from game2048.core.gamemove import (
    Direction,
    build_traversals,
    find_farthest_position,
    moves_available,
    tile_matches_available,
)
from game2048.core.grid import Grid
from game2048.core.tile import Position

from helpers import StubGenerator


def make_engine(rows, draw=0.0, index=0):
    """Build an engine on the given rows with a deterministic spawner."""
    grid = Grid.from_rows(rows)
    return MoveEngine(grid, rng=StubGenerator(draw=draw, index=index))


class TestDirection(TestCase):
    def test_vectors(self):
        """Each direction maps to its unit vector, y growing downward."""
        self.assertEqual(Direction.UP.vector, (0, -1))
        self.assertEqual(Direction.RIGHT.vector, (1, 0))
        self.assertEqual(Direction.DOWN.vector, (0, 1))
        self.assertEqual(Direction.LEFT.vector, (-1, 0))

    def test_parse(self):
        """Directions are parsed from their names."""
        self.assertIs(Direction.parse('left'), Direction.LEFT)
        self.assertIs(Direction.parse(' UP '), Direction.UP)
        self.assertIs(Direction.parse(Direction.DOWN), Direction.DOWN)

    def test_parse_invalid(self):
        """Unknown directions raise instead of being ignored."""
        for token in ('diagonal', '', None, 3):
            with self.assertRaises(ValueError):
                Direction.parse(token)


class TestGameMove(TestCase):
    def test_traversals(self):
        """Cells are visited starting from the edge tiles move toward."""
        self.assertEqual(build_traversals(4, Direction.LEFT), ([0, 1, 2, 3], [0, 1, 2, 3]))
        self.assertEqual(build_traversals(4, Direction.UP), ([0, 1, 2, 3], [0, 1, 2, 3]))
        self.assertEqual(build_traversals(4, Direction.RIGHT), ([3, 2, 1, 0], [0, 1, 2, 3]))
        self.assertEqual(build_traversals(4, Direction.DOWN), ([0, 1, 2, 3], [3, 2, 1, 0]))

    def test_farthest_position_to_edge(self):
        """A lone tile slides to the edge, the next cell is out of bounds."""
        grid = Grid.from_rows([[0, 0, 2, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        farthest, following = find_farthest_position(grid, Position(2, 0), Direction.LEFT)
        self.assertEqual(farthest, Position(0, 0))
        self.assertEqual(following, Position(-1, 0))

    def test_farthest_position_blocked(self):
        """A tile stops before the first occupied cell."""
        grid = Grid.from_rows([[4, 0, 2, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        farthest, following = find_farthest_position(grid, Position(2, 0), Direction.LEFT)
        self.assertEqual(farthest, Position(1, 0))
        self.assertEqual(following, Position(0, 0))

    def test_farthest_position_no_slide(self):
        """A tile against the edge stays in place."""
        grid = Grid.from_rows([[0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 8]])
        farthest, following = find_farthest_position(grid, Position(3, 3), Direction.DOWN)
        self.assertEqual(farthest, Position(3, 3))
        self.assertEqual(following, Position(3, 4))

    def test_tile_matches_available(self):
        """Equal neighbours are detected horizontally and vertically."""
        self.assertFalse(tile_matches_available(Grid.from_rows([[2, 4], [8, 16]])))
        self.assertTrue(tile_matches_available(Grid.from_rows([[2, 2], [8, 16]])))
        self.assertTrue(tile_matches_available(Grid.from_rows([[2, 4], [2, 16]])))

        # ##>: Equal values that are not neighbours do not count.
        self.assertFalse(tile_matches_available(Grid.from_rows([[2, 4], [4, 2]])))

    def test_moves_available(self):
        """Moves remain while a cell is empty or neighbours match."""
        self.assertTrue(moves_available(Grid.from_rows([[2, 4], [8, 0]])))
        self.assertTrue(moves_available(Grid.from_rows([[2, 4], [8, 8]])))
        self.assertFalse(moves_available(Grid.from_rows([[2, 4], [8, 16]])))


class TestMoveEngine(TestCase):
    def test_merge_left(self):
        """Two tiles of 2 merge into a 4 on the left edge."""
        engine = make_engine([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        outcome = engine.move(Direction.LEFT)

        self.assertTrue(outcome.moved)
        self.assertEqual(outcome.score, 4)
        self.assertEqual(outcome.merges, 1)

        merged = engine.grid.cell_content((0, 0))
        self.assertEqual(merged.value, 4)
        self.assertTrue(merged.is_merged)
        self.assertEqual({tile.value for tile in merged.merged_from}, {2})

        # ##>: One tile spawned at the first available cell: 15 cells left before, 14 after.
        self.assertEqual(outcome.spawned.position, Position(0, 1))
        self.assertEqual(outcome.spawned.value, 2)
        self.assertEqual(len(engine.grid.available_cells()), 14)

    def test_merge_row(self):
        """A full row of equal tiles merges pairwise."""
        engine = make_engine([[2, 2, 2, 2], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], index=15)
        outcome = engine.move('left')

        np.testing.assert_array_equal(engine.grid.as_array()[0], array([4, 4, 0, 0]))
        self.assertEqual(outcome.score, 8)
        self.assertEqual(outcome.merges, 2)

    def test_single_merge_per_target(self):
        """A tile produced by a merge does not merge again during the same move."""
        engine = make_engine([[2, 2, 4, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], index=15)
        outcome = engine.move(Direction.LEFT)

        np.testing.assert_array_equal(engine.grid.as_array()[0], array([4, 4, 0, 0]))
        self.assertEqual(outcome.merges, 1)

    def test_no_chained_merge(self):
        """Merged values never cascade into a bigger tile."""
        engine = make_engine([[4, 2, 2, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], index=15)
        engine.move(Direction.LEFT)
        np.testing.assert_array_equal(engine.grid.as_array()[0], array([4, 4, 0, 0]))

    def test_merge_right(self):
        """Tiles nearer the destination edge merge first."""
        engine = make_engine([[2, 2, 2, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], index=15)
        engine.move(Direction.RIGHT)
        np.testing.assert_array_equal(engine.grid.as_array()[0], array([0, 0, 2, 4]))

    def test_merge_up(self):
        """Columns slide and merge upward."""
        engine = make_engine([[2, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0]], index=15)
        outcome = engine.move(Direction.UP)
        np.testing.assert_array_equal(engine.grid.as_array()[:, 0], array([4, 4, 0, 0]))
        self.assertEqual(outcome.score, 4)

    def test_merge_down(self):
        """Columns slide and merge downward."""
        engine = make_engine([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], index=0)
        engine.move(Direction.DOWN)
        self.assertEqual(engine.grid.cell_content((0, 3)).value, 4)
        self.assertIsNone(engine.grid.cell_content((0, 2)))

    def test_positions_in_sync(self):
        """After a move every tile sits at the cell matching its position."""
        engine = make_engine([[2, 2, 4, 8], [0, 4, 4, 0], [2, 0, 2, 2], [8, 8, 8, 0]], index=3)
        engine.move(Direction.RIGHT)
        for position, tile in engine.grid.iter_cells():
            if tile is not None:
                self.assertEqual(tile.position, position)

    def test_previous_positions(self):
        """Slid tiles remember where they started, merged sources converge on the target."""
        engine = make_engine([[0, 0, 0, 2], [0, 0, 0, 0], [0, 0, 0, 4], [0, 0, 0, 4]], index=15)
        engine.move(Direction.LEFT)

        slid = engine.grid.cell_content((0, 0))
        self.assertEqual(slid.previous_position, Position(3, 0))

        engine = make_engine([[2, 0, 2, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], index=15)
        engine.move(Direction.LEFT)
        merged = engine.grid.cell_content((0, 0))
        moving, target = merged.merged_from
        self.assertEqual(moving.previous_position, Position(2, 0))
        self.assertEqual(moving.position, Position(0, 0))
        self.assertEqual(target.previous_position, Position(0, 0))

    def test_merge_history_cleared(self):
        """Merge sources are forgotten when the next move starts."""
        engine = make_engine([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], index=15)
        engine.move(Direction.LEFT)
        merged = engine.grid.cell_content((0, 0))
        self.assertIsNotNone(merged.merged_from)

        engine.move(Direction.DOWN)
        self.assertIsNone(merged.merged_from)
        self.assertEqual(merged.previous_position, Position(0, 0))

    def test_no_movement(self):
        """A move that moves nothing spawns nothing and scores nothing."""
        rows = [[2, 4, 0, 0], [8, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
        engine = make_engine(rows)
        outcome = engine.move(Direction.LEFT)

        self.assertFalse(outcome.moved)
        self.assertEqual(outcome.score, 0)
        self.assertIsNone(outcome.spawned)
        self.assertFalse(outcome.over)
        np.testing.assert_array_equal(engine.grid.as_array(), array(rows))

    def test_full_board_without_movement(self):
        """A stuck full board is not declared over by a move that moves nothing."""
        engine = make_engine([[2, 4], [8, 16]])
        for direction in Direction:
            outcome = engine.move(direction)
            self.assertFalse(outcome.moved)
            self.assertFalse(outcome.over)

    def test_game_over(self):
        """The game ends when the spawned tile leaves no empty cell and no match."""
        engine = make_engine([[4, 8], [0, 16]], draw=0.9, index=0)
        outcome = engine.move(Direction.LEFT)

        self.assertTrue(outcome.moved)
        self.assertEqual(outcome.spawned.value, 4)
        np.testing.assert_array_equal(engine.grid.as_array(), array([[4, 8], [16, 4]]))
        self.assertTrue(outcome.over)

    def test_not_over_with_match(self):
        """A full board with a match left is not over."""
        engine = make_engine([[4, 8], [0, 2]], draw=0.0, index=0)
        outcome = engine.move(Direction.LEFT)
        np.testing.assert_array_equal(engine.grid.as_array(), array([[4, 8], [2, 2]]))
        self.assertFalse(outcome.over)

    def test_win(self):
        """Merging two 1024 produces the winning tile."""
        engine = make_engine([[1024, 1024, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        outcome = engine.move(Direction.LEFT)
        self.assertTrue(outcome.won)
        self.assertEqual(outcome.score, 2048)
        self.assertEqual(engine.grid.cell_content((0, 0)).value, 2048)

    def test_no_win_below_target(self):
        """Other merges do not win."""
        engine = make_engine([[512, 512, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertFalse(engine.move(Direction.LEFT).won)

    def test_spawn_values(self):
        """The drawn number selects a 2 below the threshold and a 4 above."""
        self.assertEqual(TILE_SPAWN_PROBS[2], 0.75)
        engine = make_engine([[0, 0], [0, 0]], draw=0.74)
        self.assertEqual(engine.add_random_tile().value, 2)
        engine = make_engine([[0, 0], [0, 0]], draw=0.75)
        self.assertEqual(engine.add_random_tile().value, 4)

    def test_spawn_full_grid(self):
        """Nothing spawns on a full grid."""
        engine = make_engine([[2, 4], [8, 16]])
        self.assertIsNone(engine.add_random_tile())

    def test_invalid_direction(self):
        """Unknown directions raise."""
        engine = make_engine([[2, 0], [0, 0]])
        with self.assertRaises(ValueError):
            engine.move('diagonal')


class TestMoveProperties(TestCase):
    """Invariants checked over random games."""

    def test_random_games(self):
        """Tiles are conserved by merges and at most one tile spawns per move."""
        for size in (2, 3, 4, 5):
            rng = np.random.default_rng(size)
            engine = MoveEngine(Grid(size), rng=rng)
            engine.add_random_tile()
            engine.add_random_tile()

            for _ in range(200):
                before = engine.grid.as_array()
                direction = list(Direction)[int(rng.integers(4))]
                outcome = engine.move(direction)
                after = engine.grid.as_array()

                self.assertLessEqual(np.count_nonzero(after), np.count_nonzero(before) + 1)
                if not outcome.moved:
                    np.testing.assert_array_equal(before, after)
                    continue

                spawned = outcome.spawned.value if outcome.spawned is not None else 0
                self.assertEqual(after.sum(), before.sum() + spawned)
                self.assertEqual(
                    np.count_nonzero(after), np.count_nonzero(before) - outcome.merges + (1 if spawned else 0)
                )
                self.assertEqual(outcome.over, not moves_available(engine.grid))
                if outcome.over:
                    break


if __name__ == '__main__':
    main()
