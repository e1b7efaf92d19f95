# tests/test_reveal.py

import random
import unittest
from collections import deque

from backend.board import generate_board, grid_from_mines
from backend.reveal import CellState, RevealState, reveal_cascade, reveal_single
from backend.utils import get_orthogonal_neighbors


def expected_region(grid, x, y):
    """Zero cells 4-connected to (x, y) plus their 4-adjacent border."""
    zeros = {(x, y)}
    queue = deque([(x, y)])
    while queue:
        cx, cy = queue.popleft()
        for nx, ny in get_orthogonal_neighbors(cx, cy, grid.width, grid.height):
            if (nx, ny) not in zeros and grid.value(nx, ny) == 0:
                zeros.add((nx, ny))
                queue.append((nx, ny))
    region = set(zeros)
    for cx, cy in zeros:
        region.update(get_orthogonal_neighbors(cx, cy, grid.width, grid.height))
    return region


def revealed_cells(grid, state):
    return {(x, y) for y in range(grid.height) for x in range(grid.width) if state.is_revealed(x, y)}


class TestRevealSingle(unittest.TestCase):

    def setUp(self):
        self.grid = grid_from_mines(3, 3, [(1, 1)])
        self.state = RevealState(self.grid)

    def test_initial_state(self):
        self.assertEqual(self.state.non_mine_cells_remaining, 8)
        self.assertEqual(self.state.count(CellState.HIDDEN), 9)

    def test_reveal_number(self):
        self.assertTrue(reveal_single(self.grid, self.state, 0, 0))
        self.assertEqual(self.state.get(0, 0), CellState.REVEALED)
        self.assertEqual(self.state.non_mine_cells_remaining, 7)

    def test_second_reveal_is_noop(self):
        reveal_single(self.grid, self.state, 0, 0)
        self.assertFalse(reveal_single(self.grid, self.state, 0, 0))
        self.assertEqual(self.state.non_mine_cells_remaining, 7)

    def test_mine_does_not_decrement(self):
        self.assertTrue(reveal_single(self.grid, self.state, 1, 1))
        self.assertEqual(self.state.non_mine_cells_remaining, 8)

    def test_flagged_cell_is_skipped(self):
        self.state.set(0, 0, CellState.FLAGGED)
        self.assertFalse(reveal_single(self.grid, self.state, 0, 0))
        self.assertEqual(self.state.get(0, 0), CellState.FLAGGED)

    def test_force_reveals_flagged(self):
        self.state.set(1, 1, CellState.FLAGGED)
        self.assertTrue(reveal_single(self.grid, self.state, 1, 1, force=True))
        self.assertTrue(self.state.is_revealed(1, 1))


class TestRevealCascade(unittest.TestCase):

    def test_stops_at_mine_wall(self):
        grid = grid_from_mines(5, 3, [(2, 0), (2, 1), (2, 2)])
        state = RevealState(grid)
        changed = reveal_cascade(grid, state, 0, 1)

        expected = {(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)}
        self.assertEqual(set(changed), expected)
        self.assertEqual(len(changed), len(expected))
        self.assertEqual(revealed_cells(grid, state), expected)
        self.assertEqual(state.non_mine_cells_remaining, 6)

    def test_nonzero_start_reveals_only_itself(self):
        grid = grid_from_mines(3, 3, [(1, 1)])
        state = RevealState(grid)
        self.assertEqual(reveal_cascade(grid, state, 2, 2), [(2, 2)])
        self.assertEqual(state.non_mine_cells_remaining, 7)

    def test_flagged_zero_keeps_flag_and_passes_fill_on(self):
        grid = grid_from_mines(5, 1, [])
        state = RevealState(grid)
        state.set(2, 0, CellState.FLAGGED)
        changed = reveal_cascade(grid, state, 0, 0)
        self.assertEqual(changed, [(0, 0), (1, 0), (3, 0), (4, 0)])
        self.assertTrue(state.is_flagged(2, 0))
        self.assertEqual(state.non_mine_cells_remaining, 1)

    def test_flag_inside_zero_region(self):
        grid = grid_from_mines(5, 3, [(4, 2)])
        state = RevealState(grid)
        state.set(1, 1, CellState.FLAGGED)
        state.set(0, 1, CellState.FLAGGED)
        changed = reveal_cascade(grid, state, 0, 0)

        region = expected_region(grid, 0, 0) - {(1, 1), (0, 1)}
        self.assertEqual(set(changed), region)
        self.assertEqual(revealed_cells(grid, state), region)
        self.assertTrue(state.is_flagged(1, 1))
        self.assertTrue(state.is_flagged(0, 1))
        self.assertTrue(state.is_revealed(0, 2))

    def test_matches_maximal_region_for_random_boards(self):
        for seed in range(100):
            rng = random.Random(seed)
            width, height = rng.randint(2, 15), rng.randint(2, 15)
            grid = generate_board(width, height, rng.randint(0, width * height // 4), rng=rng)
            zeros = [(x, y) for y in range(height) for x in range(width) if grid.value(x, y) == 0]
            if not zeros:
                continue
            x, y = rng.choice(zeros)

            state = RevealState(grid)
            changed = reveal_cascade(grid, state, x, y)
            region = expected_region(grid, x, y)

            self.assertEqual(set(changed), region, f"seed={seed}")
            self.assertEqual(revealed_cells(grid, state), region, f"seed={seed}")
            self.assertEqual(
                state.non_mine_cells_remaining,
                width * height - grid.num_mines - len(region),
                f"seed={seed}"
            )

    def test_large_board_does_not_recurse(self):
        grid = grid_from_mines(300, 300, [])
        state = RevealState(grid)
        changed = reveal_cascade(grid, state, 150, 150)
        self.assertEqual(len(changed), 300 * 300)
        self.assertEqual(state.non_mine_cells_remaining, 0)


if __name__ == "__main__":
    unittest.main()
