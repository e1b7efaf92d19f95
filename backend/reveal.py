# backend/reveal.py

import enum
from collections import deque
from typing import List, Tuple

import numpy as np

from .board import MINE, Grid
from .utils import get_orthogonal_neighbors


class CellState(enum.IntEnum):
    HIDDEN = 0
    FLAGGED = 1
    REVEALED = 2


class RevealState:
    """
    Per-cell reveal/flag state for one grid, plus the count of
    non-mine cells that still have to be revealed.
    """

    def __init__(self, grid: Grid):
        self.cells = np.full((grid.height, grid.width), CellState.HIDDEN, dtype=np.int8)
        self.non_mine_cells_remaining = grid.width * grid.height - grid.num_mines

    def get(self, x: int, y: int) -> CellState:
        return CellState(int(self.cells[y, x]))

    def set(self, x: int, y: int, state: CellState):
        self.cells[y, x] = state

    def is_hidden(self, x, y):
        return bool(self.cells[y, x] == CellState.HIDDEN)

    def is_flagged(self, x, y):
        return bool(self.cells[y, x] == CellState.FLAGGED)

    def is_revealed(self, x, y):
        return bool(self.cells[y, x] == CellState.REVEALED)

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == state))


def reveal_single(grid: Grid, state: RevealState, x: int, y: int, force: bool = False) -> bool:
    """
    Reveal one cell without cascading.

    Returns False and changes nothing unless the cell is hidden. With
    force=True a flagged cell is revealed as well; the end-of-game mine
    reveal uses that so flagged mines show up too.
    """
    current = state.get(x, y)
    if current == CellState.REVEALED:
        return False
    if current == CellState.FLAGGED and not force:
        return False

    state.set(x, y, CellState.REVEALED)
    if grid.values[y, x] != MINE:
        state.non_mine_cells_remaining -= 1
    return True


def reveal_cascade(grid: Grid, state: RevealState, x: int, y: int) -> List[Tuple[int, int]]:
    """
    Flood-fill reveal starting at (x, y) over N/S/E/W neighbours.

    Every reachable cell is visited once and zero cells keep expanding, so
    the numbered border of an empty region is revealed but nothing past it.
    Flagged cells stay flagged; a flagged zero still expands to its
    neighbours.
    Returns the cells that changed, in reveal order.
    """
    changed = []
    visited = {(x, y)}
    pending = deque([(x, y)])

    while pending:
        cx, cy = pending.popleft()
        if reveal_single(grid, state, cx, cy):
            changed.append((cx, cy))

        if grid.values[cy, cx] != 0:
            continue

        for nx, ny in get_orthogonal_neighbors(cx, cy, grid.width, grid.height):
            if (nx, ny) not in visited:
                visited.add((nx, ny))
                pending.append((nx, ny))

    return changed
