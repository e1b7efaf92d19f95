import logging
import random

import numpy as np

from .utils import get_neighbors

logger = logging.getLogger(__name__)

MINE = -1


class Grid:
    """
    Fixed-size board of cell values addressed by (x, y).

    values[y, x] is MINE (-1) or the number of mines in the cell's
    8-neighbourhood (0-8). Reveal and flag state are kept elsewhere.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.values = np.zeros((height, width), dtype=np.int8)

    def is_valid_coord(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def value(self, x: int, y: int) -> int:
        return int(self.values[y, x])

    def is_mine(self, x, y):
        return bool(self.values[y, x] == MINE)

    def mine_positions(self):
        ys, xs = np.nonzero(self.values == MINE)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    @property
    def num_mines(self) -> int:
        return int(np.count_nonzero(self.values == MINE))

    def place_mine(self, x: int, y: int):
        """
        Mark (x, y) as a mine and bump the count of every non-mine neighbour.
        Any count the cell had collected before is overwritten.
        """
        self.values[y, x] = MINE
        for nx, ny in get_neighbors(x, y, self.width, self.height):
            if self.values[ny, nx] != MINE:
                self.values[ny, nx] += 1


def validate_dimensions(width, height, num_mines):
    for name, val in (("width", width), ("height", height), ("num_mines", num_mines)):
        if isinstance(val, bool) or not isinstance(val, (int, np.integer)):
            raise ValueError(f"{name} must be an integer, got {val!r}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
    if not 0 <= num_mines <= width * height:
        raise ValueError(
            f"Cannot place {num_mines} mines on a {width}x{height} board "
            f"(allowed range is 0 to {width * height})."
        )


def generate_board(width: int, height: int, num_mines: int, rng: random.Random = None) -> Grid:
    """
    Build a fully populated grid with num_mines mines.

    Mine indices are drawn uniformly from [0, width*height) and redrawn on
    collision until enough distinct ones are collected. That gets slow when
    num_mines is close to width*height, which is fine for playable boards.
    """
    validate_dimensions(width, height, num_mines)
    rng = rng if rng is not None else random.Random()

    size = width * height
    indices = set()
    while len(indices) < num_mines:
        indices.add(rng.randrange(size))

    grid = Grid(width, height)
    for index in indices:
        y, x = divmod(index, width)
        grid.place_mine(x, y)

    logger.debug("Generated %dx%d board with %d mines", width, height, num_mines)
    return grid


def grid_from_mines(width: int, height: int, mines) -> Grid:
    """
    Build a grid with mines at the given (x, y) positions.
    Useful for fixed layouts and tests.
    """
    mines = set(mines)
    validate_dimensions(width, height, len(mines))
    grid = Grid(width, height)
    for x, y in mines:
        if not grid.is_valid_coord(x, y):
            raise ValueError(f"Mine position {(x, y)} is outside a {width}x{height} board")
        grid.place_mine(x, y)
    return grid
