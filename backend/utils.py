# backend/utils.py

from typing import List, Tuple


def get_neighbors(x: int, y: int, width: int, height: int) -> List[Tuple[int, int]]:
    """
    Return a list of valid neighboring coordinates (8-way) for (x, y).
    """
    neighbors = []
    for dy in [-1, 0, 1]:
        for dx in [-1, 0, 1]:
            nx, ny = x + dx, y + dy
            if (dx != 0 or dy != 0) and 0 <= nx < width and 0 <= ny < height:
                neighbors.append((nx, ny))
    return neighbors


def get_orthogonal_neighbors(x: int, y: int, width: int, height: int) -> List[Tuple[int, int]]:
    """
    Return the in-bounds west, east, north and south neighbours of (x, y).
    """
    candidates = [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]
    return [(nx, ny) for nx, ny in candidates if 0 <= nx < width and 0 <= ny < height]


def format_board_debug(values, cells=None) -> str:
    """
    Render the board as text for debugging.
    Shows flags, hidden tiles and mines/numbers.

    values: 2D array of cell values, indexed [y][x].
    cells: optional 2D array of reveal states (0 hidden, 1 flagged, 2 revealed).
    """
    lines = []
    for y in range(len(values)):
        row_str = ""
        for x in range(len(values[0])):
            if cells is not None and cells[y][x] == 1:
                row_str += " F "
            elif cells is not None and cells[y][x] == 0:
                row_str += " . "
            elif values[y][x] == -1:
                row_str += " * "
            else:
                row_str += f" {values[y][x]} "
        lines.append(row_str)
    return "\n".join(lines)

