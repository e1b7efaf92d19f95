# backend/game.py

import enum
import logging
import random
from typing import Iterable, Optional

from .board import MINE, Grid, generate_board
from .reveal import CellState, RevealState, reveal_cascade, reveal_single
from .utils import format_board_debug

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"


class GameListener:
    """
    Base class for presentation-layer collaborators that react to
    session transitions (e.g. a timer display).
    """

    def game_started(self, session: "GameSession"):
        """
        Called once, after the first action that changed the board.
        """
        pass

    def game_ended(self, session: "GameSession", outcome: Outcome):
        """
        Called once, when the session reaches WON or LOST.
        """
        pass


class GameSession:
    """
    One game of Minesweeper: the grid, its reveal/flag state and the
    win/loss state machine. Sessions are never reset in place; restart()
    hands back a new session.
    """

    def __init__(
        self,
        width: int,
        height: int,
        num_mines: int,
        seed: int = None,
        listeners: Optional[Iterable[GameListener]] = None,
        grid: Grid = None
    ):
        if grid is None:
            grid = generate_board(width, height, num_mines, rng=random.Random(seed))
        elif (grid.width, grid.height, grid.num_mines) != (width, height, num_mines):
            raise ValueError(
                f"Grid is {grid.width}x{grid.height} with {grid.num_mines} mines, "
                f"expected {width}x{height} with {num_mines}"
            )

        self.width = width
        self.height = height
        self.num_mines = num_mines
        self.seed = seed
        self.grid = grid
        self.state = RevealState(grid)
        self.listeners = list(listeners) if listeners else []

        self.mines_remaining = num_mines
        self.outcome = Outcome.PENDING
        self.started = False
        self.moves_made = 0

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.PENDING

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WON

    @property
    def non_mine_cells_remaining(self) -> int:
        return self.state.non_mine_cells_remaining

    def _check_coord(self, x, y):
        if not self.grid.is_valid_coord(x, y):
            raise IndexError(f"Cell {(x, y)} is outside the {self.width}x{self.height} board")

    def _record_move(self):
        self.moves_made += 1
        if not self.started:
            self.started = True
            for listener in self.listeners:
                listener.game_started(self)

    def _finish(self, outcome: Outcome):
        self.outcome = outcome
        logger.info("Game %s after %d moves", outcome.value, self.moves_made)
        for listener in self.listeners:
            listener.game_ended(self, outcome)

    def toggle_flag(self, x: int, y: int) -> dict:
        """
        Flag or unflag a hidden cell. The mines counter is not clamped and
        goes negative when more cells are flagged than there are mines.
        """
        self._check_coord(x, y)
        if self.is_over or self.state.is_revealed(x, y):
            return {"flagged": self.state.is_flagged(x, y), "mines_remaining": self.mines_remaining}

        if self.state.is_flagged(x, y):
            self.state.set(x, y, CellState.HIDDEN)
            self.mines_remaining += 1
        else:
            self.state.set(x, y, CellState.FLAGGED)
            self.mines_remaining -= 1

        self._record_move()
        return {"flagged": self.state.is_flagged(x, y), "mines_remaining": self.mines_remaining}

    def reveal(self, x: int, y: int) -> dict:
        """
        Apply a reveal at (x, y).

        Returns {"cells_changed": [(x, y, value), ...], "outcome": str}.
        Hitting a mine loses and reveals every mine on the board; revealing
        the last non-mine cell wins. Nothing happens once the game is over,
        or when the cell is flagged or already revealed.
        """
        self._check_coord(x, y)
        if self.is_over or not self.state.is_hidden(x, y):
            return {"cells_changed": [], "outcome": self.outcome.value}

        value = self.grid.value(x, y)
        if value == MINE:
            reveal_single(self.grid, self.state, x, y)
            changed = [(x, y)]
            self._record_move()
            self._finish(Outcome.LOST)
            logger.debug("Mine hit at %s\n%s", (x, y), format_board_debug(self.grid.values))
            for mx, my in self.grid.mine_positions():
                if reveal_single(self.grid, self.state, mx, my, force=True):
                    changed.append((mx, my))
        else:
            if value == 0:
                changed = reveal_cascade(self.grid, self.state, x, y)
            else:
                reveal_single(self.grid, self.state, x, y)
                changed = [(x, y)]
            self._record_move()
            if self.state.non_mine_cells_remaining == 0:
                self._finish(Outcome.WON)

        return {
            "cells_changed": [(cx, cy, self.grid.value(cx, cy)) for cx, cy in changed],
            "outcome": self.outcome.value
        }

    def restart(self, width: int = None, height: int = None, num_mines: int = None) -> "GameSession":
        """
        Return a brand-new session; this one is left untouched.
        Dimensions default to the current ones; listeners carry over.
        """
        width = self.width if width is None else width
        height = self.height if height is None else height
        num_mines = self.num_mines if num_mines is None else num_mines
        logger.debug("Restarting as %dx%d with %d mines", width, height, num_mines)
        return GameSession(width, height, num_mines, listeners=self.listeners)

    def get_state(self) -> dict:
        """
        Return the current visible board and game status.

        board[y][x] is None for hidden cells, "F" for flags, "X" for a
        wrong flag once the game is lost, otherwise the cell value.
        """
        board = []
        for y in range(self.height):
            row_cells = []
            for x in range(self.width):
                cell = self.state.get(x, y)
                if cell == CellState.FLAGGED:
                    wrong = self.outcome is Outcome.LOST and not self.grid.is_mine(x, y)
                    row_cells.append("X" if wrong else "F")
                elif cell == CellState.HIDDEN:
                    row_cells.append(None)
                else:
                    row_cells.append(self.grid.value(x, y))
            board.append(row_cells)

        return {
            "board": board,
            "game_over": self.is_over,
            "won": self.won,
            "outcome": self.outcome.value,
            "mines_remaining": self.mines_remaining,
            "non_mine_cells_remaining": self.non_mine_cells_remaining,
            "moves_made": self.moves_made,
            "dimensions": (self.height, self.width),
            "num_mines": self.num_mines
        }


def create_session(width: int, height: int, num_mines: int, seed: int = None, listeners=None) -> GameSession:
    return GameSession(width, height, num_mines, seed=seed, listeners=listeners)


def reveal(session: GameSession, x: int, y: int) -> dict:
    return session.reveal(x, y)


def toggle_flag(session: GameSession, x: int, y: int) -> dict:
    return session.toggle_flag(x, y)


def restart(session: GameSession, width: int, height: int, num_mines: int) -> GameSession:
    return session.restart(width, height, num_mines)
