"""
Board logic for a fixed ROWS x COLS playfield.

The board is a 2D numpy array (rows x cols) of int8 values:
  - 0 = empty cell
  - 1-7 = piece type ID of the piece that locked there (used for coloring)

There is no hidden buffer zone: row 0 is the top visible row. Pieces may
extend above it (negative rows) while spawning or falling; those cells only
collide with the side walls.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from tetris_core.game.pieces import piece_by_id


class Position(NamedTuple):
    """Top-left corner of a piece's bounding box in board coordinates."""
    x: int
    y: int


class Board:
    """Tetris board with collision detection, locking, and line clearing.

    Attributes:
        width: Number of columns (COLS).
        height: Number of rows (ROWS).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        """Initialize an empty board.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def collides(self, shape: np.ndarray, origin: Position, dx: int = 0, dy: int = 0) -> bool:
        """Check whether a shape placed at origin + (dx, dy) hits anything.

        A filled cell collides if it is:
          - Left of column 0 or right of the last column.
          - Below the last row.
          - Inside the board (row >= 0) on a cell that is already occupied.

        Cells with a negative row never collide with locked content.

        Args:
            shape: Square int8 shape matrix.
            origin: Top-left corner of the shape's bounding box.
            dx: Column offset applied to origin.
            dy: Row offset applied to origin.

        Returns:
            True if the placement collides, False otherwise.
        """
        base_x = origin[0] + dx
        base_y = origin[1] + dy
        rows, cols = shape.shape
        for r in range(rows):
            for c in range(cols):
                if shape[r, c] == 0:
                    continue
                board_row = base_y + r
                board_col = base_x + c
                if board_col < 0 or board_col >= self.width:
                    return True
                if board_row >= self.height:
                    return True
                if board_row >= 0 and self.grid[board_row, board_col] != 0:
                    return True
        return False

    def lock(self, shape: np.ndarray, origin: Position, kind_id: int) -> None:
        """Write a piece into the grid at the given origin.

        Cells that fall outside the board (typically above row 0 when a piece
        locks while still sticking out of the top) are skipped.

        Args:
            shape: Square int8 shape matrix.
            origin: Top-left corner of the shape's bounding box.
            kind_id: Piece type ID (1-7) written into each covered cell.
        """
        x, y = origin
        rows, cols = shape.shape
        for r in range(rows):
            for c in range(cols):
                if shape[r, c] == 0:
                    continue
                board_row = y + r
                board_col = x + c
                if 0 <= board_row < self.height and 0 <= board_col < self.width:
                    self.grid[board_row, board_col] = kind_id

    def clear_full_rows(self) -> int:
        """Remove all fully filled rows and shift everything above them down.

        The grid is rebuilt in one assignment, so the board always has
        exactly `height` rows and the surviving rows keep their order.

        Returns:
            The number of rows cleared (0-4 in normal play).
        """
        full = np.all(self.grid != 0, axis=1)
        cleared = int(full.sum())
        if cleared == 0:
            return 0

        remaining = self.grid[~full]
        empty_rows = np.zeros((cleared, self.width), dtype=np.int8)
        self.grid = np.vstack([empty_rows, remaining])
        return cleared

    def kind_at(self, row: int, col: int) -> str | None:
        """Return the kind name that locked a cell, or None if it is empty."""
        value = int(self.grid[row, col])
        if value == 0:
            return None
        return piece_by_id(value)["name"]

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid))

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid.

        Returns:
            A numpy array of shape (height, width), dtype int8.
        """
        return self.grid.copy()

    def copy(self) -> Board:
        """Return an independent board with the same contents."""
        board = Board(self.width, self.height)
        board.grid = self.grid.copy()
        return board

    def reset(self) -> None:
        """Clear the entire board, setting all cells to 0."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
