"""
Active piece model and the collision-checked operations on it.

Every operation is pure: it takes a piece and a board and returns either a
new ActivePiece or None when the requested placement would collide. The
caller keeps its current piece on None.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator

import numpy as np

from tetris_core.game.board import Board, Position
from tetris_core.game.pieces import get_piece, rotate_cw, shape_for


@dataclass(frozen=True, eq=False)
class ActivePiece:
    """The currently falling piece.

    Attributes:
        kind: Piece kind name ("I", "J", ...).
        shape: Current (possibly rotated) shape matrix.
        x: Column of the bounding box's top-left corner.
        y: Row of the bounding box's top-left corner.
        serial: Spawn counter value that created this piece.
    """
    kind: str
    shape: np.ndarray
    x: int
    y: int
    serial: int = 0

    @property
    def origin(self) -> Position:
        return Position(self.x, self.y)

    @property
    def kind_id(self) -> int:
        return get_piece(self.kind)["id"]


def spawn_position(kind: str, board: Board) -> Position:
    """Horizontally centered spawn origin on row 0."""
    width = shape_for(kind).shape[1]
    return Position(board.width // 2 - width // 2, 0)


def spawn(kind: str, board: Board, serial: int = 0) -> ActivePiece | None:
    """Create a new piece of `kind` at the top center of the board.

    Returns:
        The new ActivePiece, or None if the spawn cell is already blocked
        (the game-over signal).
    """
    x, y = spawn_position(kind, board)
    piece = ActivePiece(kind=kind, shape=shape_for(kind), x=x, y=y, serial=serial)
    if board.collides(piece.shape, piece.origin):
        return None
    return piece


def try_move(piece: ActivePiece, board: Board, dx: int, dy: int) -> ActivePiece | None:
    """Translate the piece by (dx, dy) if that placement is free."""
    if board.collides(piece.shape, piece.origin, dx, dy):
        return None
    return replace(piece, x=piece.x + dx, y=piece.y + dy)


def try_rotate(piece: ActivePiece, board: Board) -> ActivePiece | None:
    """Rotate the piece clockwise in place.

    No wall kicks: if the rotated shape does not fit at the same origin the
    rotation is rejected.
    """
    rotated = rotate_cw(piece.shape)
    if board.collides(rotated, piece.origin):
        return None
    return replace(piece, shape=rotated)


def hard_drop_offset(piece: ActivePiece, board: Board) -> int:
    """Number of rows the piece can fall before it would collide."""
    offset = 0
    while not board.collides(piece.shape, piece.origin, 0, offset + 1):
        offset += 1
    return offset


def piece_cells(piece: ActivePiece, dy: int = 0) -> Iterator[tuple[int, int]]:
    """Yield (row, col) board coordinates of the piece's occupied cells."""
    rows, cols = np.nonzero(piece.shape)
    for r, c in zip(rows.tolist(), cols.tolist()):
        yield piece.y + dy + r, piece.x + c
