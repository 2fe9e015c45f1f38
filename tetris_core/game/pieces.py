"""
Tetromino catalog: one canonical shape per piece kind.

Each piece is stored in its spawn orientation only. Other orientations are
derived on demand with rotate_cw(), so there is no rotation-state table and
no wall-kick data.

Coordinate convention:
  - Shapes are square int8 matrices using the smallest bounding box.
  - Non-zero entries mark occupied sub-cells.
  - On the board, row 0 is the top and row increases downward.
  - Column 0 is the left edge and column increases rightward.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Piece Colors: standard Tetris guideline colors (RGB)
# =============================================================================

COLOR_CYAN   = (0, 255, 255)    # I
COLOR_BLUE   = (0, 0, 255)      # J
COLOR_ORANGE = (255, 165, 0)    # L
COLOR_YELLOW = (255, 255, 0)    # O
COLOR_GREEN  = (0, 255, 0)      # S
COLOR_PURPLE = (128, 0, 128)    # T
COLOR_RED    = (255, 0, 0)      # Z


def _frozen(rows: list[list[int]]) -> np.ndarray:
    shape = np.array(rows, dtype=np.int8)
    shape.setflags(write=False)
    return shape


# =============================================================================
# Tetromino Definitions
# =============================================================================

I_PIECE: dict = {
    "id": 1,
    "name": "I",
    "color": COLOR_CYAN,
    "shape": _frozen([
        [0, 0, 0, 0],
        [1, 1, 1, 1],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]),
}

J_PIECE: dict = {
    "id": 2,
    "name": "J",
    "color": COLOR_BLUE,
    "shape": _frozen([
        [1, 0, 0],
        [1, 1, 1],
        [0, 0, 0],
    ]),
}

L_PIECE: dict = {
    "id": 3,
    "name": "L",
    "color": COLOR_ORANGE,
    "shape": _frozen([
        [0, 0, 1],
        [1, 1, 1],
        [0, 0, 0],
    ]),
}

O_PIECE: dict = {
    "id": 4,
    "name": "O",
    "color": COLOR_YELLOW,
    "shape": _frozen([
        [1, 1],
        [1, 1],
    ]),
}

S_PIECE: dict = {
    "id": 5,
    "name": "S",
    "color": COLOR_GREEN,
    "shape": _frozen([
        [0, 1, 1],
        [1, 1, 0],
        [0, 0, 0],
    ]),
}

T_PIECE: dict = {
    "id": 6,
    "name": "T",
    "color": COLOR_PURPLE,
    "shape": _frozen([
        [0, 1, 0],
        [1, 1, 1],
        [0, 0, 0],
    ]),
}

Z_PIECE: dict = {
    "id": 7,
    "name": "Z",
    "color": COLOR_RED,
    "shape": _frozen([
        [1, 1, 0],
        [0, 1, 1],
        [0, 0, 0],
    ]),
}

# =============================================================================
# Lookup tables
# =============================================================================

PIECE_TYPES: list[dict] = [I_PIECE, J_PIECE, L_PIECE, O_PIECE, S_PIECE, T_PIECE, Z_PIECE]

PIECE_KINDS: tuple[str, ...] = tuple(piece["name"] for piece in PIECE_TYPES)

PIECE_COLORS: dict[int, tuple[int, int, int]] = {
    piece["id"]: piece["color"] for piece in PIECE_TYPES
}

_BY_NAME: dict[str, dict] = {piece["name"]: piece for piece in PIECE_TYPES}
_BY_ID: dict[int, dict] = {piece["id"]: piece for piece in PIECE_TYPES}


def get_piece(kind: str) -> dict:
    """Return the piece dict for a kind name.

    Raises:
        KeyError: If ``kind`` is not one of PIECE_KINDS.
    """
    return _BY_NAME[kind]


def piece_by_id(piece_id: int) -> dict:
    """Return the piece dict for a board cell value (1-7)."""
    return _BY_ID[piece_id]


def shape_for(kind: str) -> np.ndarray:
    """Return the canonical (spawn) shape matrix of a kind."""
    return _BY_NAME[kind]["shape"]


def rotate_cw(shape: np.ndarray) -> np.ndarray:
    """Rotate a shape matrix 90 degrees clockwise.

    Equivalent to transposing and then reversing each row, so
    ``result[i][j] == shape[n - 1 - j][i]``.

    Args:
        shape: Square int8 matrix.

    Returns:
        A new read-only matrix of the same size.
    """
    rotated = np.array(np.rot90(shape, k=-1), dtype=np.int8)
    rotated.setflags(write=False)
    return rotated
