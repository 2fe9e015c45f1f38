import numpy as np

from tetris_core.game.board import Board
from tetris_core.game.controller import (
    ActivePiece,
    hard_drop_offset,
    piece_cells,
    spawn,
    spawn_position,
    try_move,
    try_rotate,
)
from tetris_core.game.pieces import rotate_cw, shape_for


def test_spawn_is_horizontally_centered_on_row_zero():
    board = Board(10, 20)
    assert spawn_position("O", board) == (4, 0)
    assert spawn_position("I", board) == (3, 0)
    for kind in ("J", "L", "S", "T", "Z"):
        assert spawn_position(kind, board) == (4, 0)

    piece = spawn("O", board, serial=5)
    assert piece.kind == "O"
    assert piece.serial == 5
    assert sorted(piece_cells(piece)) == [(0, 4), (0, 5), (1, 4), (1, 5)]


def test_spawn_on_odd_width_board():
    board = Board(7, 20)
    assert spawn_position("O", board) == (2, 0)
    assert spawn_position("I", board) == (1, 0)


def test_spawn_into_occupied_center_signals_game_over():
    board = Board(10, 20)
    board.grid[1, 5] = 2
    assert spawn("O", board) is None
    assert spawn("I", board) is None
    # T covers (0,5), (1,4), (1,5), (1,6)
    assert spawn("T", board) is None


def test_try_move_commits_only_free_placements():
    board = Board(10, 20)
    piece = spawn("O", board)

    left = try_move(piece, board, -1, 0)
    assert (left.x, left.y) == (3, 0)
    assert (piece.x, piece.y) == (4, 0)

    down = try_move(piece, board, 0, 1)
    assert (down.x, down.y) == (4, 1)

    board.grid[0, 3] = 1
    assert try_move(piece, board, -1, 0) is None


def test_try_move_stops_at_walls():
    board = Board(10, 20)
    piece = spawn("O", board)
    for _ in range(4):
        piece = try_move(piece, board, -1, 0)
    assert piece.x == 0
    assert try_move(piece, board, -1, 0) is None


def test_try_rotate_keeps_origin():
    board = Board(10, 20)
    piece = spawn("T", board)
    rotated = try_rotate(piece, board)
    assert (rotated.x, rotated.y) == (piece.x, piece.y)
    assert np.array_equal(rotated.shape, rotate_cw(piece.shape))


def test_try_rotate_rejected_without_wall_kick():
    board = Board(10, 20)
    vertical = ActivePiece(kind="I", shape=rotate_cw(shape_for("I")), x=7, y=0)
    # Horizontal form would need columns 7..10
    assert try_rotate(vertical, board) is None


def test_try_rotate_rejected_by_stack():
    board = Board(10, 20)
    piece = spawn("T", board)
    # Rotated T needs (2, 5)
    board.grid[2, 5] = 1
    assert try_rotate(piece, board) is None


def test_hard_drop_offset_on_empty_board():
    board = Board(10, 20)
    assert hard_drop_offset(spawn("O", board), board) == 18
    # Horizontal I sits on row 1 of its box, so it can fall 18 rows too
    assert hard_drop_offset(spawn("I", board), board) == 18


def test_hard_drop_offset_stops_on_stack():
    board = Board(10, 20)
    board.grid[15, 5] = 1
    piece = spawn("O", board)
    assert hard_drop_offset(piece, board) == 13
    board.grid[2, 4] = 1
    assert hard_drop_offset(piece, board) == 0


def test_piece_cells_with_offset():
    board = Board(10, 20)
    piece = spawn("O", board)
    assert sorted(piece_cells(piece, dy=18)) == [(18, 4), (18, 5), (19, 4), (19, 5)]
