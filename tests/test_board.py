import numpy as np

from tetris_core.game.board import Board, Position
from tetris_core.game.pieces import get_piece, rotate_cw, shape_for

O_SHAPE = shape_for("O")
I_SHAPE = shape_for("I")


def test_new_board_is_empty_with_fixed_size():
    board = Board(10, 20)
    assert board.grid.shape == (20, 10)
    assert board.grid.dtype == np.int8
    assert board.is_empty()


def test_collides_with_walls_and_floor():
    board = Board(10, 20)
    assert not board.collides(O_SHAPE, Position(0, 0))
    assert board.collides(O_SHAPE, Position(0, 0), dx=-1)
    assert not board.collides(O_SHAPE, Position(8, 0))
    assert board.collides(O_SHAPE, Position(8, 0), dx=1)
    assert not board.collides(O_SHAPE, Position(4, 18))
    assert board.collides(O_SHAPE, Position(4, 18), dy=1)


def test_collides_with_locked_cells():
    board = Board(10, 20)
    board.grid[10, 5] = 3
    assert board.collides(O_SHAPE, Position(4, 9))
    assert board.collides(O_SHAPE, Position(5, 10))
    assert not board.collides(O_SHAPE, Position(6, 9))
    assert not board.collides(O_SHAPE, Position(4, 7))
    assert board.collides(O_SHAPE, Position(4, 7), dy=2)


def test_cells_above_the_board_only_hit_side_walls():
    board = Board(10, 20)
    board.grid[0, :] = 1
    # rows -2 and -1 are above the visible board
    assert not board.collides(O_SHAPE, Position(4, -2))
    assert board.collides(O_SHAPE, Position(4, -1))
    assert board.collides(O_SHAPE, Position(-1, -2))
    assert board.collides(O_SHAPE, Position(9, -2))


def test_empty_shape_cells_ignore_bounds():
    board = Board(10, 20)
    vertical_i = rotate_cw(I_SHAPE)
    # Column 2 of the matrix is filled; x=-2 puts it on column 0
    assert not board.collides(vertical_i, Position(-2, 0))
    assert board.collides(vertical_i, Position(-3, 0))
    # Horizontal I on row 19 with its empty rows hanging below the floor
    assert not board.collides(I_SHAPE, Position(0, 18))


def test_collides_matches_brute_force_on_small_board():
    board = Board(4, 4)
    board.grid[3] = [1, 1, 0, 1]
    board.grid[2, 0] = 1
    t_shape = shape_for("T")
    for x in range(-3, 5):
        for y in range(-3, 5):
            expected = False
            for r, c in zip(*np.nonzero(t_shape)):
                row, col = y + r, x + c
                if col < 0 or col >= 4 or row >= 4:
                    expected = True
                elif row >= 0 and board.grid[row, col] != 0:
                    expected = True
            assert board.collides(t_shape, Position(x, y)) == expected, (x, y)


def test_lock_writes_kind_id():
    board = Board(10, 20)
    o_id = get_piece("O")["id"]
    board.lock(O_SHAPE, Position(4, 18), o_id)
    assert board.grid[18, 4] == o_id
    assert board.grid[19, 5] == o_id
    assert int(np.count_nonzero(board.grid)) == 4
    assert board.kind_at(19, 4) == "O"
    assert board.kind_at(0, 0) is None


def test_lock_clips_cells_above_the_board():
    board = Board(10, 20)
    board.lock(O_SHAPE, Position(4, -1), 4)
    assert int(np.count_nonzero(board.grid)) == 2
    assert board.grid[0, 4] == 4
    assert board.grid[0, 5] == 4


def test_clear_full_rows_removes_and_compacts():
    board = Board(4, 6)
    board.grid[5] = [1, 1, 1, 1]
    board.grid[4] = [2, 0, 0, 0]
    board.grid[3] = [3, 3, 3, 3]
    board.grid[2] = [0, 4, 0, 0]

    assert board.clear_full_rows() == 2
    assert board.grid.shape == (6, 4)
    assert board.grid[5].tolist() == [2, 0, 0, 0]
    assert board.grid[4].tolist() == [0, 4, 0, 0]
    assert not np.any(board.grid[:4])


def test_clear_full_rows_without_full_rows_is_noop():
    board = Board(4, 4)
    board.grid[3] = [1, 0, 1, 1]
    before = board.get_grid()
    assert board.clear_full_rows() == 0
    assert np.array_equal(board.grid, before)


def test_clear_preserves_order_of_surviving_rows():
    board = Board(5, 10)
    patterns = {}
    for row in range(10):
        if row % 3 == 0:
            board.grid[row] = 7
        else:
            board.grid[row, row % 5] = row % 7 + 1
            patterns[row] = board.grid[row].copy()

    cleared = board.clear_full_rows()
    assert cleared == 4
    assert board.grid.shape == (10, 5)
    survivors = [patterns[row] for row in sorted(patterns)]
    for offset, expected in enumerate(survivors):
        assert np.array_equal(board.grid[cleared + offset], expected)
    assert not np.any(board.grid[:cleared])


def test_copy_is_independent():
    board = Board(10, 20)
    clone = board.copy()
    clone.grid[0, 0] = 1
    assert board.is_empty()
    assert not clone.is_empty()
