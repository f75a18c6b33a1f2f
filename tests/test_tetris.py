import pytest

from blockfall.blocks import TetrisState, mono_blocks
from blockfall.matrix import Matrix
from blockfall.tetris import Tetris, build_screen, delete_full_lines


@pytest.fixture
def game():
    return Tetris(10, 10, mono_blocks())


def test_build_screen_layout():
    screen = build_screen(3, 3, 1)
    cells = screen.to_lists()
    assert screen.rows == 3 + 1
    assert screen.cols == 3 + 2
    for row in cells[:3]:
        assert row[0] == 1 and row[-1] == 1
        assert row[1:4] == [0, 0, 0]
    assert cells[3] == [1, 1, 1, 1, 1]


def test_delete_one_full_line():
    screen = build_screen(3, 3, 1)
    screen.paste(Matrix.from_rows([[1, 1, 1]]), 2, 1)
    screen.paste(Matrix.from_rows([[1, 0, 0]]), 1, 1)
    deleted = delete_full_lines(screen, Matrix(2, 2), 1, 1)
    assert deleted == 1
    cells = screen.to_lists()
    assert cells[2][1:4] == [1, 0, 0]
    assert cells[1][1:4] == [0, 0, 0]
    assert cells[0][1:4] == [0, 0, 0]


def test_delete_two_full_lines():
    screen = build_screen(3, 3, 1)
    screen.paste(Matrix.from_rows([[1, 1, 1], [1, 1, 1]]), 1, 1)
    assert delete_full_lines(screen, Matrix(2, 2), 1, 1) == 2
    assert screen.clip(0, 1, 3, 4).sum() == 0


def test_no_full_line_leaves_screen():
    screen = build_screen(3, 3, 1)
    screen.paste(Matrix.from_rows([[1, 0, 1]]), 2, 1)
    before = screen.copy()
    assert delete_full_lines(screen, Matrix(2, 2), 1, 1) == 0
    assert screen == before


def test_initial_board(game):
    assert game.state is TetrisState.NEW_BLOCK
    assert game.output_screen.rows == 10 + game.wall_depth
    assert game.output_screen.cols == 10 + 2 * game.wall_depth
    assert game.output_screen == game.input_screen


def test_wrong_block_index_keeps_new_block(game):
    assert game.accept("9") is TetrisState.NEW_BLOCK
    assert game.accept("x") is TetrisState.NEW_BLOCK


def test_new_block_draws_block(game):
    assert game.accept("0") is TetrisState.RUNNING
    block_cells = game.current_block.sum()
    assert game.output_screen.sum() == game.input_screen.sum() + block_cells
    assert game.top == 0
    assert game.left == game.cols // 2 - game.wall_depth // 2


def test_move_left_and_right(game):
    game.accept("0")
    start = game.left
    game.accept("a")
    assert game.left == start - 1
    game.accept("d")
    game.accept("l")
    assert game.left == start + 1
    game.accept("j")
    assert game.left == start


def test_left_wall_stops_block(game):
    game.accept("0")
    for _ in range(20):
        assert game.accept("a") is TetrisState.RUNNING
    assert game.left == game.wall_depth
    assert not game.output_screen.any_greater_than(1)


def test_right_wall_stops_block(game):
    game.accept("0")
    for _ in range(20):
        game.accept("d")
    assert game.left + game.current_block.cols == game.wall_depth + 10
    assert not game.output_screen.any_greater_than(1)


def test_rotation_changes_degree(game):
    game.accept("1")
    game.accept("s")
    game.accept("w")
    assert game.degree == 1
    assert game.current_block == game.blocks.shape(1, 1)
    game.accept("i")
    assert game.degree == 2


def test_drop_lands_on_floor(game):
    game.accept("0")
    assert game.accept(" ") is TetrisState.NEW_BLOCK
    assert game.top + game.current_block.rows == 10
    assert game.output_screen == game.input_screen
    cells = game.output_screen.to_lists()
    assert cells[9][game.left] == 1
    assert cells[8][game.left + 1] == 1


def test_down_until_touchdown(game):
    game.accept("0")
    states = [game.accept("s") for _ in range(20)]
    assert TetrisState.NEW_BLOCK in states
    assert game.state is TetrisState.NEW_BLOCK


def test_unknown_key_keeps_position(game):
    game.accept("0")
    position = (game.top, game.left, game.degree)
    assert game.accept("x") is TetrisState.RUNNING
    assert (game.top, game.left, game.degree) == position


def test_stacking_finishes_game(game):
    state = game.state
    for _ in range(20):
        state = game.accept("0")
        if state is TetrisState.FINISHED:
            break
        state = game.accept(" ")
    assert state is TetrisState.FINISHED
    assert game.accept("a") is TetrisState.FINISHED
    assert game.accept("0") is TetrisState.FINISHED


def test_incoming_rows_pushed_from_bottom(game):
    game.accept("0")
    ws_dy = game.output_screen.rows - game.wall_depth
    ws_dx = game.output_screen.cols - 2 * game.wall_depth
    incoming = Matrix.from_rows([[1] * ws_dx])
    assert game.accept("N", incoming) is TetrisState.RUNNING
    cells = game.output_screen.to_lists()
    assert cells[ws_dy - 1][:ws_dx] == [1] * ws_dx


def test_incoming_key_without_rows_changes_nothing(game):
    game.accept("0")
    before = game.output_screen.copy()
    assert game.accept("N") is TetrisState.RUNNING
    assert game.output_screen == before