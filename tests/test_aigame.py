from unittest import mock

import pytest

from xuangomoku.aigame import AI_PLAYER, BOARD_SIZE, EMPTY, HUMAN_PLAYER, AiGame


def make_game():
    return AiGame(1, delay=0)


def test_new_game_is_empty():
    game = make_game()
    assert all(cell == EMPTY for row in game.board for cell in row)
    assert len(game.board) == BOARD_SIZE
    assert game.last_move == (-1, -1)
    assert game.winner == "none"
    assert game.game_over is False
    assert game.is_draw() is False


def test_human_move_places_black_stone():
    game = make_game()
    game.human_move(3, 4)
    assert game.board[3][4] == HUMAN_PLAYER
    assert game.last_move == (3, 4)
    assert game.move_count == 1


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (BOARD_SIZE, 0), (0, BOARD_SIZE)])
def test_human_move_off_board_rejected(x, y):
    game = make_game()
    with pytest.raises(ValueError):
        game.human_move(x, y)
    assert game.move_count == 0


def test_human_move_on_taken_cell_rejected():
    game = make_game()
    game.human_move(5, 5)
    with pytest.raises(ValueError):
        game.human_move(5, 5)
    assert game.move_count == 1


def test_human_five_in_a_row_wins():
    game = make_game()
    for y in range(5):
        game.human_move(2, y)
    assert game.game_over is True
    assert game.winner == "human"
    with pytest.raises(ValueError):
        game.human_move(10, 10)


def test_human_diagonal_win():
    game = make_game()
    for i in range(5):
        game.human_move(i + 3, i + 3)
    assert game.winner == "human"


def test_four_is_not_a_win():
    game = make_game()
    for y in range(4):
        game.human_move(2, y)
    assert game.game_over is False
    assert game.winner == "none"


def test_check_win_counts_neighbours_of_empty_cell():
    game = make_game()
    for y in range(4):
        game.human_move(0, y)
    assert game.check_win(0, 4, HUMAN_PLAYER) is True
    assert game.check_win(0, 4, AI_PLAYER) is False


def test_ai_blocks_open_four():
    game = make_game()
    for y in range(4):
        game.human_move(0, y)
    game.ai_move()
    assert game.last_move == (0, 4)
    assert game.board[0][4] == AI_PLAYER
    assert game.game_over is False


def test_ai_move_places_exactly_one_white_stone():
    game = make_game()
    game.human_move(7, 7)
    game.ai_move()
    board = game.board
    whites = [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE) if board[r][c] == AI_PLAYER]
    assert len(whites) == 1
    assert whites[0] == game.last_move
    assert game.move_count == 2
    assert board[7][7] == HUMAN_PLAYER


def test_ai_does_not_move_after_game_over():
    game = make_game()
    for y in range(5):
        game.human_move(2, y)
    before = game.board
    game.ai_move()
    assert game.board == before
    assert game.move_count == 5


def test_ai_move_waits_for_delay():
    game = AiGame(1)
    game.human_move(7, 7)
    with mock.patch("time.sleep") as sleep:
        game.ai_move()
    sleep.assert_called_once_with(0.5)
    assert game.move_count == 2


def test_ai_and_human_play_many_rounds_consistently():
    game = make_game()
    moves = [(r, c) for r in range(0, BOARD_SIZE, 3) for c in range(0, BOARD_SIZE, 4)]
    played = 0
    for x, y in moves:
        if game.game_over:
            break
        if game.board[x][y] != EMPTY:
            continue
        game.human_move(x, y)
        game.ai_move()
        played += 1
    board = game.board
    stones = sum(cell != EMPTY for row in board for cell in row)
    assert stones == game.move_count