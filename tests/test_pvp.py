import pytest

from xuangomoku.pvp import PieceType, PvpGame


def make_game():
    return PvpGame(11, 22, 110022)


def test_roles():
    game = make_game()
    assert game.role(11) is PieceType.BLACK
    assert game.role(22) is PieceType.WHITE
    assert game.role(33) is PieceType.NONE
    assert game.game_id == 110022


def test_initial_state():
    game = make_game()
    assert game.turn is PieceType.BLACK
    assert game.last_move == (-1, -1)
    assert all(cell is PieceType.NONE for row in game.board for cell in row)


def test_black_moves_first_then_turn_alternates():
    game = make_game()
    game.make_move(11, 7, 7)
    assert game.board[7][7] is PieceType.BLACK
    assert game.last_move == (7, 7)
    assert game.turn is PieceType.WHITE
    game.make_move(22, 7, 8)
    assert game.board[7][8] is PieceType.WHITE
    assert game.turn is PieceType.BLACK


def test_white_cannot_move_first():
    game = make_game()
    with pytest.raises(ValueError):
        game.make_move(22, 0, 0)
    assert game.turn is PieceType.BLACK
    assert game.last_move == (-1, -1)


def test_same_player_cannot_move_twice():
    game = make_game()
    game.make_move(11, 1, 1)
    with pytest.raises(ValueError):
        game.make_move(11, 2, 2)
    assert game.board[2][2] is PieceType.NONE


def test_stranger_cannot_move():
    game = make_game()
    with pytest.raises(ValueError):
        game.make_move(99, 0, 0)


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (15, 0), (0, 15)])
def test_off_board_rejected(x, y):
    game = make_game()
    with pytest.raises(ValueError):
        game.make_move(11, x, y)
    assert game.turn is PieceType.BLACK


def test_taken_cell_rejected():
    game = make_game()
    game.make_move(11, 4, 4)
    with pytest.raises(ValueError):
        game.make_move(22, 4, 4)
    assert game.turn is PieceType.WHITE
    assert game.last_move == (4, 4)