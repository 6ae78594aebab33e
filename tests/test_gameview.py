from xuangomoku.board import Piece
from xuangomoku.gameview import MY_TURN_TEXT, THEIR_TURN_TEXT, GameView


def test_local_view_starts_on_my_turn():
    view = GameView()
    assert view.game_id == -1
    assert view.my_turn is True
    assert view.turn_label() == "轮到我方"
    assert view.board.my_turn is False


def test_matched_white_view():
    view = GameView(7, False)
    assert view.game_id == 7
    assert view.board.my_turn is False
    assert view.turn_label() == "轮到对方"
    assert view.my_turn is True


def test_matched_black_view_can_play():
    view = GameView(3, True)
    sent = []
    view.move_listeners.append(lambda r, c: sent.append((r, c)))
    view.board.click(6, 6)
    assert view.board.click(6, 6) is True
    assert sent == [(6, 6)]
    assert view.my_turn is False
    assert view.turn_label() == THEIR_TURN_TEXT


def test_on_board_move_ignored_when_not_my_turn():
    view = GameView()
    sent = []
    view.move_listeners.append(lambda r, c: sent.append((r, c)))
    assert view.on_board_move(1, 2) is True
    assert view.on_board_move(3, 4) is False
    assert sent == [(1, 2)]


def test_opponent_moved_restores_turn():
    view = GameView()
    view.on_board_move(0, 0)
    view.set_opponent_moved()
    assert view.my_turn is True
    assert view.turn_label() == MY_TURN_TEXT


def test_set_my_turn_updates_label():
    view = GameView()
    view.set_my_turn(False)
    assert view.my_turn is False
    assert view.turn_label() == THEIR_TURN_TEXT


def test_board_turn_change_updates_label():
    view = GameView(5, True)
    view.board.set_my_turn(False)
    assert view.turn_label() == THEIR_TURN_TEXT
    view.board.set_my_turn(True)
    assert view.turn_label() == MY_TURN_TEXT


def test_reset_gives_turn_by_colour():
    view = GameView(9, False)
    view.board.confirm_move(2, 2)
    view.reset()
    assert view.board.moves == []
    assert view.my_turn is False
    assert view.turn_label() == THEIR_TURN_TEXT


def test_game_over_message():
    view = GameView()
    messages = []
    view.game_over_listeners.append(messages.append)
    for i in range(4):
        view.board.confirm_move(7, i)
        view.board.confirm_move(0, i)
    view.board.confirm_move(7, 4)
    assert messages == ["黑棋胜利！"]
    assert view.game_over_messages == messages


def test_white_win_message():
    view = GameView()
    messages = []
    view.game_over_listeners.append(messages.append)
    view.board.confirm_move(14, 14)
    for i in range(4):
        view.board.confirm_move(5, i)
        view.board.confirm_move(12, i)
    view.board.confirm_move(5, 4)
    assert messages == ["白棋胜利！"]


def test_set_user_id_reaches_board():
    view = GameView()
    view.set_user_id(42)
    assert view.user_id == 42
    assert view.board.user_id == 42
    assert view.board.grid[0][0] is Piece.EMPTY