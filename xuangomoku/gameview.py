"""A game window's state: the board, whose turn it is, and the turn label."""

from __future__ import annotations

from collections.abc import Callable

from xuangomoku.board import GomokuBoard, Piece

MY_TURN_TEXT = "轮到我方"
THEIR_TURN_TEXT = "轮到对方"


class GameView:
    """Wraps a board for one game and passes confirmed moves on to listeners.

    Without a game id the view is a local board on which it is the player's
    turn; with one it belongs to a matched game in which black moves first.
    """

    def __init__(self, game_id: int | None = None, is_black: bool = False) -> None:
        self.board = GomokuBoard()
        self.user_id = -1
        self.move_listeners: list[Callable[[int, int], None]] = []
        self.game_over_listeners: list[Callable[[str], None]] = []
        self.game_over_messages: list[str] = []

        if game_id is None:
            self.game_id = -1
            self.is_black = False
        else:
            self.game_id = game_id
            self.is_black = is_black
            self.board.set_my_turn(is_black)

        self.board.player_move_listeners.append(self.on_board_move)
        self.board.game_over_listeners.append(self._on_game_over)
        self.board.turn_changed_listeners.append(self._update_label)

        self.my_turn = True
        if game_id is None:
            self._update_label(self.my_turn)
        else:
            self._update_label(is_black)
            self.board.restart()

    def _update_label(self, my_turn: bool) -> None:
        self._label_mine = my_turn

    def _on_game_over(self, winner: Piece) -> None:
        message = ("黑棋" if winner == Piece.BLACK else "白棋") + "胜利！"
        self.game_over_messages.append(message)
        for listener in list(self.game_over_listeners):
            listener(message)

    def set_user_id(self, user_id: int) -> None:
        self.user_id = user_id
        self.board.user_id = user_id

    def turn_label(self) -> str:
        """The text shown to tell the player whose turn it is."""
        return MY_TURN_TEXT if self._label_mine else THEIR_TURN_TEXT

    def on_board_move(self, row: int, col: int) -> bool:
        """Pass a move played on the board on, if it is the player's turn."""
        if not self.my_turn:
            return False
        for listener in list(self.move_listeners):
            listener(row, col)
        self.my_turn = False
        self._update_label(False)
        return True

    def set_opponent_moved(self) -> None:
        self.my_turn = True
        self._update_label(True)

    def set_my_turn(self, my_turn: bool) -> None:
        self.my_turn = my_turn
        self._update_label(my_turn)

    def reset(self) -> None:
        """Clear the board; black moves first."""
        self.board.restart()
        self.my_turn = self.is_black
        self._update_label(self.my_turn)