"""A two-player game of Gomoku with strict turn order."""

from __future__ import annotations

import enum

BOARD_SIZE = 15


class PieceType(enum.Enum):
    NONE = "none"
    BLACK = "black"
    WHITE = "white"


class PvpGame:
    """A game between two users; the first plays black and moves first."""

    def __init__(self, player1_id: int, player2_id: int, game_id: int) -> None:
        self.game_id = game_id
        self.player1_id = player1_id
        self.player2_id = player2_id
        self.player1_role = PieceType.BLACK
        self.player2_role = PieceType.WHITE
        self.turn = PieceType.BLACK
        """The side whose move comes next."""
        self.last_move: tuple[int, int] = (-1, -1)
        self._board = [[PieceType.NONE] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    @property
    def board(self) -> list[list[PieceType]]:
        return [row[:] for row in self._board]

    def role(self, user_id: int) -> PieceType:
        """The colour played by user_id, or NONE if the user is not in this game."""
        if user_id == self.player1_id:
            return self.player1_role
        if user_id == self.player2_id:
            return self.player2_role
        return PieceType.NONE

    def make_move(self, user_id: int, x: int, y: int) -> None:
        """Place the user's stone; raise ValueError if the move is not allowed."""
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            raise ValueError(f"move ({x}, {y}) is off the board")
        if self._board[x][y] is not PieceType.NONE:
            raise ValueError(f"cell ({x}, {y}) is already taken")
        piece = self.role(user_id)
        if piece is not self.turn:
            raise ValueError(f"it is not user {user_id}'s turn")
        self._board[x][y] = piece
        self.last_move = (x, y)
        self.turn = self.player2_role if self.turn is self.player1_role else self.player1_role