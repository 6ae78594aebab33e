"""The client's Gomoku board: stones, selection, turn and win detection."""

from __future__ import annotations

import enum
import itertools
from collections.abc import Callable
from dataclasses import dataclass

BOARD_SIZE = 15
GRID_SIZE = 30
BOARD_MARGIN = 15
PIECE_RADIUS = 13
PIXEL_SIZE = BOARD_MARGIN * 2 + GRID_SIZE * (BOARD_SIZE - 1)

_LINE_DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


class Piece(enum.IntEnum):
    """Content of a cell; BLACK and WHITE double as winner codes 1 and 2."""

    EMPTY = 0
    BLACK = 1
    WHITE = 2


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    piece: Piece


def _in_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def _grid_index(pixel: int) -> int:
    # Division truncating toward zero, as the board's click mapping requires.
    return int((pixel - BOARD_MARGIN + GRID_SIZE // 2) / GRID_SIZE)


class GomokuBoard:
    """A 15x15 board on which the local player selects and confirms moves.

    A first click on an empty cell selects it; a second click on the same
    cell plays it. Listeners are told about finished games, played moves
    and changes of turn.
    """

    def __init__(self) -> None:
        self.user_id = -1
        self.black_turn = True
        self.selection: tuple[int, int] | None = None
        self._my_turn = False
        self._grid = [[Piece.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._moves: list[Move] = []
        self.game_over_listeners: list[Callable[[Piece], None]] = []
        self.player_move_listeners: list[Callable[[int, int], None]] = []
        self.turn_changed_listeners: list[Callable[[bool], None]] = []

    @property
    def my_turn(self) -> bool:
        return self._my_turn

    @property
    def grid(self) -> list[list[Piece]]:
        """A copy of the board, indexed [row][col]."""
        return [row[:] for row in self._grid]

    @property
    def moves(self) -> list[Move]:
        return list(self._moves)

    def cell_at(self, x: int, y: int) -> tuple[int, int] | None:
        """The (row, col) under pixel (x, y), or None if it falls off the board."""
        row, col = _grid_index(y), _grid_index(x)
        return (row, col) if _in_board(row, col) else None

    def click(self, row: int, col: int) -> bool:
        """Handle a click on a cell; True if it played a move."""
        if not self._my_turn:
            return False
        if not _in_board(row, col) or self._grid[row][col] is not Piece.EMPTY:
            return False
        if self.selection == (row, col):
            self.confirm_move(row, col)
            return True
        self.selection = (row, col)
        return False

    def _place(self, row: int, col: int) -> Piece:
        if not _in_board(row, col):
            raise ValueError(f"cell ({row}, {col}) is off the board")
        piece = Piece.BLACK if self.black_turn else Piece.WHITE
        self._moves.append(Move(row, col, piece))
        self._grid[row][col] = piece
        return piece

    def confirm_move(self, row: int, col: int) -> None:
        """Play the stone of the side to move at (row, col) and announce it."""
        piece = self._place(row, col)
        if self.check_win(row, col, piece):
            for listener in list(self.game_over_listeners):
                listener(piece)
            self.restart()
        self.black_turn = not self.black_turn
        for listener in list(self.player_move_listeners):
            listener(row, col)
        self.selection = None

    def opponent_move(self, row: int, col: int) -> None:
        """Record the opponent's stone at (row, col) without announcing it."""
        self._place(row, col)
        self.black_turn = not self.black_turn

    def undo_move(self) -> Move | None:
        """Take back the last stone and give the turn back to its side."""
        if not self._moves:
            return None
        last = self._moves.pop()
        self._grid[last.row][last.col] = Piece.EMPTY
        self.black_turn = last.piece is Piece.BLACK
        self.selection = None
        return last

    def restart(self) -> None:
        """Clear the board and give black the first move."""
        for row, col in itertools.product(range(BOARD_SIZE), repeat=2):
            self._grid[row][col] = Piece.EMPTY
        self._moves.clear()
        self.black_turn = True
        self.selection = None

    def check_win(self, row: int, col: int, player: Piece) -> bool:
        """True if (row, col) and the player's stones beside it make five in a line."""
        for dr, dc in _LINE_DIRECTIONS:
            count = 1
            for sign in (1, -1):
                r, c = row + sign * dr, col + sign * dc
                while _in_board(r, c) and self._grid[r][c] == player:
                    count += 1
                    r += sign * dr
                    c += sign * dc
            if count >= 5:
                return True
        return False

    def set_my_turn(self, my_turn: bool) -> None:
        self._my_turn = my_turn
        for listener in list(self.turn_changed_listeners):
            listener(my_turn)