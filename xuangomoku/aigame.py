"""Gomoku played by one human (black) against a simple computer opponent (white)."""

from __future__ import annotations

import itertools
import random
import threading
import time
from collections.abc import Iterator

BOARD_SIZE = 15

EMPTY = "empty"
AI_PLAYER = "white"
HUMAN_PLAYER = "black"

_LINE_DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))
_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (-1, -1), (1, -1), (-1, 1))


def _in_board(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def _cells() -> Iterator[tuple[int, int]]:
    return itertools.product(range(BOARD_SIZE), repeat=2)


class AiGame:
    """One human-versus-computer game on a 15x15 board."""

    def __init__(self, user_id: int, delay: float = 0.5, rng: random.Random | None = None) -> None:
        self.user_id = user_id
        self.delay = delay
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.RLock()
        self._board = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._move_count = 0
        self._last_move = (-1, -1)
        self._game_over = False
        self._winner = "none"

    @property
    def board(self) -> list[list[str]]:
        """A copy of the board; each cell is "empty", "black" or "white"."""
        with self._lock:
            return [row[:] for row in self._board]

    @property
    def last_move(self) -> tuple[int, int]:
        with self._lock:
            return self._last_move

    @property
    def move_count(self) -> int:
        with self._lock:
            return self._move_count

    @property
    def game_over(self) -> bool:
        with self._lock:
            return self._game_over

    @property
    def winner(self) -> str:
        """"none", "human" or "ai"."""
        with self._lock:
            return self._winner

    def is_draw(self) -> bool:
        """True once every cell of the board has been played."""
        with self._lock:
            return self._move_count >= BOARD_SIZE * BOARD_SIZE

    def human_move(self, x: int, y: int) -> None:
        """Place a black stone; raise ValueError if the move is not allowed."""
        with self._lock:
            if not _in_board(x, y):
                raise ValueError(f"move ({x}, {y}) is off the board")
            if self._board[x][y] != EMPTY:
                raise ValueError(f"cell ({x}, {y}) is already taken")
            if self._game_over or self.is_draw():
                raise ValueError("the game is over")
            self._place(x, y, HUMAN_PLAYER)
            if self.check_win(x, y, HUMAN_PLAYER):
                self._game_over = True
                self._winner = "human"

    def ai_move(self) -> None:
        """Let the computer play one white stone, unless the game has ended."""
        with self._lock:
            if self._game_over or self.is_draw():
                return
            if self.delay > 0:
                time.sleep(self.delay)
            x, y = self._best_move()
            self._place(x, y, AI_PLAYER)
            if self.check_win(x, y, AI_PLAYER):
                self._game_over = True
                self._winner = "ai"

    def check_win(self, x: int, y: int, player: str) -> bool:
        """True if (x, y) together with the stones of player around it makes five in a line."""
        with self._lock:
            for dx, dy in _LINE_DIRECTIONS:
                count = 1 + self._run(x, y, dx, dy, player) + self._run(x, y, -dx, -dy, player)
                if count >= 5:
                    return True
            return False

    def _run(self, x: int, y: int, dx: int, dy: int, player: str) -> int:
        count = 0
        for step in range(1, 5):
            nx, ny = x + dx * step, y + dy * step
            if not _in_board(nx, ny) or self._board[nx][ny] != player:
                break
            count += 1
        return count

    def _place(self, x: int, y: int, player: str) -> None:
        self._board[x][y] = player
        self._move_count += 1
        self._last_move = (x, y)

    def _empty_cells(self) -> Iterator[tuple[int, int]]:
        return ((r, c) for r, c in _cells() if self._board[r][c] == EMPTY)

    def _wins_with(self, r: int, c: int, player: str) -> bool:
        self._board[r][c] = player
        try:
            return self.check_win(r, c, player)
        finally:
            self._board[r][c] = EMPTY

    def _threat(self, r: int, c: int) -> int:
        threat = 0
        for dr, dc in _LINE_DIRECTIONS:
            count = 1
            for step in (1, 2):
                nr, nc = r + step * dr, c + step * dc
                if _in_board(nr, nc) and self._board[nr][nc] == HUMAN_PLAYER:
                    count += 1
            threat += count
        return threat

    def _near_occupied(self, r: int, c: int) -> bool:
        return any(
            _in_board(r + dr, c + dc) and self._board[r + dr][c + dc] != EMPTY
            for dr, dc in _NEIGHBOURS
        )

    def _best_move(self) -> tuple[int, int]:
        # Win at once, or block the human's winning cell, whichever comes first.
        for r, c in self._empty_cells():
            if self._wins_with(r, c, AI_PLAYER) or self._wins_with(r, c, HUMAN_PLAYER):
                return r, c

        best: tuple[int, int] | None = None
        max_threat = -1
        for r, c in self._empty_cells():
            threat = self._threat(r, c)
            if threat > max_threat:
                max_threat = threat
                best = (r, c)
        if best is not None:
            return best

        near = [cell for cell in self._empty_cells() if self._near_occupied(*cell)]
        if near:
            return near[self._rng.randrange(len(near))]

        first = next(self._empty_cells(), None)
        if first is None:
            raise RuntimeError("the board is full")
        return first