"""Matchmaking and move exchange for player-versus-player games."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

from xuangomoku.pvp import PieceType, PvpGame


class GameNotFoundError(LookupError):
    """No game with the given id exists."""


class InvalidMoveError(ValueError):
    """A move was refused by the game."""


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a match request: either a game and a colour, or still waiting."""

    matched: bool
    game_id: int | None = None
    role: str | None = None

    @property
    def message(self) -> str:
        return "match_success" if self.matched else "waiting_for_opponent"


class PvpLobby:
    """Waiting queue, pending matches and running games, guarded by one lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queue: deque[int] = deque()
        self._matched: dict[int, int] = {}
        self._games: dict[int, PvpGame] = {}

    @property
    def games(self) -> dict[int, PvpGame]:
        with self._lock:
            return dict(self._games)

    @property
    def waiting(self) -> list[int]:
        with self._lock:
            return list(self._queue)

    @staticmethod
    def _role_name(game: PvpGame, user_id: int) -> str:
        return "black" if game.role(user_id) is PieceType.BLACK else "white"

    def request_match(self, user_id: int) -> MatchResult:
        """Join the queue, or pair with a waiting player, or collect a pending match."""
        with self._lock:
            if user_id in self._matched:
                game_id = self._matched.pop(user_id)
                game = self._games[game_id]
                return MatchResult(True, game_id, self._role_name(game, user_id))

            queue = self._queue
            if len(queue) > 1 or (len(queue) == 1 and queue[0] != user_id):
                if queue[0] == user_id:
                    queue.rotate(-1)
                opponent_id = queue.popleft()
                game_id = user_id * 10000 + opponent_id
                game = PvpGame(user_id, opponent_id, game_id)
                self._games[game_id] = game
                self._matched[user_id] = game_id
                self._matched[opponent_id] = game_id
                return MatchResult(True, game_id, self._role_name(game, user_id))

            if not queue:
                queue.append(user_id)
            return MatchResult(False)

    def _game(self, game_id: int) -> PvpGame:
        try:
            return self._games[game_id]
        except KeyError:
            raise GameNotFoundError(f"game {game_id} not found") from None

    def move(self, user_id: int, game_id: int, x: int, y: int) -> None:
        """Play a stone for user_id in game game_id."""
        with self._lock:
            game = self._game(game_id)
            try:
                game.make_move(user_id, x, y)
            except ValueError as exc:
                raise InvalidMoveError(str(exc)) from exc

    def poll(self, user_id: int, game_id: int) -> tuple[int, int] | None:
        """The opponent's last move once it is user_id's turn, else None."""
        with self._lock:
            game = self._game(game_id)
            if game.role(user_id) is not game.turn:
                return None
            return game.last_move