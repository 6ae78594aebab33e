"""Requests, responses, sessions and the shared state of the game server."""

from __future__ import annotations

import enum
import json
import secrets
import threading
from dataclasses import dataclass, field
from http.cookies import CookieError, SimpleCookie
from typing import Any

from xuangomoku.aigame import AiGame
from xuangomoku.lobby import PvpLobby
from xuangomoku.users import UserStore

SESSION_COOKIE = "sessionId"


@dataclass
class Request:
    """An HTTP request as seen by the handlers."""

    method: str = "GET"
    path: str = "/"
    version: str = "HTTP/1.1"
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    query: dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str:
        """The value of a header, matched without regard to case, or ""."""
        wanted = name.lower()
        return next((v for k, v in self.headers.items() if k.lower() == wanted), "")

    @property
    def cookies(self) -> dict[str, str]:
        jar = SimpleCookie()
        try:
            jar.load(self.header("Cookie"))
        except CookieError:
            return {}
        return {key: morsel.value for key, morsel in jar.items()}


@dataclass
class Response:
    """An HTTP response filled in by the handlers."""

    version: str = "HTTP/1.1"
    status: int = 200
    reason: str = "OK"
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    close: bool = False

    def set_json(
        self,
        status: int,
        reason: str,
        payload: Any,
        close: bool = False,
        indent: int | None = 4,
    ) -> None:
        """Set the status line and a JSON body; a None payload gives an empty body."""
        self.status = status
        self.reason = reason
        self.close = close
        self.headers["Content-Type"] = "application/json"
        if payload is None:
            self.body = ""
            return
        separators = (",", ":") if indent is None else (",", ": ")
        self.body = json.dumps(
            payload, indent=indent, separators=separators, sort_keys=True, ensure_ascii=False
        )


@dataclass
class Session:
    """Per-client string values, identified by a cookie."""

    id: str
    values: dict[str, str] = field(default_factory=dict)


class SessionManager:
    """In-memory session store keyed by the session cookie."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, Session] = {}

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def get_session(self, request: Request, response: Response) -> Session:
        """The request's session, or a new one announced through Set-Cookie."""
        session_id = request.cookies.get(SESSION_COOKIE)
        with self._lock:
            if session_id is not None and session_id in self._sessions:
                return self._sessions[session_id]
            session = Session(secrets.token_hex(16))
            self._sessions[session.id] = session
        response.headers["Set-Cookie"] = f"{SESSION_COOKIE}={session.id}; Path=/; HttpOnly"
        return session

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)


class GameType(enum.IntEnum):
    NO_GAME = 0
    MAN_VS_AI = 1
    MAN_VS_MAN = 2


class ServerState:
    """Everything the handlers share: accounts, sessions, games and online counts."""

    def __init__(self, users: UserStore) -> None:
        self.users = users
        self.sessions = SessionManager()
        self.ai_games: dict[int, AiGame] = {}
        self.ai_games_lock = threading.Lock()
        self.online_users: dict[int, bool] = {}
        self.online_lock = threading.Lock()
        self.lobby = PvpLobby()
        self._max_online = 0
        self._max_lock = threading.Lock()

    @property
    def max_online(self) -> int:
        """Highest number of users ever online at once."""
        with self._max_lock:
            return self._max_online

    @property
    def cur_online(self) -> int:
        return len(self.online_users)

    @property
    def user_count(self) -> int:
        return self.users.count()

    def update_max_online(self, online: int) -> None:
        with self._max_lock:
            self._max_online = max(self._max_online, online)

    def logged_in_user(self, request: Request, response: Response) -> int | None:
        """The session's user id; if not logged in, answer 401 and return None."""
        session = self.sessions.get_session(request, response)
        if session.values.get("isLoggedIn", "") != "true":
            response.set_json(
                401,
                "Unauthorized",
                {"status": "error", "message": "Unauthorized"},
                close=True,
            )
            return None
        return int(session.values.get("userId", ""))