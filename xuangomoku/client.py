"""HTTP client for the game server: requests and interpretation of the replies."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from typing import Any, NoReturn
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests

logger = logging.getLogger(__name__)

CONNECTED_MESSAGE = "连接成功"


class ClientError(Exception):
    """A request failed: bad URL, network trouble, timeout or a reply that is not JSON."""


class Event(enum.Enum):
    """What a reply from the server means to the client."""

    CONNECTION_SUCCESS = "connection_success"
    REGISTER_SUCCESS = "register_success"
    LOGIN_SUCCESS = "login_success"
    GAME_BEGIN = "game_begin"
    OPPONENT_MOVE = "opponent_move"
    GENERIC_SUCCESS = "generic_success"
    REGISTER_FAILED = "register_failed"
    LOGIN_FAILED = "login_failed"
    GENERIC_FAILED = "generic_failed"
    PVP_MATCH_SUCCESS = "pvp_match_success"
    PVP_WAITING = "pvp_waiting"
    PVP_MOVE_SUCCESS = "pvp_move_success"
    OPPONENT_WAITING = "opponent_waiting"


@dataclass
class ResponseData:
    """The last reply received, with what it was understood to mean."""

    http_status: int = 0
    raw_data: bytes = b""
    json_data: dict[str, Any] = field(default_factory=dict)
    message: str = ""
    success: bool = False
    event: Event | None = None
    user_id: int | None = None
    game_id: int | None = None
    role: str | None = None
    move: tuple[int, int] | None = None


def normalize_url(text: str) -> str:
    """Prefix "http://" unless the text already names http or https."""
    if not text.startswith("http://") and not text.startswith("https://"):
        return "http://" + text
    return text


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _to_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


class GameClient:
    """Talks to one game server, keeping its session cookie between requests."""

    def __init__(self, base_url: str, timeout: float = 5.0) -> None:
        self.base_url = normalize_url(base_url)
        parts = urlsplit(self.base_url)
        try:
            parts.port
        except ValueError:
            raise ClientError("Invalid URL") from None
        if not parts.hostname:
            raise ClientError("Invalid URL")
        self.timeout = timeout
        self.session = requests.Session()
        self.last_response = ResponseData()
        self.user_id = -1
        self.game_id = -1

    def build_url(self, path: str) -> str:
        """The server URL with its path replaced by path."""
        parts = urlsplit(self.base_url)
        scheme = parts.scheme if parts.scheme.startswith("http") else "http"
        return urlunsplit((scheme, parts.netloc, path, parts.query, parts.fragment))

    def _fail(self, message: str, cause: BaseException) -> NoReturn:
        self.last_response.message = message
        self.last_response.success = False
        raise ClientError(message) from cause

    def _fetch(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
        json_header: bool = True,
    ) -> ResponseData:
        self.last_response = ResponseData()
        headers = {"Content-Type": "application/json"} if json_header else {}
        body = None
        if payload is not None:
            body = json.dumps(
                payload, separators=(",", ":"), sort_keys=True, ensure_ascii=False
            ).encode("utf-8")
        try:
            reply = self.session.request(
                method, url, headers=headers, data=body, timeout=self.timeout
            )
        except requests.Timeout as exc:
            self._fail("Request timed out", exc)
        except requests.RequestException as exc:
            self._fail(f"Network error: {exc}", exc)

        data = self.last_response
        data.http_status = reply.status_code
        data.raw_data = reply.content
        try:
            parsed = json.loads(reply.content)
        except ValueError as exc:
            self._fail(f"JSON parse error: {exc}", exc)
        data.json_data = parsed if isinstance(parsed, dict) else {}
        data.message = _to_str(data.json_data.get("message"))
        return data

    def _handle_general(self, data: ResponseData) -> ResponseData:
        body = data.json_data
        status = _to_str(body.get("status")).lower()
        data.success = data.http_status == 200
        if data.success:
            if status in ("success", "ok") or body.get("success") is True:
                message = data.message
                if message == "Register successful":
                    data.event = Event.REGISTER_SUCCESS
                elif message == "Login successful":
                    self.user_id = _to_int(body.get("userId"))
                    data.user_id = self.user_id
                    data.event = Event.LOGIN_SUCCESS
                elif message == CONNECTED_MESSAGE:
                    data.event = Event.CONNECTION_SUCCESS
                elif message == "AI game started":
                    data.event = Event.GAME_BEGIN
                elif message == "Move_Back":
                    last_move = body.get("last_move")
                    if isinstance(last_move, dict) and "x" in last_move and "y" in last_move:
                        data.move = (_to_int(last_move["x"]), _to_int(last_move["y"]))
                        data.event = Event.OPPONENT_MOVE
                else:
                    data.event = Event.GENERIC_SUCCESS
            else:
                data.event = Event.GENERIC_FAILED
        elif data.message == "username already exists":
            data.event = Event.REGISTER_FAILED
        elif data.message == "Invalid username or password":
            data.event = Event.LOGIN_FAILED
        else:
            data.event = Event.GENERIC_FAILED
        return data

    def _handle_pvp_start(self, data: ResponseData) -> ResponseData:
        body = data.json_data
        data.success = data.http_status == 200 and (
            _to_str(body.get("status")) == "ok" or body.get("success") is True
        )
        if not data.success:
            data.event = Event.GENERIC_FAILED
        elif data.message == "match_success":
            self.game_id = _to_int(body.get("game_id"))
            data.game_id = self.game_id
            data.role = _to_str(body.get("role"))
            data.event = Event.PVP_MATCH_SUCCESS
        elif data.message == "waiting_for_opponent":
            data.event = Event.PVP_WAITING
        else:
            data.event = Event.GENERIC_SUCCESS
        return data

    def _handle_pvp_move(self, data: ResponseData) -> ResponseData:
        body = data.json_data
        data.success = data.http_status == 200 and _to_str(body.get("status")) == "ok"
        if data.success and data.message == "move_saved":
            data.event = Event.PVP_MOVE_SUCCESS
        elif data.success and data.message == "waiting":
            data.event = Event.OPPONENT_WAITING
        elif data.success and data.message == "opponent_moved":
            data.move = (_to_int(body.get("x")), _to_int(body.get("y")))
            data.event = Event.OPPONENT_MOVE
        else:
            logger.warning("unexpected reply to a move request: %r", data.message)
        return data

    def connect(self) -> ResponseData:
        """Check that the server answers."""
        return self._handle_general(self._fetch("GET", self.base_url))

    def register(self, username: str, password: str) -> ResponseData:
        payload = {"username": username, "password": password}
        return self._handle_general(self._fetch("POST", self.build_url("/register"), payload))

    def login(self, username: str, password: str) -> ResponseData:
        payload = {"username": username, "password": password}
        return self._handle_general(self._fetch("POST", self.build_url("/login"), payload))

    def start_ai(self) -> ResponseData:
        """Start a game against the computer."""
        return self._handle_general(self._fetch("GET", self.build_url("/aiBot/start")))

    def ai_move(self, user_id: int, x: int, y: int) -> ResponseData:
        """Play a stone against the computer; the reply carries the computer's answer."""
        payload = {"userId": user_id, "x": x, "y": y}
        return self._handle_general(self._fetch("POST", self.build_url("/aiBot/move"), payload))

    def pvp_start(self) -> ResponseData:
        """Ask for an opponent; call again while the reply says to wait."""
        return self._handle_pvp_start(self._fetch("GET", self.build_url("/PVP/start")))

    def pvp_move(self, user_id: int, game_id: int, x: int, y: int) -> ResponseData:
        payload = {"userId": user_id, "x": x, "y": y, "game_id": game_id}
        return self._handle_pvp_move(self._fetch("POST", self.build_url("/PVP/move"), payload))

    def pvp_poll(self, game_id: int) -> ResponseData:
        """Ask once whether the opponent has moved."""
        url = self.build_url("/PVP/poll") + "?" + urlencode({"game_id": game_id})
        return self._handle_pvp_move(self._fetch("GET", url, json_header=False))