"""Handlers for connecting, registering, logging in and out, and the menu."""

from __future__ import annotations

import json
from typing import Any

from xuangomoku.state import GameType, Request, Response, ServerState
from xuangomoku.users import UserExistsError


def _field(parsed: Any, key: str, kind: type) -> Any:
    if not isinstance(parsed, dict):
        raise TypeError("request body must be a JSON object")
    value = parsed.get(key)
    if not isinstance(value, kind) or isinstance(value, bool) and kind is not bool:
        raise TypeError(f"field {key!r} must be of type {kind.__name__}")
    return value


def _is_json_request(request: Request) -> bool:
    return request.header("Content-Type") == "application/json" and bool(request.body)


def handle_entry(state: ServerState, request: Request, response: Response) -> None:
    """Answer a connection check."""
    response.version = request.version
    response.set_json(200, "OK", {"status": "ok", "message": "连接成功"})


def handle_register(state: ServerState, request: Request, response: Response) -> None:
    """Create an account from a JSON body with username and password."""
    parsed = json.loads(request.body)
    username = _field(parsed, "username", str)
    password = _field(parsed, "password", str)
    response.version = request.version
    try:
        user_id = state.users.register(username, password)
    except UserExistsError:
        response.set_json(
            409, "Conflict", {"status": "error", "message": "username already exists"}
        )
        return
    response.set_json(
        200,
        "OK",
        {"status": "success", "message": "Register successful", "userId": user_id},
    )


def handle_login(state: ServerState, request: Request, response: Response) -> None:
    """Log a user in, refusing a second login of the same account."""
    response.version = request.version
    if not _is_json_request(request):
        response.set_json(400, "Bad Request", None, close=True)
        return
    try:
        parsed = json.loads(request.body)
        username = _field(parsed, "username", str)
        password = _field(parsed, "password", str)
        user_id = state.users.authenticate(username, password)
        if user_id is None:
            response.set_json(
                401,
                "Unauthorized",
                {"status": "error", "message": "Invalid username or password"},
            )
            return

        session = state.sessions.get_session(request, response)
        session.values.update(
            {"userId": str(user_id), "username": username, "isLoggedIn": "true"}
        )
        with state.online_lock:
            already_online = state.online_users.get(user_id, False)
            if not already_online:
                state.online_users[user_id] = True
            online = len(state.online_users)
        if already_online:
            response.set_json(
                403,
                "Forbidden",
                {"success": False, "error": "账号已在其他地方登录"},
                close=True,
            )
            return
        state.update_max_online(online)
        response.set_json(
            200,
            "OK",
            {"success": True, "userId": user_id, "message": "Login successful"},
        )
    except Exception as exc:  # any parse or lookup failure becomes a 400
        response.set_json(
            400, "Bad Request", {"status": "error", "message": str(exc)}, close=True
        )


def handle_logout(state: ServerState, request: Request, response: Response) -> None:
    """End the session and free what the user held."""
    response.version = request.version
    if not _is_json_request(request):
        response.set_json(400, "Bad Request", None, close=True)
        return
    try:
        session = state.sessions.get_session(request, response)
        user_id = int(session.values.get("userId", ""))
        session.values.clear()
        state.sessions.destroy(session.id)

        parsed = json.loads(request.body)
        game_type = _field(parsed, "gameType", int)

        with state.online_lock:
            state.online_users.pop(user_id, None)
        if game_type == GameType.MAN_VS_AI:
            with state.ai_games_lock:
                state.ai_games.pop(user_id, None)

        response.set_json(200, "OK", {"message": "logout successful"}, close=True)
    except Exception as exc:  # any parse or lookup failure becomes a 400
        response.set_json(
            400, "Bad Request", {"status": "error", "message": str(exc)}, close=True
        )


def handle_menu(state: ServerState, request: Request, response: Response) -> None:
    """Return the logged-in user's id and name."""
    response.version = request.version
    try:
        user_id = state.logged_in_user(request, response)
        if user_id is None:
            return
        session = state.sessions.get_session(request, response)
        username = session.values.get("username", "")
        response.set_json(
            200, "OK", {"status": "ok", "userId": user_id, "username": username}
        )
    except Exception as exc:  # any lookup failure becomes a 400
        response.set_json(
            400, "Bad Request", {"status": "error", "message": str(exc)}, close=True
        )