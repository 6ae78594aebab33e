"""Handlers for games against the computer, player-versus-player games and server statistics."""

from __future__ import annotations

import json
import logging
from typing import Any

from xuangomoku.aigame import AiGame
from xuangomoku.lobby import GameNotFoundError, InvalidMoveError
from xuangomoku.state import Request, Response, ServerState

logger = logging.getLogger(__name__)


def _int_field(parsed: Any, key: str) -> int:
    if not isinstance(parsed, dict):
        raise TypeError("request body must be a JSON object")
    value = parsed.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"field {key!r} must be an integer")
    return value


def _new_ai_game(state: ServerState, user_id: int) -> None:
    with state.ai_games_lock:
        state.ai_games.pop(user_id, None)
        state.ai_games[user_id] = AiGame(user_id)


def handle_ai_start(state: ServerState, request: Request, response: Response) -> None:
    """Start a fresh game against the computer for the logged-in user."""
    response.version = request.version
    user_id = state.logged_in_user(request, response)
    if user_id is None:
        return
    _new_ai_game(state, user_id)
    response.set_json(
        200, "OK", {"status": "ok", "message": "AI game started", "userId": user_id}
    )


def handle_ai_move(state: ServerState, request: Request, response: Response) -> None:
    """Play the user's stone, let the computer answer, and report the position."""
    response.version = request.version
    try:
        user_id = state.logged_in_user(request, response)
        if user_id is None:
            return
        parsed = json.loads(request.body)
        x = _int_field(parsed, "x")
        y = _int_field(parsed, "y")

        with state.ai_games_lock:
            game = state.ai_games.get(user_id)
            if game is None:
                game = state.ai_games[user_id] = AiGame(user_id)

        try:
            game.human_move(x, y)
        except ValueError:
            response.set_json(
                400, "Bad Request", {"status": "error", "message": "Invalid move"}, indent=None
            )
            return

        def reply(winner: str, next_turn: str, with_last_move: bool) -> None:
            payload: dict[str, Any] = {
                "status": "ok",
                "board": game.board,
                "message": "Move_Back",
                "winner": winner,
                "next_turn": next_turn,
            }
            if with_last_move:
                last_x, last_y = game.last_move
                payload["last_move"] = {"x": last_x, "y": last_y}
            response.set_json(200, "OK", payload, indent=None)

        def finish(winner: str, with_last_move: bool) -> None:
            reply(winner, "none", with_last_move)
            with state.ai_games_lock:
                state.ai_games.pop(user_id, None)

        if game.game_over:
            finish("human", False)
            return
        if game.is_draw():
            finish("draw", False)
            return

        game.ai_move()

        if game.game_over:
            finish("ai", True)
            return
        if game.is_draw():
            finish("draw", True)
            return
        reply("none", "human", True)
    except Exception as exc:  # any failure becomes a 500
        response.set_json(
            500,
            "Internal Server Error",
            {"status": "error", "message": str(exc)},
            indent=None,
        )


def handle_ai_restart(state: ServerState, request: Request, response: Response) -> None:
    """Throw away the user's game against the computer and start a new one."""
    response.version = request.version
    user_id = state.logged_in_user(request, response)
    if user_id is None:
        return
    _new_ai_game(state, user_id)
    response.set_json(
        200, "OK", {"status": "ok", "message": "restart successful", "userId": user_id}
    )


def handle_backend_data(state: ServerState, request: Request, response: Response) -> None:
    """Report users online now, the highest number ever online and registered accounts."""
    response.version = request.version
    try:
        cur_online = state.cur_online
        max_online = state.max_online
        total_users = state.user_count
        logger.info("online %d, max online %d, users %d", cur_online, max_online, total_users)
        response.set_json(
            200,
            "OK",
            {"curOnline": cur_online, "maxOnline": max_online, "totalUser": total_users},
        )
    except Exception as exc:  # any failure becomes a 500
        logger.error("error in backend data: %s", exc)
        response.set_json(
            500,
            "Internal Server Error",
            {"error": "Internal Server Error", "message": str(exc)},
            close=True,
            indent=None,
        )


def handle_pvp_start(state: ServerState, request: Request, response: Response) -> None:
    """Ask for an opponent; answers with the game and colour, or asks to wait."""
    response.version = request.version
    user_id = state.logged_in_user(request, response)
    if user_id is None:
        return
    result = state.lobby.request_match(user_id)
    payload: dict[str, Any] = {"status": "ok", "message": result.message}
    if result.matched:
        payload["game_id"] = result.game_id
        payload["role"] = result.role
    response.set_json(200, "OK", payload)


def _pvp_error(response: Response, message: str) -> None:
    response.set_json(
        401, "Unauthorized", {"status": "error", "message": message}, close=True
    )


def handle_pvp_move(state: ServerState, request: Request, response: Response) -> None:
    """Play a stone in a player-versus-player game."""
    response.version = request.version
    user_id = state.logged_in_user(request, response)
    if user_id is None:
        return
    parsed = json.loads(request.body)
    x = _int_field(parsed, "x")
    y = _int_field(parsed, "y")
    game_id = _int_field(parsed, "game_id")
    try:
        state.lobby.move(user_id, game_id, x, y)
    except GameNotFoundError:
        _pvp_error(response, "Game not found")
        return
    except InvalidMoveError:
        _pvp_error(response, "Invalid move")
        return
    response.set_json(200, "OK", {"status": "ok", "message": "move_saved"})


def handle_pvp_poll(state: ServerState, request: Request, response: Response) -> None:
    """Tell the user whether the opponent has moved, and where."""
    response.version = request.version
    user_id = state.logged_in_user(request, response)
    if user_id is None:
        return
    game_id = int(request.query["game_id"])
    try:
        last = state.lobby.poll(user_id, game_id)
    except GameNotFoundError:
        _pvp_error(response, "Game not found")
        return
    if last is None:
        response.set_json(200, "OK", {"status": "ok", "message": "waiting"})
        return
    x, y = last
    response.set_json(
        200, "OK", {"status": "ok", "message": "opponent_moved", "x": x, "y": y}
    )