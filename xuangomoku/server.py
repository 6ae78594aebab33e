"""Routing and the HTTP front end of the game server."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Callable, Sequence
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qsl, urlsplit

from xuangomoku import auth_handlers, game_handlers
from xuangomoku.state import Request, Response, ServerState
from xuangomoku.users import UserStore

logger = logging.getLogger(__name__)

Handler = Callable[[ServerState, Request, Response], None]


class GameServer:
    """Routes requests to the handlers and serves them over HTTP."""

    def __init__(self, state: ServerState) -> None:
        self.state = state
        self.routes: dict[tuple[str, str], Handler] = {
            ("GET", "/"): auth_handlers.handle_entry,
            ("GET", "/entry"): auth_handlers.handle_entry,
            ("POST", "/login"): auth_handlers.handle_login,
            ("POST", "/register"): auth_handlers.handle_register,
            ("POST", "/user/logout"): auth_handlers.handle_logout,
            ("GET", "/menu"): auth_handlers.handle_menu,
            ("GET", "/aiBot/start"): game_handlers.handle_ai_start,
            ("POST", "/aiBot/move"): game_handlers.handle_ai_move,
            ("GET", "/aiBot/restart"): game_handlers.handle_ai_restart,
            ("GET", "/PVP/start"): game_handlers.handle_pvp_start,
            ("POST", "/PVP/move"): game_handlers.handle_pvp_move,
            ("GET", "/PVP/poll"): game_handlers.handle_pvp_poll,
            ("GET", "/backend_data"): game_handlers.handle_backend_data,
        }

    def dispatch(self, request: Request) -> Response:
        """Run the handler for the request's method and path and return the response."""
        response = Response(version=request.version)
        handler = self.routes.get((request.method.upper(), request.path))
        if handler is None:
            response.set_json(404, "Not Found", {"status": "error", "message": "Not Found"})
            return response
        try:
            handler(self.state, request, response)
        except Exception as exc:  # a handler failure must not take the server down
            logger.exception("handler for %s %s failed", request.method, request.path)
            response.set_json(
                500,
                "Internal Server Error",
                {"status": "error", "message": str(exc)},
                close=True,
            )
        return response

    def _build_http_server(self, host: str, port: int) -> ThreadingHTTPServer:
        game_server = self

        class _RequestHandler(BaseHTTPRequestHandler):
            protocol_version = "HTTP/1.1"

            def _handle(self) -> None:
                length = int(self.headers.get("Content-Length") or 0)
                raw = self.rfile.read(length) if length > 0 else b""
                parts = urlsplit(self.path)
                request = Request(
                    method=self.command,
                    path=parts.path,
                    version=self.request_version,
                    headers=dict(self.headers.items()),
                    body=raw.decode("utf-8", "replace"),
                    query=dict(parse_qsl(parts.query)),
                )
                response = game_server.dispatch(request)
                payload = response.body.encode("utf-8")
                self.send_response(response.status, response.reason)
                for name, value in response.headers.items():
                    self.send_header(name, value)
                self.send_header("Content-Length", str(len(payload)))
                if response.close:
                    self.send_header("Connection", "close")
                    self.close_connection = True
                self.end_headers()
                self.wfile.write(payload)

            do_GET = _handle
            do_POST = _handle

            def log_message(self, format: str, *args: object) -> None:
                logger.debug("%s - %s", self.address_string(), format % args)

        return ThreadingHTTPServer((host, port), _RequestHandler)

    def serve(self, host: str = "0.0.0.0", port: int = 80) -> None:
        """Serve requests until interrupted."""
        with self._build_http_server(host, port) as httpd:
            logger.info("listening on %s:%d", host, port)
            httpd.serve_forever()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Gomoku game server.")
    parser.add_argument("-p", "--port", type=int, default=80, help="port to listen on")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument(
        "--database", default="xuangomoku.db", help="SQLite file holding the accounts"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    logger.info("pid = %d", os.getpid())
    with UserStore(args.database) as users:
        server = GameServer(ServerState(users))
        try:
            server.serve(args.host, args.port)
        except KeyboardInterrupt:
            pass
    return 0