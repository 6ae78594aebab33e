"""Gomoku game server with an AI opponent and player matching, plus an HTTP client library."""

__version__ = "0.1.0"