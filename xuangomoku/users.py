"""Registered accounts kept in an SQLite database."""

from __future__ import annotations

import sqlite3
import threading
from os import PathLike


class UserExistsError(ValueError):
    """The user name is already registered."""


class UserStore:
    """Accounts table: user name, password and a numeric id."""

    def __init__(self, path: str | PathLike[str] = ":memory:") -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(path, check_same_thread=False)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS users ("
                " id INTEGER PRIMARY KEY AUTOINCREMENT,"
                " username TEXT NOT NULL UNIQUE,"
                " password TEXT NOT NULL)"
            )

    def __enter__(self) -> UserStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def exists(self, username: str) -> bool:
        """True if an account with this user name exists."""
        with self._lock:
            row = self._conn.execute(
                "SELECT id FROM users WHERE username = ?", (username,)
            ).fetchone()
        return row is not None

    def register(self, username: str, password: str) -> int:
        """Create an account and return its id; raise UserExistsError if the name is taken."""
        with self._lock:
            try:
                with self._conn:
                    cursor = self._conn.execute(
                        "INSERT INTO users (username, password) VALUES (?, ?)",
                        (username, password),
                    )
            except sqlite3.IntegrityError:
                raise UserExistsError(f"username {username!r} already exists") from None
            return int(cursor.lastrowid)

    def authenticate(self, username: str, password: str) -> int | None:
        """The id of the account matching both name and password, or None."""
        with self._lock:
            row = self._conn.execute(
                "SELECT id FROM users WHERE username = ? AND password = ?",
                (username, password),
            ).fetchone()
        return None if row is None else int(row[0])

    def count(self) -> int:
        """Number of registered accounts."""
        with self._lock:
            (total,) = self._conn.execute("SELECT COUNT(*) FROM users").fetchone()
        return int(total)

    def close(self) -> None:
        with self._lock:
            self._conn.close()