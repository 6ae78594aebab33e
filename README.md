# xuangomoku

Gomoku, also called five in a row, played on a 15 × 15 board. The package holds:

- **a game server** that speaks JSON over HTTP. It handles registration and login, sessions,
  games against a computer opponent and games between two players who are matched with each other;
- **a client library** (`xuangomoku.client.GameClient`) that sends requests to the server and
  says what each reply means;
- **the game rules** for both kinds of game, and the state of a client-side board
  (`xuangomoku.board`, `xuangomoku.gameview`) that a front end can drive.

## Installation

```
pip install xuangomoku
```

To run the test suite:

```
pip install "xuangomoku[test]"
pytest
```

## Running the server

```
xuangomoku-server -p 8080
```

Options:

- `-p`, `--port`: port to listen on (default 80);
- `--host`: address to listen on (default `0.0.0.0`);
- `--database`: SQLite file holding the accounts (default `xuangomoku.db`).

### Endpoints

| Method | Path             | Purpose                                                     |
|--------|------------------|-------------------------------------------------------------|
| GET    | `/`, `/entry`    | Connection check                                            |
| POST   | `/register`      | Create an account (`username`, `password`)                  |
| POST   | `/login`         | Log in and open a session                                   |
| POST   | `/user/logout`   | Log out (`gameType`)                                        |
| GET    | `/menu`          | User id and name of the logged-in user                      |
| GET    | `/aiBot/start`   | Start a new game against the computer                       |
| POST   | `/aiBot/move`    | Place a stone (`x`, `y`); the computer answers              |
| GET    | `/aiBot/restart` | Throw away the current game against the computer            |
| GET    | `/PVP/start`     | Join the matching queue, or collect a match once one exists |
| POST   | `/PVP/move`      | Place a stone in a matched game (`x`, `y`, `game_id`)       |
| GET    | `/PVP/poll`      | Ask whether the opponent has moved (`?game_id=`)            |
| GET    | `/backend_data`  | Current and highest number of users online, total users     |

Login and logout expect `Content-Type: application/json`. The menu, game and poll endpoints
need the session cookie that a successful login sets; without it they answer 401.
In a matched game the player who was waiting in the queue plays white and the player
who completes the match plays black. Black moves first.

## Using the library

The game rules can be used without the server:

```python
from xuangomoku.pvp import PieceType, PvpGame

game = PvpGame(1, 2, 10002)
assert game.role(1) is PieceType.BLACK
game.make_move(1, 7, 7)          # black moves first
try:
    game.make_move(1, 7, 8)      # now it is white's turn
except ValueError:
    pass
```

`xuangomoku.aigame.AiGame` holds a game against the computer: `human_move(x, y)` places a
black stone (raising `ValueError` for a move that is not allowed) and `ai_move()` lets the
computer answer with white. `xuangomoku.lobby.PvpLobby` handles matching (`request_match`),
moves (`move`) and polling (`poll`) for games between players.

Talking to a running server from Python:

```python
from xuangomoku.client import GameClient

client = GameClient("localhost:8080", 5)   # "http://" is added when no scheme is given
client.connect()
reply = client.login("alice", "password")
client.start_ai()
reply = client.ai_move(reply.user_id, 7, 7)
print(reply.event, reply.move)
```

Each call returns a `ResponseData` whose `event` says what the reply meant; network
failures, timeouts and replies that are not JSON raise `ClientError`.

## What the package does not do

There is no interactive client: no console or graphical program for playing against the
server. The client side consists of the `GameClient` library and the board and game-view
state classes, which a front end would have to drive.