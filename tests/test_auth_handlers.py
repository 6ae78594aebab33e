import json

import pytest

from xuangomoku.aigame import AiGame
from xuangomoku.auth_handlers import (
    handle_entry,
    handle_login,
    handle_logout,
    handle_menu,
    handle_register,
)
from xuangomoku.state import Request, Response, ServerState
from xuangomoku.users import UserStore

JSON = {"Content-Type": "application/json"}


@pytest.fixture
def state():
    with UserStore() as users:
        yield ServerState(users)


def call(handler, state, body=None, cookie=None, headers=None):
    hdrs = dict(JSON if headers is None else headers)
    if cookie:
        hdrs["Cookie"] = cookie
    text = body if isinstance(body, str) or body is None else json.dumps(body)
    request = Request(method="POST", headers=hdrs, body=text or "")
    response = Response()
    handler(state, request, response)
    return response


def register(state, name):
    password = "password"
    return json.loads(call(handle_register, state, {"username": name, "password": password}).body)


def login(state, name):
    password = "password"
    return call(handle_login, state, {"username": name, "password": password})


def cookie_of(response):
    return response.headers["Set-Cookie"].split(";")[0]


def test_entry_reports_connection():
    response = Response()
    handle_entry(None, Request(), response)
    assert response.status == 200
    assert json.loads(response.body) == {"status": "ok", "message": "连接成功"}


def test_register_success(state):
    body = register(state, "alice")
    assert body["status"] == "success"
    assert body["message"] == "Register successful"
    assert state.users.exists("alice")


def test_register_duplicate_conflict(state):
    register(state, "alice")
    password = "password"
    response = call(handle_register, state, {"username": "alice", "password": password})
    assert response.status == 409
    assert json.loads(response.body)["message"] == "username already exists"


def test_register_bad_json_raises(state):
    with pytest.raises(json.JSONDecodeError):
        call(handle_register, state, "{not json")


def test_login_success(state):
    user_id = register(state, "alice")["userId"]
    response = login(state, "alice")
    body = json.loads(response.body)
    assert response.status == 200
    assert body == {"success": True, "userId": user_id, "message": "Login successful"}
    assert state.online_users == {user_id: True}
    assert state.max_online == 1


def test_second_login_forbidden(state):
    register(state, "alice")
    login(state, "alice")
    response = login(state, "alice")
    assert response.status == 403
    assert json.loads(response.body)["error"] == "账号已在其他地方登录"
    assert response.close is True


def test_login_wrong_password(state):
    register(state, "alice")
    response = call(handle_login, state, {"username": "alice", "password": "secret"})
    assert response.status == 401
    assert json.loads(response.body)["message"] == "Invalid username or password"
    assert state.online_users == {}


def test_login_requires_json_content_type(state):
    password = "password"
    response = call(
        handle_login,
        state,
        {"username": "alice", "password": password},
        headers={"Content-Type": "text/plain"},
    )
    assert response.status == 400
    assert response.body == ""


def test_login_malformed_body(state):
    response = call(handle_login, state, "{oops")
    assert response.status == 400
    assert json.loads(response.body)["status"] == "error"


def test_login_non_string_username(state):
    password = "password"
    response = call(handle_login, state, {"username": 5, "password": password})
    assert response.status == 400


def test_menu_after_login(state):
    user_id = register(state, "alice")["userId"]
    cookie = cookie_of(login(state, "alice"))
    response = call(handle_menu, state, cookie=cookie)
    assert response.status == 200
    assert json.loads(response.body) == {"status": "ok", "userId": user_id, "username": "alice"}


def test_menu_without_login(state):
    response = call(handle_menu, state)
    assert response.status == 401
    assert json.loads(response.body)["message"] == "Unauthorized"


def test_logout_frees_ai_game_and_session(state):
    user_id = register(state, "alice")["userId"]
    cookie = cookie_of(login(state, "alice"))
    state.ai_games[user_id] = AiGame(user_id, delay=0)
    response = call(handle_logout, state, {"gameType": 1}, cookie=cookie)
    assert response.status == 200
    assert json.loads(response.body) == {"message": "logout successful"}
    assert state.online_users == {}
    assert state.ai_games == {}
    assert call(handle_menu, state, cookie=cookie).status == 401


def test_logout_pvp_keeps_ai_game(state):
    user_id = register(state, "alice")["userId"]
    cookie = cookie_of(login(state, "alice"))
    state.ai_games[user_id] = AiGame(user_id, delay=0)
    call(handle_logout, state, {"gameType": 2}, cookie=cookie)
    assert user_id in state.ai_games
    assert user_id not in state.online_users


def test_logout_without_session(state):
    response = call(handle_logout, state, {"gameType": 1})
    assert response.status == 400
    assert response.close is True


def test_login_again_after_logout(state):
    register(state, "alice")
    cookie = cookie_of(login(state, "alice"))
    call(handle_logout, state, {"gameType": 0}, cookie=cookie)
    assert login(state, "alice").status == 200