"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from tictactoe import config
from tictactoe.main import app


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(config, "AI_THINK_DELAY", 0)
    monkeypatch.setattr(config, "STORE", "memory")
    monkeypatch.setattr(config, "DEFAULT_DIFFICULTY", "hard")
    with TestClient(app) as client:
        yield client


def test_health_check(client):
    assert client.get("/").json() == {"message": "Healthy"}


def test_move_gets_ai_reply(client):
    game = client.post("/game/moves", json={"index": 0}).json()
    assert game["board"][0] == 'X'
    assert game["board"][4] == 'O'
    assert game["state"] == "awaiting_move"
    assert game["current_player"] == 'X'
    assert len(game["moves"]) == 2


def test_illegal_move_returns_unchanged_game(client):
    client.post("/game/moves", json={"index": 0})
    game = client.post("/game/moves", json={"index": 0}).json()
    assert len(game["moves"]) == 2


def test_out_of_range_move_is_rejected(client):
    assert client.post("/game/moves", json={"index": 9}).status_code == 422


def test_undo_and_reset(client):
    client.post("/game/moves", json={"index": 0})
    game = client.post("/game/undo").json()
    assert game["moves"] == []
    client.post("/game/moves", json={"index": 2})
    game = client.post("/game/reset").json()
    assert game["board"] == [None] * 9


def test_two_player_game_updates_scores_and_history(client):
    client.put("/settings/mode", json={"mode": "multi"})
    client.put("/settings/names", json={"mark": "X", "name": "Ada"})
    for index in (0, 3, 1, 4, 2):
        game = client.post("/game/moves", json={"index": index}).json()
    assert game["winner"] == 'X'
    assert game["winning_line"] == [0, 1, 2]
    assert client.get("/scores").json()["multi"] == {"X": 1, "O": 0}

    history = client.get("/history").json()
    assert history[0]["x_name"] == "Ada"
    assert history[0]["mode"] == "multi"

    scores = client.delete("/history/0").json()
    assert scores["multi"] == {"X": 0, "O": 0}
    assert client.delete("/history/0").status_code == 404


def test_choosing_o_lets_ai_open(client):
    game = client.put("/settings/mark", json={"mark": "O"}).json()
    assert len(game["moves"]) == 1
    assert game["current_player"] == 'O'
    assert client.get("/settings").json()["player_mark"] == 'O'


def test_settings_round_trip(client):
    client.put("/settings/difficulty", json={"difficulty": "easy"})
    settings = client.put("/settings/sound", json={"enabled": False}).json()
    assert settings["difficulty"] == "easy"
    assert settings["sound_enabled"] is False
    assert client.put("/settings/difficulty", json={"difficulty": "insane"}).status_code == 422


def test_reset_scores(client):
    client.put("/settings/mode", json={"mode": "multi"})
    for index in (0, 3, 1, 4, 2):
        client.post("/game/moves", json={"index": index})
    scores = client.delete("/scores").json()
    assert scores["multi"] == {"X": 0, "O": 0}
    assert len(client.get("/history").json()) == 1
