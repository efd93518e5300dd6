from fastapi.testclient import TestClient

import config
from main import app

client = TestClient(app)


def _new_session(players=None):
    body = {"players": players} if players else {}
    r = client.post("/sessions", json=body)
    assert r.status_code == 201
    return r.json()


def test_create_default_single_player():
    s = _new_session()
    assert s["players"] == ["Player 1"]
    assert s["scores"] == {"Player 1": 0}
    assert s["current"] is None
    assert s["used"] == []


def test_duplicate_players_rejected():
    r = client.post("/sessions", json={"players": ["Ann", "Ann"]})
    assert r.status_code == 422


def test_unknown_session():
    assert client.get("/sessions/nope").status_code == 404
    assert client.post("/sessions/nope/answer", json={"answer": "what is 4"}).status_code == 404


def test_single_player_round(monkeypatch):
    monkeypatch.setenv("TRIVIA_API_KEY", "k")
    sid = _new_session(["Ann"])["id"]

    r = client.post(f"/sessions/{sid}/tiles", json={"category": 2, "row": 2})
    assert r.status_code == 200
    current = r.json()["current"]
    assert current["prompt"] == "Ancient civilization that built pyramids"
    assert current["value"] == 300
    assert current["buzzed"] == "Ann"
    assert 0 < current["seconds_left"] <= config.ANSWER_SECONDS

    r = client.post(f"/sessions/{sid}/answer", json={"answer": "What are the Egyptians?"})
    assert r.status_code == 200
    out = r.json()
    assert out["accepted"] is True
    assert out["delta"] == 300
    assert out["scores"] == {"Ann": 300}
    assert out["verdict"]["matched_by"] == "substring"
    assert isinstance(out["record_id"], int)

    rec = client.get(f"/answers/{out['record_id']}", headers={"x-api-key": "k"})
    assert rec.status_code == 200
    body = rec.json()
    assert body["session_id"] == sid
    assert body["player"] == "Ann"
    assert body["accepted"] is True
    assert body["matched_by"] == "substring"
    assert body["answer"] == "What are the Egyptians?"

    # tile is used up
    r = client.post(f"/sessions/{sid}/tiles", json={"category": 2, "row": 2})
    assert r.status_code == 409
    assert client.get(f"/sessions/{sid}").json()["used"] == [[2, 2]]


def test_wrong_answer_scores_negative():
    sid = _new_session(["Ann"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 1, "row": 1})
    out = client.post(f"/sessions/{sid}/answer", json={"answer": "planet"}).json()
    assert out["accepted"] is False
    assert out["verdict"]["phrase_valid"] is False
    assert out["correct_answer"] == "planet"
    assert out["scores"] == {"Ann": -200}


def test_answer_with_nothing_open():
    sid = _new_session()["id"]
    r = client.post(f"/sessions/{sid}/answer", json={"answer": "what is 4"})
    assert r.status_code == 409
    assert "no question" in r.json()["detail"]


def test_missing_tile():
    sid = _new_session()["id"]
    r = client.post(f"/sessions/{sid}/tiles", json={"category": 7, "row": 0})
    assert r.status_code == 404


def test_forced_timeout():
    sid = _new_session(["Ann"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 0, "row": 0})
    out = client.post(f"/sessions/{sid}/timeout").json()
    assert out["timed_out"] is True
    assert out["verdict"] is None
    assert out["delta"] == -100
    assert client.post(f"/sessions/{sid}/timeout").status_code == 409


def test_answer_after_deadline_is_a_timeout(monkeypatch):
    monkeypatch.setattr(config, "ANSWER_SECONDS", 0)
    sid = _new_session(["Ann"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 0, "row": 0})
    out = client.post(f"/sessions/{sid}/answer", json={"answer": "what is 4"}).json()
    assert out["timed_out"] is True
    assert out["scores"] == {"Ann": -100}

    state = client.get(f"/sessions/{sid}").json()
    assert state["current"] is None
    assert state["last_outcome"]["timed_out"] is True


def test_polling_resolves_expired_question(monkeypatch):
    monkeypatch.setattr(config, "ANSWER_SECONDS", 0)
    sid = _new_session(["Ann"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 1, "row": 2})
    state = client.get(f"/sessions/{sid}").json()
    assert state["current"] is None
    assert state["scores"] == {"Ann": -300}
    assert isinstance(state["last_outcome"]["record_id"], int)


def test_close_without_scoring():
    sid = _new_session(["Ann"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 0, "row": 1})
    r = client.post(f"/sessions/{sid}/close")
    assert r.status_code == 200
    assert r.json()["current"] is None
    assert r.json()["scores"] == {"Ann": 0}
    assert client.post(f"/sessions/{sid}/close").status_code == 409


def test_multi_player_buzz_in():
    sid = _new_session(["Ann", "Ben"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 0, "row": 1})

    r = client.post(f"/sessions/{sid}/answer", json={"player": "Ann", "answer": "what is 30"})
    assert r.status_code == 409

    r = client.post(f"/sessions/{sid}/buzz", json={"player": "Ben"})
    assert r.status_code == 200
    assert r.json()["current"]["buzzed"] == "Ben"

    assert client.post(f"/sessions/{sid}/buzz", json={"player": "Ann"}).status_code == 409

    out = client.post(
        f"/sessions/{sid}/answer", json={"player": "Ben", "answer": "what is thirty"}
    ).json()
    assert out["accepted"] is True
    assert out["scores"] == {"Ann": 0, "Ben": 200}


def test_recent_answers_for_session(monkeypatch):
    monkeypatch.setenv("TRIVIA_API_KEY", "k")
    sid = _new_session(["Ann"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 0, "row": 0})
    client.post(f"/sessions/{sid}/answer", json={"answer": "what is four"})
    client.post(f"/sessions/{sid}/tiles", json={"category": 0, "row": 1})
    client.post(f"/sessions/{sid}/timeout")

    r = client.get("/answers/recent-list", params={"session_id": sid}, headers={"x-api-key": "k"})
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 2
    # newest first
    assert body["items"][0]["timed_out"] is True
    assert body["items"][0]["answer"] is None
    assert body["items"][1]["matched_by"] == "numeric"


def test_answers_require_key(monkeypatch):
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    monkeypatch.delenv("TRIVIA_API_KEY", raising=False)
    assert client.get("/answers/recent-list").status_code == 500

    monkeypatch.setenv("TRIVIA_API_KEY", "k")
    assert client.get("/answers/recent-list", headers={"x-api-key": "bad"}).status_code == 401

    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    r = client.get("/answers/recent-list", headers={"x-admin-token": "secret"})
    assert r.status_code == 200


def test_answer_record_404(monkeypatch):
    monkeypatch.setenv("TRIVIA_API_KEY", "k")
    assert client.get("/answers/999999", headers={"x-api-key": "k"}).status_code == 404


def test_oversized_answer_rejected():
    sid = _new_session(["Ann"])["id"]
    client.post(f"/sessions/{sid}/tiles", json={"category": 0, "row": 0})
    r = client.post(f"/sessions/{sid}/answer", json={"answer": "what is " + "x" * 500})
    assert r.status_code == 422
    # question still open, no score change
    state = client.get(f"/sessions/{sid}").json()
    assert state["current"] is not None
    assert state["scores"] == {"Ann": 0}
