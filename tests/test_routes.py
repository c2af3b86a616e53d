import pytest
from fastapi.testclient import TestClient

from game_loop import GameLoop
from web import routes


@pytest.fixture
def client(tmp_path, config, monkeypatch):
    loop = GameLoop()
    loop.init(data_dir=str(tmp_path), config=config)
    monkeypatch.setattr(routes, "game", loop)
    with TestClient(routes.app) as c:
        yield c


@pytest.fixture
def playing(client):
    resp = client.post("/api/game/new", json={
        "country": {"base_name": "Aurelia"},
        "leader": {"name": "Ana", "gender": "FEMALE"},
        "role_id": "PRESIDENT",
    })
    assert resp.status_code == 200
    return client


def test_state_without_game(client):
    resp = client.get("/api/state")
    assert resp.status_code == 200
    assert resp.json()["level_state"] == "no_game"


def test_tick_without_game_is_400(client):
    resp = client.post("/api/tick", json={"count": 1})
    assert resp.status_code == 400
    assert resp.json()["error"] == "No game loaded"


def test_new_game_and_tick(playing):
    resp = playing.post("/api/tick", json={"count": 2, "suppress_events": True})
    assert resp.status_code == 200
    assert resp.json()["tick_count"] == 2
    state = playing.get("/api/state").json()
    assert state["save"]["tick_count"] == 2
    assert state["level_state"] == "level1"


def test_failures_use_result_status(playing):
    assert playing.post("/api/projects/start", json={"project_id": "NOPE"}).status_code == 404
    assert playing.post("/api/events/dismiss").status_code == 400
    assert playing.post("/api/level2/central-bank",
                        json={"action": "RAISE_RATE"}).status_code == 400


def test_request_validation(playing):
    assert playing.post("/api/budget", json={"key": "welfare_pct"}).status_code == 422


def test_policy_endpoints(playing):
    resp = playing.post("/api/budget", json={"key": "welfare_pct", "value": 50})
    assert resp.json()["budget"]["welfare_pct"] == 50
    assert playing.post("/api/tax", json={"level": "LOW"}).json()["tax_rate_pct"] == 20
    assert playing.post("/api/tax", json={}).status_code == 400
    assert playing.post("/api/budget/auto").status_code == 200


def test_game_over_is_409(playing):
    routes.game.save.game_over = True
    resp = playing.post("/api/tick", json={"count": 1})
    assert resp.status_code == 409
    assert resp.json()["error"] == "Game over"


def test_level2_flow(playing):
    assert playing.post("/api/level2/continue").status_code == 400
    routes.game.save.level1_complete = True
    assert playing.post("/api/level2/continue").json() == {"ok": True, "already": False}
    routes.game.save.treasury = 1000

    resp = playing.post("/api/level2/base-industry",
                        json={"industry_id": "L2_DIGITAL_SERVICES"})
    assert resp.status_code == 200
    resp = playing.post("/api/level2/decrees", json={"decree_id": "DEC_TRANSPARENCY"})
    assert resp.status_code == 200
    resp = playing.post("/api/level2/advisors", json={"advisor_ids": ["ADV_GREEN"]})
    assert resp.json()["advisors"] == ["ADV_GREEN"]
    resp = playing.post("/api/level2/tick", json={"count": 1, "suppress_events": True})
    assert resp.status_code == 200


def test_token_routes(playing):
    assert playing.post("/api/tokens/rescue-treasury").status_code == 200
    assert playing.post("/api/tokens/carbon-credits").status_code == 400
    assert playing.post("/api/tokens/free-money").status_code == 404


def test_save_load_and_list(playing):
    filename = playing.post("/api/save").json()["filename"]
    saves = playing.get("/api/saves").json()["saves"]
    assert filename in [s["filename"] for s in saves]
    assert playing.post("/api/load", json={"filename": filename}).status_code == 200
    assert playing.post("/api/load", json={"filename": "save_none"}).status_code == 404


def test_sync_route(playing):
    snapshot = playing.get("/api/state").json()["save"]
    snapshot["updated_at"] = "2999-01-01T00:00:00+00:00"
    snapshot["treasury"] = 4242
    resp = playing.post("/api/sync", json=snapshot)
    assert resp.json()["source"] == "remote"
    assert playing.get("/api/state").json()["save"]["treasury"] == 4242


def test_websocket_sends_initial_state(playing):
    with playing.websocket_connect("/ws") as ws:
        message = ws.receive_json()
    assert message["event"] == "state_update"
    assert message["data"]["save"]["country"]["base_name"] == "Aurelia"


def test_sync_rejects_bad_bodies(playing):
    resp = playing.post("/api/sync", content=b"{not json",
                        headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid JSON body"

    resp = playing.post("/api/sync", json=[1, 2])
    assert resp.status_code == 400
    assert resp.json()["success"] is False
