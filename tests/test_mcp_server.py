import json

import mcp_server


def _state(level=1, **overrides):
    save = {
        "country": {"formal_name": "Republica de Aurelia"},
        "leader": {"name": "Ana"},
        "level": level, "phase": 1, "tick_count": 12,
        "treasury": 250.0, "gdp": 1000.0, "growth_pct": 1.5, "debt": 40.0,
        "happiness": 60, "stability": 55, "institutional_trust": 50, "corruption": 20,
        "last_risk": 12.0, "active_event_id": None, "game_over": False,
        "news": [{"type": "EVENT", "severity": "INFO", "text": "Llueve en la capital."}],
        "level2": None,
    }
    save.update(overrides)
    return json.dumps({"level_state": "level1", "save": save,
                       "derived": {"role_title": "Presidenta",
                                   "alerts": {"stability": "OK", "debt": "WARN"}}})


def test_game_state_summary(monkeypatch):
    monkeypatch.setattr(mcp_server, "_get", lambda path: _state(active_event_id="E_FLOOD"))
    text = mcp_server.get_game_state()
    assert "Republica de Aurelia" in text
    assert "TICK 12" in text
    assert "ALERTS: debt=WARN" in text
    assert "PENDING EVENT: E_FLOOD" in text


def test_game_state_shows_level2_pending_event(monkeypatch):
    level2 = {"phase": 1,
              "macro": {"inflation_pct": 0.3, "regime": "STABLE"},
              "events": {"pending": {"instance_id": "l2evt_1", "title": "Sequia",
                                     "options": [{"option_id": "PRAY", "label": "Rezar"}]}}}
    monkeypatch.setattr(mcp_server, "_get", lambda path: _state(level=2, level2=level2))
    text = mcp_server.get_game_state()
    assert "PENDING L2 EVENT [l2evt_1] Sequia" in text
    assert "PRAY: Rezar" in text


def test_game_state_without_game(monkeypatch):
    monkeypatch.setattr(mcp_server, "_get",
                        lambda path: json.dumps({"error": "No state loaded"}))
    assert mcp_server.get_game_state() == "Error: No state loaded"


def test_list_news(monkeypatch):
    monkeypatch.setattr(mcp_server, "_get", lambda path: _state())
    assert "[EVENT/INFO] Llueve en la capital." in mcp_server.list_news(5)


def test_advance_ticks(monkeypatch):
    sent = []

    def fake_post(path, data=None):
        sent.append((path, data))
        return json.dumps({"ok": True, "ticks": 3, "tick_count": 15, "game_over": False})

    monkeypatch.setattr(mcp_server, "_post", fake_post)
    text = mcp_server.advance_ticks(3)
    assert sent == [("/api/tick", {"count": 3})]
    assert text.startswith("Advanced 3 tick(s). Now at tick 15.")


def test_resolve_event_routes_by_id(monkeypatch):
    sent = []

    def fake_post(path, data=None):
        sent.append(path)
        if path.startswith("/api/level2"):
            return json.dumps({"ok": True, "outcome_summary": "Llovio."})
        return json.dumps({"ok": True, **data})

    monkeypatch.setattr(mcp_server, "_post", fake_post)
    assert mcp_server.resolve_event("l2evt_9", "PRAY") == "Resolved. Llovio."
    assert mcp_server.resolve_event("E_FLOOD", "DIKES") == "Resolved E_FLOOD with DIKES."
    assert sent == ["/api/level2/events/resolve", "/api/events/resolve"]


def test_rejections_come_back_as_errors(monkeypatch):
    monkeypatch.setattr(mcp_server, "_post",
                        lambda path, data=None: json.dumps(
                            {"ok": False, "status": 400, "error": "Cooldown active"}))
    assert mcp_server.central_bank_action("raise_rate") == "Error: Cooldown active"
    assert mcp_server.enact_decree(slot_id=1) == "Error: Cooldown active"


def test_server_unavailable(monkeypatch):
    monkeypatch.setattr(mcp_server, "GAME_SERVER", "http://127.0.0.1:9")
    data = json.loads(mcp_server._get("/api/state"))
    assert data["error"].startswith("Game server unavailable")
