import json
import os

import pytest

from game_loop import GameLoop, LevelState
from models import state_to_json


@pytest.fixture
def game(tmp_path, config):
    loop = GameLoop()
    loop.init(data_dir=str(tmp_path), config=config)
    return loop


@pytest.fixture
def started(game):
    result = game.new_game({"base_name": "Aurelia", "state_type_id": "REPUBLIC"},
                           {"name": "Ana", "gender": "FEMALE", "role_id": "PRESIDENT"})
    assert result["ok"]
    return game


def test_init_without_saves(game):
    assert game.save is None
    assert game.level_state == LevelState.NO_GAME
    assert game.get_full_state()["level_state"] == "no_game"
    assert game.tick()["status"] == 400


def test_new_game_validates_names(game):
    assert game.new_game({"base_name": " "}, {"name": "Ana"})["error"] == "Country name required"
    assert game.new_game({"base_name": "X"}, {"name": ""})["error"] == "Leader name required"
    assert game.new_game({"base_name": "X"}, {"name": "Y"}, role_id="EMPEROR")["status"] == 404


def test_new_game_auto_saves(started, tmp_path):
    assert started.level_state == LevelState.LEVEL1
    assert os.path.exists(tmp_path / "save_aurelia.json")
    assert started.save.country.formal_name == "Republica de Aurelia"


def test_tick_advances_and_logs(started):
    result = started.tick(3, suppress_events=True)
    assert result == {"ok": True, "ticks": 3, "tick_count": 3, "game_over": False}
    assert len(started.last_tick_logs) == 3
    assert started.action_log[-1]["type"] == "TICK"


def test_tick_count_is_bounded(started):
    result = started.tick(0, suppress_events=True)
    assert result["ticks"] == 1


def test_actions_rejected_after_game_over(started):
    started.save.game_over = True
    assert started.tick() == {"ok": False, "status": 409, "error": "Game over"}
    assert started.set_budget("welfare_pct", 50)["status"] == 409
    assert started.set_remote_config_overrides({"event_frequency": 0})["ok"]


def test_failed_action_is_logged_not_raised(started):
    result = started.start_project("NOPE")
    assert result["status"] == 404
    assert "rejected" in started.action_log[-1]["detail"]


def test_level_change_callback(started):
    seen = []
    started._on_level_change = lambda state, data: seen.append((state, data))
    started.save.level1_complete = True
    assert started.continue_to_level2()["ok"]
    assert seen[-1][0] == LevelState.LEVEL2
    assert started.tick(1, suppress_events=True)["ok"]
    assert started.save.level2.macro.regime == "STABLE"


def test_save_and_load(started):
    filename = started.save_game("save_manual")
    assert filename == "save_manual.json"
    started.tick(2, suppress_events=True)
    result = started.load_game("save_manual")
    assert result["success"]
    assert started.save.tick_count == 0
    assert {s["filename"] for s in started.list_saves()} >= {"save_manual.json"}


def test_load_missing_file(started):
    result = started.load_game("save_ghost.json")
    assert result == {"success": False, "error": "File not found: save_ghost.json"}


def test_init_loads_newest_save_and_catches_up(tmp_path, config, started):
    started.save.last_tick_at -= 4 * config.economy.tick_ms
    started.save.tick_count = 7
    with open(tmp_path / "save_aurelia.json", "w", encoding="utf-8") as f:
        f.write(state_to_json(started.save))

    fresh = GameLoop()
    fresh.init(data_dir=str(tmp_path), config=config)
    assert fresh.save.country.base_name == "Aurelia"
    assert fresh.save.tick_count == 11
    assert any(e["type"] == "OFFLINE" for e in fresh.action_log)


def test_corrupt_save_is_skipped(tmp_path, config):
    (tmp_path / "save_broken.json").write_text("{not json", encoding="utf-8")
    loop = GameLoop()
    loop.init(data_dir=str(tmp_path), config=config)
    assert loop.save is None
    assert any("Failed to load" in e["detail"] for e in loop.action_log)


def test_sync_keeps_newer_snapshot(started):
    remote = json.loads(state_to_json(started.save))
    remote["treasury"] = 9999
    remote["updated_at"] = "2999-01-01T00:00:00+00:00"
    result = started.sync(remote)
    assert result["source"] == "remote"
    assert started.save.treasury == 9999

    remote["treasury"] = 1
    remote["updated_at"] = "2000-01-01T00:00:00+00:00"
    assert started.sync(remote)["source"] == "local"
    assert started.save.treasury == 9999


def test_full_state_has_derived_fields(started):
    state = started.get_full_state()
    assert state["save"]["country"]["base_name"] == "Aurelia"
    derived = state["derived"]
    assert set(derived["alerts"]) >= {"stability", "happiness", "debt"}
    assert derived["role_title"] == "Presidenta"
    assert "P1_ROADS" in derived["startable_projects"]


@pytest.mark.parametrize("body", [[1, 2], "snapshot", 42])
def test_sync_rejects_non_object_snapshot(started, body):
    result = started.sync(body)
    assert result["success"] is False
    assert "expected a JSON object" in result["error"]
    assert started.save.country.base_name == "Aurelia"


def test_load_stays_inside_data_dir(started, tmp_path):
    outside = tmp_path.parent / "outside.json"
    outside.write_text(state_to_json(started.save), encoding="utf-8")
    for name in ("../outside.json", "../outside", str(outside)):
        result = started.load_game(name)
        assert result["success"] is False
        assert result["error"].startswith("Invalid save name")
