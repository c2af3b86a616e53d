from dice import weighted_pick, roll_chance
from events import (event_step, resolve_event, dismiss_event, mitigate_event,
                    is_on_cooldown, meets_event_conditions, format_template)


def test_weighted_pick_is_deterministic_under_scripted_rng(rng):
    items = ["a", "b", "c"]
    weights = [1, 2, 1]
    assert weighted_pick(items, weights, rng=rng(0.25))["item"] == "a"
    assert weighted_pick(items, weights, rng=rng(0.5))["item"] == "b"
    assert weighted_pick(items, weights, rng=rng(0.99))["item"] == "c"


def test_weighted_pick_zero_total_picks_first(rng):
    assert weighted_pick(["a", "b"], [0, 0], rng=rng(0.7))["item"] == "a"


def test_roll_chance_audit(rng):
    roll = roll_chance(0.3, label="x", rng=rng(0.2))
    assert roll == {"roll": 0.2, "chance": 0.3, "success": True, "label": "x"}


def test_event_cooldown(save, config):
    event = config.event("E_TRANSPORT_STRIKE")
    save.tick_count = 100
    save.event_history[event.id] = 50
    assert is_on_cooldown(event, save)
    save.tick_count = 50 + event.cooldown_ticks
    assert not is_on_cooldown(event, save)


def test_geography_condition(save, config):
    flood = config.event("E_FLOOD")
    save.country.geography = "mountain"
    assert not meets_event_conditions(flood, save)
    save.country.geography = "coastal"
    assert meets_event_conditions(flood, save)


def test_event_step_triggers_when_roll_succeeds(save, config, rng):
    save.event_cooldown = 1
    log = event_step(save, config, config.remote_config(), rng=rng(0.0))
    assert log["triggered"] is not None
    assert save.active_event_id == log["triggered"]
    assert save.event_history[save.active_event_id] == save.tick_count
    assert save.event_cooldown == config.economy.event_cooldown_ticks


def test_event_step_waits_for_cooldown(save, config, rng):
    save.event_cooldown = 5
    log = event_step(save, config, config.remote_config(), rng=rng(0.0))
    assert log["roll"] is None
    assert save.event_cooldown == 4
    assert save.active_event_id is None


def test_event_step_failed_roll(save, config, rng):
    save.event_cooldown = 0
    log = event_step(save, config, config.remote_config(), rng=rng(0.999))
    assert log["roll"]["success"] is False
    assert save.active_event_id is None


def test_resolve_requires_active_event(save, config):
    result = resolve_event(save, config, "E_TRANSPORT_STRIKE", "NEGOTIATE")
    assert result["error"] == "Event not active"


def test_resolve_applies_option_and_templated_news(save, config):
    save.active_event_id = "E_TRANSPORT_STRIKE"
    save.treasury = 200
    result = resolve_event(save, config, "E_TRANSPORT_STRIKE", "NEGOTIATE")
    assert result["ok"]
    assert save.active_event_id is None
    assert save.treasury < 200
    assert "Negociar un bono" in save.news[0].text


def test_resolve_unknown_option(save, config):
    save.active_event_id = "E_TRANSPORT_STRIKE"
    assert resolve_event(save, config, "E_TRANSPORT_STRIKE", "FLEE")["status"] == 404


def test_dismiss_and_mitigate(save, config):
    assert dismiss_event(save)["error"] == "No active event"
    save.active_event_id = "E_TRANSPORT_STRIKE"
    save.premium_tokens = 0
    assert mitigate_event(save, config)["error"] == "Insufficient tokens"
    save.premium_tokens = 1
    assert mitigate_event(save, config)["ok"]
    assert save.active_event_id is None


def test_format_template_blanks_unknown_variables():
    text = format_template("{{leaderName}} y {{nadie}}", {"leaderName": "Ana"})
    assert text == "Ana y "
