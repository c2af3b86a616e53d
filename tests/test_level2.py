import pytest

from elections import run_election, win_chance, ELECTION_COST, DEFEAT_REASON, REELECTION_MEDAL
from level2_decrees import enact_level2_decree
from level2_events import maybe_trigger_level2_event, resolve_level2_event, is_eligible
from macro import (continue_to_level2, set_level2_base_industry, activate_level2_industry,
                   set_level2_advisors, start_level2_project, central_bank_action,
                   apply_level2_tick, industry_cost, CENTRAL_BANK_COOLDOWN, INTERVENTION_COST)


# ─── Transition ───

def test_continue_requires_level1_complete(save, config):
    result = continue_to_level2(save, config)
    assert result == {"ok": False, "status": 400, "error": "Level 1 not complete"}


def test_continue_is_idempotent(level2_save, config):
    assert level2_save.level == 2
    assert level2_save.level2.macro.regime == "STABLE"
    assert continue_to_level2(level2_save, config) == {"ok": True, "already": True}


def test_level2_actions_need_level2(save, config):
    assert central_bank_action(save, "RAISE_RATE")["error"] == "Level 2 not active"
    assert enact_level2_decree(save, config, "DEC_TRANSPARENCY")["error"] == "Level 2 not active"


# ─── Decrees ───

def test_transparency_decree(level2_save, config):
    level2_save.tick_count = 10
    level2_save.treasury = 200
    result = enact_level2_decree(level2_save, config, "DEC_TRANSPARENCY")
    assert result["ok"]
    assert level2_save.treasury == 140
    decrees = level2_save.level2.decrees
    assert decrees.cooldown_until_by_id["DEC_TRANSPARENCY"] == 210
    assert len(decrees.history) == 1
    assert decrees.history[0].decree_id == "DEC_TRANSPARENCY"

    again = enact_level2_decree(level2_save, config, "DEC_TRANSPARENCY")
    assert again["error"] == "Cooldown active"
    assert again["cooldown_until"] == 210


def test_decree_check_order(level2_save, config):
    assert enact_level2_decree(level2_save, config, "DEC_CURFEW")["status"] == 404
    assert enact_level2_decree(level2_save, config, "DEC_DIGITALIZATION")["error"] == "Phase locked"
    level2_save.treasury = 10
    assert enact_level2_decree(level2_save, config, "DEC_SOCIAL_PACT")["error"] == \
        "Insufficient resources"


def test_call_elections_decree_runs_election(level2_save, config, monkeypatch):
    calls = []

    def fake_election(save, bypass_cooldown=False, rng=None):
        calls.append(save.tick_count)
        return {"ok": True, "win": True}

    monkeypatch.setattr("level2_decrees.run_election", fake_election)
    level2_save.treasury = 500
    result = enact_level2_decree(level2_save, config, "DEC_CALL_ELECTIONS")
    assert result["ok"]
    assert result["election"]["win"] is True
    assert calls == [level2_save.tick_count]
    assert level2_save.treasury == 500


# ─── Elections ───

def test_election_loss_ends_level2(level2_save, rng):
    level2_save.treasury = 300
    result = run_election(level2_save, rng=rng(0.999))
    assert result["ok"] and result["win"] is False
    assert level2_save.treasury == 300 - ELECTION_COST
    assert level2_save.level2.game_over is True
    assert level2_save.level2.game_over_reason == DEFEAT_REASON


def test_election_win_awards_medal_once(level2_save, rng):
    level2_save.treasury = 300
    result = run_election(level2_save, rng=rng(0.0))
    assert result["win"]
    assert level2_save.medals.count(REELECTION_MEDAL) == 1
    assert run_election(level2_save, rng=rng(0.0))["error"] == "Cooldown active"
    run_election(level2_save, bypass_cooldown=True, rng=rng(0.0))
    assert level2_save.medals.count(REELECTION_MEDAL) == 1


def test_election_needs_democracy(level2_save):
    level2_save.leader.role_id = "DICTATOR"
    assert run_election(level2_save)["status"] == 403


def test_win_chance_bounds(level2_save):
    level2_save.happiness = level2_save.stability = level2_save.institutional_trust = 0
    level2_save.corruption = 100
    assert win_chance(level2_save) == 0.05
    level2_save.happiness = level2_save.stability = level2_save.institutional_trust = 100
    level2_save.corruption = 0
    level2_save.reputation = 100
    assert win_chance(level2_save) == 0.95


# ─── Central bank ───

def test_central_bank_raise_then_cooldown(level2_save):
    level2_save.tick_count = 40
    result = central_bank_action(level2_save, "RAISE_RATE")
    assert result["ok"]
    assert result["cooldown_until_tick"] == 40 + CENTRAL_BANK_COOLDOWN
    assert central_bank_action(level2_save, "LOWER_RATE")["error"] == "Cooldown active"


def test_central_bank_intervene_costs_treasury(level2_save):
    level2_save.treasury = 500
    central_bank_action(level2_save, "INTERVENE")
    assert level2_save.treasury == 500 - INTERVENTION_COST
    assert level2_save.level2.macro.central_bank.effect_until_tick is None


def test_central_bank_unknown_action(level2_save):
    assert central_bank_action(level2_save, "PRINT_MONEY")["error"] == "Unknown action"


# ─── Industries, advisors, projects ───

def test_base_industry_charged_and_activated(level2_save, config):
    level2_save.treasury = 1000
    cost = industry_cost(config.level2_industry("L2_ADV_MANUFACTURING"))
    result = set_level2_base_industry(level2_save, config, "L2_ADV_MANUFACTURING")
    assert result["ok"]
    assert level2_save.treasury == 1000 - cost
    industries = level2_save.level2.industries
    assert industries.active_industries == ["L2_ADV_MANUFACTURING"]
    assert set_level2_base_industry(level2_save, config, "L2_LOGISTICS_HUB")["error"] == \
        "Base industry already chosen"
    assert level2_save.level2.projects["L2P_INDUSTRIAL_PARK"].status == "available"


def test_locked_industry(level2_save, config):
    level2_save.treasury = 1000
    assert activate_level2_industry(level2_save, config, "L2_RENEWABLE_ENERGY")["error"] == \
        "Industry locked"


def test_advisors_unlock_projects(level2_save, config):
    assert level2_save.level2.projects["L2P_SOCIAL_HOUSING"].status == "locked"
    result = set_level2_advisors(level2_save, config, ["ADV_SOCIAL", "ADV_SOCIAL"])
    assert result["advisors"] == ["ADV_SOCIAL"]
    assert level2_save.level2.projects["L2P_SOCIAL_HOUSING"].status == "available"


def test_level2_project_runs_to_completion(level2_save, config):
    level2_save.treasury = 1000
    assert start_level2_project(level2_save, config, "L2P_FISCAL_RULE")["ok"]
    assert start_level2_project(level2_save, config, "L2P_FISCAL_RULE")["error"] == \
        "Project not available"
    level2_save.debt = 300
    project = config.level2_project("L2P_FISCAL_RULE")
    for _ in range(project.duration_ticks):
        apply_level2_tick(level2_save, config, suppress_events=True)
    assert level2_save.level2.projects["L2P_FISCAL_RULE"].status == "completed"
    assert level2_save.debt == 200


# ─── Macro tick ───

def test_level2_tick_advances_clock(level2_save, config):
    tick = level2_save.tick_count
    log = apply_level2_tick(level2_save, config, suppress_events=True)
    assert log["tick"] == tick + 1
    assert log["regime"] == "STABLE"
    assert log["event"] is None


def test_level2_tick_stops_after_defeat(level2_save, config):
    level2_save.level2.game_over = True
    assert apply_level2_tick(level2_save, config) == {"skipped": "game_over"}


def test_tick_reclassifies_regime_with_news(level2_save, config):
    level2_save.level2.macro.inflation_pct = 2.5
    happiness = level2_save.happiness
    log = apply_level2_tick(level2_save, config, suppress_events=True)
    assert log["regime"] == "HYPER"
    assert any("hyper" in n.text for n in level2_save.news)
    assert level2_save.happiness < happiness


# ─── Level 2 events ───

@pytest.fixture
def agro_save(level2_save, config):
    level2_save.treasury = 1000
    set_level2_base_industry(level2_save, config, "L2_AGRO_PRECISION")
    return level2_save


def test_event_triggers_and_resolves(agro_save, config, rng):
    result = maybe_trigger_level2_event(agro_save, config, rng=rng(0.0))
    assert result["triggered"]
    pending = agro_save.level2.events.pending
    event = config.level2_event(pending.event_id)
    assert is_eligible(event, agro_save, {"agro", "food", "rural"})
    assert agro_save.level2.events.next_check_tick >= agro_save.tick_count + 10

    again = maybe_trigger_level2_event(agro_save, config, rng=rng(0.0))
    assert again["triggered"] is False

    option_id = pending.options[0].option_id
    resolved = resolve_level2_event(agro_save, config, pending.instance_id, option_id)
    assert resolved["ok"]
    assert agro_save.level2.events.pending is None
    assert agro_save.level2.events.history[0].chosen_option_id == option_id


def test_event_resolution_errors(agro_save, config, rng):
    assert resolve_level2_event(agro_save, config, "x", "y")["error"] == "No pending event"
    maybe_trigger_level2_event(agro_save, config, rng=rng(0.0))
    pending = agro_save.level2.events.pending
    assert resolve_level2_event(agro_save, config, "wrong", "y")["error"] == "Event mismatch"
    assert resolve_level2_event(agro_save, config, pending.instance_id, "NOPE")["error"] == \
        "Option not found"
