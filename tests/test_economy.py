import pytest

from economy import (adjust_budget, update_budget, set_tax_level, set_tax_rate_pct,
                     tax_rate, maybe_unlock_plan_anticrisis, activate_plan_anticrisis,
                     set_industry_leader, collect_alerts, MIN_TAX_RATE, MAX_TAX_RATE,
                     PLAN_COOLDOWN_TICKS)
from models import Budget


def test_budget_redistributes_proportionally():
    budget = adjust_budget(Budget(34, 33, 33), "industry_pct", 50)
    assert budget.industry_pct == 50
    assert budget.welfare_pct + budget.security_diplomacy_pct == 50
    assert budget.total() == 100


def test_budget_with_empty_others_gives_remainder_to_first():
    budget = adjust_budget(Budget(100, 0, 0), "industry_pct", 40)
    assert (budget.industry_pct, budget.welfare_pct, budget.security_diplomacy_pct) == (40, 60, 0)


def test_budget_value_is_clamped():
    budget = adjust_budget(Budget(34, 33, 33), "welfare_pct", 140)
    assert budget.welfare_pct == 100
    assert budget.total() == 100


def test_update_budget_rejects_unknown_key(save):
    result = update_budget(save, "military_pct", 10)
    assert result == {"ok": False, "status": 400, "error": "Unknown budget key: military_pct"}


def test_tax_rate_range(save):
    set_tax_rate_pct(save, 0)
    assert tax_rate(save) == pytest.approx(MIN_TAX_RATE)
    set_tax_rate_pct(save, 100)
    assert tax_rate(save) == pytest.approx(MAX_TAX_RATE)


def test_tax_level_sets_rate(save):
    assert set_tax_level(save, "HIGH")["ok"]
    assert save.tax_rate_pct == 85
    assert set_tax_level(save, "EXTREME")["status"] == 400


def test_plan_anticrisis_unlocks_once(save):
    save.treasury = 0
    assert maybe_unlock_plan_anticrisis(save) is True
    assert maybe_unlock_plan_anticrisis(save) is False
    unlock_news = [n for n in save.news if "plan anticrisis" in n.text.lower()]
    assert len(unlock_news) == 1


def test_plan_anticrisis_requires_unlock(save):
    assert activate_plan_anticrisis(save)["error"] == "Locked"


def test_plan_anticrisis_boosts_critical_metrics(save):
    save.plan_anticrisis_unlocked = True
    save.stability = 10
    save.treasury = 0
    save.tick_count = 5
    result = activate_plan_anticrisis(save)
    assert result["ok"]
    assert "stability" in result["bonus_applied"]
    assert save.stability == 70
    assert save.treasury == 200
    assert save.plan_anticrisis_cooldown_until == 5 + PLAN_COOLDOWN_TICKS
    assert activate_plan_anticrisis(save)["error"] == "Cooldown"


def test_industry_leader_must_exist(save, config):
    assert set_industry_leader(save, config, "UNOBTAINIUM")["status"] == 404


def test_alerts_flag_low_stability(save):
    save.stability = 20
    assert collect_alerts(save)["stability"] == "CRITICAL"
