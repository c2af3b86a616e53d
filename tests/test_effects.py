import pytest

from effects import apply_effects, normalize_effects, format_effects_summary, can_afford
from models import INFLATION_MAX


def test_percent_stats_clamp_to_0_100(save):
    save.happiness = 95
    save.corruption = 3
    apply_effects(save, {"happiness": 20, "corruption": -10})
    assert save.happiness == 100
    assert save.corruption == 0


def test_money_floors_at_zero_and_gdp_at_one(save):
    save.treasury = 50
    save.gdp = 30
    apply_effects(save, {"treasury": -500, "gdp": -100})
    assert save.treasury == 0
    assert save.gdp == 1


def test_growth_clamped(save):
    save.growth_pct = 11
    apply_effects(save, {"growthPct": 5})
    assert save.growth_pct == 12


def test_aliases_sum_into_canonical_key():
    assert normalize_effects({"treasury": 10, "treasuryDelta": 5, "jobs": 2}) == {
        "treasury": 15, "employment": 2,
    }


def test_unknown_keys_are_ignored_and_reported(save, caplog):
    before = save.happiness
    result = apply_effects(save, {"happiness": 1, "moonBase": 3}, source="test")
    assert result["ignored"] == ["moonBase"]
    assert save.happiness == before + 1
    assert "moonBase" in caplog.text


def test_unlock_flags_only_set(save):
    apply_effects(save, {"adminUnlocked": 1})
    assert save.admin_unlocked is True
    apply_effects(save, {"adminUnlocked": 0})
    assert save.admin_unlocked is True


def test_offline_multiplier_keeps_the_larger_value(save):
    apply_effects(save, {"offlineIncomeBonus": 0.25})
    apply_effects(save, {"offlineIncomeBonus": 0.1})
    assert save.offline_reward_multiplier == 0.25


def test_inflation_ignored_without_level2(save):
    result = apply_effects(save, {"inflationPct": 0.3})
    assert result["ignored"] == ["inflationPct"]


def test_inflation_crossing_into_high_adds_one_news(level2_save):
    macro = level2_save.level2.macro
    macro.inflation_pct = 0.45
    apply_effects(level2_save, {"inflationPct": 0.1})
    assert macro.inflation_pct == pytest.approx(0.55)
    assert macro.regime == "HIGH"
    regime_news = [n for n in level2_save.news if "regimen" in n.text]
    assert len(regime_news) == 1


def test_inflation_clamped(level2_save):
    apply_effects(level2_save, {"inflationPct": 50})
    assert level2_save.level2.macro.inflation_pct == INFLATION_MAX
    assert level2_save.level2.macro.regime == "HYPER"


def test_can_afford_checks_negative_deltas(save):
    save.treasury = 100
    assert can_afford(save, {"treasury": -100})
    assert not can_afford(save, {"treasury": -101})


def test_summary_lists_known_effects():
    text = format_effects_summary({"happiness": 3, "corruption": -2})
    assert "+3" in text
    assert "-2" in text
