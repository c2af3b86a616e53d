from coup_risk import (apply_coup_risk, compute_risk, ZERO_MORALE_TICKS, DEBT_OVER_TICKS,
                       REASON_MORALE, REASON_DEBT)
from engine import apply_tick


def test_healthy_nation_has_low_risk(save):
    save.treasury = 500
    save.happiness = 60
    save.stability = 60
    risk, causes = compute_risk(save)
    assert risk == 0
    assert causes == []


def test_risk_collects_causes(save):
    save.treasury = 100
    save.happiness = 5
    save.stability = 5
    save.corruption = 95
    risk, causes = compute_risk(save)
    assert risk == 70
    assert [label for label, _ in causes] == [
        "Felicidad <= 10", "Estabilidad <= 10", "Corrupcion >= 90"]


def test_zero_morale_ends_game_after_sustained_ticks(save):
    save.happiness = 0
    save.stability = 0
    for _ in range(ZERO_MORALE_TICKS - 1):
        assert apply_coup_risk(save)["game_over"] is False
    result = apply_coup_risk(save)
    assert result["game_over"] is True
    assert save.game_over_reason == REASON_MORALE
    assert save.game_over_advice
    assert len(save.game_over_causes) <= 3


def test_morale_counter_resets_on_recovery(save):
    save.happiness = 0
    save.stability = 0
    apply_coup_risk(save)
    save.happiness = 5
    apply_coup_risk(save)
    assert save.zero_morale_ticks == 0


def test_debt_over_ratio_ends_game(save):
    save.gdp = 100
    save.debt = 500
    for _ in range(DEBT_OVER_TICKS):
        result = apply_coup_risk(save)
    assert result["game_over"]
    assert save.game_over_reason == REASON_DEBT


def test_game_over_triggers_once(save):
    save.happiness = 0
    save.stability = 0
    for _ in range(ZERO_MORALE_TICKS):
        apply_coup_risk(save)
    news_count = len(save.news)
    assert apply_coup_risk(save)["game_over"] is False
    assert len(save.news) == news_count


def test_tick_is_noop_after_game_over(save, config):
    save.game_over = True
    tick = save.tick_count
    assert apply_tick(save, config) == {"skipped": "game_over"}
    assert save.tick_count == tick
