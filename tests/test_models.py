from models import (Save, state_to_json, state_from_json, save_from_dict, merge_saves,
                    classify_regime, Level2PendingEvent, Level2EventOption,
                    Level2DecreeRecord, MAX_NEWS)


def test_round_trip_preserves_level1_save(save):
    save.treasury = 123.5
    save.event_history["E_FLOOD"] = 7
    save.decree_slots[0].decree_id = "DEC_AUSTERITY"
    assert state_from_json(state_to_json(save)) == save


def test_round_trip_preserves_level2_state(level2_save):
    l2 = level2_save.level2
    l2.advisors = ["ADV_GREEN"]
    l2.industries.chosen_base_industry_id = "L2_AGRO_PRECISION"
    l2.industries.active_industries = ["L2_AGRO_PRECISION"]
    l2.macro.central_bank.effect_until_tick = 130
    l2.events.pending = Level2PendingEvent(
        instance_id="l2evt_abc", event_id="L2_DROUGHT", title="Sequia", body="",
        created_tick=4, options=[Level2EventOption(option_id="PRAY", label="Rezar", hint="")])
    l2.decrees.history.append(Level2DecreeRecord(decree_id="DEC_TRANSPARENCY",
                                                 enacted_tick=3, summary="ok"))
    l2.decrees.cooldown_until_by_id["DEC_TRANSPARENCY"] = 203

    restored = state_from_json(state_to_json(level2_save))
    assert restored == level2_save
    assert restored.level2.events.pending.options[0].option_id == "PRAY"


def test_old_snapshot_loads_with_defaults():
    save = save_from_dict({"treasury": 50, "country": {"base_name": "Vieja"}})
    assert save.treasury == 50
    assert save.country.base_name == "Vieja"
    assert save.level2 is None
    assert save.news == []


def test_merge_picks_newer_snapshot():
    local = Save(updated_at="2026-01-01T00:00:00+00:00", treasury=1)
    remote = Save(updated_at="2026-01-02T00:00:00+00:00", treasury=2)
    assert merge_saves(local, remote) is remote
    assert merge_saves(remote, local) is remote


def test_merge_tie_and_missing_sides():
    local = Save(updated_at="2026-01-01T00:00:00Z")
    remote = Save(updated_at="2026-01-01T00:00:00+00:00")
    assert merge_saves(local, remote) is local
    assert merge_saves(None, remote) is remote
    assert merge_saves(local, None) is local


def test_news_keeps_newest_first_and_caps():
    save = Save()
    for i in range(MAX_NEWS + 5):
        save.add_news(f"n{i}")
    assert len(save.news) == MAX_NEWS
    assert save.news[0].text == f"n{MAX_NEWS + 4}"


def test_regime_boundaries():
    assert classify_regime(-0.01) == "DEFLATION"
    assert classify_regime(0) == "STABLE"
    assert classify_regime(0.5) == "HIGH"
    assert classify_regime(2) == "HYPER"
