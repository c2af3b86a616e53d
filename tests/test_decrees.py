from decrees import set_decree_slot, activate_decree, decree_modifiers


def test_slot_assignment_evicts_duplicates(save, config):
    set_decree_slot(save, config, 1, "DEC_STIMULUS")
    result = set_decree_slot(save, config, 2, "DEC_STIMULUS")
    assert result["ok"]
    assert save.slot(1).decree_id is None
    assert save.slot(2).decree_id == "DEC_STIMULUS"


def test_slot_errors(save, config):
    assert set_decree_slot(save, config, 3, "DEC_STIMULUS")["status"] == 404
    assert set_decree_slot(save, config, 1, "DEC_NOPE")["status"] == 404
    assert activate_decree(save, config, 1)["error"] == "No decree"


def test_activation_charges_cost_and_sets_windows(save, config):
    save.tick_count = 5
    save.treasury = 100
    set_decree_slot(save, config, 1, "DEC_STIMULUS")
    result = activate_decree(save, config, 1)
    assert result == {"ok": True, "decree_id": "DEC_STIMULUS",
                      "active_until": 65, "cooldown_until": 185}
    assert save.treasury == 50
    assert activate_decree(save, config, 1)["error"] == "Cooldown"


def test_activation_needs_resources(save, config):
    save.treasury = 10
    set_decree_slot(save, config, 1, "DEC_STIMULUS")
    assert activate_decree(save, config, 1)["error"] == "Insufficient resources"


def test_checks_and_balances_penalty(save, config):
    save.treasury = 100
    save.stability = 40
    trust = save.institutional_trust
    set_decree_slot(save, config, 1, "DEC_ANTICORRUPTION")
    activate_decree(save, config, 1)
    assert save.stability == 38
    assert save.institutional_trust == trust - 2


def test_active_decree_modifiers(save, config):
    save.treasury = 100
    set_decree_slot(save, config, 1, "DEC_STIMULUS")
    activate_decree(save, config, 1)
    mods = decree_modifiers(save, config)
    assert mods["incomeMult"] == 0.95
    assert mods["growthBonus"] == 0.05
