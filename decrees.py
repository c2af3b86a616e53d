"""
MicroEstado Engine v1.0 — Level 1 Decrees
Two slots. A slot holds a decree id; activating it pays the cost, runs the
decree for its duration and then locks the slot for its cooldown. Active
decrees fold passive modifiers into every tick.
"""

import logging

from models import Save, DecreeSlot
from effects import apply_effects, can_afford
from config import GameConfig
from projects import leader_title

logger = logging.getLogger("microestado.decrees")

SLOT_COUNT = 2
CHECKS_BALANCES_FLOOR = 45


def empty_slots() -> list:
    return [DecreeSlot(slot_id=i + 1) for i in range(SLOT_COUNT)]


def set_decree_slot(save: Save, config: GameConfig, slot_id: int, decree_id: str = None) -> dict:
    """Assign (or clear) a slot. The decree is evicted from any other slot."""
    slot = save.slot(slot_id)
    if slot is None:
        return {"ok": False, "status": 404, "error": f"Unknown slot: {slot_id}"}
    if decree_id and not config.decree(decree_id):
        return {"ok": False, "status": 404, "error": f"Unknown decree: {decree_id}"}

    for other in save.decree_slots:
        if other.slot_id == slot_id:
            other.decree_id = decree_id or None
        elif decree_id and other.decree_id == decree_id:
            other.decree_id = None
    return {"ok": True, "slot_id": slot_id, "decree_id": slot.decree_id}


def activate_decree(save: Save, config: GameConfig, slot_id: int) -> dict:
    slot = save.slot(slot_id)
    if slot is None:
        return {"ok": False, "status": 404, "error": f"Unknown slot: {slot_id}"}
    if not slot.decree_id:
        return {"ok": False, "status": 400, "error": "No decree"}
    decree = config.decree(slot.decree_id)
    if not decree:
        return {"ok": False, "status": 404, "error": "Missing decree"}
    if save.tick_count < slot.cooldown_until:
        return {"ok": False, "status": 400, "error": "Cooldown",
                "cooldown_until": slot.cooldown_until}
    if not can_afford(save, decree.cost):
        return {"ok": False, "status": 400, "error": "Insufficient resources"}

    role = config.role(save.leader.role_id)
    extra = {}
    if role and role.checks_balances and (
            save.stability < CHECKS_BALANCES_FLOOR
            or save.institutional_trust < CHECKS_BALANCES_FLOOR):
        extra = {"stability": -2, "institutionalTrust": -2}

    apply_effects(save, decree.cost, source=decree.id)
    if extra:
        apply_effects(save, extra, source=f"{decree.id} checks and balances")

    slot.active_until = save.tick_count + decree.duration_ticks
    slot.cooldown_until = slot.active_until + decree.cooldown_ticks
    save.add_news(f"{leader_title(save, config)} activa el decreto {decree.name}.",
                  news_type="SYSTEM")
    logger.debug(f"Decree {decree.id} active until tick {slot.active_until}")
    return {"ok": True, "decree_id": decree.id, "active_until": slot.active_until,
            "cooldown_until": slot.cooldown_until}


def decree_modifiers(save: Save, config: GameConfig) -> dict:
    """Aggregate modifiers of every slot still inside its active window."""
    acc = {
        "incomeMult": 1.0,
        "growthBonus": 0,
        "happinessDrift": 0,
        "stabilityDrift": 0,
        "institutionalTrustDrift": 0,
        "corruptionDrift": 0,
        "reputationDrift": 0,
    }
    for slot in save.decree_slots:
        if not slot.decree_id or save.tick_count >= slot.active_until:
            continue
        decree = config.decree(slot.decree_id)
        if not decree:
            continue
        mods = decree.modifiers or {}
        acc["incomeMult"] *= mods.get("incomeMult", 1)
        for key in acc:
            if key != "incomeMult":
                acc[key] += mods.get(key, 0)
    return acc
