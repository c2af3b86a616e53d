"""
MicroEstado Engine v1.0 — Level 2 Decrees
Instant, regime-gated decrees. Each has a treasury/admin cost, an effect
map and a per-decree cooldown. CALL_ELECTIONS runs an election instead of
applying effects.
"""

import logging

from models import Save, Level2DecreeRecord
from effects import apply_effects, format_effects_summary
from config import GameConfig, Level2DecreeConfig
from elections import run_election

logger = logging.getLogger("microestado.level2_decrees")

HISTORY_LIMIT = 30
CALL_ELECTIONS = "CALL_ELECTIONS"


def can_afford(save: Save, decree: Level2DecreeConfig) -> bool:
    cost = decree.cost or {}
    if save.treasury < cost.get("treasury", 0):
        return False
    if save.admin < cost.get("admin", 0):
        return False
    return True


def decree_summary(decree: Level2DecreeConfig) -> str:
    return decree.summary or format_effects_summary(decree.effects) or decree.title


def enact_level2_decree(save: Save, config: GameConfig, decree_id: str, rng=None) -> dict:
    if not save.level2_active():
        return {"ok": False, "status": 400, "error": "Level 2 not active"}

    l2 = save.level2
    role_id = save.leader.role_id
    decree = next((d for d in config.level2_decrees_for_role(role_id)
                   if d.id == decree_id), None)
    if decree is None:
        return {"ok": False, "status": 404, "error": "Decree not found"}

    requires = decree.requires or {}
    min_phase = requires.get("minPhase")
    if min_phase and l2.phase < min_phase:
        return {"ok": False, "status": 400, "error": "Phase locked"}
    regimes = requires.get("regimesAny")
    if regimes and role_id not in regimes:
        return {"ok": False, "status": 403, "error": "Regime not allowed"}

    tick = save.tick_count
    cooldown_until = l2.decrees.cooldown_until_by_id.get(decree.id, 0)
    if tick < cooldown_until:
        return {"ok": False, "status": 400, "error": "Cooldown active",
                "cooldown_until": cooldown_until}
    if not can_afford(save, decree):
        return {"ok": False, "status": 400, "error": "Insufficient resources"}

    election = None
    if decree.action == CALL_ELECTIONS:
        election = run_election(save, rng=rng)
        if not election["ok"]:
            return election
    else:
        cost = decree.cost or {}
        if "treasury" in cost:
            save.treasury = max(0, save.treasury - cost["treasury"])
        if "admin" in cost:
            save.admin = max(0, save.admin - cost["admin"])
        apply_effects(save, decree.effects, source=decree.id)

    l2.decrees.cooldown_until_by_id[decree.id] = tick + decree.cooldown_ticks
    summary = decree_summary(decree)
    l2.decrees.history.insert(0, Level2DecreeRecord(
        decree_id=decree.id, enacted_tick=tick, summary=summary))
    del l2.decrees.history[HISTORY_LIMIT:]

    save.add_news(f"DECRETO: {decree.title} - {summary}")
    logger.debug(f"Level 2 decree {decree.id} enacted at tick {tick}")

    result = {"ok": True, "summary": summary}
    if election is not None:
        result["election"] = election
    return result
