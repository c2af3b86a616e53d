"""
MicroEstado Engine v1.0 — Elections
Level 2 vote for democratic roles. A win renews the mandate; a loss ends
the Level 2 game.
"""

import logging

from models import Save, clamp
from dice import roll_chance
from config import is_democratic

logger = logging.getLogger("microestado.elections")

ELECTION_COOLDOWN_TICKS = 600
ELECTION_COST = 100
REELECTION_MEDAL = "REELECTION_L2"
DEFEAT_REASON = "Derrota electoral"

WIN_NARRATIVE = "La coalicion ratifica el mandato con respaldo amplio."
LOSS_NARRATIVE = "La oposicion gana y el gabinete entrega el poder."


def win_chance(save: Save) -> float:
    score = (save.happiness * 0.35
             + save.stability * 0.35
             + save.institutional_trust * 0.25
             - save.corruption * 0.3
             + save.reputation * 0.1)
    return clamp(score / 100, 0.05, 0.95)


def run_election(save: Save, bypass_cooldown: bool = False, rng=None) -> dict:
    """
    Hold an election. The campaign always costs treasury, win or lose.
    Failures come back as {"ok": False, "status", "error"}.
    """
    if not save.level2_active():
        return {"ok": False, "status": 400, "error": "Level 2 not active"}
    if not is_democratic(save.leader.role_id):
        return {"ok": False, "status": 403, "error": "Regime not democratic"}

    elections = save.level2.elections
    tick = save.tick_count
    if not bypass_cooldown and tick < elections.cooldown_until_tick:
        return {"ok": False, "status": 400, "error": "Cooldown active",
                "cooldown_until_tick": elections.cooldown_until_tick}

    chance = win_chance(save)
    roll = roll_chance(chance, label="election", rng=rng)
    win = roll["success"]

    save.treasury = max(0, save.treasury - ELECTION_COST)
    elections.cooldown_until_tick = tick + ELECTION_COOLDOWN_TICKS

    if win:
        save.reputation = clamp(save.reputation + 5, 0, 100)
        save.institutional_trust = clamp(save.institutional_trust + 5, 0, 100)
        if REELECTION_MEDAL not in save.medals:
            save.medals.append(REELECTION_MEDAL)
        narrative = WIN_NARRATIVE
    else:
        save.level2.game_over = True
        save.level2.game_over_reason = DEFEAT_REASON
        narrative = LOSS_NARRATIVE

    logger.info(f"Election at tick {tick}: {'win' if win else 'loss'} "
                f"(chance {chance:.2f})")
    return {
        "ok": True,
        "win": win,
        "win_chance": chance,
        "narrative": narrative,
        "cooldown_until_tick": elections.cooldown_until_tick,
        "roll": roll,
    }
