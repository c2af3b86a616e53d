"""
MicroEstado Engine v1.0 — Coup Risk
Scores how close the government is to falling and ends the game when a
crisis is sustained for long enough.

Three one-way exits:
  zero morale   happiness and stability both at 0 for 20 ticks
  debt          debt/GDP >= 4 for 30 ticks
  risk          score >= 85 for 60 ticks
"""

import logging

from models import Save, clamp, now_iso

logger = logging.getLogger("microestado.coup_risk")

RISK_THRESHOLD = 85
RISK_TICKS = 60
ZERO_MORALE_TICKS = 20
DEBT_OVER_TICKS = 30
TREASURY_RISK_TICKS = 10
DEBT_OVER_RATIO = 4

REASON_MORALE = "Colapso social sostenido"
REASON_DEBT = "Crisis fiscal estructural"
REASON_RISK = "Riesgo de derrocamiento sostenido"


def compute_risk(save: Save) -> tuple:
    """
    Score in [0, 100] plus the penalty list [(label, weight)] in the order
    they were checked. Reads zero_treasury_ticks, so update counters first.
    """
    ratio = save.debt_ratio()
    causes = []
    if save.happiness <= 10:
        causes.append(("Felicidad <= 10", 25))
    if save.stability <= 10:
        causes.append(("Estabilidad <= 10", 25))
    if save.institutional_trust <= 10:
        causes.append(("Confianza <= 10", 20))
    if save.zero_treasury_ticks >= TREASURY_RISK_TICKS:
        causes.append(("Tesoro en cero sostenido", 20))
    if ratio > 2.5:
        causes.append((f"Deuda/PIB {ratio:.1f}", 20))
    if save.growth_pct <= -5:
        causes.append(("Crecimiento <= -5%", 10))
    if save.corruption >= 90:
        causes.append(("Corrupcion >= 90", 20))

    risk = sum(weight for _, weight in causes)
    if save.treasury > 200:
        risk -= 10
    if save.happiness > 50:
        risk -= 10
    if save.stability > 50:
        risk -= 10
    return clamp(risk, 0, 100), causes


def game_over_advice(save: Save) -> str:
    if save.debt_ratio() >= 3:
        return "Reduce gasto y ajusta impuestos para frenar la deuda."
    if save.corruption >= 85:
        return "Baja corrupcion con contraloria y controles."
    if save.happiness <= 15:
        return "Sube bienestar y empleo para recuperar felicidad."
    if save.stability <= 15:
        return "Equilibra presupuesto y sube confianza institucional."
    return "Sube bienestar 10-15% y reduce desigualdad."


def apply_coup_risk(save: Save) -> dict:
    """Update counters and the score; trigger game over at most once."""
    save.zero_treasury_ticks = save.zero_treasury_ticks + 1 if save.treasury <= 0 else 0
    save.zero_morale_ticks = (save.zero_morale_ticks + 1
                              if save.happiness <= 0 and save.stability <= 0 else 0)
    save.debt_over_ticks = (save.debt_over_ticks + 1
                            if save.debt_ratio() >= DEBT_OVER_RATIO else 0)

    risk, causes = compute_risk(save)
    save.last_risk = risk
    save.risk_ticks = save.risk_ticks + 1 if risk >= RISK_THRESHOLD else 0

    over_by_risk = save.risk_ticks >= RISK_TICKS
    over_by_morale = save.zero_morale_ticks >= ZERO_MORALE_TICKS
    over_by_debt = save.debt_over_ticks >= DEBT_OVER_TICKS
    result = {"risk": risk, "causes": [label for label, _ in causes], "game_over": False}

    if save.game_over or not (over_by_risk or over_by_morale or over_by_debt):
        return result

    if over_by_morale:
        reason = REASON_MORALE
    elif over_by_debt:
        reason = REASON_DEBT
    else:
        reason = REASON_RISK

    top = sorted(causes, key=lambda c: c[1], reverse=True)[:3]
    save.game_over = True
    save.game_over_reason = reason
    save.game_over_at = now_iso()
    save.game_over_at_tick = save.tick_count
    save.game_over_causes = [label for label, _ in top]
    save.game_over_advice = game_over_advice(save)
    save.active_event_id = None
    save.add_news("El gabinete declara el fin del mandato.")
    logger.info(f"Game over at tick {save.tick_count}: {reason}")

    result["game_over"] = True
    result["reason"] = reason
    return result
