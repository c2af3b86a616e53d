"""
MicroEstado Engine v1.0 — Economy
Tax, tourism and industry math, budget redistribution, indicator alerts and
the plan anticrisis. Pure functions over a Save plus the loaded config; the
tick orchestrator in engine.py strings them together.
"""

import logging

from models import Save, Budget, clamp
from effects import apply_effects
from config import GameConfig

logger = logging.getLogger("microestado.economy")


# ─────────────────────────────────────────────────────
# TAX
# ─────────────────────────────────────────────────────

TAX_LEVEL_TO_PCT = {"LOW": 20, "MED": 50, "HIGH": 85}
MIN_TAX_RATE = 0.08
MAX_TAX_RATE = 0.30


def tax_rate_pct(save: Save) -> float:
    if save.tax_rate_pct is not None:
        return clamp(save.tax_rate_pct, 0, 100)
    return TAX_LEVEL_TO_PCT.get(save.tax_level, TAX_LEVEL_TO_PCT["MED"])


def tax_rate(save: Save) -> float:
    """0.08 at 0% up to 0.30 at 100%."""
    return MIN_TAX_RATE + (MAX_TAX_RATE - MIN_TAX_RATE) * tax_rate_pct(save) / 100


def collection_efficiency(save: Save, config: GameConfig) -> float:
    base = config.economy.collection_efficiency_base
    value = (base + (save.institutional_trust - 50) * 0.003
             - save.corruption * 0.004)
    return clamp(value, 0.2, 1.2)


def evasion_rate(save: Save, config: GameConfig, evasion_reduction: float = 0) -> float:
    value = (config.economy.evasion_base
             + save.corruption * 0.002
             - save.institutional_trust * 0.0015
             - evasion_reduction
             + tax_rate_pct(save) / 100 * 0.08)
    return clamp(value, 0.05, 0.85)


def set_tax_level(save: Save, level: str) -> dict:
    if level not in TAX_LEVEL_TO_PCT:
        return {"ok": False, "status": 400, "error": f"Unknown tax level: {level}"}
    save.tax_level = level
    save.tax_rate_pct = TAX_LEVEL_TO_PCT[level]
    return {"ok": True, "tax_level": level, "tax_rate_pct": save.tax_rate_pct}


def set_tax_rate_pct(save: Save, value: float) -> dict:
    save.tax_rate_pct = clamp(value, 0, 100)
    return {"ok": True, "tax_rate_pct": save.tax_rate_pct}


# ─────────────────────────────────────────────────────
# BUDGET
# ─────────────────────────────────────────────────────

BUDGET_KEYS = ("industry_pct", "welfare_pct", "security_diplomacy_pct")


def adjust_budget(budget: Budget, key: str, value: float) -> Budget:
    """
    Set one share and redistribute the remainder over the other two in
    proportion to their current values. The result always sums to 100.
    """
    if key not in BUDGET_KEYS:
        raise KeyError(key)
    value = clamp(value, 0, 100)
    remaining = 100 - value
    others = [k for k in BUDGET_KEYS if k != key]
    first, second = others
    other_total = getattr(budget, first) + getattr(budget, second)

    shares = {key: value}
    if other_total <= 0:
        shares[first] = remaining
        shares[second] = 0
    else:
        first_value = round(remaining * getattr(budget, first) / other_total)
        first_value = clamp(first_value, 0, remaining)
        shares[first] = first_value
        shares[second] = remaining - first_value
    return Budget(**shares)


def update_budget(save: Save, key: str, value: float) -> dict:
    if key not in BUDGET_KEYS:
        return {"ok": False, "status": 400, "error": f"Unknown budget key: {key}"}
    save.budget = adjust_budget(save.budget, key, value)
    return {"ok": True, "budget": vars(save.budget).copy()}


def auto_balance_budget(save: Save) -> dict:
    save.budget = Budget(industry_pct=34, welfare_pct=33, security_diplomacy_pct=33)
    return {"ok": True, "budget": vars(save.budget).copy()}


# ─────────────────────────────────────────────────────
# INDUSTRIES
# ─────────────────────────────────────────────────────

SOFT_REQUIREMENT_THRESHOLD = 45
SOFT_REQUIREMENT_MULT = 0.85

# Leader-industry modifiers applied on top of the catalog industry effects.
INDUSTRY_MODIFIERS = {
    "agriculture": {"revenue_mult": 1.05, "growth_base": 0.002,
                    "happiness_delta": 0.01},
    "extraction":  {"revenue_mult": 1.2, "growth_base": 0.001,
                    "resource_delta": -0.05, "reputation_delta": -0.01},
    "light_mfg":   {"revenue_mult": 1.1, "growth_base": 0.0025,
                    "requires": "energy"},
    "services":    {"revenue_mult": 1.08, "growth_base": 0.002,
                    "requires": "stability"},
    "tech":        {"revenue_mult": 1.03, "growth_base": 0.0035,
                    "requires": "innovation"},
    "security":    {"revenue_mult": 1.02, "growth_base": 0.001,
                    "stability_delta": 0.02, "reputation_delta": -0.005},
}

INDUSTRY_MODIFIER_KEYS = {
    "AGRICULTURE": "agriculture",
    "EXTRACTION": "extraction",
    "LIGHT_MANUFACTURING": "light_mfg",
    "SERVICES": "services",
    "TECHNOLOGY": "tech",
    "SECURITY_DEFENSE_ABSTRACT": "security",
}


def max_industries(phase: int) -> int:
    return max(1, min(4, phase))


def industry_modifier(save: Save) -> dict:
    """
    Effective leader modifier. Each unmet soft requirement (stat < 45)
    scales revenue and growth by 0.85.
    """
    key = INDUSTRY_MODIFIER_KEYS.get(save.industry_leader_id)
    base = INDUSTRY_MODIFIERS.get(key)
    if not base:
        return {"key": None, "revenue_mult": 1, "growth_base": 0, "happiness_delta": 0,
                "resource_delta": 0, "reputation_delta": 0, "stability_delta": 0}

    mult = 1
    required = base.get("requires")
    if required and getattr(save, required) < SOFT_REQUIREMENT_THRESHOLD:
        mult *= SOFT_REQUIREMENT_MULT

    return {
        "key": key,
        "revenue_mult": base["revenue_mult"] * mult,
        "growth_base": base["growth_base"] * mult,
        "happiness_delta": base.get("happiness_delta", 0),
        "resource_delta": base.get("resource_delta", 0),
        "reputation_delta": base.get("reputation_delta", 0),
        "stability_delta": base.get("stability_delta", 0),
    }


def industry_effects(save: Save, config: GameConfig) -> dict:
    """Leader at weight 1, diversified industries at the diversification weight."""
    totals = {
        "income_mult": 1.0, "resource_drain": 0, "environmental_drift": 0,
        "reputation_drift": 0, "stability_drift": 0, "innovation_drift": 0,
        "energy_demand": 0, "climate_sensitivity": 0,
    }

    def add(industry_id, weight):
        industry = config.industry(industry_id)
        if not industry:
            return
        totals["income_mult"] *= 1 + (industry.income_mult - 1) * weight
        for name in ("resource_drain", "environmental_drift", "reputation_drift",
                     "stability_drift", "innovation_drift", "energy_demand",
                     "climate_sensitivity"):
            totals[name] += getattr(industry, name) * weight

    add(save.industry_leader_id, 1)
    room = max(0, max_industries(save.max_phase_reached or save.phase) - 1)
    diversified = [i for i in save.diversified_industries
                   if i and i != save.industry_leader_id][:room]
    for industry_id in diversified:
        add(industry_id, config.economy.industry_diversification_weight)
    return totals


def set_industry_leader(save: Save, config: GameConfig, industry_id: str) -> dict:
    if not config.industry(industry_id):
        return {"ok": False, "status": 404, "error": f"Unknown industry: {industry_id}"}
    save.industry_leader_id = industry_id
    save.diversified_industries = [i for i in save.diversified_industries
                                   if i != industry_id]
    return {"ok": True, "industry_leader_id": industry_id}


def add_diversified_industry(save: Save, config: GameConfig, industry_id: str) -> dict:
    if not config.industry(industry_id):
        return {"ok": False, "status": 404, "error": f"Unknown industry: {industry_id}"}
    unlocked_phase = save.max_phase_reached or save.phase
    room = max(0, max_industries(unlocked_phase) - 1)
    if unlocked_phase < 2 or room <= 0:
        return {"ok": False, "status": 400, "error": "Diversification locked"}
    if not save.industry_leader_id:
        save.industry_leader_id = industry_id
        return {"ok": True, "industry_leader_id": industry_id}
    if industry_id == save.industry_leader_id or industry_id in save.diversified_industries:
        return {"ok": True, "diversified_industries": list(save.diversified_industries)}
    if len(save.diversified_industries) >= room:
        return {"ok": False, "status": 400, "error": "No industry slots left"}
    save.diversified_industries.append(industry_id)
    return {"ok": True, "diversified_industries": list(save.diversified_industries)}


# ─────────────────────────────────────────────────────
# TOURISM
# ─────────────────────────────────────────────────────

TOURISM_REVENUE_PER_UNIT = 0.4
TOURISM_GDP_PER_UNIT = 0.8
TOURISM_PRESSURE_FACTOR = 0.05
TOURISM_PRESSURE_DECAY = 0.02
TOURISM_PRESSURE_THRESHOLD = 60


def tourism_metrics(save: Save) -> dict:
    reputation_factor = 0.6 + save.reputation / 100 * 0.8
    stability_factor = 0.6 + save.stability / 100 * 0.8
    geography_factor = 1.1 if save.country.geography == "archipelago" else 1
    industry_factor = 1.1 if save.industry_leader_id == "SERVICES" else 1
    demand = clamp(save.tourism_index * reputation_factor * stability_factor
                   * geography_factor * industry_factor, 0, 100)
    throughput = min(demand, save.tourism_capacity)
    over_demand = max(0, demand - save.tourism_capacity)
    pressure_delta = over_demand * TOURISM_PRESSURE_FACTOR
    if demand <= save.tourism_capacity:
        pressure_delta -= TOURISM_PRESSURE_DECAY
    next_pressure = clamp(save.tourism_pressure + pressure_delta, 0, 100)
    return {
        "demand": demand,
        "throughput": throughput,
        "revenue": throughput * TOURISM_REVENUE_PER_UNIT,
        "gdp_boost": throughput * TOURISM_GDP_PER_UNIT,
        "pressure_delta": pressure_delta,
        "next_pressure": next_pressure,
    }


def tourism_deltas(metrics: dict) -> dict:
    """Indicator side effects of tourism pressure and throughput."""
    pressure = metrics["next_pressure"]
    throughput = metrics["throughput"]
    over = pressure > TOURISM_PRESSURE_THRESHOLD

    if over:
        happiness = -1
    elif pressure < 30 and throughput > 40:
        happiness = 0.2
    else:
        happiness = 0

    if pressure > 70:
        reputation = -0.3
    elif throughput > 50 and pressure < 30:
        reputation = 0.2
    else:
        reputation = 0

    return {
        "happiness": happiness,
        "stability": -0.8 if over else 0,
        "environmental": 1 if over else 0,
        "reputation": reputation,
    }


# ─────────────────────────────────────────────────────
# ALERTS
# ─────────────────────────────────────────────────────

def _low_alert(value, critical, warn):
    if value < critical:
        return "CRITICAL"
    if value < warn:
        return "WARN"
    return "OK"


def _high_alert(value, critical, warn):
    if value > critical:
        return "CRITICAL"
    if value > warn:
        return "WARN"
    return "OK"


def stability_alert(value: float) -> str:
    return _low_alert(value, 25, 50)


def happiness_alert(value: float) -> str:
    return _low_alert(value, 25, 50)


def corruption_alert(value: float) -> str:
    return _high_alert(value, 75, 50)


def tourism_pressure_alert(value: float) -> str:
    return _high_alert(value, 80, 60)


def debt_alert(ratio: float) -> str:
    return _high_alert(ratio, 0.9, 0.6)


def growth_alert(value: float) -> str:
    return _low_alert(value, -1, 0)


def collect_alerts(save: Save) -> dict:
    return {
        "stability": stability_alert(save.stability),
        "happiness": happiness_alert(save.happiness),
        "corruption": corruption_alert(save.corruption),
        "tourism_pressure": tourism_pressure_alert(save.tourism_pressure),
        "debt": debt_alert(save.debt_ratio()),
        "growth": growth_alert(save.growth_pct),
    }


def gdp_index(save: Save) -> float:
    baseline = save.baseline_gdp or save.gdp or 1
    return save.gdp / baseline * 100


# ─────────────────────────────────────────────────────
# PLAN ANTICRISIS
# ─────────────────────────────────────────────────────

PLAN_BASE_EFFECTS = {"stability": 50, "happiness": 10, "treasury": 200, "corruption": -40}
PLAN_COOLDOWN_TICKS = 70
PLAN_BONUS_AMOUNT = 10

# (key, label, alert fn, attribute)
PLAN_CRITICAL_METRICS = [
    ("stability", "Estabilidad", stability_alert, "stability"),
    ("happiness", "Felicidad", happiness_alert, "happiness"),
    ("corruption", "Corrupcion", corruption_alert, "corruption"),
    ("tourismPressure", "Presion turismo", tourism_pressure_alert, "tourism_pressure"),
]


def maybe_unlock_plan_anticrisis(save: Save) -> bool:
    if save.plan_anticrisis_unlocked or save.treasury > 0:
        return False
    save.plan_anticrisis_unlocked = True
    save.add_news("Se desbloquea el plan anticrisis por tesoro en cero.")
    logger.info(f"Plan anticrisis unlocked at tick {save.tick_count}")
    return True


def _plan_news(auto: bool, labels: list) -> str:
    base = PLAN_BASE_EFFECTS
    prefix = "Plan anticrisis activado (auto)" if auto else "Plan anticrisis activado"
    bonus = ", ".join(labels) if labels else "ninguno"
    return (f"{prefix}: +{base['stability']} Estabilidad, +{base['happiness']} Felicidad, "
            f"+{base['treasury']} Tesoro, {base['corruption']} Corrupcion. "
            f"Bonus CRITICAL: +{PLAN_BONUS_AMOUNT} a {bonus}.")


def activate_plan_anticrisis(save: Save, auto: bool = False) -> dict:
    """
    Emergency package. Metrics that are CRITICAL before the package lands
    get an extra +10 afterwards.
    """
    if not save.plan_anticrisis_unlocked:
        return {"ok": False, "status": 400, "error": "Locked"}
    if save.tick_count < save.plan_anticrisis_cooldown_until:
        return {"ok": False, "status": 400, "error": "Cooldown",
                "cooldown_until": save.plan_anticrisis_cooldown_until}

    critical = [m for m in PLAN_CRITICAL_METRICS
                if m[2](getattr(save, m[3])) == "CRITICAL"]
    apply_effects(save, dict(PLAN_BASE_EFFECTS), source="plan_anticrisis")
    for _key, _label, _alert, attr in critical:
        setattr(save, attr, clamp(getattr(save, attr) + PLAN_BONUS_AMOUNT, 0, 100))

    save.plan_anticrisis_cooldown_until = save.tick_count + PLAN_COOLDOWN_TICKS
    save.add_news(_plan_news(auto, [m[1] for m in critical]),
                  news_type="SYSTEM", severity="WARN")
    logger.info(f"Plan anticrisis activated{' (auto)' if auto else ''} "
                f"at tick {save.tick_count}")
    return {"ok": True, "bonus_applied": [m[0] for m in critical]}
