"""
MicroEstado Engine v1.0 — Macro Layer (Level 2)
Alternate tick orchestrator once the nation leaves Level 1.

Level 2 swaps the tax/budget economy for an industry portfolio: every
active industry adds income, opex, growth, inflation pressure and
pollution. Inflation is bucketed into regimes, the central bank can lean
on it, and a second project catalog drives the Level 2 phase ladder.
"""

import logging

from models import (Save, Level2State, ProjectState, ProjectStatus,
                    clamp, classify_regime, now_ms,
                    INFLATION_MIN, INFLATION_MAX)
from effects import apply_effects
from config import GameConfig, Level2ProjectConfig
from level2_events import maybe_trigger_level2_event

logger = logging.getLogger("microestado.macro")

INCOME_BASE_SCALE = 0.02
OPEX_COST_SCALE = 2.5
CAPEX_COST = 15
CENTRAL_BANK_COOLDOWN = 30
CENTRAL_BANK_EFFECT_TICKS = 120
INTERVENTION_COST = 80
DEFLATION_INCOME_MULT = 0.95

# completed Level 2 projects needed for each phase
PHASE_THRESHOLDS = {2: 3, 3: 6, 4: 10}

# regime -> (growth penalty pp, happiness delta)
REGIME_PENALTIES = {
    "HIGH": (0.3, -0.1),
    "HYPER": (0.6, -0.3),
}

CENTRAL_BANK_ACTIONS = {
    "RAISE_RATE": {"inflation": -0.4, "growth": -0.4,
                   "news": "Banco Central: sube tasa de referencia."},
    "LOWER_RATE": {"inflation": 0.3, "growth": 0.3,
                   "news": "Banco Central: baja tasa de referencia."},
    "INTERVENE": {"inflation": -0.6, "growth": 0,
                  "news": "Banco Central: intervencion directa en mercado."},
}

AVAILABLE = ProjectStatus.AVAILABLE.value
LOCKED = ProjectStatus.LOCKED.value
IN_PROGRESS = ProjectStatus.IN_PROGRESS.value
COMPLETED = ProjectStatus.COMPLETED.value


def level2_error(save: Save):
    """Common guard for every Level 2 action. None when Level 2 is active."""
    if not save.level2_active():
        return {"ok": False, "status": 400, "error": "Level 2 not active"}
    return None


# ─────────────────────────────────────────────────────
# TRANSITION
# ─────────────────────────────────────────────────────

def continue_to_level2(save: Save, config: GameConfig) -> dict:
    if save.level2_active():
        return {"ok": True, "already": True}
    if not (save.level1_complete or save.phase >= 4):
        return {"ok": False, "status": 400, "error": "Level 1 not complete"}

    save.level = 2
    save.level1_complete = True
    save.level2 = Level2State()
    save.level2.macro.regime = classify_regime(save.level2.macro.inflation_pct)
    save.level2.projects = build_projects_state(save, config)
    save.add_news("Comienza el Nivel 2: la economia entra en modo macro.")
    logger.info(f"Level 2 started at tick {save.tick_count}")
    return {"ok": True, "already": False}


# ─────────────────────────────────────────────────────
# PROJECTS
# ─────────────────────────────────────────────────────

def meets_project_requirements(project: Level2ProjectConfig, save: Save) -> bool:
    l2 = save.level2
    req = project.requirements or {}

    if l2.phase < req.get("minPhaseL2", 1):
        return False
    base_id = req.get("requiresBaseIndustryId")
    if base_id and l2.industries.chosen_base_industry_id != base_id:
        return False
    needed = req.get("requiresIndustries") or []
    if any(i not in l2.industries.active_industries for i in needed):
        return False
    advisors = req.get("requiresAdvisorIds") or []
    if advisors and not any(a in l2.advisors for a in advisors):
        return False
    for project_id in req.get("requiresProjects") or []:
        state = l2.projects.get(project_id)
        if not state or state.status != COMPLETED:
            return False
    if req.get("requiresCentralBankAction") and l2.macro.central_bank.last_action_tick <= 0:
        return False
    return True


def build_projects_state(save: Save, config: GameConfig) -> dict:
    states = {}
    for project in config.level2_projects:
        status = AVAILABLE if meets_project_requirements(project, save) else LOCKED
        states[project.id] = ProjectState(status=status, progress=0)
    return states


def ensure_projects_state(save: Save, config: GameConfig):
    for project in config.level2_projects:
        if project.id not in save.level2.projects:
            status = AVAILABLE if meets_project_requirements(project, save) else LOCKED
            save.level2.projects[project.id] = ProjectState(status=status, progress=0)


def refresh_project_availability(save: Save, config: GameConfig) -> list:
    """Re-gate every project that is not running or done. Returns newly available ids."""
    unlocked = []
    for project in config.level2_projects:
        state = save.level2.projects.get(project.id)
        if state is None or state.status in (COMPLETED, IN_PROGRESS):
            continue
        was_locked = state.status == LOCKED
        state.status = AVAILABLE if meets_project_requirements(project, save) else LOCKED
        if was_locked and state.status == AVAILABLE:
            unlocked.append(project.id)
    return unlocked


def recalc_phase(save: Save) -> int:
    completed = save.level2.completed_project_count()
    for phase in (4, 3, 2):
        if completed >= PHASE_THRESHOLDS[phase]:
            return phase
    return 1


# ─────────────────────────────────────────────────────
# INDUSTRIES
# ─────────────────────────────────────────────────────

def is_industry_unlocked(save: Save, industry) -> bool:
    unlock = industry.unlock or {}
    if save.level2.phase < unlock.get("minPhaseL2", 1):
        return False
    for project_id in unlock.get("requiresProjectsL2") or []:
        state = save.level2.projects.get(project_id)
        if not state or state.status != COMPLETED:
            return False
    return True


def industry_cost(industry) -> float:
    return industry.capex * CAPEX_COST


def active_industry_totals(save: Save, config: GameConfig) -> dict:
    totals = {"income_mult": 0.0, "growth_add": 0.0, "inflation_pressure": 0.0,
              "pollution": 0.0, "opex": 0.0}
    for industry_id in save.level2.industries.active_industries:
        industry = config.level2_industry(industry_id)
        if not industry:
            logger.warning(f"Active industry {industry_id} not in catalog")
            continue
        mods = industry.modifiers or {}
        totals["income_mult"] += mods.get("incomeMult", 0)
        totals["growth_add"] += mods.get("baseGrowthAddPct", 0)
        totals["inflation_pressure"] += mods.get("inflationPressureAdd", 0)
        totals["pollution"] += mods.get("pollutionAdd", 0)
        totals["opex"] += industry.opex * OPEX_COST_SCALE
    return totals


def set_level2_base_industry(save: Save, config: GameConfig, industry_id: str) -> dict:
    error = level2_error(save)
    if error:
        return error
    industries = save.level2.industries
    if industries.chosen_base_industry_id:
        return {"ok": False, "status": 400, "error": "Base industry already chosen"}
    industry = config.level2_industry(industry_id)
    if not industry:
        return {"ok": False, "status": 404, "error": f"Unknown industry: {industry_id}"}
    if not is_industry_unlocked(save, industry):
        return {"ok": False, "status": 400, "error": "Industry locked"}
    cost = industry_cost(industry)
    if save.treasury < cost:
        return {"ok": False, "status": 400, "error": "Insufficient treasury", "cost": cost}

    save.treasury -= cost
    industries.chosen_base_industry_id = industry_id
    if industry_id not in industries.active_industries:
        industries.active_industries.append(industry_id)
    save.add_news(f"Base industrial L2: {industry.name}.")
    refresh_project_availability(save, config)
    return {"ok": True, "industry_id": industry_id, "cost": cost}


def activate_level2_industry(save: Save, config: GameConfig, industry_id: str) -> dict:
    error = level2_error(save)
    if error:
        return error
    industry = config.level2_industry(industry_id)
    if not industry:
        return {"ok": False, "status": 404, "error": f"Unknown industry: {industry_id}"}
    industries = save.level2.industries
    if industry_id in industries.active_industries:
        return {"ok": False, "status": 400, "error": "Industry already active"}
    if not is_industry_unlocked(save, industry):
        return {"ok": False, "status": 400, "error": "Industry locked"}
    cost = industry_cost(industry)
    if save.treasury < cost:
        return {"ok": False, "status": 400, "error": "Insufficient treasury", "cost": cost}

    save.treasury -= cost
    industries.active_industries.append(industry_id)
    save.add_news(f"Industria activada: {industry.name}.")
    refresh_project_availability(save, config)
    return {"ok": True, "industry_id": industry_id, "cost": cost}


def set_level2_advisors(save: Save, config: GameConfig, advisor_ids: list) -> dict:
    error = level2_error(save)
    if error:
        return error
    unique = []
    for advisor_id in advisor_ids or []:
        if advisor_id not in unique:
            unique.append(advisor_id)
    save.level2.advisors = unique
    refresh_project_availability(save, config)
    return {"ok": True, "advisors": list(unique)}


def start_level2_project(save: Save, config: GameConfig, project_id: str) -> dict:
    error = level2_error(save)
    if error:
        return error
    project = config.level2_project(project_id)
    if not project:
        return {"ok": False, "status": 404, "error": f"Unknown project: {project_id}"}
    ensure_projects_state(save, config)
    state = save.level2.projects[project_id]
    if state.status != AVAILABLE:
        return {"ok": False, "status": 400, "error": "Project not available"}
    if not meets_project_requirements(project, save):
        return {"ok": False, "status": 400, "error": "Requirements not met"}
    if save.treasury < project.cost:
        return {"ok": False, "status": 400, "error": "Insufficient treasury",
                "cost": project.cost}

    save.treasury -= project.cost
    state.status = IN_PROGRESS
    state.progress = 0
    save.add_news(f"Nivel 2 inicia: {project.name}.")
    return {"ok": True, "project_id": project_id, "cost": project.cost}


# ─────────────────────────────────────────────────────
# CENTRAL BANK
# ─────────────────────────────────────────────────────

def central_bank_action(save: Save, action: str) -> dict:
    """
    RAISE_RATE / LOWER_RATE / INTERVENE. The regime is not reclassified
    here; the next macro tick picks up the new inflation figure.
    """
    error = level2_error(save)
    if error:
        return error
    bank = save.level2.macro.central_bank
    tick = save.tick_count
    if tick < bank.cooldown_until_tick:
        return {"ok": False, "status": 400, "error": "Cooldown active",
                "cooldown_until_tick": bank.cooldown_until_tick}
    move = CENTRAL_BANK_ACTIONS.get(action)
    if move is None:
        return {"ok": False, "status": 400, "error": "Unknown action"}

    macro = save.level2.macro
    macro.inflation_pct = clamp(macro.inflation_pct + move["inflation"],
                                INFLATION_MIN, INFLATION_MAX)
    if action == "INTERVENE":
        save.treasury = max(0, save.treasury - INTERVENTION_COST)
        bank.growth_effect_pct = 0
        bank.effect_until_tick = None
    else:
        bank.growth_effect_pct = move["growth"]
        bank.effect_until_tick = tick + CENTRAL_BANK_EFFECT_TICKS

    bank.cooldown_until_tick = tick + CENTRAL_BANK_COOLDOWN
    bank.last_action_tick = tick
    save.add_news(move["news"])
    return {"ok": True, "action": action, "inflation_pct": macro.inflation_pct,
            "cooldown_until_tick": bank.cooldown_until_tick}


# ─────────────────────────────────────────────────────
# TICK
# ─────────────────────────────────────────────────────

def apply_level2_tick(save: Save, config: GameConfig, suppress_events: bool = False,
                      rng=None) -> dict:
    """Advance one Level 2 tick in place. Returns the tick's audit log."""
    if not save.level2_active():
        return {"skipped": "level2_inactive"}
    l2 = save.level2
    if l2.game_over:
        return {"skipped": "game_over"}

    ensure_projects_state(save, config)
    industries = l2.industries
    base_id = industries.chosen_base_industry_id
    if base_id and base_id not in industries.active_industries:
        industries.active_industries.append(base_id)

    totals = active_industry_totals(save, config)
    macro = l2.macro
    bank = macro.central_bank

    income_mult = totals["income_mult"] if totals["income_mult"] > 0 else 1
    income = save.gdp * INCOME_BASE_SCALE * income_mult
    net = income - totals["opex"]
    if macro.regime == "DEFLATION":
        net *= DEFLATION_INCOME_MULT
        save.institutional_trust = clamp(save.institutional_trust - 0.1, 0, 100)
    save.treasury = max(0, save.treasury + net)

    if totals["pollution"]:
        save.environmental_impact = clamp(
            save.environmental_impact + totals["pollution"], 0, 100)

    macro.inflation_pct = clamp(macro.inflation_pct + totals["inflation_pressure"],
                                INFLATION_MIN, INFLATION_MAX)
    regime = classify_regime(macro.inflation_pct)
    if regime != macro.regime:
        macro.regime = regime
        save.add_news(f"Inflacion cambia a regimen {regime.lower()}.")

    if bank.effect_until_tick is not None and save.tick_count >= bank.effect_until_tick:
        bank.effect_until_tick = None
        bank.growth_effect_pct = 0

    penalty, happiness_delta = REGIME_PENALTIES.get(macro.regime, (0, 0))
    if happiness_delta:
        save.happiness = clamp(save.happiness + happiness_delta, 0, 100)

    growth = (totals["growth_add"]
              + save.growth_pct * config.economy.gdp_growth_scale
              + bank.growth_effect_pct
              - penalty)
    save.gdp = max(1, save.gdp * (1 + growth / 100))

    completed = []
    for project in config.level2_projects:
        state = l2.projects.get(project.id)
        if not state or state.status != IN_PROGRESS:
            continue
        state.progress += 1
        if state.progress >= project.duration_ticks:
            state.status = COMPLETED
            apply_effects(save, project.effects, source=project.id)
            save.add_news(f"Nivel 2 completa: {project.name}.")
            completed.append(project.id)
            logger.debug(f"Level 2 project {project.id} completed at tick {save.tick_count}")

    unlocked = refresh_project_availability(save, config)

    l2.phase = recalc_phase(save)
    if l2.phase >= 4 and not l2.complete:
        l2.complete = True
        logger.info(f"Level 2 complete at tick {save.tick_count}")

    event = None
    if not suppress_events:
        event = maybe_trigger_level2_event(save, config, rng=rng)

    save.tick_count += 1
    save.last_tick_at = now_ms()
    return {
        "tick": save.tick_count,
        "income": income,
        "net": net,
        "opex": totals["opex"],
        "inflation_pct": macro.inflation_pct,
        "regime": macro.regime,
        "growth": growth,
        "completed": completed,
        "unlocked": unlocked,
        "event": event,
        "phase": l2.phase,
    }
