"""
MicroEstado Engine v1.0 — Tick Orchestrator
The Level 1 state-transition function plus everything that replays it.

One tick, in order:
1. Gather modifiers (role, remote config, industries, decrees, tourism)
2. Spending and tax collection; deficits roll into debt
3. Resources, growth and GDP
4. Indicator drifts
5. Project lifecycle, admin capacity, startable notices
6. Phase ladder, level completion, treaties
7. Event step (skipped during offline replay)
8. Automatic plan anticrisis on negative growth
9. Coup risk, then the clock advances

Order matters: later steps read values written earlier in the same tick.
Returns a full audit log of what happened.
"""

import logging
import math

from models import (Save, Country, Leader, Budget, clamp, now_ms, now_iso)
from dice import weighted_pick
from effects import apply_effects, GROWTH_MIN, GROWTH_MAX
from config import GameConfig, snake
from economy import (tax_rate, tax_rate_pct, collection_efficiency, evasion_rate,
                     industry_effects, industry_modifier, tourism_metrics,
                     tourism_deltas, maybe_unlock_plan_anticrisis,
                     activate_plan_anticrisis, TAX_LEVEL_TO_PCT, MAX_TAX_RATE)
from projects import (tick_projects, update_phase, decision_speed, admin_corruption_drift,
                      ensure_project_states, leader_title)
from decrees import decree_modifiers, empty_slots
from events import event_step
from coup_risk import apply_coup_risk

logger = logging.getLogger("microestado.engine")

RESOURCE_CAP = 200
CARBON_CREDITS_NEWS = ("Mercado de carbono: compraste creditos "
                       "(-{reduction} huella, -{cost} tokens).")


# ─────────────────────────────────────────────────────
# TICK
# ─────────────────────────────────────────────────────

def apply_tick(save: Save, config: GameConfig, suppress_events: bool = False,
               rng=None) -> dict:
    """
    Advance one Level 1 tick in place.
    A game-over or Level 2 save is left untouched.
    """
    if save.game_over:
        return {"skipped": "game_over"}
    if save.level == 2:
        return {"skipped": "level2"}

    tick_log = {
        "tick": save.tick_count,
        "steps": [],
        "warnings": [],
    }
    economy = config.economy
    role = config.role(save.leader.role_id)
    if role is None:
        tick_log["warnings"].append(f"Unknown role: {save.leader.role_id}")

    def role_mod(key, default=0):
        return role.modifier(key, default) if role else default

    # ── Modifiers ──
    remote = config.remote_config(save.remote_config_overrides)
    ind_effects = industry_effects(save, config)
    decrees = decree_modifiers(save, config)
    ind_mod = industry_modifier(save)
    speed = decision_speed(save, config)
    drift_scale = economy.stat_drift_scale * role_mod("statDriftMultiplier", 1)
    tourism = tourism_metrics(save)
    tourism_fx = tourism_deltas(tourism)
    agencies = economy.agencies or {}
    treaties = economy.treaties or {}
    base_drifts = economy.base_drifts or {}

    # ── Spending & income ──
    budget = save.budget
    spending = save.gdp * economy.spending_scale
    industry_spend = spending * budget.industry_pct / 100
    welfare_spend = spending * budget.welfare_pct / 100

    rate = tax_rate(save)
    rate_pct = tax_rate_pct(save) / 100
    revenue_agency = agencies.get("revenue", {}) if save.agencies.revenue else {}
    evasion = evasion_rate(save, config, revenue_agency.get("evasionReduction", 0))
    income = (save.gdp * rate * collection_efficiency(save, config) * (1 - evasion)
              * economy.income_scale)
    income *= decrees["incomeMult"]
    income *= revenue_agency.get("incomeMult", 1)
    income *= treaties.get("incomeMult", 1) if save.treaties_unlocked else 1
    income *= ind_mod["revenue_mult"]

    if save.phase == 1 and save.completed_project_count() < 1:
        minimum = economy.minimum_revenue or {}
        floor = max(minimum.get("floor", 0), save.gdp * minimum.get("phase1Scale", 0))
        if income < floor:
            logger.debug(f"Minimum revenue applied: {income:.2f} -> {floor:.2f}")
            income = floor

    save.treasury += income + tourism["revenue"] - spending
    if save.treasury < 0:
        save.debt += -save.treasury
        save.treasury = 0
    save.debt += save.debt * economy.debt_interest_rate
    plan_unlocked = maybe_unlock_plan_anticrisis(save)
    tick_log["steps"].append({"step": "economy", "result": {
        "income": income, "spending": spending, "tourism_revenue": tourism["revenue"],
        "treasury": save.treasury, "debt": save.debt, "plan_unlocked": plan_unlocked,
    }})

    # ── Resources & growth ──
    resource_use = (economy.resource_use_base + ind_effects["resource_drain"]
                    + budget.industry_pct / 100 * economy.resource_use_industry_boost)
    save.resources = clamp(save.resources - resource_use + ind_mod["resource_delta"],
                           0, RESOURCE_CAP)
    if save.industry_leader_id == "EXTRACTION":
        save.resources = clamp(save.resources + economy.extraction_base_yield,
                               0, RESOURCE_CAP)

    gdp_safe = max(save.gdp, 1)
    industry_factor = industry_spend / gdp_safe
    growth_delta = (industry_factor * 0.6
                    + (save.innovation - 50) / 100 * 0.25
                    + (save.stability - 50) / 100 * 0.25)
    growth_delta += role_mod("gdpGrowthBonus")
    if save.agencies.promotion:
        growth_delta += agencies.get("promotion", {}).get("growthBonus", 0)
    reputation_penalty = role_mod("reputationGrowthPenalty")
    if reputation_penalty and save.reputation > 65:
        growth_delta -= reputation_penalty
    growth_delta -= save.corruption / 100 * 0.3
    growth_delta -= save.debt / gdp_safe * 0.2
    growth_delta -= max(0, save.environmental_impact - 50) / 100 * 0.2
    if save.resources <= 0:
        growth_delta -= economy.resource_growth_penalty
    growth_delta -= remote.get("tax_elasticity", 0) * (rate_pct * 1.5 - 0.5)

    save.growth_pct = clamp(
        save.growth_pct + (growth_delta + decrees["growthBonus"]) * drift_scale,
        GROWTH_MIN, GROWTH_MAX)
    effective_growth = ind_mod["growth_base"] * 100 + save.growth_pct * economy.gdp_growth_scale
    growth_is_negative = effective_growth <= 0
    save.gdp = max(1, save.gdp * (1 + effective_growth / 100))
    save.gdp = max(1, save.gdp + tourism["gdp_boost"])
    tick_log["steps"].append({"step": "growth", "result": {
        "growth_pct": save.growth_pct, "effective_growth": effective_growth, "gdp": save.gdp,
    }})

    # ── Drifts ──
    gdp_safe = max(save.gdp, 1)
    welfare_ratio = welfare_spend / gdp_safe

    def drift(attr, delta):
        setattr(save, attr, clamp(getattr(save, attr) + delta * drift_scale, 0, 100))

    # Negated term, then subtracted: the net effect on happiness is positive.
    tax_penalty = -(remote.get("happiness_tax_penalty", 0.5) * (rate / MAX_TAX_RATE))
    drift("happiness",
          welfare_ratio * 3
          + (save.employment - 50) * 0.01
          - (save.inequality - 50) * 0.01
          - tax_penalty
          + decrees["happinessDrift"]
          + ind_mod["happiness_delta"]
          + tourism_fx["happiness"]
          + base_drifts.get("happiness", 0))

    drift("stability",
          (save.institutional_trust - 50) * 0.012
          - (save.corruption - 30) * 0.01
          + role_mod("stabilityDrift")
          + decrees["stabilityDrift"]
          + role_mod("protestRisk") * 0.5
          + ind_effects["stability_drift"]
          + ind_mod["stability_delta"]
          + tourism_fx["stability"]
          + base_drifts.get("stability", 0))

    drift("institutional_trust",
          (save.stability - 50) * 0.01
          - (save.corruption - 30) * 0.01
          + decrees["institutionalTrustDrift"]
          + role_mod("institutionalTrustDrift"))

    inspection = agencies.get("inspection", {}) if save.agencies.inspection else {}
    drift("corruption",
          (-0.1 + rate_pct * 0.3)
          + role_mod("corruptionDrift")
          + decrees["corruptionDrift"]
          + inspection.get("corruptionDrift", 0)
          - (save.institutional_trust - 50) * 0.01
          + admin_corruption_drift(save)
          + base_drifts.get("corruption", 0))

    promotion = agencies.get("promotion", {}) if save.agencies.promotion else {}
    drift("reputation",
          role_mod("reputationDrift")
          + decrees["reputationDrift"]
          + (save.stability - 50) * 0.01
          - budget.security_diplomacy_pct / 100 * economy.security_reputation_penalty
          - max(0, save.environmental_impact - 50) * 0.008
          + ind_effects["reputation_drift"]
          + ind_mod["reputation_delta"]
          + tourism_fx["reputation"]
          + promotion.get("reputationDrift", 0)
          + (treaties.get("reputationDrift", 0) if save.treaties_unlocked else 0)
          + base_drifts.get("reputation", 0))

    drift("employment",
          save.growth_pct / 100 * 1.5
          + industry_factor * 0.8
          - (save.inequality - 50) * 0.01)

    drift("energy",
          industry_factor * 1.2
          - max(0, save.environmental_impact - 50) * 0.01
          - ind_effects["energy_demand"])

    drift("innovation",
          industry_factor * 0.9
          + (save.institutional_trust - 50) * 0.005
          - (save.corruption - 30) * 0.01
          + ind_effects["innovation_drift"])

    drift("inequality",
          (0.4 - rate_pct * 0.9)
          + (save.corruption - 30) * 0.01
          - welfare_ratio * 1.2)

    drift("environmental_impact",
          industry_factor * 1.4
          - welfare_ratio * 0.4
          + ind_effects["environmental_drift"]
          + inspection.get("environmentalDrift", 0)
          + tourism_fx["environmental"])

    save.tourism_pressure = tourism["next_pressure"]

    # ── Projects ──
    projects_log = tick_projects(save, config)
    tick_log["steps"].append({"step": "projects", "result": projects_log,
                              "decision_speed": speed})

    # ── Phase ──
    update_phase(save, config)
    save.max_phase_reached = max(save.max_phase_reached or save.phase, save.phase)
    if save.phase >= 4 and not save.treaties_unlocked:
        save.treaties_unlocked = True
        logger.info(f"Trade treaties unlocked at tick {save.tick_count}")
    tick_log["steps"].append({"step": "phase", "result": {
        "phase": save.phase, "max_phase_reached": save.max_phase_reached,
        "level1_complete": save.level1_complete,
    }})

    # ── Events ──
    if not suppress_events:
        events_log = event_step(save, config, remote,
                                climate_sensitivity=ind_effects["climate_sensitivity"],
                                rng=rng)
        tick_log["steps"].append({"step": "events", "result": events_log})

    # ── Plan anticrisis ──
    if (growth_is_negative and save.plan_anticrisis_unlocked
            and save.tick_count >= save.plan_anticrisis_cooldown_until):
        plan = activate_plan_anticrisis(save, auto=True)
        tick_log["steps"].append({"step": "plan_anticrisis", "result": plan})

    # ── Coup risk & clock ──
    risk = apply_coup_risk(save)
    tick_log["steps"].append({"step": "coup_risk", "result": risk})

    save.tick_count += 1
    save.last_tick_at = now_ms()
    tick_log["tick"] = save.tick_count
    tick_log["game_over"] = save.game_over
    logger.debug(f"Tick {save.tick_count}: treasury={save.treasury:.1f} "
                 f"gdp={save.gdp:.1f} risk={risk['risk']}")
    return tick_log


# ─────────────────────────────────────────────────────
# OFFLINE CATCH-UP
# ─────────────────────────────────────────────────────

def offline_ticks_due(save: Save, config: GameConfig, now: int = None) -> int:
    """Whole ticks elapsed since last_tick_at, capped by the offline window."""
    now = now_ms() if now is None else now
    remote = config.remote_config(save.remote_config_overrides)
    cap_hours = remote.get("offline_cap_hours")
    if cap_hours is None:
        cap_hours = config.economy.offline_cap_hours
    max_ms = (cap_hours + save.iap_flags.offline_cap_bonus_hours) * 3600 * 1000
    elapsed = min(now - save.last_tick_at, max_ms)
    if elapsed <= 0:
        return 0
    return int(elapsed // config.economy.tick_ms)


def apply_offline_ticks(save: Save, config: GameConfig, ticks: int) -> dict:
    """
    Replay `ticks` ticks with events suppressed, stopping at game over.
    A stored offline reward multiplier boosts the treasury gained and is
    then consumed.
    """
    if save.game_over or save.level == 2 or ticks <= 0:
        return {"applied": 0, "bonus": 0}

    treasury_before = save.treasury
    applied = 0
    for _ in range(ticks):
        apply_tick(save, config, suppress_events=True)
        applied += 1
        if save.game_over:
            break

    bonus = 0
    if save.offline_reward_multiplier > 0:
        bonus = max(0, save.treasury - treasury_before) * save.offline_reward_multiplier
        save.treasury += bonus
        save.offline_reward_multiplier = 0
    logger.info(f"Offline catch-up: {applied} ticks, bonus {bonus:.1f}")
    return {"applied": applied, "bonus": bonus}


def catch_up(save: Save, config: GameConfig, now: int = None) -> dict:
    return apply_offline_ticks(save, config, offline_ticks_due(save, config, now))


# ─────────────────────────────────────────────────────
# NEW SAVE
# ─────────────────────────────────────────────────────

def formal_name(config: GameConfig, base_name: str, state_type_id: str) -> str:
    state_type = config.state_type(state_type_id)
    prefix = state_type.get("prefix", "") if state_type else ""
    return f"{prefix}{base_name}" if prefix else base_name


def resolve_role(config: GameConfig, leader: Leader, rng=None) -> str:
    """Manual role, or a weighted roll over the mandate weights."""
    if leader.role_selection_mode != "RANDOM":
        return leader.role_id or "PRESIDENT"
    weights = config.remote_config().get("mandate_role_weights") or {}
    ids = [r for r in weights if r in config.roles]
    if not ids:
        return leader.role_id or "PRESIDENT"
    return weighted_pick(ids, [weights[r] for r in ids], label="mandate", rng=rng)["item"]


_STARTING_CLAMPS = {
    "happiness": (30, 80),
    "stability": (30, 80),
    "institutional_trust": (30, 80),
    "corruption": (10, 70),
    "resources": (20, 200),
    "reputation": (20, 80),
    "employment": (30, 80),
    "energy": (30, 80),
    "innovation": (30, 80),
    "inequality": (30, 80),
    "environmental_impact": (20, 80),
}


def _budget_from(data: dict) -> Budget:
    return Budget(**{snake(k): v for k, v in (data or {}).items()
                     if snake(k) in ("industry_pct", "welfare_pct", "security_diplomacy_pct")})


def build_new_save(config: GameConfig, country: Country, leader: Leader,
                   preset_id: str = "BALANCED", role_id: str = None, rng=None) -> Save:
    start = config.economy.starting_state or {}
    now = now_ms()

    country.base_name = country.base_name.strip()
    country.formal_name = formal_name(config, country.base_name, country.state_type_id)
    leader.name = leader.name.strip()
    leader.role_id = role_id or resolve_role(config, leader, rng=rng)

    save = Save(country=country, leader=leader, preset_id=preset_id)
    for key, value in start.items():
        if key == "budget":
            save.budget = _budget_from(value)
        elif hasattr(save, snake(key)):
            setattr(save, snake(key), value)
    save.tax_rate_pct = start.get("taxRatePct",
                                  TAX_LEVEL_TO_PCT.get(save.tax_level, 50))
    save.industry_leader_id = None

    preset = config.preset(preset_id)
    if preset:
        save.budget = _budget_from(preset.budget)
        apply_effects(save, preset.adjustments, source=f"preset {preset.id}")
    elif preset_id:
        logger.warning(f"Unknown policy preset: {preset_id}")

    save.treasury = max(save.treasury, 80)
    save.gdp = max(save.gdp, 300)
    for attr, (lo, hi) in _STARTING_CLAMPS.items():
        setattr(save, attr, clamp(getattr(save, attr), lo, hi))
    save.baseline_gdp = max(1, save.gdp)

    save.created_at = now
    save.last_tick_at = now
    save.updated_at = now_iso()
    ensure_project_states(save, config)
    save.event_cooldown = math.floor(config.economy.event_cooldown_ticks / 2)
    save.decree_slots = empty_slots()
    save.news = []
    save.add_news(f"{leader_title(save, config)} inaugura {country.formal_name} "
                  f"con un discurso breve.")
    logger.info(f"New save: {country.formal_name} led by {leader.name} ({leader.role_id})")
    return save


# ─────────────────────────────────────────────────────
# TOKEN & TREASURY ACTIONS
# ─────────────────────────────────────────────────────

def _spend_tokens(save: Save, cost: int):
    if save.premium_tokens < cost:
        return {"ok": False, "status": 400, "error": "Insufficient tokens", "cost": cost}
    save.premium_tokens -= cost
    return None


def purchase_carbon_credits(save: Save, config: GameConfig) -> dict:
    cost = config.iap.carbon_credits_cost
    reduction = config.iap.carbon_credits_reduction
    error = _spend_tokens(save, cost)
    if error:
        return error
    apply_effects(save, {"environmentalImpact": -reduction}, source="carbon credits")
    save.add_news(CARBON_CREDITS_NEWS.format(reduction=int(reduction), cost=cost))
    return {"ok": True, "tokens": save.premium_tokens,
            "environmental_impact": save.environmental_impact}


def purchase_token_with_treasury(save: Save, config: GameConfig) -> dict:
    price = config.iap.token_treasury_price
    if save.treasury < price:
        return {"ok": False, "status": 400, "error": "Insufficient treasury", "cost": price}
    save.treasury = max(0, save.treasury - price)
    save.premium_tokens += 1
    save.add_news(f"{leader_title(save, config)} canjea tesoro por 1 token.")
    return {"ok": True, "tokens": save.premium_tokens, "treasury": save.treasury}


def rescue_treasury(save: Save, config: GameConfig) -> dict:
    save.treasury += config.iap.rescue_treasury_amount
    save.add_news("Rescate rapido: se inyecta tesoro de emergencia.", severity="WARN")
    return {"ok": True, "treasury": save.treasury}


def boost_offline_cap(save: Save, config: GameConfig) -> dict:
    error = _spend_tokens(save, config.iap.offline_cap_boost_cost)
    if error:
        return error
    save.iap_flags.offline_cap_bonus_hours += config.iap.offline_cap_boost_hours
    return {"ok": True, "tokens": save.premium_tokens,
            "offline_cap_bonus_hours": save.iap_flags.offline_cap_bonus_hours}


def unlock_auto_balance(save: Save, config: GameConfig) -> dict:
    if save.iap_flags.auto_balance_unlocked:
        return {"ok": True, "already": True}
    error = _spend_tokens(save, config.iap.auto_balance_cost)
    if error:
        return error
    save.iap_flags.auto_balance_unlocked = True
    return {"ok": True, "already": False, "tokens": save.premium_tokens}


def unlock_report_clarity(save: Save, config: GameConfig) -> dict:
    if save.iap_flags.report_clarity_unlocked:
        return {"ok": True, "already": True}
    error = _spend_tokens(save, config.iap.report_clarity_cost)
    if error:
        return error
    save.iap_flags.report_clarity_unlocked = True
    return {"ok": True, "already": False, "tokens": save.premium_tokens}


def set_remote_config_overrides(save: Save, overrides: dict) -> dict:
    save.remote_config_overrides = dict(overrides or {})
    return {"ok": True, "overrides": dict(save.remote_config_overrides)}
