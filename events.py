"""
MicroEstado Engine v1.0 — Level 1 Events
Condition-gated, weighted-random decisions.

Flow per tick:
  1. Global cooldown ticks down.
  2. A pending follow-up counts down and is promoted if still eligible.
  3. Otherwise a chance roll; on success a weighted pick among eligible
     events that are not on their own cooldown.
At most one event is active at a time; the player resolves, mitigates or
dismisses it.
"""

import logging
import re

from models import Save
from dice import roll_chance, weighted_pick
from effects import apply_effects, normalize_effects, scale_effects
from config import GameConfig, EventConfig, snake
from economy import INDUSTRY_MODIFIER_KEYS
from projects import leader_title

logger = logging.getLogger("microestado.events")

FOLLOW_UP_DELAY_TICKS = 3
CRISIS_FACTOR = 1.2
DEFAULT_CRISIS_THRESHOLDS = {"happiness": 40, "stability": 40, "trust": 40}
DEFAULT_NEWS_TEMPLATE = "{{leaderName}} decide: {{optionText}}."

_TEMPLATE_VAR = re.compile(r"\{\{(\w+)\}\}")


def format_template(template: str, values: dict) -> str:
    """Replace {{name}} placeholders. Missing names become empty strings."""
    return _TEMPLATE_VAR.sub(lambda m: str(values.get(m.group(1), "") or ""), template)


# ─────────────────────────────────────────────────────
# ELIGIBILITY
# ─────────────────────────────────────────────────────

_STAT_ALIASES = {"trust": "institutional_trust", "environmental": "environmental_impact"}


def _stat_value(save: Save, key: str):
    attr = _STAT_ALIASES.get(key, snake(key))
    value = getattr(save, attr, None)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _meets_stats(constraints: dict, save: Save, at_least: bool) -> bool:
    for key, limit in (constraints or {}).items():
        value = _stat_value(save, key)
        if value is None:
            return False
        if at_least and value < limit:
            return False
        if not at_least and value > limit:
            return False
    return True


def meets_condition_set(conditions: dict, save: Save) -> bool:
    if not conditions:
        return True
    geography_in = conditions.get("geographyIn")
    if geography_in and save.country.geography not in geography_in:
        return False
    industry_in = conditions.get("industryIn")
    if industry_in:
        leader = save.industry_leader_id
        leader_key = INDUSTRY_MODIFIER_KEYS.get(leader)
        if not any(entry == leader or entry == leader_key for entry in industry_in):
            return False
    if not _meets_stats(conditions.get("statGte"), save, at_least=True):
        return False
    if not _meets_stats(conditions.get("statLte"), save, at_least=False):
        return False
    debt_ratio = conditions.get("debtToGdpGte")
    if debt_ratio is not None and save.debt / max(save.gdp, 1) < debt_ratio:
        return False
    resources_lte = conditions.get("resourcesLte")
    if resources_lte is not None and save.resources > resources_lte:
        return False
    return True


def _matches_industry(required: str, leader: str) -> bool:
    if not leader:
        return False
    required_lower = required.lower()
    return (required == leader
            or required_lower == leader.lower()
            or required_lower == INDUSTRY_MODIFIER_KEYS.get(leader))


def meets_event_conditions(event: EventConfig, save: Save) -> bool:
    if save.phase < event.phase_min or save.phase > event.phase_max:
        return False
    if event.required_geography_id and (
            save.country.geography.lower() != event.required_geography_id.lower()):
        return False
    if event.required_industry_id and not _matches_industry(
            event.required_industry_id, save.industry_leader_id):
        return False
    if event.required_role_id and save.leader.role_id != event.required_role_id:
        return False
    for key, limit in event.limits.items():
        value = _stat_value(save, key[3:])
        if value is None:
            continue
        if key.startswith("min") and value < limit:
            return False
        if key.startswith("max") and value > limit:
            return False
    return meets_condition_set(event.conditions, save)


def is_on_cooldown(event: EventConfig, save: Save) -> bool:
    if event.cooldown_ticks <= 0:
        return False
    last = save.event_history.get(event.id)
    if last is None:
        return False
    return save.tick_count - last < event.cooldown_ticks


def sanction_risk(save: Save, config: GameConfig) -> float:
    role = config.role(save.leader.role_id)
    risk = role.sanction_risk_base if role else 0
    security = save.budget.security_diplomacy_pct
    if save.leader.role_id == "KING_ABSOLUTE":
        if security > 40 and save.reputation < 40:
            risk += 0.15
    if save.leader.role_id in ("DICTATOR", "SUPREME_LEADER", "DICTATORSHIP"):
        risk += 0.1
        if save.reputation < 30:
            risk += 0.2
    if security > 50:
        risk += 0.05
    return risk


def event_weight(event: EventConfig, save: Save, config: GameConfig,
                 climate_sensitivity: float = 0) -> float:
    role = config.role(save.leader.role_id)
    weight = event.weight
    tags = event.tags
    if "sanction" in tags:
        weight *= 1 + sanction_risk(save, config)
    if role:
        if "negotiation" in tags:
            weight *= 1 + role.modifier("negotiationEventFreq")
        if "diplomacy" in tags:
            weight *= 1 + role.modifier("diplomacyEventFreq")
        if "crisis" in tags:
            weight *= 1 + role.modifier("protestRisk")
            if role.low_happiness_crisis_boost and save.happiness < 45:
                weight *= 1 + role.low_happiness_crisis_boost
    if "climate" in tags:
        weight *= 1 + climate_sensitivity
    return weight


# ─────────────────────────────────────────────────────
# PER-TICK STEP
# ─────────────────────────────────────────────────────

def event_step(save: Save, config: GameConfig, remote: dict,
               climate_sensitivity: float = 0, rng=None) -> dict:
    """Run one tick of event bookkeeping. Returns an audit dict."""
    log = {"promoted": None, "roll": None, "triggered": None, "candidates": 0}
    save.event_cooldown = max(0, save.event_cooldown - 1)

    if save.active_event_id:
        return log

    if save.pending_event_id:
        save.pending_event_delay = max(0, save.pending_event_delay - 1)
        if save.pending_event_delay == 0:
            pending = config.event(save.pending_event_id)
            if pending and meets_event_conditions(pending, save):
                _activate(save, config, pending)
                log["promoted"] = pending.id
            elif not pending:
                logger.warning(f"Follow-up event {save.pending_event_id} not in catalog")
            save.pending_event_id = None
            save.pending_event_delay = 0

    if save.active_event_id or save.event_cooldown != 0:
        return log

    base_chance = remote.get("event_frequency")
    if base_chance is None:
        base_chance = config.economy.event_base_chance
    thresholds = remote.get("crisis_thresholds") or DEFAULT_CRISIS_THRESHOLDS
    in_crisis = (save.happiness < thresholds.get("happiness", 40)
                 or save.stability < thresholds.get("stability", 40)
                 or save.institutional_trust < thresholds.get("trust", 40))
    chance = base_chance * (CRISIS_FACTOR if in_crisis else 1)

    roll = roll_chance(chance, label="event", rng=rng)
    log["roll"] = roll
    if not roll["success"]:
        return log

    candidates = [e for e in config.events
                  if meets_event_conditions(e, save)
                  and not is_on_cooldown(e, save)
                  and e.weight > 0]
    log["candidates"] = len(candidates)
    if not candidates:
        return log

    weights = [event_weight(e, save, config, climate_sensitivity) for e in candidates]
    picked = weighted_pick(candidates, weights, label="event", rng=rng)["item"]
    _activate(save, config, picked)
    log["triggered"] = picked.id
    return log


def _activate(save: Save, config: GameConfig, event: EventConfig):
    save.active_event_id = event.id
    save.event_history[event.id] = save.tick_count
    save.event_cooldown = config.economy.event_cooldown_ticks
    logger.debug(f"Event {event.id} active at tick {save.tick_count}")


# ─────────────────────────────────────────────────────
# PLAYER ACTIONS
# ─────────────────────────────────────────────────────

def _option_multiplier(modifiers: list, save: Save) -> float:
    mult = 1
    for modifier in modifiers or []:
        if modifier and meets_condition_set(modifier, save):
            mult *= modifier.get("mult", 1)
    return mult


def resolve_event(save: Save, config: GameConfig, event_id: str, option_id: str) -> dict:
    event = config.event(event_id)
    if not event:
        return {"ok": False, "status": 404, "error": f"Unknown event: {event_id}"}
    if save.active_event_id != event_id:
        return {"ok": False, "status": 400, "error": "Event not active"}
    option = event.option(option_id)
    if not option:
        return {"ok": False, "status": 404, "error": f"Unknown option: {option_id}"}

    effects = normalize_effects(option.effects)
    mult = _option_multiplier(option.modifiers, save)
    if mult != 1:
        effects = scale_effects(effects, mult)

    role = config.role(save.leader.role_id)
    severity = role.crisis_severity if role else 0
    if "crisis" in event.tags and severity > 0:
        effects = {k: (v * (1 + severity) if v < 0 else v) for k, v in effects.items()}

    audit = apply_effects(save, effects, source=f"{event.id}/{option.id}")

    if option.follow_up_event_id:
        save.pending_event_id = option.follow_up_event_id
        save.pending_event_delay = FOLLOW_UP_DELAY_TICKS

    text = format_template(option.news or DEFAULT_NEWS_TEMPLATE, {
        "leaderName": save.leader.name,
        "countryName": save.country.formal_name,
        "roleTitle": config.role_title(save.leader.role_id, save.leader.gender),
        "optionText": option.text,
    })
    save.add_news(text, news_type="EVENT")
    save.active_event_id = None
    return {"ok": True, "event_id": event_id, "option_id": option_id,
            "effects": audit["applied"], "follow_up": option.follow_up_event_id}


def mitigate_event(save: Save, config: GameConfig) -> dict:
    """Token action: close the active event with a small bonus."""
    if not save.active_event_id:
        return {"ok": False, "status": 400, "error": "No active event"}
    cost = config.iap.event_mitigation_cost
    if save.premium_tokens < cost:
        return {"ok": False, "status": 400, "error": "Insufficient tokens"}
    save.premium_tokens -= cost
    apply_effects(save, {"stability": 1, "institutionalTrust": 1}, source="mitigation")
    event_id = save.active_event_id
    save.active_event_id = None
    save.add_news(f"{leader_title(save, config)} mitiga el evento con un decreto especial.")
    return {"ok": True, "event_id": event_id, "tokens": save.premium_tokens}


def dismiss_event(save: Save) -> dict:
    if not save.active_event_id:
        return {"ok": False, "status": 400, "error": "No active event"}
    event_id = save.active_event_id
    save.active_event_id = None
    save.add_news(f"El gabinete de {save.leader.name} posterga la decision del evento.")
    return {"ok": True, "event_id": event_id}
