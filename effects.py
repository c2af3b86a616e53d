"""
MicroEstado Engine v1.0 — Effect Applicator
Applies sparse {key: delta} maps to a Save under per-key clamping rules.

Every project, event option, decree, preset and plan funnels its effects
through apply_effects(). It never raises: unknown keys are logged and
reported back in the audit dict.
"""

import logging
import math
from enum import Enum

from models import (Save, clamp, classify_regime,
                    INFLATION_MIN, INFLATION_MAX)

logger = logging.getLogger("microestado.effects")


class EffectRule(str, Enum):
    PERCENT = "PERCENT"          # clamp [0, 100]
    FLOOR_ZERO = "FLOOR_ZERO"    # max(0, v)
    GDP = "GDP"                  # max(1, v)
    GROWTH = "GROWTH"            # clamp [-6, 12]
    UNLOCK = "UNLOCK"            # one-way flag
    MULTIPLIER = "MULTIPLIER"    # keep the larger value
    INFLATION = "INFLATION"      # Level 2 macro


GROWTH_MIN = -6
GROWTH_MAX = 12


# ─────────────────────────────────────────────────────
# VOCABULARY
# ─────────────────────────────────────────────────────

# key -> (rule, attribute path on Save)
EFFECT_TABLE = {
    "happiness":            (EffectRule.PERCENT, "happiness"),
    "stability":            (EffectRule.PERCENT, "stability"),
    "institutionalTrust":   (EffectRule.PERCENT, "institutional_trust"),
    "corruption":           (EffectRule.PERCENT, "corruption"),
    "reputation":           (EffectRule.PERCENT, "reputation"),
    "employment":           (EffectRule.PERCENT, "employment"),
    "energy":               (EffectRule.PERCENT, "energy"),
    "innovation":           (EffectRule.PERCENT, "innovation"),
    "inequality":           (EffectRule.PERCENT, "inequality"),
    "environmentalImpact":  (EffectRule.PERCENT, "environmental_impact"),
    "tourismIndex":         (EffectRule.PERCENT, "tourism_index"),
    "tourismCapacity":      (EffectRule.PERCENT, "tourism_capacity"),
    "tourismPressure":      (EffectRule.PERCENT, "tourism_pressure"),
    "treasury":             (EffectRule.FLOOR_ZERO, "treasury"),
    "resources":            (EffectRule.FLOOR_ZERO, "resources"),
    "debt":                 (EffectRule.FLOOR_ZERO, "debt"),
    "admin":                (EffectRule.FLOOR_ZERO, "admin"),
    "adminCapacity":        (EffectRule.FLOOR_ZERO, "admin"),
    "gdp":                  (EffectRule.GDP, "gdp"),
    "growthPct":            (EffectRule.GROWTH, "growth_pct"),
    "adminUnlocked":        (EffectRule.UNLOCK, "admin_unlocked"),
    "agencyRevenue":        (EffectRule.UNLOCK, "agencies.revenue"),
    "agencyInspection":     (EffectRule.UNLOCK, "agencies.inspection"),
    "agencyPromotion":      (EffectRule.UNLOCK, "agencies.promotion"),
    "emergencyPlanUnlocked": (EffectRule.UNLOCK, "plan_anticrisis_unlocked"),
    "treatiesUnlocked":     (EffectRule.UNLOCK, "treaties_unlocked"),
    "offlineIncomeBonus":   (EffectRule.MULTIPLIER, "offline_reward_multiplier"),
    "inflationPct":         (EffectRule.INFLATION, "level2.macro.inflation_pct"),
}

# Historical spellings. Colliding keys are summed.
ALIASES = {
    "treasuryDelta": "treasury",
    "gdpDelta": "gdp",
    "growthDelta": "growthPct",
    "happinessDelta": "happiness",
    "stabilityDelta": "stability",
    "trustDelta": "institutionalTrust",
    "corruptionDelta": "corruption",
    "reputationDelta": "reputation",
    "resourcesDelta": "resources",
    "debtDelta": "debt",
    "employmentDelta": "employment",
    "energyDelta": "energy",
    "innovationDelta": "innovation",
    "inequalityDelta": "inequality",
    "environmentalDelta": "environmentalImpact",
    "environmentalImpactDelta": "environmentalImpact",
    "tourismIndexDelta": "tourismIndex",
    "tourismCapacityDelta": "tourismCapacity",
    "tourismPressureDelta": "tourismPressure",
    "jobs": "employment",
    "envFootprint": "environmentalImpact",
    "water": "resources",
}


def canonical_key(key: str) -> str:
    return ALIASES.get(key, key)


def normalize_effects(effects: dict) -> dict:
    """Rewrite aliases to canonical keys, summing collisions. Non-numbers drop."""
    out = {}
    for key, value in (effects or {}).items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        canon = canonical_key(key)
        out[canon] = out.get(canon, 0) + value
    return out


def scale_effects(effects: dict, mult: float) -> dict:
    return {key: value * mult for key, value in effects.items()}


def unknown_effect_keys(effects: dict, level2: bool = True) -> list:
    """Keys of an effect map that the applicator would ignore."""
    unknown = []
    for key in (effects or {}):
        canon = canonical_key(key)
        if canon not in EFFECT_TABLE:
            unknown.append(key)
        elif not level2 and EFFECT_TABLE[canon][0] == EffectRule.INFLATION:
            unknown.append(key)
    return unknown


# ─────────────────────────────────────────────────────
# APPLICATION
# ─────────────────────────────────────────────────────

def _resolve(save: Save, path: str):
    """Walk a dotted path. Returns (owner, attribute) or (None, attr)."""
    *parents, attr = path.split(".")
    owner = save
    for name in parents:
        owner = getattr(owner, name, None)
        if owner is None:
            return None, attr
    return owner, attr


def apply_effects(save: Save, effects: dict, source: str = "") -> dict:
    """
    Apply an effect map in place.
    Returns {"applied": {key: new_value}, "ignored": [keys]}.
    """
    applied = {}
    ignored = []

    for key, delta in normalize_effects(effects).items():
        entry = EFFECT_TABLE.get(key)
        if entry is None:
            ignored.append(key)
            continue
        rule, path = entry
        owner, attr = _resolve(save, path)
        if owner is None:
            ignored.append(key)
            continue

        current = getattr(owner, attr)
        if rule == EffectRule.PERCENT:
            value = clamp(current + delta, 0, 100)
        elif rule == EffectRule.FLOOR_ZERO:
            value = max(0, current + delta)
        elif rule == EffectRule.GDP:
            value = max(1, current + delta)
        elif rule == EffectRule.GROWTH:
            value = clamp(current + delta, GROWTH_MIN, GROWTH_MAX)
        elif rule == EffectRule.UNLOCK:
            value = True if delta > 0 else current
        elif rule == EffectRule.MULTIPLIER:
            value = max(current, delta)
        else:
            value = clamp(current + delta, INFLATION_MIN, INFLATION_MAX)

        setattr(owner, attr, value)
        applied[key] = value

        if rule == EffectRule.INFLATION:
            _reclassify(save)

    if ignored:
        logger.warning(f"Ignored effect keys {ignored}"
                       + (f" from {source}" if source else ""))
    return {"applied": applied, "ignored": ignored}


def _reclassify(save: Save):
    macro = save.level2.macro
    regime = classify_regime(macro.inflation_pct)
    if regime != macro.regime:
        macro.regime = regime
        save.add_news(f"Inflacion cambia a regimen {regime.lower()}.")


def can_afford(save: Save, cost: dict) -> bool:
    """A cost map is affordable when no negative delta exceeds what is held."""
    for key, delta in normalize_effects(cost).items():
        entry = EFFECT_TABLE.get(key)
        if entry is None or delta >= 0:
            continue
        owner, attr = _resolve(save, entry[1])
        if owner is not None and getattr(owner, attr) < -delta:
            return False
    return True


# ─────────────────────────────────────────────────────
# SUMMARY
# ─────────────────────────────────────────────────────

SUMMARY_LABELS = [
    ("treasury", "Tesoro", 0),
    ("debt", "Deuda", 0),
    ("inflationPct", "Inflacion", 1),
    ("happiness", "Felicidad", 0),
    ("stability", "Estabilidad", 0),
    ("institutionalTrust", "Confianza", 0),
    ("corruption", "Corrupcion", 0),
    ("reputation", "Reputacion", 0),
    ("admin", "Admin", 0),
    ("employment", "Empleo", 0),
    ("inequality", "Inequidad", 0),
    ("innovation", "Innovacion", 0),
    ("energy", "Energia", 0),
    ("resources", "Recursos", 0),
    ("environmentalImpact", "Huella", 0),
    ("growthPct", "Crecimiento", 2),
]


def format_effects_summary(effects: dict) -> str:
    """'Tesoro -120, Felicidad +2' style line, first four non-zero parts."""
    normalized = normalize_effects(effects)
    parts = []
    for key, label, decimals in SUMMARY_LABELS:
        value = normalized.get(key)
        if not value:
            continue
        sign = "+" if value > 0 else ""
        if decimals:
            text = f"{value:.{decimals}f}"
        else:
            text = str(int(math.floor(value + 0.5)))
        parts.append(f"{label} {sign}{text}")
    return ", ".join(parts[:4])
