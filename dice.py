"""
MicroEstado Engine v1.0 — Randomness
Full audit trail on every roll. Every function accepts an optional
random.Random so callers (and tests) can make outcomes deterministic.
"""

import random
from bisect import bisect_left
from itertools import accumulate


_rng = random.Random()


def seed(value):
    """Reseed the module-level generator."""
    _rng.seed(value)


def _pick_rng(rng):
    return rng if rng is not None else _rng


def roll_chance(chance: float, label: str = "", rng=None) -> dict:
    """
    Uniform roll in [0, 1). Succeeds when the roll is below chance.
    Returns dict with full audit trail.
    """
    roll = _pick_rng(rng).random()
    return {
        "roll": roll,
        "chance": chance,
        "success": roll < chance,
        "label": label,
    }


def weighted_pick(items: list, weights: list, label: str = "", rng=None) -> dict:
    """
    Roulette selection over cumulative weights.

    The roll is uniform in [0, total); the winner is the first item whose
    cumulative weight reaches the roll. A non-positive total picks the first
    item; rounding past the end falls back to the last one.
    """
    if not items:
        return {"index": -1, "item": None, "roll": None, "total": 0, "label": label}

    cumulative = list(accumulate(weights))
    total = cumulative[-1]
    if total <= 0:
        return {"index": 0, "item": items[0], "roll": None, "total": total, "label": label}

    roll = _pick_rng(rng).random() * total
    index = bisect_left(cumulative, roll)
    if index >= len(items):
        index = len(items) - 1

    return {
        "index": index,
        "item": items[index],
        "roll": roll,
        "total": total,
        "label": label,
    }


def roll_between(lo: int, hi: int, label: str = "", rng=None) -> dict:
    """Uniform integer in [lo, hi], both ends inclusive."""
    value = _pick_rng(rng).randint(lo, hi)
    return {
        "expression": f"{lo}-{hi}",
        "total": value,
        "label": label,
    }
