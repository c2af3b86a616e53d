"""
MicroEstado Engine v1.0 — Level 2 Events
One pending event at a time, checked every 10-18 ticks. Eligibility looks
at the Level 2 phase, the leader's role, the inflation regime and the tags
of the active industries.
"""

import logging

from models import (Save, Level2PendingEvent, Level2EventOption,
                    Level2EventRecord, make_id)
from dice import weighted_pick, roll_between
from effects import apply_effects, format_effects_summary
from config import GameConfig, Level2EventConfig
from elections import run_election

logger = logging.getLogger("microestado.level2_events")

EVENT_CHECK_MIN = 10
EVENT_CHECK_MAX = 18
HISTORY_LIMIT = 40
DEFAULT_OUTCOME = "La decision deja una estela confusa."

ELECTION_EVENT_ID = "L2_COALITION_BREAKS"
ELECTION_OPTION_ID = "CALL_ELECTIONS"


def active_industry_tags(save: Save, config: GameConfig) -> set:
    tags = set()
    for industry_id in save.level2.industries.active_industries:
        industry = config.level2_industry(industry_id)
        if industry:
            tags.update(industry.tags)
    return tags


def is_eligible(event: Level2EventConfig, save: Save, tags: set) -> bool:
    l2 = save.level2
    if l2.phase < event.min_phase:
        return False
    requires = event.requires or {}
    regimes = requires.get("regimesAny")
    if regimes and save.leader.role_id not in regimes:
        return False
    inflation_regimes = requires.get("inflationRegimesAny")
    if inflation_regimes and l2.macro.regime not in inflation_regimes:
        return False
    industry_tags = requires.get("industryTagsAny")
    if industry_tags and not any(tag in tags for tag in industry_tags):
        return False
    return True


def maybe_trigger_level2_event(save: Save, config: GameConfig, rng=None) -> dict:
    """Returns {"triggered": bool, ...}. Never fails."""
    if not save.level2_active():
        return {"triggered": False}
    events = save.level2.events
    tick = save.tick_count
    if events.pending is not None or tick < events.next_check_tick:
        return {"triggered": False}

    tags = active_industry_tags(save, config)
    eligible = [e for e in config.level2_events if is_eligible(e, save, tags)]
    if not eligible:
        events.next_check_tick = tick + EVENT_CHECK_MIN
        return {"triggered": False, "next_check_tick": events.next_check_tick}

    pick = weighted_pick(eligible, [e.weight for e in eligible],
                         label="level2_event", rng=rng)
    event = pick["item"]
    events.pending = Level2PendingEvent(
        instance_id=make_id("l2evt"),
        event_id=event.id,
        title=event.title,
        body=event.body,
        created_tick=tick,
        options=[Level2EventOption(option_id=o.id, label=o.label, hint=o.hint)
                 for o in event.options],
    )
    delay = roll_between(EVENT_CHECK_MIN, EVENT_CHECK_MAX, label="level2_event_check", rng=rng)
    events.next_check_tick = tick + delay["total"]

    save.add_news(f"EVENTO: {event.title} - Se requiere decision.", news_type="EVENT")
    logger.debug(f"Level 2 event {event.id} pending at tick {tick}")
    return {"triggered": True, "event_id": event.id,
            "instance_id": events.pending.instance_id,
            "next_check_tick": events.next_check_tick, "pick": pick}


def resolve_level2_event(save: Save, config: GameConfig, instance_id: str,
                         option_id: str, rng=None) -> dict:
    if not save.level2_active():
        return {"ok": False, "status": 400, "error": "Level 2 not active"}
    events = save.level2.events
    pending = events.pending
    if pending is None:
        return {"ok": False, "status": 400, "error": "No pending event"}
    if pending.instance_id != instance_id:
        return {"ok": False, "status": 400, "error": "Event mismatch"}
    event = config.level2_event(pending.event_id)
    if event is None:
        return {"ok": False, "status": 400, "error": "Event not found"}
    option = event.option(option_id)
    if option is None:
        return {"ok": False, "status": 400, "error": "Option not found"}

    election = None
    if event.id == ELECTION_EVENT_ID and option.id == ELECTION_OPTION_ID:
        election = run_election(save, rng=rng)
        if not election["ok"]:
            return election
    else:
        apply_effects(save, option.effects, source=f"{event.id}/{option.id}")

    base = option.outcome or DEFAULT_OUTCOME
    summary = format_effects_summary(option.effects)
    outcome = f"{base} ({summary})." if summary else base

    events.history.insert(0, Level2EventRecord(
        instance_id=instance_id,
        event_id=event.id,
        title=event.title,
        chosen_option_id=option.id,
        created_tick=pending.created_tick,
        resolved_tick=save.tick_count,
        outcome_summary=outcome,
    ))
    del events.history[HISTORY_LIMIT:]
    events.pending = None

    save.add_news(f"EVENTO: {event.title}. Decision: {option.label}. Resultado: {outcome}",
                  news_type="EVENT")

    result = {"ok": True, "outcome_summary": outcome}
    if election is not None:
        result["election"] = election
    return result
