"""
MicroEstado Engine v1.0 — Data Models
Core data structures for a single nation save.

All state is JSON-serializable for save/load/sync. The Save is the root
aggregate; Level2State exists only after the Level 1 -> Level 2 transition.
News is a bounded, newest-first feed shared by every subsystem.
"""

import json
import random
import string
import time
from dataclasses import dataclass, field, asdict, fields
from datetime import datetime, timezone
from typing import Optional
from enum import Enum


MAX_NEWS = 50
BASE36 = string.digits + string.ascii_lowercase


# ─────────────────────────────────────────────────────
# ENUMS
# ─────────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"


class InflationRegime(str, Enum):
    DEFLATION = "DEFLATION"
    STABLE = "STABLE"
    HIGH = "HIGH"
    HYPER = "HYPER"


INFLATION_MIN = -1.0
INFLATION_MAX = 5.0


def classify_regime(inflation_pct: float) -> str:
    if inflation_pct < 0:
        return InflationRegime.DEFLATION.value
    if inflation_pct < 0.5:
        return InflationRegime.STABLE.value
    if inflation_pct < 2:
        return InflationRegime.HIGH.value
    return InflationRegime.HYPER.value


class NewsType(str, Enum):
    SYSTEM = "SYSTEM"
    EVENT = "EVENT"
    PROJECT = "PROJECT"
    PROJECT_UNLOCK = "PROJECT_UNLOCK"
    PROJECT_READY = "PROJECT_READY"


class Severity(str, Enum):
    OK = "OK"
    WARN = "WARN"
    CRITICAL = "CRITICAL"


class TaxLevel(str, Enum):
    LOW = "LOW"
    MED = "MED"
    HIGH = "HIGH"


# ─────────────────────────────────────────────────────
# HELPERS
# ─────────────────────────────────────────────────────

def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def make_id(prefix: str) -> str:
    """prefix_ followed by 8 random base36 characters."""
    suffix = "".join(random.choice(BASE36) for _ in range(8))
    return f"{prefix}_{suffix}"


def now_ms() -> int:
    return int(time.time() * 1000)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_iso(value: Optional[str]) -> float:
    if not value:
        return 0.0
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


# ─────────────────────────────────────────────────────
# IDENTITY
# ─────────────────────────────────────────────────────

@dataclass
class Country:
    base_name: str = "Nueva Republica"
    state_type_id: str = "NONE"          # REPUBLIC, KINGDOM, FEDERATION, NONE
    formal_name: str = ""
    geography: str = "urban"             # archipelago, coastal, mountain, desert, forest, urban
    motto: str = ""
    demonym: str = ""


@dataclass
class Leader:
    name: str = "Sin Nombre"
    gender: str = "PREFER_NOT_SAY"       # MALE, FEMALE, PREFER_NOT_SAY, OTHER
    role_id: str = "PRESIDENT"
    role_selection_mode: str = "MANUAL"  # MANUAL or RANDOM
    trait: str = ""
    tagline: str = ""


# ─────────────────────────────────────────────────────
# POLICY
# ─────────────────────────────────────────────────────

@dataclass
class Budget:
    """Three spending shares. Always sum to 100."""
    industry_pct: float = 34
    welfare_pct: float = 33
    security_diplomacy_pct: float = 33

    def total(self) -> float:
        return self.industry_pct + self.welfare_pct + self.security_diplomacy_pct


@dataclass
class ProjectState:
    status: str = "locked"
    progress: float = 0


@dataclass
class DecreeSlot:
    slot_id: int
    decree_id: Optional[str] = None
    active_until: int = 0
    cooldown_until: int = 0


@dataclass
class NewsItem:
    id: str
    text: str
    created_at: int
    type: str = "SYSTEM"
    severity: str = "OK"


@dataclass
class Agencies:
    revenue: bool = False
    inspection: bool = False
    promotion: bool = False


@dataclass
class IapFlags:
    auto_balance_unlocked: bool = False
    report_clarity_unlocked: bool = False
    offline_cap_bonus_hours: float = 0


# ─────────────────────────────────────────────────────
# LEVEL 2
# ─────────────────────────────────────────────────────

@dataclass
class CentralBank:
    cooldown_until_tick: int = 0
    effect_until_tick: Optional[int] = None
    growth_effect_pct: float = 0
    last_action_tick: int = 0


@dataclass
class MacroState:
    inflation_pct: float = 0.2
    regime: str = "STABLE"
    central_bank: CentralBank = field(default_factory=CentralBank)


@dataclass
class Level2Industries:
    chosen_base_industry_id: Optional[str] = None   # set once
    active_industries: list = field(default_factory=list)  # append-only


@dataclass
class Level2EventOption:
    option_id: str
    label: str
    hint: str = ""


@dataclass
class Level2PendingEvent:
    instance_id: str
    event_id: str
    title: str
    body: str
    created_tick: int
    options: list = field(default_factory=list)   # list[Level2EventOption]


@dataclass
class Level2EventRecord:
    instance_id: str
    event_id: str
    title: str
    chosen_option_id: str
    created_tick: int
    resolved_tick: int
    outcome_summary: str = ""


@dataclass
class Level2Events:
    pending: Optional[Level2PendingEvent] = None
    next_check_tick: int = 0
    history: list = field(default_factory=list)   # newest first, capped at 40


@dataclass
class Level2DecreeRecord:
    decree_id: str
    enacted_tick: int
    summary: str = ""


@dataclass
class Level2Decrees:
    cooldown_until_by_id: dict = field(default_factory=dict)
    history: list = field(default_factory=list)   # newest first, capped at 30


@dataclass
class Elections:
    cooldown_until_tick: int = 0


@dataclass
class Level2State:
    phase: int = 1
    complete: bool = False
    game_over: bool = False
    game_over_reason: Optional[str] = None
    elections: Elections = field(default_factory=Elections)
    macro: MacroState = field(default_factory=MacroState)
    advisors: list = field(default_factory=list)
    industries: Level2Industries = field(default_factory=Level2Industries)
    projects: dict = field(default_factory=dict)   # id -> ProjectState
    events: Level2Events = field(default_factory=Level2Events)
    decrees: Level2Decrees = field(default_factory=Level2Decrees)

    def completed_project_count(self) -> int:
        return sum(1 for p in self.projects.values()
                   if p.status == ProjectStatus.COMPLETED.value)


# ─────────────────────────────────────────────────────
# SAVE (ROOT AGGREGATE)
# ─────────────────────────────────────────────────────

@dataclass
class Save:
    """
    One nation. Mutated by every tick and player action; owned by exactly
    one session. Percentage indicators live in [0, 100], money never goes
    below zero, gdp never below 1.
    """
    version: int = 1
    country: Country = field(default_factory=Country)
    leader: Leader = field(default_factory=Leader)
    preset_id: str = ""

    # Indicators
    treasury: float = 0
    gdp: float = 1000
    baseline_gdp: float = 1000
    growth_pct: float = 0
    happiness: float = 50
    stability: float = 50
    institutional_trust: float = 50
    corruption: float = 30
    resources: float = 100
    reputation: float = 50
    debt: float = 0
    employment: float = 50
    energy: float = 50
    innovation: float = 50
    inequality: float = 50
    environmental_impact: float = 30
    tourism_index: float = 30
    tourism_capacity: float = 40
    tourism_pressure: float = 10
    admin: float = 0
    admin_per_tick: float = 0
    premium_tokens: int = 0

    # Policy
    tax_level: str = "MED"
    tax_rate_pct: float = 50
    budget: Budget = field(default_factory=Budget)
    industry_leader_id: str = "SERVICES"
    diversified_industries: list = field(default_factory=list)

    # Clock
    tick_count: int = 0
    last_tick_at: int = 0                # epoch ms
    created_at: int = 0                  # epoch ms
    updated_at: str = ""                 # ISO-8601

    # Projects, decrees, events
    projects: dict = field(default_factory=dict)          # id -> ProjectState
    decree_slots: list = field(default_factory=list)      # list[DecreeSlot]
    event_cooldown: int = 0
    event_history: dict = field(default_factory=dict)     # event id -> last trigger tick
    pending_event_id: Optional[str] = None
    pending_event_delay: int = 0
    active_event_id: Optional[str] = None
    notified_startable_project_ids: list = field(default_factory=list)

    # Risk / terminal
    last_risk: float = 0
    risk_ticks: int = 0
    zero_treasury_ticks: int = 0
    zero_morale_ticks: int = 0
    debt_over_ticks: int = 0
    game_over: bool = False
    game_over_reason: Optional[str] = None
    game_over_at: Optional[str] = None
    game_over_at_tick: Optional[int] = None
    game_over_causes: list = field(default_factory=list)
    game_over_advice: Optional[str] = None

    # Progression
    phase: int = 1
    max_phase_reached: int = 1
    level: int = 1
    level1_complete: bool = False

    # Unlocks
    admin_unlocked: bool = False
    agencies: Agencies = field(default_factory=Agencies)
    treaties_unlocked: bool = False
    plan_anticrisis_unlocked: bool = False
    plan_anticrisis_cooldown_until: int = 0

    # Tokens / offline
    iap_flags: IapFlags = field(default_factory=IapFlags)
    offline_reward_multiplier: float = 0
    remote_config_overrides: dict = field(default_factory=dict)
    medals: list = field(default_factory=list)

    news: list = field(default_factory=list)              # list[NewsItem], newest first
    level2: Optional[Level2State] = None

    # ─── Methods ───

    def add_news(self, text: str, news_type: str = "SYSTEM",
                 severity: str = "OK", news_id: str = None) -> NewsItem:
        """Unshift a news entry and keep only the newest MAX_NEWS."""
        item = NewsItem(
            id=news_id or make_id("news"),
            text=text,
            created_at=now_ms(),
            type=news_type.value if isinstance(news_type, Enum) else news_type,
            severity=severity.value if isinstance(severity, Enum) else severity,
        )
        self.news.insert(0, item)
        del self.news[MAX_NEWS:]
        return item

    def completed_project_count(self) -> int:
        return sum(1 for p in self.projects.values()
                   if p.status == ProjectStatus.COMPLETED.value)

    def is_project_completed(self, project_id: str) -> bool:
        state = self.projects.get(project_id)
        return bool(state and state.status == ProjectStatus.COMPLETED.value)

    def level2_active(self) -> bool:
        return self.level == 2 and self.level2 is not None

    def debt_ratio(self) -> float:
        return self.debt / self.gdp if self.gdp > 0 else 0

    def slot(self, slot_id: int) -> Optional[DecreeSlot]:
        for s in self.decree_slots:
            if s.slot_id == slot_id:
                return s
        return None

    def touch(self):
        self.updated_at = now_iso()


# ─────────────────────────────────────────────────────
# SERIALIZATION
# ─────────────────────────────────────────────────────

def state_to_json(save: Save) -> str:
    """Serialize a Save to indented JSON."""
    return json.dumps(asdict(save), indent=2, ensure_ascii=False)


def state_from_json(json_str: str) -> Save:
    """Deserialize a Save from JSON."""
    return save_from_dict(json.loads(json_str))


def _scalars(cls, data: dict) -> dict:
    """Pick the plain (non-nested) fields of a dataclass present in data."""
    out = {}
    for f in fields(cls):
        if f.name in data and not isinstance(data[f.name], (dict, list)):
            out[f.name] = data[f.name]
    return out


def _project_states(data: dict) -> dict:
    return {
        pid: ProjectState(status=p.get("status", "locked"),
                          progress=p.get("progress", 0))
        for pid, p in (data or {}).items()
    }


def level2_from_dict(data: dict) -> Level2State:
    macro = data.get("macro", {})
    cb = macro.get("central_bank", {})
    events = data.get("events", {})
    pending = events.get("pending")
    decrees = data.get("decrees", {})
    industries = data.get("industries", {})

    return Level2State(
        phase=data.get("phase", 1),
        complete=data.get("complete", False),
        game_over=data.get("game_over", False),
        game_over_reason=data.get("game_over_reason"),
        elections=Elections(
            cooldown_until_tick=data.get("elections", {}).get("cooldown_until_tick", 0),
        ),
        macro=MacroState(
            inflation_pct=macro.get("inflation_pct", 0.2),
            regime=macro.get("regime", "STABLE"),
            central_bank=CentralBank(
                cooldown_until_tick=cb.get("cooldown_until_tick", 0),
                effect_until_tick=cb.get("effect_until_tick"),
                growth_effect_pct=cb.get("growth_effect_pct", 0),
                last_action_tick=cb.get("last_action_tick", 0),
            ),
        ),
        advisors=list(data.get("advisors", [])),
        industries=Level2Industries(
            chosen_base_industry_id=industries.get("chosen_base_industry_id"),
            active_industries=list(industries.get("active_industries", [])),
        ),
        projects=_project_states(data.get("projects")),
        events=Level2Events(
            pending=Level2PendingEvent(
                instance_id=pending["instance_id"],
                event_id=pending["event_id"],
                title=pending.get("title", ""),
                body=pending.get("body", ""),
                created_tick=pending.get("created_tick", 0),
                options=[Level2EventOption(**o) for o in pending.get("options", [])],
            ) if pending else None,
            next_check_tick=events.get("next_check_tick", 0),
            history=[Level2EventRecord(**h) for h in events.get("history", [])],
        ),
        decrees=Level2Decrees(
            cooldown_until_by_id=dict(decrees.get("cooldown_until_by_id", {})),
            history=[Level2DecreeRecord(**h) for h in decrees.get("history", [])],
        ),
    )


def save_from_dict(data: dict) -> Save:
    """
    Rebuild a Save from its dict form. Missing fields keep their defaults,
    so snapshots written by older versions still load.
    """
    save = Save(**_scalars(Save, data))

    save.country = Country(**_scalars(Country, data.get("country", {})))
    save.leader = Leader(**_scalars(Leader, data.get("leader", {})))
    save.budget = Budget(**_scalars(Budget, data.get("budget", {})))
    save.agencies = Agencies(**_scalars(Agencies, data.get("agencies", {})))
    save.iap_flags = IapFlags(**_scalars(IapFlags, data.get("iap_flags", {})))

    save.projects = _project_states(data.get("projects"))
    save.decree_slots = [
        DecreeSlot(**_scalars(DecreeSlot, s)) for s in data.get("decree_slots", [])
    ]
    save.event_history = dict(data.get("event_history", {}))
    save.diversified_industries = list(data.get("diversified_industries", []))
    save.notified_startable_project_ids = list(
        data.get("notified_startable_project_ids", []))
    save.game_over_causes = list(data.get("game_over_causes", []))
    save.remote_config_overrides = dict(data.get("remote_config_overrides", {}))
    save.medals = list(data.get("medals", []))
    save.news = [NewsItem(**_scalars(NewsItem, n)) for n in data.get("news", [])]

    l2 = data.get("level2")
    if l2:
        save.level2 = level2_from_dict(l2)
    return save


def merge_saves(local: Optional[Save], remote: Optional[Save]) -> Optional[Save]:
    """Pick the snapshot with the newer updated_at. Local wins ties."""
    if local is None:
        return remote
    if remote is None:
        return local
    if _parse_iso(local.updated_at) >= _parse_iso(remote.updated_at):
        return local
    return remote
