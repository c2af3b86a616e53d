"""
MicroEstado Engine v1.0 — Configuration
Typed view over the catalog bundle plus remote-config overrides.

The bundle is plain JSON (camelCase keys). load_config() reads it from a
single file, a directory of per-catalog files, or falls back to the
built-in catalogs. Nothing here mutates a Save.
"""

import copy
import hashlib
import json
import logging
import os
import re
from dataclasses import dataclass, field, fields
from typing import Optional

import catalogs
from effects import unknown_effect_keys

logger = logging.getLogger("microestado.config")


class ConfigError(ValueError):
    """Bundle could not be read or failed strict validation."""


DEMOCRATIC_ROLES = ("PRESIDENT", "PRIME_MINISTER", "KING_PARLIAMENT", "CHANCELLOR")
AUTHORITARIAN_ROLES = ("DICTATOR", "SUPREME_LEADER", "DICTATORSHIP")

# Per-catalog file names accepted in a config directory.
BUNDLE_FILES = {
    "stateTypes": "stateTypes.json",
    "roles": "roles.json",
    "industries": "industries.json",
    "projects": "projects.json",
    "events": "events.json",
    "economy": "economy.json",
    "policyPresets": "policyPresets.json",
    "iapConfig": "iapConfig.json",
    "remoteConfigKeys": "remoteConfigKeys.json",
    "level2Industries": "level2Industries.json",
    "level2Advisors": "level2Advisors.json",
    "level2Projects": "level2Projects.json",
    "level2Decrees": "level2Decrees.json",
    "level2Events": "level2Events.json",
}


# ─────────────────────────────────────────────────────
# HELPERS
# ─────────────────────────────────────────────────────

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def snake(key: str) -> str:
    """growthPct -> growth_pct"""
    return _CAMEL.sub("_", key).lower()


def _build(cls, data: dict):
    """Instantiate a dataclass from a camelCase dict, dropping unknown keys."""
    names = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in (data or {}).items():
        name = snake(key)
        if name in names:
            kwargs[name] = copy.deepcopy(value)
    return cls(**kwargs)


def deep_merge(base: dict, override: dict) -> dict:
    """Recursive merge. Only plain dicts recurse; everything else replaces."""
    out = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


# ─────────────────────────────────────────────────────
# CATALOG RECORDS
# ─────────────────────────────────────────────────────

@dataclass
class RoleConfig:
    id: str
    labels: dict = field(default_factory=dict)     # male / female / neutral
    flavor_text: str = ""
    checks_balances: bool = False
    coalition_block: bool = False
    sanction_risk_base: float = 0
    crisis_severity: float = 0
    low_happiness_crisis_boost: float = 0
    modifiers: dict = field(default_factory=dict)

    def modifier(self, key: str, default: float = 0) -> float:
        value = self.modifiers.get(key)
        return default if value is None else value

    def title(self, gender: str) -> str:
        if gender == "MALE":
            return self.labels.get("male") or "Liderazgo"
        if gender == "FEMALE":
            return self.labels.get("female") or "Liderazgo"
        return self.labels.get("neutral") or "Liderazgo"


@dataclass
class IndustryConfig:
    id: str
    label: str = ""
    description: str = ""
    income_mult: float = 1.0
    resource_drain: float = 0
    environmental_drift: float = 0
    reputation_drift: float = 0
    stability_drift: float = 0
    innovation_drift: float = 0
    energy_demand: float = 0
    climate_sensitivity: float = 0


@dataclass
class ProjectConfig:
    id: str
    name: str = ""
    phase: int = 1
    description: str = ""
    cost: float = 0
    duration_ticks: int = 1
    admin_cost: float = 0
    requirements: dict = field(default_factory=dict)
    effects: dict = field(default_factory=dict)


@dataclass
class EventOptionConfig:
    id: str
    text: str = ""
    effects: dict = field(default_factory=dict)
    news: str = ""
    modifiers: list = field(default_factory=list)   # condition sets, each with "mult"
    follow_up_event_id: Optional[str] = None


@dataclass
class EventConfig:
    id: str
    title: str = ""
    description: str = ""
    phase_min: int = 1
    phase_max: int = 4
    weight: float = 1
    tags: list = field(default_factory=list)
    cooldown_ticks: int = 0
    required_geography_id: Optional[str] = None
    required_industry_id: Optional[str] = None
    required_role_id: Optional[str] = None
    limits: dict = field(default_factory=dict)       # minReputation, maxStability, ...
    conditions: dict = field(default_factory=dict)
    options: list = field(default_factory=list)      # list[EventOptionConfig]

    def option(self, option_id: str) -> Optional[EventOptionConfig]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


@dataclass
class DecreeConfig:
    id: str
    name: str = ""
    description: str = ""
    duration_ticks: int = 1
    cooldown_ticks: int = 0
    cost: dict = field(default_factory=dict)         # negative deltas
    modifiers: dict = field(default_factory=dict)


@dataclass
class EconomyConfig:
    tick_ms: int = 5000
    offline_cap_hours: float = 8
    income_scale: float = 0.08
    spending_scale: float = 0.01
    gdp_growth_scale: float = 0.01
    stat_drift_scale: float = 0.05
    collection_efficiency_base: float = 0.85
    evasion_base: float = 0.15
    event_base_chance: float = 0.08
    event_cooldown_ticks: int = 40
    project_cost_curve: float = 1.0
    resource_use_base: float = 0.02
    resource_use_industry_boost: float = 0.03
    resource_growth_penalty: float = 0.5
    debt_interest_rate: float = 0.0005
    security_reputation_penalty: float = 0.05
    extraction_base_yield: float = 0.06
    industry_diversification_weight: float = 0.5
    minimum_revenue: dict = field(default_factory=dict)
    base_drifts: dict = field(default_factory=dict)
    phase_thresholds: dict = field(default_factory=dict)
    agencies: dict = field(default_factory=dict)
    treaties: dict = field(default_factory=dict)
    starting_state: dict = field(default_factory=dict)
    decrees: list = field(default_factory=list)      # list[DecreeConfig]


@dataclass
class PolicyPreset:
    id: str
    name: str = ""
    description: str = ""
    budget: dict = field(default_factory=dict)
    adjustments: dict = field(default_factory=dict)


@dataclass
class IapConfig:
    project_speed_cost: int = 1
    event_mitigation_cost: int = 1
    offline_cap_boost_cost: int = 2
    offline_cap_boost_hours: float = 4
    carbon_credits_cost: int = 2
    carbon_credits_reduction: float = 50
    token_treasury_price: float = 10000
    rescue_treasury_amount: float = 200
    auto_balance_cost: int = 3
    report_clarity_cost: int = 2


@dataclass
class Level2IndustryConfig:
    id: str
    name: str = ""
    group: str = ""
    description: str = ""
    tags: list = field(default_factory=list)
    capex: float = 0
    opex: float = 0
    modifiers: dict = field(default_factory=dict)
    unlock: dict = field(default_factory=dict)


@dataclass
class Level2ProjectConfig:
    id: str
    name: str = ""
    phase: int = 1
    description: str = ""
    cost: float = 0
    duration_ticks: int = 1
    impact_score: int = 0
    requirements: dict = field(default_factory=dict)
    effects: dict = field(default_factory=dict)


@dataclass
class Level2DecreeConfig:
    id: str
    title: str = ""
    body: str = ""
    group: str = "neutral"
    cooldown_ticks: int = 0
    cost: dict = field(default_factory=dict)         # positive amounts to deduct
    effects: dict = field(default_factory=dict)
    requires: dict = field(default_factory=dict)
    action: Optional[str] = None
    summary: str = ""


@dataclass
class Level2EventOptionConfig:
    id: str
    label: str = ""
    hint: str = ""
    outcome: str = ""
    effects: dict = field(default_factory=dict)


@dataclass
class Level2EventConfig:
    id: str
    title: str = ""
    body: str = ""
    weight: float = 1
    min_phase: int = 1
    requires: dict = field(default_factory=dict)
    options: list = field(default_factory=list)      # list[Level2EventOptionConfig]

    def option(self, option_id: str) -> Optional[Level2EventOptionConfig]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


# ─────────────────────────────────────────────────────
# GAME CONFIG
# ─────────────────────────────────────────────────────

@dataclass
class GameConfig:
    """Everything the engine reads. Lookups return None for unknown ids."""
    version: str = ""
    state_types: list = field(default_factory=list)
    roles: dict = field(default_factory=dict)              # id -> RoleConfig
    industries: dict = field(default_factory=dict)         # id -> IndustryConfig
    projects: list = field(default_factory=list)           # catalog order
    events: list = field(default_factory=list)
    economy: EconomyConfig = field(default_factory=EconomyConfig)
    presets: dict = field(default_factory=dict)
    iap: IapConfig = field(default_factory=IapConfig)
    remote_defaults: dict = field(default_factory=dict)
    level2_industries: list = field(default_factory=list)
    level2_advisors: list = field(default_factory=list)
    level2_projects: list = field(default_factory=list)
    level2_decrees: list = field(default_factory=list)
    level2_events: list = field(default_factory=list)

    # ─── Lookups ───

    def role(self, role_id: str) -> Optional[RoleConfig]:
        return self.roles.get(role_id)

    def role_title(self, role_id: str, gender: str) -> str:
        role = self.roles.get(role_id)
        return role.title(gender) if role else "Liderazgo"

    def industry(self, industry_id: str) -> Optional[IndustryConfig]:
        return self.industries.get(industry_id)

    def project(self, project_id: str) -> Optional[ProjectConfig]:
        return next((p for p in self.projects if p.id == project_id), None)

    def event(self, event_id: str) -> Optional[EventConfig]:
        return next((e for e in self.events if e.id == event_id), None)

    def decree(self, decree_id: str) -> Optional[DecreeConfig]:
        return next((d for d in self.economy.decrees if d.id == decree_id), None)

    def preset(self, preset_id: str) -> Optional[PolicyPreset]:
        return self.presets.get(preset_id)

    def state_type(self, state_type_id: str) -> Optional[dict]:
        return next((s for s in self.state_types if s["id"] == state_type_id), None)

    def level2_industry(self, industry_id: str) -> Optional[Level2IndustryConfig]:
        return next((i for i in self.level2_industries if i.id == industry_id), None)

    def level2_project(self, project_id: str) -> Optional[Level2ProjectConfig]:
        return next((p for p in self.level2_projects if p.id == project_id), None)

    def level2_event(self, event_id: str) -> Optional[Level2EventConfig]:
        return next((e for e in self.level2_events if e.id == event_id), None)

    def level2_decrees_for_role(self, role_id: str) -> list:
        if role_id in DEMOCRATIC_ROLES:
            group = "democracy"
        elif role_id in AUTHORITARIAN_ROLES:
            group = "authoritarian"
        else:
            group = "neutral"
        return [d for d in self.level2_decrees if d.group == group]

    def remote_config(self, overrides: dict = None) -> dict:
        """Defaults deep-merged with a save's overrides."""
        return deep_merge(self.remote_defaults, overrides or {})


def is_democratic(role_id: str) -> bool:
    return role_id in DEMOCRATIC_ROLES


# ─────────────────────────────────────────────────────
# BUILDING
# ─────────────────────────────────────────────────────

def _event_from_dict(data: dict) -> EventConfig:
    event = _build(EventConfig, data)
    event.limits = {k: v for k, v in data.items()
                    if re.match(r"^(min|max)[A-Z]", k)}
    event.options = []
    for raw in data.get("options", []):
        opt = _build(EventOptionConfig, {**raw, "id": raw.get("id") or raw.get("key")})
        mods = raw.get("modifiers") or []
        opt.modifiers = mods if isinstance(mods, list) else [mods]
        event.options.append(opt)
    return event


def _level2_industry_from_dict(data: dict) -> Level2IndustryConfig:
    industry = _build(Level2IndustryConfig, data)
    attributes = data.get("attributes", {})
    industry.capex = attributes.get("capex", industry.capex)
    industry.opex = attributes.get("opex", industry.opex)
    return industry


def _level2_event_from_dict(data: dict) -> Level2EventConfig:
    event = _build(Level2EventConfig, data)
    event.options = [_build(Level2EventOptionConfig, o) for o in data.get("options", [])]
    return event


def bundle_version(bundle: dict) -> str:
    raw = json.dumps(bundle, sort_keys=True, ensure_ascii=False).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def config_from_dict(bundle: dict) -> GameConfig:
    """Turn a raw bundle dict into a GameConfig."""
    economy_raw = dict(bundle.get("economy", {}))
    economy = _build(EconomyConfig, {k: v for k, v in economy_raw.items() if k != "decrees"})
    economy.decrees = [_build(DecreeConfig, d) for d in economy_raw.get("decrees", [])]

    level2_decrees = []
    for group, items in bundle.get("level2Decrees", {}).items():
        for raw in items:
            level2_decrees.append(_build(Level2DecreeConfig, {**raw, "group": group}))

    return GameConfig(
        version=bundle_version(bundle),
        state_types=copy.deepcopy(bundle.get("stateTypes", [])),
        roles={r["id"]: _build(RoleConfig, r) for r in bundle.get("roles", [])},
        industries={i["id"]: _build(IndustryConfig, i) for i in bundle.get("industries", [])},
        projects=[_build(ProjectConfig, p) for p in bundle.get("projects", [])],
        events=[_event_from_dict(e) for e in bundle.get("events", [])],
        economy=economy,
        presets={p["id"]: _build(PolicyPreset, p) for p in bundle.get("policyPresets", [])},
        iap=_build(IapConfig, bundle.get("iapConfig", {})),
        remote_defaults=copy.deepcopy(
            bundle.get("remoteConfigKeys", {}).get("defaults", {})),
        level2_industries=[_level2_industry_from_dict(i)
                           for i in bundle.get("level2Industries", [])],
        level2_advisors=copy.deepcopy(bundle.get("level2Advisors", [])),
        level2_projects=[_build(Level2ProjectConfig, p)
                         for p in bundle.get("level2Projects", [])],
        level2_decrees=level2_decrees,
        level2_events=[_level2_event_from_dict(e) for e in bundle.get("level2Events", [])],
    )


def default_config() -> GameConfig:
    return config_from_dict(catalogs.default_bundle())


# ─────────────────────────────────────────────────────
# VALIDATION
# ─────────────────────────────────────────────────────

def validate_config(config: GameConfig) -> list:
    """
    Catalog consistency report. Returns a list of human-readable issues:
    unknown effect keys, dangling follow-up ids and Level 2 requirements
    that point at ids the catalogs do not define.
    """
    issues = []

    def check_effects(where: str, effects: dict, level2: bool = False):
        for key in unknown_effect_keys(effects, level2=level2):
            issues.append(f"{where}: unknown effect key '{key}'")

    for project in config.projects:
        check_effects(f"project {project.id}", project.effects)
    for decree in config.economy.decrees:
        check_effects(f"decree {decree.id} cost", decree.cost)
    for preset in config.presets.values():
        check_effects(f"preset {preset.id}", preset.adjustments)

    event_ids = {e.id for e in config.events}
    for event in config.events:
        for opt in event.options:
            check_effects(f"event {event.id}/{opt.id}", opt.effects)
            if opt.follow_up_event_id and opt.follow_up_event_id not in event_ids:
                issues.append(f"event {event.id}/{opt.id}: follow-up "
                              f"'{opt.follow_up_event_id}' does not exist")

    l2_projects = {p.id for p in config.level2_projects}
    l2_industries = {i.id for i in config.level2_industries}
    advisors = {a["id"] for a in config.level2_advisors}
    for project in config.level2_projects:
        check_effects(f"level2 project {project.id}", project.effects, level2=True)
        req = project.requirements
        for pid in req.get("requiresProjects", []):
            if pid not in l2_projects:
                issues.append(f"level2 project {project.id}: unknown project '{pid}'")
        for iid in req.get("requiresIndustries", []):
            if iid not in l2_industries:
                issues.append(f"level2 project {project.id}: unknown industry '{iid}'")
        for aid in req.get("requiresAdvisorIds", []):
            if aid not in advisors:
                issues.append(f"level2 project {project.id}: unknown advisor '{aid}'")
    for industry in config.level2_industries:
        for pid in industry.unlock.get("requiresProjectsL2", []):
            if pid not in l2_projects:
                issues.append(f"level2 industry {industry.id}: unknown project '{pid}'")
    for decree in config.level2_decrees:
        check_effects(f"level2 decree {decree.id}", decree.effects, level2=True)
    for event in config.level2_events:
        for opt in event.options:
            check_effects(f"level2 event {event.id}/{opt.id}", opt.effects, level2=True)

    return issues


# ─────────────────────────────────────────────────────
# LOADING
# ─────────────────────────────────────────────────────

def _read_json(path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _read_bundle(path: str) -> dict:
    if os.path.isdir(path):
        bundle = {}
        for key, filename in BUNDLE_FILES.items():
            file_path = os.path.join(path, filename)
            if os.path.exists(file_path):
                bundle[key] = _read_json(file_path)
        return bundle
    if os.path.isfile(path):
        data = _read_json(path)
        if not isinstance(data, dict):
            raise ConfigError(f"Config bundle must be a JSON object: {path}")
        return data
    raise ConfigError(f"Config path not found: {path}")


def load_config(path: str = None, strict: bool = False) -> GameConfig:
    """
    Load a config bundle. Catalogs present at `path` replace the built-in
    ones key by key; the economy block is deep-merged so partial overrides
    work. With no path, MICROESTADO_CONFIG is consulted, then the defaults.
    """
    path = path or os.environ.get("MICROESTADO_CONFIG")
    bundle = catalogs.default_bundle()
    if path:
        overrides = _read_bundle(path)
        for key, value in overrides.items():
            if key == "economy" and isinstance(value, dict):
                bundle[key] = deep_merge(bundle[key], value)
            else:
                bundle[key] = value

    config = config_from_dict(bundle)
    issues = validate_config(config)
    for issue in issues:
        logger.warning(f"Config: {issue}")
    if issues and strict:
        raise ConfigError(f"{len(issues)} catalog issue(s): {issues[0]}")

    logger.info(f"Config loaded ({path or 'built-in'}), version {config.version[:12]}, "
                f"{len(config.projects)} projects, {len(config.events)} events")
    return config
