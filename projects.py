"""
MicroEstado Engine v1.0 — Project Lifecycle
locked -> available -> in_progress <-> paused -> completed

Also owns the phase ladder (phase 1-4 recomputed from scratch every time)
and admin capacity, which is unlocked by the audit office project.
"""

import logging

from models import Save, ProjectState, ProjectStatus, clamp
from effects import apply_effects
from config import GameConfig, ProjectConfig

logger = logging.getLogger("microestado.projects")

ADMIN_UNLOCK_PROJECT_ID = "P2_AUDIT_OFFICE"
ADMIN_PERKS = {
    ADMIN_UNLOCK_PROJECT_ID: 1.1,
    "P2_PROCUREMENT": 1.1,
    "P3_AUTOMATED_COLLECTION": 1.25,
}
COALITION_HAPPINESS_FLOOR = 45

LOCKED = ProjectStatus.LOCKED.value
AVAILABLE = ProjectStatus.AVAILABLE.value
IN_PROGRESS = ProjectStatus.IN_PROGRESS.value
PAUSED = ProjectStatus.PAUSED.value
COMPLETED = ProjectStatus.COMPLETED.value


def leader_title(save: Save, config: GameConfig) -> str:
    """'Presidenta Ana' style prefix used by most news lines."""
    return f"{config.role_title(save.leader.role_id, save.leader.gender)} {save.leader.name}"


# ─────────────────────────────────────────────────────
# REQUIREMENTS & COST
# ─────────────────────────────────────────────────────

_REQUIREMENT_STATS = {
    "minGdp": "gdp",
    "minStability": "stability",
    "minInstitutionalTrust": "institutional_trust",
    "minReputation": "reputation",
    "minInnovation": "innovation",
    "minResources": "resources",
    "minHappiness": "happiness",
}


def meets_requirements(project: ProjectConfig, save: Save) -> bool:
    req = project.requirements or {}
    if save.phase < req.get("minPhase", project.phase):
        return False
    for key, attr in _REQUIREMENT_STATS.items():
        if key in req and getattr(save, attr) < req[key]:
            return False
    return True


def effective_cost(project: ProjectConfig, save: Save, config: GameConfig) -> int:
    remote = config.remote_config(save.remote_config_overrides)
    by_phase = remote.get("project_cost_multiplier_by_phase") or {}
    phase_mult = by_phase.get(str(project.phase), 1)
    return round(project.cost * phase_mult * config.economy.project_cost_curve)


def _admin_blocked(project: ProjectConfig, save: Save):
    """Error string when admin capacity blocks the project, else None."""
    if project.admin_cost <= 0:
        return None
    if not admin_unlocked_by_projects(save):
        return "Admin locked"
    if save.admin < project.admin_cost:
        return "Insufficient admin"
    return None


def is_startable(project: ProjectConfig, save: Save, config: GameConfig) -> bool:
    state = save.projects.get(project.id)
    if not state or state.status != AVAILABLE or state.progress != 0:
        return False
    if not meets_requirements(project, save):
        return False
    if save.treasury < effective_cost(project, save, config):
        return False
    return _admin_blocked(project, save) is None


def ensure_project_states(save: Save, config: GameConfig):
    for project in config.projects:
        if project.id not in save.projects:
            status = AVAILABLE if meets_requirements(project, save) else LOCKED
            save.projects[project.id] = ProjectState(status=status, progress=0)


# ─────────────────────────────────────────────────────
# ADMIN CAPACITY
# ─────────────────────────────────────────────────────

def admin_unlocked_by_projects(save: Save) -> bool:
    return save.is_project_completed(ADMIN_UNLOCK_PROJECT_ID)


def sync_admin_unlock(save: Save) -> bool:
    save.admin_unlocked = admin_unlocked_by_projects(save)
    return save.admin_unlocked


def admin_corruption_drift(save: Save) -> float:
    return -0.02 if admin_unlocked_by_projects(save) else 0


def admin_delta(save: Save) -> float:
    if not admin_unlocked_by_projects(save) or save.phase < 2:
        return 0
    perks = 1.0
    for project_id, mult in ADMIN_PERKS.items():
        if save.is_project_completed(project_id):
            perks *= mult
    return (0.05
            * (0.5 + save.budget.industry_pct / 100 * 0.8)
            * (0.7 + save.institutional_trust / 100 * 0.9)
            * clamp(1 - save.corruption / 120, 0.2, 1)
            * perks)


def refresh_admin_per_tick(save: Save) -> float:
    save.admin_per_tick = admin_delta(save)
    return save.admin_per_tick


# ─────────────────────────────────────────────────────
# PHASE
# ─────────────────────────────────────────────────────

def recalc_phase(save: Save, config: GameConfig) -> int:
    completed = save.completed_project_count()
    thresholds = config.economy.phase_thresholds
    for phase in (4, 3, 2):
        t = thresholds.get(f"phase{phase}")
        if not t:
            continue
        if (save.gdp >= t["gdp"] and save.stability >= t["stability"]
                and save.institutional_trust >= t["trust"]
                and completed >= t["projects"]):
            return phase
    return 1


def sync_level1_completion(save: Save):
    if save.level == 1 and save.phase >= 4 and not save.level1_complete:
        save.level1_complete = True
        logger.info(f"Level 1 complete at tick {save.tick_count}")


def update_phase(save: Save, config: GameConfig):
    save.phase = recalc_phase(save, config)
    sync_level1_completion(save)


# ─────────────────────────────────────────────────────
# PER-TICK PROGRESS
# ─────────────────────────────────────────────────────

def coalition_blocked(save: Save, config: GameConfig) -> bool:
    role = config.role(save.leader.role_id)
    return bool(role and role.coalition_block
                and save.happiness < COALITION_HAPPINESS_FLOOR)


def decision_speed(save: Save, config: GameConfig) -> float:
    role = config.role(save.leader.role_id)
    base = role.modifier("decisionSpeed", 1) if role else 1
    if coalition_blocked(save, config):
        return base * 0.75
    return base


def tick_projects(save: Save, config: GameConfig) -> dict:
    """
    Advance every project one tick in catalog order, then refresh admin
    capacity and emit the one-shot 'ready to start' notices.
    """
    log = {"completed": [], "unlocked": [], "paused": [], "ready": []}
    blocked = coalition_blocked(save, config)
    speed = decision_speed(save, config)
    title = leader_title(save, config)

    for project in config.projects:
        state = save.projects.get(project.id)
        if state is None or state.status == COMPLETED:
            continue

        if state.status in (IN_PROGRESS, PAUSED):
            if blocked:
                state.status = PAUSED
                log["paused"].append(project.id)
                continue
            state.status = IN_PROGRESS
            state.progress += speed
            if state.progress >= project.duration_ticks:
                state.status = COMPLETED
                apply_effects(save, project.effects, source=project.id)
                save.add_news(f"{title} completa el proyecto {project.name}.",
                              news_type="PROJECT")
                log["completed"].append(project.id)
                logger.debug(f"Project {project.id} completed at tick {save.tick_count}")
            continue

        was_locked = state.status == LOCKED
        state.status = AVAILABLE if meets_requirements(project, save) else LOCKED
        if was_locked and state.status == AVAILABLE:
            save.add_news(f"Proyecto desbloqueado: {project.name}.",
                          news_type="PROJECT_UNLOCK", severity="CRITICAL")
            log["unlocked"].append(project.id)

    sync_admin_unlock(save)
    save.admin = max(0, save.admin + refresh_admin_per_tick(save))
    log["ready"] = notify_startable_projects(save, config)
    return log


def notify_startable_projects(save: Save, config: GameConfig) -> list:
    notified = []
    for project in config.projects:
        if project.id in save.notified_startable_project_ids:
            continue
        if not is_startable(project, save, config):
            continue
        save.add_news(f"Proyecto listo para iniciar: {project.name}",
                      news_type="PROJECT_READY", severity="CRITICAL",
                      news_id=f"NEWS_PROJ_READY_{project.id}")
        save.notified_startable_project_ids.append(project.id)
        notified.append(project.id)
    return notified


# ─────────────────────────────────────────────────────
# PLAYER ACTIONS
# ─────────────────────────────────────────────────────

def start_project(save: Save, config: GameConfig, project_id: str) -> dict:
    project = config.project(project_id)
    if not project:
        return {"ok": False, "status": 404, "error": f"Unknown project: {project_id}"}
    state = save.projects.get(project_id)
    if not state or state.status != AVAILABLE:
        return {"ok": False, "status": 400, "error": "Project not available"}

    cost = effective_cost(project, save, config)
    if save.treasury < cost:
        return {"ok": False, "status": 400, "error": "Insufficient treasury",
                "cost": cost}
    admin_error = _admin_blocked(project, save)
    if admin_error:
        return {"ok": False, "status": 400, "error": admin_error,
                "admin_cost": project.admin_cost}

    save.treasury -= cost
    if project.admin_cost > 0:
        save.admin = max(0, save.admin - project.admin_cost)
    state.status = IN_PROGRESS
    state.progress = 0
    save.add_news(f"{leader_title(save, config)} inicia {project.name}.",
                  news_type="PROJECT")
    update_phase(save, config)
    return {"ok": True, "project_id": project_id, "cost": cost}


def boost_project(save: Save, config: GameConfig, project_id: str) -> dict:
    """Token action: force-complete an in-progress project."""
    project = config.project(project_id)
    if not project:
        return {"ok": False, "status": 404, "error": f"Unknown project: {project_id}"}
    cost = config.iap.project_speed_cost
    if save.premium_tokens < cost:
        return {"ok": False, "status": 400, "error": "Insufficient tokens"}
    state = save.projects.get(project_id)
    if not state or state.status != IN_PROGRESS:
        return {"ok": False, "status": 400, "error": "Project not in progress"}

    state.progress = project.duration_ticks
    state.status = COMPLETED
    apply_effects(save, project.effects, source=project.id)
    sync_admin_unlock(save)
    refresh_admin_per_tick(save)
    save.add_news(f"{leader_title(save, config)} acelera y completa {project.name}.",
                  news_type="PROJECT")
    update_phase(save, config)
    save.premium_tokens -= cost
    return {"ok": True, "project_id": project_id, "tokens": save.premium_tokens}
