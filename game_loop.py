"""
MicroEstado Engine v1.0 — Game Loop
The session object. Owns one Save plus the loaded config and routes every
player action, tick and snapshot operation through a single lock.

Level state:
  LEVEL1     -> Budget/tax economy, projects, events, decree slots.
  LEVEL2     -> Macro layer: industries, central bank, elections.
  GAME_OVER  -> Terminal. Ticks and actions are guarded no-ops.
"""

import json
import os
import glob
import logging
import threading
from dataclasses import asdict
from datetime import datetime
from enum import Enum

from models import (Save, Country, Leader, state_to_json, state_from_json,
                    save_from_dict, merge_saves, _scalars)
from config import GameConfig, load_config
from engine import (apply_tick, catch_up, build_new_save, purchase_carbon_credits,
                    purchase_token_with_treasury, rescue_treasury, boost_offline_cap,
                    unlock_auto_balance, unlock_report_clarity, set_remote_config_overrides)
from economy import (update_budget, auto_balance_budget, set_tax_level, set_tax_rate_pct,
                     set_industry_leader, add_diversified_industry, activate_plan_anticrisis,
                     collect_alerts, gdp_index, tax_rate, tourism_metrics)
from projects import start_project, boost_project, is_startable
from events import resolve_event, mitigate_event, dismiss_event
from decrees import set_decree_slot, activate_decree
from macro import (apply_level2_tick, continue_to_level2, set_level2_base_industry,
                   activate_level2_industry, set_level2_advisors, start_level2_project,
                   central_bank_action)
from elections import run_election, win_chance
from level2_decrees import enact_level2_decree
from level2_events import resolve_level2_event

logger = logging.getLogger("microestado.game_loop")

MAX_TICKS_PER_CALL = 1000
ACTION_LOG_LIMIT = 200


class LevelState(str, Enum):
    NO_GAME = "no_game"
    LEVEL1 = "level1"
    LEVEL2 = "level2"
    GAME_OVER = "game_over"


class GameLoop:
    """
    Central session object. The web server, the CLI and the ticker thread
    all go through it; engine functions never see concurrent callers.
    """

    def __init__(self):
        self.save: Save = None
        self.config: GameConfig = None
        self.action_log: list[dict] = []        # Mechanical log entries
        self.last_tick_logs: list[dict] = []    # Audit logs from the last tick call
        self._lock = threading.RLock()
        self._data_dir: str = None
        self._level_state = LevelState.NO_GAME

        # Callbacks — the web layer registers these to push updates
        self._on_level_change = None
        self._on_state_update = None
        self._on_log_entry = None

    # ─────────────────────────────────────────────────
    # INITIALIZATION
    # ─────────────────────────────────────────────────

    def init(self, data_dir: str = None, config_path: str = None,
             config: GameConfig = None):
        """Load config and the newest save, then replay offline ticks."""
        if data_dir is None:
            data_dir = os.environ.get("MICROESTADO_DATA_DIR") or os.path.join(
                os.path.dirname(os.path.abspath(__file__)), "data"
            )
        self._data_dir = data_dir
        self.config = config or load_config(config_path)
        self.save = self._auto_load(data_dir)
        if self.save:
            result = catch_up(self.save, self.config)
            if result["applied"]:
                self._log_action("OFFLINE", f"Replayed {result['applied']} tick(s), "
                                 f"bonus {result['bonus']:.1f}")
        self._sync_level_state()
        self._log_action("SESSION", f"Engine started. Config {self.config.version[:8]}.")

    def _auto_load(self, data_dir: str):
        """Load the most recent save, or None when there is nothing to load."""
        if os.path.isdir(data_dir):
            saves = sorted(
                glob.glob(os.path.join(data_dir, "save_*.json")),
                key=os.path.getmtime, reverse=True,
            )
            for save_path in saves:
                try:
                    with open(save_path, "r", encoding="utf-8") as f:
                        save = state_from_json(f.read())
                    self._log_action("SESSION", f"Loaded: {os.path.basename(save_path)}")
                    return save
                except Exception as e:
                    self._log_action("SESSION",
                                     f"Failed to load {os.path.basename(save_path)}: {e}")
                    continue
        self._log_action("SESSION", "No save found")
        return None

    # ─────────────────────────────────────────────────
    # LEVEL TRANSITIONS
    # ─────────────────────────────────────────────────

    def _current_level_state(self) -> LevelState:
        s = self.save
        if not s:
            return LevelState.NO_GAME
        if s.game_over or (s.level2 and s.level2.game_over):
            return LevelState.GAME_OVER
        if s.level2_active():
            return LevelState.LEVEL2
        return LevelState.LEVEL1

    def _sync_level_state(self):
        old = self._level_state
        self._level_state = self._current_level_state()
        if old != self._level_state:
            self._log_action("LEVEL", f"{old.value} -> {self._level_state.value}")
            if self._on_level_change:
                self._on_level_change(self._level_state, self._build_level_data())

    def _build_level_data(self) -> dict:
        s = self.save
        data = {"level_state": self._level_state.value}
        if s and self._level_state == LevelState.GAME_OVER:
            if s.game_over:
                data["reason"] = s.game_over_reason
                data["causes"] = list(s.game_over_causes)
                data["advice"] = s.game_over_advice
            else:
                data["reason"] = s.level2.game_over_reason
        return data

    @property
    def level_state(self) -> LevelState:
        return self._level_state

    # ─────────────────────────────────────────────────
    # GAME LIFECYCLE
    # ─────────────────────────────────────────────────

    def new_game(self, country: dict, leader: dict, preset_id: str = "BALANCED",
                 role_id: str = None, rng=None) -> dict:
        with self._lock:
            country_obj = Country(**_scalars(Country, country or {}))
            leader_obj = Leader(**_scalars(Leader, leader or {}))
            if not country_obj.base_name.strip():
                return {"ok": False, "status": 400, "error": "Country name required"}
            if not leader_obj.name.strip():
                return {"ok": False, "status": 400, "error": "Leader name required"}
            if role_id and not self.config.role(role_id):
                return {"ok": False, "status": 404, "error": f"Unknown role: {role_id}"}

            self.save = build_new_save(self.config, country_obj, leader_obj,
                                       preset_id, role_id=role_id, rng=rng)
            self.last_tick_logs = []
            self._log_action("NEW_GAME", f"{self.save.country.formal_name} "
                             f"({self.save.leader.role_id})")
            self._after_change()
            return {"ok": True, "formal_name": self.save.country.formal_name,
                    "role_id": self.save.leader.role_id}

    def tick(self, count: int = 1, suppress_events: bool = False, rng=None) -> dict:
        """Advance N ticks on whichever level is active."""
        with self._lock:
            if not self.save:
                return {"ok": False, "status": 400, "error": "No game loaded"}
            if self._current_level_state() == LevelState.GAME_OVER:
                return {"ok": False, "status": 409, "error": "Game over"}
            count = max(1, min(int(count), MAX_TICKS_PER_CALL))

            logs = []
            for _ in range(count):
                if self.save.level2_active():
                    log = apply_level2_tick(self.save, self.config,
                                            suppress_events=suppress_events, rng=rng)
                else:
                    log = apply_tick(self.save, self.config,
                                     suppress_events=suppress_events, rng=rng)
                logs.append(log)
                if "skipped" in log:
                    break
                if self._current_level_state() == LevelState.GAME_OVER:
                    break

            self.last_tick_logs = logs
            self._log_action("TICK", f"{len(logs)} tick(s) -> tick {self.save.tick_count}")
            self._after_change()
            return {"ok": True, "ticks": len(logs), "tick_count": self.save.tick_count,
                    "game_over": self._level_state == LevelState.GAME_OVER}

    # ─────────────────────────────────────────────────
    # PLAYER ACTIONS
    # ─────────────────────────────────────────────────

    def _act(self, name: str, fn, *args, allow_game_over: bool = False, **kwargs) -> dict:
        """Run one engine action under the lock and record the outcome."""
        with self._lock:
            if not self.save:
                return {"ok": False, "status": 400, "error": "No game loaded"}
            if not allow_game_over and self._current_level_state() == LevelState.GAME_OVER:
                return {"ok": False, "status": 409, "error": "Game over"}
            result = fn(self.save, *args, **kwargs)
            if result.get("ok"):
                self._log_action(name, _describe(args))
                self._after_change()
            else:
                self._log_action(name, f"rejected: {result.get('error')}")
            return result

    # Policy
    def set_budget(self, key: str, value: float) -> dict:
        return self._act("BUDGET", update_budget, key, value)

    def auto_balance(self) -> dict:
        return self._act("BUDGET", auto_balance_budget)

    def set_tax(self, level: str = None, rate_pct: float = None) -> dict:
        if level is not None:
            return self._act("TAX", set_tax_level, level)
        if rate_pct is None:
            return {"ok": False, "status": 400, "error": "Tax level or rate required"}
        return self._act("TAX", set_tax_rate_pct, rate_pct)

    def set_industry_leader(self, industry_id: str) -> dict:
        return self._act("INDUSTRY", lambda s, i: set_industry_leader(s, self.config, i),
                         industry_id)

    def diversify_industry(self, industry_id: str) -> dict:
        return self._act("INDUSTRY", lambda s, i: add_diversified_industry(s, self.config, i),
                         industry_id)

    def activate_plan(self) -> dict:
        return self._act("PLAN", activate_plan_anticrisis)

    # Projects
    def start_project(self, project_id: str) -> dict:
        return self._act("PROJECT", lambda s, p: start_project(s, self.config, p), project_id)

    def boost_project(self, project_id: str) -> dict:
        return self._act("PROJECT", lambda s, p: boost_project(s, self.config, p), project_id)

    # Events
    def resolve_event(self, event_id: str, option_id: str) -> dict:
        return self._act("EVENT", lambda s, e, o: resolve_event(s, self.config, e, o),
                         event_id, option_id)

    def mitigate_event(self) -> dict:
        return self._act("EVENT", lambda s: mitigate_event(s, self.config))

    def dismiss_event(self) -> dict:
        return self._act("EVENT", dismiss_event)

    # Decrees
    def set_decree_slot(self, slot_id: int, decree_id: str = None) -> dict:
        return self._act("DECREE", lambda s, i, d: set_decree_slot(s, self.config, i, d),
                         slot_id, decree_id)

    def activate_decree(self, slot_id: int) -> dict:
        return self._act("DECREE", lambda s, i: activate_decree(s, self.config, i), slot_id)

    # Level 2
    def continue_to_level2(self) -> dict:
        return self._act("LEVEL2", lambda s: continue_to_level2(s, self.config))

    def set_level2_base_industry(self, industry_id: str) -> dict:
        return self._act("LEVEL2", lambda s, i: set_level2_base_industry(s, self.config, i),
                         industry_id)

    def activate_level2_industry(self, industry_id: str) -> dict:
        return self._act("LEVEL2", lambda s, i: activate_level2_industry(s, self.config, i),
                         industry_id)

    def set_level2_advisors(self, advisor_ids: list) -> dict:
        return self._act("LEVEL2", lambda s, a: set_level2_advisors(s, self.config, a),
                         advisor_ids)

    def start_level2_project(self, project_id: str) -> dict:
        return self._act("LEVEL2", lambda s, p: start_level2_project(s, self.config, p),
                         project_id)

    def central_bank_action(self, action: str) -> dict:
        return self._act("CENTRAL_BANK", central_bank_action, action)

    def run_election(self, rng=None) -> dict:
        return self._act("ELECTION", lambda s: run_election(s, rng=rng))

    def enact_level2_decree(self, decree_id: str, rng=None) -> dict:
        return self._act("DECREE", lambda s, d: enact_level2_decree(s, self.config, d, rng=rng),
                         decree_id)

    def resolve_level2_event(self, instance_id: str, option_id: str, rng=None) -> dict:
        return self._act("EVENT", lambda s, i, o: resolve_level2_event(
            s, self.config, i, o, rng=rng), instance_id, option_id)

    # Tokens and treasury
    def purchase_carbon_credits(self) -> dict:
        return self._act("TOKENS", lambda s: purchase_carbon_credits(s, self.config))

    def purchase_token(self) -> dict:
        return self._act("TOKENS", lambda s: purchase_token_with_treasury(s, self.config))

    def rescue_treasury(self) -> dict:
        return self._act("TOKENS", lambda s: rescue_treasury(s, self.config))

    def boost_offline_cap(self) -> dict:
        return self._act("TOKENS", lambda s: boost_offline_cap(s, self.config))

    def unlock_auto_balance(self) -> dict:
        return self._act("TOKENS", lambda s: unlock_auto_balance(s, self.config))

    def unlock_report_clarity(self) -> dict:
        return self._act("TOKENS", lambda s: unlock_report_clarity(s, self.config))

    def set_remote_config_overrides(self, overrides: dict) -> dict:
        return self._act("CONFIG", set_remote_config_overrides, overrides,
                         allow_game_over=True)

    # ─────────────────────────────────────────────────
    # STATE FOR UI
    # ─────────────────────────────────────────────────

    def get_full_state(self) -> dict:
        """Return everything the web UI needs to render."""
        with self._lock:
            s = self.save
            if not s:
                return {"error": "No state loaded", "level_state": LevelState.NO_GAME.value}

            startable = [p.id for p in self.config.projects
                         if is_startable(p, s, self.config)]
            derived = {
                "alerts": collect_alerts(s),
                "gdp_index": gdp_index(s),
                "tax_rate": tax_rate(s),
                "debt_ratio": s.debt_ratio(),
                "tourism": tourism_metrics(s),
                "startable_projects": startable,
                "role_title": self.config.role_title(s.leader.role_id, s.leader.gender),
            }
            if s.level2_active():
                derived["level2_decrees"] = [
                    {"id": d.id, "title": d.title, "cost": d.cost,
                     "cooldown_until": s.level2.decrees.cooldown_until_by_id.get(d.id, 0)}
                    for d in self.config.level2_decrees_for_role(s.leader.role_id)
                ]
                derived["election_win_chance"] = win_chance(s)

            return {
                "level_state": self._current_level_state().value,
                "config_version": self.config.version,
                "save": asdict(s),
                "derived": derived,
                "action_log": self.action_log[-50:],
            }

    def list_news(self, limit: int = 10) -> list[dict]:
        with self._lock:
            if not self.save:
                return []
            return [asdict(n) for n in self.save.news[:limit]]

    # ─────────────────────────────────────────────────
    # SAVE / LOAD / SYNC
    # ─────────────────────────────────────────────────

    def save_game(self, filename: str = "") -> str:
        """Save current state. Returns the filename used."""
        with self._lock:
            os.makedirs(self._data_dir, exist_ok=True)
            if not filename:
                filename = self._canonical_save_name()
            if not filename.endswith(".json"):
                filename += ".json"
            filepath = os.path.join(self._data_dir, filename)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(state_to_json(self.save))
            self._log_action("SAVE", f"Saved: {filename}")
            return filename

    def load_game(self, filename: str) -> dict:
        """Load state from a save file."""
        with self._lock:
            root = os.path.realpath(self._data_dir)
            filepath = os.path.realpath(os.path.join(root, filename))
            if os.path.dirname(filepath) != root:
                return {"success": False, "error": f"Invalid save name: {filename}"}
            if not os.path.exists(filepath):
                if not filepath.endswith(".json"):
                    filepath += ".json"
                if not os.path.exists(filepath):
                    return {"success": False, "error": f"File not found: {filename}"}

            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    self.save = state_from_json(f.read())
                self.last_tick_logs = []
                self._sync_level_state()
                self._log_action("SESSION", f"Loaded: {filename}")
                return {
                    "success": True,
                    "filename": filename,
                    "country": self.save.country.formal_name,
                    "tick_count": self.save.tick_count,
                }
            except Exception as e:
                return {"success": False, "error": str(e)}

    def list_saves(self) -> list[dict]:
        """List available save files."""
        if not self._data_dir or not os.path.isdir(self._data_dir):
            return []
        saves = sorted(
            glob.glob(os.path.join(self._data_dir, "save_*.json")),
            key=os.path.getmtime, reverse=True,
        )
        result = []
        for s in saves:
            result.append({
                "filename": os.path.basename(s),
                "size": os.path.getsize(s),
                "modified": datetime.fromtimestamp(
                    os.path.getmtime(s)
                ).strftime("%Y-%m-%d %H:%M"),
            })
        return result

    def sync(self, remote: dict) -> dict:
        """Last-write-wins merge against a snapshot from another device."""
        with self._lock:
            if remote is not None and not isinstance(remote, dict):
                return {"success": False, "error": "Invalid snapshot: expected a JSON object"}
            try:
                incoming = save_from_dict(remote) if remote else None
            except (TypeError, KeyError, ValueError) as e:
                return {"success": False, "error": f"Invalid snapshot: {e}"}
            winner = merge_saves(self.save, incoming)
            source = "remote" if winner is incoming and incoming is not None else "local"
            self.save = winner
            self._log_action("SYNC", f"Kept {source} snapshot")
            if source == "remote":
                self._after_change(touch=False)
            return {"success": True, "source": source,
                    "updated_at": self.save.updated_at if self.save else None}

    def _after_change(self, touch: bool = True):
        if touch:
            self.save.touch()
        self._sync_level_state()
        self._auto_save()
        if self._on_state_update:
            self._on_state_update(self.get_full_state())

    def _auto_save(self):
        """Auto-save after state-changing operations."""
        if not self._data_dir:
            return
        try:
            os.makedirs(self._data_dir, exist_ok=True)
            filepath = os.path.join(self._data_dir, self._canonical_save_name())
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(state_to_json(self.save))
        except OSError as e:
            logger.warning(f"Auto-save failed: {e}")

    def _canonical_save_name(self) -> str:
        name = self.save.country.base_name or "nation"
        safe = "".join(c if c.isalnum() else "_" for c in name).strip("_").lower()
        return f"save_{safe or 'nation'}.json"

    def _log_action(self, action_type: str, detail: str):
        """Add an entry to the action log."""
        entry = {
            "type": action_type,
            "detail": detail,
            "timestamp": datetime.now().isoformat(),
            "tick": self.save.tick_count if self.save else 0,
        }
        self.action_log.append(entry)
        del self.action_log[:-ACTION_LOG_LIMIT]
        logger.debug(f"{action_type}: {detail}")
        if self._on_log_entry:
            self._on_log_entry(entry)


def _describe(args: tuple) -> str:
    return ", ".join(json.dumps(a, ensure_ascii=False, default=str) for a in args) or "ok"
