"""
MicroEstado Engine v1.0 — FastAPI Routes
Player-facing endpoints. Every action goes through the GameLoop; failed
results come back with their own status as the HTTP code.
"""

import json
import logging
from fastapi import FastAPI, WebSocket, WebSocketDisconnect, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional

from game_loop import GameLoop
from web.websocket import ConnectionManager

logger = logging.getLogger("microestado.routes")


# ─────────────────────────────────────────────────────
# APP SETUP
# ─────────────────────────────────────────────────────

app = FastAPI(title="MicroEstado Engine", version="1.0")
manager = ConnectionManager()
game = GameLoop()


def init_game(data_dir: str = None, config_path: str = None):
    """Initialize the game loop. Called from microestado.py."""
    game.init(data_dir, config_path)

    # Wire up WebSocket callbacks
    def on_level_change(level_state, data):
        manager.broadcast_sync("level_change", data)

    def on_log_entry(entry):
        manager.broadcast_sync("log_entry", entry)

    game._on_level_change = on_level_change
    game._on_log_entry = on_log_entry


async def _respond(result: dict) -> JSONResponse:
    """Broadcast the new state after a successful action, then reply."""
    if result.get("ok", result.get("success")):
        await manager.broadcast("state_update", game.get_full_state())
        return JSONResponse(result)
    return JSONResponse(result, status_code=result.get("status", 400))


# ─────────────────────────────────────────────────────
# WEBSOCKET
# ─────────────────────────────────────────────────────

@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    try:
        # Send initial state on connect
        state_data = game.get_full_state()
        await ws.send_text(json.dumps({"event": "state_update", "data": state_data},
                                      default=str))

        # Keep connection alive; clients only send pings
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(ws)
    except Exception as e:
        logger.debug(f"WebSocket closed: {e}")
        manager.disconnect(ws)


# ─────────────────────────────────────────────────────
# STATE & LIFECYCLE
# ─────────────────────────────────────────────────────

@app.get("/api/state")
async def get_state():
    """Full game state for UI rendering."""
    return JSONResponse(game.get_full_state())


class NewGameRequest(BaseModel):
    country: dict
    leader: dict
    preset_id: str = "BALANCED"
    role_id: Optional[str] = None


@app.post("/api/game/new")
async def new_game(req: NewGameRequest):
    return await _respond(game.new_game(req.country, req.leader, req.preset_id, req.role_id))


class TickRequest(BaseModel):
    count: int = 1
    suppress_events: bool = False


@app.post("/api/tick")
async def tick(req: TickRequest):
    """Advance N ticks on the active level."""
    return await _respond(game.tick(req.count, req.suppress_events))


# ─────────────────────────────────────────────────────
# POLICY
# ─────────────────────────────────────────────────────

class BudgetRequest(BaseModel):
    key: str
    value: float


@app.post("/api/budget")
async def set_budget(req: BudgetRequest):
    return await _respond(game.set_budget(req.key, req.value))


@app.post("/api/budget/auto")
async def auto_balance():
    return await _respond(game.auto_balance())


class TaxRequest(BaseModel):
    level: Optional[str] = None
    rate_pct: Optional[float] = None


@app.post("/api/tax")
async def set_tax(req: TaxRequest):
    return await _respond(game.set_tax(req.level, req.rate_pct))


class IndustryRequest(BaseModel):
    industry_id: str


@app.post("/api/industry/leader")
async def set_industry_leader(req: IndustryRequest):
    return await _respond(game.set_industry_leader(req.industry_id))


@app.post("/api/industry/diversify")
async def diversify_industry(req: IndustryRequest):
    return await _respond(game.diversify_industry(req.industry_id))


@app.post("/api/plan-anticrisis")
async def plan_anticrisis():
    """Emergency package, once unlocked by an empty treasury."""
    return await _respond(game.activate_plan())


# ─────────────────────────────────────────────────────
# PROJECTS, EVENTS, DECREES
# ─────────────────────────────────────────────────────

class ProjectRequest(BaseModel):
    project_id: str


@app.post("/api/projects/start")
async def start_project(req: ProjectRequest):
    return await _respond(game.start_project(req.project_id))


@app.post("/api/projects/boost")
async def boost_project(req: ProjectRequest):
    return await _respond(game.boost_project(req.project_id))


class EventResolveRequest(BaseModel):
    event_id: str
    option_id: str


@app.post("/api/events/resolve")
async def resolve_event(req: EventResolveRequest):
    return await _respond(game.resolve_event(req.event_id, req.option_id))


@app.post("/api/events/mitigate")
async def mitigate_event():
    return await _respond(game.mitigate_event())


@app.post("/api/events/dismiss")
async def dismiss_event():
    return await _respond(game.dismiss_event())


class DecreeSlotRequest(BaseModel):
    slot_id: int
    decree_id: Optional[str] = None


@app.post("/api/decrees/slot")
async def set_decree_slot(req: DecreeSlotRequest):
    return await _respond(game.set_decree_slot(req.slot_id, req.decree_id))


class DecreeActivateRequest(BaseModel):
    slot_id: int


@app.post("/api/decrees/activate")
async def activate_decree(req: DecreeActivateRequest):
    return await _respond(game.activate_decree(req.slot_id))


# ─────────────────────────────────────────────────────
# LEVEL 2
# ─────────────────────────────────────────────────────

@app.post("/api/level2/continue")
async def continue_to_level2():
    return await _respond(game.continue_to_level2())


@app.post("/api/level2/tick")
async def level2_tick(req: TickRequest):
    """Same as /api/tick; kept as its own path for the Level 2 screen."""
    return await _respond(game.tick(req.count, req.suppress_events))


@app.post("/api/level2/base-industry")
async def set_level2_base_industry(req: IndustryRequest):
    return await _respond(game.set_level2_base_industry(req.industry_id))


@app.post("/api/level2/industry")
async def activate_level2_industry(req: IndustryRequest):
    return await _respond(game.activate_level2_industry(req.industry_id))


class AdvisorsRequest(BaseModel):
    advisor_ids: list[str]


@app.post("/api/level2/advisors")
async def set_level2_advisors(req: AdvisorsRequest):
    return await _respond(game.set_level2_advisors(req.advisor_ids))


@app.post("/api/level2/project")
async def start_level2_project(req: ProjectRequest):
    return await _respond(game.start_level2_project(req.project_id))


class CentralBankRequest(BaseModel):
    action: str  # RAISE_RATE, LOWER_RATE or INTERVENE


@app.post("/api/level2/central-bank")
async def central_bank(req: CentralBankRequest):
    return await _respond(game.central_bank_action(req.action))


@app.post("/api/level2/elections")
async def run_election():
    return await _respond(game.run_election())


class Level2DecreeRequest(BaseModel):
    decree_id: str


@app.post("/api/level2/decrees")
async def enact_level2_decree(req: Level2DecreeRequest):
    return await _respond(game.enact_level2_decree(req.decree_id))


class Level2EventResolveRequest(BaseModel):
    instance_id: str
    option_id: str


@app.post("/api/level2/events/resolve")
async def resolve_level2_event(req: Level2EventResolveRequest):
    return await _respond(game.resolve_level2_event(req.instance_id, req.option_id))


# ─────────────────────────────────────────────────────
# TOKENS
# ─────────────────────────────────────────────────────

_TOKEN_ACTIONS = {
    "carbon-credits": "purchase_carbon_credits",
    "buy-token": "purchase_token",
    "rescue-treasury": "rescue_treasury",
    "offline-cap": "boost_offline_cap",
    "auto-balance": "unlock_auto_balance",
    "report-clarity": "unlock_report_clarity",
}


@app.post("/api/tokens/{action}")
async def token_action(action: str):
    method = _TOKEN_ACTIONS.get(action)
    if method is None:
        return JSONResponse({"ok": False, "status": 404, "error": f"Unknown action: {action}"},
                            status_code=404)
    return await _respond(getattr(game, method)())


@app.post("/api/remote-config")
async def set_remote_config(request: Request):
    """Replace the save's remote-config overrides with the JSON body."""
    try:
        body = await request.json()
    except ValueError:
        return await _respond({"ok": False, "status": 400, "error": "Invalid JSON body"})
    if not isinstance(body, dict):
        return JSONResponse({"ok": False, "status": 400, "error": "Expected a JSON object"},
                            status_code=400)
    return await _respond(game.set_remote_config_overrides(body))


# ─────────────────────────────────────────────────────
# SAVE / LOAD / SYNC
# ─────────────────────────────────────────────────────

@app.post("/api/save")
async def save_game():
    """Save current game state."""
    if game.save is None:
        return JSONResponse({"success": False, "error": "No game loaded"}, status_code=400)
    filename = game.save_game()
    return JSONResponse({"success": True, "filename": filename})


class LoadRequest(BaseModel):
    filename: str


@app.post("/api/load")
async def load_game(req: LoadRequest):
    """Load a save file."""
    result = game.load_game(req.filename)
    if result.get("success"):
        await manager.broadcast("state_update", game.get_full_state())
        return JSONResponse(result)
    return JSONResponse(result, status_code=404)


@app.get("/api/saves")
async def list_saves():
    """List available save files."""
    return JSONResponse({"saves": game.list_saves()})


@app.post("/api/sync")
async def sync(request: Request):
    """Merge a snapshot pushed by another device. Newer updated_at wins."""
    try:
        body = await request.json()
    except ValueError:
        return await _respond({"ok": False, "status": 400, "error": "Invalid JSON body"})
    result = game.sync(body)
    if result.get("success"):
        if result.get("source") == "remote":
            await manager.broadcast("state_update", game.get_full_state())
        return JSONResponse(result)
    return JSONResponse(result, status_code=400)
