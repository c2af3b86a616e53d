"""
MicroEstado Engine v1.0 — MCP Server (Thin Bridge)
An MCP client connects to this via stdio. It bridges to the game server
HTTP API and renders results as plain text.

Tools:
  State inspection (read-only):
    get_game_state        — Compact indicator summary
    list_news             — Newest headlines
  Actions:
    advance_ticks         — Run N ticks
    resolve_event         — Answer the pending event (Level 1 or 2)
    enact_decree          — Level 2 decree, or activate a Level 1 slot
    central_bank_action   — RAISE_RATE / LOWER_RATE / INTERVENE
"""

import os
import json
import urllib.request
import urllib.error

from mcp.server.fastmcp import FastMCP

server = FastMCP("microestado-engine")

GAME_SERVER = f"http://localhost:{os.environ.get('MICROESTADO_PORT', '8000')}"


def _get(path: str) -> str:
    """HTTP GET to the game server. Returns response text."""
    try:
        url = f"{GAME_SERVER}{path}"
        req = urllib.request.Request(url)
        with urllib.request.urlopen(req, timeout=10) as resp:
            return resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        return e.read().decode("utf-8")
    except Exception as e:
        return json.dumps({"error": f"Game server unavailable: {e}"})


def _post(path: str, data: dict = None) -> str:
    """HTTP POST to the game server. Rejections come back as their JSON body."""
    try:
        url = f"{GAME_SERVER}{path}"
        body = json.dumps(data or {}).encode("utf-8")
        req = urllib.request.Request(url, data=body, method="POST")
        req.add_header("Content-Type", "application/json")
        with urllib.request.urlopen(req, timeout=30) as resp:
            return resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        return e.read().decode("utf-8")
    except Exception as e:
        return json.dumps({"error": f"Game server unavailable: {e}"})


def _outcome(result: str, success: str) -> str:
    data = json.loads(result)
    if data.get("error"):
        return f"Error: {data['error']}"
    return success.format(**data)


# ─────────────────────────────────────────────────────
# STATE INSPECTION (read-only)
# ─────────────────────────────────────────────────────

@server.tool()
def get_game_state() -> str:
    """
    Get a summary of the current nation.
    Shows level, tick, treasury, core indicators, alerts and pending events.
    """
    data = json.loads(_get("/api/state"))
    if "error" in data:
        return f"Error: {data['error']}"

    save = data["save"]
    derived = data.get("derived", {})
    lines = [
        f"NATION: {save['country']['formal_name']} — {derived.get('role_title', '?')} "
        f"{save['leader']['name']}",
        f"STATE: {data['level_state']} | LEVEL {save['level']} | PHASE {save['phase']} "
        f"| TICK {save['tick_count']}",
        f"TREASURY: {save['treasury']:.0f}   GDP: {save['gdp']:.0f} "
        f"({save['growth_pct']:+.1f}%)   DEBT: {save['debt']:.0f}",
        f"HAPPINESS {save['happiness']:.0f} | STABILITY {save['stability']:.0f} | "
        f"TRUST {save['institutional_trust']:.0f} | CORRUPTION {save['corruption']:.0f}",
        f"COUP RISK: {save['last_risk']:.0f}",
    ]

    alerts = {k: v for k, v in derived.get("alerts", {}).items() if v != "OK"}
    if alerts:
        lines.append("ALERTS: " + ", ".join(f"{k}={v}" for k, v in alerts.items()))

    if save.get("active_event_id"):
        lines.append(f"\nPENDING EVENT: {save['active_event_id']}")

    l2 = save.get("level2")
    if l2 and save["level"] == 2:
        macro = l2["macro"]
        lines.append(f"\nMACRO: inflation {macro['inflation_pct']:.2f}% ({macro['regime']}), "
                     f"L2 phase {l2['phase']}")
        pending = l2["events"].get("pending")
        if pending:
            lines.append(f"PENDING L2 EVENT [{pending['instance_id']}] {pending['title']}")
            for opt in pending["options"]:
                lines.append(f"  - {opt['option_id']}: {opt['label']}")

    if save.get("game_over"):
        lines.append(f"\nGAME OVER: {save.get('game_over_reason')}")
    return "\n".join(lines)


@server.tool()
def list_news(limit: int = 10) -> str:
    """List the newest headlines, newest first."""
    data = json.loads(_get("/api/state"))
    if "error" in data:
        return f"Error: {data['error']}"

    news = data["save"].get("news", [])[:max(1, limit)]
    if not news:
        return "No news yet."
    lines = [f"NEWS ({len(news)}):"]
    for n in news:
        lines.append(f"  [{n['type']}/{n['severity']}] {n['text']}")
    return "\n".join(lines)


# ─────────────────────────────────────────────────────
# ACTIONS
# ─────────────────────────────────────────────────────

@server.tool()
def advance_ticks(count: int = 1) -> str:
    """Advance the simulation by N ticks on whichever level is active."""
    return _outcome(_post("/api/tick", {"count": count}),
                    "Advanced {ticks} tick(s). Now at tick {tick_count}. Game over: {game_over}.")


@server.tool()
def resolve_event(event_id: str, option_id: str) -> str:
    """
    Answer the pending event. For Level 1 pass the event id; for Level 2
    pass the pending instance id shown by get_game_state.
    """
    if event_id.startswith("l2evt"):
        result = _post("/api/level2/events/resolve",
                       {"instance_id": event_id, "option_id": option_id})
        return _outcome(result, "Resolved. {outcome_summary}")
    result = _post("/api/events/resolve", {"event_id": event_id, "option_id": option_id})
    return _outcome(result, "Resolved {event_id} with {option_id}.")


@server.tool()
def enact_decree(decree_id: str = "", slot_id: int = 0) -> str:
    """
    Level 2: enact decree_id directly. Level 1: activate the decree loaded
    in slot_id (1 or 2).
    """
    if decree_id:
        return _outcome(_post("/api/level2/decrees", {"decree_id": decree_id}),
                        "Decree enacted: {summary}")
    return _outcome(_post("/api/decrees/activate", {"slot_id": slot_id}),
                    "Decree {decree_id} active until tick {active_until}.")


@server.tool()
def central_bank_action(action: str) -> str:
    """Central bank move: RAISE_RATE, LOWER_RATE or INTERVENE."""
    return _outcome(_post("/api/level2/central-bank", {"action": action.upper()}),
                    "Central bank: {action}. Next move from tick {cooldown_until_tick}.")


if __name__ == "__main__":
    server.run(transport="stdio")
