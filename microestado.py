"""
MicroEstado Engine v1.0 — Server
Standalone game server. Serves the HTTP/WebSocket API and, unless told
otherwise, advances the loaded nation once every tickMs.

Run:  python microestado.py [--no-ticker]
Open: http://localhost:8000/api/state
"""

import os
import sys
import threading
import logging
import uvicorn

from web.routes import app, init_game, game, manager

ENGINE_DIR = os.path.dirname(os.path.abspath(__file__))
PORT = int(os.environ.get("MICROESTADO_PORT", "8000"))
DATA_DIR = os.environ.get("MICROESTADO_DATA_DIR") or os.path.join(ENGINE_DIR, "data")

logger = logging.getLogger("microestado.server")


def _ticker(stop: threading.Event):
    """Advance the live game every tickMs until stopped."""
    interval = game.config.economy.tick_ms / 1000
    while not stop.wait(interval):
        if game.save is None:
            continue
        result = game.tick(1)
        if result.get("ok"):
            manager.broadcast_sync("state_update", game.get_full_state())


def main():
    logging.basicConfig(
        level=os.environ.get("MICROESTADO_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize game state
    init_game(DATA_DIR)

    print("=" * 50)
    print("  MICROESTADO — Engine v1.0")
    print("=" * 50)
    print(f"  Server: http://localhost:{PORT}")
    print(f"  Data:   {DATA_DIR}")
    print(f"  Config: {game.config.version[:12]}")
    if game.save:
        print(f"  Nation: {game.save.country.formal_name} (tick {game.save.tick_count})")
    else:
        print("  Nation: none — POST /api/game/new to start")
    print("  Press Ctrl+C to stop.")
    print("=" * 50)
    print()

    stop = threading.Event()
    if "--no-ticker" not in sys.argv[1:]:
        threading.Thread(target=_ticker, args=(stop,), daemon=True).start()
        logger.info(f"Ticker running every {game.config.economy.tick_ms} ms")

    # Start server (blocking)
    try:
        uvicorn.run(app, host="0.0.0.0", port=PORT, log_level="warning")
    finally:
        stop.set()


if __name__ == "__main__":
    main()
