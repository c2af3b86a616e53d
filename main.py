"""
MicroEstado Engine v1.0 — Main Entry Point
Run ticks against the newest save without starting the server.

Usage:
    python main.py                       # Run 1 tick
    python main.py 30                    # Run 30 ticks
    python main.py --status              # Show current state
    python main.py --new "Aurelia" Ana   # Found a new nation
    python main.py --save                # Save state to JSON
"""

import sys
import logging

from game_loop import GameLoop


def _bar(value: float, top: float = 100, length: int = 20) -> str:
    filled = int(max(0, min(value, top)) / top * length) if top > 0 else 0
    return "█" * filled + "░" * (length - filled)


def show_status(game: GameLoop):
    """Print current nation status."""
    s = game.save
    state = game.get_full_state()
    derived = state["derived"]

    print(f"\n{'═'*60}")
    print(f"  MICROESTADO — {s.country.formal_name}")
    print(f"{'═'*60}")
    print(f"  {derived['role_title']}: {s.leader.name}")
    print(f"  Level {s.level} | Phase {s.phase} | Tick {s.tick_count}")
    print(f"  Treasury: {s.treasury:.0f}   GDP: {s.gdp:.0f} ({s.growth_pct:+.2f}%)")
    print(f"  Debt: {s.debt:.0f} (ratio {s.debt_ratio():.2f})   Tokens: {s.premium_tokens}")
    print(f"{'─'*60}")

    print(f"\n  INDICATORS:")
    for label, value in (("Happiness", s.happiness), ("Stability", s.stability),
                         ("Trust", s.institutional_trust), ("Corruption", s.corruption),
                         ("Employment", s.employment), ("Environment", s.environmental_impact)):
        print(f"  {label:<12} [{_bar(value)}] {value:5.1f}")
    print(f"  {'Resources':<12} [{_bar(s.resources, 200)}] {s.resources:5.1f}")
    print(f"  {'Coup risk':<12} [{_bar(s.last_risk)}] {s.last_risk:5.1f}")

    alerts = {k: v for k, v in derived["alerts"].items() if v != "OK"}
    if alerts:
        print(f"\n  ALERTS ({len(alerts)}):")
        for key, level in alerts.items():
            print(f"  {'🔴' if level == 'CRITICAL' else '🟡'} {key}")

    running = [pid for pid, p in s.projects.items() if p.status == "in_progress"]
    if running:
        print(f"\n  PROJECTS IN PROGRESS ({len(running)}):")
        for pid in running:
            print(f"  ⚙️  {pid}: {s.projects[pid].progress:.0f}%")

    if s.level2_active():
        macro = s.level2.macro
        print(f"\n  MACRO: inflation {macro.inflation_pct:.2f}% ({macro.regime}), "
              f"L2 phase {s.level2.phase}")

    print(f"\n  NEWS:")
    for n in s.news[:5]:
        print(f"  • {n.text}")

    if state["level_state"] == "game_over":
        reason = s.game_over_reason or (s.level2.game_over_reason if s.level2 else "")
        print(f"\n  GAME OVER: {reason}")
    print(f"\n{'═'*60}")


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = sys.argv[1:]

    game = GameLoop()
    game.init()

    if "--new" in args:
        idx = args.index("--new")
        country = args[idx + 1] if len(args) > idx + 1 else ""
        leader = args[idx + 2] if len(args) > idx + 2 else ""
        result = game.new_game({"base_name": country}, {"name": leader})
        if not result["ok"]:
            print(f"Error: {result['error']}")
            return
        print(f"Founded {result['formal_name']}.")
        show_status(game)
        return

    if game.save is None:
        print("No save found. Start one with: python main.py --new <country> <leader>")
        return

    if "--status" in args:
        show_status(game)
        return

    if "--save" in args:
        filename = game.save_game()
        print(f"State saved to {filename}")
        return

    # Determine number of ticks
    ticks = 1
    for arg in args:
        try:
            ticks = int(arg)
            break
        except ValueError:
            pass

    start = game.save.tick_count
    result = game.tick(ticks)
    if not result["ok"]:
        print(f"Error: {result['error']}")
        return

    print(f"\n{'═'*60}")
    print(f"  TICKS COMPLETE — {result['ticks']} tick(s) processed")
    print(f"  Tick {start} -> {result['tick_count']}")
    print(f"{'═'*60}")

    warnings = [w for log in game.last_tick_logs for w in log.get("warnings", [])]
    if warnings:
        print(f"\n  WARNINGS ({len(warnings)}):")
        for w in warnings[-10:]:
            print(f"  ⚠️  {w}")

    show_status(game)


if __name__ == "__main__":
    main()
