"""
Deckbattle CLI - Command-line interface for the engine.

Usage:
    deckbattle stages                         Print the campaign map
    deckbattle validate                       Validate the built-in catalog
    deckbattle simulate [--policy greedy]     Auto-play a campaign with a bot
    deckbattle serve [--port 8000]            Run the HTTP API
"""

import argparse
import sys

from .config import configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Deckbattle - Turn-based card battle engine",
        prog="deckbattle",
    )
    parser.add_argument("--log-level", help="Loguru level (default from DECKBATTLE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Stages command
    subparsers.add_parser("stages", help="Print the campaign map")

    # Validate command
    subparsers.add_parser("validate", help="Validate the built-in catalog")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Auto-play a campaign")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument(
        "--policy", choices=["greedy", "first", "random"], default="greedy", help="Bot policy"
    )
    simulate_parser.add_argument("--max-battles", type=int, default=20, help="Battle limit")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "stages":
        cmd_stages(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_stages(args):
    """Print the campaign map."""
    from .games.dungeon import create_dungeon_catalog

    catalog = create_dungeon_catalog()
    for stage in catalog.stages.values():
        marker = "*" if stage.stage_id == catalog.first_stage else " "
        links = ", ".join(stage.next_stages) or "-"
        print(f"{marker} {stage.stage_id:>3}  {stage.name:<24} {stage.tier.value:<9} -> {links}")
        print(f"        enemies: {', '.join(stage.enemies)}")


def cmd_validate(args):
    """Validate the built-in catalog."""
    from .catalog import validate_catalog
    from .games.dungeon import create_dungeon_catalog

    catalog = create_dungeon_catalog(validate=False)
    result = validate_catalog(catalog)

    print(f"Cards: {len(catalog.cards)}")
    print(f"Enemies: {len(catalog.enemies)}")
    print(f"Stages: {len(catalog.stages)}")

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors:
            print(f"  - {e}")
        sys.exit(1)

    print("\nCatalog is valid")


def cmd_simulate(args):
    """Auto-play a campaign with a bot policy."""
    from .bots import POLICIES, RandomPolicy
    from .session import BattleLoop, SessionManager

    manager = SessionManager()
    session = manager.create_session(seed=args.seed)
    if args.policy == "random":
        policy = RandomPolicy(seed=args.seed)
    else:
        policy = POLICIES[args.policy]()

    print(f"Session {session.session_id} with {policy.get_name()}")
    result = BattleLoop(session, policy).run_campaign(max_battles=args.max_battles)

    for report in result.battles:
        outcome = {True: "won", False: "lost", None: "unfinished"}[report.victory]
        reward = f", took {report.reward_taken}" if report.reward_taken else ""
        print(
            f"  stage {report.stage_id:>3}: {outcome} in {report.turns} turns, "
            f"{report.health_after} health left{reward}"
        )

    print(f"\nResult: {result.loop_state.value}")
    print(f"Stages cleared: {', '.join(result.stages_cleared) or 'none'}")
    for e in result.errors:
        print(f"  - {e}")
    if not result.success:
        sys.exit(1)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("deckbattle.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
