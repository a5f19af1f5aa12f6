"""
For God CLI - Command-line interface for the engine.

Usage:
    forgod simulate [--players CLASS ...] [--seed N] [--max-steps N]
    forgod board [--output FILE]
"""

import argparse
import dataclasses
import sys

from .config import EngineConfig, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="For God - Hex-grid tactical board game engine",
        prog="forgod",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run a bot game")
    simulate_parser.add_argument(
        "--players",
        nargs="+",
        default=["warrior", "rogue", "mage"],
        help="Hero classes, one per player",
    )
    simulate_parser.add_argument("--seed", type=int, help="Dice and bot seed")
    simulate_parser.add_argument("--max-steps", type=int, help="Step cap")

    # Board command
    board_parser = subparsers.add_parser("board", help="Dump the board as JSON")
    board_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    args = parser.parse_args(argv)

    config = EngineConfig.from_env()
    configure_logging(config.log_level)

    if args.command == "simulate":
        cmd_simulate(args, config)
    elif args.command == "board":
        cmd_board(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args, config: EngineConfig):
    """Run a RandomBot game and print the outcome."""
    from .engine_core.board import HeroClass
    from .engine_core.engine import PlayerSetup
    from .errors import GameSetupError
    from .simulation import Simulation

    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.max_steps is not None:
        overrides["max_steps"] = args.max_steps
    config = dataclasses.replace(config, **overrides)

    try:
        roster = [
            PlayerSetup(f"p{i + 1}", f"{cls.capitalize()} {i + 1}", HeroClass(cls))
            for i, cls in enumerate(args.players)
        ]
    except ValueError:
        print(f"Error: hero classes must be one of {', '.join(c.value for c in HeroClass)}")
        sys.exit(1)

    try:
        result = Simulation.from_config(config).run(roster)
    except GameSetupError as e:
        print(f"Error: {e}")
        sys.exit(1)

    state = result.final_state
    print(f"Game: {state.game_id}")
    print(f"Steps: {result.steps}  Rounds: {result.rounds}")
    if result.finished:
        winner = state.get_player(result.winner_id)
        print(f"Winner: {winner.name if winner else result.winner_id} ({result.victory_type})")
    else:
        print("No winner before the step cap")

    print("\nHeroes:")
    for p in state.players:
        status = "dead" if p.is_dead else p.state.value
        print(
            f"  - {p.name}: level {p.level}, {p.health}/{p.max_health} hp, {status}, "
            f"faith {p.faith_score}, devil {p.devil_score}"
        )

    if result.rejected_actions:
        print(f"\nRejected bot actions: {result.rejected_actions}")


def cmd_board(args):
    """Dump the board snapshot JSON."""
    from .api.schemas import BoardSnapshot
    from .engine_core.definitions.board import GAME_BOARD

    text = BoardSnapshot.from_board(GAME_BOARD).model_dump_json(indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {len(GAME_BOARD)} tiles to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
