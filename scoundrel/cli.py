"""
Scoundrel CLI - Command-line interface for the engine.

Usage:
    scoundrel simulate [--seed N] [--policy click|random]   Play a game automatically
    scoundrel deck [--seed N]                               Print the shuffled dungeon
    scoundrel serve [--host H] [--port P]                   Run the REST API
"""

import argparse
import logging
import os
import sys

LOG_LEVEL = os.getenv("SCOUNDREL_LOG_LEVEL", "INFO")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scoundrel - Solitaire Dungeon Crawl Engine",
        prog="scoundrel",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a game automatically")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    simulate_parser.add_argument("--max-health", type=int, default=20, help="Starting health")
    simulate_parser.add_argument(
        "--policy", choices=["click", "random"], default="click", help="Bot policy"
    )
    simulate_parser.add_argument("--quiet", "-q", action="store_true", help="Only print the score")

    # Deck command
    deck_parser = subparsers.add_parser("deck", help="Print the shuffled dungeon")
    deck_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "simulate":
        return cmd_simulate(args)
    elif args.command == "deck":
        return cmd_deck(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args):
    """Play one game with a bot policy and print what happened."""
    from .bots import CardClickPolicy, RandomPolicy
    from .engine_core.action_generator import legal_actions
    from .engine_core.reducer import apply_action
    from .games.standard import setup_game

    try:
        state = setup_game(seed=args.seed, max_health=args.max_health)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    policy = RandomPolicy(seed=args.seed) if args.policy == "random" else CardClickPolicy()

    turn = 0
    while not state.game_over:
        turn += 1
        decision = policy.select_action(state, legal_actions(state))
        result = apply_action(state, decision.action)
        if not result.success:
            print(f"Error: {result.error}")
            sys.exit(1)
        state = result.new_state
        if not args.quiet:
            for change in result.state_changes:
                print(f"{turn:3d}. {change}  [health {state.health}/{state.max_health}]")

    outcome = "Survived" if state.survived else "Died"
    print(f"{outcome} after {turn} actions. Final score: {state.score}")


def cmd_deck(args):
    """Print the dungeon in draw order."""
    from .engine_core.cards import card_label
    from .games.standard import build_deck, shuffle_deck

    deck = shuffle_deck(build_deck(), args.seed)
    print(" ".join(card_label(card) for card in deck))
    print(f"{len(deck)} cards")


def cmd_serve(args):
    """Run the API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    uvicorn.run("scoundrel.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
