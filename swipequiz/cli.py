"""
Swipe Quiz CLI - Command-line interface.

Usage:
    swipequiz play [--catalogue FILE] [--seed N]   Play a session in the terminal
    swipequiz validate <catalogue_file>            Validate a catalogue file
    swipequiz serve [--host H] [--port P]          Run the HTTP API
"""

import argparse
import asyncio
import logging
import sys

from .engine_core.state import DirectionType
from .session import GameSessionController, Navigator
from .store import CatalogueError, InMemoryGameStore, default_games, load_catalogue

_KEYS = {
    "l": DirectionType.LEFT,
    "left": DirectionType.LEFT,
    "r": DirectionType.RIGHT,
    "right": DirectionType.RIGHT,
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Swipe Quiz - swipe-based matching quiz",
        prog="swipequiz",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play a session in the terminal")
    play_parser.add_argument("--catalogue", "-c", help="Catalogue JSON file")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    validate_parser = subparsers.add_parser("validate", help="Validate a catalogue file")
    validate_parser.add_argument("catalogue_file", help="Path to catalogue JSON")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        sys.exit(cmd_play(args))
    elif args.command == "validate":
        sys.exit(cmd_validate(args))
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_validate(args) -> int:
    """Validate a catalogue file."""
    try:
        games = load_catalogue(args.catalogue_file)
    except CatalogueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Catalogue OK: {len(games)} game(s)")
    for game in games:
        print(f"  - {game.title} ({game.deck_size} cards)")
    return 0


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "swipequiz.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
    )


def cmd_play(args) -> int:
    """Play one session in the terminal."""
    try:
        games = load_catalogue(args.catalogue) if args.catalogue else default_games()
    except CatalogueError as e:
        print(f"Error: {e}")
        return 1

    store = InMemoryGameStore(games=games, seed=args.seed)
    return asyncio.run(_play(store))


class _TerminalNavigator(Navigator):
    def __init__(self):
        self.reached = asyncio.Event()

    def go_to_result_screen(self) -> None:
        self.reached.set()


async def _play(store: InMemoryGameStore) -> int:
    navigator = _TerminalNavigator()
    controller = GameSessionController(store=store, navigator=navigator)
    loop = asyncio.get_running_loop()

    try:
        await controller.wait_idle()
        game = controller.state.game
        if game is None:
            print(f"Could not start a game: {controller.last_error}")
            return 1

        print(f"\n{game.title}")
        print(f"  [l] {game.left_show.title or game.left_show.id}")
        print(f"  [r] {game.right_show.title or game.right_show.id}\n")

        while controller.cursor < game.deck_size:
            card = game.cards[controller.cursor]
            prompt = f"({controller.cursor + 1}/{game.deck_size}) {card.character} [l/r/q]: "
            # Input blocks, so read it on a worker thread and swipe back on the loop
            choice = (await loop.run_in_executor(None, input, prompt)).strip().lower()
            if choice in ("q", "quit"):
                print("Session abandoned.")
                return 1
            direction = _KEYS.get(choice)
            if direction is None:
                print("  Swipe with 'l' or 'r'.")
                continue
            controller.swiped_next(direction)

        await controller.wait_idle()
        if not navigator.reached.is_set():
            print(f"Could not store the result: {controller.last_error}")
            return 1

        _print_result(store)
        return 0
    except EOFError:
        print("\nSession abandoned.")
        return 1
    finally:
        controller.dispose()


def _print_result(store: InMemoryGameStore):
    result = store.last_result
    print(f"\n{result.title}: {result.earned_points}/{result.total_points}\n")
    for answer in result.answers:
        mark = "+" if answer.is_right_answer else "-"
        print(f"  {mark} {answer.character}: {answer.right_show.title or answer.right_show.id}")


if __name__ == "__main__":
    main()
