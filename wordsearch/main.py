"""
Command line entry point for playing word search puzzles.

Usage:
    python -m wordsearch.main
    python -m wordsearch.main config.yaml --category fruits --difficulty hard --solution
    python -m wordsearch.main --play --challenge --seed 7
"""

import argparse
import json
import logging
import random
import sys
import time
from pathlib import Path
from typing import Callable, Optional

import yaml

from .errors import EmptyWordSourceError
from .game import (
    CategorySource,
    GameConfig,
    GameTimer,
    RoundStateMachine,
    StorageService,
    WordFoundResult,
)
from .grid import parse_selection, render_grid


HELP_TEXT = """Commands:
  x,y x,y   select from one cell to another (x = column, y = row)
  hint      reveal where an unfound word is
  pause     pause the timer
  resume    resume the timer
  quit      leave the game"""


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def build_machine(config: GameConfig) -> RoundStateMachine:
    """Wire up a state machine and its collaborators from a config."""
    if config.categories_file:
        categories = CategorySource.from_yaml(config.categories_file)
    else:
        categories = CategorySource()

    storage = StorageService(namespace=config.namespace, path=config.storage_path)

    return RoundStateMachine(
        categories=categories,
        timer=GameTimer(),
        storage=storage,
        rng=random.Random(config.seed),
    )


def print_round(machine: RoundStateMachine, solution: bool = False) -> None:
    state = machine.get_state()
    print(f"Category: {CategorySource.display_name(state['category'])} ({state['difficulty']})")
    if state["challenge"]:
        challenge = state["challenge"]
        print(
            f"Challenge round {challenge['current_round']}/{challenge['total_rounds']}"
            f" - {challenge['cumulative_score']}/{challenge['target_score']} points"
        )
    print()
    print(render_grid(machine.grid))
    print()

    words = [f"[{w}]" if w in machine.found_words else w for w in machine.words]
    print(f"Words ({state['total_found']}/{state['total_words']}): {', '.join(words)}")

    if solution:
        cells = [cell for placement in machine.placement.placements for cell in placement.cells]
        print()
        print("Solution:")
        print(render_grid(machine.grid, highlight=cells))


def describe_result(result: WordFoundResult) -> str:
    if result.found:
        return f"Found {result.word}! +{result.points} points ({result.total_found}/{result.total_words})"
    if result.reason == "duplicate":
        return f"{result.word} was already found"
    if result.reason == "inactive":
        return "The round is not running"
    return "No word there"


def play(
    machine: RoundStateMachine,
    input_fn: Callable[[str], str] = input,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """
    Run an interactive round in the terminal.

    Wall-clock time between commands is fed to the round timer.

    Args:
        machine: State machine with an active round
        input_fn: Reads one command line
        clock: Monotonic clock in seconds

    Returns:
        True if the round was completed, False if the player quit
    """
    print(HELP_TEXT)
    print()
    last = clock()
    carry = 0.0

    while machine.is_active:
        try:
            command = input_fn("> ").strip()
        except EOFError:
            command = "quit"

        now = clock()
        carry += now - last
        last = now
        if carry >= 1:
            machine.tick(int(carry))
            carry -= int(carry)

        lowered = command.lower()
        if lowered in ("quit", "exit", "q"):
            machine.cancel()
            print("Round abandoned")
            return False
        if lowered == "hint":
            placement = machine.use_hint()
            if placement is None:
                print("No hint available")
            else:
                print(f"{placement.word} starts at {placement.start_col},{placement.start_row}")
            continue
        if lowered == "pause":
            print("Paused" if machine.pause() else "Nothing to pause")
            continue
        if lowered == "resume":
            print("Resumed" if machine.resume() else "Not paused")
            continue
        if lowered in ("", "help", "?"):
            print(HELP_TEXT)
            continue

        points, errors = parse_selection(command)
        if errors:
            for error in errors:
                print(f"Error: {error.message}")
            continue

        result = machine.submit_selection(points)
        print(describe_result(result))

    print()
    print(f"Round complete! Score: {machine.score} in {machine.timer.formatted_time}")
    if machine.last_summary is not None:
        if machine.last_summary.new_high_score:
            print("New high score!")
        for achievement in machine.last_summary.achievements:
            print(f"Achievement: {achievement.title} - {achievement.description}")
    return True


def save_state(machine: RoundStateMachine, path: str | Path) -> None:
    """Save the round state (and its placements) to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = machine.get_state()
    if machine.placement is not None:
        data["placement"] = machine.placement.model_dump()

    with open(path, 'w') as f:
        json.dump(data, f, indent=2, default=str)


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(
        description="Generate and play word search puzzles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  category: animals
  difficulty: medium
  seed: 42
  storage_path: ~/.wordsearch.json
  categories_file: my_categories.yaml
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (optional)"
    )
    parser.add_argument("--category", "-c", help="Category to draw words from")
    parser.add_argument(
        "--difficulty", "-d",
        choices=["baby", "easy", "medium", "hard"],
        help="Puzzle difficulty"
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible puzzle")
    parser.add_argument(
        "--solution",
        action="store_true",
        help="Also print where the words are hidden"
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play the puzzle interactively"
    )
    parser.add_argument(
        "--challenge",
        action="store_true",
        help="Play a ten-round challenge (implies --play)"
    )
    parser.add_argument(
        "--list-categories",
        action="store_true",
        help="List available categories and exit"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the puzzle state as JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else GameConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Command line flags override the config file
    overrides = {
        "category": args.category,
        "difficulty": args.difficulty,
        "seed": args.seed,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    if args.challenge:
        config.challenge = True
    if args.verbose:
        config.verbose = True
    if config.storage_path:
        config.storage_path = str(Path(config.storage_path).expanduser())

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        machine = build_machine(config)
    except Exception as e:
        print(f"Error loading categories: {e}", file=sys.stderr)
        return 1

    if args.list_categories:
        for name in machine.categories.category_names:
            print(f"{name:20} {CategorySource.display_name(name):22} {CategorySource.description(name)}")
        return 0

    try:
        if config.challenge:
            machine.start_challenge(config.category, config.difficulty)
        else:
            machine.start_round(config.category, config.difficulty)
    except EmptyWordSourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_round(machine, solution=args.solution)

    if args.play or config.challenge:
        try:
            while True:
                print()
                if not play(machine):
                    if config.challenge:
                        machine.exit_challenge()
                    break
                if machine.next_challenge_round() is None:
                    break
                print()
                print_round(machine, solution=args.solution)
        except KeyboardInterrupt:
            print("\nGame interrupted by user")
            if config.challenge:
                machine.exit_challenge()
            else:
                machine.cancel()

        challenge = machine.challenge.state
        if challenge.completed:
            print()
            print("=== Challenge Summary ===")
            print(f"Rounds: {', '.join(str(s) for s in challenge.round_scores)}")
            print(f"Total: {challenge.cumulative_score}/{challenge.target_score}")
            print("Challenge complete!" if challenge.success else "Target not reached")

    if args.output:
        save_state(machine, args.output)
        print(f"Puzzle saved to: {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
