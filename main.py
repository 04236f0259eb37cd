#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}]
    python main.py play --width W --height H --mines M
    python main.py simulate [--games N] [--seed S]
"""
import argparse
import logging

import numpy as np

from src.minesweep import (
    Difficulty,
    FlagToggleResult,
    Game,
    GameConfig,
    GameState,
    HighScoreTable,
    MinesweeperEnv,
    StepResult,
    render_with_axes,
)

HELP_TEXT = (
    "Commands: s X Y (step), f X Y (flag), a X Y (auto step), "
    "r (reset), q (quit)"
)


def build_config(args: argparse.Namespace) -> GameConfig:
    """Resolve CLI options into a game configuration."""
    custom = (args.width, args.height, args.mines)
    if any(value is not None for value in custom):
        base = Difficulty[args.difficulty.upper()].config
        return GameConfig(
            width=args.width if args.width is not None else base.width,
            height=args.height if args.height is not None else base.height,
            mines=args.mines if args.mines is not None else base.mines,
        )
    return Difficulty[args.difficulty.upper()].config


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    try:
        config = build_config(args)
    except ValueError as error:
        print(f"Invalid configuration: {error}")
        return

    game = Game(config)
    high_scores = HighScoreTable()

    print(f"Difficulty: {game.difficulty}")
    print(HELP_TEXT)

    while True:
        print()
        print(render_with_axes(game.field, reveal_mines=game.is_over))
        print(
            f"Flags: {game.remaining_flags} | "
            f"Time: {int(game.elapsed_seconds)}s | "
            f"State: {game.state.name}"
        )

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        parts = line.split()
        command = parts[0]
        if command == "q":
            break
        if command == "r":
            game.reset()
            continue
        if command not in ("s", "f", "a") or len(parts) != 3:
            print(HELP_TEXT)
            continue

        try:
            x, y = int(parts[1]), int(parts[2])
        except ValueError:
            print("Coordinates must be integers")
            continue

        if command == "s":
            result = game.step(x, y)
        elif command == "a":
            result = game.auto_step(x, y)
        else:
            result = game.toggle_flag(x, y)

        if result in (StepResult.INVALID, FlagToggleResult.NONE):
            print("Nothing happened")

        if game.state == GameState.LOST:
            print(render_with_axes(game.field, reveal_mines=True))
            print("*** BOOM! ***")
        elif game.state == GameState.WON:
            print(f"*** CLEARED in {int(game.elapsed_seconds)}s! ***")
            if game.difficulty.is_ranked:
                name = input("Name for the high score table: ").strip()
                rank = game.record_win(high_scores, name or "anonymous")
                if rank is not None:
                    print(f"New high score at rank {rank + 1}")
                for index, score in enumerate(
                    high_scores.scores(game.difficulty)
                ):
                    print(f"  {index + 1}. {score.name:<20} {score.seconds}s")


def simulate(args: argparse.Namespace) -> None:
    """Play random masked actions and report statistics."""
    if args.games < 1:
        print("Number of games must be positive")
        return
    try:
        config = build_config(args)
    except ValueError as error:
        print(f"Invalid configuration: {error}")
        return
    env = MinesweeperEnv(config=config)

    print(f"Simulating {args.games} random games on {Difficulty.from_config(config)}...")

    wins = 0
    total_steps = 0
    total_revealed = 0

    obs, info = env.reset(seed=args.seed)
    env.action_space.seed(args.seed)

    for game_index in range(args.games):
        if game_index > 0:
            obs, info = env.reset()
        done = False

        while not done:
            mask = env.get_action_mask()
            if not np.any(mask):
                break
            action = env.action_space.sample(mask=mask)
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info["game_state"] == GameState.WON.name:
            wins += 1
        total_steps += info["steps"]
        total_revealed += info["revealed"]

    print(f"Results over {args.games} games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} spots")


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Field configuration options shared by all commands."""
    parser.add_argument(
        "--difficulty",
        choices=["easy", "medium", "hard"],
        default="easy",
        help="Preset difficulty",
    )
    parser.add_argument("--width", type=int, help="Custom field width")
    parser.add_argument("--height", type=int, help="Custom field height")
    parser.add_argument("--mines", type=int, help="Custom mine count")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal or simulate games"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_config_arguments(play_parser)

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games"
    )
    add_config_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
