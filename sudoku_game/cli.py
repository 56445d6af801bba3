"""Command-line interface for the Sudoku game."""

import argparse
import json
import logging
import os
import sys

from tqdm import tqdm

from .config import load_config
from .core.board import format_grid
from .errors import CellLocked, GameOver, InvalidDifficulty, OutOfRangeMutation, SudokuError
from .game import DEFAULT_USER, GameSession
from .generator import Difficulty, PuzzleGenerator
from .remote import LocalPuzzleService, RemotePuzzleService, run_server
from .results import ResultLog, StatsVisualizer, summarize

PLAY_HELP = """Moves:
  <box> <cell> <value>   write value (1-9, 0 clears) into cell 0-8 of box 0-8
  check                  list rows, columns and boxes with repeated digits
  solve                  give up and show the solution
  quit                   leave the game (counts as a fail)
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sudoku Puzzle Server & Game Client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the puzzle server
  python -m sudoku_game.cli serve --port 5099

  # Play a medium game against the server
  python -m sudoku_game.cli play --difficulty medium --username alice

  # Generate 5 hard puzzles into a JSON file
  python -m sudoku_game.cli generate --count 5 --difficulty hard -o puzzles.json
        """
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON config file (default: sudoku_game.json if present)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "all"],
        default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--cells", type=int, default=None,
        help="Blank exactly this many cells (0-81) instead of a difficulty tier"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--legacy-masking", action="store_true",
        help="Allow a cell to be picked twice when blanking (may leave fewer blanks)"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the puzzle server")
    serve_parser.add_argument("--host", type=str, default=None, help="Interface to bind")
    serve_parser.add_argument("--port", "-p", type=int, default=None, help="Port to listen on")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument(
        "--username", "-u", type=str, default=DEFAULT_USER,
        help=f"Player name written to the result log (default: {DEFAULT_USER})"
    )
    play_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard"],
        default="easy",
        help="Difficulty level (default: easy)"
    )
    play_parser.add_argument("--server", type=str, default=None, help="Puzzle server URL")
    play_parser.add_argument(
        "--local", action="store_true",
        help="Generate the puzzle in-process instead of asking a server"
    )
    play_parser.add_argument("--results", type=str, default=None, help="Result log file")

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Summarize the result log")
    stats_parser.add_argument("--results", type=str, default=None, help="Result log file")
    stats_parser.add_argument("--username", "-u", type=str, default=None, help="Only this player")
    stats_parser.add_argument(
        "--chart", type=str, default=None,
        help="Directory to save an outcomes chart to"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)

    if args.command == "generate":
        cmd_generate(args, config)
    elif args.command == "serve":
        cmd_serve(args, config)
    elif args.command == "play":
        cmd_play(args, config)
    elif args.command == "stats":
        cmd_stats(args, config)


def cmd_generate(args, config):
    """Handle the generate command."""
    generator = PuzzleGenerator(
        seed=args.seed,
        distinct=config.distinct_masking and not args.legacy_masking,
    )

    if args.cells is not None:
        batches = [(f"{args.cells}_cells", args.cells)]
    elif args.difficulty == "all":
        batches = [(d.value, d) for d in Difficulty]
    else:
        batches = [(args.difficulty, Difficulty(args.difficulty))]

    all_puzzles = []
    for label, difficulty in batches:
        print(f"\nGenerating {args.count} {label} puzzles...")
        try:
            puzzles = [generator.generate(difficulty) for _ in tqdm(range(args.count), desc=label)]
        except InvalidDifficulty as e:
            print(f"Error: {e}")
            sys.exit(1)

        for i, puzzle in enumerate(puzzles, 1):
            all_puzzles.append({"label": label, "index": i, **puzzle.to_dict()})

            print(f"\n--- {label.capitalize()} Puzzle {i} ({puzzle.count_empty()} empty) ---")
            print(puzzle)

        if not args.output:
            folder = os.path.join("puzzles", label)
            PuzzleGenerator.save_to_folder(puzzles, folder, prefix=f"puzzle_{label}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")
    else:
        print("\nPuzzles saved individually in the 'puzzles/' directory")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_serve(args, config):
    """Handle the serve command."""
    config = config.override(host=args.host, port=args.port)
    print(f"Serving puzzles on http://{config.host}:{config.port}")
    run_server(config.host, config.port)


def cmd_play(args, config):
    """Handle the play command."""
    config = config.override(server_url=args.server, results_file=args.results)

    if args.local:
        service = LocalPuzzleService(PuzzleGenerator(distinct=config.distinct_masking))
    else:
        service = RemotePuzzleService(config.server_url, timeout=config.timeout_seconds)

    with service:
        session = GameSession(
            service,
            username=args.username,
            difficulty=Difficulty(args.difficulty),
            result_log=ResultLog(config.results_file),
        )

        try:
            session.start()
        except SudokuError as e:
            print("Something went wrong. Please, try again later.")
            print(f"  ({e})")
            sys.exit(1)

        print(PLAY_HELP)
        try:
            play_loop(session)
        finally:
            session.close()


def play_loop(session: GameSession, read=input) -> None:
    """Read moves until the game ends or the player quits."""
    while not session.finished:
        print(session.puzzle)
        print(f"Time: {session.elapsed_seconds:.0f}s")
        try:
            line = read("> ").strip().lower()
        except EOFError:
            return

        if line in ("quit", "exit"):
            return
        if line == "solve":
            session.give_up()
            print("Solution:")
            print(format_grid(session.puzzle.solution))
            return
        if line == "check":
            conflicts = session.conflicts()
            if not conflicts:
                print("No repeated digits so far.")
            for kind, index in conflicts:
                print(f"  repeated digit in {kind} {index}")
            continue

        parts = line.split()
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            print(PLAY_HELP)
            continue

        box, cell, value = (int(p) for p in parts)
        try:
            won = session.place(box, cell, value)
        except (CellLocked, OutOfRangeMutation, GameOver) as e:
            print(f"Invalid move: {e}")
            continue

        if won:
            print(session.puzzle)
            print(f"Congratulations! Solved in {session.elapsed_seconds:.0f}s")


def cmd_stats(args, config):
    """Handle the stats command."""
    config = config.override(results_file=args.results)
    try:
        records = ResultLog(config.results_file).read()
    except ValueError as e:
        print(f"Error reading result log: {e}")
        sys.exit(1)

    summary = summarize(records, username=args.username)
    who = args.username or "all players"
    print(f"Results for {who} ({config.results_file}):")
    print("-" * 50)
    for difficulty, stats in summary.items():
        print(f"{difficulty.capitalize():<8} {stats['wins']:>4} won {stats['fails']:>4} failed "
              f"  win rate {stats['win_rate']:.1f}%")

    if args.chart:
        selected = [r for r in records if args.username is None or r.username == args.username]
        path = StatsVisualizer(selected, args.chart).plot_outcomes_by_difficulty()
        print(f"\nChart saved to {path}")


if __name__ == "__main__":
    main()
