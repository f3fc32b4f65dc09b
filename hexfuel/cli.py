"""
Hexfuel CLI - Command-line interface for the game.

Usage:
    hexfuel play [--seed N] [--ai-delay S] [-v]    Play against the AI in the terminal
    hexfuel serve [--host H] [--port P] [-v]       Run the HTTP API
"""

import argparse
import logging
import sys
import time

from .config import DEFAULT_AI_DELAY, default_seed
from .engine_core import CubeCoord, Occupant, Side
from .session import GameLoop

QUIT_WORDS = ("quit", "exit")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Hexfuel - hex grid fuel duel against a heuristic AI",
        prog="hexfuel",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", help="Log engine activity")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", parents=[common], help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible board")
    play_parser.add_argument(
        "--ai-delay",
        type=float,
        default=DEFAULT_AI_DELAY,
        help="Seconds to wait before the AI moves",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", parents=[common], help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args):
    """Interactive game against the AI."""
    seed = args.seed if args.seed is not None else default_seed()
    loop = GameLoop(seed=seed, auto_play_ai=False)

    print("Hexfuel - reach the end with more fuel than the computer.")
    print("Enter moves as 'q r s' (or 'q r'). Type 'quit' to leave.\n")

    while True:
        if not play_game(loop, ai_delay=args.ai_delay):
            print("Bye.")
            return
        if not ask_yes_no("Would you like to play again? [y/N] "):
            return
        loop.restart()


def cmd_serve(args):
    """Run the API under uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is not installed. Install with: pip install hexfuel[server]")
        sys.exit(1)

    uvicorn.run("hexfuel.api.app:app", host=args.host, port=args.port)


def play_game(loop: GameLoop, ai_delay: float = DEFAULT_AI_DELAY, input_fn=input) -> bool:
    """
    Run one game to the end.

    Returns False if the player quit before the game was over.
    """
    while not loop.state.is_over:
        print(render_board(loop))
        print(status_line(loop))

        if loop.state.turn is Side.AI:
            print("Computer is thinking...")
            time.sleep(ai_delay)
            result = loop.play_ai_turn()
            for move in result.moves:
                print(move.describe())
            continue

        print("Legal moves: " + format_moves(loop))
        try:
            text = input_fn("Your move: ").strip()
        except EOFError:
            return False

        if text.lower() in QUIT_WORDS:
            return False

        coord = parse_coords(text)
        if coord is None:
            print("Enter a cell as three numbers 'q r s' summing to 0, or two numbers 'q r'.")
            continue

        result = loop.request_move(Side.HUMAN, coord)
        if not result.success:
            print(f"Invalid move: {result.errors[0]}")
            continue
        for move in result.moves:
            print(move.describe())

    print(render_board(loop))
    print(loop.state.outcome.message)
    return True


def parse_coords(text: str):
    """Parse 'q r s', 'q r' or 'q,r,s'. Returns None if the text is not a cube coordinate."""
    parts = text.replace(",", " ").split()
    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        return None

    if len(numbers) == 2:
        return CubeCoord.from_axial(*numbers)
    if len(numbers) == 3:
        try:
            return CubeCoord(*numbers)
        except ValueError:
            return None
    return None


def ask_yes_no(prompt: str, input_fn=input) -> bool:
    try:
        answer = input_fn(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def status_line(loop: GameLoop) -> str:
    state = loop.state
    turn = "your turn" if state.turn is Side.HUMAN else "computer's turn"
    return (
        f"Fuel - you: {state.human.fuel}  computer: {state.ai.fuel}  "
        f"| cells left: {state.board.active_count()} | {turn}"
    )


def format_moves(loop: GameLoop) -> str:
    moves = loop.legal_moves(Side.HUMAN)
    if not moves:
        return "none"
    return ", ".join(f"{cell.coord} {cell.value:+d}" for cell in moves)


def render_board(loop: GameLoop) -> str:
    """
    Text picture of the board, one row per r.

    H and A are the movers, '.' a destroyed cell, numbers are platform values.
    """
    board = loop.state.board
    rows = []
    for r in range(-board.radius, board.radius + 1):
        row_cells = sorted((cell for cell in board if cell.r == r), key=lambda cell: cell.q)
        labels = []
        for cell in row_cells:
            if cell.occupied is Occupant.HUMAN:
                labels.append("  H")
            elif cell.occupied is Occupant.AI:
                labels.append("  A")
            elif not cell.active:
                labels.append("  .")
            else:
                labels.append(f"{cell.value:+3d}")
        rows.append("  " * abs(r) + " ".join(labels))
    return "\n".join(rows)


if __name__ == "__main__":
    main()
