"""N-Queens Puzzle Solver.

Places N queens on an N x N chess board so that no two queens attack each other, using
backtracking over the cells in row-major order.  Every placement and removal can be
recorded and replayed, so the search itself can be shown step by step rather than just its
result.
"""

import argparse
import sys
from collections.abc import Sequence

from .display import animate, clamp_size, print_board
from .solver import solver


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the N-Queens solver.

    Returns:
        0 if a solution was found, 1 if none exists, 2 if the board size is invalid.
    """
    parser = argparse.ArgumentParser(prog="nqueens", description="Backtracking N-Queens solver")
    parser.add_argument("n", type=int, nargs="?", default=4, help="Board size (default: 4)")
    parser.add_argument("--trace", action="store_true", help="Record every placement/removal")
    parser.add_argument(
        "--replay", action="store_true", help="Replay the search step by step (implies --trace)"
    )
    parser.add_argument("--delay", type=float, help="Seconds between replayed steps")
    parser.add_argument(
        "--no-clamp", action="store_true", help="Do not clamp N into the configured bounds"
    )
    parser.add_argument("--log-dir", type=str, help="Directory for the solve log")
    args = parser.parse_args(argv)

    n = args.n if args.no_clamp else clamp_size(args.n)
    if n != args.n:
        print(f"Board size {args.n} clamped to {n}.")

    try:
        result = solver.run(n, with_trace=args.trace or args.replay, log_dir=args.log_dir)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.replay and result.trace is not None:
        animate(result.trace, n, delay=args.delay)

    if result.board is None:
        print("No solution found.")
        return 1

    print("Solution found!")
    print_board(result.board)
    return 0
