"""Terminal presentation of boards and step traces."""

import sys
from collections.abc import Sequence
from time import sleep
from typing import TextIO

from nqueens.board import Board
from nqueens.solver.config import config as solver_config
from nqueens.trace import StepEvent, replay

QUEEN = "♕"
EMPTY = "□"


def render(board: Board) -> str:
    """Render the board with one line per row, cells separated by spaces."""
    lines = []
    for row in range(board.size):
        lines.append(" ".join(QUEEN if board[row, col] else EMPTY for col in range(board.size)))
    return "\n".join(lines)


def print_board(board: Board, *, file: TextIO | None = None) -> None:
    """Print the board to the console (or `file`)."""
    print(render(board), file=file or sys.stdout, flush=True)


def clamp_size(n: int, *, lower: int | None = None, upper: int | None = None) -> int:
    """Clamp a requested board size into the configured bounds.

    Args:
        n: Requested board size.
        lower: Smallest allowed size.  Defaults to the configured `min_board_size`.
        upper: Largest allowed size.  Defaults to the configured `max_board_size`.
    """
    lower = solver_config.min_board_size if lower is None else lower
    upper = solver_config.max_board_size if upper is None else upper
    return max(lower, min(n, upper))


def animate(
    trace: Sequence[StepEvent],
    size: int,
    *,
    delay: float | None = None,
    out: TextIO | None = None,
) -> Board:
    """Replay a trace step by step, printing the board after every step.

    Args:
        trace: Step events recorded by the solver.
        size: Size of the board the trace was recorded on.
        delay: Seconds to wait after each step.  Defaults to the configured `step_delay`.
        out: Stream to print to.  Defaults to stdout.

    Returns:
        The board after the last step.
    """
    delay = solver_config.step_delay if delay is None else delay
    out = out or sys.stdout

    board = Board(size)
    total = len(trace)
    for step, (event, board) in enumerate(replay(trace, size), start=1):
        print(f"Step {step}/{total}: {event}", file=out)
        print(render(board), file=out)
        print("", file=out, flush=True)
        if delay > 0:
            sleep(delay)
    return board
