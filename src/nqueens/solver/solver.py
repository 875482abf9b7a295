"""Main solver module for the N-Queens problem."""

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from numbers import Integral
from pathlib import Path
from pprint import pprint
from time import time
from typing import TextIO

from nqueens.board import Board, InvalidSize
from nqueens.display import render
from nqueens.solver.config import config as solver_config
from nqueens.trace import Action, StepEvent
from nqueens.util import int_comma, time_str, timestamp_str


class Outcome(IntEnum):
    """Result of a single level of the backtracking search."""

    EXHAUSTED = 0
    """Every option at this depth was tried and undone."""

    SOLVED = 1
    """N queens are on the board; the board must not be mutated further."""


@dataclass
class SolverStats:
    """Statistics collected during solving."""

    placements: int = 0
    """Number of queens placed, including placements later undone."""

    removals: int = 0
    """Number of queens removed while backtracking."""

    cells_checked: int = 0
    """Number of cells examined as placement candidates."""

    max_depth: int = 0
    """Maximum recursion depth reached during solving."""

    start_time: float = field(default_factory=time)
    """Timestamp when solving started."""

    end_time: float | None = None
    """Timestamp when solving finished, or None while still running."""

    @property
    def elapsed(self) -> float:
        """Seconds spent solving so far."""
        return (self.end_time or time()) - self.start_time


@dataclass
class SolveResult:
    """Outcome of a solve request."""

    board: Board | None
    """The solved board, or None if no arrangement exists."""

    trace: tuple[StepEvent, ...] | None
    """Every placement and removal performed, in order, or None if tracing was disabled."""

    stats: SolverStats
    """Statistics collected during the search."""

    @property
    def solved(self) -> bool:
        """Whether a solution was found."""
        return self.board is not None


class Solver:
    """Depth-first backtracking search over a single board.

    Every level of the search scans all cells in row-major order and tries a queen on each
    empty cell that is not attacked, in turn, so the first arrangement found (and the trace
    of how it was found) is always the same for a given starting board.  A finished board has
    one queen per row since no two queens may share a row.
    """

    def __init__(
        self, board: Board, *, with_trace: bool = False, logf: TextIO | None = None
    ) -> None:
        self.board = board
        """The board being solved.  Mutated in place."""

        self.trace: list[StepEvent] | None = [] if with_trace else None
        """Step events recorded so far, or None if tracing is disabled."""

        self.stats = SolverStats()
        """Statistics collected during solving."""

        self.logf = logf
        """Optional stream for progress messages."""

    def _log(self, message: str) -> None:
        if self.logf is not None:
            print(message, file=self.logf, flush=True)

    def _mutate(self, row: int, col: int, action: Action) -> None:
        if action == Action.PLACE:
            self.board.place(row, col)
            self.stats.placements += 1
            if self.stats.placements % solver_config.report_interval == 0:
                self._log(
                    f"Placed {int_comma(self.stats.placements)} queens "
                    f"after {time_str(self.stats.elapsed)}; "
                    f"max depth {self.stats.max_depth}."
                )
        else:
            self.board.remove(row, col)
            self.stats.removals += 1
        if self.trace is not None:
            self.trace.append(StepEvent(row, col, action))

    def run(self) -> SolveResult:
        """Search for an arrangement of N non-attacking queens.

        A board whose existing queens already attack each other cannot be completed, and is
        reported as a failure without searching.

        Returns:
            A SolveResult holding the solved board, or None as the board if no solution exists.
        """
        self.stats = SolverStats()
        self.trace = [] if self.trace is not None else None
        board = self.board
        self._log(f"Solving {board.size}x{board.size} board with {board.count_queens()} queens.")

        conflicts = board.conflicts()
        if conflicts:
            self._log(f"Board already contains attacking queens: {conflicts}")
            outcome = Outcome.EXHAUSTED
        else:
            outcome = self._search(depth=0)
        self.stats.end_time = time()

        trace = tuple(self.trace) if self.trace is not None else None
        if outcome == Outcome.SOLVED:
            self._log("Solution found!")
            self._log(render(board))
        else:
            self._log("No solution found.")
        self._log(
            f"Placements: {int_comma(self.stats.placements)}, "
            f"removals: {int_comma(self.stats.removals)}, "
            f"cells checked: {int_comma(self.stats.cells_checked)}, "
            f"max depth: {self.stats.max_depth}"
        )
        self._log(f"Time taken: {time_str(self.stats.elapsed)}")

        return SolveResult(
            board=board if outcome == Outcome.SOLVED else None,
            trace=trace,
            stats=self.stats,
        )

    def _search(self, depth: int) -> Outcome:
        """Recursive helper for `run()`.

        Scans every cell in row-major order, starting from (0, 0) at each level.  A queen may
        therefore be tried in a lower row while a row above it is still empty.
        """
        self.stats.max_depth = max(self.stats.max_depth, depth)

        board = self.board
        if board.count_queens() == board.size:
            return Outcome.SOLVED

        for idx in range(board.size * board.size):
            self.stats.cells_checked += 1
            if board[idx]:
                continue
            row, col = board.get_2d_idx(idx)
            if not board.is_placeable(row, col):
                continue

            self._mutate(row, col, Action.PLACE)
            if self._search(depth + 1) == Outcome.SOLVED:
                return Outcome.SOLVED
            # Dead end; undo and carry on with the next cell
            self._mutate(row, col, Action.REMOVE)

        return Outcome.EXHAUSTED


def check_size(n: int) -> None:
    """Validate a requested board size.

    Raises:
        InvalidSize: If `n` is not an integer, is less than 1, or exceeds `max_solve_size`.
    """
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidSize(f"Board size must be an integer, got {n!r}.")
    if n < 1:
        raise InvalidSize(f"Board size must be at least 1, got {n}.")
    if n > solver_config.max_solve_size:
        raise InvalidSize(
            f"Board size {n} exceeds the supported maximum of {solver_config.max_solve_size}."
        )


def solve(n: int, with_trace: bool = False, *, logf: TextIO | None = None) -> SolveResult:
    """Place `n` non-attacking queens on an empty `n` x `n` board.

    Args:
        n (int): Size of the board and number of queens.
        with_trace (bool): Whether to record every placement and removal.
        logf: Optional stream for progress messages.

    Raises:
        InvalidSize: If `n` is not a supported board size.
    """
    check_size(n)
    return Solver(Board(n), with_trace=with_trace, logf=logf).run()


def solve_board(
    board: Board | Sequence[Sequence[int | bool]],
    with_trace: bool = False,
    *,
    logf: TextIO | None = None,
) -> SolveResult:
    """Complete a (possibly pre-populated) board in place.

    Args:
        board: A Board, or a nested sequence of 0/1 rows which is converted to one.
        with_trace (bool): Whether to record every placement and removal.
        logf: Optional stream for progress messages.

    Raises:
        InvalidBoard: If a nested sequence is not square or has values other than 0/1.
        InvalidSize: If the board exceeds the supported maximum size.
    """
    if not isinstance(board, Board):
        board = Board.from_rows(board)
    check_size(board.size)
    return Solver(board, with_trace=with_trace, logf=logf).run()


def run(n: int, *, with_trace: bool = False, log_dir: str | None = None) -> SolveResult:
    """Solve a board of size `n`, logging the process to a file.

    Args:
        n (int): Size of the board.
        with_trace (bool): Whether to record the step trace.
        log_dir (str | None): Directory for the log file.  Defaults to the configured `log_dir`.
    """
    check_size(n)

    logfile = Path(log_dir or solver_config.log_dir) / f"{n}x{n}.log"
    print(f"Log file: {logfile}")

    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            return solve_one(n, with_trace=with_trace, logf=logf)
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            print("Solver interrupted by user.")
            sys.exit(1)


def solve_one(n: int, *, with_trace: bool, logf: TextIO) -> SolveResult:
    """Solve a single board, writing a header describing the run to `logf` first."""
    print(f"Board size: {n}x{n}", file=logf, flush=True)
    print(f"Trace enabled: {with_trace}", file=logf, flush=True)
    print("Solver config:", file=logf, flush=True)
    pprint(solver_config.model_dump(), stream=logf, width=120)
    print(f"Start time: {timestamp_str(time())}", file=logf, flush=True)
    print("", file=logf, flush=True)

    result = solve(n, with_trace, logf=logf)

    if result.trace is not None:
        print(f"Trace length: {int_comma(len(result.trace))} steps", file=logf, flush=True)
    return result
