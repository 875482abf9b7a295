import io

import pytest

from nqueens.board import Board, InvalidBoard, InvalidSize
from nqueens.solver.solver import Outcome, Solver, solve, solve_board
from nqueens.trace import Action, StepEvent, final_board

P, R = Action.PLACE, Action.REMOVE


@pytest.mark.parametrize("n", [1, 4, 5, 6, 7, 8, 9])
def test_solve_finds_valid_solution(n):
    result = solve(n)
    assert result.solved
    assert result.trace is None
    board = result.board
    assert board.count_queens() == n
    assert board.conflicts() == []
    assert board.is_solution()
    # One queen per row
    assert [row for row, _ in board.queens()] == list(range(n))


@pytest.mark.parametrize("n", [2, 3])
def test_solve_reports_failure_when_no_solution_exists(n):
    result = solve(n, with_trace=True)
    assert not result.solved
    assert result.board is None
    assert result.trace  # the search still happened
    assert result.stats.placements == result.stats.removals


@pytest.mark.parametrize("n", [0, -1])
def test_solve_rejects_non_positive_sizes(n):
    with pytest.raises(InvalidSize):
        solve(n)


def test_solve_rejects_sizes_above_the_supported_maximum():
    with pytest.raises(InvalidSize):
        solve(10)
    with pytest.raises(InvalidSize):
        solve(10_000)


def test_four_queens():
    """Row-major first-found search tries (0, 0) and backtracks before settling on (0, 1).

    Each level rescans the board from (0, 0), so (3, 1) is tried while row 2 is still empty.
    """
    result = solve(4, with_trace=True)
    assert result.board.queens() == [(0, 1), (1, 3), (2, 0), (3, 2)]
    assert result.board.count_queens() == 4
    assert result.trace == tuple(
        StepEvent(row, col, action)
        for row, col, action in [
            (0, 0, P), (1, 2, P), (3, 1, P), (3, 1, R), (1, 2, R),
            (1, 3, P), (2, 1, P), (2, 1, R), (3, 2, P), (3, 2, R), (1, 3, R),
            (2, 1, P), (1, 3, P), (1, 3, R), (2, 1, R),
            (2, 3, P), (3, 1, P), (3, 1, R), (2, 3, R),
            (3, 1, P), (1, 2, P), (1, 2, R), (2, 3, P), (2, 3, R), (3, 1, R),
            (3, 2, P), (1, 3, P), (1, 3, R), (3, 2, R),
            (0, 0, R),
            (0, 1, P), (1, 3, P), (2, 0, P), (3, 2, P),
        ]
    )  # fmt: skip
    assert len(result.trace) == 34
    assert result.stats.placements == 19
    assert result.stats.removals == 15
    assert result.stats.max_depth == 4


def test_one_queen():
    result = solve(1, with_trace=True)
    assert result.board.queens() == [(0, 0)]
    assert result.trace == (StepEvent(0, 0, P),)
    assert not any(event.action == R for event in result.trace)


def test_two_queens_trace():
    """Every cell is tried as the first queen, including those in row 1."""
    result = solve(2, with_trace=True)
    assert result.trace == (
        StepEvent(0, 0, P),
        StepEvent(0, 0, R),
        StepEvent(0, 1, P),
        StepEvent(0, 1, R),
        StepEvent(1, 0, P),
        StepEvent(1, 0, R),
        StepEvent(1, 1, P),
        StepEvent(1, 1, R),
    )


def test_search_skips_over_empty_rows():
    """Some queen is placed below a row that is still empty, as the whole board is scanned."""
    trace = solve(6, with_trace=True).trace
    occupied_rows: list[int] = []
    skipped = False
    for event in trace:
        if event.action == P:
            if any(row not in occupied_rows for row in range(event.row)):
                skipped = True
            occupied_rows.append(event.row)
        else:
            occupied_rows.remove(event.row)
    assert skipped


def test_known_first_solutions():
    assert [col for _, col in solve(5).board.queens()] == [0, 2, 4, 1, 3]
    assert [col for _, col in solve(6).board.queens()] == [1, 3, 5, 0, 2, 4]
    assert [col for _, col in solve(8).board.queens()] == [0, 4, 7, 5, 2, 6, 1, 3]


def test_trace_lengths():
    assert len(solve(6, with_trace=True).trace) == 2_872
    assert len(solve(8, with_trace=True).trace) == 51_878


@pytest.mark.parametrize("n", [4, 5, 6])
def test_solve_is_deterministic(n):
    first = solve(n, with_trace=True)
    second = solve(n, with_trace=True)
    assert first.board == second.board
    assert first.trace == second.trace
    assert solve(n).board == first.board


def test_rerunning_a_solver_starts_a_fresh_trace():
    solver = Solver(Board(4), with_trace=True)
    first = solver.run()
    solver.board = Board(4)
    second = solver.run()
    assert len(first.trace) == 34
    assert second.trace == first.trace
    assert second.stats.placements == 19


@pytest.mark.parametrize("n", [1, 4, 5, 6, 7])
def test_trace_replays_to_the_solution(n):
    result = solve(n, with_trace=True)
    assert final_board(result.trace, n) == result.board


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7])
def test_trace_is_consistent(n):
    """No queen lands on an occupied cell, none is removed from an empty one."""
    result = solve(n, with_trace=True)
    occupied: set[tuple[int, int]] = set()
    for event in result.trace:
        cell = (event.row, event.col)
        if event.action == P:
            assert cell not in occupied
            occupied.add(cell)
        else:
            assert cell in occupied
            occupied.remove(cell)

    if result.solved:
        assert result.trace[-1].action == P
        assert len(occupied) == n
    else:
        assert not occupied


def test_trace_counts_match_stats():
    result = solve(6, with_trace=True)
    assert result.stats.placements == sum(1 for e in result.trace if e.action == P)
    assert result.stats.removals == sum(1 for e in result.trace if e.action == R)
    assert result.stats.placements - result.stats.removals == 6
    assert result.stats.end_time is not None


def test_solve_board_with_pre_placed_queen():
    board = Board(4)
    board.place(0, 2)
    result = solve_board(board, with_trace=True)
    assert result.board is board
    assert board.queens() == [(0, 2), (1, 0), (2, 3), (3, 1)]
    assert result.trace == (StepEvent(1, 0, P), StepEvent(2, 3, P), StepEvent(3, 1, P))


def test_solve_board_from_rows():
    result = solve_board([[0, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
    assert result.board.queens() == [(0, 1), (1, 3), (2, 0), (3, 2)]


def test_solve_board_already_solved():
    board = Board.from_rows([[0, 1, 0, 0], [0, 0, 0, 1], [1, 0, 0, 0], [0, 0, 1, 0]])
    result = solve_board(board, with_trace=True)
    assert result.solved
    assert result.trace == ()


def test_solve_board_with_attacking_queens_fails():
    board = Board(4)
    board.place(0, 0)
    board.place(1, 1)
    result = solve_board(board, with_trace=True)
    assert not result.solved
    assert result.trace == ()
    # The caller's board is left untouched
    assert board.queens() == [(0, 0), (1, 1)]


def test_solve_board_with_unsolvable_prefix_fails():
    board = Board(4)
    board.place(0, 0)
    result = solve_board(board)
    assert not result.solved
    assert board.queens() == [(0, 0)]


@pytest.mark.parametrize("rows", [[[0, 0, 0], [0, 0, 0]], [[0, 3], [0, 0]]])
def test_solve_board_rejects_invalid_grids(rows):
    with pytest.raises(InvalidBoard):
        solve_board(rows)


def test_search_outcomes():
    solver = Solver(Board(3))
    assert solver._search(depth=0) == Outcome.EXHAUSTED
    assert Solver(Board(5))._search(depth=0) == Outcome.SOLVED


def test_solve_logs_progress():
    logf = io.StringIO()
    solve(4, logf=logf)
    log = logf.getvalue()
    assert "Solving 4x4 board" in log
    assert "Solution found!" in log
    assert "Placements: 19, removals: 15" in log

    logf = io.StringIO()
    solve(3, logf=logf)
    assert "No solution found." in logf.getvalue()
