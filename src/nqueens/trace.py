"""Step events recorded by the solver, and their replay against an empty board."""

from collections.abc import Iterable, Iterator
from enum import IntEnum
from typing import NamedTuple

from nqueens.board import Board


class Action(IntEnum):
    """Enumeration for board mutations.  The value is the new state of the cell."""

    REMOVE = 0
    PLACE = 1


class StepEvent(NamedTuple):
    """A single placement or removal performed on the board."""

    row: int
    col: int
    action: Action

    def __str__(self) -> str:
        return f"{self.action.name.lower()} ({self.row}, {self.col})"


class ReplayError(ValueError):
    """Raised when a trace cannot be applied to the board it is replayed on."""


def apply_event(board: Board, event: StepEvent) -> None:
    """Apply a single step event to the board in place.

    Raises:
        ReplayError: If the event places onto an occupied cell or removes from an empty one.
    """
    occupied = board[event.row, event.col]
    if event.action == Action.PLACE:
        if occupied:
            raise ReplayError(f"Cannot {event}: cell is already occupied.")
        board.place(event.row, event.col)
    else:
        if not occupied:
            raise ReplayError(f"Cannot {event}: cell is empty.")
        board.remove(event.row, event.col)


def replay(trace: Iterable[StepEvent], size: int) -> Iterator[tuple[StepEvent, Board]]:
    """Replay a trace against an initially empty board.

    The same `Board` object is yielded after every step; copy it to keep a snapshot.  A caller
    that wants to stop early simply stops iterating.

    Args:
        trace: Step events in the order they were recorded.
        size: Size of the board the trace was recorded on.

    Yields:
        Tuples of (event, board), with the board reflecting the event.
    """
    board = Board(size)
    for event in trace:
        apply_event(board, event)
        yield event, board


def final_board(trace: Iterable[StepEvent], size: int) -> Board:
    """Return the board obtained by replaying the whole trace."""
    board = Board(size)
    for event in trace:
        apply_event(board, event)
    return board
