"""Backtracking solver for the N-Queens problem."""
