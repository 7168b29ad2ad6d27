"""Scoreboard layouts: bead plate and streak columns."""

from typing import Sequence

from core.outcomes import Outcome

Grid = list[list[Outcome | None]]


def _empty_grid(rows: int, cols: int) -> Grid:
    return [[None] * cols for _ in range(rows)]


def bead_plate(outcomes: Sequence[Outcome], rows: int = 6, cols: int = 30) -> Grid:
    """
    Lay outcomes out top to bottom, then left to right.

    Outcomes beyond rows * cols are dropped.

    Returns:
        Grid indexed as grid[row][col]
    """
    grid = _empty_grid(rows, cols)
    for i, outcome in enumerate(outcomes[: rows * cols]):
        col, row = divmod(i, rows)
        grid[row][col] = outcome
    return grid


def streak_columns(outcomes: Sequence[Outcome], rows: int = 6, max_cols: int = 30) -> Grid:
    """
    Simplified big road: one column per Banker/Player streak.

    Ties are skipped. A streak that reaches the bottom row, or runs into
    an occupied cell, continues to the right along its current row.
    Layout stops once it runs out of columns.

    Returns:
        Grid indexed as grid[row][col]
    """
    grid = _empty_grid(rows, max_cols)
    col = -1
    row = 0
    streak_col = -1
    last: Outcome | None = None

    for outcome in outcomes:
        if not outcome.is_side:
            continue
        if outcome is not last:
            streak_col += 1
            while streak_col < max_cols and grid[0][streak_col] is not None:
                streak_col += 1
            col = streak_col
            row = 0
            last = outcome
        elif row < rows - 1 and grid[row + 1][col] is None:
            row += 1
        else:
            col += 1
            while col < max_cols and grid[row][col] is not None:
                col += 1
        if col >= max_cols:
            break
        grid[row][col] = outcome

    return grid
