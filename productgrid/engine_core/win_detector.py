"""
Win Detector - Finds a run of same-owner cells through a captured cell.

Only lines through the most recent capture can have become winning, so
detection starts from that seed and walks each of the four directions
forward and backward.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

from .board import GRID_SIZE

if TYPE_CHECKING:
    from .state import Player


# Horizontal, vertical, diagonal "\", diagonal "/"
DIRECTIONS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def _in_bounds(r: int, c: int) -> bool:
    return 0 <= r < GRID_SIZE and 0 <= c < GRID_SIZE


def _walk(
    owners: Sequence[Player | None],
    row: int,
    col: int,
    dr: int,
    dc: int,
    player: Player,
) -> list[int]:
    """Indices of contiguous player cells starting one step from (row, col)."""
    run = []
    r, c = row + dr, col + dc
    while _in_bounds(r, c) and owners[r * GRID_SIZE + c] is player:
        run.append(r * GRID_SIZE + c)
        r += dr
        c += dc
    return run


def line_through(
    owners: Sequence[Player | None],
    index: int,
    player: Player,
    direction: tuple[int, int],
) -> list[int]:
    """The seed plus its contiguous player cells along one direction (both ways)."""
    row, col = divmod(index, GRID_SIZE)
    dr, dc = direction
    forward = _walk(owners, row, col, dr, dc, player)
    backward = _walk(owners, row, col, -dr, -dc, player)
    return [index] + forward + backward


def run_length(
    owners: Sequence[Player | None],
    index: int,
    player: Player,
    direction: tuple[int, int],
) -> int:
    return len(line_through(owners, index, player, direction))


def open_ends(
    owners: Sequence[Player | None],
    index: int,
    player: Player,
    direction: tuple[int, int],
) -> int:
    """Number of empty cells (0-2) immediately beyond either end of the run."""
    row, col = divmod(index, GRID_SIZE)
    dr, dc = direction
    count = 0
    for sign in (1, -1):
        steps = len(_walk(owners, row, col, sign * dr, sign * dc, player)) + 1
        r, c = row + sign * dr * steps, col + sign * dc * steps
        if _in_bounds(r, c) and owners[r * GRID_SIZE + c] is None:
            count += 1
    return count


def longest_line(owners: Sequence[Player | None], index: int, player: Player) -> int:
    """Longest run through index over all four directions."""
    return max(run_length(owners, index, player, d) for d in DIRECTIONS)


def find_winning_line(
    owners: Sequence[Player | None],
    index: int,
    player: Player,
    win_target: int,
) -> list[int] | None:
    """
    Return the first run through index of at least win_target cells.

    The seed cell is counted as the player's even if owners has not
    recorded the capture yet, so callers can test a capture before
    applying it. Returns None when no direction qualifies.
    """
    for direction in DIRECTIONS:
        line = line_through(owners, index, player, direction)
        if len(line) >= win_target:
            return line
    return None


def is_winning_capture(
    owners: Sequence[Player | None],
    index: int,
    player: Player,
    win_target: int,
) -> bool:
    return find_winning_line(owners, index, player, win_target) is not None
