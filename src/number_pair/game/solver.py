from __future__ import annotations

from typing import List, Optional, Tuple

from .grid import Board, Coordinate
from .rules import MatchRules, is_valid_pair


Pair = Tuple[Coordinate, Coordinate]


def find_any_match(board: Board, rules: MatchRules) -> Optional[Pair]:
    """Return the first removable pair, or None if the board is stuck.

    Cells are scanned row-major and each cell's neighbors in up, down, left,
    right order. Hints and stuck detection both rely on this order.
    """
    for r, c in board.coords():
        v = board.get(r, c)
        if v == 0:
            continue
        for rr, cc in board.neighbors(r, c):
            if is_valid_pair(v, board.get(rr, cc), rules):
                return (r, c), (rr, cc)
    return None


def has_any_match(board: Board, rules: MatchRules) -> bool:
    return find_any_match(board, rules) is not None


def find_all_matches(board: Board, rules: MatchRules) -> List[Pair]:
    """Every removable pair once, keyed from its row-major-first cell."""
    pairs: List[Pair] = []
    for r, c in board.coords():
        v = board.get(r, c)
        if v == 0:
            continue
        for rr, cc in ((r, c + 1), (r + 1, c)):
            if board.is_inside(rr, cc) and is_valid_pair(v, board.get(rr, cc), rules):
                pairs.append(((r, c), (rr, cc)))
    return pairs
