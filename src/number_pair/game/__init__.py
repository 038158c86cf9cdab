"""Game module for Number Pair.

Exports the core game engine and supporting classes:
- Board: Grid representation, bounds checks and neighbor queries
- generate_deck: Balanced, shuffled tile values for a new board
- MatchRules / ScoringRules: Pairing toggles and per-match points
- find_any_match / has_any_match: Deterministic hint and stuck detection
- NumberPairGame: Selection state machine, moves, shuffle and undo
"""

from .grid import Board, Coordinate, OutOfBoundsError
from .deck import generate_deck
from .rules import MatchRules, ScoringRules, is_valid_pair
from .solver import find_all_matches, find_any_match, has_any_match
from .presenter import HighlightKind, NullPresenter, Presenter
from .core import GameConfig, NumberPairGame, Snapshot, TapOutcome

__all__ = [
    "Board",
    "Coordinate",
    "OutOfBoundsError",
    "generate_deck",
    "MatchRules",
    "ScoringRules",
    "is_valid_pair",
    "find_all_matches",
    "find_any_match",
    "has_any_match",
    "HighlightKind",
    "NullPresenter",
    "Presenter",
    "GameConfig",
    "NumberPairGame",
    "Snapshot",
    "TapOutcome",
]
