from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Protocol

import numpy as np

from number_pair.storage import SavedGame

from .deck import generate_deck
from .grid import Board, Coordinate
from .presenter import HighlightKind, Presenter
from .rules import MatchRules, ScoringRules, is_valid_pair
from .solver import Pair, find_all_matches, find_any_match


logger = logging.getLogger(__name__)


class TapOutcome(IntEnum):
    IGNORED = 0
    SELECTED = 1
    DESELECTED = 2
    RESELECTED = 3
    MATCHED = 4


@dataclass
class GameConfig:
    board_size: int = 9
    random_seed: Optional[int] = None
    max_episode_steps: int = 500


@dataclass
class Snapshot:
    grid: np.ndarray
    score: int
    moves: int


class Store(Protocol):
    def save(self, saved: SavedGame) -> None: ...

    def load(self) -> Optional[SavedGame]: ...


class NumberPairGame:
    """Game engine: owns the board, selection, counters and the undo slot."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[MatchRules] = None,
        scoring: Optional[ScoringRules] = None,
        store: Optional[Store] = None,
        presenter: Optional[Presenter] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or MatchRules()
        self.scoring = scoring or ScoringRules()
        self.store = store
        self.presenter = presenter or Presenter()
        self.clock = clock
        self.rng = random.Random(self.config.random_seed)
        self.board = Board(self.config.board_size)
        self.selection: Optional[Coordinate] = None
        self.hint: Optional[Pair] = None
        self.score = 0
        self.moves = 0
        self.started_at = self.clock()
        self.undo_snapshot: Optional[Snapshot] = None
        self.won = False

    # Lifecycle

    def new_game(self) -> None:
        deck = generate_deck(self.board.total_cells, self.rng)
        self.board.fill(deck)
        self.score = 0
        self.moves = 0
        self.started_at = self.clock()
        self.undo_snapshot = None
        self.won = False
        self._clear_selection()
        self._clear_hint()
        logger.info("New %dx%d game", self.board.size, self.board.size)
        self._persist()
        self.presenter.render(self)

    def restore(self) -> bool:
        """Load the saved game, if any. Returns False when nothing usable was stored."""
        if self.store is None:
            return False
        saved = self.store.load()
        if saved is None:
            return False
        if saved.size != self.board.size:
            logger.warning("Saved board is %dx%d, expected %dx%d; ignoring",
                           saved.size, saved.size, self.board.size, self.board.size)
            return False
        self.board = Board.from_list(saved.grid)
        self.score = saved.score
        self.moves = saved.moves
        self.started_at = saved.started_at
        self.undo_snapshot = None
        self.won = False
        self.selection = None
        self.hint = None
        logger.info("Restored game: score=%d moves=%d remaining=%d",
                    self.score, self.moves, self.board.remaining())
        self.presenter.render(self)
        return True

    def boot(self) -> None:
        if not self.restore():
            self.new_game()

    # Input

    def tap(self, row: int, col: int) -> TapOutcome:
        value = self.board.get(row, col)
        if value == 0:
            return TapOutcome.IGNORED
        current = self.selection
        if current is None:
            self._select((row, col))
            return TapOutcome.SELECTED
        if current == (row, col):
            self._clear_selection()
            return TapOutcome.DESELECTED
        other = self.board.get(*current)
        if self.board.is_adjacent(current, (row, col)) and is_valid_pair(value, other, self.rules):
            self._apply_match(current, (row, col))
            return TapOutcome.MATCHED
        self._clear_selection()
        self._select((row, col))
        return TapOutcome.RESELECTED

    def _select(self, coord: Coordinate) -> None:
        self.selection = coord
        self.presenter.highlight([coord], HighlightKind.SELECTED)

    def _clear_selection(self) -> None:
        self.selection = None
        self.presenter.clear_highlight(HighlightKind.SELECTED)

    def _clear_hint(self) -> None:
        self.hint = None
        self.presenter.clear_highlight(HighlightKind.HINT)

    def _apply_match(self, a: Coordinate, b: Coordinate) -> None:
        self._push_undo()
        self.board.set(*a, 0)
        self.board.set(*b, 0)
        self.score += self.scoring.match_points
        self.moves += 1
        self._clear_selection()
        self._clear_hint()
        self.presenter.highlight([a, b], HighlightKind.MATCHED)
        self._persist()
        self.presenter.render(self)
        self.check_win()

    # Actions

    def shuffle(self) -> None:
        """Permute the remaining tiles among the occupied cells."""
        self._push_undo()
        cells = self.board.occupied()
        values = [self.board.get(r, c) for r, c in cells]
        self.rng.shuffle(values)
        for (r, c), v in zip(cells, values):
            self.board.set(r, c, v)
        self.moves += 1
        self._clear_selection()
        self._clear_hint()
        self._persist()
        self.presenter.render(self)

    def undo(self) -> bool:
        snap = self.undo_snapshot
        if snap is None:
            return False
        self.board.grid = snap.grid.copy()
        self.score = snap.score
        self.moves = snap.moves
        self.undo_snapshot = None
        self.won = False
        self._clear_selection()
        self._clear_hint()
        self._persist()
        self.presenter.render(self)
        return True

    def can_undo(self) -> bool:
        return self.undo_snapshot is not None

    def _push_undo(self) -> None:
        # Single slot: each mutation overwrites the previous snapshot
        self.undo_snapshot = Snapshot(self.board.clone_state(), self.score, self.moves)

    def check_win(self) -> bool:
        if self.board.is_cleared():
            if not self.won:
                self.won = True
                logger.info("Board cleared: score=%d moves=%d time=%s",
                            self.score, self.moves, self.format_elapsed())
                self.presenter.announce_win(self)
            return True
        if self.is_stuck():
            logger.debug("No matches left on the board; shuffle to continue")
        return False

    def request_hint(self) -> Optional[Pair]:
        pair = find_any_match(self.board, self.rules)
        self.presenter.clear_highlight(HighlightKind.HINT)
        self.hint = pair
        if pair is not None:
            self.presenter.highlight(list(pair), HighlightKind.HINT)
        return pair

    def set_rules(self, sum_enabled: Optional[bool] = None, equal_enabled: Optional[bool] = None) -> None:
        if sum_enabled is not None:
            self.rules.sum_enabled = bool(sum_enabled)
        if equal_enabled is not None:
            self.rules.equal_enabled = bool(equal_enabled)
        self._clear_hint()

    # Queries

    def is_stuck(self) -> bool:
        return not self.board.is_cleared() and find_any_match(self.board, self.rules) is None

    def valid_pairs(self) -> List[Pair]:
        return find_all_matches(self.board, self.rules)

    def elapsed_seconds(self) -> int:
        return max(0, int(self.clock() - self.started_at))

    def format_elapsed(self) -> str:
        minutes, seconds = divmod(self.elapsed_seconds(), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def get_state(self) -> dict:
        return {
            "grid": self.board.clone_state(),
            "selection": self.selection,
            "score": self.score,
            "moves": self.moves,
            "remaining": self.board.remaining(),
            "can_undo": self.can_undo(),
            "stuck": self.is_stuck(),
            "won": self.won,
            "elapsed": self.elapsed_seconds(),
        }

    def _persist(self) -> None:
        if self.store is None:
            return
        self.store.save(SavedGame(
            grid=self.board.to_list(),
            score=self.score,
            moves=self.moves,
            started_at=self.started_at,
        ))
