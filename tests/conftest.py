import random

import pytest

from number_pair.game import Board, GameConfig, MatchRules, NumberPairGame, Presenter
from number_pair.storage import MemoryStore


class RecordingPresenter(Presenter):
    """Collects every call the engine makes on the presentation layer."""

    def __init__(self):
        self.renders = 0
        self.highlights = []
        self.cleared = []
        self.wins = 0

    def render(self, game):
        self.renders += 1

    def highlight(self, coords, kind):
        self.highlights.append((list(coords), kind))

    def clear_highlight(self, kind):
        self.cleared.append(kind)

    def announce_win(self, game):
        self.wins += 1


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


def board_from(rows):
    return Board.from_list(rows)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def game(store, presenter, clock):
    g = NumberPairGame(GameConfig(random_seed=7), MatchRules(), store=store, presenter=presenter, clock=clock)
    g.new_game()
    return g


def load_rows(game, rows):
    """Replace the engine's board with a hand-built one."""
    game.board = board_from(rows)
    game.selection = None
    game.undo_snapshot = None
    game.won = False
