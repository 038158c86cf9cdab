from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Iterable

from .grid import Coordinate

if TYPE_CHECKING:
    from .core import NumberPairGame


class HighlightKind(IntEnum):
    SELECTED = 0
    HINT = 1
    MATCHED = 2


class Presenter:
    """Interface the engine draws through. The base class does nothing."""

    def render(self, game: "NumberPairGame") -> None:
        pass

    def highlight(self, coords: Iterable[Coordinate], kind: HighlightKind) -> None:
        pass

    def clear_highlight(self, kind: HighlightKind) -> None:
        pass

    def announce_win(self, game: "NumberPairGame") -> None:
        pass


NullPresenter = Presenter
