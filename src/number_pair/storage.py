"""
Persistence for Number Pair games.

Only the grid, the counters and the start time are stored. Selection and the
undo slot are session state and always start empty after a restore.
"""

from __future__ import annotations

import json
import logging
import math
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional


logger = logging.getLogger(__name__)

DEFAULT_SAVE_PATH = Path.home() / ".number_pair" / "save.json"
MAX_TILE = 9


class MalformedSnapshotError(ValueError):
    """Persisted data is missing required fields or holds invalid values."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class SavedGame:
    grid: List[List[int]]
    score: int = 0
    moves: int = 0
    started_at: float = 0.0

    @property
    def size(self) -> int:
        return len(self.grid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": [list(row) for row in self.grid],
            "score": self.score,
            "moves": self.moves,
            "started_at": self.started_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SavedGame":
        if not isinstance(data, dict):
            raise MalformedSnapshotError("snapshot is not an object")
        grid = data.get("grid")
        if not isinstance(grid, list) or not grid:
            raise MalformedSnapshotError("grid must be a non-empty list")
        size = len(grid)
        for row in grid:
            if not isinstance(row, list) or len(row) != size:
                raise MalformedSnapshotError("grid must be square")
            for cell in row:
                if not _is_int(cell) or not 0 <= cell <= MAX_TILE:
                    raise MalformedSnapshotError(f"invalid cell value {cell!r}")
        score = data.get("score") or 0
        moves = data.get("moves") or 0
        for name, value in (("score", score), ("moves", moves)):
            if not _is_int(value) or value < 0:
                raise MalformedSnapshotError(f"{name} must be a non-negative integer")
        started_at = data.get("started_at") or time.time()
        if not isinstance(started_at, (int, float)) or isinstance(started_at, bool):
            raise MalformedSnapshotError("started_at must be a number")
        if not math.isfinite(started_at):
            raise MalformedSnapshotError("started_at must be finite")
        return cls(
            grid=[list(row) for row in grid],
            score=score,
            moves=moves,
            started_at=float(started_at),
        )


class MemoryStore:
    """Keeps the last saved game in memory. Used by tests and agents."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self.data = initial
        self.saves = 0

    def save(self, saved: SavedGame) -> None:
        self.data = saved.to_dict()
        self.saves += 1

    def load(self) -> Optional[SavedGame]:
        if self.data is None:
            return None
        try:
            return SavedGame.from_dict(self.data)
        except MalformedSnapshotError as exc:
            logger.warning("Ignoring malformed snapshot: %s", exc)
            return None


class JsonFileStore:
    """Saves the game as a JSON document on disk."""

    def __init__(self, path: Path | str = DEFAULT_SAVE_PATH) -> None:
        self.path = Path(path)

    def save(self, saved: SavedGame) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(saved.to_dict(), f)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
        os.replace(tmp, self.path)

    def load(self) -> Optional[SavedGame]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return SavedGame.from_dict(data)
        except (OSError, ValueError) as exc:
            # Decode errors and MalformedSnapshotError are all ValueErrors
            logger.warning("Could not restore %s: %s", self.path, exc)
            return None
