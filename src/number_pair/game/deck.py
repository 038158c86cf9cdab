from __future__ import annotations

import logging
import random
from typing import List, Optional

import numpy as np

from .grid import MAX_VALUE


logger = logging.getLogger(__name__)

TILE_VALUES = np.arange(1, MAX_VALUE + 1, dtype=np.int8)


def generate_deck(total_cells: int, rng: Optional[random.Random] = None) -> List[int]:
    """Build a shuffled deck of exactly `total_cells` tiles.

    Values 1..9 are dealt round-robin before shuffling, so no value appears
    more than once more often than any other.
    """
    if total_cells < 0:
        raise ValueError(f"Deck size must be non-negative, got {total_cells}")
    if total_cells % 2:
        logger.warning("Odd deck size %d: at least one tile cannot be paired", total_cells)
    deck = [int(v) for v in np.resize(TILE_VALUES, total_cells)]
    (rng or random.Random()).shuffle(deck)
    return deck
