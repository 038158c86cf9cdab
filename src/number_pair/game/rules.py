from __future__ import annotations

from dataclasses import dataclass


PAIR_SUM = 10


@dataclass
class MatchRules:
    """Which pairing rules are active. Both may be off; then nothing matches."""
    sum_enabled: bool = True
    equal_enabled: bool = True

    def allows(self, a: int, b: int) -> bool:
        return is_valid_pair(a, b, self)


@dataclass
class ScoringRules:
    match_points: int = 10


def is_valid_pair(a: int, b: int, rules: MatchRules) -> bool:
    if a == 0 or b == 0:
        return False
    sums_to_ten = rules.sum_enabled and a + b == PAIR_SUM
    equal = rules.equal_enabled and a == b
    return sums_to_ten or equal
