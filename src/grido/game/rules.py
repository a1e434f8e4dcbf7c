from __future__ import annotations

from dataclasses import dataclass


def level(score: int, step: int = 100) -> int:
    """Level for a cumulative score. Thresholds are 100, 300, 600, 1000, ..."""
    lvl = 0
    base = 0
    while score >= base + (lvl + 1) * step:
        lvl += 1
        base += lvl * step
    return lvl


@dataclass
class ScoringRules:
    level_step: int = 100
    initial_multiplier: int = 1

    def level_for(self, score: int) -> int:
        return level(score, self.level_step)

    def award(self, hits: int, multiplier: int) -> int:
        return hits * multiplier

    def apply_multiplier_delta(self, multiplier: int, dmult: int) -> int:
        # Clamps at zero instead of going negative
        return max(0, multiplier + dmult)

    def decay_multiplier(self, multiplier: int) -> int:
        """One step toward the initial multiplier once the multiplier timer runs out."""
        if multiplier > self.initial_multiplier:
            return multiplier - 1
        if multiplier < self.initial_multiplier:
            return multiplier + 1
        return multiplier
