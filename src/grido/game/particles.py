from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Particle:
    """Floating text shown for `ttl` seconds after `start`."""

    x: int
    y: int
    face: str
    start: float
    ttl: float = 5.0

    def dead(self, now: float) -> bool:
        return now - self.start > self.ttl
