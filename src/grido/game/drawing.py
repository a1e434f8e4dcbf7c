from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Union


class Pen(IntEnum):
    """Line weight of one cell edge. Ordered so that combining is `max`."""

    NONE = 0
    THIN = 1
    THICK = 2

    @staticmethod
    def combine(p1: "Pen", p2: "Pen") -> "Pen":
        return Pen(max(p1, p2))


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


class FieldDrawing(NamedTuple):
    up: Pen = Pen.NONE
    right: Pen = Pen.NONE
    down: Pen = Pen.NONE
    left: Pen = Pen.NONE

    @classmethod
    def from_direction(cls, d: Direction, p: Pen) -> "FieldDrawing":
        pens = [Pen.NONE] * 4
        pens[int(d)] = Pen(p)
        return cls(*pens)

    def combine(self, other: "FieldDrawing") -> "FieldDrawing":
        return FieldDrawing(*(Pen.combine(a, b) for a, b in zip(self, other)))


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Decoration:
    char: str


@dataclass(frozen=True)
class Drawing:
    drawing: FieldDrawing


Field = Union[Empty, Decoration, Drawing]
