from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

from .rules import level

Offset = Tuple[int, int]


class TileKind(IntEnum):
    PLAIN = 1
    PERMANENT = 2
    KILLER = 3
    PICKER = 4
    CENTERPIECE = 5
    WHOPPER = 6
    FLASK = 7
    SPILLAGE = 8
    PLUS = 9
    MINUS = 10


class LiquidType(Enum):
    ACID = "acid"
    GLUE = "glue"


class ActionKind(Enum):
    REMOVE = "remove"
    CONVERT = "convert"
    SPILL = "spill"
    PLUS = "plus"
    MINUS = "minus"
    COMPLEX = "complex"


@dataclass(frozen=True)
class ExplodeAction:
    """What happens to a tile consumed by a detonation.

    COMPLEX carries two sub-actions in `parts`; their multiplier effects add up.
    """

    kind: ActionKind
    tile: Optional["TileType"] = None
    liquid: Optional[LiquidType] = None
    parts: Tuple["ExplodeAction", ...] = ()

    @classmethod
    def remove(cls) -> "ExplodeAction":
        return cls(ActionKind.REMOVE)

    @classmethod
    def convert(cls, tile: "TileType") -> "ExplodeAction":
        return cls(ActionKind.CONVERT, tile=tile)

    @classmethod
    def spill(cls, liquid: LiquidType) -> "ExplodeAction":
        return cls(ActionKind.SPILL, liquid=liquid)

    @classmethod
    def plus(cls) -> "ExplodeAction":
        return cls(ActionKind.PLUS)

    @classmethod
    def minus(cls) -> "ExplodeAction":
        return cls(ActionKind.MINUS)

    @classmethod
    def complex(cls, first: "ExplodeAction", second: "ExplodeAction") -> "ExplodeAction":
        return cls(ActionKind.COMPLEX, parts=(first, second))


_SQUARE_3 = tuple((dx, dy) for dy in range(-1, 2) for dx in range(-1, 2))
_SQUARE_5 = tuple((dx, dy) for dy in range(-2, 3) for dx in range(-2, 3))

_SUPERSCRIPTS = "⁰¹²³⁴⁵⁶⁷⁸⁹"

_COUNTED_FACES = {
    TileKind.KILLER: "↯",
    TileKind.CENTERPIECE: "◉",
    TileKind.WHOPPER: "✱",
}

_LIQUID_FACES = {
    LiquidType.GLUE: "▿",
    LiquidType.ACID: "▴",
}

_FIXED_FACES = {
    TileKind.PERMANENT: " ✖ ",
    TileKind.PICKER: "[ ]",
    TileKind.PLUS: " + ",
    TileKind.MINUS: " - ",
}


def _count_mark(n: int) -> str:
    if n == 1:
        return " "
    if 0 <= n <= 9:
        return _SUPERSCRIPTS[n]
    return "ⁿ"


@dataclass(frozen=True)
class TileType:
    """One tile of chemistry state.

    `n` is the shield level, charge count or piece value depending on the
    kind; `liquid` is set only for flasks and spillage.
    """

    kind: TileKind
    n: int = 0
    liquid: Optional[LiquidType] = None

    # Constructors

    @classmethod
    def plain(cls, n: int = 0) -> "TileType":
        return cls(TileKind.PLAIN, n)

    @classmethod
    def permanent(cls) -> "TileType":
        return cls(TileKind.PERMANENT)

    @classmethod
    def killer(cls, n: int) -> "TileType":
        return cls(TileKind.KILLER, n)

    @classmethod
    def picker(cls) -> "TileType":
        return cls(TileKind.PICKER)

    @classmethod
    def centerpiece(cls, n: int) -> "TileType":
        return cls(TileKind.CENTERPIECE, n)

    @classmethod
    def whopper(cls, n: int) -> "TileType":
        return cls(TileKind.WHOPPER, n)

    @classmethod
    def flask(cls, liquid: LiquidType) -> "TileType":
        return cls(TileKind.FLASK, liquid=liquid)

    @classmethod
    def spillage(cls, liquid: LiquidType) -> "TileType":
        return cls(TileKind.SPILLAGE, liquid=liquid)

    @classmethod
    def plus(cls) -> "TileType":
        return cls(TileKind.PLUS)

    @classmethod
    def minus(cls) -> "TileType":
        return cls(TileKind.MINUS)

    @classmethod
    def new_random(cls, score: int, rng: random.Random) -> "TileType":
        """Draw a tile; rarer kinds unlock as the level derived from `score` grows."""
        lvl = level(score)
        while True:
            r = rng.randrange(33)
            if r <= 20:
                return cls.plain(0)
            if r <= 23:
                return cls.picker()
            if r == 24 and lvl >= 1:
                return cls.minus() if rng.random() < 0.5 else cls.plus()
            if r in (25, 26) and lvl >= 2:
                return cls.plain(1 + rng.randrange(lvl))
            if r == 27 and lvl >= 3:
                return cls.flask(LiquidType.ACID if rng.random() < 0.5 else LiquidType.GLUE)
            if r == 28 and lvl >= 4:
                return cls.killer(1 + rng.randrange(lvl // 8 + 1))
            if r in (29, 30) and lvl >= 5:
                return cls.centerpiece(1 + rng.randrange(lvl // 4 + 1))
            if r == 31 and lvl >= 6:
                return cls.whopper(1 + rng.randrange(lvl // 4 + 1))
            if r == 32 and lvl >= 8 and rng.random() < 0.5:
                return cls.permanent()

    def __repr__(self) -> str:
        name = self.kind.name.capitalize()
        if self.liquid is not None:
            return f"{name}({self.liquid.name.capitalize()})"
        if self.kind in (TileKind.PLAIN, TileKind.KILLER, TileKind.CENTERPIECE, TileKind.WHOPPER):
            return f"{name}({self.n})"
        return name

    # Classification

    def is_plain(self) -> bool:
        return self.kind in (TileKind.PLAIN, TileKind.FLASK, TileKind.PLUS, TileKind.MINUS)

    def is_solid(self) -> bool:
        return self.kind != TileKind.SPILLAGE

    def render(self) -> str:
        """Face of the tile: three characters, or one for spillage."""
        if self.kind == TileKind.SPILLAGE:
            return _LIQUID_FACES[self.liquid]
        if self.kind == TileKind.FLASK:
            return f" {_LIQUID_FACES[self.liquid]} "
        if self.kind == TileKind.PLAIN:
            return "   " if self.n == 0 else " •" + _count_mark(self.n)
        if self.kind in _COUNTED_FACES:
            return f" {_COUNTED_FACES[self.kind]}{_count_mark(self.n)}"
        return _FIXED_FACES[self.kind]

    # Behavior tables

    def drop(self) -> Optional["TileType"]:
        # Killers only hurt while falling
        if self.kind == TileKind.KILLER:
            return TileType.plain(0)
        return self

    def explode(self) -> ExplodeAction:
        if self.kind == TileKind.PLAIN:
            if self.n <= 0:
                return ExplodeAction.remove()
            return ExplodeAction.convert(TileType.plain(self.n - 1))
        if self.kind == TileKind.CENTERPIECE:
            if self.n <= 1:
                return ExplodeAction.remove()
            return ExplodeAction.convert(TileType.centerpiece(self.n - 1))
        if self.kind == TileKind.WHOPPER:
            return ExplodeAction.convert(TileType.centerpiece(self.n))
        if self.kind == TileKind.FLASK:
            return ExplodeAction.spill(self.liquid)
        if self.kind == TileKind.PLUS:
            return ExplodeAction.complex(ExplodeAction.remove(), ExplodeAction.plus())
        if self.kind == TileKind.MINUS:
            return ExplodeAction.complex(ExplodeAction.remove(), ExplodeAction.minus())
        return ExplodeAction.remove()

    def explodes(self, other: "TileType") -> bool:
        """Whether this tile, as a detonator, accepts `other` in its shape."""
        if self.is_plain():
            return other.is_plain()
        if self.kind == TileKind.CENTERPIECE:
            return other.kind == TileKind.CENTERPIECE or other.is_plain()
        if self.kind == TileKind.WHOPPER:
            return other.kind in (TileKind.CENTERPIECE, TileKind.WHOPPER) or other.is_plain()
        return False

    def explode_shape(self) -> Tuple[Offset, ...]:
        if self.kind == TileKind.WHOPPER:
            return _SQUARE_5
        return _SQUARE_3

    def bonus(self) -> int:
        if self.kind == TileKind.PLAIN:
            return self.n + 1
        if self.kind == TileKind.CENTERPIECE:
            return 10 * self.n
        if self.kind == TileKind.WHOPPER:
            return 30
        return 1

    @staticmethod
    def collide(t1: "TileType", t2: "TileType") -> Tuple[Optional["TileType"], Optional["TileType"]]:
        """Resolve falling tile `t1` meeting stationary tile `t2`.

        Returns the surviving tiles for the (falling, stationary) sides.
        """
        # Liquids never end up in the falling block
        if t2.kind == TileKind.SPILLAGE:
            if t2.liquid == LiquidType.ACID:
                return None, None
            return None, t1.drop()

        if t1.kind == TileKind.PICKER:
            return t2.drop(), None
        if t2.kind == TileKind.PICKER:
            return None, t1.drop()

        if t1.kind == TileKind.KILLER:
            if t1.n <= 1:
                return None, None
            return TileType.killer(t1.n - 1), None
        if t2.kind == TileKind.KILLER:
            if t2.n <= 1:
                return None, None
            return None, TileType.killer(t2.n - 1)

        return t1, t2

    @staticmethod
    def collides(t1: "TileType", t2: "TileType") -> bool:
        return True
