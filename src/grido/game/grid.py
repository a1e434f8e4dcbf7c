from __future__ import annotations

from typing import List, Protocol

import numpy as np

from .drawing import Decoration, Direction, Drawing, Empty, Field, FieldDrawing, Pen
from .glyphs import GLYPHS


# Per-cell field tags
EMPTY = 0
DECORATION = 1
DRAWING = 2


class CharSurface(Protocol):
    def put(self, x: int, y: int, text: str) -> None:
        ...


class Grid:
    """Character-cell compositor for box-drawing lines and decorations.

    The grid holds (w+1) x (h+1) fields. Each field is empty, a single
    decoration character, or a drawing: four pens (up, right, down, left)
    that are resolved to one box-drawing glyph at render time. Painting a
    line onto a decorated field replaces the decoration.
    """

    def __init__(self, w: int, h: int) -> None:
        assert w >= 0
        assert h >= 0
        self.w = int(w)
        self.h = int(h)
        self.kinds = np.zeros((self.h + 1, self.w + 1), dtype=np.int8)
        self.pens = np.zeros((self.h + 1, self.w + 1, 4), dtype=np.int8)
        self.chars = np.full((self.h + 1, self.w + 1), "", dtype=object)

    def _check(self, x: int, y: int) -> None:
        assert 0 <= x <= self.w and 0 <= y <= self.h, f"({x}, {y}) outside {self.w}x{self.h} grid"

    def field(self, x: int, y: int) -> Field:
        self._check(x, y)
        kind = self.kinds[y, x]
        if kind == DECORATION:
            return Decoration(self.chars[y, x])
        if kind == DRAWING:
            return Drawing(FieldDrawing(*(Pen(int(p)) for p in self.pens[y, x])))
        return Empty()

    def _reset(self, x: int, y: int) -> None:
        self.kinds[y, x] = EMPTY
        self.pens[y, x] = 0
        self.chars[y, x] = ""

    def paint(self, x: int, y: int, d: Direction, p: Pen) -> None:
        self._check(x, y)
        if self.kinds[y, x] != DRAWING:
            self.kinds[y, x] = DRAWING
            self.pens[y, x] = 0
            self.chars[y, x] = ""
        self.pens[y, x, int(d)] = max(int(self.pens[y, x, int(d)]), int(p))

    def clear(self, x: int, y: int, w: int, h: int) -> None:
        """Wipe a w x h rectangle, keeping the outward arms of its edge cells."""
        assert w >= 0
        assert h >= 0
        for xx in range(x, x + w):
            for yy in range(y, y + h):
                self._check(xx, yy)
                ex0 = xx == x
                ex1 = xx == x + w - 1
                ex = ex0 or ex1
                ey0 = yy == y
                ey1 = yy == y + h - 1
                ey = ey0 or ey1

                if not ex and not ey:
                    self._reset(xx, yy)
                    continue

                pens = self.pens[yy, xx]
                if ex:
                    if self.kinds[yy, xx] == DRAWING:
                        if not ey:
                            pens[Direction.UP] = Pen.NONE
                            pens[Direction.DOWN] = Pen.NONE
                        if ex0:
                            pens[Direction.RIGHT] = Pen.NONE
                        else:
                            pens[Direction.LEFT] = Pen.NONE
                    else:
                        self._reset(xx, yy)

                if ey:
                    if self.kinds[yy, xx] == DRAWING:
                        if not ex:
                            pens[Direction.LEFT] = Pen.NONE
                            pens[Direction.RIGHT] = Pen.NONE
                        if ey0:
                            pens[Direction.DOWN] = Pen.NONE
                        else:
                            pens[Direction.UP] = Pen.NONE
                    else:
                        self._reset(xx, yy)

    def paint_decoration(self, x: int, y: int, text: str) -> None:
        # NUL leaves the field underneath untouched
        for n, c in enumerate(text):
            if c == "\0":
                continue
            self._check(x + n, y)
            self.kinds[y, x + n] = DECORATION
            self.pens[y, x + n] = 0
            self.chars[y, x + n] = c

    def paint_wall(self, x0: int, y0: int, length: int, d: Direction, inclusive: bool, p: Pen) -> None:
        """Paint a straight line of `length` cells starting at (x0, y0).

        Interior cells get both arms along the line. The endpoints get their
        inward arm only when `inclusive` is set, so adjoining walls can meet.
        """
        assert length >= 0
        d = Direction(d)
        back = d.opposite()
        dx, dy = d.delta()
        x1 = x0 + length * dx
        y1 = y0 + length * dy

        if inclusive:
            self.paint(x0, y0, d, p)
        for i in range(1, length):
            xx = x0 + i * dx
            yy = y0 + i * dy
            self.paint(xx, yy, back, p)
            self.paint(xx, yy, d, p)
        if inclusive:
            self.paint(x1, y1, back, p)

    def glyph_at(self, x: int, y: int) -> str:
        """Resolved character of one field; empty string for an empty field."""
        self._check(x, y)
        kind = self.kinds[y, x]
        if kind == DECORATION:
            return self.chars[y, x]
        if kind == DRAWING:
            up, right, down, left = (int(p) for p in self.pens[y, x])
            return GLYPHS[((up * 3 + right) * 3 + down) * 3 + left]
        return ""

    def render(self, surface: CharSurface, x0: int = 0, y0: int = 0) -> None:
        for y in range(self.h + 1):
            for x in range(self.w + 1):
                glyph = self.glyph_at(x, y)
                if glyph:
                    surface.put(x0 + x, y0 + y, glyph)


class TextCanvas:
    """In-memory character surface. Writes outside the canvas are dropped."""

    def __init__(self, width: int, height: int, fill: str = " ") -> None:
        self.width = int(width)
        self.height = int(height)
        self.fill = fill
        self.cells = np.full((self.height, self.width), fill, dtype=object)

    def erase(self) -> None:
        self.cells[:, :] = self.fill

    def put(self, x: int, y: int, text: str) -> None:
        if not 0 <= y < self.height:
            return
        for n, c in enumerate(text):
            if 0 <= x + n < self.width:
                self.cells[y, x + n] = c

    def lines(self) -> List[str]:
        return ["".join(row).rstrip() for row in self.cells]

    def __str__(self) -> str:
        return "\n".join(self.lines())
