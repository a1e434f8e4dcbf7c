from __future__ import annotations

from typing import Tuple

from grido.game import TileKind

Color = Tuple[int, int, int]

BACKGROUND: Color = (10, 10, 14)
FOREGROUND: Color = (220, 220, 220)

_PALETTE = {
    0: (20, 20, 26),
    TileKind.PLAIN: (150, 150, 160),
    TileKind.PERMANENT: (90, 90, 100),
    TileKind.KILLER: (240, 0, 0),
    TileKind.PICKER: (0, 240, 240),
    TileKind.CENTERPIECE: (240, 240, 0),
    TileKind.WHOPPER: (240, 160, 0),
    TileKind.FLASK: (160, 0, 240),
    TileKind.SPILLAGE: (0, 120, 60),
    TileKind.PLUS: (0, 240, 0),
    TileKind.MINUS: (0, 0, 240),
}


def color_for_code(v: int) -> Color:
    """Color of a `GridoGame.get_state()` cell; falling tiles (negative) are brighter."""
    r, g, b = _PALETTE.get(abs(v), (200, 200, 200))
    if v < 0:
        return min(255, r + 40), min(255, g + 40), min(255, b + 40)
    return r, g, b
