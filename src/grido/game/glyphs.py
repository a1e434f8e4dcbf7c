from __future__ import annotations

"""
Box-drawing glyph table.

Keys are (up, right, down, left) pen tuples; every one of the 3**4 combinations
has an entry. `GLYPHS` is the same table flattened into a numpy array indexed
by `pack()`.
"""

from typing import Dict, Tuple

import numpy as np

from .drawing import FieldDrawing, Pen

PenTuple = Tuple[Pen, Pen, Pen, Pen]

_N, _T, _K = Pen.NONE, Pen.THIN, Pen.THICK

BOX_GLYPHS: Dict[PenTuple, str] = {
    (_N, _N, _N, _N): " ",

    # Thin only
    (_N, _N, _N, _T): "╴",
    (_N, _N, _T, _N): "╷",
    (_N, _N, _T, _T): "┐",
    (_N, _T, _N, _N): "╶",
    (_N, _T, _N, _T): "─",
    (_N, _T, _T, _N): "┌",
    (_N, _T, _T, _T): "┬",
    (_T, _N, _N, _N): "╵",
    (_T, _N, _N, _T): "┘",
    (_T, _N, _T, _N): "│",
    (_T, _N, _T, _T): "┤",
    (_T, _T, _N, _N): "└",
    (_T, _T, _N, _T): "┴",
    (_T, _T, _T, _N): "├",
    (_T, _T, _T, _T): "┼",

    # Thick only
    (_N, _N, _N, _K): "╸",
    (_N, _N, _K, _N): "╻",
    (_N, _N, _K, _K): "┓",
    (_N, _K, _N, _N): "╺",
    (_N, _K, _N, _K): "━",
    (_N, _K, _K, _N): "┏",
    (_N, _K, _K, _K): "┳",
    (_K, _N, _N, _N): "╹",
    (_K, _N, _N, _K): "┛",
    (_K, _N, _K, _N): "┃",
    (_K, _N, _K, _K): "┫",
    (_K, _K, _N, _N): "┗",
    (_K, _K, _N, _K): "┻",
    (_K, _K, _K, _N): "┣",
    (_K, _K, _K, _K): "╋",

    # Mixed
    (_N, _N, _K, _T): "┒",
    (_N, _N, _T, _K): "┑",
    (_N, _K, _N, _T): "╼",
    (_N, _K, _K, _T): "┲",
    (_N, _K, _T, _N): "┍",
    (_N, _K, _T, _K): "┯",
    (_N, _K, _T, _T): "┮",
    (_N, _T, _N, _K): "╾",
    (_N, _T, _K, _N): "┎",
    (_N, _T, _K, _K): "┱",
    (_N, _T, _K, _T): "┰",
    (_N, _T, _T, _K): "┭",
    (_K, _N, _N, _T): "┚",
    (_K, _N, _K, _T): "┨",
    (_K, _N, _T, _N): "╿",
    (_K, _N, _T, _K): "┩",
    (_K, _N, _T, _T): "┦",
    (_K, _K, _N, _T): "┺",
    (_K, _K, _K, _T): "╊",
    (_K, _K, _T, _N): "┡",
    (_K, _K, _T, _K): "╇",
    (_K, _K, _T, _T): "╄",
    (_K, _T, _N, _N): "┖",
    (_K, _T, _N, _K): "┹",
    (_K, _T, _N, _T): "┸",
    (_K, _T, _K, _N): "┠",
    (_K, _T, _K, _K): "╉",
    (_K, _T, _K, _T): "╂",
    (_K, _T, _T, _N): "┞",
    (_K, _T, _T, _K): "╃",
    (_K, _T, _T, _T): "╀",
    (_T, _N, _N, _K): "┙",
    (_T, _N, _K, _N): "╽",
    (_T, _N, _K, _K): "┪",
    (_T, _N, _K, _T): "┧",
    (_T, _N, _T, _K): "┥",
    (_T, _K, _N, _N): "┕",
    (_T, _K, _N, _K): "┷",
    (_T, _K, _N, _T): "┶",
    (_T, _K, _K, _N): "┢",
    (_T, _K, _K, _K): "╈",
    (_T, _K, _T, _T): "┾",
    (_T, _K, _K, _T): "╆",
    (_T, _K, _T, _N): "┝",
    (_T, _K, _T, _K): "┿",
    (_T, _T, _N, _K): "┵",
    (_T, _T, _K, _N): "┟",
    (_T, _T, _K, _K): "╅",
    (_T, _T, _K, _T): "╁",
    (_T, _T, _T, _K): "┽",
}


def pack(up: int, right: int, down: int, left: int) -> int:
    return ((int(up) * 3 + int(right)) * 3 + int(down)) * 3 + int(left)


def _build_table() -> np.ndarray:
    table = np.full(3 ** 4, "", dtype=object)
    for key, glyph in BOX_GLYPHS.items():
        table[pack(*key)] = glyph
    assert all(table), "box glyph table must cover every pen combination"
    return table


GLYPHS: np.ndarray = _build_table()


def glyph_for(drawing: FieldDrawing) -> str:
    return GLYPHS[pack(*drawing)]
