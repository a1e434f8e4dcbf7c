from __future__ import annotations

"""
Painting blocks and composing whole frames on top of the line compositor.

A playground cell is 5x3 characters, but neighboring cells share their walls,
so cell (x, y) occupies the character box starting at (4x, 2y).
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from .block import Block
from .drawing import Direction, Pen
from .grid import CharSurface, Grid
from .tiles import TileType

if TYPE_CHECKING:
    from .core import GridoGame

CELL_W = 4
CELL_H = 2
GAUGE_CELLS = 12
_EIGHTHS = " ▏▎▍▌▋▊▉"


def paint_tile(x0: int, y0: int, w: int, h: int, grid: Grid,
               have_up: bool, have_right: bool, have_down: bool, have_left: bool,
               pen1: Pen = Pen.THIN, pen2: Pen = Pen.THICK) -> None:
    """Outline a tile. Sides facing a solid neighbor get `pen1`, open sides `pen2`."""
    x1 = x0 + w
    y1 = y0 + h
    walls = [
        (x0, y0, w, Direction.RIGHT, have_up),
        (x1, y0, h, Direction.DOWN, have_right),
        (x0, y1, w, Direction.RIGHT, have_down),
        (x0, y0, h, Direction.DOWN, have_left),
    ]
    for x, y, length, d, shared in walls:
        grid.paint_wall(x, y, length, d, not shared, pen1 if shared else pen2)


def _solid(tt: Optional[TileType]) -> bool:
    return tt is not None and tt.is_solid()


def paint_cell(block: Block, x: int, y: int, tt: TileType, grid: Grid) -> None:
    tx = CELL_W * x
    ty = CELL_H * y
    grid.clear(tx, ty, CELL_W + 1, CELL_H + 1)

    if tt.is_solid():
        paint_tile(tx, ty, CELL_W, CELL_H, grid,
                   _solid(block.at(x, y - 1)), _solid(block.at(x + 1, y)),
                   _solid(block.at(x, y + 1)), _solid(block.at(x - 1, y)))
        grid.paint_decoration(tx + 1, ty + 1, tt.render())
    else:
        c = tt.render()
        grid.paint_decoration(tx, ty, f" {c} {c} ")
        grid.paint_decoration(tx, ty + 1, f"{c} {c} {c}")
        grid.paint_decoration(tx, ty + 2, f" {c} {c} ")


def paint_block(block: Block, grid: Grid) -> None:
    # Liquids first so solid walls end up on top
    for x, y, tt in block:
        if not tt.is_solid():
            paint_cell(block, x, y, tt, grid)
    for x, y, tt in block:
        if tt.is_solid():
            paint_cell(block, x, y, tt, grid)


def paint_background(grid: Grid) -> None:
    for xx in range(grid.w):
        for yy in range(grid.h):
            if xx % 3 == yy % 3:
                grid.paint_decoration(xx, yy, ".")

    # 3x3 lattice hinting at the explosion shape
    grid.clear(5, 3, 12, 6)
    for i in range(3):
        grid.paint_wall(6 + 4 * i, 2, 6, Direction.DOWN, True, Pen.THIN)
    for i in range(3):
        grid.paint_wall(4, 3 + 2 * i, 12, Direction.RIGHT, True, Pen.THIN)


def gauge(elapsed: float, limit: float) -> Tuple[str, bool]:
    """Render a `◂…▸` progress bar. Returns the bar and whether time is up."""
    remaining = max(0.0, limit - elapsed)
    frac = int(GAUGE_CELLS * 8 * (limit - remaining) / limit)
    bar = "◂" + "█" * (frac // 8)
    if remaining > 0:
        bar += _EIGHTHS[frac % 8]
    bar += " " * max(0, GAUGE_CELLS - 1 - frac // 8)
    bar += "▸"
    return bar, remaining == 0


def paint_text(grid: Grid, x: int, y: int, text: str) -> None:
    """Lay `text` as decorations, dropping whatever falls outside the grid."""
    if not 0 <= y <= grid.h or x > grid.w:
        return
    if x < 0:
        text = text[-x:]
        x = 0
    grid.paint_decoration(x, y, text[: grid.w + 1 - x])


@dataclass
class Frame:
    grid: Grid
    gridlet: Grid
    status: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def width(self) -> int:
        side = max([self.gridlet.w + 1] + [len(text) for _, text in self.status])
        return self.grid.w + 1 + side

    @property
    def height(self) -> int:
        rows = [self.gridlet.h + 1] + [self.gridlet.h + 1 + row + 1 for row, _ in self.status]
        return max([self.grid.h + 1] + rows)


def compose_frame(game: "GridoGame") -> Frame:
    cfg = game.config
    grid = Grid(CELL_W * cfg.width, CELL_H * cfg.height)
    gridlet = Grid(12, 6)

    if game.paused:
        paint_text(grid, grid.w // 2 - 3, cfg.height, "Pause.")
        return Frame(grid, gridlet)

    paint_background(grid)
    paint_block(game.playfield, grid)
    paint_block(game.border, grid)
    paint_block(game.block, grid)
    paint_block(game.next_block, gridlet)

    for p in game.particles:
        paint_text(grid, p.x, p.y, p.face)

    drop_bar, _ = gauge(game.drop_elapsed(), cfg.drop_timeout)
    mult_bar, _ = gauge(game.multiplier_elapsed(), cfg.multiplier_timeout)
    status = [
        (0, drop_bar),
        (1, f"Score: {game.score}"),
        (2, f"Level: {game.level}"),
        (4, mult_bar),
        (5, f"Multi: x{game.multiplier}"),
    ]
    if game.game_over:
        status.append((7, "Game over."))
    return Frame(grid, gridlet, status)


def render_frame(frame: Frame, surface: CharSurface) -> None:
    frame.grid.render(surface, 0, 0)
    side_x = frame.grid.w + 1
    frame.gridlet.render(surface, side_x, 0)
    for row, text in frame.status:
        surface.put(side_x, frame.gridlet.h + 1 + row, text)
