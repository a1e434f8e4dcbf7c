from __future__ import annotations

from typing import Dict, Optional

import pygame

from grido.game import Frame, TextCanvas, render_frame
from .palette import BACKGROUND, FOREGROUND


class Renderer:
    """Draws composed frames as a grid of monospace character cells."""

    def __init__(self, font_size: int = 18, margin: int = 10, font_name: Optional[str] = None) -> None:
        self.margin = margin
        self.font = pygame.font.SysFont(font_name or "dejavusansmono,menlo,consolas,monospace", font_size)
        self.cell_w, self.cell_h = self.font.size("M")
        self._glyphs: Dict[str, pygame.Surface] = {}

    def window_size(self, frame: Frame) -> tuple[int, int]:
        return (frame.width * self.cell_w + self.margin * 2,
                frame.height * self.cell_h + self.margin * 2)

    def _glyph(self, ch: str) -> pygame.Surface:
        surf = self._glyphs.get(ch)
        if surf is None:
            surf = self.font.render(ch, True, FOREGROUND)
            self._glyphs[ch] = surf
        return surf

    def draw(self, screen: pygame.Surface, frame: Frame) -> None:
        canvas = TextCanvas(frame.width, frame.height)
        render_frame(frame, canvas)
        screen.fill(BACKGROUND)
        for y, row in enumerate(canvas.cells):
            for x, ch in enumerate(row):
                if ch != " ":
                    screen.blit(self._glyph(ch), (self.margin + x * self.cell_w, self.margin + y * self.cell_h))
        pygame.display.flip()
