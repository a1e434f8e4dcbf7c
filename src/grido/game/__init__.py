"""Game module for Grido.

Exports the engine and its supporting pieces:
- Grid: Line compositor resolving directional pens to box-drawing glyphs
- TileType: Tile chemistry (drop, explode, collide rules)
- Block: Anchored tile sets with geometry, collisions and explosions
- ScoringRules: Level thresholds and multiplier handling
- GridoGame: Frame-driven game loop state
"""

from .drawing import Pen, Direction, FieldDrawing, Empty, Decoration, Drawing
from .grid import Grid, TextCanvas
from .tiles import TileType, TileKind, LiquidType, ExplodeAction, ActionKind
from .block import Block, ExplosionResult, SHAPES
from .rules import ScoringRules, level
from .particles import Particle
from .core import GridoGame, GameConfig, Action, DropOutcome
from .scene import Frame, compose_frame, render_frame

__all__ = [
    "Pen",
    "Direction",
    "FieldDrawing",
    "Empty",
    "Decoration",
    "Drawing",
    "Grid",
    "TextCanvas",
    "TileType",
    "TileKind",
    "LiquidType",
    "ExplodeAction",
    "ActionKind",
    "Block",
    "ExplosionResult",
    "SHAPES",
    "ScoringRules",
    "level",
    "Particle",
    "GridoGame",
    "GameConfig",
    "Action",
    "DropOutcome",
    "Frame",
    "compose_frame",
    "render_frame",
]
