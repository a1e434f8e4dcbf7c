from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .tiles import ActionKind, ExplodeAction, LiquidType, Offset, TileType

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]
Tile = Tuple[int, int, TileType]

# Explosions consuming more tiles than this earn a multiplier bonus
BULK_THRESHOLD = 12

SHAPES: Dict[str, Tuple[Offset, ...]] = {
    "1x1": ((0, 0),),
    "1x2": ((0, -1), (0, 0)),
    "1x3": ((0, -1), (0, 0), (0, 1)),
    "eight": ((0, -1), (0, 1)),
    "diagonal": ((-1, -1), (0, 0)),
    "l": ((-1, 0), (0, 0), (0, -1)),
    "castle": ((0, -1), (-1, 0), (1, 0)),
}

_SPILL_OFFSETS = ((0, 0), (0, 1), (1, 0), (0, -1), (-1, 0))


@dataclass
class ExplosionResult:
    exploded: List[Tile] = field(default_factory=list)
    hits: int = 0
    dmult: int = 0


class Block:
    """Anchored set of tiles.

    Tiles are stored as (dx, dy, tile) offsets from the anchor (x, y). The
    same type serves as the falling piece, the preview, the border and the
    playfield. At most one tile sits on any absolute coordinate.
    """

    def __init__(self, x: int = 0, y: int = 0, tiles: Optional[Iterable[Tile]] = None) -> None:
        self.x = int(x)
        self.y = int(y)
        self.tiles: List[Tile] = list(tiles) if tiles is not None else []

    @classmethod
    def from_shape(cls, shape: Iterable[Offset], score: int, rng: random.Random) -> "Block":
        return cls(0, 0, [(dx, dy, TileType.new_random(score, rng)) for dx, dy in shape])

    @classmethod
    def new_random(cls, score: int, rng: random.Random) -> "Block":
        shape = rng.choice(list(SHAPES.values()))
        return cls.from_shape(shape, score, rng)

    @classmethod
    def new_border(cls, w: int, h: int) -> "Block":
        """Ring of permanent tiles enclosing a w x h playground."""
        assert w >= 0
        assert h >= 0
        tiles: List[Tile] = []
        for x in range(w - 1):
            tiles.append((x, 0, TileType.permanent()))
            tiles.append((x + 1, h - 1, TileType.permanent()))
        for y in range(h - 1):
            tiles.append((0, y + 1, TileType.permanent()))
            tiles.append((w - 1, y, TileType.permanent()))
        return cls(0, 0, tiles)

    def __repr__(self) -> str:
        return f"Block(x={self.x}, y={self.y}, tiles={self.tiles!r})"

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        """Tiles at absolute coordinates."""
        for dx, dy, tt in self.tiles:
            yield self.x + dx, self.y + dy, tt

    def is_empty(self) -> bool:
        return not self.tiles

    def positions(self) -> Set[Coordinate]:
        return {(x, y) for x, y, _ in self}

    def offsets(self) -> Set[Tile]:
        return set(self.tiles)

    def copy(self) -> "Block":
        return Block(self.x, self.y, self.tiles)

    # Geometry

    def at(self, x: int, y: int) -> Optional[TileType]:
        for dx, dy, tt in self.tiles:
            if x == self.x + dx and y == self.y + dy:
                return tt
        return None

    def moved(self, dx: int, dy: int) -> "Block":
        return Block(self.x + dx, self.y + dy, self.tiles)

    def moved_to(self, x: int, y: int) -> "Block":
        return self.moved(x - self.x, y - self.y)

    def turned(self) -> "Block":
        return Block(self.x, self.y, [(dy, -dx, tt) for dx, dy, tt in self.tiles])

    def intersects(self, other: "Block") -> bool:
        for x, y, _ in self:
            if other.at(x, y) is not None:
                return True
        return False

    def collides_with(self, other: "Block") -> bool:
        for x, y, tt in self:
            other_tt = other.at(x, y)
            if other_tt is not None and TileType.collides(tt, other_tt):
                return True
        return False

    @staticmethod
    def collide(moving: "Block", stationary: "Block") -> Tuple["Block", "Block"]:
        """Resolve every overlap of `moving` with `stationary`.

        Returns updated copies of both blocks; neither argument is modified.
        """
        moved_tiles: List[Tile] = []
        still_tiles: List[Tile] = list(stationary.tiles)

        for dx, dy, tt in moving.tiles:
            x = moving.x + dx
            y = moving.y + dy
            other = stationary.at(x, y)
            if other is None or not TileType.collides(tt, other):
                moved_tiles.append((dx, dy, tt))
                continue

            new_moving, new_still = TileType.collide(tt, other)
            if new_moving is not None:
                moved_tiles.append((dx, dy, new_moving))
            still_tiles = [
                (sdx, sdy, stt)
                for sdx, sdy, stt in still_tiles
                if stationary.x + sdx != x or stationary.y + sdy != y
            ]
            if new_still is not None:
                still_tiles.append((x - stationary.x, y - stationary.y, new_still))

        return Block(moving.x, moving.y, moved_tiles), Block(stationary.x, stationary.y, still_tiles)

    def drop(self, dest: "Block", border: "Block") -> bool:
        """Merge this block into `dest`. Refused (False, no change) on any overlap."""
        if self.intersects(border) or self.intersects(dest):
            return False

        ddx = self.x - dest.x
        ddy = self.y - dest.y
        for dx, dy, tt in self.tiles:
            dropped = tt.drop()
            if dropped is not None:
                dest.tiles.append((dx + ddx, dy + ddy, dropped))
        return True

    # Explosions

    def _kill_list(self) -> Set[Coordinate]:
        kills: Set[Coordinate] = set()
        for x, y, tt in self:
            matched: List[Coordinate] = []
            for dx, dy in tt.explode_shape():
                neighbor = self.at(x + dx, y + dy)
                if neighbor is None or not tt.explodes(neighbor):
                    break
                matched.append((x + dx, y + dy))
            else:
                kills.update(matched)
        return kills

    def _apply(self, action: ExplodeAction, dx: int, dy: int,
               kept: List[Tile], spills: List[Tuple[int, int, LiquidType]]) -> int:
        if action.kind == ActionKind.CONVERT:
            kept.append((dx, dy, action.tile))
            return 0
        if action.kind == ActionKind.SPILL:
            for sx, sy in _SPILL_OFFSETS:
                spills.append((dx + sx, dy + sy, action.liquid))
            return 0
        if action.kind == ActionKind.PLUS:
            return 1
        if action.kind == ActionKind.MINUS:
            return -1
        if action.kind == ActionKind.COMPLEX:
            return sum(self._apply(part, dx, dy, kept, spills) for part in action.parts)
        return 0

    def explode(self) -> ExplosionResult:
        """Detonate every tile whose whole explode shape holds compatible tiles.

        Tiles covered by any satisfied shape are consumed: their bonus is
        added to `hits`, their explode action applied, and Plus/Minus effects
        summed into `dmult`. Flask spills land only on empty cells.
        """
        kills = self._kill_list()
        result = ExplosionResult()
        if not kills:
            return result

        kept: List[Tile] = []
        spills: List[Tuple[int, int, LiquidType]] = []
        for dx, dy, tt in self.tiles:
            if (self.x + dx, self.y + dy) in kills:
                result.exploded.append((dx, dy, tt))
                result.dmult += self._apply(tt.explode(), dx, dy, kept, spills)
                result.hits += tt.bonus()
            else:
                kept.append((dx, dy, tt))

        self.tiles = kept
        for dx, dy, liquid in spills:
            if self.at(self.x + dx, self.y + dy) is None:
                self.tiles.append((dx, dy, TileType.spillage(liquid)))

        count = len(result.exploded)
        if count > BULK_THRESHOLD:
            result.dmult += (count - 9) // 9

        logger.debug("explosion: %d tiles, hits=%d, dmult=%d", count, result.hits, result.dmult)
        return result
