from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .block import Block, ExplosionResult
from .particles import Particle
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    UP = 3
    DOWN = 4
    ROTATE = 5
    DROP = 6
    SWAP = 7
    PAUSE = 8
    QUIT = 9
    RESTART = 10


_MOVES = {
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
}


@dataclass
class GameConfig:
    width: int = 16
    height: int = 12
    random_seed: Optional[int] = None
    spawn_x: int = 2
    spawn_y: int = 2
    preview_x: int = 1
    preview_y: int = 1
    # Seconds
    drop_timeout: float = 15.0
    drop_grace: float = 0.5
    multiplier_timeout: float = 60.0
    particle_ttl: float = 5.0


@dataclass
class DropOutcome:
    explosion: ExplosionResult
    bonus: int
    multiplier: int


class GridoGame:
    """Single game of Grido, advanced one action per frame.

    Timers are sampled from `clock` (seconds, monotonic) on every step; there
    is no background work. Pausing shifts the timer start points forward by
    the paused duration.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 clock: Optional[Callable[[], float]] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.clock = clock or time.monotonic
        self.rng = random.Random(self.config.random_seed)
        self.border = Block.new_border(self.config.width, self.config.height)
        self.playfield = Block()
        self.block = Block()
        self.next_block = Block()
        self.particles: List[Particle] = []
        self.score = 0
        self.multiplier = self.rules.initial_multiplier
        self.game_over = False
        self.quit_requested = False
        self.paused = False
        self.pause_start = 0.0
        self.last_drop_time = 0.0
        self.last_mult_time = 0.0
        self.last_drop: Optional[DropOutcome] = None
        self.reset()

    def reset(self) -> None:
        now = self.clock()
        self.playfield = Block()
        self.particles = []
        self.score = 0
        self.multiplier = self.rules.initial_multiplier
        self.game_over = False
        self.quit_requested = False
        self.paused = False
        self.last_drop_time = now
        self.last_mult_time = now
        self.last_drop = None
        self.block = Block.new_random(self.score, self.rng).moved_to(self.config.spawn_x, self.config.spawn_y)
        self.next_block = self._new_preview()
        logger.info("new game %dx%d", self.config.width, self.config.height)

    @property
    def level(self) -> int:
        return self.rules.level_for(self.score)

    @property
    def done(self) -> bool:
        return self.game_over or self.quit_requested

    def _new_preview(self) -> Block:
        return Block.new_random(self.score, self.rng).moved_to(self.config.preview_x, self.config.preview_y)

    def drop_elapsed(self) -> float:
        return (self.pause_start if self.paused else self.clock()) - self.last_drop_time

    def multiplier_elapsed(self) -> float:
        return (self.pause_start if self.paused else self.clock()) - self.last_mult_time

    def blocked(self, block: Block) -> bool:
        return block.collides_with(self.border) or block.collides_with(self.playfield)

    # Moves

    def try_move(self, moved: Block) -> bool:
        """Accept `moved` as the falling block if it fits, resolving collisions.

        Returns False and leaves all state untouched when the move is refused.
        """
        if moved.intersects(self.border):
            return False
        if moved.collides_with(self.playfield):
            moved2, playfield2 = Block.collide(moved, self.playfield)
            if moved2.collides_with(playfield2):
                return False
            self.playfield = playfield2
            moved = moved2
        self.block = moved
        return True

    def swap(self) -> bool:
        moved = self.next_block.moved_to(self.block.x, self.block.y)
        if self.blocked(moved):
            return False
        self.next_block = self.block.moved_to(self.config.preview_x, self.config.preview_y)
        self.block = moved
        return True

    def _toggle_pause(self, now: float) -> None:
        if not self.paused:
            self.paused = True
            self.pause_start = now
            return
        paused_for = now - self.pause_start
        self.last_drop_time += paused_for
        self.last_mult_time += paused_for
        for p in self.particles:
            p.start += paused_for
        self.paused = False

    # Drops

    def settle(self, now: float) -> Optional[DropOutcome]:
        """Drop the falling block into the playfield and run one explosion cycle."""
        if not self.block.drop(self.playfield, self.border):
            logger.debug("drop refused at (%d, %d)", self.block.x, self.block.y)
            return None

        self.last_drop_time = now
        result = self.playfield.explode()
        bonus = self.rules.award(result.hits, self.multiplier)
        self.score += bonus

        if result.dmult != 0:
            self.multiplier = self.rules.apply_multiplier_delta(self.multiplier, result.dmult)
            self.last_mult_time = now

        px = 4 * self.block.x
        py = 2 * self.block.y
        ttl = self.config.particle_ttl
        if bonus > 0:
            self.particles.append(Particle(px, py, str(bonus), now, ttl))
        if result.dmult > 0:
            self.particles.append(Particle(px, py + 1, f"+x{result.dmult}", now, ttl))
        elif result.dmult < 0:
            self.particles.append(Particle(px, py + 1, f"-x{-result.dmult}", now, ttl))

        self.block = self.next_block.moved(
            self.config.spawn_x - self.config.preview_x, self.config.spawn_y - self.config.preview_y
        )
        self.next_block = self._new_preview()
        if self.blocked(self.block):
            self.game_over = True
            logger.info("game over, score %d", self.score)

        outcome = DropOutcome(result, bonus, self.multiplier)
        self.last_drop = outcome
        return outcome

    def step(self, action: Action = Action.NONE) -> Tuple[np.ndarray, int, bool, dict]:
        """Advance one frame with one input action."""
        now = self.clock()
        action = Action(action)

        if action == Action.RESTART:
            self.reset()
            return self.get_state(), 0, self.done, self._info()
        if action == Action.QUIT:
            self.quit_requested = True
            return self.get_state(), 0, True, self._info()
        if self.game_over:
            return self.get_state(), 0, True, self._info()
        if action == Action.PAUSE:
            self._toggle_pause(now)
            return self.get_state(), 0, False, self._info()
        if self.paused:
            return self.get_state(), 0, False, self._info()

        self.particles = [p for p in self.particles if not p.dead(now)]
        drop = now - self.last_drop_time >= self.config.drop_timeout
        mult_over = now - self.last_mult_time >= self.config.multiplier_timeout

        if action in _MOVES:
            dx, dy = _MOVES[action]
            self.try_move(self.block.moved(dx, dy))
        elif action == Action.ROTATE:
            self.try_move(self.block.turned())
        elif action == Action.SWAP:
            self.swap()
        elif action == Action.DROP:
            if now - self.last_drop_time > self.config.drop_grace:
                drop = True

        score_before = self.score
        if self.block.is_empty() or drop:
            self.settle(now)

        if mult_over and self.multiplier != self.rules.initial_multiplier:
            self.multiplier = self.rules.decay_multiplier(self.multiplier)
            self.last_mult_time = now
        elif self.multiplier == self.rules.initial_multiplier:
            self.last_mult_time = now

        return self.get_state(), self.score - score_before, self.done, self._info()

    def _info(self) -> dict:
        return {
            "score": self.score,
            "multiplier": self.multiplier,
            "level": self.level,
            "paused": self.paused,
        }

    def get_state(self) -> np.ndarray:
        """Tile kind codes of the playground; the falling block is overlaid negated."""
        state = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for source, sign in ((self.border, 1), (self.playfield, 1), (self.block, -1)):
            for x, y, tt in source:
                if 0 <= y < self.config.height and 0 <= x < self.config.width:
                    state[y, x] = sign * int(tt.kind)
        return state
