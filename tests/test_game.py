"""Test the frame-stepped game: moves, drops, timers, pause and game over."""

import numpy as np
import pytest

from grido.game import Action, Block, GameConfig, GridoGame, TileKind, TileType

P0 = TileType.plain(0)


class FakeClock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def game(clock):
    return GridoGame(GameConfig(random_seed=1234), clock=clock)


def ring(cx: int, cy: int, tile: TileType = P0, center: bool = False) -> list:
    return [
        (x, y, tile)
        for y in range(cy - 1, cy + 2)
        for x in range(cx - 1, cx + 2)
        if center or (x, y) != (cx, cy)
    ]


class TestSetup:
    """A fresh game."""

    def test_initial_state(self, game):
        assert (game.block.x, game.block.y) == (2, 2)
        assert (game.next_block.x, game.next_block.y) == (1, 1)
        assert not game.block.is_empty()
        assert game.playfield.is_empty()
        assert len(game.border) == 52
        assert game.score == 0
        assert game.multiplier == 1
        assert game.level == 0
        assert not game.done

    def test_seed_reproduces_blocks(self, clock):
        a = GridoGame(GameConfig(random_seed=99), clock=clock)
        b = GridoGame(GameConfig(random_seed=99), clock=clock)
        assert a.block.offsets() == b.block.offsets()
        assert a.next_block.offsets() == b.next_block.offsets()


class TestMoves:
    """Moving and rotating the falling block."""

    def test_move_right_and_down(self, game):
        game.block = Block(5, 5, [(0, 0, P0)])
        game.step(Action.RIGHT)
        game.step(Action.DOWN)
        assert (game.block.x, game.block.y) == (6, 6)
        game.step(Action.UP)
        game.step(Action.LEFT)
        assert (game.block.x, game.block.y) == (5, 5)

    def test_border_refuses_move(self, game):
        game.block = Block(1, 5, [(0, 0, P0)])
        game.step(Action.LEFT)
        assert (game.block.x, game.block.y) == (1, 5)

    def test_plain_overlap_refuses_move(self, game):
        game.playfield = Block(0, 0, [(6, 5, TileType.plain(1))])
        game.block = Block(5, 5, [(0, 0, P0)])
        game.step(Action.RIGHT)
        assert (game.block.x, game.block.y) == (5, 5)
        assert game.playfield.tiles == [(6, 5, TileType.plain(1))]

    def test_killer_clears_its_path(self, game):
        game.playfield = Block(0, 0, [(6, 5, P0)])
        game.block = Block(5, 5, [(0, 0, TileType.killer(2))])
        game.step(Action.RIGHT)
        assert (game.block.x, game.block.y) == (6, 5)
        assert game.block.tiles == [(0, 0, TileType.killer(1))]
        assert game.playfield.is_empty()

    def test_picker_takes_tile_along(self, game):
        game.playfield = Block(0, 0, [(6, 5, TileType.plain(3))])
        game.block = Block(5, 5, [(0, 0, TileType.picker())])
        game.step(Action.RIGHT)
        assert game.block.tiles == [(0, 0, TileType.plain(3))]
        assert game.playfield.is_empty()

    def test_rotate(self, game):
        game.block = Block(5, 5, [(0, 0, P0), (1, 0, TileType.picker())])
        game.step(Action.ROTATE)
        assert game.block.offsets() == {(0, 0, P0), (0, -1, TileType.picker())}

    def test_rotate_into_border_is_refused(self, game):
        game.block = Block(5, 1, [(0, 0, P0), (1, 0, P0)])
        game.step(Action.ROTATE)
        assert game.block.offsets() == {(0, 0, P0), (1, 0, P0)}


class TestSwap:
    """Exchanging the falling block with the preview."""

    def test_swap(self, game):
        game.block = Block(5, 5, [(0, 0, P0)])
        game.next_block = Block(1, 1, [(0, 0, TileType.picker())])
        game.step(Action.SWAP)
        assert (game.block.x, game.block.y) == (5, 5)
        assert game.block.tiles == [(0, 0, TileType.picker())]
        assert (game.next_block.x, game.next_block.y) == (1, 1)
        assert game.next_block.tiles == [(0, 0, P0)]

    def test_swap_refused_when_blocked(self, game):
        game.block = Block(1, 5, [(0, 0, P0)])
        game.next_block = Block(1, 1, [(-1, 0, TileType.picker())])
        game.step(Action.SWAP)
        assert game.block.tiles == [(0, 0, P0)]
        assert game.next_block.tiles == [(-1, 0, TileType.picker())]


class TestDrops:
    """Manual and automatic drops."""

    def test_drop_needs_grace_period(self, game, clock):
        game.block = Block(5, 5, [(0, 0, P0)])
        clock.t = 0.2
        game.step(Action.DROP)
        assert game.playfield.is_empty()
        clock.t = 1.0
        game.step(Action.DROP)
        assert game.playfield.positions() == {(5, 5)}
        assert (game.block.x, game.block.y) == (2, 2)
        assert game.last_drop_time == 1.0

    def test_automatic_drop(self, game, clock):
        game.block = Block(5, 5, [(0, 0, P0)])
        clock.t = 14.9
        game.step(Action.NONE)
        assert game.playfield.is_empty()
        clock.t = 15.0
        game.step(Action.NONE)
        assert game.playfield.positions() == {(5, 5)}

    def test_next_block_keeps_its_shape(self, game, clock):
        game.block = Block(5, 5, [(0, 0, P0)])
        preview = game.next_block.offsets()
        clock.t = 1.0
        game.step(Action.DROP)
        assert game.block.offsets() == preview
        assert (game.next_block.x, game.next_block.y) == (1, 1)

    def test_explosion_scores_and_spawns_particle(self, game, clock):
        game.playfield = Block(0, 0, ring(5, 5))
        game.block = Block(5, 5, [(0, 0, P0)])
        clock.t = 1.0
        _, gained, done, info = game.step(Action.DROP)
        assert gained == 9
        assert game.score == 9
        assert info["score"] == 9
        assert not done
        assert game.playfield.is_empty()
        assert game.last_drop.explosion.hits == 9
        assert [(p.x, p.y, p.face) for p in game.particles] == [(20, 10, "9")]

    def test_particles_expire(self, game, clock):
        game.playfield = Block(0, 0, ring(5, 5))
        game.block = Block(5, 5, [(0, 0, P0)])
        clock.t = 1.0
        game.step(Action.DROP)
        clock.t = 6.5
        game.step(Action.NONE)
        assert game.particles == []


class TestMultiplier:
    """Multiplier changes and decay."""

    def test_minus_tiles_clamp_at_zero(self, game, clock):
        tiles = [(x, y, TileType.minus() if (x + y) % 2 == 0 else P0) for x, y, _ in ring(5, 5)]
        game.playfield = Block(0, 0, tiles)
        game.block = Block(5, 5, [(0, 0, P0)])
        game.multiplier = 3
        clock.t = 1.0
        game.step(Action.DROP)
        # 4 minus in the ring plus none at the center
        assert game.last_drop.explosion.dmult == -4
        assert game.score == 27
        assert game.multiplier == 0
        assert game.last_mult_time == 1.0
        faces = {p.face for p in game.particles}
        assert faces == {"27", "-x4"}

    def test_zero_multiplier_decays_back(self, game, clock):
        game.multiplier = 0
        game.last_mult_time = 0.0
        clock.t = 61.0
        game.last_drop_time = 61.0
        game.step(Action.NONE)
        assert game.multiplier == 1

    def test_high_multiplier_decays_one_step(self, game, clock):
        game.multiplier = 4
        clock.t = 60.0
        game.last_drop_time = 60.0
        game.step(Action.NONE)
        assert game.multiplier == 3
        assert game.last_mult_time == 60.0
        clock.t = 100.0
        game.last_drop_time = 100.0
        game.step(Action.NONE)
        assert game.multiplier == 3

    def test_timer_tracks_initial_multiplier(self, game, clock):
        clock.t = 10.0
        game.step(Action.NONE)
        assert game.last_mult_time == 10.0


class TestPause:
    """Pausing freezes the timers."""

    def test_pause_shifts_timers(self, game, clock):
        game.block = Block(5, 5, [(0, 0, P0)])
        clock.t = 5.0
        game.step(Action.PAUSE)
        assert game.paused
        clock.t = 20.0
        _, _, _, info = game.step(Action.NONE)
        assert info["paused"]
        assert game.playfield.is_empty()
        assert game.drop_elapsed() == pytest.approx(5.0)
        clock.t = 25.0
        game.step(Action.PAUSE)
        assert not game.paused
        assert game.last_drop_time == pytest.approx(20.0)
        assert game.drop_elapsed() == pytest.approx(5.0)
        clock.t = 34.0
        game.step(Action.NONE)
        assert game.playfield.is_empty()
        clock.t = 35.0
        game.step(Action.NONE)
        assert game.playfield.positions() == {(5, 5)}

    def test_moves_ignored_while_paused(self, game):
        game.block = Block(5, 5, [(0, 0, P0)])
        game.step(Action.PAUSE)
        game.step(Action.RIGHT)
        assert (game.block.x, game.block.y) == (5, 5)


class TestLifecycle:
    """Quit, restart and game over."""

    def test_quit(self, game):
        _, _, done, _ = game.step(Action.QUIT)
        assert done
        assert game.quit_requested

    def test_restart(self, game, clock):
        game.score = 50
        game.playfield = Block(0, 0, [(5, 5, P0)])
        clock.t = 3.0
        game.step(Action.RESTART)
        assert game.score == 0
        assert game.playfield.is_empty()
        assert game.last_drop_time == 3.0
        assert (game.block.x, game.block.y) == (2, 2)

    def test_game_over_when_spawn_is_blocked(self, game, clock):
        game.playfield = Block(0, 0, [(x, y, TileType.permanent()) for x in range(1, 4) for y in range(1, 4)])
        game.block = Block(8, 8, [(0, 0, P0)])
        clock.t = 1.0
        _, _, done, _ = game.step(Action.DROP)
        assert game.game_over
        assert done
        clock.t = 2.0
        _, gained, done, _ = game.step(Action.RIGHT)
        assert done
        assert gained == 0

    def test_restart_after_game_over(self, game, clock):
        game.game_over = True
        game.step(Action.RESTART)
        assert not game.game_over


class TestState:
    """Integer board snapshot."""

    def test_codes(self, game):
        game.playfield = Block(0, 0, [(7, 7, TileType.picker())])
        game.block = Block(5, 5, [(0, 0, P0)])
        state = game.get_state()
        assert state.shape == (12, 16)
        assert state.dtype == np.int8
        assert state[0, 0] == TileKind.PERMANENT
        assert state[11, 15] == TileKind.PERMANENT
        assert state[7, 7] == TileKind.PICKER
        assert state[5, 5] == -TileKind.PLAIN
        assert state[6, 6] == 0
