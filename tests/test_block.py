"""Test block geometry, collisions and drops."""

import random

from grido.game import SHAPES, Block, LiquidType, TileType

P0 = TileType.plain(0)


def single(x: int, y: int, tt: TileType = P0) -> Block:
    return Block(x, y, [(0, 0, tt)])


class TestGeometry:
    """Translation, rotation and lookup."""

    def test_moved_shifts_anchor_only(self):
        blk = Block(2, 3, [(1, 0, P0)])
        moved = blk.moved(1, -1)
        assert (moved.x, moved.y) == (3, 2)
        assert moved.tiles == blk.tiles
        assert (blk.x, blk.y) == (2, 3)

    def test_moved_to(self):
        blk = Block(2, 3, [(1, 0, P0)]).moved_to(7, 7)
        assert (blk.x, blk.y) == (7, 7)
        assert blk.at(8, 7) == P0

    def test_turned_maps_offsets(self):
        blk = Block(5, 5, [(1, 0, P0), (0, 1, TileType.picker())]).turned()
        assert blk.offsets() == {(0, -1, P0), (1, 0, TileType.picker())}

    def test_four_turns_restore_offsets(self):
        rng = random.Random(1)
        for shape in SHAPES.values():
            blk = Block.from_shape(shape, 0, rng).moved_to(4, 4)
            turned = blk.turned().turned().turned().turned()
            assert turned.offsets() == blk.offsets()
            assert (turned.x, turned.y) == (4, 4)

    def test_at_uses_absolute_coordinates(self):
        blk = Block(3, 4, [(-1, 0, P0)])
        assert blk.at(2, 4) == P0
        assert blk.at(-1, 0) is None

    def test_iteration_yields_absolute_tiles(self):
        blk = Block(3, 4, [(-1, 0, P0), (0, 1, TileType.picker())])
        assert list(blk) == [(2, 4, P0), (3, 5, TileType.picker())]
        assert blk.positions() == {(2, 4), (3, 5)}

    def test_intersects_is_symmetric(self):
        a = Block(0, 0, [(1, 1, P0), (2, 1, P0)])
        b = single(2, 1, TileType.spillage(LiquidType.ACID))
        c = single(4, 4)
        assert a.intersects(b) and b.intersects(a)
        assert not a.intersects(c) and not c.intersects(a)

    def test_collides_with(self):
        a = single(2, 1)
        assert a.collides_with(Block(0, 0, [(2, 1, TileType.permanent())]))
        assert not a.collides_with(single(3, 1))


class TestShapes:
    """Random blocks and the border."""

    def test_new_random_uses_known_shape(self):
        rng = random.Random(7)
        known = {frozenset(shape) for shape in SHAPES.values()}
        for _ in range(50):
            blk = Block.new_random(0, rng)
            assert frozenset((dx, dy) for dx, dy, _ in blk.tiles) in known

    def test_border_is_a_ring(self):
        border = Block.new_border(16, 12)
        assert len(border) == 52
        assert len(border.positions()) == 52
        for x, y, tt in border:
            assert tt == TileType.permanent()
            assert x in (0, 15) or y in (0, 11)
        assert border.at(0, 0) is not None
        assert border.at(15, 11) is not None
        assert border.at(5, 5) is None


class TestCollide:
    """Resolving overlaps between a moving and a stationary block."""

    def test_killer_destroys_stationary_tile(self):
        moving = single(5, 5, TileType.killer(2))
        playfield = Block(0, 0, [(5, 5, P0), (6, 5, P0)])
        moving2, playfield2 = Block.collide(moving, playfield)
        assert moving2.tiles == [(0, 0, TileType.killer(1))]
        assert playfield2.tiles == [(6, 5, P0)]
        # inputs untouched
        assert len(playfield) == 2

    def test_surviving_killer_drops_as_plain(self):
        moving, playfield = Block.collide(single(5, 5, TileType.killer(2)), Block(0, 0, [(5, 5, P0)]))
        assert moving.drop(playfield, Block.new_border(16, 12))
        assert playfield.tiles == [(5, 5, P0)]

    def test_replacement_uses_stationary_offsets(self):
        moving = single(5, 5, TileType.plain(1))
        stationary = Block(2, 3, [(3, 2, TileType.picker())])
        moving2, stationary2 = Block.collide(moving, stationary)
        assert moving2.is_empty()
        assert stationary2.tiles == [(3, 2, TileType.plain(1))]
        assert (stationary2.x, stationary2.y) == (2, 3)

    def test_glue_absorbs_falling_tile(self):
        moving = Block(5, 5, [(0, 0, TileType.plain(2)), (1, 0, P0)])
        playfield = Block(0, 0, [(5, 5, TileType.spillage(LiquidType.GLUE))])
        moving2, playfield2 = Block.collide(moving, playfield)
        assert moving2.tiles == [(1, 0, P0)]
        assert playfield2.tiles == [(5, 5, TileType.plain(2))]

    def test_acid_dissolves_both(self):
        moving2, playfield2 = Block.collide(single(5, 5), Block(0, 0, [(5, 5, TileType.spillage(LiquidType.ACID))]))
        assert moving2.is_empty()
        assert playfield2.is_empty()

    def test_plain_overlap_leaves_both(self):
        moving2, playfield2 = Block.collide(single(5, 5), Block(0, 0, [(5, 5, TileType.plain(1))]))
        assert moving2.collides_with(playfield2)


class TestDrop:
    """Merging the falling block into the playfield."""

    def test_drop_translates_offsets_and_degrades_killers(self):
        blk = Block(4, 4, [(0, -1, P0), (0, 0, TileType.killer(3))])
        dest = Block(1, 1)
        assert blk.drop(dest, Block.new_border(16, 12))
        assert dest.tiles == [(3, 2, P0), (3, 3, P0)]

    def test_drop_refused_on_border(self):
        dest = Block()
        assert not single(0, 5).drop(dest, Block.new_border(16, 12))
        assert dest.is_empty()

    def test_drop_refused_on_playfield(self):
        dest = Block(0, 0, [(5, 5, TileType.spillage(LiquidType.GLUE))])
        assert not single(5, 5).drop(dest, Block.new_border(16, 12))
        assert len(dest) == 1

    def test_drop_of_empty_block_succeeds(self):
        dest = Block()
        assert Block(3, 3).drop(dest, Block.new_border(16, 12))
        assert dest.is_empty()
