from __future__ import annotations

import pytest

from ldtk_errors import MalformedLayerError, UnknownLayerKindError
from ldtk_layer import AutoLayer, EntitiesLayer, IntGridLayer, TilesLayer
from ldtk_world import World
from model import LayerType, Point
from sample_projects import entity, field, layer, level, project


def _single_layer(row):
    world = World.from_json(project([level("Level_0", 0, layers=[row])]))
    return world, world.levels[0].layers[0]


def test_int_grid_is_unpacked_into_dense_x_y_grid():
    entries = [{"coordId": 0, "v": 1}, {"coordId": 5, "v": 2}, {"coordId": 11, "v": 1}]
    _, got = _single_layer(layer("Collisions", "IntGrid", uid=30, c_wid=4, c_hei=3, intGrid=entries))

    assert isinstance(got, IntGridLayer)
    assert len(got.int_grid) == 4
    assert all(len(column) == 3 for column in got.int_grid)
    for row in entries:
        assert got.int_grid[row["coordId"] % 4][row["coordId"] // 4] == row["v"]
    assert got.value_at(1, 1) == 2
    filled = {(row["coordId"] % 4, row["coordId"] // 4) for row in entries}
    assert all(got.int_grid[x][y] == 0 for x in range(4) for y in range(3) if (x, y) not in filled)


def test_int_grid_legend_is_keyed_by_definition_index():
    _, got = _single_layer(layer("Collisions", "IntGrid", uid=30))

    assert sorted(got.int_grid_values) == [0, 1, 2]
    assert got.int_grid_values[1].color == "#FFFFFF"
    assert got.int_grid_values[1].identifier == "wall"
    assert got.int_grid_values[2].identifier is None


def test_int_grid_without_definition_has_empty_legend():
    _, got = _single_layer(layer("Other", "IntGrid", uid=999))

    assert got.int_grid_values == {}


def test_int_grid_entry_outside_grid_is_rejected():
    with pytest.raises(MalformedLayerError):
        _single_layer(layer("Collisions", "IntGrid", uid=30, c_wid=2, c_hei=2, intGrid=[{"coordId": 4, "v": 1}]))


def test_unknown_layer_kind_is_rejected():
    with pytest.raises(UnknownLayerKindError) as exc:
        _single_layer(layer("Weird", "Parallax"))

    assert exc.value.kind == "Parallax"
    assert exc.value.layer_id == "Weird"


def test_tiles_layer_builds_tiles_and_resolves_tileset():
    tiles = [
        {"px": [0, 0], "src": [16, 0], "f": 0, "t": 1, "d": [0]},
        {"px": [16, 0], "src": [32, 16], "f": 3, "t": 18, "d": [1]},
    ]
    world, got = _single_layer(layer("Ground", "Tiles", tileset_uid=1, gridTiles=tiles))

    assert isinstance(got, TilesLayer)
    assert got.type == LayerType.TILES
    assert got.tileset is world.tilesets_by_uid[1]
    assert [t.tile_id for t in got.tiles] == [1, 18]
    assert got.grid_tiles[1].src == Point(x=32, y=16)
    assert (got.grid_tiles[0].flip_x, got.grid_tiles[0].flip_y) == (False, False)
    assert (got.grid_tiles[1].flip_x, got.grid_tiles[1].flip_y) == (True, True)


def test_auto_layer_populates_only_its_own_payload():
    tiles = [{"px": [0, 16], "src": [0, 0], "f": 2, "t": 0, "d": [7, 4]}]
    _, got = _single_layer(layer("Auto", "AutoLayer", autoLayerTiles=tiles, gridTiles=tiles))

    assert isinstance(got, AutoLayer)
    assert len(got.auto_layer_tiles) == 1
    assert got.tiles[0].flip_y is True
    assert got.grid_tiles is None
    assert got.entities is None
    assert got.int_grid is None
    assert got.tileset is None


def test_entities_layer_offsets_entity_positions():
    hero = entity("Hero", 20, px=(32, 48), fields=[field("hp", "Int", 3)])
    _, got = _single_layer(layer("Entities", "Entities", offset=(8, -4), entityInstances=[hero]))

    assert isinstance(got, EntitiesLayer)
    assert got.px_total_offset == Point(x=8, y=-4)
    ent = got.entities[0]
    assert ent.relative_pos == Point(x=32, y=48)
    assert ent.pos == Point(x=40, y=44)
    assert ent.grid == Point(x=2, y=3)
    assert ent.pivot == Point(x=0.5, y=1.0)
    assert got.int_grid is None


def test_entity_tileset_comes_from_its_definition():
    tile = {"tilesetUid": 1, "srcRect": [0, 0, 16, 16]}
    rows = [entity("Hero", 20, tile=tile), entity("Chest", 21), entity("Ghost", 404)]
    world, got = _single_layer(layer("Entities", "Entities", entityInstances=rows))

    hero, chest, ghost = got.entities
    assert hero.tileset is world.tilesets_by_uid[1]
    assert hero.tile.tileset_uid == 1
    assert hero.tile.src_rect.width == 16
    assert chest.tileset is None
    assert chest.tile is None
    assert ghost.tileset is None


def test_entity_fields_keep_declaration_order_and_last_duplicate_wins():
    rows = [field("a", "Int", 1), field("b", "String", "x"), field("a", "Int", 2)]
    _, got = _single_layer(layer("Entities", "Entities", entityInstances=[entity(fields=rows)]))

    fields = got.entities[0].fields
    assert list(fields) == ["a", "b"]
    assert fields["a"].value == 2
