from __future__ import annotations

from ldtk_fields import EnumField, FieldType
from ldtk_integration import LdtkProject
from ldtk_world import World
from model import WorldLayout
from sample_projects import ITEM_ENUM_DEF, entity, field, layer, level, project


def test_end_to_end_enum_field_on_embedded_level():
    hero = entity("Hero", 20, fields=[field("color", "LocalEnum.Color", "RED")])
    raw = project([level("Level_0", 0, layers=[layer("Entities", "Entities", entityInstances=[hero])])])

    world = World.from_json(raw)

    assert len(world.enums_by_name["Color"].values) == 2
    got = world.levels[0].layers[0].entities[0].fields["color"]
    assert isinstance(got, EnumField)
    assert got.type == FieldType.ENUM
    assert got.value == "RED"
    assert got.ref.identifier == "Color"


def test_project_settings_and_definition_tables():
    world = World.from_json(project([], external_enums=[ITEM_ENUM_DEF]))

    assert world.bg_color == "#7F8093"
    assert world.layout == WorldLayout.FREE
    assert world.external_levels is False
    assert world.json_version == "0.7.2"
    assert world.default_grid_size == 16

    tileset = world.tilesets_by_uid[1]
    assert tileset.identifier == "Tiles"
    assert (tileset.size.width, tileset.size.height) == (256, 128)
    assert tileset.grid_size == 16
    assert tileset.path == "tiles.png"

    assert [e.identifier for e in world.enums] == ["Color", "Item"]
    color = world.enums_by_name["Color"]
    assert color.value_ids == ["RED", "BLUE"]
    assert color.values[0].tile_src_rect is None
    assert color.values[1].tile_src_rect.x == 48
    assert color.tileset is None
    item = world.enums_by_name["Item"]
    assert item.tileset is tileset
    assert item.external_rel_path == "items.cdb"


def test_missing_definitions_yield_empty_tables():
    world = World.from_json(project([level("Level_0", 0, layers=[])], with_defs=False))

    assert world.tilesets_by_uid == {}
    assert world.enums_by_name == {}
    assert [lv.identifier for lv in world.levels] == ["Level_0"]


def test_embedded_levels_follow_source_order_and_last_duplicate_wins():
    levels = [
        level("B", 0, layers=[]),
        level("A", 1, layers=[]),
        level("B", 2, layers=[]),
    ]
    world = World.from_json(project(levels))

    assert [lv.identifier for lv in world.levels] == ["B", "A"]
    assert world.levels_by_name["B"].uid == 2


def test_find_helpers_scan_in_table_order():
    world = World.from_json(project([level("Level_0", 0, layers=[]), level("Level_1", 1, layers=[])]))

    assert world.find_level_by_uid(1).identifier == "Level_1"
    assert world.find_level_by_uid(99) is None
    assert world.find_level_by_identifier("Level_0").uid == 0
    assert world.find_level(lambda lv: lv.uid >= 0).identifier == "Level_0"
    assert world.find_tileset_by_uid(1).identifier == "Tiles"
    assert world.find_tileset_by_identifier("Tiles").uid == 1
    assert world.find_tileset_by_identifier("Nope") is None
    assert world.find_enum_by_uid(10).identifier == "Color"
    assert world.find_enum(lambda e: "BLUE" in e.value_ids).uid == 10
    assert world.find_entity_definition(20).identifier == "Hero"
    assert world.find_layer_definition(30).identifier == "Collisions"
    assert world.find_layer_definition(31) is None


def test_from_json_accepts_parsed_project_record():
    raw = LdtkProject.model_validate(project([level("Level_0", 0, layers=[])]))

    world = World.from_json(raw)

    assert world.raw is raw
    assert world.levels[0].raw is raw.levels[0]


def test_scalar_fields_round_trip_through_the_graph():
    rows = [
        field("hp", "Int", 10),
        field("speed", "Float", 1.5),
        field("name", "String", "Bob"),
        field("alive", "Bool", False),
        field("tint", "Color", "#00FF00"),
        field("script", "FilePath", "scripts/bob.lua"),
    ]
    raw = project([level("Level_0", 0, layers=[layer("Entities", "Entities", entityInstances=[entity(fields=rows)])])])

    fields = World.from_json(raw).levels[0].layers[0].entities[0].fields

    for row in rows:
        assert fields[row["__identifier"]].value == row["__value"]
