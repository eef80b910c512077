#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""LDtk wire-format records.

This module is intentionally built around the requested stack:
- pydantic: raw record shapes (frozen, unknown keys ignored)
- orjson: payload parsing

It does not validate projects against the LDtk schema; keys the access layer
never reads are dropped and missing optional keys fall back to their defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field


class LdtkRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


# =============================
# Definitions
# =============================
class LdtkTilesetDef(LdtkRecord):
    identifier: str
    uid: int
    px_wid: int = Field(alias="pxWid")
    px_hei: int = Field(alias="pxHei")
    tile_grid_size: int = Field(alias="tileGridSize")
    spacing: int = 0
    padding: int = 0
    rel_path: Optional[str] = Field(default=None, alias="relPath")


class LdtkEnumValueDef(LdtkRecord):
    id: str
    tile_id: Optional[int] = Field(default=None, alias="tileId")
    tile_src_rect: Optional[List[int]] = Field(default=None, alias="__tileSrcRect")


class LdtkEnumDef(LdtkRecord):
    identifier: str
    uid: int
    values: List[LdtkEnumValueDef] = Field(default_factory=list)
    icon_tileset_uid: Optional[int] = Field(default=None, alias="iconTilesetUid")
    external_rel_path: Optional[str] = Field(default=None, alias="externalRelPath")


class LdtkEntityDef(LdtkRecord):
    identifier: str
    uid: int
    tileset_id: Optional[int] = Field(default=None, alias="tilesetId")
    tile_id: Optional[int] = Field(default=None, alias="tileId")


class LdtkIntGridValueDef(LdtkRecord):
    color: str
    identifier: Optional[str] = None


class LdtkLayerDef(LdtkRecord):
    identifier: str
    uid: int
    layer_type: str = Field(alias="__type")
    int_grid_values: List[LdtkIntGridValueDef] = Field(default_factory=list, alias="intGridValues")


class LdtkDefinitions(LdtkRecord):
    tilesets: List[LdtkTilesetDef] = Field(default_factory=list)
    enums: List[LdtkEnumDef] = Field(default_factory=list)
    external_enums: List[LdtkEnumDef] = Field(default_factory=list, alias="externalEnums")
    entities: List[LdtkEntityDef] = Field(default_factory=list)
    layers: List[LdtkLayerDef] = Field(default_factory=list)


# =============================
# Instances
# =============================
class LdtkFieldInstance(LdtkRecord):
    identifier: str = Field(alias="__identifier")
    field_type: str = Field(alias="__type")
    value: Any = Field(default=None, alias="__value")
    def_uid: Optional[int] = Field(default=None, alias="defUid")


class LdtkEntityTile(LdtkRecord):
    tileset_uid: int = Field(alias="tilesetUid")
    src_rect: List[int] = Field(alias="srcRect")


class LdtkEntityInstance(LdtkRecord):
    identifier: str = Field(alias="__identifier")
    grid: List[int] = Field(default_factory=lambda: [0, 0], alias="__grid")
    pivot: List[float] = Field(default_factory=lambda: [0.0, 0.0], alias="__pivot")
    tile: Optional[LdtkEntityTile] = Field(default=None, alias="__tile")
    def_uid: int = Field(alias="defUid")
    px: List[int]
    field_instances: List[LdtkFieldInstance] = Field(default_factory=list, alias="fieldInstances")


class LdtkTileInstance(LdtkRecord):
    px: List[int]
    src: List[int]
    f: int = 0
    tile_id: int = Field(alias="t")
    d: List[int] = Field(default_factory=list)


class LdtkIntGridValue(LdtkRecord):
    coord_id: int = Field(alias="coordId")
    v: int


class LdtkLayerInstance(LdtkRecord):
    identifier: str = Field(alias="__identifier")
    layer_type: str = Field(alias="__type")
    c_wid: int = Field(alias="__cWid")
    c_hei: int = Field(alias="__cHei")
    grid_size: int = Field(alias="__gridSize")
    opacity: float = Field(default=1.0, alias="__opacity")
    px_total_offset_x: int = Field(default=0, alias="__pxTotalOffsetX")
    px_total_offset_y: int = Field(default=0, alias="__pxTotalOffsetY")
    tileset_def_uid: Optional[int] = Field(default=None, alias="__tilesetDefUid")
    tileset_rel_path: Optional[str] = Field(default=None, alias="__tilesetRelPath")
    layer_def_uid: int = Field(alias="layerDefUid")
    level_id: Optional[int] = Field(default=None, alias="levelId")
    px_offset_x: int = Field(default=0, alias="pxOffsetX")
    px_offset_y: int = Field(default=0, alias="pxOffsetY")
    seed: Optional[int] = None
    entity_instances: List[LdtkEntityInstance] = Field(default_factory=list, alias="entityInstances")
    grid_tiles: List[LdtkTileInstance] = Field(default_factory=list, alias="gridTiles")
    auto_layer_tiles: List[LdtkTileInstance] = Field(default_factory=list, alias="autoLayerTiles")
    int_grid: List[LdtkIntGridValue] = Field(default_factory=list, alias="intGrid")


class LdtkNeighbour(LdtkRecord):
    dir: str
    level_uid: int = Field(alias="levelUid")


class LdtkBgPos(LdtkRecord):
    crop_rect: List[float] = Field(alias="cropRect")
    scale: List[float]
    top_left_px: List[float] = Field(alias="topLeftPx")


class LdtkLevel(LdtkRecord):
    identifier: str
    uid: int
    px_wid: int = Field(alias="pxWid")
    px_hei: int = Field(alias="pxHei")
    world_x: int = Field(default=0, alias="worldX")
    world_y: int = Field(default=0, alias="worldY")
    bg_color: Optional[str] = Field(default=None, alias="__bgColor")
    level_bg_color: Optional[str] = Field(default=None, alias="bgColor")
    bg_rel_path: Optional[str] = Field(default=None, alias="bgRelPath")
    bg_pos: Optional[LdtkBgPos] = Field(default=None, alias="__bgPos")
    bg_pivot_x: float = Field(default=0.5, alias="bgPivotX")
    bg_pivot_y: float = Field(default=0.5, alias="bgPivotY")
    neighbours: List[LdtkNeighbour] = Field(default_factory=list, alias="__neighbours")
    external_rel_path: Optional[str] = Field(default=None, alias="externalRelPath")
    layer_instances: Optional[List[LdtkLayerInstance]] = Field(default=None, alias="layerInstances")


class LdtkProject(LdtkRecord):
    bg_color: Optional[str] = Field(default=None, alias="bgColor")
    default_level_bg_color: Optional[str] = Field(default=None, alias="defaultLevelBgColor")
    default_grid_size: Optional[int] = Field(default=None, alias="defaultGridSize")
    world_layout: Optional[str] = Field(default=None, alias="worldLayout")
    external_levels: bool = Field(default=False, alias="externalLevels")
    json_version: Optional[str] = Field(default=None, alias="jsonVersion")
    defs: Optional[LdtkDefinitions] = None
    levels: List[LdtkLevel] = Field(default_factory=list)


Payload = Union[str, bytes]


def decode_json(payload: Payload) -> Any:
    return orjson.loads(payload)


def parse_project(payload: Payload) -> LdtkProject:
    return LdtkProject.model_validate(decode_json(payload))


def parse_level(payload: Payload) -> LdtkLevel:
    """Parse the content of an external ``.ldtkl`` level file."""
    return LdtkLevel.model_validate(decode_json(payload))


def load_ldtk_project(path: str | Path) -> LdtkProject:
    return parse_project(Path(path).read_bytes())
