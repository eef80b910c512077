#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Layer instances.

``Layer.from_raw`` dispatches on the raw ``__type`` over a closed set of four
kinds. Each kind populates exactly one payload; the payload attributes of the
other kinds read as ``None`` on every layer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Type

from config import INT_GRID_EMPTY_VALUE
from ldtk_entity import Entity
from ldtk_errors import MalformedLayerError, UnknownLayerKindError
from ldtk_integration import LdtkLayerInstance
from model import IntGridValueInfo, LayerType, Point, Size, Tile

if TYPE_CHECKING:
    from ldtk_world import World

logger = logging.getLogger(__name__)


class Layer:
    type: LayerType

    auto_layer_tiles: Optional[List[Tile]] = None
    grid_tiles: Optional[List[Tile]] = None
    entities: Optional[List[Entity]] = None
    int_grid: Optional[List[List[int]]] = None
    int_grid_values: Optional[Dict[int, IntGridValueInfo]] = None

    def __init__(self, raw: LdtkLayerInstance, world: "World"):
        self.raw = raw
        self.world = world
        self.identifier = raw.identifier
        self.uid = raw.layer_def_uid
        self.level_uid = raw.level_id
        self.size = Size(width=raw.c_wid, height=raw.c_hei)
        self.grid_size = raw.grid_size
        self.opacity = raw.opacity
        self.px_total_offset = Point(x=raw.px_total_offset_x, y=raw.px_total_offset_y)
        self.tileset = world.tilesets_by_uid.get(raw.tileset_def_uid) if raw.tileset_def_uid is not None else None

    @classmethod
    def from_raw(cls, raw: LdtkLayerInstance, world: "World") -> "Layer":
        try:
            kind = LayerType(raw.layer_type)
        except ValueError:
            raise UnknownLayerKindError(raw.identifier, raw.layer_type) from None
        return _LAYER_CLASSES[kind](raw, world)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"


class AutoLayer(Layer):
    type = LayerType.AUTO_LAYER

    def __init__(self, raw: LdtkLayerInstance, world: "World"):
        super().__init__(raw, world)
        self.auto_layer_tiles = [Tile.from_raw(row) for row in raw.auto_layer_tiles]

    @property
    def tiles(self) -> List[Tile]:
        return self.auto_layer_tiles


class TilesLayer(Layer):
    type = LayerType.TILES

    def __init__(self, raw: LdtkLayerInstance, world: "World"):
        super().__init__(raw, world)
        self.grid_tiles = [Tile.from_raw(row) for row in raw.grid_tiles]

    @property
    def tiles(self) -> List[Tile]:
        return self.grid_tiles


class EntitiesLayer(Layer):
    type = LayerType.ENTITIES

    def __init__(self, raw: LdtkLayerInstance, world: "World"):
        super().__init__(raw, world)
        self.entities = [Entity(row, world, self.px_total_offset) for row in raw.entity_instances]


class IntGridLayer(Layer):
    """Dense IntGrid values indexed ``int_grid[x][y]``.

    The raw layer stores only non-empty cells as ``coordId = y * width + x``.
    ``int_grid_values`` maps an IntGrid value to its legend entry; the value is
    the index in the layer definition's ``intGridValues`` list.
    """

    type = LayerType.INT_GRID

    def __init__(self, raw: LdtkLayerInstance, world: "World"):
        super().__init__(raw, world)
        width, height = raw.c_wid, raw.c_hei
        grid = [[INT_GRID_EMPTY_VALUE] * height for _ in range(width)]
        for cell in raw.int_grid:
            if not 0 <= cell.coord_id < width * height:
                raise MalformedLayerError(
                    f"IntGrid coordId {cell.coord_id} outside {width}x{height} grid of layer {raw.identifier!r}"
                )
            y = cell.coord_id // width
            x = cell.coord_id - y * width
            grid[x][y] = cell.v
        self.int_grid = grid

        self.int_grid_values = {}
        definition = world.find_layer_definition(self.uid)
        if definition is None:
            logger.debug("No layer definition %s for IntGrid layer %r", self.uid, self.identifier)
            return
        for value, row in enumerate(definition.int_grid_values):
            self.int_grid_values[value] = IntGridValueInfo(color=row.color, identifier=row.identifier)

    def value_at(self, x: int, y: int) -> int:
        return self.int_grid[x][y]


_LAYER_CLASSES: Dict[LayerType, Type[Layer]] = {
    LayerType.AUTO_LAYER: AutoLayer,
    LayerType.ENTITIES: EntitiesLayer,
    LayerType.INT_GRID: IntGridLayer,
    LayerType.TILES: TilesLayer,
}
