#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from ldtk_defs import Tileset
from ldtk_fields import EntityField, normalize_field
from ldtk_integration import LdtkEntityInstance
from model import EntityTile, Point

if TYPE_CHECKING:
    from ldtk_world import World


class Entity:
    """A placed entity instance with its normalized fields."""

    def __init__(self, raw: LdtkEntityInstance, world: "World", px_offset: Point):
        self.raw = raw
        self.world = world
        self.px_offset = px_offset
        self.identifier = raw.identifier
        self.uid = raw.def_uid
        self.grid = Point.from_pair(raw.grid)
        self.pivot = Point.from_pair(raw.pivot)
        self.tile: Optional[EntityTile] = EntityTile.from_raw(raw.tile) if raw.tile is not None else None

        self.fields: Dict[str, EntityField] = {}
        for row in raw.field_instances:
            self.fields[row.identifier] = normalize_field(row, world, entity_id=raw.identifier)

        self.tileset = self._resolve_tileset()

    def _resolve_tileset(self) -> Optional[Tileset]:
        definition = self.world.find_entity_definition(self.uid)
        if definition is None or definition.tileset_id is None:
            return None
        return self.world.tilesets_by_uid.get(definition.tileset_id)

    @property
    def relative_pos(self) -> Point:
        """Pixel position inside the layer, without the layer offset."""
        return Point.from_pair(self.raw.px)

    @property
    def pos(self) -> Point:
        return self.relative_pos + self.px_offset

    def __repr__(self) -> str:
        return f"Entity({self.identifier!r}, pos=({self.pos.x}, {self.pos.y}))"
