#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Definition tables owned by a World: tilesets and enums."""

from __future__ import annotations

from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from ldtk_integration import LdtkEnumDef, LdtkEnumValueDef, LdtkTilesetDef
from model import Rect, Size


class Tileset(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str
    uid: int
    size: Size
    grid_size: int
    spacing: int = 0
    padding: int = 0
    path: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: LdtkTilesetDef) -> "Tileset":
        return cls(
            identifier=raw.identifier,
            uid=raw.uid,
            size=Size(width=raw.px_wid, height=raw.px_hei),
            grid_size=raw.tile_grid_size,
            spacing=raw.spacing,
            padding=raw.padding,
            path=raw.rel_path,
        )


class EnumValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    tile_id: Optional[int] = None
    tile_src_rect: Optional[Rect] = None

    @classmethod
    def from_raw(cls, raw: LdtkEnumValueDef) -> "EnumValue":
        rect = Rect.from_list(raw.tile_src_rect) if raw.tile_src_rect else None
        return cls(id=raw.id, tile_id=raw.tile_id, tile_src_rect=rect)


class EnumDef(BaseModel):
    """A project enum; ``tileset`` is the optional icon tileset."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    uid: int
    values: List[EnumValue]
    tileset: Optional[Tileset] = None
    external_rel_path: Optional[str] = None

    @property
    def value_ids(self) -> List[str]:
        return [v.id for v in self.values]

    @classmethod
    def from_raw(cls, raw: LdtkEnumDef, tilesets_by_uid: Mapping[int, Tileset]) -> "EnumDef":
        tileset = tilesets_by_uid.get(raw.icon_tileset_uid) if raw.icon_tileset_uid is not None else None
        return cls(
            identifier=raw.identifier,
            uid=raw.uid,
            values=[EnumValue.from_raw(v) for v in raw.values],
            tileset=tileset,
            external_rel_path=raw.external_rel_path,
        )
