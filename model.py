#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Data model (Enums + value objects).

Immutable leaves shared by every node of the object graph. None of them hold
references back to the World.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from ldtk_integration import LdtkBgPos, LdtkEntityTile, LdtkLevel, LdtkTileInstance

Number = Union[int, float]


# =============================
# Enums
# =============================
class LayerType(str, Enum):
    AUTO_LAYER = "AutoLayer"
    ENTITIES = "Entities"
    INT_GRID = "IntGrid"
    TILES = "Tiles"


class NeighbourDir(str, Enum):
    NORTH = "n"
    SOUTH = "s"
    WEST = "w"
    EAST = "e"


class WorldLayout(str, Enum):
    FREE = "Free"
    GRID_VANIA = "GridVania"
    LINEAR_HORIZONTAL = "LinearHorizontal"
    LINEAR_VERTICAL = "LinearVertical"


# =============================
# Geometry
# =============================
class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: Number
    y: Number

    @classmethod
    def from_pair(cls, values: Sequence[Number]) -> "Point":
        return cls(x=values[0], y=values[1])

    def __add__(self, other: "Point") -> "Point":
        return Point(x=self.x + other.x, y=self.y + other.y)


class Size(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: Number
    height: Number


class Rect(BaseModel):
    """Sub-rectangle of an image: ``[x, y, width, height]`` in the raw format."""

    model_config = ConfigDict(frozen=True)

    x: Number
    y: Number
    width: Number
    height: Number

    @classmethod
    def from_list(cls, values: Sequence[Number]) -> "Rect":
        x, y, width, height = values
        return cls(x=x, y=y, width=width, height=height)


# =============================
# Tiles
# =============================
class Tile(BaseModel):
    """A tile placed in a Tiles or AutoLayer layer."""

    model_config = ConfigDict(frozen=True)

    flip: int = 0
    px: Point
    src: Point
    tile_id: int

    @property
    def flip_x(self) -> bool:
        return bool(self.flip & 1)

    @property
    def flip_y(self) -> bool:
        return bool(self.flip & 2)

    @classmethod
    def from_raw(cls, raw: LdtkTileInstance) -> "Tile":
        return cls(flip=raw.f, px=Point.from_pair(raw.px), src=Point.from_pair(raw.src), tile_id=raw.tile_id)


class EntityTile(BaseModel):
    model_config = ConfigDict(frozen=True)

    tileset_uid: int
    src_rect: Rect

    @classmethod
    def from_raw(cls, raw: LdtkEntityTile) -> "EntityTile":
        return cls(tileset_uid=raw.tileset_uid, src_rect=Rect.from_list(raw.src_rect))


class IntGridValueInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: str
    identifier: Optional[str] = None


# =============================
# Level background
# =============================
class BackgroundPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    crop_rect: Rect
    scale: Point
    top_left: Point

    @classmethod
    def from_raw(cls, raw: LdtkBgPos) -> "BackgroundPosition":
        return cls(
            crop_rect=Rect.from_list(raw.crop_rect),
            scale=Point.from_pair(raw.scale),
            top_left=Point.from_pair(raw.top_left_px),
        )


class Background(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: Optional[str] = None
    path: Optional[str] = None
    pivot: Point
    pos: Optional[BackgroundPosition] = None

    @classmethod
    def from_raw(cls, raw: LdtkLevel) -> "Background":
        return cls(
            color=raw.bg_color,
            path=raw.bg_rel_path,
            pivot=Point(x=raw.bg_pivot_x, y=raw.bg_pivot_y),
            pos=BackgroundPosition.from_raw(raw.bg_pos) if raw.bg_pos is not None else None,
        )
