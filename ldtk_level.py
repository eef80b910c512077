#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from ldtk_errors import DanglingReferenceError
from ldtk_integration import LdtkLevel
from ldtk_layer import Layer
from model import Background, NeighbourDir, Point, Size

if TYPE_CHECKING:
    from ldtk_world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighbour:
    dir: NeighbourDir
    level: "Level"


class Level:
    """One level of a World.

    Layers are kept in display order: ``layers[0]`` is the top-most one.
    Neighbours are resolved on first access, once every sibling Level exists,
    and cached afterwards.
    """

    def __init__(self, raw: LdtkLevel, world: "World"):
        self.raw = raw
        self.world = world
        self.identifier = raw.identifier
        self.uid = raw.uid
        self.size = Size(width=raw.px_wid, height=raw.px_hei)
        self.world_pos = Point(x=raw.world_x, y=raw.world_y)
        self.bg_color = raw.bg_color
        self.external_rel_path = raw.external_rel_path
        self.background = Background.from_raw(raw)
        self.layers: List[Layer] = [Layer.from_raw(row, world) for row in raw.layer_instances or []]
        self._neighbours: Optional[List[Neighbour]] = None

    @property
    def neighbours(self) -> List[Neighbour]:
        if self._neighbours is None:
            self._neighbours = self._resolve_neighbours()
        return self._neighbours

    def forget_neighbour(self, level: "Level") -> None:
        """Drop the memoized neighbours if they point at ``level``."""
        if self._neighbours is not None and any(n.level is level for n in self._neighbours):
            self._neighbours = None

    def _resolve_neighbours(self) -> List[Neighbour]:
        out: List[Neighbour] = []
        for row in self.raw.neighbours:
            level = self.world.find_level_by_uid(row.level_uid)
            if level is None:
                raise DanglingReferenceError(row.level_uid, f"neighbours of level {self.identifier!r}")
            out.append(Neighbour(dir=NeighbourDir(row.dir), level=level))
        logger.debug("Resolved %d neighbours for level %r", len(out), self.identifier)
        return out

    def find_layer(self, identifier: str) -> Optional[Layer]:
        return next((layer for layer in self.layers if layer.identifier == identifier), None)

    def __repr__(self) -> str:
        return f"Level({self.identifier!r}, uid={self.uid})"
