#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""World: root of a loaded LDtk project.

Owns the tileset and enum tables and the level collection. Every node below
it keeps a plain reference back to its World for id lookups.

With ``externalLevels`` the root file only carries level stubs; each Level is
fetched through the injected ``TextSource`` on demand and kept until
``unload_level``. The stub list is retained for the life of the World, so an
unloaded level can always be loaded again.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ldtk_defs import EnumDef, Tileset
from ldtk_errors import LevelNotFoundError, LevelsLoadError
from ldtk_fetch import FileTextSource, HttpTextSource, TextSource, select_text_source
from ldtk_integration import (
    LdtkDefinitions,
    LdtkEntityDef,
    LdtkLayerDef,
    LdtkLevel,
    LdtkProject,
    decode_json,
    parse_level,
    parse_project,
)
from ldtk_level import Level
from model import WorldLayout

logger = logging.getLogger(__name__)


class World:
    def __init__(self, raw: LdtkProject, *, source: Optional[TextSource] = None, base_path: str = ""):
        self.raw = raw
        self.source: TextSource = source if source is not None else FileTextSource()
        self.base_path = base_path

        self.bg_color = raw.bg_color
        self.layout = WorldLayout(raw.world_layout) if raw.world_layout else None
        self.external_levels = raw.external_levels
        self.json_version = raw.json_version
        self.default_level_bg_color = raw.default_level_bg_color
        self.default_grid_size = raw.default_grid_size

        defs = raw.defs if raw.defs is not None else LdtkDefinitions()
        self._entity_defs: List[LdtkEntityDef] = list(defs.entities)
        self._layer_defs: List[LdtkLayerDef] = list(defs.layers)
        self.tilesets_by_uid: Dict[int, Tileset] = {row.uid: Tileset.from_raw(row) for row in defs.tilesets}
        self.enums_by_name: Dict[str, EnumDef] = {}
        for row in [*defs.enums, *defs.external_enums]:
            self.enums_by_name[row.identifier] = EnumDef.from_raw(row, self.tilesets_by_uid)

        self._stubs: Dict[str, LdtkLevel] = {}
        self._stub_order: Dict[str, int] = {}
        for idx, row in enumerate(raw.levels):
            self._stubs[row.identifier] = row
            self._stub_order[row.identifier] = idx
        self._loading: Dict[str, "asyncio.Task[Level]"] = {}

        self.levels_by_name: Dict[str, Level] = {}
        if not self.external_levels:
            for row in raw.levels:
                self.levels_by_name[row.identifier] = Level(row, self)

    # =============================
    # Construction
    # =============================
    @classmethod
    def from_json(
        cls,
        data: Union[Mapping[str, Any], LdtkProject],
        *,
        source: Optional[TextSource] = None,
        base_path: str = "",
    ) -> "World":
        """Build a World from an already decoded project tree."""
        raw = data if isinstance(data, LdtkProject) else LdtkProject.model_validate(data)
        return cls(raw, source=source, base_path=base_path)

    @classmethod
    async def from_source(cls, location: str, source: TextSource) -> "World":
        text = await source.fetch_text(location)
        return cls(parse_project(text), source=source, base_path=location)

    @classmethod
    async def from_path(cls, path: str | Path, source: Optional[TextSource] = None) -> "World":
        return await cls.from_source(str(path), source if source is not None else FileTextSource())

    @classmethod
    async def from_url(cls, url: str, source: Optional[TextSource] = None) -> "World":
        return await cls.from_source(url, source if source is not None else HttpTextSource())

    @classmethod
    async def load(cls, location: str | Path) -> "World":
        """Open a project from a filesystem path or an http(s) URL."""
        location = str(location)
        return await cls.from_source(location, select_text_source(location))

    @staticmethod
    async def load_raw(path: str | Path, source: Optional[TextSource] = None) -> Any:
        """Fetch and decode a project file without building anything from it."""
        path = str(path)
        source = source if source is not None else select_text_source(path)
        return decode_json(await source.fetch_text(path))

    # =============================
    # Tables
    # =============================
    @property
    def levels(self) -> List[Level]:
        return list(self.levels_by_name.values())

    @property
    def tilesets(self) -> List[Tileset]:
        return list(self.tilesets_by_uid.values())

    @property
    def enums(self) -> List[EnumDef]:
        return list(self.enums_by_name.values())

    @property
    def level_identifiers(self) -> List[str]:
        """Every level named by the project file, loaded or not."""
        return list(self._stubs)

    def is_level_loaded(self, identifier: str) -> bool:
        return identifier in self.levels_by_name

    # =============================
    # Lookups
    # =============================
    def find_level(self, predicate: Callable[[Level], bool]) -> Optional[Level]:
        return next((level for level in self.levels_by_name.values() if predicate(level)), None)

    def find_tileset(self, predicate: Callable[[Tileset], bool]) -> Optional[Tileset]:
        return next((tileset for tileset in self.tilesets_by_uid.values() if predicate(tileset)), None)

    def find_enum(self, predicate: Callable[[EnumDef], bool]) -> Optional[EnumDef]:
        return next((enum for enum in self.enums_by_name.values() if predicate(enum)), None)

    def find_level_by_uid(self, uid: int) -> Optional[Level]:
        return self.find_level(lambda level: level.uid == uid)

    def find_level_by_identifier(self, identifier: str) -> Optional[Level]:
        return self.levels_by_name.get(identifier)

    def find_tileset_by_uid(self, uid: int) -> Optional[Tileset]:
        return self.find_tileset(lambda tileset: tileset.uid == uid)

    def find_tileset_by_identifier(self, identifier: str) -> Optional[Tileset]:
        return self.find_tileset(lambda tileset: tileset.identifier == identifier)

    def find_enum_by_uid(self, uid: int) -> Optional[EnumDef]:
        return self.find_enum(lambda enum: enum.uid == uid)

    def find_entity_definition(self, uid: int) -> Optional[LdtkEntityDef]:
        return next((row for row in self._entity_defs if row.uid == uid), None)

    def find_layer_definition(self, uid: int) -> Optional[LdtkLayerDef]:
        return next((row for row in self._layer_defs if row.uid == uid), None)

    # =============================
    # Level loading
    # =============================
    async def load_level(self, identifier: str) -> Level:
        """Load one level; a no-op returning the cached Level when already loaded.

        Concurrent calls for the same identifier share one fetch.
        """
        level = self.levels_by_name.get(identifier)
        if level is not None:
            return level
        stub = self._stubs.get(identifier)
        if stub is None:
            raise LevelNotFoundError(identifier)
        task = self._loading.get(identifier)
        if task is None:
            task = asyncio.ensure_future(self._load_stub(stub))
            self._loading[identifier] = task
        # one caller being cancelled must not cancel the load the others share
        return await asyncio.shield(task)

    async def load_levels(self) -> List[Level]:
        """Load every level not loaded yet, fetching them concurrently.

        All fetches settle before this returns. Levels that loaded stay loaded
        even when others fail; the failures are reported together.
        """
        missing = [name for name in self._stubs if name not in self.levels_by_name]
        results = await asyncio.gather(*(self.load_level(name) for name in missing), return_exceptions=True)
        failures = {name: result for name, result in zip(missing, results) if isinstance(result, BaseException)}
        if failures:
            logger.warning("Failed to load %d of %d levels: %s", len(failures), len(missing), ", ".join(failures))
            raise LevelsLoadError(failures)
        return self.levels

    def unload_level(self, identifier: str) -> bool:
        """Drop a level from the index; returns whether it was loaded.

        A load still in flight for the same identifier is cancelled so it cannot
        put the level back afterwards.
        """
        pending = self._loading.pop(identifier, None)
        if pending is not None:
            pending.cancel()
            logger.debug("Cancelled pending load of level %r", identifier)
        level = self.levels_by_name.pop(identifier, None)
        if level is None:
            return False
        for other in self.levels_by_name.values():
            other.forget_neighbour(level)
        logger.info("Unloaded level %r", identifier)
        return True

    async def _load_stub(self, stub: LdtkLevel) -> Level:
        try:
            if stub.external_rel_path is None:
                raw = stub
            else:
                path = self.source.resolve(self.base_path, stub.external_rel_path)
                raw = parse_level(await self.source.fetch_text(path))
            level = Level(raw, self)
            self._insert_level(stub.identifier, level)
            logger.info("Loaded level %r", stub.identifier)
            return level
        finally:
            if self._loading.get(stub.identifier) is asyncio.current_task():
                del self._loading[stub.identifier]

    def _insert_level(self, identifier: str, level: Level) -> None:
        # keep the project file's level order whatever order loads complete in
        self.levels_by_name[identifier] = level
        ordered = sorted(self.levels_by_name.items(), key=lambda kv: self._stub_order.get(kv[0], len(self._stub_order)))
        self.levels_by_name.clear()
        self.levels_by_name.update(ordered)

    def __repr__(self) -> str:
        return f"World(levels={len(self.levels_by_name)}/{len(self._stubs)}, external={self.external_levels})"
