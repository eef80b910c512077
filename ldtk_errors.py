#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Exceptions raised while projecting LDtk records into the object graph."""

from __future__ import annotations

from typing import Any, Dict


class LdtkError(Exception):
    """Base exception for the access layer."""


class MalformedFieldTypeError(LdtkError, ValueError):
    """A field instance carries a ``__type`` string outside the known grammar."""

    def __init__(self, field_id: str, entity_id: str, type_tag: str):
        super().__init__(f"Malformed field type {type_tag!r} on field {field_id!r} of entity {entity_id!r}")
        self.field_id = field_id
        self.entity_id = entity_id
        self.type_tag = type_tag


class MalformedFieldValueError(LdtkError, ValueError):
    """A field value cannot be normalized for its declared type."""

    def __init__(self, field_id: str, entity_id: str, value: Any):
        super().__init__(f"Malformed value {value!r} on field {field_id!r} of entity {entity_id!r}")
        self.field_id = field_id
        self.entity_id = entity_id
        self.value = value


class DanglingReferenceError(LdtkError, LookupError):
    """An id-based lookup that the format guarantees resolved to nothing."""

    def __init__(self, missing: Any, referrer: str):
        super().__init__(f"Dangling reference to {missing!r} from {referrer}")
        self.missing = missing
        self.referrer = referrer


class UnknownLayerKindError(LdtkError, ValueError):
    def __init__(self, layer_id: str, kind: str):
        super().__init__(f"Unknown layer type {kind!r} on layer {layer_id!r}")
        self.layer_id = layer_id
        self.kind = kind


class MalformedLayerError(LdtkError, ValueError):
    """Layer payload does not fit the layer's declared grid."""


class LevelNotFoundError(LdtkError, ValueError):
    def __init__(self, identifier: str):
        super().__init__(f"Level not found: {identifier}")
        self.identifier = identifier


class LevelsLoadError(LdtkError):
    """One or more external levels failed to load; the others stay loaded."""

    def __init__(self, failures: Dict[str, BaseException]):
        names = ", ".join(failures)
        super().__init__(f"Failed to load levels: {names}")
        self.failures = dict(failures)
