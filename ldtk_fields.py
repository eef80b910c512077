#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Entity field normalization.

A raw field instance carries a ``__type`` string such as ``Int``,
``Array<Point>`` or ``LocalEnum.Color`` and an untyped ``__value``. This
module turns each one into exactly one frozen variant of ``EntityField``:

- array types get the ``Array`` suffix on the discriminant (``PointArray``);
- enum types collapse to ``Enum``/``EnumArray`` and carry ``ref``, the
  resolved ``EnumDef``;
- point values become ``Point`` objects, every other value passes through.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Mapping, NamedTuple, Optional, Type, Union

from pydantic import BaseModel, ConfigDict

from ldtk_defs import EnumDef
from ldtk_errors import DanglingReferenceError, MalformedFieldTypeError, MalformedFieldValueError
from ldtk_integration import LdtkFieldInstance
from model import Point

if TYPE_CHECKING:
    from ldtk_world import World


class FieldType(str, Enum):
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    BOOL = "Bool"
    COLOR = "Color"
    POINT = "Point"
    FILE_PATH = "FilePath"
    ENUM = "Enum"
    INT_ARRAY = "IntArray"
    FLOAT_ARRAY = "FloatArray"
    STRING_ARRAY = "StringArray"
    BOOL_ARRAY = "BoolArray"
    COLOR_ARRAY = "ColorArray"
    POINT_ARRAY = "PointArray"
    FILE_PATH_ARRAY = "FilePathArray"
    ENUM_ARRAY = "EnumArray"


_SCALAR_TYPE_NAMES = ("Int", "Float", "String", "Bool", "Color", "Point", "FilePath")

_FIELD_TYPE_RE = re.compile(
    r"^(?P<array>Array<)?"
    r"(?:(?:LocalEnum|ExternalEnum)\.(?P<enum>\w+)|(?P<name>\w+))"
    r"(?(array)>)$"
)


class FieldTypeInfo(NamedTuple):
    is_array: bool
    enum_name: Optional[str]
    type_name: str

    @property
    def kind(self) -> FieldType:
        return FieldType(self.type_name + ("Array" if self.is_array else ""))


def parse_field_type(type_tag: str) -> Optional[FieldTypeInfo]:
    """Split a raw ``__type`` string; ``None`` when it is not a known type."""
    m = _FIELD_TYPE_RE.match(type_tag or "")
    if m is None:
        return None
    is_array = m.group("array") is not None
    enum_name = m.group("enum")
    if enum_name is not None:
        return FieldTypeInfo(is_array, enum_name, FieldType.ENUM.value)
    if m.group("name") not in _SCALAR_TYPE_NAMES:
        return None
    return FieldTypeInfo(is_array, None, m.group("name"))


# =============================
# Variants
# =============================
class BaseField(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str


class IntField(BaseField):
    type: Literal[FieldType.INT] = FieldType.INT
    value: Optional[int] = None


class FloatField(BaseField):
    type: Literal[FieldType.FLOAT] = FieldType.FLOAT
    value: Optional[float] = None


class StringField(BaseField):
    type: Literal[FieldType.STRING] = FieldType.STRING
    value: Optional[str] = None


class BoolField(BaseField):
    type: Literal[FieldType.BOOL] = FieldType.BOOL
    value: Optional[bool] = None


class ColorField(BaseField):
    type: Literal[FieldType.COLOR] = FieldType.COLOR
    value: Optional[str] = None


class PointField(BaseField):
    type: Literal[FieldType.POINT] = FieldType.POINT
    value: Optional[Point] = None


class FilePathField(BaseField):
    type: Literal[FieldType.FILE_PATH] = FieldType.FILE_PATH
    value: Optional[str] = None


class EnumField(BaseField):
    type: Literal[FieldType.ENUM] = FieldType.ENUM
    value: Optional[str] = None
    ref: EnumDef


class IntArrayField(BaseField):
    type: Literal[FieldType.INT_ARRAY] = FieldType.INT_ARRAY
    value: Optional[List[Optional[int]]] = None


class FloatArrayField(BaseField):
    type: Literal[FieldType.FLOAT_ARRAY] = FieldType.FLOAT_ARRAY
    value: Optional[List[Optional[float]]] = None


class StringArrayField(BaseField):
    type: Literal[FieldType.STRING_ARRAY] = FieldType.STRING_ARRAY
    value: Optional[List[Optional[str]]] = None


class BoolArrayField(BaseField):
    type: Literal[FieldType.BOOL_ARRAY] = FieldType.BOOL_ARRAY
    value: Optional[List[Optional[bool]]] = None


class ColorArrayField(BaseField):
    type: Literal[FieldType.COLOR_ARRAY] = FieldType.COLOR_ARRAY
    value: Optional[List[Optional[str]]] = None


class PointArrayField(BaseField):
    type: Literal[FieldType.POINT_ARRAY] = FieldType.POINT_ARRAY
    value: Optional[List[Point]] = None


class FilePathArrayField(BaseField):
    type: Literal[FieldType.FILE_PATH_ARRAY] = FieldType.FILE_PATH_ARRAY
    value: Optional[List[Optional[str]]] = None


class EnumArrayField(BaseField):
    type: Literal[FieldType.ENUM_ARRAY] = FieldType.ENUM_ARRAY
    value: Optional[List[Optional[str]]] = None
    ref: EnumDef


EntityField = Union[
    IntField,
    FloatField,
    StringField,
    BoolField,
    ColorField,
    PointField,
    FilePathField,
    EnumField,
    IntArrayField,
    FloatArrayField,
    StringArrayField,
    BoolArrayField,
    ColorArrayField,
    PointArrayField,
    FilePathArrayField,
    EnumArrayField,
]

_FIELD_MODELS: Dict[FieldType, Type[BaseField]] = {
    FieldType.INT: IntField,
    FieldType.FLOAT: FloatField,
    FieldType.STRING: StringField,
    FieldType.BOOL: BoolField,
    FieldType.COLOR: ColorField,
    FieldType.POINT: PointField,
    FieldType.FILE_PATH: FilePathField,
    FieldType.ENUM: EnumField,
    FieldType.INT_ARRAY: IntArrayField,
    FieldType.FLOAT_ARRAY: FloatArrayField,
    FieldType.STRING_ARRAY: StringArrayField,
    FieldType.BOOL_ARRAY: BoolArrayField,
    FieldType.COLOR_ARRAY: ColorArrayField,
    FieldType.POINT_ARRAY: PointArrayField,
    FieldType.FILE_PATH_ARRAY: FilePathArrayField,
    FieldType.ENUM_ARRAY: EnumArrayField,
}


def _to_point(value: Any, raw: LdtkFieldInstance, entity_id: str) -> Point:
    # The editor writes {"cx", "cy"} grid coordinates; [x, y] pairs are accepted too.
    if isinstance(value, Mapping) and "cx" in value and "cy" in value:
        return Point(x=value["cx"], y=value["cy"])
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Point.from_pair(value)
    raise MalformedFieldValueError(raw.identifier, entity_id, value)


def normalize_field(raw: LdtkFieldInstance, world: "World", *, entity_id: str = "") -> EntityField:
    info = parse_field_type(raw.field_type)
    if info is None:
        raise MalformedFieldTypeError(raw.identifier, entity_id, raw.field_type)

    kind = info.kind
    extra: Dict[str, Any] = {}
    if info.enum_name is not None:
        ref = world.enums_by_name.get(info.enum_name)
        if ref is None:
            raise DanglingReferenceError(info.enum_name, f"field {raw.identifier!r} of entity {entity_id!r}")
        extra["ref"] = ref

    value = raw.value
    if kind is FieldType.POINT:
        value = None if value is None else _to_point(value, raw, entity_id)
    elif kind is FieldType.POINT_ARRAY:
        value = None if value is None else [_to_point(v, raw, entity_id) for v in value]

    return _FIELD_MODELS[kind](identifier=raw.identifier, value=value, **extra)
