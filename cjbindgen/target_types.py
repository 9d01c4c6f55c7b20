"""Target type descriptors and their Cangjie spellings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from . import constants


def sanitize_identifier(name: str) -> str:
    """Suffix *name* when it collides with a reserved word of the target."""
    if name in constants.RESERVED_WORDS:
        return f"{name}{constants.RESERVED_SUFFIX}"
    return name


def foreign_symbol(name: str) -> str:
    """Spelling of a C symbol that must link under its exact name.

    Hard keywords are written as backtick raw identifiers, which keep the
    symbol itself unchanged.
    """
    if name in constants.RESERVED_WORDS and name not in constants.CONTEXTUAL_KEYWORDS:
        return f"`{name}`"
    return name


class PrimitiveKind(Enum):
    UNIT = "unit"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind
    width: int = 0
    signed: bool = True

    def __str__(self) -> str:
        if self.kind == PrimitiveKind.UNIT:
            return constants.UNIT_TYPE
        if self.kind == PrimitiveKind.BOOL:
            return constants.BOOL_TYPE
        if self.kind == PrimitiveKind.FLOAT:
            return f"Float{self.width}"
        prefix = "Int" if self.signed else "UInt"
        return f"{prefix}{self.width}"


@dataclass(frozen=True)
class Pointer:
    inner: TargetType

    def __str__(self) -> str:
        return constants.POINTER_TEMPLATE.format(inner=self.inner)


@dataclass(frozen=True)
class OpaqueCString:
    def __str__(self) -> str:
        return constants.CSTRING_TYPE


@dataclass(frozen=True)
class FixedArray:
    inner: TargetType
    count: int

    def __str__(self) -> str:
        return constants.ARRAY_TEMPLATE.format(inner=self.inner, count=self.count)


@dataclass(frozen=True)
class FunctionSignature:
    params: tuple[TargetType, ...]
    result: TargetType

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.params)
        return constants.FUNC_TEMPLATE.format(params=params, result=self.result)


@dataclass(frozen=True)
class NamedRecord:
    name: str

    def __str__(self) -> str:
        return sanitize_identifier(self.name)


@dataclass(frozen=True)
class NamedEnum:
    name: str

    def __str__(self) -> str:
        return sanitize_identifier(self.name)


TargetType = Union[
    Primitive,
    Pointer,
    OpaqueCString,
    FixedArray,
    FunctionSignature,
    NamedRecord,
    NamedEnum,
]

UNIT = Primitive(PrimitiveKind.UNIT)
BOOL = Primitive(PrimitiveKind.BOOL)
INT8 = Primitive(PrimitiveKind.INTEGER, 8, True)
UINT8 = Primitive(PrimitiveKind.INTEGER, 8, False)
INT16 = Primitive(PrimitiveKind.INTEGER, 16, True)
UINT16 = Primitive(PrimitiveKind.INTEGER, 16, False)
INT32 = Primitive(PrimitiveKind.INTEGER, 32, True)
UINT32 = Primitive(PrimitiveKind.INTEGER, 32, False)
INT64 = Primitive(PrimitiveKind.INTEGER, 64, True)
UINT64 = Primitive(PrimitiveKind.INTEGER, 64, False)
FLOAT32 = Primitive(PrimitiveKind.FLOAT, 32)
FLOAT64 = Primitive(PrimitiveKind.FLOAT, 64)
