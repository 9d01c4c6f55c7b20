"""Declaration values and the builders that derive them from C AST nodes.

Builders do all the type mapping up front, so an unmappable declaration
fails before a single line of it has been rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .bitfields import BitfieldGroup, pack_bitfields, storage_name_for
from .c_ast import DeclNode, FieldNode
from .errors import MissingName, UnsupportedCType
from .type_mapper import map_type
from . import constants
from . import target_types as tt


@dataclass(frozen=True)
class EnumConstant:
    name: str
    value: int
    doc: Optional[str] = None


@dataclass(frozen=True)
class EnumDecl:
    name: Optional[str]
    integer_type: tt.Primitive
    constants: tuple[EnumConstant, ...]
    doc: Optional[str] = None


@dataclass(frozen=True)
class Field:
    name: str
    type: tt.TargetType
    doc: Optional[str] = None


StructMember = Union[Field, BitfieldGroup]


@dataclass(frozen=True)
class StructDecl:
    name: str
    members: tuple[StructMember, ...]
    doc: Optional[str] = None


@dataclass(frozen=True)
class Param:
    name: str
    type: tt.TargetType


@dataclass(frozen=True)
class FunctionDecl:
    name: str
    params: tuple[Param, ...]
    return_type: tt.TargetType
    doc: Optional[str] = None


@dataclass(frozen=True)
class TypedefDecl:
    name: str
    underlying: tt.TargetType
    doc: Optional[str] = None


def build_enum(node: DeclNode) -> EnumDecl:
    integer_type = tt.INT32
    if node.integer_type is not None:
        mapped = map_type(node.integer_type)
        if not (isinstance(mapped, tt.Primitive) and mapped.kind == tt.PrimitiveKind.INTEGER):
            raise UnsupportedCType(node.integer_type.kind.value, node.integer_type.spelling)
        integer_type = mapped
    return EnumDecl(
        name=node.name,
        integer_type=integer_type,
        constants=tuple(
            EnumConstant(name=c.name, value=c.value, doc=c.comment)
            for c in node.enumerators
        ),
        doc=node.comment,
    )


def build_struct(node: DeclNode) -> StructDecl:
    """Map every field of a struct, packing bit-field runs in place."""
    if not node.name:
        raise MissingName("struct")
    members: list[StructMember] = []
    pending: list[FieldNode] = []
    groups = 0

    def flush():
        nonlocal groups
        members.append(pack_bitfields(pending, storage_name_for(groups)))
        groups += 1
        pending.clear()

    for f in node.fields:
        if f.is_bitfield:
            pending.append(f)
            continue
        if pending:
            flush()
        if not f.name:
            raise MissingName("field")
        members.append(Field(name=f.name, type=map_type(f.type), doc=f.comment))

    if pending:
        flush()
    return StructDecl(name=node.name, members=tuple(members), doc=node.comment)


def build_function(node: DeclNode) -> FunctionDecl:
    if not node.name:
        raise MissingName("function")
    if node.result_type is None:
        raise UnsupportedCType("FunctionWithoutResult", node.name)
    params = tuple(
        Param(
            name=p.name or constants.PARAM_NAME_TEMPLATE.format(index=i),
            type=map_type(p.type),
        )
        for i, p in enumerate(node.params)
    )
    return FunctionDecl(
        name=node.name,
        params=params,
        return_type=map_type(node.result_type),
        doc=node.comment,
    )


def build_typedef(node: DeclNode) -> TypedefDecl:
    if not node.name:
        raise MissingName("typedef")
    if node.underlying_type is None:
        raise UnsupportedCType("TypedefWithoutUnderlying", node.name)
    return TypedefDecl(
        name=node.name,
        underlying=map_type(node.underlying_type),
        doc=node.comment,
    )
