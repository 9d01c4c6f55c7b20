"""Type Mapper: C type descriptors to target type descriptors."""

from __future__ import annotations

from .c_ast import CType, CTypeKind
from .errors import MissingName, UnsupportedCType
from . import target_types as tt

_PRIMITIVES: dict[CTypeKind, tt.Primitive] = {
    CTypeKind.VOID: tt.UNIT,
    CTypeKind.BOOL: tt.BOOL,
    CTypeKind.CHAR_U: tt.UINT8,
    CTypeKind.UCHAR: tt.UINT8,
    CTypeKind.CHAR_S: tt.INT8,
    CTypeKind.SCHAR: tt.INT8,
    CTypeKind.USHORT: tt.UINT16,
    CTypeKind.SHORT: tt.INT16,
    CTypeKind.UINT: tt.UINT32,
    CTypeKind.INT: tt.INT32,
    CTypeKind.ULONG: tt.UINT64,
    CTypeKind.LONG: tt.INT64,
    CTypeKind.ULONGLONG: tt.UINT64,
    CTypeKind.LONGLONG: tt.INT64,
    CTypeKind.FLOAT: tt.FLOAT32,
    CTypeKind.DOUBLE: tt.FLOAT64,
}

_FUNCTION_KINDS = frozenset({CTypeKind.FUNCTION_PROTO, CTypeKind.FUNCTION_NO_PROTO})


def map_type(ty: CType) -> tt.TargetType:
    """Map *ty* to its target descriptor.

    Typedef and elaborated sugar is removed first, so two spellings of the
    same canonical type always map identically. Records and enums become
    name handles and are never expanded.
    """
    ty = ty.canonical()
    kind = ty.kind

    primitive = _PRIMITIVES.get(kind)
    if primitive is not None:
        return primitive

    if kind == CTypeKind.POINTER:
        return _map_pointer(ty)

    if kind == CTypeKind.CONSTANT_ARRAY:
        if ty.element is None or ty.size is None:
            raise UnsupportedCType(kind.value, ty.spelling)
        return tt.FixedArray(map_type(ty.element), ty.size)

    if kind in _FUNCTION_KINDS:
        return _map_function(ty)

    if kind == CTypeKind.RECORD:
        if not ty.decl_name:
            raise MissingName("record")
        return tt.NamedRecord(ty.decl_name)

    if kind == CTypeKind.ENUM:
        if not ty.decl_name:
            raise MissingName("enum")
        return tt.NamedEnum(ty.decl_name)

    raise UnsupportedCType(ty.kind_name or kind.value, ty.spelling)


def _map_pointer(ty: CType) -> tt.TargetType:
    if ty.pointee is None:
        raise UnsupportedCType(ty.kind.value, ty.spelling)
    pointee = ty.pointee.canonical()
    if pointee.kind == CTypeKind.CHAR_S:
        return tt.OpaqueCString()
    if pointee.kind in _FUNCTION_KINDS:
        # C function pointers are first-class CFunc values on the target side
        return _map_function(pointee)
    return tt.Pointer(map_type(pointee))


def _map_function(ty: CType) -> tt.FunctionSignature:
    result = map_type(ty.result) if ty.result is not None else tt.UNIT
    params: tuple[tt.TargetType, ...] = ()
    if ty.kind == CTypeKind.FUNCTION_PROTO:
        params = tuple(map_type(p) for p in ty.params)
    return tt.FunctionSignature(params, result)
