"""HeaderFrontend: libclang translation unit -> C AST."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from clang.cindex import CursorKind, TypeKind

from .c_ast import (
    CType,
    CTypeKind,
    DeclKind,
    DeclNode,
    EnumConstantNode,
    FieldNode,
    ParamNode,
    SourceLocation,
    TranslationUnitNode,
)
from . import constants

logger = logging.getLogger(__name__)

_BUILTIN_KINDS: dict[TypeKind, CTypeKind] = {
    TypeKind.VOID: CTypeKind.VOID,
    TypeKind.BOOL: CTypeKind.BOOL,
    TypeKind.CHAR_U: CTypeKind.CHAR_U,
    TypeKind.UCHAR: CTypeKind.UCHAR,
    TypeKind.CHAR_S: CTypeKind.CHAR_S,
    TypeKind.SCHAR: CTypeKind.SCHAR,
    TypeKind.SHORT: CTypeKind.SHORT,
    TypeKind.USHORT: CTypeKind.USHORT,
    TypeKind.INT: CTypeKind.INT,
    TypeKind.UINT: CTypeKind.UINT,
    TypeKind.LONG: CTypeKind.LONG,
    TypeKind.ULONG: CTypeKind.ULONG,
    TypeKind.LONGLONG: CTypeKind.LONGLONG,
    TypeKind.ULONGLONG: CTypeKind.ULONGLONG,
    TypeKind.FLOAT: CTypeKind.FLOAT,
    TypeKind.DOUBLE: CTypeKind.DOUBLE,
}

_TAG_PREFIXES = ("struct ", "union ", "enum ")
_UNNAMED_MARKERS = ("(unnamed", "(anonymous")

_NESTED_DECL_CURSORS = frozenset(
    {CursorKind.STRUCT_DECL, CursorKind.UNION_DECL, CursorKind.ENUM_DECL}
)
_WRAPPER_TYPE_KINDS = frozenset(
    {TypeKind.POINTER, TypeKind.CONSTANTARRAY, TypeKind.INCOMPLETEARRAY}
)


def _is_unnamed(spelling: str) -> bool:
    return any(marker in spelling for marker in _UNNAMED_MARKERS)


def _tag_name(cursor) -> Optional[str]:
    """Name of a struct, union or enum declaration, ``None`` when anonymous.

    A tag declared only through a typedef (``typedef struct { ... } Foo;``)
    is named after the typedef.
    """
    if cursor.is_anonymous():
        return None
    name = cursor.spelling
    if name and not _is_unnamed(name):
        return name
    spelling = cursor.type.spelling
    for prefix in _TAG_PREFIXES:
        if spelling.startswith(prefix):
            spelling = spelling[len(prefix) :]
            break
    if not spelling or _is_unnamed(spelling):
        return None
    return spelling


def _declares(field, record) -> bool:
    """True when *field* is declared with the type of *record* (or wraps it)."""
    ty = field.type.get_canonical()
    while ty.kind in _WRAPPER_TYPE_KINDS:
        ty = ty.get_pointee() if ty.kind == TypeKind.POINTER else ty.element_type
        ty = ty.get_canonical()
    return ty == record.type.get_canonical()


def _location(cursor) -> SourceLocation:
    loc = cursor.location
    if loc.file is None:
        return SourceLocation()
    return SourceLocation(file=loc.file.name, line=loc.line, column=loc.column)


def _in_system_header(cursor) -> bool:
    return cursor.location.is_in_system_header


class HeaderFrontend:
    """Converts the top-level declarations of a libclang translation unit.

    Only declarations are kept: macros, variables and anything else at file
    scope are ignored. Named records defined inside a struct body are
    hoisted so they appear, in order, before the struct that contains them,
    and so are enums declared there, named or not.
    """

    def __init__(self):
        self._declarations: list[DeclNode] = []
        self._DECL_DISPATCH: dict[CursorKind, Callable] = {
            CursorKind.ENUM_DECL: self._convert_enum,
            CursorKind.STRUCT_DECL: self._convert_record,
            CursorKind.UNION_DECL: self._convert_record,
            CursorKind.FUNCTION_DECL: self._convert_function,
            CursorKind.TYPEDEF_DECL: self._convert_typedef,
        }

    def convert(self, tu) -> TranslationUnitNode:
        self._declarations = []
        for cursor in tu.cursor.get_children():
            self._convert_decl(cursor)
        logger.info(
            "Converted %d declaration(s) from %s",
            len(self._declarations),
            tu.spelling,
        )
        return TranslationUnitNode(path=tu.spelling, declarations=self._declarations)

    def _convert_decl(self, cursor):
        if cursor.location.file is None:
            logger.debug("Ignoring builtin declaration '%s'", cursor.spelling)
            return
        handler = self._DECL_DISPATCH.get(cursor.kind)
        if handler is None:
            logger.debug("Ignoring %s '%s'", cursor.kind.name, cursor.spelling)
            return
        node = handler(cursor)
        if node is not None:
            self._declarations.append(node)

    # ── declarations ─────────────────────────────────────────────

    def _base_fields(self, cursor) -> dict:
        return {
            "comment": cursor.raw_comment,
            "location": _location(cursor),
            "in_system_header": _in_system_header(cursor),
        }

    def _convert_enum(self, cursor) -> Optional[DeclNode]:
        if not cursor.is_definition():
            logger.debug("Ignoring enum forward declaration '%s'", cursor.spelling)
            return None
        enumerators = [
            EnumConstantNode(
                name=child.spelling,
                value=child.enum_value,
                comment=child.raw_comment,
            )
            for child in cursor.get_children()
            if child.kind == CursorKind.ENUM_CONSTANT_DECL
        ]
        # clang widens non-negative C enums to unsigned int; only keep the
        # declared type when the values actually need it
        integer_type = None
        if any(
            not constants.ENUM_DEFAULT_MIN <= e.value <= constants.ENUM_DEFAULT_MAX
            for e in enumerators
        ):
            integer_type = self.convert_type(cursor.enum_type)
        return DeclNode(
            kind=DeclKind.ENUM,
            name=_tag_name(cursor),
            integer_type=integer_type,
            enumerators=enumerators,
            **self._base_fields(cursor),
        )

    def _convert_record(self, cursor) -> DeclNode:
        """Convert a struct or union, hoisting the tags declared in its body.

        An unnamed struct or union in the body is either the type of the
        field that follows it (``struct { int a; } inner;``) or an anonymous
        member, which becomes a nameless field.
        """
        fields: list[FieldNode] = []
        unnamed_record = None
        for child in cursor.get_children():
            if child.kind == CursorKind.FIELD_DECL:
                if unnamed_record is not None and not _declares(child, unnamed_record):
                    fields.append(self._anonymous_member(unnamed_record))
                unnamed_record = None
                fields.append(self._convert_field(child))
            elif child.kind not in _NESTED_DECL_CURSORS:
                continue
            elif child.kind == CursorKind.ENUM_DECL or _tag_name(child):
                self._convert_decl(child)
            else:
                if unnamed_record is not None:
                    fields.append(self._anonymous_member(unnamed_record))
                unnamed_record = child
        if unnamed_record is not None:
            fields.append(self._anonymous_member(unnamed_record))
        kind = DeclKind.UNION if cursor.kind == CursorKind.UNION_DECL else DeclKind.STRUCT
        return DeclNode(
            kind=kind,
            name=_tag_name(cursor),
            fields=fields,
            is_definition=cursor.is_definition(),
            **self._base_fields(cursor),
        )

    def _anonymous_member(self, cursor) -> FieldNode:
        logger.debug("Anonymous member %s in record", cursor.kind.name)
        return FieldNode(name=None, type=self.convert_type(cursor.type))

    def _convert_field(self, cursor) -> FieldNode:
        width = cursor.get_bitfield_width() if cursor.is_bitfield() else None
        return FieldNode(
            name=cursor.spelling or None,
            type=self.convert_type(cursor.type),
            bit_width=width,
            comment=cursor.raw_comment,
        )

    def _convert_function(self, cursor) -> DeclNode:
        params = [
            ParamNode(name=arg.spelling or None, type=self.convert_type(arg.type))
            for arg in cursor.get_arguments()
        ]
        fn_type = cursor.type
        is_variadic = fn_type.kind == TypeKind.FUNCTIONPROTO and fn_type.is_function_variadic()
        return DeclNode(
            kind=DeclKind.FUNCTION,
            name=cursor.spelling,
            result_type=self.convert_type(cursor.result_type),
            params=params,
            is_variadic=is_variadic,
            **self._base_fields(cursor),
        )

    def _convert_typedef(self, cursor) -> DeclNode:
        return DeclNode(
            kind=DeclKind.TYPEDEF,
            name=cursor.spelling,
            underlying_type=self.convert_type(cursor.underlying_typedef_type),
            **self._base_fields(cursor),
        )

    # ── types ────────────────────────────────────────────────────

    def convert_type(self, ty) -> CType:
        kind = ty.kind
        spelling = ty.spelling

        builtin = _BUILTIN_KINDS.get(kind)
        if builtin is not None:
            return CType(kind=builtin, spelling=spelling)

        if kind == TypeKind.POINTER:
            return CType(
                kind=CTypeKind.POINTER,
                spelling=spelling,
                pointee=self.convert_type(ty.get_pointee()),
            )

        if kind == TypeKind.CONSTANTARRAY:
            return CType(
                kind=CTypeKind.CONSTANT_ARRAY,
                spelling=spelling,
                element=self.convert_type(ty.element_type),
                size=ty.element_count,
            )

        if kind == TypeKind.FUNCTIONPROTO:
            return CType(
                kind=CTypeKind.FUNCTION_PROTO,
                spelling=spelling,
                result=self.convert_type(ty.get_result()),
                params=[self.convert_type(p) for p in ty.argument_types()],
                is_variadic=ty.is_function_variadic(),
            )

        if kind == TypeKind.FUNCTIONNOPROTO:
            return CType(
                kind=CTypeKind.FUNCTION_NO_PROTO,
                spelling=spelling,
                result=self.convert_type(ty.get_result()),
            )

        if kind == TypeKind.RECORD:
            decl = ty.get_declaration()
            if decl.kind == CursorKind.UNION_DECL:
                # unions are never emitted, so nothing can refer to one by name
                return CType(kind=CTypeKind.OTHER, kind_name="Union", spelling=spelling)
            return CType(kind=CTypeKind.RECORD, spelling=spelling, decl_name=_tag_name(decl))

        if kind == TypeKind.ENUM:
            return CType(
                kind=CTypeKind.ENUM,
                spelling=spelling,
                decl_name=_tag_name(ty.get_declaration()),
            )

        if kind == TypeKind.TYPEDEF:
            return CType(
                kind=CTypeKind.TYPEDEF,
                spelling=spelling,
                decl_name=ty.get_declaration().spelling,
                underlying=self.convert_type(ty.get_canonical()),
            )

        if kind == TypeKind.ELABORATED:
            return CType(
                kind=CTypeKind.ELABORATED,
                spelling=spelling,
                underlying=self.convert_type(ty.get_named_type()),
            )

        return CType(kind=CTypeKind.OTHER, kind_name=kind.spelling, spelling=spelling)
