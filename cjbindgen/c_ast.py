"""C AST: the resolved header declarations the generator consumes.

These models are plain data: the frontend fills them from libclang, tests
build them by hand, and nothing downstream ever mutates them.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class CTypeKind(str, Enum):
    # Builtins
    VOID = "Void"
    BOOL = "Bool"
    CHAR_U = "CharU"
    UCHAR = "UChar"
    CHAR_S = "CharS"
    SCHAR = "SChar"
    SHORT = "Short"
    USHORT = "UShort"
    INT = "Int"
    UINT = "UInt"
    LONG = "Long"
    ULONG = "ULong"
    LONGLONG = "LongLong"
    ULONGLONG = "ULongLong"
    FLOAT = "Float"
    DOUBLE = "Double"
    # Derived
    POINTER = "Pointer"
    CONSTANT_ARRAY = "ConstantArray"
    FUNCTION_PROTO = "FunctionProto"
    FUNCTION_NO_PROTO = "FunctionNoProto"
    # Named
    RECORD = "Record"
    ENUM = "Enum"
    TYPEDEF = "Typedef"
    ELABORATED = "Elaborated"
    # Anything the frontend cannot describe further
    OTHER = "Other"


class DeclKind(str, Enum):
    ENUM = "Enum"
    STRUCT = "Struct"
    UNION = "Union"
    FUNCTION = "Function"
    TYPEDEF = "Typedef"


class SourceLocation(BaseModel):
    """File position of a declaration."""

    file: str = ""
    line: int = 0
    column: int = 0

    def is_unknown(self) -> bool:
        return not self.file and self.line == 0 and self.column == 0

    def __str__(self) -> str:
        if self.is_unknown():
            return "<unknown>"
        return f"{self.file}:{self.line}:{self.column}"


NO_SOURCE_LOCATION = SourceLocation()


class CType(BaseModel):
    """C type descriptor.

    Which payload fields are populated depends on ``kind``:

    - POINTER: ``pointee``
    - CONSTANT_ARRAY: ``element`` and ``size``
    - FUNCTION_PROTO / FUNCTION_NO_PROTO: ``result``, ``params``, ``is_variadic``
    - RECORD / ENUM / TYPEDEF: ``decl_name`` (``None`` when anonymous)
    - TYPEDEF: ``underlying`` is the canonical type
    - ELABORATED: ``underlying`` is the named type
    - OTHER: ``kind_name`` is the frontend's own name for the kind
    """

    kind: CTypeKind
    spelling: str = ""
    kind_name: str = ""
    pointee: Optional[CType] = None
    element: Optional[CType] = None
    size: Optional[int] = None
    result: Optional[CType] = None
    params: list[CType] = []
    is_variadic: bool = False
    decl_name: Optional[str] = None
    underlying: Optional[CType] = None

    def canonical(self) -> CType:
        """Strip typedef and elaborated sugar down to the structural type."""
        ty = self
        while ty.kind in (CTypeKind.TYPEDEF, CTypeKind.ELABORATED):
            if ty.underlying is None:
                break
            ty = ty.underlying
        return ty

    def display_name(self) -> str:
        if self.spelling:
            return self.spelling
        if self.decl_name:
            return self.decl_name
        return self.kind_name or self.kind.value


class EnumConstantNode(BaseModel):
    name: str
    value: int
    comment: Optional[str] = None


class FieldNode(BaseModel):
    name: Optional[str] = None
    type: CType
    bit_width: Optional[int] = None
    comment: Optional[str] = None

    @property
    def is_bitfield(self) -> bool:
        return self.bit_width is not None


class ParamNode(BaseModel):
    name: Optional[str] = None
    type: CType


class DeclNode(BaseModel):
    """One top-level declaration of the translation unit."""

    kind: DeclKind
    name: Optional[str] = None
    comment: Optional[str] = None
    location: SourceLocation = NO_SOURCE_LOCATION
    in_system_header: bool = False
    # ENUM
    integer_type: Optional[CType] = None
    enumerators: list[EnumConstantNode] = []
    # STRUCT / UNION
    fields: list[FieldNode] = []
    is_definition: bool = True
    # FUNCTION
    result_type: Optional[CType] = None
    params: list[ParamNode] = []
    is_variadic: bool = False
    # TYPEDEF
    underlying_type: Optional[CType] = None

    def describe(self) -> str:
        return f"{self.kind.value.lower()} '{self.name or '<anonymous>'}'"


class TranslationUnitNode(BaseModel):
    path: str = ""
    declarations: list[DeclNode] = []

    def of_kind(self, *kinds: DeclKind) -> list[DeclNode]:
        return [d for d in self.declarations if d.kind in kinds]


CType.model_rebuild()
