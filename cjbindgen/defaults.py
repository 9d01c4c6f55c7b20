"""Default Value Synthesizer: zero literals for every target type."""

from __future__ import annotations

from . import constants
from . import target_types as tt


def default_literal(ty: tt.TargetType) -> str:
    """Return the literal a generated field or parameter is initialised with.

    ``NamedRecord`` defaults to ``Name()``, which relies on every emitted
    struct giving each of its own fields a default.
    """
    if isinstance(ty, tt.Primitive):
        return _primitive_default(ty)
    if isinstance(ty, tt.FixedArray):
        return f"{ty}(repeat: {default_literal(ty.inner)})"
    if isinstance(ty, tt.Pointer):
        return constants.NULL_POINTER_LITERAL
    if isinstance(ty, tt.OpaqueCString):
        return constants.NULL_CSTRING_LITERAL
    if isinstance(ty, tt.FunctionSignature):
        return f"{ty}({constants.NULL_FUNC_ARG})"
    if isinstance(ty, tt.NamedEnum):
        # enums are plain integer aliases
        return "0"
    if isinstance(ty, tt.NamedRecord):
        return f"{ty}()"
    raise TypeError(f"no default literal for {ty!r}")


def _primitive_default(ty: tt.Primitive) -> str:
    if ty.kind == tt.PrimitiveKind.BOOL:
        return "false"
    if ty.kind == tt.PrimitiveKind.UNIT:
        return "()"
    if ty.kind == tt.PrimitiveKind.FLOAT:
        return "0.0"
    return "0"
