"""Declaration Emitters: render declaration values as Cangjie source text.

Every renderer is a pure function returning the text for one declaration,
including its trailing blank line. Field, parameter and enumerator order is
kept exactly as declared, since struct layout depends on it.
"""

from __future__ import annotations

import textwrap
from typing import Optional

from .bitfields import BitfieldGroup
from .declarations import EnumDecl, Field, FunctionDecl, StructDecl, TypedefDecl
from .defaults import default_literal
from .target_types import foreign_symbol, sanitize_identifier
from . import constants


def render_header(package_name: str) -> str:
    return f"{constants.GENERATED_HEADER}\n\npackage {package_name}\n\n"


def render_doc(doc: Optional[str], indent: str = "") -> list[str]:
    """Documentation comment lines, re-indented to sit above a declaration.

    Only the indentation shared by the continuation lines is removed, so
    anything indented further inside the comment keeps its shape.
    """
    if not doc:
        return []
    first, _, rest = doc.partition("\n")
    lines = [f"{indent}{first.strip()}"]
    for line in textwrap.dedent(rest).splitlines() if rest else []:
        text = line.rstrip()
        if text.startswith("*"):
            # align with the first line's "/*"
            text = f" {text}"
        lines.append(f"{indent}{text}" if text else "")
    return lines


def render_enum(decl: EnumDecl) -> str:
    lines = render_doc(decl.doc)
    const_type = str(decl.integer_type)
    if decl.name:
        lines.append(f"type {sanitize_identifier(decl.name)} = {decl.integer_type}")
        lines.append("")
        const_type = sanitize_identifier(decl.name)
    for const in decl.constants:
        lines.extend(render_doc(const.doc))
        lines.append(
            f"const {sanitize_identifier(const.name)}: {const_type} = {const.value}"
        )
        lines.append("")
    return _join(lines)


def render_struct(decl: StructDecl) -> str:
    lines = render_doc(decl.doc)
    lines.append(constants.STRUCT_ATTRIBUTE)
    lines.append(f"struct {sanitize_identifier(decl.name)} {{")
    for member in decl.members:
        if isinstance(member, BitfieldGroup):
            lines.extend(_render_bitfield_group(member))
        else:
            lines.extend(_render_field(member))
    lines.append("}")
    lines.append("")
    return _join(lines)


def _render_field(f: Field) -> list[str]:
    lines = render_doc(f.doc, constants.INDENT)
    lines.append(
        f"{constants.INDENT}var {sanitize_identifier(f.name)}: {f.type}"
        f" = {default_literal(f.type)}"
    )
    return lines


def _render_bitfield_group(group: BitfieldGroup) -> list[str]:
    lines = [f"{constants.INDENT}{constants.BITFIELD_MARKER}"]
    for m in group.members:
        lines.append(f"{constants.INDENT}// {m.name} {m.c_type} : {m.width}")
    storage = group.storage_type
    lines.append(
        f"{constants.INDENT}var {group.storage_name}: {storage}"
        f" = {default_literal(storage)}"
    )
    return lines


def render_function(decl: FunctionDecl) -> str:
    lines = render_doc(decl.doc)
    params = ", ".join(f"{sanitize_identifier(p.name)}: {p.type}" for p in decl.params)
    lines.append(
        f"foreign func {foreign_symbol(decl.name)}({params}): {decl.return_type}"
    )
    lines.append("")
    return _join(lines)


def render_typedef(decl: TypedefDecl) -> str:
    lines = render_doc(decl.doc)
    lines.append(f"type {sanitize_identifier(decl.name)} = {decl.underlying}")
    return _join(lines)


def render_placeholder(what: str, location: str, reason: str) -> str:
    return f"{constants.PLACEHOLDER_PREFIX} {what} ({location}): {reason}\n\n"


def _join(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"
