"""Named constants for generated Cangjie text and CLI messages."""

from __future__ import annotations

GENERATED_HEADER = "// This file is automatically generated. DO NOT EDIT."
DEFAULT_PACKAGE_NAME = "clang_cj"

STRUCT_ATTRIBUTE = "@C"
INDENT = "    "

BITFIELD_MARKER = "// bitfields"
BITFIELD_STORAGE_NAME = "bitfields"
UNNAMED_BITFIELD = "unnamed"
BITS_PER_BYTE = 8

PARAM_NAME_TEMPLATE = "arg{index}"
RESERVED_SUFFIX = "_"

PLACEHOLDER_PREFIX = "// cjbindgen: skipped"

# Cangjie spellings of the FFI building blocks
UNIT_TYPE = "Unit"
BOOL_TYPE = "Bool"
CSTRING_TYPE = "CString"
POINTER_TEMPLATE = "CPointer<{inner}>"
ARRAY_TEMPLATE = "VArray<{inner}, ${count}>"
FUNC_TEMPLATE = "CFunc<({params}) -> {result}>"

NULL_POINTER_LITERAL = "CPointer()"
NULL_CSTRING_LITERAL = "CString(CPointer<UInt8>())"
NULL_FUNC_ARG = "CPointer<Int8>()"

DEFAULT_LANGUAGE_STANDARD = "c11"

# enums whose values all fit here are emitted as Int32 aliases
ENUM_DEFAULT_MIN = -(2**31)
ENUM_DEFAULT_MAX = 2**31 - 1

SUCCESS_MESSAGE = "Successfully generated bindings"
FAILURE_PREFIX = "Error generating bindings"

RESERVED_WORDS: frozenset[str] = frozenset(
    {
        "abstract",
        "as",
        "Bool",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "do",
        "else",
        "enum",
        "extend",
        "false",
        "finally",
        "Float16",
        "Float32",
        "Float64",
        "for",
        "foreign",
        "func",
        "if",
        "import",
        "in",
        "init",
        "Int16",
        "Int32",
        "Int64",
        "Int8",
        "interface",
        "IntNative",
        "is",
        "let",
        "macro",
        "main",
        "match",
        "mut",
        "Nothing",
        "open",
        "operator",
        "override",
        "package",
        "private",
        "prop",
        "protected",
        "public",
        "quote",
        "redef",
        "return",
        "Rune",
        "spawn",
        "static",
        "struct",
        "super",
        "synchronized",
        "this",
        "This",
        "throw",
        "true",
        "try",
        "type",
        "UInt16",
        "UInt32",
        "UInt64",
        "UInt8",
        "UIntNative",
        "Unit",
        "unsafe",
        "var",
        "VArray",
        "where",
        "while",
    }
)

# Reserved words that only act as keywords in modifier or declaration
# position; a foreign function may carry one of these names as is.
CONTEXTUAL_KEYWORDS: frozenset[str] = frozenset(
    {
        "abstract",
        "init",
        "main",
        "mut",
        "open",
        "operator",
        "override",
        "private",
        "prop",
        "protected",
        "public",
        "redef",
        "static",
    }
)
