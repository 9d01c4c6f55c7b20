"""Tests for the three-pass binding generator, using hand-built C AST nodes."""

from __future__ import annotations

import logging

import pytest

from cjbindgen.c_ast import (
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
from cjbindgen.config import GeneratorConfig
from cjbindgen.errors import DeclarationError, MisalignedBitfield, UnsupportedCType
from cjbindgen.orchestrator import BindingGenerator, generate

HEADER = "// This file is automatically generated. DO NOT EDIT.\n\npackage clang_cj\n\n"

INT = CType(kind=CTypeKind.INT, spelling="int")
UINT = CType(kind=CTypeKind.UINT, spelling="unsigned int")
VOID = CType(kind=CTypeKind.VOID, spelling="void")
CHAR_PTR = CType(
    kind=CTypeKind.POINTER,
    spelling="const char *",
    pointee=CType(kind=CTypeKind.CHAR_S, spelling="const char"),
)
LONG_DOUBLE = CType(kind=CTypeKind.OTHER, kind_name="LongDouble", spelling="long double")


def _record(name: str) -> CType:
    rec = CType(kind=CTypeKind.RECORD, decl_name=name, spelling=f"struct {name}")
    return CType(kind=CTypeKind.ELABORATED, spelling=f"struct {name}", underlying=rec)


def _enum(name, *constants, **kwargs) -> DeclNode:
    return DeclNode(
        kind=DeclKind.ENUM,
        name=name,
        enumerators=[EnumConstantNode(name=n, value=v) for n, v in constants],
        **kwargs,
    )


def _struct(name, *fields, **kwargs) -> DeclNode:
    return DeclNode(kind=DeclKind.STRUCT, name=name, fields=list(fields), **kwargs)


def _func(name, result, *params, **kwargs) -> DeclNode:
    return DeclNode(
        kind=DeclKind.FUNCTION,
        name=name,
        result_type=result,
        params=[ParamNode(name=n, type=t) for n, t in params],
        **kwargs,
    )


def _typedef(name, underlying) -> DeclNode:
    return DeclNode(kind=DeclKind.TYPEDEF, name=name, underlying_type=underlying)


def _unit(*decls) -> TranslationUnitNode:
    return TranslationUnitNode(path="test.h", declarations=list(decls))


def _color_enum() -> DeclNode:
    return _enum("Color", ("RED", 0), ("GREEN", 1), ("BLUE", 5))


def _point_struct() -> DeclNode:
    return _struct(
        "P",
        FieldNode(name="x", type=INT),
        FieldNode(
            name="y",
            type=CType(kind=CTypeKind.CONSTANT_ARRAY, element=INT, size=4),
        ),
        FieldNode(name="a", type=UINT, bit_width=3),
        FieldNode(name="b", type=UINT, bit_width=5),
    )


class TestEndToEnd:
    def test_full_example(self):
        unit = _unit(
            _color_enum(),
            _point_struct(),
            _typedef("Pt", _record("P")),
            _func("f", VOID, ("a", INT), ("s", CHAR_PTR)),
        )
        result = generate(unit)
        assert result.text == (
            HEADER
            + "type Color = Int32\n\n"
            "const RED: Color = 0\n\n"
            "const GREEN: Color = 1\n\n"
            "const BLUE: Color = 5\n\n"
            "foreign func f(a: Int32, s: CString): Unit\n\n"
            "@C\n"
            "struct P {\n"
            "    var x: Int32 = 0\n"
            "    var y: VArray<Int32, $4> = VArray<Int32, $4>(repeat: 0)\n"
            "    // bitfields\n"
            "    // a unsigned int : 3\n"
            "    // b unsigned int : 5\n"
            "    var bitfields: VArray<UInt8, $1> = VArray<UInt8, $1>(repeat: 0)\n"
            "}\n\n"
            "type Pt = P\n"
        )

    def test_empty_unit_is_header_only(self):
        assert generate(_unit()).text == HEADER

    def test_custom_package_name(self):
        result = generate(_unit(), GeneratorConfig(package_name="mylib"))
        assert "package mylib\n" in result.text


class TestPassOrdering:
    def test_functions_precede_structs_declared_earlier(self):
        unit = _unit(_struct("S", FieldNode(name="x", type=INT)), _func("g", INT))
        text = generate(unit).text
        assert text.index("foreign func g") < text.index("struct S")

    def test_aliases_come_last(self):
        unit = _unit(
            _typedef("S_t", _record("S")),
            _struct("S", FieldNode(name="x", type=INT)),
            _func("g", INT),
        )
        text = generate(unit).text
        assert text.rstrip().endswith("type S_t = S")

    def test_alias_declared_before_its_struct_is_emitted(self):
        unit = _unit(_typedef("S_t", _record("S")), _struct("S", FieldNode(name="x", type=INT)))
        assert "type S_t = S\n" in generate(unit).text


class TestAliasFiltering:
    def test_alias_to_primitive_is_dropped(self):
        unit = _unit(_typedef("myint", INT))
        result = generate(unit)
        assert "myint" not in result.text
        assert result.stats.dropped_aliases == 1

    def test_alias_to_undefined_struct_is_dropped(self):
        unit = _unit(
            _struct("Opaque", is_definition=False),
            _typedef("Handle", _record("Opaque")),
        )
        result = generate(unit)
        assert "Handle" not in result.text
        assert "struct Opaque" not in result.text

    def test_self_named_alias_is_not_emitted(self):
        unit = _unit(_struct("Node", FieldNode(name="v", type=INT)), _typedef("Node", _record("Node")))
        assert "type Node" not in generate(unit).text

    def test_unmappable_typedef_is_dropped_silently(self):
        unit = _unit(_typedef("ld", LONG_DOUBLE))
        result = generate(unit)
        assert result.text == HEADER
        assert result.stats.placeholders == 0


class TestDuplicates:
    def test_struct_defined_twice_is_emitted_once(self):
        unit = _unit(_point_struct(), _point_struct())
        result = generate(unit)
        assert result.text.count("struct P {") == 1
        assert result.stats.duplicates == 1

    def test_forward_declaration_is_not_emitted(self):
        unit = _unit(_struct("P", is_definition=False), _point_struct())
        result = generate(unit)
        assert result.text.count("struct P {") == 1
        assert result.stats.duplicates == 0

    def test_repeated_prototype_is_emitted_once(self):
        unit = _unit(_func("g", INT, ("x", INT)), _func("g", INT, ("x", INT)))
        assert generate(unit).text.count("foreign func g(") == 1

    def test_repeated_enum_is_emitted_once(self):
        unit = _unit(_color_enum(), _color_enum())
        assert generate(unit).text.count("type Color = Int32") == 1

    def test_registry_does_not_leak_between_runs(self):
        generator = BindingGenerator()
        unit = _unit(_point_struct())
        first = generator.generate(unit)
        second = generator.generate(unit)
        assert first.text == second.text
        assert second.stats.duplicates == 0


class TestSystemHeaders:
    def test_system_declarations_are_skipped(self):
        unit = _unit(
            _func("printf", INT, ("fmt", CHAR_PTR), in_system_header=True),
            _struct("timeval", FieldNode(name="s", type=INT), in_system_header=True),
            _func("mine", INT),
        )
        result = generate(unit)
        assert "printf" not in result.text
        assert "timeval" not in result.text
        assert "foreign func mine(): Int32" in result.text
        assert result.stats.system_declarations == 2


class TestEnums:
    def test_anonymous_enum_emits_constants_only(self):
        unit = _unit(_enum(None, ("FLAG_A", 1), ("FLAG_B", 2)))
        result = generate(unit)
        assert result.text == HEADER + "const FLAG_A: Int32 = 1\n\nconst FLAG_B: Int32 = 2\n\n"
        assert result.stats.enum_constants == 2

    def test_enum_with_unsigned_integer_type(self):
        unit = _unit(_enum("Bits", ("HIGH", 2147483648), integer_type=UINT))
        text = generate(unit).text
        assert "type Bits = UInt32\n" in text
        assert "const HIGH: Bits = 2147483648\n" in text


class TestErrorPolicy:
    def _bad_struct(self) -> DeclNode:
        return _struct(
            "Wide",
            FieldNode(name="v", type=LONG_DOUBLE),
            location=SourceLocation(file="test.h", line=7, column=8),
        )

    def test_lenient_mode_emits_placeholder_and_continues(self, caplog):
        unit = _unit(self._bad_struct(), _struct("Ok", FieldNode(name="x", type=INT)))
        with caplog.at_level(logging.WARNING, logger="cjbindgen.orchestrator"):
            result = generate(unit)
        assert (
            "// cjbindgen: skipped struct 'Wide' (test.h:7:8): "
            "unsupported C type 'LongDouble' (long double)\n"
        ) in result.text
        assert "struct Ok {" in result.text
        assert "struct Wide {" not in result.text
        assert result.stats.placeholders == 1
        assert "Wide" in caplog.text

    def test_failed_struct_is_not_registered(self):
        unit = _unit(self._bad_struct(), _typedef("W", _record("Wide")))
        assert "type W" not in generate(unit).text

    def test_strict_mode_raises_with_location(self):
        with pytest.raises(DeclarationError) as excinfo:
            generate(_unit(self._bad_struct()), GeneratorConfig(strict=True))
        err = excinfo.value
        assert isinstance(err.cause, UnsupportedCType)
        assert str(err).startswith("test.h:7:8: struct 'Wide': ")

    def test_strict_mode_raises_for_unmappable_typedef(self):
        with pytest.raises(DeclarationError):
            generate(_unit(_typedef("ld", LONG_DOUBLE)), GeneratorConfig(strict=True))

    def test_function_with_unmappable_param_is_replaced(self):
        unit = _unit(_func("h", VOID, ("v", LONG_DOUBLE)), _func("k", VOID))
        result = generate(unit)
        assert "// cjbindgen: skipped function 'h'" in result.text
        assert "foreign func k(): Unit" in result.text

    def test_misaligned_bitfield_is_fatal_even_when_lenient(self):
        unit = _unit(
            _struct(
                "Bad",
                FieldNode(name="a", type=UINT, bit_width=3),
                FieldNode(name="b", type=UINT, bit_width=4),
            )
        )
        with pytest.raises(DeclarationError) as excinfo:
            generate(unit)
        assert isinstance(excinfo.value.cause, MisalignedBitfield)


class TestUnionsAndVariadics:
    def test_union_is_not_emitted(self, caplog):
        union = DeclNode(
            kind=DeclKind.UNION,
            name="U",
            fields=[FieldNode(name="i", type=INT)],
        )
        with caplog.at_level(logging.WARNING, logger="cjbindgen.orchestrator"):
            result = generate(_unit(union))
        assert result.text == HEADER
        assert "union 'U'" in caplog.text

    def test_variadic_function_keeps_fixed_params(self, caplog):
        node = _func("logf", VOID, ("fmt", CHAR_PTR), is_variadic=True)
        with caplog.at_level(logging.WARNING, logger="cjbindgen.orchestrator"):
            text = generate(_unit(node)).text
        assert "foreign func logf(fmt: CString): Unit\n" in text
        assert "variadic" in caplog.text


class TestStats:
    def test_counts(self):
        unit = _unit(
            _color_enum(),
            _point_struct(),
            _typedef("Pt", _record("P")),
            _func("f", VOID),
        )
        stats = generate(unit).stats
        assert (stats.enums, stats.enum_constants, stats.structs, stats.functions, stats.aliases) == (
            1,
            3,
            1,
            1,
            1,
        )
        assert stats.header == "test.h"

    def test_report_mentions_each_count(self):
        report = generate(_unit(_color_enum())).stats.report()
        assert "Binding Statistics" in report
        assert "1 (3 constants)" in report
