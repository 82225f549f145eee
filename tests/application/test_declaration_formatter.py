#!/usr/bin/env python3

"""Unit tests for C declaration rendering."""

import pytest

from dwarf_layout.application import DeclarationFormatter, StructParser
from dwarf_layout.domain.models.dwarf import Member
from tests.dwarf_builder import (
    Form,
    Ref,
    array_type,
    base_type,
    build_dwarf,
    const_type,
    member,
    node,
    pointer_type,
    struct_type,
    typedef,
)


@pytest.fixture(scope="module")
def dwarf():
    return build_dwarf(
        [
            base_type("int", 4, label="int"),
            base_type("char", 1, label="char"),
            base_type("unsigned int", 4, label="uint"),
            typedef("u32", "uint", label="u32"),
            const_type("char", label="cchar"),
            pointer_type("cchar", label="pcchar"),
            pointer_type("char", label="pchar"),
            pointer_type("pchar", label="ppchar"),
            pointer_type(None, label="void_ptr"),
            const_type("u32", label="c_u32"),
            pointer_type("c_u32", label="p_c_u32"),
            array_type("int", label="int8", subranges=[{"DW_AT_upper_bound": 7}]),
            array_type(
                "char",
                label="char0",
                subranges=[{"DW_AT_upper_bound": Form("DW_FORM_data8", 0xFFFFFFFFFFFFFFFF)}],
            ),
            node("DW_TAG_subroutine_type", {"DW_AT_type": Ref("int")}, [], label="fn"),
            pointer_type("fn", label="fn_ptr"),
            node("DW_TAG_subroutine_type", {}, label="void_fn"),
            pointer_type("void_fn", label="void_fn_ptr"),
            node("DW_TAG_enumeration_type", {"DW_AT_name": "color", "DW_AT_type": Ref("uint")}, label="color"),
            node("DW_TAG_enumeration_type", {"DW_AT_type": Ref("uint")}, label="anon_enum"),
            node("DW_TAG_union_type", {"DW_AT_byte_size": 4}, [member("i", "int")], label="union"),
            node("DW_TAG_variable", {"DW_AT_name": "counter"}, label="var"),
            pointer_type("var", label="var_ptr"),
            struct_type("point", 8, [member("x", "int", 0), member("y", "int", 4)], label="point"),
            struct_type(None, 4, [member("a", "int", 0)], label="anon"),
            struct_type(
                "kitchen_sink",
                64,
                [
                    member("name", "pcchar", 0),
                    member("argv", "ppchar", 8),
                    member("opaque", "void_ptr", 16),
                    member("values", "int8", 24),
                    member("callback", "fn_ptr", 56),
                    member("on_exit", "void_fn_ptr", 56),
                    member("flags", "uint", 60, DW_AT_bit_size=3),
                    member("origin", "point"),
                    member("inner", "anon"),
                    member("u", "union"),
                    member("c", "color"),
                    member("mode", "anon_enum"),
                    member("weird", "var_ptr"),
                    node(
                        "DW_TAG_member",
                        {"DW_AT_name": "bad", "DW_AT_type": Form("DW_FORM_data4", 1)},
                    ),
                    member("limit", "p_c_u32"),
                    member("tail", "char0", 64),
                    member("level", "uint", DW_AT_bit_size=5, DW_AT_data_bit_offset=483),
                ],
                label="kitchen_sink",
            ),
        ]
    )


@pytest.fixture(scope="module")
def parser(dwarf):
    parser = StructParser(dwarf)
    parser.load_all_structs()
    return parser


@pytest.fixture(scope="module")
def lines(parser):
    formatter = DeclarationFormatter(parser)
    members = parser.enumerate_members(parser.structs()["kitchen_sink"])
    return {m.name: formatter.format_member(m) for m in members}


class TestFormatStruct:
    """Test whole struct declarations."""

    @pytest.mark.unit
    def test_simple_struct(self, parser) -> None:
        text = DeclarationFormatter(parser).format_struct(parser.structs()["point"])

        assert text == (
            "struct point {\n"
            "    int x;  /* offset: 0 */\n"
            "    int y;  /* offset: 4 */\n"
            "};  /* size: 8 */"
        )

    @pytest.mark.unit
    def test_custom_indent(self, parser) -> None:
        text = DeclarationFormatter(parser, indent="\t").format_struct(parser.structs()["point"])

        assert "\tint x;" in text


class TestFormatMember:
    """Test member declarators for each type shape."""

    @pytest.mark.unit
    def test_pointer_to_const(self, lines) -> None:
        assert lines["name"] == "const char *name;  /* offset: 0 */"

    @pytest.mark.unit
    def test_pointer_to_pointer(self, lines) -> None:
        assert lines["argv"] == "char **argv;  /* offset: 8 */"

    @pytest.mark.unit
    def test_void_pointer(self, lines) -> None:
        assert lines["opaque"] == "void *opaque;  /* offset: 16 */"

    @pytest.mark.unit
    def test_array(self, lines) -> None:
        assert lines["values"] == "int values[8];  /* offset: 24 */"

    @pytest.mark.unit
    def test_zero_length_array(self, lines) -> None:
        assert lines["tail"] == "char tail[0];  /* offset: 64 */"

    @pytest.mark.unit
    def test_function_pointers(self, lines) -> None:
        assert lines["callback"] == "int (*callback)();  /* offset: 56 */"
        assert lines["on_exit"] == "void (*on_exit)();  /* offset: 56 */"

    @pytest.mark.unit
    def test_bit_field(self, lines) -> None:
        assert lines["flags"] == "unsigned int flags : 3;  /* offset: 60 */"

    @pytest.mark.unit
    def test_bit_field_with_data_bit_offset(self, lines) -> None:
        assert lines["level"] == "unsigned int level : 5;  /* offset: 60, bit: 3 */"

    @pytest.mark.unit
    def test_struct_union_and_enum_members(self, lines) -> None:
        assert lines["origin"] == "struct point origin;"
        assert lines["inner"] == "struct {...} inner;"
        assert lines["u"] == "union {...} u;"
        assert lines["c"] == "enum color c;"
        assert lines["mode"] == "enum unsigned int mode;"

    @pytest.mark.unit
    def test_typedef_stops_peeling(self, lines) -> None:
        assert lines["limit"] == "const u32 *limit;"

    @pytest.mark.unit
    def test_unrecognized_inner_type(self, lines) -> None:
        assert lines["weird"] == "? *weird;"

    @pytest.mark.unit
    def test_unresolved_member_type(self, lines) -> None:
        assert lines["bad"] == "? bad;"

    @pytest.mark.unit
    def test_unnamed_member(self, parser, dwarf) -> None:
        formatter = DeclarationFormatter(parser)
        unnamed = Member(name=None, size=0, type_ref=None, location=dwarf.location("int"))

        assert formatter.format_member(unnamed) == "? ;"


class TestTypePrefix:
    """Test peel depth limits."""

    @pytest.mark.unit
    def test_void(self, parser) -> None:
        assert DeclarationFormatter(parser).type_prefix(None) == "void "

    @pytest.mark.unit
    def test_depth_limit(self, parser, dwarf) -> None:
        formatter = DeclarationFormatter(parser, max_depth=1)
        pointer = parser.resolve_type(dwarf.location("p_c_u32"))

        assert formatter.type_prefix(pointer) == "const ? *"
