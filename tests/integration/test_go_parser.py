"""
Go parser adapter tests against the real tree-sitter grammar.
"""

import pytest

from codegraph_fragments.errors import ParseFailure
from codegraph_fragments.nodes import FileNode


class TestParseExpression:
    """Test the expression-only entry point."""

    @pytest.mark.parametrize(
        "src,kind",
        [
            ("foo", "identifier"),
            ("myIdent", "identifier"),
            ("42", "int_literal"),
            ("myIdent()", "call_expression"),
            ("myPkg.myIdent", "selector_expression"),
            ("1 + 2", "binary_expression"),
            ("func() {}", "func_literal"),
            ('"str"', "interpreted_string_literal"),
        ],
    )
    def test_expressions(self, go_parser, src, kind):
        node = go_parser.parse_expression(src)

        assert node.kind == kind
        assert node.text == src

    @pytest.mark.parametrize(
        "src,kind",
        [
            ("[]int", "slice_type"),
            ("map[string]int", "map_type"),
            ("chan int", "channel_type"),
        ],
    )
    def test_type_expressions(self, go_parser, src, kind):
        node = go_parser.parse_expression(src)

        assert node.kind == kind
        assert node.text == src

    @pytest.mark.parametrize(
        "src",
        [
            "foo := 42",
            "type foo string",
            "if true {}",
            "a, b",
            "x\nvar y = 1",
            "int = 5",
            "package main",
            "",
            "foo;",
            "f();",
            "return",
            "for {}",
            "switch {}",
            "range",
        ],
    )
    def test_rejects_non_expressions(self, go_parser, src):
        with pytest.raises(ParseFailure):
            go_parser.parse_expression(src)

    def test_failure_has_position(self, go_parser):
        with pytest.raises(ParseFailure) as exc_info:
            go_parser.parse_expression("foo := 42")

        assert exc_info.value.line is not None
        assert exc_info.value.column is not None


class TestParseUnit:
    """Test the compilation-unit entry point."""

    def test_minimal_file(self, go_parser):
        node = go_parser.parse_unit("package main\n")

        assert isinstance(node, FileNode)
        assert node.package_name == "main"
        assert node.declarations == []

    def test_full_file(self, go_parser):
        src = 'package p\n\nimport "fmt"\n\nfunc f() { fmt.Println("Hello, World!") }\n'

        node = go_parser.parse_unit(src)

        assert node.package_name == "p"
        assert [d.kind for d in node.declarations] == ["import_declaration", "function_declaration"]

    @pytest.mark.parametrize(
        "src",
        [
            "",
            "// only a comment\n",
            "func f() {}\n",
            "package a\n\npackage b\n",
            "package p\n\nx := 1\n",
            'package p\n\nfunc f() {}\n\nimport "fmt"\n',
            "package p\n\nfunc f() {\n",
        ],
    )
    def test_rejects_malformed_units(self, go_parser, src):
        with pytest.raises(ParseFailure):
            go_parser.parse_unit(src)

    def test_missing_package_message(self, go_parser):
        with pytest.raises(ParseFailure) as exc_info:
            go_parser.parse_unit("")

        assert "expected 'package'" in str(exc_info.value)

    def test_rejects_keyword_used_as_identifier(self, go_parser):
        with pytest.raises(ParseFailure) as exc_info:
            go_parser.parse_unit("package p\n\nvar x = return\n")

        assert "unexpected keyword 'return'" in str(exc_info.value)

    def test_keyword_in_statement_position_is_accepted(self, go_parser):
        node = go_parser.parse_unit("package p\n\nfunc f() {\n\tfor {\n\t\tbreak\n\t}\n}\n")

        assert [d.kind for d in node.declarations] == ["function_declaration"]
