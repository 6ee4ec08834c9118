"""
Parse tree view tests.
"""

import pytest

from codegraph_fragments.nodes import (
    AssignmentStatementNode,
    BlockNode,
    DeclarationStatementNode,
    FunctionDeclarationNode,
    Ident,
    OtherNode,
    Span,
    fallback_ident,
)

SOURCE = """package demo

// f does things
func f() {
	// leading comment
	var i int64 = 10
	s := i + 1
	_ = s
	a, _ = s, 2
	s += 3;
}

func g()
"""


@pytest.fixture(scope="module")
def file_node(go_parser):
    return go_parser.parse_unit(SOURCE)


@pytest.fixture(scope="module")
def statements(file_node):
    return file_node.declarations[0].body.statements


class TestFileAndFunction:
    def test_package_and_declarations(self, file_node):
        assert file_node.package_name == "demo"
        assert [type(d) for d in file_node.declarations] == [FunctionDeclarationNode, FunctionDeclarationNode]

    def test_function_name_and_body(self, file_node):
        f, g = file_node.declarations

        assert f.name == "f"
        assert isinstance(f.body, BlockNode)
        assert g.name == "g"
        assert g.body is None

    def test_declarations_are_declarations(self, file_node):
        assert all(d.is_declaration for d in file_node.declarations)


class TestBlock:
    def test_statements_skip_comments(self, statements):
        assert [s.kind for s in statements] == [
            "var_declaration",
            "short_var_declaration",
            "assignment_statement",
            "assignment_statement",
            "assignment_statement",
        ]

    def test_declaration_in_statement_position(self, statements):
        decl_stmt = statements[0]

        assert isinstance(decl_stmt, DeclarationStatementNode)
        inner = decl_stmt.declaration
        assert isinstance(inner, OtherNode)
        assert inner.kind == "var_declaration"
        assert inner.is_declaration
        assert inner.text == "var i int64 = 10"


class TestAssignment:
    def test_short_var_declaration(self, statements):
        stmt = statements[1]

        assert isinstance(stmt, AssignmentStatementNode)
        assert stmt.operator == ":="
        assert [n.text for n in stmt.left] == ["s"]
        assert [n.text for n in stmt.right] == ["i + 1"]
        assert not stmt.is_discard

    def test_discard_assignment(self, statements):
        stmt = statements[2]

        assert stmt.operator == "="
        assert stmt.is_discard
        assert stmt.right[0].text == "s"

    def test_multiple_targets_are_not_discard(self, statements):
        stmt = statements[3]

        assert [n.text for n in stmt.left] == ["a", "_"]
        assert not stmt.is_discard

    def test_compound_operator(self, statements):
        assert statements[4].operator == "+="


class TestViews:
    def test_span_is_one_based_lines(self, statements):
        assert statements[1].span == Span(start_line=7, start_col=1, end_line=7, end_col=11)

    def test_views_compare_by_position(self, file_node):
        first = file_node.declarations[0].body
        second = file_node.declarations[0].body

        assert first is not second
        assert first == second
        assert hash(first) == hash(second)
        assert first != file_node.declarations[0]

    def test_children_are_named(self, statements):
        assert [c.kind for c in statements[1].children] == ["expression_list", "expression_list"]


class TestIdent:
    def test_fallback_ident(self):
        node = fallback_ident(ValueError("1:1: bad input"))

        assert isinstance(node, Ident)
        assert node.is_fallback
        assert node.kind == "identifier"
        assert node.text == node.name == "1:1: bad input"
        assert node.span is None
        assert node.children == []
        assert not node.is_declaration

    def test_plain_ident_is_not_fallback(self):
        assert not Ident(name="x").is_fallback
