"""
Go parser adapter.

Exposes the two entry points the fragment loop needs on top of tree-sitter:

- parse_expression: a lone expression (or type expression)
- parse_unit: a complete compilation unit

Tree-sitter recovers from syntax errors and its Go grammar is more lenient than
the Go specification at the top level, so both entry points reject trees that
contain error/missing nodes or break Go's file structure.
"""

import logging

from tree_sitter import Node as TSNode
from tree_sitter import Parser

from codegraph_fragments.category import PACKAGE_SENTINEL
from codegraph_fragments.errors import ParseFailure
from codegraph_fragments.nodes import TOP_LEVEL_KINDS, FileNode, Node, wrap
from codegraph_fragments.parsing.parser_registry import ParserRegistry, get_registry

logger = logging.getLogger(__name__)

# Contexts tried by parse_expression: (prefix, var_spec field holding the fragment)
EXPRESSION_CONTEXTS = (
    (f"package {PACKAGE_SENTINEL}\n\nvar _ = ", "value"),
    (f"package {PACKAGE_SENTINEL}\n\nvar _ ", "type"),
)

_SNIPPET_LEN = 20

# Reserved words; the grammar accepts them as identifiers in expression position.
GO_KEYWORDS = frozenset(
    """
    break case chan const continue default defer else fallthrough for func go goto
    if import interface map package range return select struct switch type var
    """.split()
)

IDENTIFIER_KINDS = frozenset({"identifier", "type_identifier", "field_identifier", "package_identifier", "label_name"})


class GoParser:
    """Tree-sitter backed Go parser with expression and unit entry points."""

    LANGUAGE = "go"

    def __init__(self, registry: ParserRegistry | None = None):
        self._registry = registry

    @property
    def registry(self) -> ParserRegistry:
        if self._registry is None:
            self._registry = get_registry()
        return self._registry

    def _parser(self) -> Parser:
        return self.registry.get_parser(self.LANGUAGE)

    def parse_expression(self, text: str) -> Node:
        """
        Parse text as a single Go expression.

        Args:
            text: Expression source

        Returns:
            View over the expression node

        Raises:
            ParseFailure: If the text is not exactly one expression
        """
        first_failure: ParseFailure | None = None
        for prefix, field in EXPRESSION_CONTEXTS:
            try:
                return self._parse_in_context(prefix, field, text)
            except ParseFailure as e:
                logger.debug(f"Expression context {field!r} rejected fragment: {e}")
                if first_failure is None:
                    first_failure = e
        raise first_failure

    def parse_unit(self, text: str) -> FileNode:
        """
        Parse text as a complete Go source file.

        Args:
            text: File source, starting with a package clause

        Returns:
            FileNode view over the source_file

        Raises:
            ParseFailure: If the text is not a well formed compilation unit
        """
        source = text.encode("utf-8")
        root = self._parse(source)
        _check_errors(root, source)
        _check_keywords(root, source)

        items = _named(root)
        if not items or items[0].type != "package_clause":
            found = items[0] if items else None
            raise _failure_at(found or root, f"expected 'package', found {_describe(found)}", at_end=found is None)

        seen_declaration = False
        for item in items[1:]:
            if item.type == "package_clause":
                raise _failure_at(item, "unexpected package clause")
            if item.type not in TOP_LEVEL_KINDS:
                raise _failure_at(item, f"expected declaration, found {_describe(item)}")
            if item.type == "import_declaration":
                if seen_declaration:
                    raise _failure_at(item, "imports must appear before other declarations")
            else:
                seen_declaration = True

        return FileNode(root, source)

    def _parse(self, source: bytes) -> TSNode:
        tree = self._parser().parse(source)
        if tree is None or tree.root_node is None:
            raise ParseFailure("tree-sitter returned no tree")
        root = tree.root_node
        if root.type != "source_file":
            raise ParseFailure(f"unexpected root node {root.type!r}")
        return root

    def _parse_in_context(self, prefix: str, field: str, text: str) -> Node:
        source = (prefix + text).encode("utf-8")
        offset = _Offset.of(prefix)
        root = self._parse(source)
        _check_errors(root, source, offset)
        _check_keywords(root, source, offset)

        items = _named(root)
        if len(items) != 2 or items[1].type != "var_declaration":
            raise _failure_at(items[-1] if items else root, "expected a single expression", offset)
        for token in root.children:
            if token.start_byte >= items[1].end_byte and _text(token, source) == ";":
                raise _failure_at(token, "unexpected ';' after expression", offset)

        specs = _named(items[1])
        if len(specs) != 1 or specs[0].type != "var_spec":
            raise _failure_at(items[1], "expected a single expression", offset)

        spec = specs[0]
        other = "type" if field == "value" else "value"
        target = spec.child_by_field_name(field)
        if target is None or spec.child_by_field_name(other) is not None:
            raise _failure_at(spec, "expected a single expression", offset)

        operands = _named(target) if target.type == "expression_list" else [target]
        if len(operands) != 1:
            raise _failure_at(target, f"expected a single expression, found {len(operands)}", offset)
        return wrap(operands[0], source)


class _Offset:
    """Maps positions in wrapped text back onto the user's fragment."""

    __slots__ = ("lines", "columns")

    def __init__(self, lines: int = 0, columns: int = 0):
        self.lines = lines
        self.columns = columns

    @classmethod
    def of(cls, prefix: str) -> "_Offset":
        return cls(lines=prefix.count("\n"), columns=len(prefix.rpartition("\n")[2]))

    def position(self, point: tuple[int, int]) -> tuple[int, int]:
        row, col = point
        if row < self.lines:
            return row + 1, col + 1
        if row == self.lines:
            col = max(col - self.columns, 0)
        return row - self.lines + 1, col + 1


_NO_OFFSET = _Offset()


def _named(node: TSNode) -> list[TSNode]:
    return [child for child in node.named_children if child.type != "comment"]


def _first_error(node: TSNode) -> TSNode | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return None


def _check_errors(root: TSNode, source: bytes, offset: _Offset = _NO_OFFSET) -> None:
    error = _first_error(root)
    if error is None:
        return
    if error.is_missing:
        raise _failure_at(error, f"missing {error.type!r}", offset)
    snippet = " ".join(_text(error, source).split())[:_SNIPPET_LEN]
    raise _failure_at(error, f"unexpected {snippet!r}" if snippet else "syntax error", offset)


def _first_keyword(root: TSNode, source: bytes) -> TSNode | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in IDENTIFIER_KINDS and _text(node, source) in GO_KEYWORDS:
            return node
        stack.extend(reversed(node.named_children))
    return None


def _check_keywords(root: TSNode, source: bytes, offset: _Offset = _NO_OFFSET) -> None:
    node = _first_keyword(root, source)
    if node is not None:
        raise _failure_at(node, f"unexpected keyword {_text(node, source)!r}", offset)


def _text(node: TSNode, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _failure_at(node: TSNode, message: str, offset: _Offset = _NO_OFFSET, *, at_end: bool = False) -> ParseFailure:
    line, column = offset.position(node.end_point if at_end else node.start_point)
    return ParseFailure(message, line=line, column=column, node_type=node.type)


def _describe(node: TSNode | None) -> str:
    if node is None:
        return "EOF"
    return node.type


__all__ = ["GoParser", "EXPRESSION_CONTEXTS"]
