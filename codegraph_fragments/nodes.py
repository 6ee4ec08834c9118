"""
Parse tree views over tree-sitter Go nodes.

The reducer dispatches on a closed set of variants:

- FileNode: a whole compilation unit (package clause + declarations)
- FunctionDeclarationNode: a top-level ``func``
- BlockNode: ``{ ... }``
- DeclarationStatementNode: a var/const/type declaration used as a statement
- AssignmentStatementNode: ``=``, ``op=`` and ``:=`` assignments
- OtherNode: everything else
- Ident: a standalone leaf not backed by a tree (fallback)

Views never copy the tree; they hold the tree-sitter node and the source bytes
it was parsed from.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

try:
    from tree_sitter import Node as TSNode
except ImportError as e:
    raise ImportError("tree-sitter is required. Install with: pip install tree-sitter") from e

from codegraph_fragments.category import DISCARD

DECLARATION_KINDS = frozenset({"var_declaration", "const_declaration", "type_declaration"})
TOP_LEVEL_KINDS = DECLARATION_KINDS | {"function_declaration", "method_declaration", "import_declaration"}
ASSIGNMENT_KINDS = frozenset({"assignment_statement", "short_var_declaration"})
IGNORED_KINDS = frozenset({"comment", "empty_statement"})


@dataclass(frozen=True, slots=True)
class Span:
    """
    Source code location (immutable).

    Attributes:
        start_line: Starting line number (1-indexed)
        start_col: Starting column (0-indexed)
        end_line: Ending line number (1-indexed)
        end_col: Ending column (0-indexed)
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int


class Node(ABC):
    """Common interface of every parse tree view."""

    @property
    @abstractmethod
    def kind(self) -> str:
        """Grammar node type, e.g. ``identifier`` or ``if_statement``."""

    @property
    @abstractmethod
    def text(self) -> str:
        """Source text covered by the node."""

    @property
    def span(self) -> Span | None:
        return None

    @property
    def children(self) -> list["Node"]:
        return []

    @property
    def is_declaration(self) -> bool:
        return self.kind in TOP_LEVEL_KINDS

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind!r}, text={self.text!r})"


class TreeNode(Node):
    """View over a single tree-sitter node."""

    __slots__ = ("ts_node", "source")

    def __init__(self, ts_node: TSNode, source: bytes):
        self.ts_node = ts_node
        self.source = source

    @property
    def kind(self) -> str:
        return self.ts_node.type

    @property
    def text(self) -> str:
        return self.source[self.ts_node.start_byte : self.ts_node.end_byte].decode("utf-8")

    @property
    def span(self) -> Span:
        # Tree-sitter uses 0-indexed lines
        return Span(
            start_line=self.ts_node.start_point[0] + 1,
            start_col=self.ts_node.start_point[1],
            end_line=self.ts_node.end_point[0] + 1,
            end_col=self.ts_node.end_point[1],
        )

    @property
    def children(self) -> list[Node]:
        return [wrap(child, self.source) for child in self.ts_node.named_children]

    def _field(self, name: str) -> TSNode | None:
        return self.ts_node.child_by_field_name(name)

    def _key(self) -> tuple:
        return (type(self), self.kind, self.ts_node.start_byte, self.ts_node.end_byte, self.source)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class FileNode(TreeNode):
    """A ``source_file``: package clause followed by declarations."""

    __slots__ = ()

    @property
    def package_name(self) -> str | None:
        for child in self.ts_node.named_children:
            if child.type == "package_clause":
                for ident in child.named_children:
                    if ident.type == "package_identifier":
                        return _text(ident, self.source)
        return None

    @property
    def declarations(self) -> list[Node]:
        return [
            wrap(child, self.source)
            for child in self.ts_node.named_children
            if child.type not in IGNORED_KINDS and child.type != "package_clause"
        ]


class FunctionDeclarationNode(TreeNode):
    __slots__ = ()

    @property
    def name(self) -> str:
        ident = self._field("name")
        return _text(ident, self.source) if ident is not None else ""

    @property
    def body(self) -> "BlockNode | None":
        block = self._field("body")
        if block is None:
            return None
        return BlockNode(block, self.source)


class BlockNode(TreeNode):
    __slots__ = ()

    @property
    def statements(self) -> list[Node]:
        """Statements in order, skipping comments and empty statements."""
        result = []
        for child in self.ts_node.named_children:
            # Newer grammars group block contents under a statement_list
            members = child.named_children if child.type == "statement_list" else [child]
            for member in members:
                if member.type not in IGNORED_KINDS:
                    result.append(wrap(member, self.source, statement=True))
        return result


class DeclarationStatementNode(TreeNode):
    """A declaration appearing where a statement is expected."""

    __slots__ = ()

    @property
    def declaration(self) -> Node:
        return wrap(self.ts_node, self.source)


class AssignmentStatementNode(TreeNode):
    __slots__ = ()

    @property
    def left(self) -> list[Node]:
        return self._operands("left")

    @property
    def right(self) -> list[Node]:
        return self._operands("right")

    @property
    def operator(self) -> str:
        if self.kind == "short_var_declaration":
            return ":="
        op = self._field("operator")
        return _text(op, self.source) if op is not None else "="

    @property
    def is_discard(self) -> bool:
        """True for a single blank identifier target, e.g. ``_ = x``."""
        left = self.left
        return len(left) == 1 and left[0].kind in ("identifier", "blank_identifier") and left[0].text == DISCARD

    def _operands(self, field: str) -> list[Node]:
        operand = self._field(field)
        if operand is None:
            return []
        if operand.type == "expression_list":
            return [wrap(n, self.source) for n in operand.named_children if n.type != "comment"]
        return [wrap(operand, self.source)]


class OtherNode(TreeNode):
    __slots__ = ()


@dataclass(frozen=True, eq=True)
class Ident(Node):
    """
    A leaf identifier with no backing tree.

    Used as the fallback result: when every category fails, ``name`` carries
    the error message in place of a real node.
    """

    name: str
    is_fallback: bool = False

    @property
    def kind(self) -> str:
        return "identifier"

    @property
    def text(self) -> str:
        return self.name


def fallback_ident(error: BaseException) -> Ident:
    """Represent an error as an identifier node rather than returning nothing."""
    return Ident(name=str(error), is_fallback=True)


def wrap(ts_node: TSNode, source: bytes, *, statement: bool = False) -> Node:
    """
    Build the view variant matching a tree-sitter node.

    Args:
        ts_node: Tree-sitter node
        source: Bytes the tree was parsed from
        statement: Node sits in statement position (inside a block)

    Returns:
        Node view
    """
    kind = ts_node.type
    if kind == "source_file":
        return FileNode(ts_node, source)
    if kind == "function_declaration":
        return FunctionDeclarationNode(ts_node, source)
    if kind == "block":
        return BlockNode(ts_node, source)
    if kind in ASSIGNMENT_KINDS:
        return AssignmentStatementNode(ts_node, source)
    if statement and kind in DECLARATION_KINDS:
        return DeclarationStatementNode(ts_node, source)
    return OtherNode(ts_node, source)


def _text(ts_node: TSNode, source: bytes) -> str:
    return source[ts_node.start_byte : ts_node.end_byte].decode("utf-8")


__all__ = [
    "Span",
    "Node",
    "TreeNode",
    "FileNode",
    "FunctionDeclarationNode",
    "BlockNode",
    "DeclarationStatementNode",
    "AssignmentStatementNode",
    "OtherNode",
    "Ident",
    "fallback_ident",
    "wrap",
]
