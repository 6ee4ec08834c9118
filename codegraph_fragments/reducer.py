"""
Reducer

Peels the synthetic layers added by promotion off a parsed tree, returning the
node closest to what the user typed. Each rule yields a strictly smaller node,
so reduction terminates.

A block holding exactly one statement is collapsed whether promotion added it
or the user wrote it; the two cannot be told apart from the tree.
"""

from codegraph_fragments.category import FUNCTION_SENTINEL, PACKAGE_SENTINEL
from codegraph_fragments.nodes import (
    AssignmentStatementNode,
    BlockNode,
    DeclarationStatementNode,
    FileNode,
    FunctionDeclarationNode,
    Node,
)


def reduce(node: Node) -> Node:
    """Return the most specific node the tree stands for."""
    if isinstance(node, FileNode):
        if node.package_name == PACKAGE_SENTINEL:
            declarations = node.declarations
            if declarations:
                return reduce(declarations[0])
    elif isinstance(node, FunctionDeclarationNode):
        if node.name == FUNCTION_SENTINEL:
            body = node.body
            if body is not None:
                return reduce(body)
    elif isinstance(node, BlockNode):
        statements = node.statements
        if len(statements) == 1:
            return reduce(statements[0])
    elif isinstance(node, DeclarationStatementNode):
        return node.declaration
    elif isinstance(node, AssignmentStatementNode):
        right = node.right
        if node.is_discard and right:
            return right[0]
    return node


__all__ = ["reduce"]
