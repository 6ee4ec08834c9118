"""
CodeGraph Fragments

Forgiving parser for fragments of Go source. Any snippet, from a single
identifier to a whole file, is parsed at the smallest syntactic category that
accepts it and reduced back to the node the user actually wrote.

Quick Start:
    >>> from codegraph_fragments import parse_fragment
    >>> parse_fragment("if true {}").kind
    'if_statement'
    >>> parse_fragment("type foo string").kind
    'type_declaration'
"""

__version__ = "0.1.0"  # Keep in sync with pyproject.toml

from codegraph_fragments.category import LADDER, WRAPPER_RULES, Category, WrapperRule, promote
from codegraph_fragments.errors import (
    ExhaustionError,
    FragmentError,
    LanguageNotSupportedError,
    PanicError,
    ParseFailure,
)
from codegraph_fragments.fragment import AttemptResult, FragmentParser, attempt, parse_fragment, source
from codegraph_fragments.guard import Panic, guard, panic
from codegraph_fragments.nodes import (
    AssignmentStatementNode,
    BlockNode,
    DeclarationStatementNode,
    FileNode,
    FunctionDeclarationNode,
    Ident,
    Node,
    OtherNode,
    Span,
    fallback_ident,
)
from codegraph_fragments.reducer import reduce

__all__ = [
    # Core
    "parse_fragment",
    "source",
    "attempt",
    "reduce",
    "promote",
    "FragmentParser",
    "AttemptResult",
    # Categories
    "Category",
    "LADDER",
    "WrapperRule",
    "WRAPPER_RULES",
    # Nodes
    "Node",
    "FileNode",
    "FunctionDeclarationNode",
    "BlockNode",
    "DeclarationStatementNode",
    "AssignmentStatementNode",
    "OtherNode",
    "Ident",
    "Span",
    "fallback_ident",
    # Errors
    "FragmentError",
    "ParseFailure",
    "PanicError",
    "ExhaustionError",
    "LanguageNotSupportedError",
    # Fault handling
    "guard",
    "panic",
    "Panic",
]
