"""
Parsing Layer

Tree-sitter based Go parsing consumed by the fragment loop.

Components:
- parser_registry: Language grammar and parser management
- go_parser: Expression and compilation-unit entry points
"""

from codegraph_fragments.parsing.go_parser import GoParser
from codegraph_fragments.parsing.parser_registry import ParserRegistry, get_registry

__all__ = [
    "GoParser",
    "ParserRegistry",
    "get_registry",
]
