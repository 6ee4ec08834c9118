"""
Fragment Parser

Promote, then reduce: parse a Go fragment at the narrowest category that
accepts it and strip the synthetic wrappers back off.

Usage:
    >>> from codegraph_fragments import parse_fragment
    >>> parse_fragment("foo := 42").kind
    'short_var_declaration'
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from codegraph_fragments.category import LADDER, Category, promote
from codegraph_fragments.errors import ExhaustionError
from codegraph_fragments.guard import guard
from codegraph_fragments.nodes import Node, fallback_ident
from codegraph_fragments.parsing.go_parser import GoParser
from codegraph_fragments.reducer import reduce

logger = logging.getLogger(__name__)


@dataclass
class AttemptResult:
    """
    Outcome of running a fragment up the category ladder.

    Attributes:
        tree: Parsed (unreduced) tree, None on failure
        category: Rung that succeeded, or the last rung tried
        error: Last error, None on success
        failures: Error raised at every rung that failed
    """

    tree: Node | None
    category: Category
    error: Exception | None = None
    failures: dict[Category, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


class FragmentParser:
    """
    Parses Go fragments of any size.

    Stateless between calls; a single instance can be shared across threads.
    """

    def __init__(self, parser: GoParser | None = None):
        self.parser = parser or GoParser()

    def attempt(self, text: str) -> AttemptResult:
        """
        Try each category from Expr to Pkg until one parses.

        Each retry promotes the original text, never the previous attempt.

        Args:
            text: Raw fragment

        Returns:
            AttemptResult
        """
        failures: dict[Category, Exception] = {}
        current = text
        for category in LADDER:
            parse = self.parser.parse_expression if category is Category.EXPR else self.parser.parse_unit
            tree, error = self._invoke(parse, current)
            if error is None:
                logger.debug(f"Fragment parsed at {category}")
                return AttemptResult(tree=tree, category=category, failures=failures)

            logger.debug(f"Fragment rejected at {category}: {error}")
            failures[category] = error
            if category < Category.PKG:
                current = promote(text, Category(category + 1), Category.PKG)

        return AttemptResult(tree=None, category=Category.PKG, error=failures[Category.PKG], failures=failures)

    def source(self, text: str) -> Node:
        """
        Parse a fragment without reducing it.

        Raises:
            ExhaustionError: If no category accepts the fragment
        """
        result = self.attempt(text)
        if not result.ok:
            raise ExhaustionError(result.failures) from result.error
        return result.tree

    def parse(self, text: str) -> Node:
        """
        Parse and reduce a fragment. Never raises.

        On failure the result is an identifier node whose name is the error
        message (see ``Ident.is_fallback``).
        """
        try:
            node = self.source(text)
        except ExhaustionError as e:
            logger.debug(f"Fragment unparseable, returning fallback identifier: {e}")
            return fallback_ident(e)
        return reduce(node)

    @staticmethod
    def _invoke(parse: Callable[[str], Node], text: str) -> tuple[Node | None, Exception | None]:
        parsed: list[Node] = []

        def operation() -> None:
            parsed.append(parse(text))
            return None

        error = guard(operation)
        if error is not None:
            return None, error
        return parsed[0], None


# Default parser instance
_default: FragmentParser | None = None


def get_fragment_parser() -> FragmentParser:
    global _default
    if _default is None:
        _default = FragmentParser()
    return _default


def attempt(text: str) -> AttemptResult:
    return get_fragment_parser().attempt(text)


def source(text: str) -> Node:
    """Parse a fragment without reducing it; raises ExhaustionError on failure."""
    return get_fragment_parser().source(text)


def parse_fragment(text: str) -> Node:
    """Parse and reduce a fragment, never raising."""
    return get_fragment_parser().parse(text)


__all__ = [
    "AttemptResult",
    "FragmentParser",
    "get_fragment_parser",
    "attempt",
    "source",
    "parse_fragment",
]
