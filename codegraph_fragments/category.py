"""
Category Ladder & Promoter

Syntactic categories ordered from narrowest to widest, and the wrapper text
that promotes a Go fragment from one rung to the next.
"""

from dataclasses import dataclass
from enum import IntEnum

# Synthetic names introduced by promotion; the reducer recognizes them.
PACKAGE_SENTINEL = "fragments"
FUNCTION_SENTINEL = "fragmentsFunc"
DISCARD = "_"


class Category(IntEnum):
    """Syntactic categories, smallest to largest. NODE is the invalid sentinel."""

    NODE = 0
    EXPR = 1
    DECL = 2
    STMT = 3
    BLOCK = 4
    FILE = 5
    PKG = 6

    @classmethod
    def coerce(cls, value: int) -> "Category":
        """Normalize any integer, mapping out-of-range values to NODE."""
        if cls.NODE <= value <= cls.PKG:
            return cls(value)
        return cls.NODE

    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name()


_DISPLAY_NAMES = {
    Category.NODE: "Node",
    Category.EXPR: "Expr",
    Category.DECL: "Decl",
    Category.STMT: "Stmt",
    Category.BLOCK: "Block",
    Category.FILE: "File",
    Category.PKG: "Pkg",
}

# Rungs tried by the parse attempt loop, in order.
LADDER = tuple(c for c in Category if c is not Category.NODE)


@dataclass(frozen=True)
class WrapperRule:
    """
    Literal text wrapped around a fragment for one rung transition.

    The rule fires when ``to >= target > from_`` (and ``from_ <= max_source``
    when set), so a rule whose range is empty leaves the text untouched.

    Attributes:
        name: Rule name (used in logs and tests)
        target: Category the wrapped text belongs to
        prefix: Text inserted before the fragment
        suffix: Text inserted after the fragment
        strip: Trailing characters trimmed from the fragment first
        max_source: Widest source category the rule accepts
        sentinel: Synthetic name introduced by the wrapper, if any
    """

    name: str
    target: Category
    prefix: str
    suffix: str = ""
    strip: str = ""
    max_source: Category | None = None
    sentinel: str | None = None

    def applies(self, from_: Category, to: Category) -> bool:
        if not (to >= self.target > from_):
            return False
        return self.max_source is None or from_ <= self.max_source

    def apply(self, text: str) -> str:
        if self.strip:
            text = text.rstrip(self.strip)
        return self.prefix + text + self.suffix


WRAPPER_RULES = (
    WrapperRule("discard_assign", Category.DECL, prefix=f"{DISCARD} = ", sentinel=DISCARD),
    WrapperRule("statement_line", Category.STMT, prefix="\t", suffix="\n"),
    WrapperRule("brace_block", Category.BLOCK, prefix="{\n", suffix="\n}\n", strip="\n\t"),
    WrapperRule(
        "function_header",
        Category.FILE,
        prefix=f"func {FUNCTION_SENTINEL}() ",
        max_source=Category.BLOCK,
        sentinel=FUNCTION_SENTINEL,
    ),
    WrapperRule("package_header", Category.PKG, prefix=f"package {PACKAGE_SENTINEL}\n\n", sentinel=PACKAGE_SENTINEL),
)


def promote(fragment: str, from_: Category, to: Category) -> str:
    """
    Wrap a fragment valid at ``from_`` so that it parses at ``to``.

    Args:
        fragment: Raw fragment text
        from_: Category the fragment already satisfies
        to: Category the result must satisfy

    Returns:
        Wrapped source text
    """
    text = fragment or DISCARD
    for rule in WRAPPER_RULES:
        if rule.applies(from_, to):
            text = rule.apply(text)
    return text


__all__ = [
    "Category",
    "LADDER",
    "WrapperRule",
    "WRAPPER_RULES",
    "PACKAGE_SENTINEL",
    "FUNCTION_SENTINEL",
    "DISCARD",
    "promote",
]
