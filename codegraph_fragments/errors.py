"""
Standardized Error Handling for codegraph-fragments

Provides hierarchical exception classes with error codes and context.
"""

from typing import Any


class FragmentError(Exception):
    """Base exception for all fragment parsing errors.

    Includes error code for programmatic handling and context for debugging.
    ``str()`` yields the bare message so it can be embedded in a fallback node.

    Example:
        raise FragmentError(
            code="PARSE_FAILED",
            message="1:9: unexpected ':='",
            category="Expr",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(message)

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Parse Errors
# ==============================================================================


class ParseFailure(FragmentError):
    """The external parser rejected the text.

    Recoverable by promoting the fragment to a wider category.
    """

    def __init__(self, diagnostic: str, line: int | None = None, column: int | None = None, **context: Any) -> None:
        self.diagnostic = diagnostic
        self.line = line
        self.column = column
        message = diagnostic if line is None else f"{line}:{column}: {diagnostic}"
        super().__init__(code="PARSE_FAILED", message=message, **context)


class PanicError(FragmentError):
    """A fault raised with a payload that is not an exception."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(code="PANIC", message=f"panic: {value}")


class ExhaustionError(FragmentError):
    """Every category on the ladder failed.

    Carries the failure of each rung; the message is the last one.
    """

    def __init__(self, failures: dict, **context: Any) -> None:
        if not failures:
            raise ValueError("ExhaustionError requires at least one failure")
        self.failures = dict(failures)
        self.category = max(self.failures)
        self.last = self.failures[self.category]
        super().__init__(code="EXHAUSTED", message=str(self.last), **context)


# ==============================================================================
# Configuration Errors
# ==============================================================================


class LanguageNotSupportedError(FragmentError):
    """No tree-sitter grammar is registered for the requested language."""

    def __init__(self, language: str) -> None:
        super().__init__(
            code="LANGUAGE_NOT_SUPPORTED",
            message=f"Language not supported: {language}",
            language=language,
        )


# ==============================================================================
# Resource Errors
# ==============================================================================


class StdinConsumedError(FragmentError):
    """Standard input was requested after it had already been read."""

    def __init__(self) -> None:
        super().__init__(code="STDIN_CONSUMED", message="attempt to perform multiple reads from stdin")


__all__ = [
    "FragmentError",
    "ParseFailure",
    "PanicError",
    "ExhaustionError",
    "LanguageNotSupportedError",
    "StdinConsumedError",
]
