"""
Parser Registry for Tree-sitter

Manages language grammars and hands out parsers.
"""

import logging
import threading

try:
    from tree_sitter import Parser
    from tree_sitter_language_pack import get_language
except ImportError as e:
    raise ImportError(
        "tree-sitter-language-pack is required. " "Install with: pip install tree-sitter tree-sitter-language-pack"
    ) from e

from codegraph_fragments.errors import LanguageNotSupportedError

logger = logging.getLogger(__name__)


class ParserRegistry:
    """
    Registry for language parsers.

    Languages are loaded once. Parsers are cached per thread, since a
    tree-sitter parser must not be used by two threads at the same time.
    """

    def __init__(self, languages: tuple[str, ...] = ("go",)):
        self._languages: dict[str, object] = {}
        self._local = threading.local()
        for name in languages:
            self._register_language(name)

    def _register_language(self, name: str) -> None:
        try:
            self._languages[name] = get_language(name)
            logger.debug(f"Loaded {name} parser")
        except Exception as e:
            logger.warning(f"Failed to load {name} parser: {e}")

    def get_parser(self, language: str) -> Parser:
        """
        Get the calling thread's parser for a language.

        Args:
            language: Language name (e.g. "go")

        Returns:
            Parser instance

        Raises:
            LanguageNotSupportedError: If no grammar is registered
        """
        language = language.lower()

        parsers = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = self._local.parsers = {}
        if language in parsers:
            return parsers[language]

        lang = self._languages.get(language)
        if lang is None:
            raise LanguageNotSupportedError(language)

        parser = Parser(lang)
        parsers[language] = parser
        return parser

    def supports_language(self, language: str) -> bool:
        """Check if language is supported"""
        return language.lower() in self._languages

    @property
    def supported_languages(self) -> list[str]:
        return sorted(self._languages)


# Global registry instance
_registry: ParserRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = ParserRegistry()
    return _registry
