"""Syntax highlighting hooks for fenced code blocks."""

from __future__ import annotations

import html
import importlib
import logging
from typing import Protocol

from .exceptions import HighlightError

logger = logging.getLogger(__name__)


class Highlighter(Protocol):
    """Render the body of a fenced code block.

    Receives offsets into the original document instead of a copied
    substring; the returned string replaces the whole block body and is
    emitted as-is, so any escaping is the highlighter's job.
    """

    def __call__(self, language: str, source: str, code_start: int, code_end: int) -> str: ...


def escape_highlighter(language: str, source: str, code_start: int, code_end: int) -> str:
    """HTML-escape the code block body and ignore the language.

    Examples:
        escape_highlighter("py", "a < b", 0, 5)  # "a &lt; b"
    """
    return html.escape(source[code_start:code_end], quote=False)


def load_highlighter(reference: str) -> Highlighter:
    """Import a highlighter from a ``"package.module:name"`` reference.

    Args:
        reference: Dotted module path and attribute name separated by a colon.

    Returns:
        Highlighter: The referenced callable.

    Raises:
        ValueError: If the reference is malformed, the module cannot be
            imported, or the attribute is missing or not callable.

    Examples:
        load_highlighter("md2html.highlight:escape_highlighter")
    """
    module_name, separator, attribute = reference.partition(":")
    if not separator or not module_name or not attribute:
        raise ValueError(f"Invalid highlighter reference {reference!r} (expected 'module:name')")

    try:
        module = importlib.import_module(module_name)
    except ImportError as error:
        raise ValueError(f"Cannot import highlighter module {module_name!r}: {error}") from error

    highlighter = getattr(module, attribute, None)
    if highlighter is None:
        raise ValueError(f"Module {module_name!r} has no attribute {attribute!r}")
    if not callable(highlighter):
        raise ValueError(f"Highlighter {reference!r} is not callable")

    return highlighter


def run_highlighter(
    highlighter: Highlighter, language: str, source: str, code_start: int, code_end: int
) -> str:
    """Call `highlighter` for one code block and check its result.

    Raises:
        HighlightError: If the highlighter raises or returns a non-string.
    """
    logger.debug("Highlighting %s code block at %d:%d", language or "untyped", code_start, code_end)
    try:
        rendered = highlighter(language, source, code_start, code_end)
    except Exception as error:
        raise HighlightError(language, str(error) or type(error).__name__) from error

    if not isinstance(rendered, str):
        raise HighlightError(language, f"expected str, got {type(rendered).__name__}")
    return rendered
