"""Package-specific exception types."""

from __future__ import annotations


class ConvertError(ValueError):
    """Base class for conversion-related errors.

    Malformed Markdown never raises; these errors come from collaborators
    such as the syntax highlighter.
    """


class HighlightError(ConvertError):
    """Raised when the syntax highlighter fails on a fenced code block.

    Args:
        language: Language token of the fenced block (may be empty).
        reason: Short description of what went wrong.
    """

    def __init__(self, language: str, reason: str):
        self.language = language
        self.reason = reason
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        label = self.language or "<no language>"
        return f"Syntax highlighter failed for code block ({label}): {self.reason}"
