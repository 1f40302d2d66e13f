from __future__ import annotations

import pytest

from md2html.exceptions import HighlightError
from md2html.highlight import escape_highlighter, load_highlighter, run_highlighter


def test_escape_highlighter_uses_offsets():
    source = "xx a < b & c yy"

    assert escape_highlighter("py", source, 3, 12) == "a &lt; b &amp; c"


def test_escape_highlighter_keeps_quotes():
    assert escape_highlighter("", 'say "hi"', 0, 8) == 'say "hi"'


def test_load_highlighter_resolves_reference():
    assert load_highlighter("md2html.highlight:escape_highlighter") is escape_highlighter


@pytest.mark.parametrize(
    ("reference", "message"),
    [
        ("md2html.highlight", "expected 'module:name'"),
        (":escape_highlighter", "expected 'module:name'"),
        ("md2html.highlight:", "expected 'module:name'"),
        ("md2html_missing_module:render", "Cannot import highlighter module"),
        ("md2html.highlight:missing", "has no attribute 'missing'"),
        ("md2html.constants:TAB_WIDTH", "is not callable"),
    ],
)
def test_load_highlighter_rejects_bad_references(reference: str, message: str):
    with pytest.raises(ValueError, match=message):
        load_highlighter(reference)


def test_run_highlighter_returns_rendered_text():
    def highlighter(language, source, code_start, code_end):
        return f"{language}:{source[code_start:code_end]}"

    assert run_highlighter(highlighter, "py", "abcdef", 1, 3) == "py:bc"


def test_run_highlighter_wraps_exceptions():
    def highlighter(language, source, code_start, code_end):
        raise KeyError

    with pytest.raises(HighlightError) as exc_info:
        run_highlighter(highlighter, "", "x", 0, 1)

    assert str(exc_info.value) == (
        "Syntax highlighter failed for code block (<no language>): KeyError"
    )
    assert isinstance(exc_info.value.__cause__, KeyError)


def test_run_highlighter_rejects_non_string_result():
    def highlighter(language, source, code_start, code_end):
        return b"bytes"

    with pytest.raises(HighlightError, match="expected str, got bytes"):
        run_highlighter(highlighter, "c", "x", 0, 1)


def test_highlight_error_is_a_value_error():
    assert issubclass(HighlightError, ValueError)
