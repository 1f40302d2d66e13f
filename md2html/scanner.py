"""Cursor primitives shared by every parser.

These functions only move `ParseContext.pos`; they never write output.
"""

from __future__ import annotations

import string

from .constants import (
    BULLET_MARKERS,
    MARKER_SEPARATORS,
    ORDERED_MARKER_SUFFIX,
    SPACE_WIDTH,
    TAB_WIDTH,
)
from .models import ParseContext

DIGITS = frozenset(string.digits)


def char_at(ctx: ParseContext, index: int) -> str:
    """Return the character at `index`, or ``""`` past the end of the text.

    Examples:
        char_at(ParseContext("ab"), 1)  # "b"
        char_at(ParseContext("ab"), 2)  # ""
    """
    if index < len(ctx.text):
        return ctx.text[index]
    return ""


def at_line_end(ctx: ParseContext) -> bool:
    return char_at(ctx, ctx.pos) in ("\n", "")


def count_run(ctx: ParseContext, char: str) -> int:
    """Advance past consecutive occurrences of `char`.

    Args:
        ctx: Parse context whose cursor is moved.
        char: Delimiter character to consume.

    Returns:
        int: Number of characters consumed (0 at end of input).

    Examples:
        ctx = ParseContext("**bold")
        count_run(ctx, "*")  # 2, ctx.pos == 2
    """
    start = ctx.pos
    text = ctx.text
    while ctx.pos < len(text) and text[ctx.pos] == char:
        ctx.pos += 1
    return ctx.pos - start


def measure_indentation(ctx: ParseContext) -> int:
    """Advance past leading spaces and tabs and return their width in columns.

    Spaces count as one column and tabs as four, regardless of tab stops.

    Examples:
        measure_indentation(ParseContext("  \\tx"))  # 6
    """
    columns = 0
    while True:
        char = char_at(ctx, ctx.pos)
        if char == " ":
            columns += SPACE_WIDTH
        elif char == "\t":
            columns += TAB_WIDTH
        else:
            return columns
        ctx.pos += 1


def looks_like_ordered_marker(ctx: ParseContext) -> bool:
    """Check whether digits followed by ``.`` start at the cursor.

    Lookahead only; the cursor is left untouched.

    Examples:
        looks_like_ordered_marker(ParseContext("12. item"))  # True
        looks_like_ordered_marker(ParseContext(". item"))  # False
    """
    index = ctx.pos
    while char_at(ctx, index) in DIGITS:
        index += 1
    return index != ctx.pos and char_at(ctx, index) == ORDERED_MARKER_SUFFIX


def at_list_marker(ctx: ParseContext) -> bool:
    """Check whether a list item marker starts at the cursor.

    A bullet (``-``, ``+``, ``*``) counts only when followed by a space or tab,
    so ``*emphasis*`` and ``---`` at line start are not list items.
    """
    char = char_at(ctx, ctx.pos)
    if char in BULLET_MARKERS:
        return char_at(ctx, ctx.pos + 1) in MARKER_SEPARATORS
    return looks_like_ordered_marker(ctx)
