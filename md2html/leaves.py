"""Line-level constructs: headings, horizontal rules and fenced code blocks."""

from __future__ import annotations

import logging

from .constants import CODE_FENCE_LENGTH, MARKER_SEPARATORS
from .emitter import emit, emit_wrapped, flush_pending
from .highlight import run_highlighter
from .models import LineState, ParseContext
from .scanner import at_line_end, char_at, count_run

logger = logging.getLogger(__name__)


def heading_anchor(title: str) -> str:
    """Build the anchor name for a heading: spaces become hyphens.

    Examples:
        heading_anchor("Getting started")  # "Getting-started"
    """
    return title.replace(" ", "-")


def parse_heading(ctx: ParseContext) -> None:
    """Parse ``# Title`` at the cursor.

    A ``#`` run not followed by a space is not a heading; the run is left in
    the pending span as plain text and scanning continues after it. Levels
    above six are clamped by `TagConfig.heading`.

    Emits ``<a name="Title-Text"></a>`` followed by the heading tags around the
    raw rest of the line.
    """
    run_start = ctx.pos
    level = count_run(ctx, "#")
    if char_at(ctx, ctx.pos) != " ":
        return

    ctx.pos = run_start
    flush_pending(ctx, end_paragraph=True)
    ctx.pos = run_start + level + 1

    title_start = ctx.pos
    while not at_line_end(ctx):
        ctx.pos += 1
    title = ctx.text[title_start : ctx.pos]

    emit(ctx, f'<a name="{heading_anchor(title)}"></a>')
    emit_wrapped(ctx, ctx.config.heading(level), title)
    ctx.pending_start = ctx.pos


def parse_horizontal_rule(ctx: ParseContext, run_start: int) -> None:
    """Emit the horizontal rule for a ``---`` run ending at the cursor."""
    run_end = ctx.pos
    ctx.pos = run_start
    flush_pending(ctx, end_paragraph=True)
    ctx.pos = run_end

    emit(ctx, ctx.config.horizontal_rule)
    ctx.pending_start = ctx.pos


def parse_code_block(ctx: ParseContext, fence_start: int) -> None:
    """Parse a fenced code block whose opening fence ends at the cursor.

    Reads an optional language token, skips the rest of the opening line and
    captures everything up to the next run of exactly three backticks (or the
    end of input). The body is copied verbatim, or replaced by the configured
    highlighter's output.

    Raises:
        HighlightError: If the configured highlighter fails.
    """
    fence_end = ctx.pos
    ctx.pos = fence_start
    flush_pending(ctx, end_paragraph=True)
    ctx.pos = fence_end
    ctx.state = LineState.IN_FENCED_CODE

    while char_at(ctx, ctx.pos) in MARKER_SEPARATORS:
        ctx.pos += 1

    language_start = ctx.pos
    while not at_line_end(ctx) and char_at(ctx, ctx.pos) not in MARKER_SEPARATORS:
        ctx.pos += 1
    language = ctx.text[language_start : ctx.pos]

    while not at_line_end(ctx):
        ctx.pos += 1
    if char_at(ctx, ctx.pos) == "\n":
        ctx.pos += 1

    text = ctx.text
    code_start = ctx.pos
    code_end = len(text)
    while ctx.pos < len(text):
        if text[ctx.pos] != "`":
            ctx.pos += 1
            continue
        run_start = ctx.pos
        if count_run(ctx, "`") == CODE_FENCE_LENGTH:
            code_end = run_start
            break

    highlighter = ctx.config.highlighter
    if highlighter is None:
        body = text[code_start:code_end]
    else:
        body = run_highlighter(highlighter, language, text, code_start, code_end)

    emit_wrapped(ctx, ctx.config.code_block, body)
    ctx.pending_start = ctx.pos
    logger.debug("Fenced code block (%s) spans %d:%d", language or "untyped", code_start, code_end)
