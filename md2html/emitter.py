"""Output emission and paragraph bookkeeping."""

from __future__ import annotations

from .config import TagPair
from .models import ParseContext


def emit(ctx: ParseContext, *fragments: str) -> None:
    ctx.out.extend(fragments)


def emit_wrapped(ctx: ParseContext, tags: TagPair, body: str) -> None:
    """Emit `body` between the opening and closing strings of `tags`."""
    ctx.out.extend((tags[0], body, tags[1]))


def open_paragraph(ctx: ParseContext) -> None:
    emit(ctx, ctx.config.paragraph[0])
    ctx.paragraph_open = True
    ctx.ended_with_space = True


def close_paragraph(ctx: ParseContext) -> None:
    """Close the open paragraph wrapper, if any."""
    if ctx.paragraph_open:
        emit(ctx, ctx.config.paragraph[1])
        ctx.paragraph_open = False


def _needs_joining_space(ctx: ParseContext) -> bool:
    # Only the first text of a line continuing an open paragraph is joined;
    # mid-line fragments are contiguous in the source already.
    return (
        ctx.paragraph_open
        and not ctx.ended_with_space
        and ctx.pending_start == ctx.line_start
    )


def flush_pending(ctx: ParseContext, end_paragraph: bool = False) -> None:
    """Copy the pending span into the output, managing the paragraph wrapper.

    Must run before any construct emits its tags so the output keeps the
    input's order.

    With an empty span, either opens a paragraph (so the following construct
    lands inside it) or, when `end_paragraph` is set, closes the open one.
    With text pending, opens a paragraph unless one is open or a list item
    provides the flow context, inserts a joining space when the text continues
    a paragraph from a previous line, and copies the span.

    Args:
        ctx: Parse context; `pending_start` is moved to the cursor.
        end_paragraph: Close the paragraph after the span.

    Examples:
        ctx = ParseContext("hello", pos=5)
        flush_pending(ctx, end_paragraph=True)  # out == ["<p>", "hello", "</p>"]
    """
    start, end = ctx.pending_start, ctx.pos

    if start >= end:
        if end_paragraph:
            close_paragraph(ctx)
        elif not ctx.paragraph_open:
            if not ctx.lists:
                open_paragraph(ctx)
        elif _needs_joining_space(ctx):
            emit(ctx, " ")
            ctx.ended_with_space = True
        return

    if not ctx.paragraph_open and not ctx.lists:
        open_paragraph(ctx)
    elif _needs_joining_space(ctx):
        emit(ctx, " ")

    span = ctx.text[start:end]
    emit(ctx, span)
    ctx.ended_with_space = span.endswith(" ")
    ctx.pending_start = end

    if end_paragraph:
        close_paragraph(ctx)
