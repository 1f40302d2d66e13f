"""Inline span parsing within a single line.

Every parser here assumes the cursor sits on the construct's first character,
flushes the pending text before emitting tags, and leaves the cursor just past
whatever it consumed. Unterminated constructs degrade to literal text.
"""

from __future__ import annotations

from .config import TagPair
from .constants import MAX_EMPHASIS_LEVEL, PAIRED_DELIMITER_RUN
from .emitter import emit, emit_wrapped, flush_pending
from .models import ParseContext
from .scanner import at_line_end, char_at, count_run, measure_indentation


def _skip_to(ctx: ParseContext, char: str) -> bool:
    """Advance to `char` on the current line; return whether it was found."""
    while not at_line_end(ctx):
        if ctx.text[ctx.pos] == char:
            return True
        ctx.pos += 1
    return False


def parse_escape(ctx: ParseContext) -> None:
    r"""Drop a backslash and keep the following character as literal text.

    Examples:
        convert(r"\*not emphasis\*")  # "<p>*not emphasis*</p>"
    """
    flush_pending(ctx)
    ctx.pos += 1
    ctx.pending_start = ctx.pos
    if not at_line_end(ctx):
        ctx.pos += 1


def parse_emphasis(ctx: ParseContext) -> None:
    """Parse ``*a*``, ``**a**`` or ``***a***``.

    The strength is ``min(left, right)`` clamped to three; asterisks left over
    on either side are emitted literally, so ``**a*`` becomes ``*<em>a</em>``.
    Without a closing ``*`` on the line the opening run stays literal and
    scanning resumes right after it.
    """
    flush_pending(ctx)
    run_start = ctx.pos
    left = count_run(ctx, "*")

    text_start = ctx.pos
    while char_at(ctx, ctx.pos) not in ("*", "\n", ""):
        ctx.pos += 1

    if char_at(ctx, ctx.pos) != "*":
        ctx.pending_start = run_start
        ctx.pos = text_start
        return

    text = ctx.text[text_start : ctx.pos]
    right = count_run(ctx, "*")
    matched = min(left, right)

    emit(ctx, "*" * (left - matched))

    level = min(matched, MAX_EMPHASIS_LEVEL)
    italic, bold = ctx.config.italic, ctx.config.bold
    if level == 1:
        emit_wrapped(ctx, italic, text)
    elif level == 2:
        emit_wrapped(ctx, bold, text)
    else:
        emit(ctx, italic[0], bold[0], text, bold[1], italic[1])

    emit(ctx, "*" * (right - matched))
    ctx.pending_start = ctx.pos


def _parse_paired_span(ctx: ParseContext, delimiter: str, tags: TagPair) -> None:
    # A run of exactly two delimiters opens and closes; other runs are text.
    run_start = ctx.pos
    if count_run(ctx, delimiter) != PAIRED_DELIMITER_RUN:
        return

    text_start = ctx.pos
    ctx.pos = run_start
    flush_pending(ctx)
    ctx.pos = text_start

    while not at_line_end(ctx):
        if ctx.text[ctx.pos] != delimiter:
            ctx.pos += 1
            continue
        closing_start = ctx.pos
        if count_run(ctx, delimiter) == PAIRED_DELIMITER_RUN:
            emit_wrapped(ctx, tags, ctx.text[text_start:closing_start])
            ctx.pending_start = ctx.pos
            return

    ctx.pending_start = run_start
    ctx.pos = text_start


def parse_strikethrough(ctx: ParseContext) -> None:
    """Parse ``~~struck~~``."""
    _parse_paired_span(ctx, "~", ctx.config.strikethrough)


def parse_highlight(ctx: ParseContext) -> None:
    """Parse ``==marked==``."""
    _parse_paired_span(ctx, "=", ctx.config.highlight)


def parse_code_span(ctx: ParseContext, run_start: int) -> None:
    """Parse an inline code span whose opening backtick run ends at the cursor.

    The span closes at the next run of exactly as many backticks on the same
    line. Content is copied verbatim. Unmatched openings stay literal.
    """
    width = ctx.pos - run_start
    content_start = ctx.pos

    while not at_line_end(ctx):
        if ctx.text[ctx.pos] != "`":
            ctx.pos += 1
            continue
        closing_start = ctx.pos
        if count_run(ctx, "`") == width:
            after = ctx.pos
            ctx.pos = run_start
            flush_pending(ctx)
            ctx.pos = after
            emit_wrapped(ctx, ctx.config.code, ctx.text[content_start:closing_start])
            ctx.pending_start = ctx.pos
            return

    ctx.pos = content_start


def parse_link(ctx: ParseContext) -> None:
    """Parse ``[title](url)`` into an anchor inside the link wrapper.

    A missing ``]`` or ``(`` aborts with the cursor at the failure point; the
    consumed text is still pending and comes out literally. A missing ``)``
    aborts after the pending span was moved to the url, so ``[title](`` is
    not emitted.
    """
    flush_pending(ctx)
    ctx.pending_start = ctx.pos
    ctx.pos += 1

    title_start = ctx.pos
    if not _skip_to(ctx, "]"):
        return
    title = ctx.text[title_start : ctx.pos]
    ctx.pos += 1

    if char_at(ctx, ctx.pos) != "(":
        return
    ctx.pos += 1

    url_start = ctx.pending_start = ctx.pos
    if not _skip_to(ctx, ")"):
        return
    url = ctx.text[url_start : ctx.pos]
    ctx.pos += 1

    opening, closing = ctx.config.link_wrapper
    emit(ctx, opening, f'<a href="{url}">{title}</a>', closing)
    ctx.pending_start = ctx.pos


def parse_image(ctx: ParseContext) -> None:
    """Parse ``![alt](file)`` into an image inside the image wrapper.

    A ``!`` not followed by ``[`` (spaces and tabs skipped) is literal text.
    Once ``[`` is seen, a missing ``]``, ``(`` or ``)`` aborts and the already
    consumed prefix is not emitted.
    """
    flush_pending(ctx)
    bang = ctx.pos
    ctx.pos += 1
    measure_indentation(ctx)

    if char_at(ctx, ctx.pos) != "[":
        ctx.pending_start = bang
        return
    ctx.pos += 1

    alt_start = ctx.pending_start = ctx.pos
    if not _skip_to(ctx, "]"):
        return
    alt = ctx.text[alt_start : ctx.pos]
    ctx.pos += 1

    if char_at(ctx, ctx.pos) != "(":
        return
    ctx.pos += 1

    source_start = ctx.pending_start = ctx.pos
    if not _skip_to(ctx, ")"):
        return
    source = ctx.text[source_start : ctx.pos]
    ctx.pos += 1

    opening, closing = ctx.config.image_wrapper
    emit(ctx, opening, f'<img src="{source}" alt="{alt}">', closing)
    ctx.pending_start = ctx.pos
