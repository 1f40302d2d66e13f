"""Markdown to HTML conversion driver."""

from __future__ import annotations

import logging
from pathlib import Path

from .blocks import close_all_open_lists, finish_document, resolve_blockquotes, resolve_list_item
from .config import ConfigError, TagConfig, normalize_config, validate_config
from .constants import (
    CODE_FENCE_LENGTH,
    HARD_BREAK_MIN_SPACES,
    HORIZONTAL_RULE_MIN_RUN,
    MARKER_SEPARATORS,
    ORDERED_MARKER_SUFFIX,
)
from .emitter import close_paragraph, flush_pending
from .exceptions import ConvertError
from .filesystem import safe_read
from .inline import (
    parse_code_span,
    parse_emphasis,
    parse_escape,
    parse_highlight,
    parse_image,
    parse_link,
    parse_strikethrough,
)
from .leaves import parse_code_block, parse_heading, parse_horizontal_rule
from .models import LineState, ParseContext
from .scanner import (
    DIGITS,
    at_line_end,
    at_list_marker,
    char_at,
    count_run,
    looks_like_ordered_marker,
    measure_indentation,
)

logger = logging.getLogger(__name__)


def _start_list_item(ctx: ParseContext, ordered: bool) -> None:
    # Cursor is just past the marker; one separator is dropped with it.
    if char_at(ctx, ctx.pos) in MARKER_SEPARATORS:
        ctx.pos += 1
    resolve_list_item(ctx, ordered)
    ctx.pending_start = ctx.pos


def _dispatch_backticks(ctx: ParseContext, at_start: bool) -> None:
    run_start = ctx.pos
    width = count_run(ctx, "`")
    if at_start and width == CODE_FENCE_LENGTH:
        parse_code_block(ctx, run_start)
    else:
        parse_code_span(ctx, run_start)


def _dispatch_dash(ctx: ParseContext) -> None:
    run_start = ctx.pos
    if count_run(ctx, "-") >= HORIZONTAL_RULE_MIN_RUN:
        parse_horizontal_rule(ctx, run_start)
        return

    ctx.pos = run_start
    is_item = at_list_marker(ctx)
    ctx.pos += 1
    if is_item:
        _start_list_item(ctx, ordered=False)


def _dispatch_ordered_item(ctx: ParseContext) -> None:
    while char_at(ctx, ctx.pos) in DIGITS:
        ctx.pos += 1
    if char_at(ctx, ctx.pos) == ORDERED_MARKER_SUFFIX:
        ctx.pos += 1
    _start_list_item(ctx, ordered=True)


def dispatch(ctx: ParseContext) -> None:
    """Hand the character at the cursor to the parser that recognizes it.

    Block markers only count while the line is in `LineState.LINE_START`.
    The order of the cases is significant: list markers are tried before
    emphasis, and ordered items before plain text. ``<`` is deliberately not
    handled, so raw HTML passes through unchanged.
    """
    at_start = ctx.state is LineState.LINE_START

    match ctx.text[ctx.pos]:
        case "\\":
            parse_escape(ctx)
        case "#" if at_start:
            parse_heading(ctx)
        case "+" | "*" if at_start and at_list_marker(ctx):
            ctx.pos += 1
            _start_list_item(ctx, ordered=False)
        case "*":
            parse_emphasis(ctx)
        case "`":
            _dispatch_backticks(ctx, at_start)
        case "~":
            parse_strikethrough(ctx)
        case "-" if at_start:
            _dispatch_dash(ctx)
        case _ if at_start and looks_like_ordered_marker(ctx):
            _dispatch_ordered_item(ctx)
        case "[":
            parse_link(ctx)
        case "!":
            parse_image(ctx)
        case "=":
            parse_highlight(ctx)
        case _:
            ctx.pos += 1


def _trailing_spaces(ctx: ParseContext, line_end: int) -> int:
    index = line_end
    while index > ctx.line_start and ctx.text[index - 1] == " ":
        index -= 1
    return line_end - index


def parse_line(ctx: ParseContext) -> None:
    """Convert one line, leaving the cursor on the first character of the next.

    Resolves indentation, blockquote depth and list membership first, then
    scans the line. A blank line closes the open paragraph; a line ending in
    two or more spaces closes it after its text.
    """
    ctx.state = LineState.LINE_START
    ctx.line_indentation = measure_indentation(ctx)
    resolve_blockquotes(ctx)

    if at_line_end(ctx):
        close_paragraph(ctx)
        ctx.pos += 1
        ctx.pending_start = ctx.pos
        return

    if ctx.lists and not at_list_marker(ctx):
        close_all_open_lists(ctx)

    ctx.line_start = ctx.pending_start = ctx.pos
    while not at_line_end(ctx):
        dispatch(ctx)
        ctx.state = LineState.SCANNING_INLINE

    line_end = ctx.pos
    hard_break = _trailing_spaces(ctx, line_end) >= HARD_BREAK_MIN_SPACES
    if ctx.pending_start < line_end or hard_break:
        flush_pending(ctx, end_paragraph=hard_break)
    if line_end > ctx.line_start:
        ctx.ended_with_space = ctx.text[line_end - 1] == " "

    ctx.pos = line_end + 1
    ctx.pending_start = ctx.pos


def convert(document: str, config: TagConfig | None = None) -> str:
    """Convert Markdown text into an HTML fragment in a single forward scan.

    Malformed constructs come out as literal text; the document itself never
    makes the conversion fail. Text is not HTML-escaped, so raw HTML in the
    input passes through.

    Args:
        document: Markdown source.
        config: Tag configuration. Defaults to a new `TagConfig` when omitted.

    Returns:
        str: The generated HTML fragment with every open structure closed.

    Raises:
        ConfigError: If the configuration fails validation.
        HighlightError: If the configured highlighter fails on a code block.

    Examples:
        convert("# Title\\n")  # '<a name="Title"></a><h1>Title</h1>\\n'
        convert("[docs](https://example.com)")
    """
    config = normalize_config(config or TagConfig())
    validate_config(config)

    ctx = ParseContext(text=document, config=config)
    while ctx.pos < len(document):
        parse_line(ctx)
    finish_document(ctx)

    html = "".join(ctx.out)
    logger.debug("Converted %d characters of Markdown into %d of HTML", len(document), len(html))
    return html


class ConvertFileError(Exception):
    """Raised when converting a Markdown file fails."""


def convert_file(filepath: Path, config: TagConfig | None = None) -> str:
    """Read a Markdown file and convert it to HTML.

    Args:
        filepath: Path to the Markdown file.
        config: Tag configuration; defaults to a new `TagConfig` when omitted.

    Returns:
        str: The generated HTML fragment.

    Raises:
        ConvertFileError: If the configuration is invalid, the file cannot be
            read or decoded, or the highlighter fails.

    Examples:
        html = convert_file(Path("README.md"))
    """
    config = config or TagConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ConvertFileError(str(error)) from error

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    try:
        return convert(content, config)
    except ConvertError as error:
        raise ConvertFileError(f"{filepath}: {error}") from error
