"""Block structure tracking: blockquote nesting and the list-frame stack."""

from __future__ import annotations

import logging

from .config import TagPair
from .emitter import close_paragraph, emit
from .models import ListFrame, ParseContext
from .scanner import count_run, measure_indentation

logger = logging.getLogger(__name__)


def _list_tags(ctx: ParseContext, ordered: bool) -> tuple[TagPair, TagPair]:
    config = ctx.config
    if ordered:
        return config.ordered_list, config.ordered_list_item
    return config.unordered_list, config.unordered_list_item


def resolve_blockquotes(ctx: ParseContext) -> None:
    """Reconcile blockquote depth with the ``>`` markers at the cursor.

    Emits exactly the difference between the marker count and the current
    depth. Before a depth change the open paragraph and lists are closed so
    that the emitted tags nest. When markers were consumed, the line's
    indentation is measured again past them.

    Examples:
        ctx = ParseContext(">> quote\\n")
        resolve_blockquotes(ctx)  # two blockquote openings, depth == 2
    """
    markers = count_run(ctx, ">")
    opening, closing = ctx.config.blockquote

    if markers != ctx.blockquote_depth:
        close_paragraph(ctx)
        close_all_open_lists(ctx)
        logger.debug("Blockquote depth %d -> %d", ctx.blockquote_depth, markers)

    while markers > ctx.blockquote_depth:
        emit(ctx, opening)
        ctx.blockquote_depth += 1

    while markers < ctx.blockquote_depth:
        emit(ctx, closing)
        ctx.blockquote_depth -= 1

    if markers:
        ctx.line_indentation = measure_indentation(ctx)


def resolve_list_item(ctx: ParseContext, ordered: bool) -> None:
    """Open a list item for the current line, pushing or popping frames.

    Compares the line's indentation with the innermost open list:

    - no list, or deeper: push a new frame and open list and item;
    - shallower: pop frames while more than one remains and the running
      indentation (reduced by each popped frame's delta) still exceeds the
      line's, then start a new item in the remaining innermost list;
    - equal: close the previous item and open a new one.

    Args:
        ctx: Parse context; the cursor is expected on the item text.
        ordered: Whether the marker was an ordered (``1.``) marker.
    """
    close_paragraph(ctx)
    indentation = ctx.line_indentation

    if not ctx.lists or ctx.lists[-1].indentation < indentation:
        parent_indentation = ctx.lists[-1].indentation if ctx.lists else 0
        frame = ListFrame(
            ordered=ordered,
            indentation=indentation,
            indentation_delta=indentation - parent_indentation,
        )
        ctx.lists.append(frame)
        list_tags, item_tags = _list_tags(ctx, ordered)
        emit(ctx, list_tags[0], item_tags[0])
        logger.debug("Opened list frame at indentation %d (depth %d)", indentation, len(ctx.lists))
        return

    if ctx.lists[-1].indentation > indentation:
        current_indentation = ctx.lists[-1].indentation
        while len(ctx.lists) > 1 and current_indentation > indentation:
            frame = ctx.lists.pop()
            current_indentation -= frame.indentation_delta
            list_tags, item_tags = _list_tags(ctx, frame.ordered)
            emit(ctx, item_tags[1], list_tags[1])
            logger.debug("Closed list frame at indentation %d", frame.indentation)

    _, item_tags = _list_tags(ctx, ctx.lists[-1].ordered)
    emit(ctx, item_tags[1], item_tags[0])


def close_all_open_lists(ctx: ParseContext) -> None:
    """Pop every list frame, closing its item and then the list."""
    while ctx.lists:
        frame = ctx.lists.pop()
        list_tags, item_tags = _list_tags(ctx, frame.ordered)
        emit(ctx, item_tags[1], list_tags[1])


def finish_document(ctx: ParseContext) -> None:
    """Force-close every open structure at end of input."""
    close_paragraph(ctx)
    close_all_open_lists(ctx)

    closing = ctx.config.blockquote[1]
    while ctx.blockquote_depth:
        emit(ctx, closing)
        ctx.blockquote_depth -= 1
