"""Data models for md2html."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from .config import TagConfig


class LineState(Enum):
    """Dispatcher states while scanning one line.

    Attributes:
        LINE_START: No significant character of the line has been handled yet;
            block markers (headings, lists, rules, fences) are recognized only here.
        SCANNING_INLINE: Inside the line; only inline constructs apply.
        IN_FENCED_CODE: Capturing a fenced code block body, possibly across lines.
    """

    LINE_START = auto()
    SCANNING_INLINE = auto()
    IN_FENCED_CODE = auto()


@dataclass
class ListFrame:
    """One open list on the nesting stack.

    Attributes:
        ordered: Whether the list uses ordered tags.
        indentation: Column at which this list's items sit.
        indentation_delta: Indentation difference to the parent frame (or to
            column zero for the outermost list).
    """

    ordered: bool
    indentation: int
    indentation_delta: int


@dataclass
class ParseContext:
    """Mutable state of a single conversion.

    Created once per `convert` call and passed by reference to every scanning
    function; nothing keeps it after the call returns.

    Attributes:
        text: Input document (never mutated).
        config: Tag configuration (read-only).
        out: Output fragments, joined once at the end.
        pos: Cursor position.
        pending_start: Start of the text not yet copied to the output.
        line_start: Position of the first significant character of the line.
        line_indentation: Resolved indentation of the current line in columns.
        blockquote_depth: Number of blockquotes currently open.
        paragraph_open: Whether a paragraph wrapper is open.
        ended_with_space: Whether the last flushed text (or line) ended in a
            space, so no joining space is needed before the next line's text.
        lists: Open list frames, innermost last.
        state: Dispatcher state for the current line.
    """

    text: str
    config: TagConfig = field(default_factory=TagConfig)
    out: list[str] = field(default_factory=list)
    pos: int = 0
    pending_start: int = 0
    line_start: int = 0
    line_indentation: int = 0
    blockquote_depth: int = 0
    paragraph_open: bool = False
    ended_with_space: bool = True
    lists: list[ListFrame] = field(default_factory=list)
    state: LineState = LineState.LINE_START
