from md2html.blocks import (
    close_all_open_lists,
    finish_document,
    resolve_blockquotes,
    resolve_list_item,
)
from md2html.models import ListFrame, ParseContext
from md2html.parser import convert


def test_resolve_blockquotes_opens_each_level():
    ctx = ParseContext(">> quote\n")

    resolve_blockquotes(ctx)

    assert ctx.out == ["<blockquote>\n", "<blockquote>\n"]
    assert ctx.blockquote_depth == 2
    assert ctx.line_indentation == 1
    assert ctx.pos == 3


def test_resolve_blockquotes_closes_surplus_levels():
    ctx = ParseContext("> x", blockquote_depth=2)

    resolve_blockquotes(ctx)

    assert ctx.out == ["</blockquote>\n"]
    assert ctx.blockquote_depth == 1


def test_resolve_blockquotes_closes_paragraph_before_depth_change():
    ctx = ParseContext("x", paragraph_open=True, blockquote_depth=1)

    resolve_blockquotes(ctx)

    assert ctx.out == ["</p>", "</blockquote>\n"]


def test_resolve_blockquotes_keeps_paragraph_at_same_depth():
    ctx = ParseContext("> x", paragraph_open=True, blockquote_depth=1)

    resolve_blockquotes(ctx)

    assert ctx.out == []
    assert ctx.paragraph_open is True


def test_resolve_list_item_pushes_first_frame():
    ctx = ParseContext("")

    resolve_list_item(ctx, ordered=False)

    assert ctx.out == ["<ul>", "<li>"]
    assert ctx.lists == [ListFrame(False, 0, 0)]


def test_resolve_list_item_pushes_nested_frame_with_delta():
    ctx = ParseContext("", line_indentation=2, lists=[ListFrame(False, 0, 0)])

    resolve_list_item(ctx, ordered=True)

    assert ctx.out == ["<ol>", "<li>"]
    assert ctx.lists[-1] == ListFrame(True, 2, 2)


def test_resolve_list_item_opens_sibling_at_same_indentation():
    ctx = ParseContext("", lists=[ListFrame(True, 0, 0)])

    resolve_list_item(ctx, ordered=True)

    assert ctx.out == ["</li>", "<li>"]
    assert len(ctx.lists) == 1


def test_resolve_list_item_unwinds_several_frames():
    frames = [ListFrame(False, 0, 0), ListFrame(False, 2, 2), ListFrame(True, 4, 2)]
    ctx = ParseContext("", lists=frames)

    resolve_list_item(ctx, ordered=False)

    assert ctx.out == ["</li>", "</ol>", "</li>", "</ul>", "</li>", "<li>"]
    assert ctx.lists == [ListFrame(False, 0, 0)]


def test_resolve_list_item_unwinds_to_matching_frame():
    frames = [ListFrame(False, 0, 0), ListFrame(False, 2, 2), ListFrame(True, 4, 2)]
    ctx = ParseContext("", line_indentation=2, lists=frames)

    resolve_list_item(ctx, ordered=False)

    assert ctx.out == ["</li>", "</ol>", "</li>", "<li>"]
    assert len(ctx.lists) == 2


def test_resolve_list_item_in_between_indentation_joins_outer_list():
    frames = [ListFrame(False, 0, 0), ListFrame(False, 4, 4)]
    ctx = ParseContext("", line_indentation=2, lists=frames)

    resolve_list_item(ctx, ordered=False)

    assert ctx.out == ["</li>", "</ul>", "</li>", "<li>"]
    assert ctx.lists == [ListFrame(False, 0, 0)]


def test_resolve_list_item_closes_open_paragraph():
    ctx = ParseContext("", paragraph_open=True)

    resolve_list_item(ctx, ordered=False)

    assert ctx.out == ["</p>", "<ul>", "<li>"]


def test_close_all_open_lists_closes_innermost_first():
    ctx = ParseContext("", lists=[ListFrame(False, 0, 0), ListFrame(True, 2, 2)])

    close_all_open_lists(ctx)

    assert ctx.out == ["</li>", "</ol>", "</li>", "</ul>"]
    assert ctx.lists == []


def test_finish_document_unwinds_everything():
    ctx = ParseContext(
        "",
        paragraph_open=True,
        lists=[ListFrame(False, 0, 0)],
        blockquote_depth=2,
    )

    finish_document(ctx)

    assert ctx.out == ["</p>", "</li>", "</ul>", "</blockquote>\n", "</blockquote>\n"]
    assert ctx.blockquote_depth == 0


def test_nested_list_closes_before_sibling():
    html = convert("- a\n  - b\n- c\n")

    assert html == "<ul><li>a<ul><li>b</li></ul></li><li>c</li></ul>"


def test_three_level_list_unwinds_on_dedent():
    html = convert("- a\n  - b\n    - c\n- d\n")

    assert html == "<ul><li>a<ul><li>b<ul><li>c</li></ul></li></ul></li><li>d</li></ul>"


def test_ordered_list():
    assert convert("1. one\n2. two\n") == "<ol><li>one</li><li>two</li></ol>"


def test_ordered_list_nested_in_unordered():
    assert convert("- a\n  1. b\n") == "<ul><li>a<ol><li>b</li></ol></li></ul>"


def test_plus_and_star_bullets():
    assert convert("+ a\n* b\n") == "<ul><li>a</li><li>b</li></ul>"


def test_blank_line_keeps_list_open():
    assert convert("- a\n\n- b\n") == "<ul><li>a</li><li>b</li></ul>"


def test_plain_line_closes_lists():
    assert convert("- a\ntext\n") == "<ul><li>a</li></ul><p>text</p>"


def test_paragraph_closes_before_list():
    assert convert("intro\n- a\n") == "<p>intro</p><ul><li>a</li></ul>"


def test_list_items_keep_inline_markup():
    assert convert("- *a*\n") == "<ul><li><em>a</em></li></ul>"


def test_blockquote_transitions_emit_exact_deltas():
    html = convert(">> quoted\n> less\nplain\n")

    assert html == (
        "<blockquote>\n<blockquote>\n<p>quoted</p></blockquote>\n"
        "<p>less</p></blockquote>\n<p>plain</p>"
    )


def test_list_inside_blockquote():
    html = convert("> - a\n> - b\n")

    assert html == "<blockquote>\n<ul><li>a</li><li>b</li></ul></blockquote>\n"


def test_blank_line_closes_blockquote():
    assert convert("> a\n\nb\n") == "<blockquote>\n<p>a</p></blockquote>\n<p>b</p>"


def test_blockquote_closed_at_end_of_document():
    assert convert("> a") == "<blockquote>\n<p>a</p></blockquote>\n"
