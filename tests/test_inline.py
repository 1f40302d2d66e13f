import pytest

from md2html.config import TagConfig
from md2html.parser import convert


def test_emphasis_levels():
    html = convert("*a* **b** ***c***\n")

    assert html == "<p><em>a</em> <strong>b</strong> <em><strong>c</strong></em></p>"


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("**a*\n", "<p>*<em>a</em></p>"),
        ("a*b**\n", "<p>a<em>b</em>*</p>"),
        ("****a****\n", "<p><em><strong>a</strong></em></p>"),
    ],
)
def test_unbalanced_emphasis_runs_keep_surplus_asterisks(markdown: str, expected: str):
    assert convert(markdown) == expected


def test_unterminated_emphasis_is_literal():
    assert convert("a *b\n") == "<p>a *b</p>"


def test_unterminated_emphasis_does_not_hide_later_constructs():
    assert convert("*a `c`\n") == "<p>*a <code>c</code></p>"


def test_emphasis_uses_configured_tags():
    config = TagConfig(italic=("<i>", "</i>"), bold=("<b>", "</b>"))

    assert convert("***x***\n", config) == "<p><i><b>x</b></i></p>"


def test_strikethrough():
    assert convert("~~gone~~ ok\n") == "<p><del>gone</del> ok</p>"


def test_strikethrough_ignores_runs_of_other_lengths():
    assert convert("~~a~~~b~~\n") == "<p><del>a~~~b</del></p>"


def test_triple_tilde_is_literal():
    assert convert("~~~x~~\n") == "<p>~~~x~~</p>"


def test_unterminated_strikethrough_is_literal():
    assert convert("~~open\n") == "<p>~~open</p>"


def test_highlight():
    assert convert("==hi==\n") == "<p><mark>hi</mark></p>"


def test_single_equals_is_literal():
    assert convert("a == b\n") == "<p>a == b</p>"


def test_code_span():
    assert convert("use `x = 1` now\n") == "<p>use <code>x = 1</code> now</p>"


def test_code_span_with_double_backticks_keeps_single_backtick():
    assert convert("``a`b``\n") == "<p><code>a`b</code></p>"


def test_code_span_content_is_not_parsed():
    assert convert("`*a*`\n") == "<p><code>*a*</code></p>"


def test_unmatched_backtick_is_literal():
    assert convert("`open\n") == "<p>`open</p>"


def test_link():
    assert convert("[t](u)") == '<p><a href="u">t</a></p>'


def test_link_inside_text():
    html = convert("see [docs](http://x.y) now\n")

    assert html == '<p>see <a href="http://x.y">docs</a> now</p>'


def test_link_wrapper():
    config = TagConfig(link_wrapper=("<span>", "</span>"))

    assert convert("[t](u)\n", config) == '<p><span><a href="u">t</a></span></p>'


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("[t\n", "<p>[t</p>"),
        ("[t] x\n", "<p>[t] x</p>"),
        # The title and opening parenthesis are consumed before the url.
        ("[t](u\n", "<p>u</p>"),
    ],
)
def test_truncated_links(markdown: str, expected: str):
    assert convert(markdown) == expected


def test_image():
    assert convert("![alt](a.png)\n") == '<p><img src="a.png" alt="alt"></p>'


def test_image_skips_spaces_after_bang():
    assert convert("! [a](b)\n") == '<p><img src="b" alt="a"></p>'


def test_image_wrapper():
    config = TagConfig(image_wrapper=("<figure>", "</figure>"))

    assert convert("![a](b)\n", config) == '<p><figure><img src="b" alt="a"></figure></p>'


def test_bang_without_bracket_is_literal():
    assert convert("Wow!\n") == "<p>Wow!</p>"


def test_truncated_image_drops_prefix():
    assert convert("![a](b\n") == "<p>b</p>"


def test_backslash_escapes_delimiters():
    assert convert("\\*not\\*\n") == "<p>*not*</p>"


def test_backslash_escapes_heading_marker():
    assert convert("\\# no heading\n") == "<p># no heading</p>"


def test_inline_scan_stops_at_line_end():
    assert convert("*a\nb*\n") == "<p>*a b*</p>"
