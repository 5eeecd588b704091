"""Unit tests for core/render.py"""

import pytest

from wikimark.core.inline import build_blocks
from wikimark.core.models import EscapeMode, Link, Text
from wikimark.core.render import render_block, render_html


@pytest.mark.parametrize("line,expected", [
    ("*a* & _b_", "<b>a</b> &amp; <i>b</i>"),
    ("{{x<y}}", "<code>x&lt;y</code>"),
    ("a\\\\b", "a<br />b"),
    ("*see [Docs|http://example.org/a b] now*",
     '<b>see <a href="http://example.org/a%20b">Docs</a> now</b>'),
    ("[q|/search?a=1&b=2]", '<a href="/search?a=1&amp;b=2">q</a>'),
    ("[#Top Section]", '<a href="#top-section">#Top Section</a>'),
    ("{anchor:Top Section}", '<a id="top-section"></a>'),
    ("{unknown}", "{unknown}"),
    ("", ""),
])
def test_render_html(line, expected):
    assert render_html(build_blocks(line)) == expected


def test_render_ascii_mode_escapes_text():
    assert render_html([Text(content="café")], EscapeMode.ascii) == "caf&#xe9;"
    assert render_html([Text(content="café")]) == "café"


def test_render_link_empty_label_uses_target():
    assert render_block(Link(target="x", label="")) == '<a href="x">x</a>'


def test_render_link_label_is_escaped():
    assert render_block(Link(target="t", label="<b>")) == '<a href="t">&lt;b&gt;</a>'


def test_render_unknown_block_raises():
    with pytest.raises(TypeError):
        render_block(object())


def test_render_anchor_without_identifier_is_dropped():
    """Names that encode to an empty identifier produce no id="" markup."""
    assert render_html(build_blocks("{anchor:!!!}[#!!!]")) == "#!!!"


@pytest.mark.parametrize("target", [
    "javascript:alert(1)",
    "JavaScript:alert(1)",
    "vbscript:msgbox",
    "data:text/html,<script>",
])
def test_render_unsafe_link_is_plain_label(target):
    assert render_block(Link(target=target, label="x")) == "x"


def test_render_scheme_with_embedded_tab_stays_encoded():
    assert render_block(Link(target="java\tscript:x", label="x")) == '<a href="java%09script:x">x</a>'
