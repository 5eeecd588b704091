"""Inline HTML rendering of block trees"""

import logging
from typing import Optional

from wikimark.core.codec import encode_identifier, encode_url, escape_markup
from wikimark.core.models import (
    Anchor,
    Block,
    Bold,
    EscapeMode,
    Italic,
    Link,
    Linebreak,
    Monospace,
    Text,
)


logger = logging.getLogger(__name__)

SPAN_TAGS = {
    Bold:      "b",
    Italic:    "i",
    Monospace: "code",
}

# Schemes that execute in the browser instead of navigating
UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")


def _href(link: Link) -> Optional[str]:
    """Return the escaped href for link, or None when it has nowhere safe to point.

    Internal references ('#name' labels) point at the encoded anchor id, so a
    name that encodes to nothing has no href. External targets are
    percent-encoded first; whitespace and controls never survive that, so the
    scheme test sees what a browser would.
    """
    if link.label == f"#{link.target}":
        anchor_id = encode_identifier(link.target)
        return f"#{anchor_id}" if anchor_id else None
    url = encode_url(link.target)
    if url.lower().startswith(UNSAFE_SCHEMES):
        logger.warning("Dropping link with unsafe target: %r", link.target)
        return None
    return escape_markup(url)


def render_block(block: Block, mode: EscapeMode = EscapeMode.strict) -> str:
    """Render a single block (and its children) to HTML."""
    if isinstance(block, Text):
        return escape_markup(block.content, mode)
    if isinstance(block, (Bold, Italic, Monospace)):
        tag = SPAN_TAGS[type(block)]
        return f"<{tag}>{render_html(block.children, mode)}</{tag}>"
    if isinstance(block, Link):
        label = escape_markup(block.label or block.target, mode)
        href = _href(block)
        return label if href is None else f'<a href="{href}">{label}</a>'
    if isinstance(block, Anchor):
        anchor_id = encode_identifier(block.name)
        return f'<a id="{anchor_id}"></a>' if anchor_id else ""
    if isinstance(block, Linebreak):
        return "<br />"
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def render_html(blocks: list[Block], mode: EscapeMode = EscapeMode.strict) -> str:
    """Render an ordered block list to an inline HTML fragment."""
    return "".join(render_block(b, mode) for b in blocks)
