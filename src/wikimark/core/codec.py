"""Markup escaping, URL encoding, and identifier encoding for literal text"""

import logging
import re
from html.entities import name2codepoint
from typing import Optional
from urllib.parse import quote

from wikimark.core.models import EscapeMode
from wikimark.core.utils.slug import is_slug, slugify


logger = logging.getLogger(__name__)

ASCII_MAX = 0x7E

MARKUP_ESCAPES = {
    '<': '&lt;',
    '>': '&gt;',
    '&': '&amp;',
    '"': '&quot;',
}

# ASCII letters, digits and "-_.~" are always safe for quote()
URL_SAFE = ";/?:@&=+$,[]!*'()#"

ENTITY_RE = re.compile(r'&(?:#[xX]([0-9a-fA-F]+)|#([0-9]+)|([A-Za-z][A-Za-z0-9]*));')
HEX_ESCAPE = '&#x'
HEX_RE = re.compile(r'[0-9a-fA-F]+')

HTML_TAGS: frozenset[str] = frozenset((
    "a", "abbr", "acronym", "address", "applet", "area", "b", "base", "basefont", "bdo",
    "big", "blockquote", "body", "br", "button", "caption", "center", "cite", "code", "col",
    "colgroup", "dd", "del", "dfn", "dir", "div", "dl", "dt", "em", "fieldset",
    "font", "form", "frame", "frameset", "h1", "h2", "h3", "h4", "h5", "h6", "head",
    "hr", "html", "i", "iframe", "img", "input", "ins", "isindex", "kbd", "label",
    "legend", "li", "link", "map", "menu", "meta", "noframes", "noscript", "object", "ol",
    "optgroup", "option", "p", "param", "pre", "q", "s", "samp", "script", "select",
    "small", "span", "strike", "strong", "style", "sub", "sup", "table", "tbody", "td",
    "textarea", "tfoot", "th", "thead", "title", "tr", "tt", "u", "ul", "var",
))


class MalformedEntityError(ValueError):
    """A '&#x' numeric escape without a terminating ';' or with a non-hex payload."""

    def __init__(self, fragment: str):
        super().__init__(f"Malformed numeric escape near '...{fragment}'")
        self.fragment = fragment


def _is_high_surrogate(c: str) -> bool:
    return '\ud800' <= c <= '\udbff'


def _is_low_surrogate(c: str) -> bool:
    return '\udc00' <= c <= '\udfff'


def _to_code_point(high: str, low: str) -> int:
    """Combine a UTF-16 surrogate pair into one code point (RFC 2781, 2.2)."""
    return ((ord(high) & 0x3FF) << 10 | (ord(low) & 0x3FF)) + 0x10000


def escape_markup(text: Optional[str], mode: EscapeMode = EscapeMode.strict) -> str:
    """Escape text for embedding in HTML/XML.

    strict escapes only < > & ". ascii additionally replaces every code point
    above 0x7E with a lowercase '&#x<hex>;' escape, one escape per character,
    combining surrogate pairs first.
    """
    if text is None:
        return ""

    out = []
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c in MARKUP_ESCAPES:
            out.append(MARKUP_ESCAPES[c])
        elif mode == EscapeMode.strict or ord(c) <= ASCII_MAX:
            out.append(c)
        elif _is_high_surrogate(c) and i + 1 < n and _is_low_surrogate(text[i + 1]):
            out.append(f"{HEX_ESCAPE}{_to_code_point(c, text[i + 1]):x};")
            i += 1
        else:
            out.append(f"{HEX_ESCAPE}{ord(c):x};")
        i += 1
    return "".join(out)


def _decode_entity(m: re.Match) -> str:
    hex_digits, dec_digits, name = m.groups()
    if name is not None:
        cp = name2codepoint.get(name)
    else:
        cp = int(hex_digits, 16) if hex_digits is not None else int(dec_digits)
    if cp is None or cp > 0x10FFFF:
        return m.group(0)
    return chr(cp)


def unescape_markup(text: Optional[str]) -> Optional[str]:
    """Reverse escape_markup; named and numeric references are decoded exactly.

    Raises MalformedEntityError for a '&#x' escape that is unterminated or whose
    payload is not a hexadecimal code point.
    """
    if text is None:
        return None

    unescaped = ENTITY_RE.sub(_decode_entity, text)
    if unescaped != text:
        return unescaped

    # Nothing decoded, so any '&#x' left is malformed; this scan only validates.
    rest = text
    while (i := rest.find(HEX_ESCAPE)) != -1:
        rest = rest[i + len(HEX_ESCAPE):]
        end = rest.find(';')
        if end == -1:
            raise MalformedEntityError(rest)
        payload = rest[:end]
        if not HEX_RE.fullmatch(payload) or int(payload, 16) > 0x10FFFF:
            raise MalformedEntityError(rest)
    return text


def encode_url(url: Optional[str]) -> Optional[str]:
    """Percent-encode url, keeping letters, digits and the URI reserved/mark characters.

    Other characters become their UTF-8 bytes as uppercase '%XX'.
    """
    if url is None:
        return None
    return quote(url, safe=URL_SAFE, encoding="utf-8", errors="surrogatepass")


def encode_identifier(text: Optional[str]) -> Optional[str]:
    """Encode text as an identifier slug usable as a document anchor."""
    if text is None:
        return None
    encoded = slugify(text)
    if not encoded:
        logger.debug("Identifier for %r is empty after encoding", text)
    return encoded


def is_valid_identifier(text: Optional[str]) -> bool:
    """True if text is already a valid identifier slug."""
    return text is not None and is_slug(text)


def get_html_tag(name: Optional[str]) -> Optional[str]:
    """Return the canonical tag name if name is a known HTML tag, else None."""
    if not name:
        return None
    tag = name.lower()
    return tag if tag in HTML_TAGS else None
