"""Identifier slugs usable as HTML anchors"""

import re
import unicodedata


_PUNCT_RE = re.compile(r'[^\w\s-]')
_SEP_RE = re.compile(r'[\s_]+')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated identifier.

    Accents are folded away (NFKD, combining marks dropped), punctuation is
    removed, and runs of whitespace/underscores become a single hyphen.
    """
    text = unicodedata.normalize('NFKD', text.strip().lower())
    text = ''.join(c for c in text if not unicodedata.combining(c))
    text = _PUNCT_RE.sub('', text)
    text = _SEP_RE.sub('-', text)
    return re.sub(r'-+', '-', text).strip('-')


def is_slug(text: str) -> bool:
    """True if text is a non-empty string that slugify leaves unchanged."""
    return bool(text) and slugify(text) == text
