"""Markdown to HTML document conversion with metadata-derived <head> elements"""

import logging
import re
from typing import Any

import yaml
from markdown_it import MarkdownIt

from wikimark.core.codec import escape_markup
from wikimark.core.models import EscapeMode, MarkdownDoc
from wikimark.core.utils.tokens import leading_heading_text


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)

# MultiMarkdown metadata: "Key: value" lines (values may continue on indented
# lines) at the very top of the document, ended by a blank line.
METADATA_SECTION_RE = re.compile(r'((?:[^\s:][^:\n]*:.*(?:\r?\n[ \t]+\S.*)*\r?\n)+)[ \t]*\r?\n')
METADATA_ENTRY_RE = re.compile(r'([^\s:][^:\n]*):(.*(?:\r?\n[ \t]+\S.*)*)\r?\n')

STANDARD_METADATA_KEYS = frozenset((
    "title", "author", "date", "address", "affiliation", "copyright",
    "email", "keywords", "language", "phone", "subtitle",
))


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    try:
        return MarkdownIt(preset, options_update={"linkify": False})
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown parser preset: {preset!r}") from e


def _meta_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(_meta_value(v) for v in value)
    return str(value)


def _strip_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Return (metadata, body) with a YAML front matter header removed."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return {str(k): _meta_value(v) for k, v in fm.items()}, text[m.end():]


def _strip_metadata_block(text: str) -> tuple[dict[str, str], str]:
    """Return (metadata, body) with a leading MultiMarkdown metadata block removed.

    The block only counts as metadata when its first key is a standard key;
    otherwise the text is returned untouched.
    """
    m = METADATA_SECTION_RE.match(text)
    if not m:
        return {}, text

    metadata: dict[str, str] = {}
    for entry in METADATA_ENTRY_RE.finditer(m.group(1)):
        key = entry.group(1).strip()
        if not metadata and key.lower() not in STANDARD_METADATA_KEYS:
            return {}, text
        metadata[key] = " ".join(entry.group(2).split())
    return metadata, text[m.end():]


def _pop_title(metadata: dict[str, str]) -> str | None:
    for key in metadata:
        if key.lower() == "title":
            return metadata.pop(key)
    return None


def parse_markdown(text: str, parser_config: str = 'gfm-like') -> MarkdownDoc:
    """Split off document metadata and render the markdown body to HTML."""
    metadata, body = _strip_frontmatter(text)
    if not metadata:
        metadata, body = _strip_metadata_block(body)
    if metadata:
        logger.debug("Found %d metadata entries", len(metadata))

    title = _pop_title(metadata)
    md = _make_parser(parser_config)
    tokens = md.parse(body)
    if title is None:
        title = leading_heading_text(tokens)

    return MarkdownDoc(
        title=title,
        metadata=metadata,
        body=md.renderer.render(tokens, md.options, {}),
    )


def build_html(doc: MarkdownDoc, mode: EscapeMode = EscapeMode.strict) -> str:
    """Wrap a converted document in <html>, emitting title and meta head elements."""
    parts = ["<html>", "<head>"]
    if doc.title is not None:
        parts.append(f"<title>{escape_markup(doc.title, mode)}</title>")
    for key, value in doc.metadata.items():
        parts.append(f'<meta name="{escape_markup(key, mode)}" content="{escape_markup(value, mode)}" />')
    parts += ["</head>", "<body>", doc.body, "</body>", "</html>"]
    return "".join(parts)


def to_html(text: str, parser_config: str = 'gfm-like', mode: EscapeMode = EscapeMode.strict) -> str:
    """Convert markdown text to a complete HTML document."""
    return build_html(parse_markdown(text, parser_config), mode)
