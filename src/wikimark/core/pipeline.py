"""File discovery and render-to-HTML orchestration"""

import logging
import re
from pathlib import Path

from wikimark.config import Settings
from wikimark.core.document import build_html, to_html
from wikimark.core.inline import InlineBuilder
from wikimark.core.models import EscapeMode, MarkdownDoc
from wikimark.core.render import render_html


logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = {'.md', '.markdown'}
WIKI_EXTENSIONS = {'.wiki'}
SOURCE_EXTENSIONS = MARKDOWN_EXTENSIONS | WIKI_EXTENSIONS

# Only CR, LF and CRLF end a line; U+2028 and friends are line content
LINE_BREAK_RE = re.compile(r'\r\n|\r|\n')


def discover_files(path: Path) -> list[Path]:
    """Return sorted source files under path, or [path] if a single supported file."""
    if path.is_file():
        return [path] if path.suffix in SOURCE_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in SOURCE_EXTENSIONS)


def _paragraphs(text: str) -> list[list[str]]:
    """Group non-blank lines into paragraphs separated by blank lines."""
    paragraphs: list[list[str]] = [[]]
    for line in LINE_BREAK_RE.split(text):
        if line.strip():
            paragraphs[-1].append(line)
        elif paragraphs[-1]:
            paragraphs.append([])
    return [p for p in paragraphs if p]


def render_wiki(text: str, mode: EscapeMode = EscapeMode.strict) -> str:
    """Render wiki inline markup, one <p> per paragraph, lines kept on their own lines."""
    builder = InlineBuilder()
    return "".join(
        "<p>" + "\n".join(render_html(builder.build(line), mode) for line in para) + "</p>"
        for para in _paragraphs(text)
    )


def render_file(path: Path, settings: Settings) -> str:
    """Render a single source file to a complete HTML document."""
    text = path.read_text(encoding='utf-8')
    if path.suffix in WIKI_EXTENSIONS:
        doc = MarkdownDoc(title=None, body=render_wiki(text, settings.escape_mode))
        return build_html(doc, settings.escape_mode)
    return to_html(text, settings.parser_config, settings.escape_mode)


def _output_paths(sources: list[Path], root: Path, output_dir: Path) -> dict[Path, Path]:
    """Map each source to its output path, mirroring its location under root."""
    base = root if root.is_dir() else root.parent
    outputs: dict[Path, Path] = {}
    claimed: dict[Path, Path] = {}
    for p in sources:
        out_file = output_dir / p.relative_to(base).with_suffix('.html')
        if out_file in claimed:
            raise RuntimeError(f"Output collision: {claimed[out_file]} and {p} both render to {out_file}")
        claimed[out_file] = p
        outputs[p] = out_file
    return outputs


def run_render(path: str, output_dir: Path, settings: Settings) -> list[tuple[Path, Path]]:
    """Render every source file under path into output_dir. Returns (source, output) pairs.

    Outputs keep the source's directory layout relative to path. Two sources
    that map to the same output (page.md and page.wiki side by side) raise
    RuntimeError before anything is written.
    """
    root = Path(path)
    outputs = _output_paths(discover_files(root), root, output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p, out_file in outputs.items():
        try:
            html = render_file(p, settings)
            out_file.parent.mkdir(parents=True, exist_ok=True)
            out_file.write_text(html, encoding='utf-8')
            results.append((p, out_file))
        except Exception as e:
            raise RuntimeError(f"Failed to render {p}: {e}") from e
        logger.info("Rendered %s -> %s", p, out_file)
    return results
