"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from wikimark.config import Settings, load_config
from wikimark.core.codec import (
    MalformedEntityError,
    encode_identifier,
    encode_url,
    escape_markup,
    is_valid_identifier,
    unescape_markup,
)
from wikimark.core.inline import build_blocks
from wikimark.core.models import BlockList, EscapeMode
from wikimark.core.pipeline import run_render
from wikimark.core.render import render_html


EscapeOption = Annotated[
    Optional[EscapeMode],
    typer.Option("--escape-mode", case_sensitive=False, help="strict or ascii text escaping"),
]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def blocks_cmd(
    line: Annotated[str, typer.Argument(help="One line of wiki inline markup")],
    ):
    """Print the block tree of a line as JSON."""
    _settings()
    typer.echo(BlockList.dump_json(build_blocks(line), indent=2).decode())


def html_cmd(
    line: Annotated[str, typer.Argument(help="One line of wiki inline markup")],
    mode: EscapeOption = None,
    ):
    """Render a line of wiki inline markup to an HTML fragment."""
    settings = _settings(overrides={"escape_mode": mode})
    typer.echo(render_html(build_blocks(line), settings.escape_mode))


def escape_cmd(
    text: Annotated[str, typer.Argument(help="Raw text to escape")],
    mode: EscapeOption = None,
    ):
    """Escape text for embedding in HTML."""
    settings = _settings(overrides={"escape_mode": mode})
    typer.echo(escape_markup(text, settings.escape_mode))


def unescape_cmd(
    text: Annotated[str, typer.Argument(help="Escaped text to decode")],
    ):
    """Decode HTML entities and numeric escapes back to raw text."""
    _settings()
    try:
        typer.echo(unescape_markup(text))
    except MalformedEntityError as e:
        _fail(str(e))


def url_cmd(
    text: Annotated[str, typer.Argument(help="URL or path to percent-encode")],
    ):
    """Percent-encode a URL."""
    _settings()
    typer.echo(encode_url(text))


def slug_cmd(
    text: Annotated[str, typer.Argument(help="Text to encode as an identifier")],
    check: Annotated[bool, typer.Option("--check", help="Only validate; exit 1 if not a valid identifier")] = False,
    ):
    """Encode text as an anchor identifier, or validate one with --check."""
    _settings()
    if check:
        if not is_valid_identifier(text):
            _fail(f"Not a valid identifier: {text!r}")
        typer.echo("valid")
        return
    typer.echo(encode_identifier(text))


def render_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    mode: EscapeOption = None,
    ):
    """Render .md/.markdown/.wiki files to HTML documents."""
    settings = _settings(overrides={"output_dir": out, "parser_config": parser, "escape_mode": mode})
    output_dir = Path(settings.output_dir)
    try:
        results = run_render(path, output_dir, settings)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No source files found at: {path}")
        raise typer.Exit(1)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Rendered {len(results)} document(s) to {output_dir}/")
