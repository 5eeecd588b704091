"""CLI entrypoint: Typer app definition and command registration"""

import typer

from wikimark.cli.commands import (
    blocks_cmd,
    escape_cmd,
    html_cmd,
    render_cmd,
    slug_cmd,
    unescape_cmd,
    url_cmd,
)


app = typer.Typer(name="wikimark", no_args_is_help=True, help="Wiki inline markup and HTML text codec")

app.command(name="blocks")(blocks_cmd)
app.command(name="html")(html_cmd)
app.command(name="escape")(escape_cmd)
app.command(name="unescape")(unescape_cmd)
app.command(name="url")(url_cmd)
app.command(name="slug")(slug_cmd)
app.command(name="render")(render_cmd)
