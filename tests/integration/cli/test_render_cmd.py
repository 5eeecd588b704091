"""Integration tests for the render command"""

from typer.testing import CliRunner

from wikimark.cli.cli import app


def test_render_cmd_writes_html(tmp_path):
    """render produces one .html document per markdown/wiki source."""
    (tmp_path / "hello.md").write_text("# Hello\n\nWorld\n")
    (tmp_path / "page.wiki").write_text("*bold* [Docs|http://example.org]\n")

    runner = CliRunner()
    result = runner.invoke(app, ["render", str(tmp_path), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    assert "Rendered 2 document(s)" in result.output
    assert "<title>Hello</title>" in (tmp_path / "dist" / "hello.html").read_text(encoding="utf-8")
    page = (tmp_path / "dist" / "page.html").read_text(encoding="utf-8")
    assert '<b>bold</b> <a href="http://example.org">Docs</a>' in page


def test_render_cmd_escape_mode_from_config(tmp_path):
    (tmp_path / "config.yaml").write_text("escape_mode: ascii\noutput_dir: site\n")
    (tmp_path / "page.wiki").write_text("café\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["render", "page.wiki"])

    assert result.exit_code == 0, result.output
    assert "<p>caf&#xe9;</p>" in (tmp_path / "site" / "page.html").read_text(encoding="utf-8")


def test_render_cmd_no_sources(tmp_path):
    result = CliRunner().invoke(app, ["render", str(tmp_path), "--out-dir", str(tmp_path / "dist")])
    assert result.exit_code == 1
    assert "No source files found" in result.output


def test_render_cmd_reports_failures(tmp_path):
    (tmp_path / "bad.md").write_text("---\nkey: [unclosed\n---\nBody\n")
    result = CliRunner().invoke(app, ["render", "bad.md"])
    assert result.exit_code == 1
    assert "Error: Failed to render" in result.output


def test_render_cmd_nested_sources_keep_layout(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "a" / "page.md").write_text("from a\n")
    (tmp_path / "b" / "page.wiki").write_text("from b\n")

    result = CliRunner().invoke(app, ["render", str(tmp_path), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    assert "Rendered 2 document(s)" in result.output
    assert (tmp_path / "dist" / "a" / "page.html").exists()
    assert (tmp_path / "dist" / "b" / "page.html").exists()
