"""Integration tests for the prismaflow command line interface.

These tests invoke the Typer app through ``CliRunner`` and check the
files each command writes and the exit codes on bad input.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from prismaflow.cli.main import app
from prismaflow.config.settings import settings
from prismaflow.io.template import TEMPLATE_PATH, blank_template

runner = CliRunner()


@pytest.fixture
def template_csv(tmp_path: Path) -> Path:
    """A filled-in template on disk."""
    path = tmp_path / "review.csv"
    path.write_bytes(TEMPLATE_PATH.read_bytes())
    return path


def test_template_command(tmp_path: Path) -> None:
    """Test ``template`` writes the packaged template."""
    target = tmp_path / "PRISMA.csv"
    result = runner.invoke(app, ["template", str(target)])
    assert result.exit_code == 0
    assert target.read_bytes() == TEMPLATE_PATH.read_bytes()


def test_validate_command(template_csv: Path) -> None:
    """Test ``validate`` summarises a valid template."""
    result = runner.invoke(app, ["validate", str(template_csv)])
    assert result.exit_code == 0
    assert "records_screened" in result.output
    assert "Template is valid" in result.output


def test_validate_missing_field(tmp_path: Path) -> None:
    """Test ``validate`` exits 1 naming the missing field."""
    df = blank_template()
    path = tmp_path / "broken.csv"
    df[df["data"] != "duplicates"].to_csv(path, index=False)
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 1
    assert "duplicates" in result.output


def test_validate_missing_file(tmp_path: Path) -> None:
    """Test ``validate`` exits 1 for a missing file."""
    result = runner.invoke(app, ["validate", str(tmp_path / "nope.csv")])
    assert result.exit_code == 1


def test_render_dot(template_csv: Path, tmp_path: Path) -> None:
    """Test ``render`` writes DOT."""
    output = tmp_path / "flow.dot"
    result = runner.invoke(app, ["render", str(template_csv), "-o", str(output)])
    assert result.exit_code == 0
    dot = output.read_text(encoding="utf-8")
    assert dot.startswith("digraph TD")
    assert "12 -> 19" in dot


def test_render_without_previous(template_csv: Path, tmp_path: Path) -> None:
    """Test ``render`` honours column and font options."""
    output = tmp_path / "flow.dot"
    result = runner.invoke(
        app, ["render", str(template_csv), "-o", str(output), "--no-previous", "--font", "Arial"]
    )
    assert result.exit_code == 0
    dot = output.read_text(encoding="utf-8")
    assert "12 -> 19" not in dot
    assert "fontname=Arial" in dot


def test_render_interactive_html(template_csv: Path, tmp_path: Path) -> None:
    """Test ``render --interactive`` writes a linked HTML page."""
    output = tmp_path / "flow.html"
    result = runner.invoke(app, ["render", str(template_csv), "-o", str(output), "--interactive"])
    assert result.exit_code == 0
    html = output.read_text(encoding="utf-8")
    assert "box4.html" in html


def test_render_default_output(template_csv: Path, tmp_path: Path, monkeypatch) -> None:
    """Test ``render`` writes to a timestamped directory by default."""
    monkeypatch.setattr(settings, "output_dir", tmp_path / "output")
    result = runner.invoke(app, ["render", str(template_csv)])
    assert result.exit_code == 0
    written = list((tmp_path / "output").glob("prisma_*/flowdiagram.html"))
    assert len(written) == 1


def test_render_unsupported_format(template_csv: Path, tmp_path: Path) -> None:
    """Test ``render`` rejects an unknown format."""
    result = runner.invoke(app, ["render", str(template_csv), "-o", str(tmp_path / "x"), "--format", "gif"])
    assert result.exit_code == 1


def test_render_invalid_count(tmp_path: Path) -> None:
    """Test ``render`` exits 1 on an invalid count."""
    df = blank_template()
    df.loc[df["data"] == "records_screened", "n"] = "many"
    path = tmp_path / "bad.csv"
    df.to_csv(path, index=False)
    result = runner.invoke(app, ["render", str(path), "-o", str(tmp_path / "flow.dot")])
    assert result.exit_code == 1
    assert not (tmp_path / "flow.dot").exists()
