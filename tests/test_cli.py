"""Tests for the command-line interface."""

from pathlib import Path

import yaml
from typer.testing import CliRunner

from python_smartnav import __version__
from python_smartnav.cli import app

runner = CliRunner()

PAGE_HTML = """<html><body>
<h1>Sales</h1>
<p>Figures for the year.</p>
<table>
<thead><tr><th>Region</th><th>Total</th></tr></thead>
<tbody>
<tr><th>North</th><td>10</td></tr>
<tr><th>South</th><td colspan="1">20</td></tr>
</tbody>
</table>
</body></html>"""


def write_page(directory: Path, content: str = PAGE_HTML) -> Path:
    path = directory / "page.html"
    path.write_text(content, encoding="utf-8")
    return path


class TestCLIVersion:
    """Tests for version command."""

    def test_version_flag(self) -> None:
        """Test --version shows version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help(self) -> None:
        """Test --help lists the commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "read" in result.stdout
        assert "table" in result.stdout


class TestCLIRead:
    """Tests for read command."""

    def test_read_text(self, tmp_path) -> None:
        """Test reading a document as spoken lines."""
        path = write_page(tmp_path)

        result = runner.invoke(app, ["read", str(path), "--max-steps", "2"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Sales, Heading 1", "Figures for the year."]

    def test_read_yaml(self, tmp_path) -> None:
        """Test reading a document as YAML."""
        path = write_page(tmp_path)

        result = runner.invoke(app, ["read", str(path), "--format", "yaml", "-n", "1"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data[0]["speech"] == "Sales, Heading 1"

    def test_read_reverse(self, tmp_path) -> None:
        """Test reading from the end."""
        path = write_page(tmp_path, "<html><body><p>One</p><p>Two</p></body></html>")

        result = runner.invoke(app, ["read", str(path), "--reverse"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Two", "One"]

    def test_read_with_config(self, tmp_path) -> None:
        """Test a settings file changes how the page is split."""
        path = write_page(tmp_path, "<html><body><p>Hello <b>world</b></p></body></html>")
        config = tmp_path / "nav.yaml"
        config.write_text("smartnav:\n  structural_queries: false\n", encoding="utf-8")

        result = runner.invoke(app, ["read", str(path), "--config", str(config)])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Hello", "world"]

    def test_read_missing_file(self, tmp_path) -> None:
        """Test a missing file is reported."""
        result = runner.invoke(app, ["read", str(tmp_path / "missing.html")])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_read_bad_format(self, tmp_path) -> None:
        """Test an unknown format is reported."""
        path = write_page(tmp_path)

        result = runner.invoke(app, ["read", str(path), "--format", "json"])

        assert result.exit_code == 1
        assert "Unknown format" in result.output

    def test_read_bad_config(self, tmp_path) -> None:
        """Test an invalid settings file is reported."""
        path = write_page(tmp_path)
        config = tmp_path / "nav.yaml"
        config.write_text("smartnav:\n  max_charcount: 0\n", encoding="utf-8")

        result = runner.invoke(app, ["read", str(path), "--config", str(config)])

        assert result.exit_code == 1
        assert "max_charcount" in result.output


class TestCLITable:
    """Tests for table command."""

    def test_table_cells_and_headers(self, tmp_path) -> None:
        """Test the table listing shows dimensions, cells and headers."""
        path = write_page(tmp_path)

        result = runner.invoke(app, ["table", str(path)])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "Table 1: 3 rows, 2 columns"
        assert "  [1,1] Region" in lines
        assert "  [2,2] 10 (row: North; col: Total)" in lines
        assert "  [3,1] South (col: Region)" in lines

    def test_table_index_out_of_range(self, tmp_path) -> None:
        """Test asking for a table that does not exist."""
        path = write_page(tmp_path)

        result = runner.invoke(app, ["table", str(path), "--index", "2"])

        assert result.exit_code == 1
        assert "Table 2 not found" in result.output
