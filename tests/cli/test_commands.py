"""Tests for the scriptkit command line interface."""

import json

import pytest
import yaml

from scriptkit import __version__
from scriptkit.cli import app

UNPAIRED_DUAL_FOUNTAIN = "INT. HOUSE - DAY\n\nA door slams.\n\nANNA ^\nWho's there?\n"


def load_json(output: str):
    """Decode the JSON document printed after any log lines."""
    return json.loads(output[output.index("{") :])


@pytest.fixture
def fountain_file(tmp_path, sample_fountain):
    path = tmp_path / "script.fountain"
    path.write_text(sample_fountain, encoding="utf-8")
    return path


@pytest.fixture
def coffee_file(tmp_path, coffee_shop_fountain):
    path = tmp_path / "coffee.fountain"
    path.write_text(coffee_shop_fountain, encoding="utf-8")
    return path


@pytest.fixture
def broken_file(tmp_path):
    path = tmp_path / "house.fountain"
    path.write_text(UNPAIRED_DUAL_FOUNTAIN, encoding="utf-8")
    return path


class TestParseCommand:
    """Test ``scriptkit parse``."""

    def test_summary(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["parse", str(fountain_file)])
        assert result.exit_code == 0
        assert "The Last Cup" in result.output
        assert "EXCELLENT" in result.output

    def test_json(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["parse", str(fountain_file), "--json"])
        assert result.exit_code == 0
        data = load_json(result.output)
        assert data["metadata"]["title"] == "The Last Cup"
        assert data["elements"][0]["type"] == "scene_heading"

    def test_auto_fix(self, cli_runner, coffee_file):
        result = cli_runner.invoke(app, ["parse", str(coffee_file), "--auto-fix", "--json"])
        assert result.exit_code == 0
        data = load_json(result.output)
        contents = [e["content"] for e in data["elements"]]
        assert "JOHN" in contents
        assert data["autoFixedElements"]

    def test_suggests_auto_fix(self, cli_runner, coffee_file):
        result = cli_runner.invoke(app, ["parse", str(coffee_file)])
        assert result.exit_code == 0
        assert "--auto-fix" in result.output

    def test_strict_failure(self, cli_runner, broken_file):
        result = cli_runner.invoke(app, ["parse", str(broken_file), "--strict"])
        assert result.exit_code == 1
        assert "Script validation failed" in result.output

    def test_missing_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["parse", str(tmp_path / "none.fdx")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unsupported_json_error(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["parse", str(tmp_path / "a.docx"), "--json"])
        assert result.exit_code == 1
        data = load_json(result.output)
        assert data["success"] is False
        assert "Unsupported format: a.docx" in data["error"]

    def test_config_file(self, cli_runner, coffee_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(yaml.dump({"auto_fix": True}))
        result = cli_runner.invoke(
            app, ["parse", str(coffee_file), "--config", str(config), "--json"]
        )
        assert result.exit_code == 0
        assert load_json(result.output)["autoFixedElements"]


class TestValidateCommand:
    """Test ``scriptkit validate``."""

    def test_valid(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["validate", str(fountain_file)])
        assert result.exit_code == 0
        assert "Confidence: 100%" in result.output

    def test_invalid_exit_code(self, cli_runner, broken_file):
        result = cli_runner.invoke(app, ["validate", str(broken_file)])
        assert result.exit_code == 1
        assert "1 errors" in result.output

    def test_json(self, cli_runner, broken_file):
        result = cli_runner.invoke(app, ["validate", str(broken_file), "--json"])
        assert result.exit_code == 1
        data = load_json(result.output)
        assert data["valid"] is False
        assert data["summary"]["errors"] == 1


class TestPaginateCommand:
    """Test ``scriptkit paginate``."""

    def test_table(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["paginate", str(fountain_file)])
        assert result.exit_code == 0
        assert "1 pages" in result.output

    def test_json(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["paginate", str(fountain_file), "--json"])
        assert result.exit_code == 0
        data = load_json(result.output)
        assert data["pageCount"] == 1
        assert data["pages"][0]["pageNumber"] == 1

    def test_text(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["paginate", str(fountain_file), "--text"])
        assert result.exit_code == 0
        assert "1 INT. COFFEE SHOP - DAY" in result.output
        assert " " * 22 + "MARY" in result.output


class TestExportCommand:
    """Test ``scriptkit export``."""

    def test_fountain_to_stdout(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["export", str(fountain_file)])
        assert result.exit_code == 0
        assert result.output.startswith("Title: The Last Cup")

    def test_fdx_to_file(self, cli_runner, fountain_file, tmp_path):
        output = tmp_path / "out.fdx"
        result = cli_runner.invoke(
            app, ["export", str(fountain_file), "--to", "fdx", "-o", str(output)]
        )
        assert result.exit_code == 0
        assert output.read_bytes().startswith(b"<?xml")
        assert b"<FinalDraft" in output.read_bytes()

    def test_invalid_target(self, cli_runner, fountain_file):
        result = cli_runner.invoke(app, ["export", str(fountain_file), "--to", "pdf"])
        assert result.exit_code == 2


class TestVersion:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
