"""
Tests for CLI commands — verify, regions, generate, and global options.
"""

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from signedgen.main import cli


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch, restore_logging):
    """Run every command from an empty directory (no codegen.yml above it)."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        name: User
        description: Rows of the user table.
        path: user.py
        fields:
          - name: first_name
          - name: country_id
            type: int
            optional: true
            manual: true
    """)
    path = tmp_path / "user.yml"
    path.write_text(content)
    return path


def run(*args: str):
    return CliRunner().invoke(cli, list(args))


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        result = run("--help")
        assert result.exit_code == 0
        assert "regenerate source files" in result.output
        for command in ("verify", "regions", "generate"):
            assert command in result.output

    def test_version(self):
        result = run("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_config_file(self, tmp_path: Path):
        result = run("--config", str(tmp_path / "missing.yml"), "verify", "x.py")
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_creates_file(self, tmp_path: Path, schema_file: Path):
        result = run("generate", str(schema_file))
        assert result.exit_code == 0, result.output
        assert "created" in result.output
        assert (tmp_path / "user.py").is_file()

    def test_second_run_unchanged(self, schema_file: Path):
        run("generate", str(schema_file))
        result = run("generate", str(schema_file))
        assert result.exit_code == 0
        assert "unchanged" in result.output
        assert "Preserved: country_id" in result.output

    def test_out_option(self, tmp_path: Path, schema_file: Path):
        target = tmp_path / "pkg" / "models.py"
        result = run("generate", str(schema_file), "--out", str(target))
        assert result.exit_code == 0
        assert target.is_file()

    def test_check_on_missing_file(self, tmp_path: Path, schema_file: Path):
        result = run("generate", str(schema_file), "--check")
        assert result.exit_code == 1
        assert "would be created" in result.output
        assert not (tmp_path / "user.py").exists()

    def test_check_up_to_date(self, schema_file: Path):
        run("generate", str(schema_file))
        assert run("generate", str(schema_file), "--check").exit_code == 0

    def test_json_output(self, tmp_path: Path, schema_file: Path):
        result = run("generate", str(schema_file), "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["outcome"] == "created"
        assert data["kind"] == "partially-generated"
        assert data["path"] == str(tmp_path / "user.py")

    def test_refuses_hand_written_file(self, tmp_path: Path, schema_file: Path):
        (tmp_path / "user.py").write_text("class User: pass\n")
        result = run("generate", str(schema_file))
        assert result.exit_code == 1
        assert "no signature" in result.output
        assert (tmp_path / "user.py").read_text() == "class User: pass\n"

    def test_reports_dropped_region(self, tmp_path: Path, schema_file: Path):
        run("generate", str(schema_file))
        schema_file.write_text("name: User\npath: user.py\nfields:\n  - name: first_name\n")
        result = run("generate", str(schema_file))
        assert result.exit_code == 0
        assert "Dropped manual region 'country_id'" in result.output

    def test_invalid_schema(self, tmp_path: Path):
        bad = tmp_path / "bad.yml"
        bad.write_text("fields: []\n")
        result = run("generate", str(bad))
        assert result.exit_code == 1
        assert "Invalid record schema" in result.output


class TestVerifyCommand:
    """Tests for the verify command."""

    def test_valid(self, tmp_path: Path, schema_file: Path):
        run("generate", str(schema_file))
        result = run("verify", str(tmp_path / "user.py"))
        assert result.exit_code == 0
        assert "valid (partially-generated)" in result.output

    def test_invalid(self, tmp_path: Path, schema_file: Path):
        run("generate", str(schema_file))
        target = tmp_path / "user.py"
        target.write_text(target.read_text().replace("class User", "class Person"))
        result = run("verify", str(target))
        assert result.exit_code == 1
        assert "invalid" in result.output

    def test_not_signed(self, tmp_path: Path):
        target = tmp_path / "plain.py"
        target.write_text("x = 1\n")
        assert run("verify", str(target)).exit_code == 0
        strict = run("verify", "--strict", str(target))
        assert strict.exit_code == 1
        assert "not signed" in strict.output

    def test_missing_file(self, tmp_path: Path):
        result = run("verify", str(tmp_path / "nope.py"))
        assert result.exit_code == 1
        assert "file not found" in result.output

    def test_json(self, tmp_path: Path, schema_file: Path):
        run("generate", str(schema_file))
        plain = tmp_path / "plain.py"
        plain.write_text("x = 1\n")
        result = run("verify", "--json", str(tmp_path / "user.py"), str(plain))
        data = json.loads(result.output)
        assert [entry["verdict"] for entry in data] == ["valid", "absent"]

    def test_undecodable_file_is_not_signed(self, tmp_path: Path):
        target = tmp_path / "latin1.py"
        target.write_bytes(b"name = 'caf\xe9'\n")
        assert run("verify", str(target)).exit_code == 0
        strict = run("verify", "--strict", str(target))
        assert strict.exit_code == 1
        assert "not signed" in strict.output


class TestRegionsCommand:
    """Tests for the regions command."""

    def test_lists_regions(self, tmp_path: Path, schema_file: Path):
        run("generate", str(schema_file))
        result = run("regions", str(tmp_path / "user.py"))
        assert result.exit_code == 0
        assert "country_id (2 lines)" in result.output

    def test_json(self, tmp_path: Path, schema_file: Path):
        run("generate", str(schema_file))
        result = run("regions", "--json", str(tmp_path / "user.py"))
        data = json.loads(result.output)
        assert list(data) == ["country_id"]
        assert "You may manually change" in data["country_id"]

    def test_no_regions(self, tmp_path: Path):
        target = tmp_path / "plain.py"
        target.write_text("x = 1\n")
        result = run("regions", str(target))
        assert result.exit_code == 0
        assert "No manual regions" in result.output

    def test_corrupt_markers(self, tmp_path: Path):
        target = tmp_path / "broken.py"
        target.write_text("# BEGIN MANUAL SECTION a\nx = 1\n")
        result = run("regions", str(target))
        assert result.exit_code == 1
        assert "never closed" in result.output

    def test_undecodable_region_content(self, tmp_path: Path):
        target = tmp_path / "latin1.py"
        target.write_bytes(
            b"# BEGIN MANUAL SECTION body\nname = 'caf\xe9'\n# END MANUAL SECTION\n"
        )
        result = run("regions", str(target))
        assert result.exit_code == 0
        assert "body (1 line)" in result.output
