"""
Tests for the project metadata in pyproject.toml.
"""

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


class TestProjectMetadata:
    """Tests for the [project] table."""

    def test_readme_is_a_user_guide(self):
        project = tomllib.loads((ROOT / "pyproject.toml").read_text())["project"]
        readme = ROOT / project["readme"]
        assert readme.name == "README.md"
        assert "signedgen generate" in readme.read_text()

    def test_console_script(self):
        project = tomllib.loads((ROOT / "pyproject.toml").read_text())["project"]
        assert project["scripts"]["signedgen"] == "signedgen.main:cli"
