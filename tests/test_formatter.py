"""
Tests for CommandFormatter — external formatter subprocesses.
"""

import sys
from pathlib import Path

import pytest

from signedgen.core.errors import FormatterError
from signedgen.core.models import CodegenConfig
from signedgen.core.services.formatter import CommandFormatter, formatter_from_config


def script(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestCommandFormatter:
    """Tests for running an external formatter command."""

    def test_pipes_text_through(self, tmp_path):
        fmt = CommandFormatter(script("import sys; sys.stdout.write(sys.stdin.read().upper())"))
        assert fmt("abc\n", tmp_path / "a.py") == "ABC\n"

    def test_path_placeholder(self):
        fmt = CommandFormatter(["fmt", "--stdin-filename", "{path}"])
        assert fmt.command_for(Path("/x/y.php")) == ["fmt", "--stdin-filename", "/x/y.php"]

    def test_path_reaches_the_command(self, tmp_path):
        fmt = CommandFormatter(script("import sys; sys.stdout.write(sys.argv[1])") + ["{path}"])
        assert fmt("", tmp_path / "a.py") == str(tmp_path / "a.py")

    def test_non_zero_exit(self, tmp_path):
        fmt = CommandFormatter(script("import sys; sys.stderr.write('bad syntax'); sys.exit(3)"))
        with pytest.raises(FormatterError, match="exit 3.*bad syntax"):
            fmt("x", tmp_path / "a.py")

    def test_missing_binary(self, tmp_path):
        fmt = CommandFormatter(["signedgen-no-such-formatter"])
        with pytest.raises(FormatterError, match="not found"):
            fmt("x", tmp_path / "a.py")

    def test_timeout(self, tmp_path):
        fmt = CommandFormatter(script("import time; time.sleep(5)"), timeout=0.2)
        with pytest.raises(FormatterError, match="timed out"):
            fmt("x", tmp_path / "a.py")

    def test_empty_command_rejected(self):
        with pytest.raises(ValueError):
            CommandFormatter([])


class TestFromConfig:
    """Tests for building the formatter from config."""

    def test_none_without_command(self):
        assert formatter_from_config(CodegenConfig()) is None

    def test_built_from_config(self, tmp_path):
        config = CodegenConfig(formatter=["black", "-"], formatter_timeout=5, root_dir=tmp_path)
        fmt = formatter_from_config(config)
        assert fmt.argv == ["black", "-"]
        assert fmt.timeout == 5
        assert fmt.cwd == tmp_path
