"""
Formatter collaborator — reformat generated text before it is signed.

A formatter is any callable ``(text, path) -> text`` that raises
FormatterError on failure.  ``CommandFormatter`` pipes the text through
an external tool configured in codegen.yml, e.g.:

    formatter: ["black", "--quiet", "-"]
    formatter: ["hackfmt", "--stdin-filename", "{path}"]
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from signedgen.core.errors import FormatterError
from signedgen.core.models.config import CodegenConfig

logger = logging.getLogger(__name__)

Formatter = Callable[[str, Path], str]


class CommandFormatter:
    """Runs an external command with the text on stdin, reads stdout.

    Args:
        argv:    Command and arguments; ``{path}`` is replaced by the target path.
        timeout: Seconds before the command is considered hung.
        cwd:     Working directory for the command.
    """

    def __init__(
        self,
        argv: list[str],
        timeout: float = 60.0,
        cwd: Path | None = None,
    ) -> None:
        if not argv:
            raise ValueError("formatter command must not be empty")
        self.argv = list(argv)
        self.timeout = timeout
        self.cwd = cwd

    def command_for(self, path: Path) -> list[str]:
        return [arg.replace("{path}", str(path)) for arg in self.argv]

    def __call__(self, text: str, path: Path) -> str:
        args = self.command_for(path)
        logger.debug("Formatting %s with %s", path, args[0])
        try:
            proc = subprocess.run(
                args,
                input=text,
                cwd=str(self.cwd) if self.cwd else None,
                capture_output=True,
                text=True,
                errors="surrogateescape",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise FormatterError(f"Formatter not found: {args[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise FormatterError(
                f"Formatter {args[0]} timed out after {self.timeout}s on {path}"
            ) from e

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout).strip()
            raise FormatterError(
                f"Formatter {args[0]} failed on {path} (exit {proc.returncode}): {detail}"
            )
        return proc.stdout

    def __repr__(self) -> str:
        return f"CommandFormatter({self.argv!r})"


def formatter_from_config(config: CodegenConfig) -> CommandFormatter | None:
    """Build the configured formatter, or None when none is configured."""
    if not config.formatter:
        return None
    return CommandFormatter(
        config.formatter,
        timeout=config.formatter_timeout,
        cwd=config.root_dir,
    )
