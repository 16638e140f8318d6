"""
Configuration loader — reads codegen.yml into a CodegenConfig.

The file is optional: with no codegen.yml every setting takes its
default.  When present it is parsed with PyYAML and validated by the
Pydantic model; relative ``root_dir`` values are anchored at the
directory holding the file, not at the cwd.

Both layouts are accepted:

    max_line_width: 100            codegen:
    indent_width: 4                  max_line_width: 100
                                     indent_width: 4
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from signedgen.core.errors import ConfigError
from signedgen.core.models.config import CodegenConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "codegen.yml"
SECTION_KEY = "codegen"


def find_config_file(start_dir: Path | None = None, *, max_depth: int = 20) -> Path | None:
    """Nearest codegen.yml at or above ``start_dir`` (default: cwd), or None."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in [start, *start.parents][:max_depth]:
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def _read_section(path: Path) -> dict[str, Any]:
    """Parse ``path`` and return the settings mapping (unwrapped)."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    if SECTION_KEY not in data:
        return dict(data)

    section = data[SECTION_KEY]
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Expected '{SECTION_KEY}' to be a mapping in {path}")
    return dict(section)


def load_config(path: Path | None = None, *, search: bool = True) -> CodegenConfig:
    """Load and validate codegen configuration.

    Args:
        path: Explicit path to codegen.yml.  If None and ``search`` is set,
            searches upward from the cwd.
        search: Whether to search when no path is given.

    Returns:
        Validated CodegenConfig (defaults if no file was found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_config_file()
    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return CodegenConfig()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading codegen config from %s", path)
    settings = _read_section(path)

    root_dir = settings.get("root_dir")
    if isinstance(root_dir, str) and not Path(root_dir).is_absolute():
        settings["root_dir"] = (path.parent / root_dir).resolve()

    try:
        config = CodegenConfig.model_validate(settings)
    except ValidationError as e:
        raise ConfigError(f"Invalid codegen configuration in {path}: {e}") from e

    logger.info(
        "Loaded %s (width=%d, indent=%d, formatter=%s)",
        path,
        config.max_line_width,
        config.indent_width,
        config.formatter[0] if config.formatter else "none",
    )
    return config
