"""
Codegen configuration — the explicit settings value threaded into every
entry point (assembler, renderer, merge, writer).

Loaded from codegen.yml by ``signedgen.core.config.loader``; every field
has a default so an empty file (or no file) is valid.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentStyle(BaseModel):
    """How doc comments and manual-region markers are written for a file type.

    Attributes:
        name:          Style identifier (block, hash, slash).
        doc_open:      Line that opens a doc comment, or None for line comments.
        doc_line:      Prefix for every line inside the doc comment.
        doc_close:     Line that closes a doc comment, or None.
        marker_prefix: Text before ``BEGIN/END MANUAL SECTION`` on a marker line.
        marker_suffix: Text after it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    doc_open: str | None = None
    doc_line: str = "# "
    doc_close: str | None = None
    marker_prefix: str = "# "
    marker_suffix: str = ""


BLOCK_STYLE = CommentStyle(
    name="block",
    doc_open="/**",
    doc_line=" * ",
    doc_close=" */",
    marker_prefix="/* ",
    marker_suffix=" */",
)
HASH_STYLE = CommentStyle(name="hash", doc_line="# ", marker_prefix="# ")
SLASH_STYLE = CommentStyle(name="slash", doc_line="// ", marker_prefix="// ")

COMMENT_STYLES: dict[str, CommentStyle] = {
    s.name: s for s in (BLOCK_STYLE, HASH_STYLE, SLASH_STYLE)
}

# Extension (or bare filename) → style name
_DEFAULT_STYLE_BY_SUFFIX: dict[str, str] = {
    # C family
    ".c": "block",
    ".h": "block",
    ".cc": "block",
    ".cpp": "block",
    ".cs": "block",
    ".css": "block",
    ".go": "block",
    ".hack": "block",
    ".hh": "block",
    ".java": "block",
    ".js": "block",
    ".kt": "block",
    ".php": "block",
    ".rs": "block",
    ".scala": "block",
    ".swift": "block",
    ".ts": "block",
    # Hash-comment languages
    ".py": "hash",
    ".rb": "hash",
    ".sh": "hash",
    ".toml": "hash",
    ".yaml": "hash",
    ".yml": "hash",
    "Dockerfile": "hash",
    "Makefile": "hash",
}


class CodegenConfig(BaseModel):
    """Settings for one generation run.

    Attributes:
        indent_width:      Spaces per indentation level.
        max_line_width:    Soft width budget for ``append_with_suggested_breaks``.
        root_dir:          Base directory for relative document paths.
        formatter:         External formatter argv (``{path}`` is substituted),
                           or None to skip formatting.
        formatter_timeout: Seconds before the formatter is considered hung.
        comment_styles:    Extension → style name overrides.
    """

    model_config = ConfigDict(frozen=True)

    indent_width: int = Field(default=2, ge=0)
    max_line_width: int = Field(default=80, gt=0)
    root_dir: Path | None = None
    formatter: list[str] | None = None
    formatter_timeout: float = Field(default=60.0, gt=0)
    comment_styles: dict[str, str] = Field(default_factory=dict)

    @field_validator("comment_styles")
    @classmethod
    def _known_styles(cls, value: dict[str, str]) -> dict[str, str]:
        for suffix, style in value.items():
            if style not in COMMENT_STYLES:
                raise ValueError(
                    f"Unknown comment style '{style}' for '{suffix}' "
                    f"(expected one of: {', '.join(sorted(COMMENT_STYLES))})"
                )
        return value

    @field_validator("formatter")
    @classmethod
    def _non_empty_formatter(cls, value: list[str] | None) -> list[str] | None:
        if value is not None and not value:
            raise ValueError("formatter must be a non-empty command list")
        return value

    def resolve_path(self, path: Path) -> Path:
        """Anchor a relative document path at root_dir (if set)."""
        if path.is_absolute() or self.root_dir is None:
            return path
        return self.root_dir / path

    def comment_style_for(self, path: Path | str) -> CommentStyle:
        """Pick the comment style for a target path.

        Overrides win over built-in defaults; the full filename is tried
        before the extension.  Unknown types get the hash style.
        """
        p = Path(path)
        mapping = {**_DEFAULT_STYLE_BY_SUFFIX, **self.comment_styles}
        for key in (p.name, p.suffix.lower()):
            if key and key in mapping:
                return COMMENT_STYLES[mapping[key]]
        return HASH_STYLE
