"""
Document models — what one generation pass produces.

A GeneratedDocument is built fresh on every run and never mutated;
regeneration builds a new one and merges it with the on-disk text.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class FileKind(StrEnum):
    """Which signature token a document carries."""

    GENERATED = "generated"
    PARTIAL = "partially-generated"


class ManualRegion(BaseModel):
    """A named span between a begin-marker line and an end-marker line.

    ``content`` is the exact text between the two marker lines; the marker
    lines themselves are never part of it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    content: str = ""


class GeneratedDocument(BaseModel):
    """The full text product of one generation pass for one file.

    Attributes:
        path:           Target file path (relative paths anchor at config.root_dir).
        body:           Generated text that follows the doc comment.
        signed:         Whether a signature token is embedded.
        kind:           Fully or partially generated.  None → inferred from
                        whether the body contains manual region markers.
        doc_comment:    Optional free text for the leading doc comment.
        generated_from: Optional command that regenerates the file.
        preamble:       Optional first line (shebang, ``<?hh``, ...).
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    body: str
    signed: bool = True
    kind: FileKind | None = None
    doc_comment: str | None = None
    generated_from: str | None = None
    preamble: str | None = None
