"""
File writer — render, merge, format, sign, and atomically persist documents.

Pipeline for one document:

    render (placeholder token) → merge with on-disk text → format → sign
    → compare with on-disk bytes → write to temp file, rename over target

Merge and signature errors are raised before anything touches the disk.
Writes that would not change a single byte are skipped so modification
times (and whatever rebuilds off them) stay put.
"""

from __future__ import annotations

import logging
import os
import secrets
import shutil
from collections.abc import Iterable
from pathlib import Path

from signedgen.core.codegen.merge import MergeEngine
from signedgen.core.codegen.render import DocumentRenderer
from signedgen.core.codegen.signature import ENCODING_ERRORS, SignatureCodec
from signedgen.core.errors import CodegenError
from signedgen.core.models.config import CodegenConfig
from signedgen.core.models.document import GeneratedDocument
from signedgen.core.models.results import BatchReport, SaveOutcome, SaveResult
from signedgen.core.services.formatter import Formatter, formatter_from_config

logger = logging.getLogger(__name__)

ENCODING = "utf-8"

# Temp-file attempts before giving up on a free name.
_TEMP_ATTEMPTS = 100


def read_existing(path: Path) -> str | None:
    """Read the current file content; None if there is no file.

    Bytes that are not valid UTF-8 are kept as lone surrogates, so a
    hand-written file in another encoding reads as unsigned text and
    manual regions survive byte for byte when written back.
    """
    if not path.is_file():
        return None
    return path.read_bytes().decode(ENCODING, ENCODING_ERRORS)


def encode_text(text: str) -> bytes:
    """Inverse of ``read_existing``'s decoding."""
    return text.encode(ENCODING, ENCODING_ERRORS)


def _create_temp(path: Path) -> tuple[int, Path]:
    """Open a fresh temp file next to ``path``.

    Created with mode 0o666 so the kernel applies the process umask,
    exactly as for a plain ``open(path, "w")``.
    """
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    for _ in range(_TEMP_ATTEMPTS):
        tmp = path.with_name(f".{path.name}.{secrets.token_hex(4)}.tmp")
        try:
            return os.open(tmp, flags, 0o666), tmp
        except FileExistsError:
            continue
    raise FileExistsError(f"No free temp file name next to {path}")


def write_atomic(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` (write to temp file, then rename).

    Either the whole new content lands or the original file is left as it
    was.  The mode of an existing file is kept; a new file gets the mode
    the umask allows.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp = _create_temp(path)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if path.exists():
            shutil.copymode(path, tmp)
        tmp.replace(path)
        logger.debug("Wrote %s (%d bytes)", path, len(data))
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


class FileWriter:
    """Saves GeneratedDocuments to disk without clobbering manual edits.

    Args:
        config:    Codegen settings (root dir, widths, comment styles).
        formatter: Optional ``(text, path) -> text`` callable.  Defaults to
                   the formatter command in ``config``, if any.
    """

    def __init__(
        self,
        config: CodegenConfig | None = None,
        formatter: Formatter | None = None,
    ) -> None:
        self.config = config or CodegenConfig()
        self.renderer = DocumentRenderer(self.config)
        self.formatter = formatter if formatter is not None else formatter_from_config(self.config)

    def target_path(self, document: GeneratedDocument) -> Path:
        return self.config.resolve_path(document.path)

    def build(self, document: GeneratedDocument) -> tuple[str, SaveResult]:
        """Produce the final text for ``document`` without writing it.

        Returns:
            (final text, SaveResult describing what a save would do)
        """
        path = self.target_path(document)
        old_text = read_existing(path)

        marker = self.renderer.marker_for(document)
        codec = SignatureCodec(marker)
        kind = self.renderer.kind_of(document)

        merged = MergeEngine(marker, codec).merge(
            self.renderer.render(document),
            kind,
            old_text,
            signed=document.signed,
            path=path,
        )

        text = merged.text
        if self.formatter is not None:
            text = self.formatter(text, path)
        if document.signed:
            text = codec.sign(kind, text)

        if old_text is None:
            outcome = SaveOutcome.CREATED
        elif old_text == text:
            outcome = SaveOutcome.UNCHANGED
        else:
            outcome = SaveOutcome.UPDATED

        result = SaveResult(
            path=path,
            outcome=outcome,
            action=merged.action,
            kind=kind,
            preserved=merged.preserved,
            dropped=merged.dropped,
        )
        return text, result

    def save(self, document: GeneratedDocument) -> SaveResult:
        """Merge ``document`` with its file on disk and write it if it changed.

        Raises:
            NoSignatureError, BadSignatureError, CorruptRegionError: the
                existing file cannot be safely replaced; nothing is written.
            FormatterError: the formatter failed; nothing is written.
            OSError: reading or writing the file failed.
        """
        text, result = self.build(document)
        if result.outcome == SaveOutcome.UNCHANGED:
            logger.debug("%s unchanged, skipping write", result.path)
            return result

        write_atomic(result.path, encode_text(text))
        logger.info("%s %s (%s)", result.outcome.value.capitalize(), result.path, result.action)
        return result

    def check(self, document: GeneratedDocument) -> SaveResult:
        """Report what ``save`` would do, without writing."""
        _text, result = self.build(document)
        return result.model_copy(update={"check_only": True})

    def save_all(self, documents: Iterable[GeneratedDocument]) -> BatchReport:
        """Save each document independently.

        A failing document is recorded in the report and does not stop
        the others.
        """
        report = BatchReport()
        for document in documents:
            path = self.target_path(document)
            try:
                report.results.append(self.save(document))
            except (CodegenError, OSError, UnicodeError) as e:
                logger.error("Failed to save %s: %s", path, e)
                report.errors[str(path)] = str(e)
        return report
