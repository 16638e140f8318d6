"""
Error kinds raised by the codegen core.

Every merge/signature error aborts the save of one document before the
filesystem is touched.  Nothing here is retried: each one is a
data-integrity decision that needs a human.
"""

from __future__ import annotations

from pathlib import Path


class CodegenError(Exception):
    """Base class for every error raised by signedgen."""


# ── Text assembly ───────────────────────────────────────────────


class AssemblerError(CodegenError):
    """Misuse of a TextAssembler (programming error)."""


class DuplicateReadError(AssemblerError):
    """A buffer was finalized more than once."""


class IndentUnderflowError(AssemblerError):
    """unindent() was called at indentation level zero."""


# ── Manual regions ──────────────────────────────────────────────


class RegionError(CodegenError):
    """Problem with manual region markers."""


class InvalidRegionNameError(RegionError, ValueError):
    """A region name contains characters that would make markers ambiguous."""


# ── Signatures ──────────────────────────────────────────────────


class SignatureError(CodegenError):
    """Problem signing or verifying a document."""


class _FileSignatureError(SignatureError):
    """Signature problem tied to an on-disk file."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = f"{self.path}: " if self.path is not None else ""
        super().__init__(f"{where}{reason}")


class NoSignatureError(_FileSignatureError):
    """The existing file was never signed — refuse to clobber it."""


class BadSignatureError(_FileSignatureError):
    """The existing file has a signature that does not match its content."""


class CorruptRegionError(BadSignatureError, RegionError):
    """Unmatched, stray or duplicated manual region markers."""


# ── Collaborators ───────────────────────────────────────────────


class FormatterError(CodegenError):
    """The external formatter failed."""


class ConfigError(CodegenError):
    """Raised when codegen configuration is invalid or unreadable."""


# ── Warnings ────────────────────────────────────────────────────


class DroppedRegionWarning(UserWarning):
    """A manual region in the old file has no slot in the new generation.

    The write still happens; the dropped content is reported so the
    caller can recover it.
    """

    def __init__(self, path: Path | str | None, names: list[str]) -> None:
        self.path = Path(path) if path is not None else None
        self.names = list(names)
        where = f"{self.path}: " if self.path is not None else ""
        super().__init__(
            f"{where}dropped manual region(s) with no slot in the new "
            f"generation: {', '.join(self.names)}"
        )
