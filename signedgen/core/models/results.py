"""
Result models — verdicts and outcomes reported by the codegen core.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

from signedgen.core.models.document import FileKind, ManualRegion


class SignatureVerdict(StrEnum):
    """Three-way outcome of verifying a signature token."""

    VALID = "valid"
    INVALID = "invalid"
    ABSENT = "absent"


class SignatureCheck(BaseModel):
    """What ``SignatureCodec.verify`` found in a text."""

    verdict: SignatureVerdict
    kind: FileKind | None = None
    embedded: str | None = None
    computed: str | None = None
    reason: str = ""
    corrupt_regions: bool = False

    @property
    def is_valid(self) -> bool:
        return self.verdict == SignatureVerdict.VALID


class MergeAction(StrEnum):
    """How the new text was derived from the old file."""

    FRESH = "fresh"            # no old file
    OVERWRITE = "overwrite"    # old file fully generated, replaced
    MERGE = "merge"            # manual regions spliced in
    UNSIGNED = "unsigned"      # unsigned document, no verification


class MergeResult(BaseModel):
    """Merged, not yet formatted or signed, text for one document."""

    text: str
    kind: FileKind
    action: MergeAction
    preserved: list[str] = Field(default_factory=list)
    dropped: list[ManualRegion] = Field(default_factory=list)


class SaveOutcome(StrEnum):
    """What happened on disk."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class SaveResult(BaseModel):
    """Outcome of saving (or checking) one document."""

    path: Path
    outcome: SaveOutcome
    action: MergeAction
    kind: FileKind
    preserved: list[str] = Field(default_factory=list)
    dropped: list[ManualRegion] = Field(default_factory=list)
    check_only: bool = False

    @property
    def changed(self) -> bool:
        return self.outcome != SaveOutcome.UNCHANGED


class BatchReport(BaseModel):
    """Per-document results of ``FileWriter.save_all``.

    One document failing never aborts the others; its error message is
    recorded under its path.
    """

    results: list[SaveResult] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "results": [r.model_dump(mode="json") for r in self.results],
            "errors": dict(self.errors),
        }
