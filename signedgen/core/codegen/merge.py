"""
Merge engine — decide what to do with the file that is already on disk.

    old file              signature   action
    ───────────────────   ─────────   ─────────────────────────────────
    missing               —           fresh text, no merge
    present               absent      NoSignatureError (hand-written file)
    present               invalid     BadSignatureError / CorruptRegionError
    present, generated    valid       overwrite
    present, partial      valid       splice old manual regions into new text

Regions are matched purely by name.  Old regions with no slot in the new
text are dropped, reported through DroppedRegionWarning and listed in
the result; the merge still succeeds.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

from signedgen.core.codegen.regions import RegionMarker
from signedgen.core.codegen.signature import SignatureCodec
from signedgen.core.errors import (
    BadSignatureError,
    CorruptRegionError,
    DroppedRegionWarning,
    NoSignatureError,
)
from signedgen.core.models.document import FileKind, ManualRegion
from signedgen.core.models.results import MergeAction, MergeResult, SignatureVerdict

logger = logging.getLogger(__name__)


class MergeEngine:
    """Combines freshly generated text with the prior content of its file."""

    def __init__(
        self,
        marker: RegionMarker | None = None,
        codec: SignatureCodec | None = None,
    ) -> None:
        self.marker = marker or RegionMarker()
        self.codec = codec or SignatureCodec(self.marker)

    def merge(
        self,
        new_text: str,
        kind: FileKind,
        old_text: str | None,
        *,
        signed: bool = True,
        path: Path | str | None = None,
    ) -> MergeResult:
        """Merge ``new_text`` (unsigned) with ``old_text`` (on-disk, or None).

        Returns:
            MergeResult with the merged, still unsigned, text.

        Raises:
            NoSignatureError: old file exists but was never signed.
            BadSignatureError: old file's signature does not match.
            CorruptRegionError: old file's manual markers are unmatched.
        """
        # New text must be well-formed whatever happens to the old one.
        new_regions = self.marker.extract_all(new_text)

        if old_text is None:
            logger.debug("%s: no existing file", path)
            action = MergeAction.FRESH if signed else MergeAction.UNSIGNED
            return MergeResult(text=new_text, kind=kind, action=action)

        if not signed:
            return self._merge_unsigned(new_text, kind, old_text, new_regions, path)

        check = self.codec.verify(old_text)
        if check.verdict == SignatureVerdict.ABSENT:
            raise NoSignatureError(
                path,
                "file exists but carries no signature; refusing to overwrite "
                "content that was not generated",
            )
        if check.verdict == SignatureVerdict.INVALID:
            if check.corrupt_regions:
                raise CorruptRegionError(path, check.reason)
            raise BadSignatureError(
                path,
                f"{check.reason}; the file was edited outside manual sections "
                "or is corrupt, refusing to overwrite",
            )

        if check.kind == FileKind.GENERATED:
            logger.debug("%s: valid generated file, overwriting", path)
            return MergeResult(text=new_text, kind=kind, action=MergeAction.OVERWRITE)

        old_regions = self.marker.extract_all(old_text)
        return self._splice(new_text, kind, old_regions, new_regions, MergeAction.MERGE, path)

    # ── Internals ───────────────────────────────────────────────

    def _merge_unsigned(
        self,
        new_text: str,
        kind: FileKind,
        old_text: str,
        new_regions: dict[str, str],
        path: Path | str | None,
    ) -> MergeResult:
        """Unsigned documents cannot be verified: carry regions over if possible."""
        if not new_regions:
            return MergeResult(text=new_text, kind=kind, action=MergeAction.UNSIGNED)
        try:
            old_regions = self.marker.extract_all(old_text)
        except CorruptRegionError as e:
            logger.warning("%s: ignoring unreadable manual regions (%s)", path, e.reason)
            return MergeResult(text=new_text, kind=kind, action=MergeAction.UNSIGNED)
        return self._splice(
            new_text, kind, old_regions, new_regions, MergeAction.UNSIGNED, path
        )

    def _splice(
        self,
        new_text: str,
        kind: FileKind,
        old_regions: dict[str, str],
        new_regions: dict[str, str],
        action: MergeAction,
        path: Path | str | None,
    ) -> MergeResult:
        preserved = [name for name in old_regions if name in new_regions]
        dropped = [
            ManualRegion(name=name, content=content)
            for name, content in old_regions.items()
            if name not in new_regions
        ]

        text = self.marker.splice(new_text, {name: old_regions[name] for name in preserved})

        if dropped:
            names = [r.name for r in dropped]
            logger.warning(
                "%s: dropping manual region(s) with no slot in the new generation: %s",
                path,
                ", ".join(names),
            )
            warnings.warn(DroppedRegionWarning(path, names), stacklevel=3)

        logger.debug("%s: preserved %d manual region(s)", path, len(preserved))
        return MergeResult(
            text=text,
            kind=kind,
            action=action,
            preserved=preserved,
            dropped=dropped,
        )
