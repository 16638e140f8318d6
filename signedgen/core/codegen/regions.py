"""
Manual regions — named islands of hand-written text inside generated files.

A region is delimited by two marker lines written in the file's comment
syntax, e.g. for C-like files:

    /* BEGIN MANUAL SECTION CountryId */
    ...hand-written lines...
    /* END MANUAL SECTION */

Marker lines are matched after stripping surrounding whitespace, so
generated code may indent them freely.  Marker lines are never part of a
region's content.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping

from signedgen.core.errors import CorruptRegionError, InvalidRegionNameError
from signedgen.core.models.config import BLOCK_STYLE, COMMENT_STYLES, CommentStyle
from signedgen.core.models.document import ManualRegion

logger = logging.getLogger(__name__)

BEGIN_LABEL = "BEGIN MANUAL SECTION"
END_LABEL = "END MANUAL SECTION"

# No whitespace, no comment terminators: the name can never run into the
# marker suffix or be mistaken for an end marker.
_NAME_RE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.:\-]*")


def validate_region_name(name: str) -> str:
    """Return ``name`` unchanged, or raise InvalidRegionNameError."""
    if not isinstance(name, str) or not _NAME_RE.fullmatch(name):
        raise InvalidRegionNameError(
            f"Invalid manual region name {name!r}: use letters, digits, "
            "'_', '.', ':' or '-' (first char a letter, digit or '_')"
        )
    return name


class RegionMarker:
    """Writes and scans manual-region marker lines for one comment style."""

    def __init__(self, style: CommentStyle = BLOCK_STYLE) -> None:
        self.style = style
        prefix = re.escape(style.marker_prefix.strip())
        suffix = re.escape(style.marker_suffix.strip())
        self._begin_re = re.compile(
            rf"{prefix}\s*{BEGIN_LABEL}\s+(\S+?)\s*{suffix}"
        )
        self._end_re = re.compile(rf"{prefix}\s*{END_LABEL}\s*{suffix}")

    # ── Marker text ─────────────────────────────────────────────

    def begin_marker(self, name: str) -> str:
        validate_region_name(name)
        return f"{self.style.marker_prefix}{BEGIN_LABEL} {name}{self.style.marker_suffix}"

    def end_marker(self) -> str:
        return f"{self.style.marker_prefix}{END_LABEL}{self.style.marker_suffix}"

    def begin_name(self, line: str) -> str | None:
        """Region name if ``line`` is a begin marker, else None."""
        match = self._begin_re.fullmatch(line.strip())
        return match.group(1) if match else None

    def is_end(self, line: str) -> bool:
        return self._end_re.fullmatch(line.strip()) is not None

    # ── Scanning ────────────────────────────────────────────────

    def iter_sections(self, text: str) -> Iterator[tuple[str | None, str]]:
        """Split ``text`` into alternating generated / manual chunks.

        Yields ``(None, chunk)`` for generated text (marker lines included)
        and ``(name, content)`` for each manual region.  Concatenating every
        chunk reproduces ``text`` exactly.

        Raises:
            CorruptRegionError: unmatched begin, stray end, or a name used
                twice in the same text.
        """
        seen: set[str] = set()
        current: str | None = None
        chunk: list[str] = []

        for lineno, line in enumerate(text.splitlines(keepends=True), start=1):
            name = self.begin_name(line)
            if current is None:
                if self.is_end(line):
                    raise CorruptRegionError(
                        None, f"line {lineno}: {END_LABEL} without a matching begin"
                    )
                chunk.append(line)
                if name is None:
                    continue
                if name in seen:
                    raise CorruptRegionError(
                        None, f"line {lineno}: duplicate manual region '{name}'"
                    )
                seen.add(name)
                yield None, "".join(chunk)
                chunk = []
                current = name
            else:
                if name is not None:
                    raise CorruptRegionError(
                        None,
                        f"line {lineno}: region '{name}' begins before "
                        f"region '{current}' ends",
                    )
                if not self.is_end(line):
                    chunk.append(line)
                    continue
                yield current, "".join(chunk)
                chunk = [line]
                current = None

        if current is not None:
            raise CorruptRegionError(
                None, f"manual region '{current}' is never closed"
            )
        yield None, "".join(chunk)

    def extract_all(self, text: str) -> dict[str, str]:
        """Map region name → content, in order of appearance."""
        return {
            name: content
            for name, content in self.iter_sections(text)
            if name is not None
        }

    def regions(self, text: str) -> list[ManualRegion]:
        return [
            ManualRegion(name=name, content=content)
            for name, content in self.extract_all(text).items()
        ]

    def contains_regions(self, text: str) -> bool:
        """True if any line of ``text`` is a begin marker (no validation)."""
        return any(self.begin_name(line) for line in text.splitlines())

    # ── Rewriting ───────────────────────────────────────────────

    def strip_content(self, text: str) -> str:
        """Return ``text`` with every region emptied; marker lines are kept."""
        return "".join(
            chunk for name, chunk in self.iter_sections(text) if name is None
        )

    def splice(self, text: str, regions: Mapping[str, str]) -> str:
        """Replace the content of each region of ``text`` found in ``regions``.

        Regions of ``text`` without an entry keep their generated content.
        """
        parts: list[str] = []
        for name, chunk in self.iter_sections(text):
            if name is not None and name in regions:
                logger.debug("Preserving manual region '%s'", name)
                parts.append(regions[name])
            else:
                parts.append(chunk)
        return "".join(parts)


def detect_marker(text: str) -> RegionMarker:
    """Marker for the comment style the regions of ``text`` are written in.

    Styles are tried in ``COMMENT_STYLES`` order; the first one whose
    markers are present and scan cleanly wins.  If every style that is
    present is corrupt, the first of those is returned so scanning
    reports the corruption.  Text without regions gets the block style.
    """
    corrupt: RegionMarker | None = None
    for style in COMMENT_STYLES.values():
        marker = RegionMarker(style)
        if not marker.contains_regions(text):
            continue
        try:
            marker.extract_all(text)
        except CorruptRegionError:
            corrupt = corrupt or marker
            continue
        return marker
    return corrupt or RegionMarker()
