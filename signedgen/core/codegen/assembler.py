"""
Text assembler — the buffer every generated fragment flows through.

Tracks indentation, whether the cursor sits at a fresh line start, and a
"function context" flag that reserves extra width for braces.  The
interesting part is ``append_with_suggested_breaks``: callers mark
candidate break points with a TAB and the assembler greedily packs the
segments into lines that fit the width budget.

A buffer is read out exactly once; callers own the text afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from signedgen.core.codegen.regions import RegionMarker
from signedgen.core.errors import DuplicateReadError, IndentUnderflowError
from signedgen.core.models.config import BLOCK_STYLE, CodegenConfig, CommentStyle

logger = logging.getLogger(__name__)

# Marks a suggested break point in append_with_suggested_breaks().
DELIMITER = "\t"

# Width kept free on every line for a continuation indent or an opening brace.
SAFETY_MARGIN = 2
# Extra width kept free inside function bodies.
FUNCTION_MARGIN = 2
CONTINUATION = "\n" + " " * SAFETY_MARGIN


def line_too_long(text: str, max_length: int) -> bool:
    """True if any line of ``text`` is longer than ``max_length``."""
    return any(len(line) > max_length for line in text.split("\n"))


class TextAssembler:
    """Indentation- and width-aware text buffer.

    Args:
        config: Indent width and max line width come from here.
        style:  Comment style used for manual region markers.
    """

    def __init__(
        self,
        config: CodegenConfig | None = None,
        style: CommentStyle = BLOCK_STYLE,
    ) -> None:
        self.config = config or CodegenConfig()
        self.style = style
        self._marker = RegionMarker(style)
        self._parts: list[str] = []
        self._at_line_start = True
        self._level = 0
        self._inside_function = False
        self._finalized = False

    # ── State ───────────────────────────────────────────────────

    @property
    def indentation_level(self) -> int:
        return self._level

    @property
    def at_line_start(self) -> bool:
        return self._at_line_start

    @property
    def inside_function(self) -> bool:
        return self._inside_function

    @property
    def finalized(self) -> bool:
        return self._finalized

    def indent(self) -> TextAssembler:
        self._level += 1
        return self

    def unindent(self) -> TextAssembler:
        if self._level < 1:
            raise IndentUnderflowError("Indentation level cannot go below zero.")
        self._level -= 1
        return self

    def set_inside_function(self) -> TextAssembler:
        """Mark the following code as a function body (narrower width budget)."""
        self._inside_function = True
        return self

    def max_code_length(self) -> int:
        """Max line width left after the current indentation."""
        return self.config.max_line_width - self.config.indent_width * self._level

    # ── Appending ───────────────────────────────────────────────

    def new_line(self) -> TextAssembler:
        self._parts.append("\n")
        self._at_line_start = True
        return self

    def ensure_new_line(self) -> TextAssembler:
        """Break the line unless the cursor already sits at a line start."""
        if not self._at_line_start:
            self.new_line()
        return self

    def ensure_empty_line(self) -> TextAssembler:
        """Leave the cursor on a fresh line right after an empty one."""
        return self.ensure_new_line().new_line()

    def append(self, text: str | None) -> TextAssembler:
        """Add text, handling embedded line breaks and indentation.

        Every complete line is emitted through ``append_line``; the fragment
        after the last break stays on the cursor line.  ``None`` is a no-op.
        """
        if text is None:
            return self

        *lines, last = text.split("\n")
        for line in lines:
            self.append_line(line)

        if self._at_line_start:
            if not last.strip():
                return self
            if self._level:
                self._parts.append(" " * (self.config.indent_width * self._level))
            self._at_line_start = False

        self._parts.append(last)
        return self

    def append_line(self, text: str | None = "") -> TextAssembler:
        return self.append(text).new_line()

    def append_if(self, condition: bool, text: str) -> TextAssembler:
        if condition:
            self.append(text)
        return self

    def append_line_if(self, condition: bool, text: str) -> TextAssembler:
        if condition:
            self.append_line(text)
        return self

    def append_lines(self, lines: Iterable[str]) -> TextAssembler:
        for line in lines:
            self.append_line(line)
        return self

    def append_with_suggested_breaks(self, text: str | None) -> TextAssembler:
        """Add text whose TAB characters mark places where it may be broken.

        Segments are joined with a space while they fit the width budget;
        when the next segment would overflow, the line is flushed and the
        segment starts a continuation line.  A segment longer than the
        budget on its own is emitted as-is.  Every TAB ends up as either a
        space or a line break.
        """
        if text is None:
            return self

        lines = text.split("\n")
        if len(lines) > 1:
            self.append_lines_with_suggested_breaks(lines[:-1])
            return self.append_with_suggested_breaks(lines[-1])

        max_length = self.max_code_length() - SAFETY_MARGIN
        if self._inside_function:
            max_length -= FUNCTION_MARGIN

        packed: list[str] = []
        for segment in text.split(DELIMITER):
            if not segment:
                continue
            if not packed:
                packed.append(segment)
                continue
            joined = f"{packed[-1]} {segment}"
            if len(joined) > max_length:
                packed.append(segment)
            else:
                packed[-1] = joined

        if any(len(line) > max_length for line in packed):
            logger.debug("Segment wider than %d columns left unbroken", max_length)
        return self.append(CONTINUATION.join(packed))

    def append_lines_with_suggested_breaks(self, lines: Iterable[str]) -> TextAssembler:
        for line in lines:
            self.append_with_suggested_breaks(line).new_line()
        return self

    # ── Manual regions ──────────────────────────────────────────

    def begin_manual_region(self, name: str) -> TextAssembler:
        """Open a manual region; its content survives regeneration."""
        return self.ensure_new_line().append_line(self._marker.begin_marker(name))

    def end_manual_region(self) -> TextAssembler:
        return self.ensure_new_line().append_line(self._marker.end_marker())

    # ── Output ──────────────────────────────────────────────────

    def clone(self) -> TextAssembler:
        """A new, empty assembler with the same settings and indentation."""
        other = TextAssembler(self.config, self.style)
        other._level = self._level
        if self._inside_function:
            other.set_inside_function()
        return other

    def finalize(self) -> str:
        """Return the accumulated text.  May only be called once."""
        if self._finalized:
            raise DuplicateReadError(
                "finalize() may only be called once on a given TextAssembler"
            )
        self._finalized = True
        text = "".join(self._parts)
        self._parts = []
        return text
