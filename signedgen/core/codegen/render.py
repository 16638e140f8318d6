"""
Document renderer — GeneratedDocument → unsigned text.

Puts the optional preamble, a leading doc comment (kind header, free
text, "generated from" note, signing placeholder) and the body together
in the comment syntax of the target file.  The output carries the
signing placeholder; SignatureCodec fills it in later, after merging
and formatting.
"""

from __future__ import annotations

import textwrap

from signedgen.core.codegen.assembler import TextAssembler
from signedgen.core.codegen.regions import RegionMarker
from signedgen.core.codegen.signature import signing_token
from signedgen.core.models.config import CodegenConfig, CommentStyle
from signedgen.core.models.document import FileKind, GeneratedDocument

GENERATED_HEADER = "This file is generated. Do not modify it manually!"
_DESIGNATORS = "BEGIN MANUAL SECTION and END MANUAL SECTION designators."
PARTIAL_HEADER = f"This file is partially generated. Only make modifications between {_DESIGNATORS}"

# Kept on one line when wrapping: a line reading "BEGIN MANUAL SECTION and"
# would otherwise scan as a region marker.
_GLUE = "\x00"


class DocumentRenderer:
    """Renders documents with the comment style of their target path."""

    def __init__(self, config: CodegenConfig | None = None) -> None:
        self.config = config or CodegenConfig()

    def style_for(self, document: GeneratedDocument) -> CommentStyle:
        return self.config.comment_style_for(document.path)

    def marker_for(self, document: GeneratedDocument) -> RegionMarker:
        return RegionMarker(self.style_for(document))

    def kind_of(self, document: GeneratedDocument) -> FileKind:
        """Explicit kind, or partially generated iff the body has regions."""
        if document.kind is not None:
            return document.kind
        if self.marker_for(document).contains_regions(document.body):
            return FileKind.PARTIAL
        return FileKind.GENERATED

    def doc_sections(self, document: GeneratedDocument) -> list[str]:
        kind = self.kind_of(document)
        sections: list[str] = []
        if document.signed:
            sections.append(PARTIAL_HEADER if kind == FileKind.PARTIAL else GENERATED_HEADER)
        if document.doc_comment:
            sections.append(document.doc_comment.strip("\n"))
        if document.generated_from:
            sections.append(f"To re-generate this file run {document.generated_from}")
        return sections

    def render(self, document: GeneratedDocument) -> str:
        """Unsigned text for ``document``, ending with exactly one newline."""
        style = self.style_for(document)
        out = TextAssembler(self.config, style)

        if document.preamble:
            out.append_line(document.preamble)

        sections = self.doc_sections(document)
        if sections:
            lines: list[str] = []
            width = max(self.config.max_line_width - len(style.doc_line), 20)
            for section in sections:
                if lines:
                    lines.append("")
                for raw in section.split("\n"):
                    lines.extend(_wrap(raw, width))
            if document.signed:
                if lines:
                    lines.append("")
                lines.append(signing_token(self.kind_of(document)))
            _append_comment(out, style, lines)

        out.append(document.body)
        return out.finalize().rstrip("\n") + "\n"


def _append_comment(out: TextAssembler, style: CommentStyle, lines: list[str]) -> None:
    if style.doc_open is not None:
        out.append_line(style.doc_open)
    for line in lines:
        out.append_line(f"{style.doc_line}{line}" if line else style.doc_line.rstrip())
    if style.doc_close is not None:
        out.append_line(style.doc_close)


def _wrap(text: str, width: int) -> list[str]:
    glued = text.replace(_DESIGNATORS, _DESIGNATORS.replace(" ", _GLUE))
    lines = textwrap.wrap(
        glued,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return [line.replace(_GLUE, " ") for line in lines] or [""]
