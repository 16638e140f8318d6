"""
Signed source — embed and verify a content hash inside generated text.

The token lives in the leading doc comment:

    @generated SignedSource<<0123456789abcdef0123456789abcdef>>
    @partially-generated SignedSource<<0123456789abcdef0123456789abcdef>>

Signing is a self-referential checksum: the document is rendered with a
placeholder of the same length as a real hash, the whole text is hashed,
and the hash is spliced into the placeholder's byte range.  Verifying
puts the placeholder back and hashes again.

For partially generated documents the content of every manual region is
removed before hashing, so edits inside regions keep the signature valid
while edits anywhere else break it.
"""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path

from signedgen.core.codegen.regions import RegionMarker, detect_marker
from signedgen.core.errors import CorruptRegionError, SignatureError
from signedgen.core.models.config import CodegenConfig
from signedgen.core.models.document import FileKind
from signedgen.core.models.results import SignatureCheck, SignatureVerdict

logger = logging.getLogger(__name__)

HASH_LENGTH = 32  # md5 hex digest
PLACEHOLDER = "*" * HASH_LENGTH

# Bytes that are not valid UTF-8 (hand-written files) map to lone
# surrogates on read and back to the same bytes on write and hash.
ENCODING_ERRORS = "surrogateescape"

_TOKEN_RE = re.compile(
    r"@(generated|partially-generated) SignedSource<<([0-9a-f*]{%d})>>" % HASH_LENGTH
)


def signing_token(kind: FileKind) -> str:
    """The unsigned token the renderer places in the doc comment."""
    return f"@{kind} SignedSource<<{PLACEHOLDER}>>"


def _signed_token(kind: FileKind, digest: str) -> str:
    return f"@{kind} SignedSource<<{digest}>>"


class SignatureCodec:
    """Signs and verifies text.

    Args:
        marker: Region marker for the file's comment style.  When omitted,
                the style is detected from the markers present in each
                text (see ``detect_marker``).
    """

    def __init__(self, marker: RegionMarker | None = None) -> None:
        self.marker = marker

    @classmethod
    def for_path(cls, path: Path | str, config: CodegenConfig | None = None) -> SignatureCodec:
        """Codec using the comment style ``config`` assigns to ``path``."""
        config = config or CodegenConfig()
        return cls(RegionMarker(config.comment_style_for(path)))

    def marker_for(self, text: str) -> RegionMarker:
        return self.marker or detect_marker(text)

    def digest(self, kind: FileKind, text: str) -> str:
        """Hash ``text`` (which must carry the placeholder, not a real hash)."""
        if kind == FileKind.PARTIAL:
            text = self.marker_for(text).strip_content(text)
        return hashlib.md5(text.encode("utf-8", ENCODING_ERRORS)).hexdigest()

    def sign(self, kind: FileKind, text: str) -> str:
        """Fill the signing placeholder of ``kind`` in ``text``.

        Raises:
            SignatureError: the placeholder is missing or appears more than once.
            CorruptRegionError: a partially generated text has broken markers.
        """
        token = signing_token(kind)
        count = text.count(token)
        if count != 1:
            raise SignatureError(
                f"Expected exactly one '{token}' in the text to sign, found {count}"
            )
        digest = self.digest(kind, text)
        logger.debug("Signed %s text (%d chars): %s", kind, len(text), digest)
        return text.replace(token, _signed_token(kind, digest), 1)

    def verify(self, text: str) -> SignatureCheck:
        """Check the signature token in ``text``.

        Returns a three-way verdict: ``absent`` when no token of either kind
        exists, ``valid`` when the recomputed hash matches, ``invalid``
        otherwise (including a lone placeholder, several tokens, or corrupt
        manual region markers).
        """
        matches = list(_TOKEN_RE.finditer(text))
        if not matches:
            return SignatureCheck(verdict=SignatureVerdict.ABSENT, reason="no signature token")

        match = matches[0]
        kind = FileKind(match.group(1))
        embedded = match.group(2)

        if len(matches) > 1:
            return SignatureCheck(
                verdict=SignatureVerdict.INVALID,
                kind=kind,
                embedded=embedded,
                reason=f"{len(matches)} signature tokens found",
            )
        if embedded == PLACEHOLDER:
            return SignatureCheck(
                verdict=SignatureVerdict.INVALID,
                kind=kind,
                embedded=embedded,
                reason="signature placeholder was never filled",
            )

        unsigned = text[: match.start(2)] + PLACEHOLDER + text[match.end(2):]
        try:
            computed = self.digest(kind, unsigned)
        except CorruptRegionError as e:
            return SignatureCheck(
                verdict=SignatureVerdict.INVALID,
                kind=kind,
                embedded=embedded,
                reason=f"corrupt manual regions: {e.reason}",
                corrupt_regions=True,
            )

        if computed != embedded:
            return SignatureCheck(
                verdict=SignatureVerdict.INVALID,
                kind=kind,
                embedded=embedded,
                computed=computed,
                reason="content does not match signature",
            )
        return SignatureCheck(
            verdict=SignatureVerdict.VALID,
            kind=kind,
            embedded=embedded,
            computed=computed,
        )

    def is_signed(self, text: str) -> bool:
        """True if ``text`` carries a token of either kind (valid or not)."""
        return _TOKEN_RE.search(text) is not None

    def has_valid_signature(self, text: str) -> bool:
        return self.verify(text).is_valid
