"""
Codegen core — assemble, mark, sign and merge generated text.

    from signedgen.core.codegen import TextAssembler, RegionMarker, SignatureCodec, MergeEngine
"""

from signedgen.core.codegen.assembler import DELIMITER, TextAssembler, line_too_long
from signedgen.core.codegen.merge import MergeEngine
from signedgen.core.codegen.regions import RegionMarker, validate_region_name
from signedgen.core.codegen.render import DocumentRenderer
from signedgen.core.codegen.signature import PLACEHOLDER, SignatureCodec, signing_token

__all__ = [
    "DELIMITER",
    "PLACEHOLDER",
    "DocumentRenderer",
    "MergeEngine",
    "RegionMarker",
    "SignatureCodec",
    "TextAssembler",
    "line_too_long",
    "signing_token",
    "validate_region_name",
]
