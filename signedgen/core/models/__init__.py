"""
Domain models — Pydantic types for the codegen core.

All models are re-exported here for convenient access:

    from signedgen.core.models import CodegenConfig, GeneratedDocument, SaveResult
"""

from signedgen.core.models.config import (
    BLOCK_STYLE,
    COMMENT_STYLES,
    HASH_STYLE,
    SLASH_STYLE,
    CodegenConfig,
    CommentStyle,
)
from signedgen.core.models.document import FileKind, GeneratedDocument, ManualRegion
from signedgen.core.models.results import (
    BatchReport,
    MergeAction,
    MergeResult,
    SaveOutcome,
    SaveResult,
    SignatureCheck,
    SignatureVerdict,
)

__all__ = [
    # config.py
    "BLOCK_STYLE",
    "COMMENT_STYLES",
    "HASH_STYLE",
    "SLASH_STYLE",
    # results.py
    "BatchReport",
    "CodegenConfig",
    "CommentStyle",
    # document.py
    "FileKind",
    "GeneratedDocument",
    "ManualRegion",
    "MergeAction",
    "MergeResult",
    "SaveOutcome",
    "SaveResult",
    "SignatureCheck",
    "SignatureVerdict",
]
