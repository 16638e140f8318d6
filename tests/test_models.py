"""
Tests for domain models — documents, results, config defaults.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from signedgen.core.errors import (
    BadSignatureError,
    CodegenError,
    CorruptRegionError,
    DroppedRegionWarning,
    NoSignatureError,
    RegionError,
)
from signedgen.core.models import (
    BatchReport,
    CodegenConfig,
    FileKind,
    GeneratedDocument,
    ManualRegion,
    MergeAction,
    SaveOutcome,
    SaveResult,
    SignatureCheck,
    SignatureVerdict,
)


class TestCodegenConfig:
    """Tests for CodegenConfig defaults and validation."""

    def test_defaults(self):
        config = CodegenConfig()
        assert config.indent_width == 2
        assert config.max_line_width == 80
        assert config.formatter is None
        assert config.root_dir is None

    def test_negative_indent_rejected(self):
        with pytest.raises(ValidationError):
            CodegenConfig(indent_width=-1)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            CodegenConfig().max_line_width = 10


class TestDocument:
    """Tests for the document models."""

    def test_defaults(self):
        doc = GeneratedDocument(path=Path("a.py"), body="x\n")
        assert doc.signed
        assert doc.kind is None
        assert doc.doc_comment is None

    def test_kind_values(self):
        assert FileKind.GENERATED == "generated"
        assert FileKind.PARTIAL == "partially-generated"
        assert FileKind("partially-generated") is FileKind.PARTIAL

    def test_region_default_content(self):
        assert ManualRegion(name="a").content == ""


class TestResults:
    """Tests for result models and their JSON form."""

    def test_signature_check(self):
        assert SignatureCheck(verdict=SignatureVerdict.VALID).is_valid
        assert not SignatureCheck(verdict=SignatureVerdict.ABSENT).is_valid

    def test_save_result_changed(self):
        def result(outcome):
            return SaveResult(
                path=Path("a.py"),
                outcome=outcome,
                action=MergeAction.FRESH,
                kind=FileKind.GENERATED,
            )

        assert result(SaveOutcome.CREATED).changed
        assert result(SaveOutcome.UPDATED).changed
        assert not result(SaveOutcome.UNCHANGED).changed

    def test_batch_report(self):
        report = BatchReport()
        assert report.ok
        report.errors["a.py"] = "boom"
        assert not report.ok
        assert report.to_dict() == {"ok": False, "results": [], "errors": {"a.py": "boom"}}

    def test_save_result_json(self):
        result = SaveResult(
            path=Path("a.py"),
            outcome=SaveOutcome.CREATED,
            action=MergeAction.MERGE,
            kind=FileKind.PARTIAL,
            dropped=[ManualRegion(name="x", content="y\n")],
        )
        data = result.model_dump(mode="json")
        assert data["outcome"] == "created"
        assert data["kind"] == "partially-generated"
        assert data["dropped"] == [{"name": "x", "content": "y\n"}]


class TestErrors:
    """Tests for the error hierarchy and messages."""

    def test_hierarchy(self):
        assert issubclass(CorruptRegionError, BadSignatureError)
        assert issubclass(CorruptRegionError, RegionError)
        assert issubclass(NoSignatureError, CodegenError)

    def test_message_names_path(self):
        e = NoSignatureError("gen/A.php", "not signed")
        assert e.path == Path("gen/A.php")
        assert e.reason == "not signed"
        assert str(e) == "gen/A.php: not signed"

    def test_message_without_path(self):
        assert str(BadSignatureError(None, "mismatch")) == "mismatch"

    def test_dropped_warning(self):
        w = DroppedRegionWarning("A.php", ["a", "b"])
        assert w.names == ["a", "b"]
        assert "a, b" in str(w)
        assert isinstance(w, UserWarning)
