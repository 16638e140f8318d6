"""
Record generator — produce a Python accessor class from a field list.

The schema names itself (no introspection) and lists its fields; fields
flagged ``manual`` get a manual region around their accessor body so
hand edits survive regeneration.  Long return expressions go through
``append_with_suggested_breaks``.

Schema YAML:

    name: User
    description: Rows of the user table.
    generated_from: signedgen generate user.yml
    fields:
      - name: first_name
        type: str
      - name: country_id
        type: int
        optional: true
        manual: true
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from signedgen.core.codegen.assembler import DELIMITER, TextAssembler
from signedgen.core.errors import ConfigError
from signedgen.core.models.config import CodegenConfig
from signedgen.core.models.document import GeneratedDocument

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class FieldSpec(BaseModel):
    """One field handed over by the schema layer."""

    name: str
    type: str = "str"
    optional: bool = False
    manual: bool = False

    @field_validator("name")
    @classmethod
    def _identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.fullmatch(value):
            raise ValueError(f"Field name must be an identifier: {value!r}")
        return value

    @property
    def annotation(self) -> str:
        return f"{self.type} | None" if self.optional else self.type


class RecordSchema(BaseModel):
    """A named list of fields; ``name`` becomes the generated class name."""

    name: str
    description: str = ""
    path: str | None = None
    generated_from: str | None = None
    fields: list[FieldSpec] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _class_name(cls, value: str) -> str:
        if not _IDENTIFIER_RE.fullmatch(value):
            raise ValueError(f"Record name must be an identifier: {value!r}")
        return value

    @field_validator("fields")
    @classmethod
    def _unique_fields(cls, value: list[FieldSpec]) -> list[FieldSpec]:
        seen: set[str] = set()
        for f in value:
            if f.name in seen:
                raise ValueError(f"Duplicate field: {f.name}")
            seen.add(f.name)
        return value

    def default_path(self) -> str:
        snake = re.sub(r"(?<!^)(?=[A-Z])", "_", self.name).lower()
        return f"{snake}.py"


def load_schema(path: Path) -> RecordSchema:
    """Read a record schema from YAML.

    Raises:
        ConfigError: unreadable file, bad YAML, or invalid schema.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}")
    try:
        return RecordSchema.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid record schema in {path}: {e}") from e


def _accessor_body(out: TextAssembler, field: FieldSpec) -> None:
    key = repr(field.name)
    if field.optional:
        out.append_with_suggested_breaks(
            f"return _optional(self._data.get({key}),{DELIMITER}{field.type})"
        )
        out.new_line()
    else:
        out.append_line(f"return self._data[{key}]")


def generate_record(
    schema: RecordSchema,
    config: CodegenConfig | None = None,
    *,
    path: Path | str | None = None,
) -> GeneratedDocument:
    """Build the document for ``schema``.

    Args:
        schema: Record name and fields.
        config: Codegen settings (widths, comment styles).
        path:   Target path; defaults to ``schema.path`` or the snake-case
                class name.

    Returns:
        GeneratedDocument, partially generated if any field is manual.
    """
    config = config or CodegenConfig()
    target = Path(path or schema.path or schema.default_path())
    out = TextAssembler(config, config.comment_style_for(target))

    out.append_line("from __future__ import annotations")
    out.new_line()
    out.append_line("from typing import Any, Callable")
    out.new_line()

    if any(f.optional for f in schema.fields):
        out.new_line()
        out.append_line("def _optional(value: Any, convert: Callable[[Any], Any]) -> Any:")
        out.indent().append_line("return None if value is None else convert(value)").unindent()
        out.new_line()

    out.new_line()
    out.append_line(f"class {schema.name}:")
    out.indent()
    out.append_line("def __init__(self, data: dict[str, Any]) -> None:")
    out.indent().append_line("self._data = data").unindent()

    out.set_inside_function()
    for field in schema.fields:
        out.new_line()
        out.append_line("@property")
        out.append_line(f"def {field.name}(self) -> {field.annotation}:")
        out.indent()
        if field.manual:
            out.begin_manual_region(field.name)
            out.append_line("# You may manually change this section of code")
        _accessor_body(out, field)
        if field.manual:
            out.end_manual_region()
        out.unindent()

    out.unindent()

    logger.debug(
        "Generated record %s with %d field(s) for %s",
        schema.name,
        len(schema.fields),
        target,
    )
    return GeneratedDocument(
        path=target,
        body=out.finalize(),
        doc_comment=schema.description or None,
        generated_from=schema.generated_from,
    )
