"""Whole-document JSON parsing and serialization.

WHY: A compilation database is only usable if every record in it has a
known shape. Validating the document against a JSON schema up front gives
one clear FormatError instead of a KeyError deep in the conversion code.

HOW: parse_document() decodes the JSON, validates it with jsonschema
against compilation_database.schema.json (loaded once and cached), then
hands each element to decode_record(). serialize_document() writes the
records back as indented UTF-8 JSON.

RULES:
- Malformed JSON, a non-array document or an unknown record shape all
  raise FormatError, with no partial result
- Output is pretty-printed, indent from COMPDB_JSON_INDENT (default 2)
- Non-ASCII text is written as-is, the file is UTF-8
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import jsonschema

from compdb_converter.codec.records import GenericRecord, decode_record, encode_record
from compdb_converter.config import load_json_indent
from compdb_converter.errors import FormatError

_SCHEMA_PATH = Path(__file__).resolve().parent / "compilation_database.schema.json"


def _load_schema() -> dict[str, Any]:
    """Load the compilation database JSON schema from disk."""
    with open(_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        _CACHED_SCHEMA = _load_schema()
    return _CACHED_SCHEMA


def _describe(error: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in error.absolute_path)
    if location:
        return "{} (at /{})".format(error.message, location)
    return error.message


def parse_document(data: bytes | str) -> list[GenericRecord]:
    """Parse a compilation database document into typed records.

    Args:
        data: The raw file content. Bytes may be UTF-8, UTF-16 or UTF-32,
              as accepted by json.loads().

    Returns:
        The records in document order (duplicates are kept).

    Raises:
        FormatError: If the content is not JSON, not an array, or contains
            a record matching neither record shape.
    """
    try:
        document = json.loads(data)
    except ValueError as exc:
        raise FormatError("Invalid JSON: {}".format(exc)) from exc

    try:
        jsonschema.validate(instance=document, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        raise FormatError("Not a compilation database: {}".format(_describe(exc))) from exc

    return [decode_record(raw) for raw in document]


def serialize_document(records: Iterable[GenericRecord], indent: int | None = None) -> bytes:
    """Serialize records to a pretty-printed UTF-8 JSON array.

    Args:
        records: Records in the order they should appear.
        indent: Indent width; None means the configured COMPDB_JSON_INDENT.
    """
    if indent is None:
        indent = load_json_indent()
    content = json.dumps(
        [encode_record(record) for record in records],
        indent=indent,
        ensure_ascii=False,
    )
    return (content + "\n").encode("utf-8")
