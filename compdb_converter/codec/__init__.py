"""Record codec: on-disk JSON shapes and their conversion to entries.

WHY: The JSON document has no type tag; each record is recognized by its
shape. Keeping the shape sniffing, JSON handling and entry conversion in one
package means the Database façade never inspects raw dicts.

HOW: records.py holds the two record variants and the record <-> Entry
conversion. document.py validates and (de)serializes whole documents
against the bundled JSON schema.

RULES:
- Shape discrimination happens only in records.decode_record()
- No partial results: a document either parses completely or raises
"""

from compdb_converter.codec.document import parse_document, serialize_document
from compdb_converter.codec.records import (
    ArrayRecord,
    GenericRecord,
    StringRecord,
    decode_record,
    encode_record,
    from_entry,
    to_entry,
)

__all__ = [
    "ArrayRecord",
    "GenericRecord",
    "StringRecord",
    "decode_record",
    "encode_record",
    "from_entry",
    "parse_document",
    "serialize_document",
    "to_entry",
]
