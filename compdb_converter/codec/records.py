"""On-disk record variants and their conversion to and from Entry.

WHY: A compilation database record carries its command either as one
shell-quoted string or as a list of arguments, with no tag saying which.
Internally the two shapes are an explicit tagged union so every consumer
can dispatch on the type instead of re-sniffing dict keys.

HOW: StringRecord and ArrayRecord are frozen dataclasses. decode_record()
is the one place that looks at raw keys, encode_record() is its inverse.
to_entry() and from_entry() bridge records and the canonical Entry, using
the shell-word tokenizer for the string variant.

RULES:
- An ``arguments`` array wins over a ``command`` string when both exist
- ``output`` is omitted from encoded dicts when None, never written as null
- to_entry() reports quoting problems as ConversionError naming the command
- from_entry() fails only when a path is not representable as UTF-8 text
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from compdb_converter.core import shell_words
from compdb_converter.core.entry import DatabaseFormat, Entry
from compdb_converter.errors import ConversionError, FormatError, QuoteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StringRecord:
    """Record whose command is a single shell-quoted line."""

    directory: str
    file: str
    command: str
    output: str | None = None


@dataclass(frozen=True)
class ArrayRecord:
    """Record whose command is already split into arguments."""

    directory: str
    file: str
    arguments: tuple[str, ...]
    output: str | None = None


GenericRecord = Union[StringRecord, ArrayRecord]


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def decode_record(raw: Any) -> GenericRecord:
    """Recognize the shape of one raw JSON record.

    WHY: The document carries no type tag. Keeping the discrimination here
    means the rest of the codec only ever sees typed records.

    HOW: Check the common fields, then try the arguments shape, then the
    command shape. Extra keys are ignored.

    Args:
        raw: One element of the decoded JSON array.

    Returns:
        An ArrayRecord or a StringRecord.

    Raises:
        FormatError: If the record matches neither shape.
    """
    if not isinstance(raw, dict):
        raise FormatError("Expected a JSON object, got {}".format(type(raw).__name__))

    directory = raw.get("directory")
    file = raw.get("file")
    output = raw.get("output")
    if not isinstance(directory, str) or not isinstance(file, str):
        raise FormatError("Record is missing a string 'directory' or 'file': {!r}".format(raw))
    if output is not None and not isinstance(output, str):
        raise FormatError("Record has a non-string 'output': {!r}".format(raw))

    arguments = raw.get("arguments")
    if _is_string_list(arguments):
        return ArrayRecord(directory=directory, file=file, arguments=tuple(arguments), output=output)

    command = raw.get("command")
    if isinstance(command, str):
        return StringRecord(directory=directory, file=file, command=command, output=output)

    raise FormatError(
        "Record for {!r} has neither a 'command' string nor an 'arguments' list".format(file)
    )


def encode_record(record: GenericRecord) -> dict[str, Any]:
    """Convert a record to the dict written to disk."""
    data: dict[str, Any] = {"directory": record.directory, "file": record.file}
    if isinstance(record, ArrayRecord):
        data["arguments"] = list(record.arguments)
    else:
        data["command"] = record.command
    if record.output is not None:
        data["output"] = record.output
    return data


def to_entry(record: GenericRecord) -> Entry:
    """Convert one on-disk record into an Entry.

    Raises:
        ConversionError: If a StringRecord command has unbalanced quotes.
            ``value`` holds the command text.
    """
    if isinstance(record, ArrayRecord):
        command = list(record.arguments)
    else:
        try:
            command = shell_words.split(record.command)
        except QuoteError as exc:
            raise ConversionError(
                "Quotes are mismatched in {!r}".format(record.command), record.command
            ) from exc

    if not command:
        logger.warning("Entry for %s in %s has an empty command", record.file, record.directory)

    return Entry(
        directory=record.directory,
        file=record.file,
        command=command,
        output=record.output,
    )


def _path_to_string(path: str) -> str:
    """Render a path as text that survives a UTF-8 JSON document.

    Undecodable file name bytes show up in Python paths as lone surrogates
    (surrogateescape). Those cannot be written as UTF-8.
    """
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ConversionError("Failed to convert to string {!r}".format(path), path) from exc
    return path


def from_entry(entry: Entry, format: DatabaseFormat) -> GenericRecord:
    """Convert an Entry into the record shape selected by ``format``.

    Raises:
        ConversionError: If directory, file or output is not representable
            as UTF-8 text.
    """
    directory = _path_to_string(entry.directory)
    file = _path_to_string(entry.file)
    output = _path_to_string(entry.output) if entry.output is not None else None

    if format.command_as_array:
        return ArrayRecord(directory=directory, file=file, arguments=entry.command, output=output)
    return StringRecord(
        directory=directory,
        file=file,
        command=shell_words.join(entry.command),
        output=output,
    )
