"""Database façade: a compilation database bound to one file path.

WHY: Callers want a set of entries in and a set of entries out. Which
on-disk encoding a file uses, how bad records are reported and how the file
is replaced are details they should not repeat.

HOW: load() reads the file, parses it into records, converts every record
and deduplicates the entries. save() converts entries into the requested
record shape and replaces the file through a temporary sibling file.

RULES:
- No I/O at construction
- load(): IO and format problems abort at once; conversion problems are
  collected over all records and raised together as AggregateError
- load(): a later duplicate (same directory, file, command) replaces an
  earlier one, so the last ``output`` wins
- save(): the first conversion error aborts before anything is written
- save(): duplicate input entries are collapsed (last wins), records are
  written sorted, repeated saves are byte-identical
- save(): a symlinked database file is written through to its target
- A failed save leaves the previous file content in place
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

from compdb_converter.codec import from_entry, parse_document, serialize_document, to_entry
from compdb_converter.core.entry import DatabaseFormat, Entries, Entry, dedupe
from compdb_converter.errors import AggregateError, ConversionError, DatabaseIOError

logger = logging.getLogger(__name__)


def _sort_key(entry: Entry) -> tuple[str, str, tuple[str, ...]]:
    return (entry.directory, entry.file, entry.command)


def _replace_file(path: Path, content: bytes) -> None:
    """Write content to a temp file next to ``path``, then rename over it.

    The rename is atomic on POSIX, so readers see either the old or the new
    document. Symlinks are resolved first so the link survives and its
    target is what gets replaced. The target's permission bits are kept when
    it already exists.
    """
    path = Path(os.path.realpath(path))
    fd, tmp_name = tempfile.mkstemp(prefix=".{}.".format(path.name), suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, tmp_name)
        else:
            os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class Database:
    """A JSON compilation database stored at ``path``.

    WHY: The interceptor that records build commands and the CLI that
    converts databases both need the same load/save semantics.

    HOW: Holds only the path. Every load() and save() call builds records
    and entries from scratch; nothing is cached between calls.

    RULES:
    - Use as: Database(path).load() / Database(path).save(entries, fmt)
    - ``format`` defaults to DatabaseFormat.default() (COMPDB_COMMAND_AS_ARRAY)
    - Not safe for concurrent save/load on the same path
    """

    def __init__(self, path: str | os.PathLike) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return "Database({!r})".format(str(self._path))

    def load(self) -> Entries:
        """Read the database file into a deduplicated set of entries.

        Returns:
            The entries; an empty document gives an empty set.

        Raises:
            DatabaseIOError: If the file cannot be read.
            FormatError: If the content is not a compilation database.
            AggregateError: If any record fails to convert. The message
                lists every failure, comma-separated.
        """
        try:
            content = self._path.read_bytes()
        except OSError as exc:
            raise DatabaseIOError(
                "Failed to read {}: {}".format(self._path, exc.strerror or exc)
            ) from exc

        records = parse_document(content)

        entries: list[Entry] = []
        errors: list[ConversionError] = []
        for record in records:
            try:
                entries.append(to_entry(record))
            except ConversionError as exc:
                errors.append(exc)

        if errors:
            logger.debug("%d of %d records in %s failed to convert", len(errors), len(records), self._path)
            raise AggregateError(errors)

        unique = dedupe(entries)
        if len(unique) < len(entries):
            logger.warning(
                "Collapsed %d duplicate entries in %s", len(entries) - len(unique), self._path
            )

        logger.debug("Loaded %d entries from %s", len(unique), self._path)
        return unique

    def save(self, entries: Iterable[Entry], format: DatabaseFormat | None = None) -> None:
        """Replace the database file with ``entries``.

        Args:
            entries: The entries to write, usually a set from load(). Equal
                     entries are written once, the last one wins.
            format: Record shape to write; None means DatabaseFormat.default().

        Raises:
            ConversionError: If an entry has a path that is not valid text.
                Nothing is written in that case.
            DatabaseIOError: If the file cannot be written.
        """
        if format is None:
            format = DatabaseFormat.default()

        unique = dedupe(entries)
        records = [from_entry(entry, format) for entry in sorted(unique, key=_sort_key)]
        content = serialize_document(records)

        try:
            _replace_file(self._path, content)
        except OSError as exc:
            raise DatabaseIOError(
                "Failed to write {}: {}".format(self._path, exc.strerror or exc)
            ) from exc

        logger.info("Saved %d entries to %s", len(records), self._path)
