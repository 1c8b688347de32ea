"""Canonical in-memory representation of compilation database entries.

WHY: The on-disk format has two encodings of the same information. Callers
work with one normalized type instead: a directory, a source file, the
already-unescaped command tokens, and an optional output path.

HOW: Entry is a frozen dataclass so it can live in a set. Equality and
hashing go through an explicit ``key`` that covers directory, file and
command only. DatabaseFormat is the one save-time option.

RULES:
- Two entries that differ only in ``output`` are equal (duplicates)
- ``command`` is stored as a tuple, order preserved
- Path fields keep their text exactly (no normalization): "./a.c" and
  "a.c" are different entries
- dedupe() keeps the last of several equal entries
- Entries is the load/save interchange type: a set, never a list
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Union

from compdb_converter.config import DEFAULT_COMMAND_AS_ARRAY

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True, eq=False, init=False)
class Entry:
    """One build command: where it ran, what it compiled, and how.

    Attributes:
        directory: Working directory the command was run from (absolute).
        file: Source file compiled, possibly relative to ``directory``.
        command: Executable and arguments, shell-unescaped.
        output: Compiled artifact, if known. Not part of equality.
    """

    directory: str
    file: str
    command: tuple[str, ...]
    output: str | None = None

    def __init__(
        self,
        directory: PathLike,
        file: PathLike,
        command: Iterable[str],
        output: PathLike | None = None,
    ) -> None:
        object.__setattr__(self, "directory", os.fsdecode(directory))
        object.__setattr__(self, "file", os.fsdecode(file))
        object.__setattr__(self, "command", tuple(command))
        object.__setattr__(self, "output", os.fsdecode(output) if output is not None else None)

    @property
    def key(self) -> tuple[str, str, tuple[str, ...]]:
        """The identity used for deduplication."""
        return (self.directory, self.file, self.command)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


Entries = set[Entry]


def dedupe(entries: Iterable[Entry]) -> Entries:
    """Collapse equal entries, keeping the last one seen.

    A set alone keeps the first of two equal entries; this keeps the last so
    a later record's ``output`` wins.
    """
    unique: dict[Entry, Entry] = {}
    for entry in entries:
        unique.pop(entry, None)
        unique[entry] = entry
    return set(unique.values())


@dataclass(frozen=True)
class DatabaseFormat:
    """Save-time shape of the command field.

    Attributes:
        command_as_array: True writes ``arguments`` lists, False writes a
                          single shell-quoted ``command`` string.
    """

    command_as_array: bool = True

    @classmethod
    def default(cls) -> DatabaseFormat:
        """The format configured via COMPDB_COMMAND_AS_ARRAY."""
        return cls(command_as_array=DEFAULT_COMMAND_AS_ARRAY)
