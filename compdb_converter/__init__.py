"""Compilation database converter: JSON on disk, entry sets in memory.

WHY: Clang tooling reads ``compile_commands.json``, a list of per-file build
commands. Over time two encodings of the command have appeared in the wild
(one shell-quoted ``command`` string or a pre-split ``arguments`` list).
Callers should not care which one a file uses.

HOW: Three layers, bottom to top: shell-word tokenizer (core), record codec
(codec), and the Database façade that owns a file path and exposes
load()/save().

RULES:
- Entries are the stable contract between callers and the on-disk format
- Entry equality ignores the output path
- A failed load or save never yields a partial set or a partial file
"""

from compdb_converter.core.entry import DatabaseFormat, Entries, Entry
from compdb_converter.database import Database
from compdb_converter.errors import (
    AggregateError,
    CompilationDatabaseError,
    ConfigError,
    ConversionError,
    DatabaseIOError,
    FormatError,
    QuoteError,
)

__version__ = "0.1.0"

__all__ = [
    "AggregateError",
    "CompilationDatabaseError",
    "ConfigError",
    "ConversionError",
    "Database",
    "DatabaseFormat",
    "DatabaseIOError",
    "Entries",
    "Entry",
    "FormatError",
    "QuoteError",
]
