"""Exception hierarchy for compilation database handling.

WHY: Callers (a build interceptor, the CLI) need to tell a missing file from
a corrupt document from a single bad record, and still be able to catch
everything from this package with one except clause.

HOW: Every exception derives from CompilationDatabaseError. Each one also
derives from the closest builtin (OSError, ValueError) so generic handlers
keep working.

RULES:
- DatabaseIOError and FormatError abort a load immediately
- QuoteError and ConversionError are attributed to one record
- AggregateError collects every ConversionError of one load call
- ConfigError reports a bad environment setting, e.g. COMPDB_JSON_INDENT
"""

from __future__ import annotations

from collections.abc import Sequence


class CompilationDatabaseError(Exception):
    """Base exception for all compilation database errors."""


class ConfigError(CompilationDatabaseError, ValueError):
    """A configuration value from the environment is invalid."""


class DatabaseIOError(CompilationDatabaseError, OSError):
    """The backing file could not be opened, read or written."""


class FormatError(CompilationDatabaseError, ValueError):
    """The document is not a JSON array of recognized record shapes."""


class QuoteError(CompilationDatabaseError, ValueError):
    """A command line has unbalanced quoting.

    Raised by shell_words.split(). A trailing unescaped backslash counts as
    unbalanced too.
    """


class ConversionError(CompilationDatabaseError, ValueError):
    """A single record could not be converted to or from an Entry.

    Attributes:
        value: The offending command string or path, so the caller can
               report which record was malformed.
    """

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class AggregateError(CompilationDatabaseError):
    """One or more records of a document failed to convert.

    WHY: A hand-edited or corrupted database often has several bad records.
    Reporting all of them at once saves the user a fix-and-rerun loop.

    HOW: The message is the comma-joined messages of the individual errors,
    which stay available on ``errors``.
    """

    def __init__(self, errors: Sequence[ConversionError]) -> None:
        self.errors = list(errors)
        super().__init__(", ".join(str(error) for error in self.errors))
