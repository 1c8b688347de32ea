"""Command-line interface for the compilation database converter.

WHY: Users need to normalize a compile_commands.json (switch between the
``command`` and ``arguments`` encodings, drop duplicates), merge databases
from several build directories, or just check that a hand-edited file is
still valid.

HOW: Uses argparse to accept one or more input databases, an output path,
the output encoding and a check-only flag. Every input is loaded through
Database, the entry sets are merged, and the result is saved through
Database. Status messages go to stderr.

RULES:
- Positional inputs default to COMPDB_FILENAME (compile_commands.json)
- --output defaults to the first input (in-place normalization)
- --command-as-array / --no-command-as-array default to COMPDB_COMMAND_AS_ARRAY
- --check loads every input and reports counts, writes nothing
- Any CompilationDatabaseError prints "Error: ..." and exits with status 1
- --verbose turns on DEBUG logging for the library modules
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from compdb_converter.config import DEFAULT_COMMAND_AS_ARRAY, DEFAULT_DATABASE_FILENAME
from compdb_converter.core.entry import DatabaseFormat, Entries, Entry, dedupe
from compdb_converter.database import Database
from compdb_converter.errors import CompilationDatabaseError


def _status(msg: str) -> None:
    """Print a status message to stderr, keeping stdout clean for piping."""
    print(msg, file=sys.stderr, flush=True)


def _load_all(paths: List[str]) -> Entries:
    """Load and merge every input database.

    RULES:
    - Inputs are merged in order; a later duplicate replaces an earlier one
    - The first failing input aborts the whole run
    """
    merged: List[Entry] = []
    for path in paths:
        entries = Database(path).load()
        _status("  Loaded {} entries from {}".format(len(entries), path))
        merged.extend(entries)
    return dedupe(merged)


def _run(args: argparse.Namespace) -> None:
    inputs: List[str] = args.inputs or [DEFAULT_DATABASE_FILENAME]

    _status("Loading {} database(s)...".format(len(inputs)))
    entries = _load_all(inputs)

    if args.check:
        _status("OK: {} unique entries".format(len(entries)))
        return

    output = args.output or inputs[0]
    fmt = DatabaseFormat(command_as_array=args.command_as_array)
    Database(output).save(entries, fmt)
    _status("Saved {} entries to {} ({})".format(
        len(entries),
        output,
        "arguments" if fmt.command_as_array else "command",
    ))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser on its own.
    """
    parser = argparse.ArgumentParser(
        prog="compdb_converter",
        description="Normalize, merge and validate JSON compilation databases "
                    "(compile_commands.json).",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Compilation database files to read (default: {}).".format(DEFAULT_DATABASE_FILENAME),
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="File to write (default: the first input, rewritten in place).",
    )

    parser.add_argument(
        "--command-as-array",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_COMMAND_AS_ARRAY,
        help="Write 'arguments' lists instead of 'command' strings (default: %(default)s).",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate the inputs, do not write anything.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m compdb_converter``.

    argv=None means sys.argv; an explicit list is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        _run(args)
    except CompilationDatabaseError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
