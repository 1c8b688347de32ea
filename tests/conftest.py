"""Shared test fixtures for the compdb_converter test suite.

WHY: Database, codec and CLI tests all need the same two-entry sample
database and a way to write raw document text into an isolated file.

HOW: Pytest fixtures provide the expected Entry set, the same content in
both on-disk encodings, and a writer that drops raw text into tmp_path.

RULES:
- All file I/O goes through tmp_path
- The sample mirrors a two-file C build run from /home/user
- file_b carries an output path, file_a does not
"""

from pathlib import Path
from typing import Callable

import pytest

from compdb_converter.core.entry import Entry


STRING_DOCUMENT = """[
    {
        "directory": "/home/user",
        "file": "./file_a.c",
        "command": "cc -c ./file_a.c -o ./file_a.o"
    },
    {
        "directory": "/home/user",
        "file": "./file_b.c",
        "output": "./file_b.o",
        "command": "cc -c ./file_b.c -o ./file_b.o"
    }
]"""

ARRAY_DOCUMENT = """[
    {
        "directory": "/home/user",
        "file": "./file_a.c",
        "arguments": ["cc", "-c", "./file_a.c", "-o", "./file_a.o"]
    },
    {
        "directory": "/home/user",
        "file": "./file_b.c",
        "output": "./file_b.o",
        "arguments": ["cc", "-c", "./file_b.c", "-o", "./file_b.o"]
    }
]"""


def make_expected_entries():
    return {
        Entry(
            directory="/home/user",
            file="./file_a.c",
            command=["cc", "-c", "./file_a.c", "-o", "./file_a.o"],
        ),
        Entry(
            directory="/home/user",
            file="./file_b.c",
            command=["cc", "-c", "./file_b.c", "-o", "./file_b.o"],
            output="./file_b.o",
        ),
    }


@pytest.fixture
def expected_entries():
    """The two entries both sample documents load to."""
    return make_expected_entries()


@pytest.fixture
def string_document() -> str:
    """Sample database using shell-quoted ``command`` strings."""
    return STRING_DOCUMENT


@pytest.fixture
def array_document() -> str:
    """Sample database using pre-split ``arguments`` lists."""
    return ARRAY_DOCUMENT


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Path of a not-yet-existing database file in an isolated directory."""
    return tmp_path / "compile_commands.json"


@pytest.fixture
def write_db(db_path) -> Callable[[str], Path]:
    """Write raw document text to db_path and return the path."""
    def _write(content: str) -> Path:
        db_path.write_text(content, encoding="utf-8")
        return db_path
    return _write
