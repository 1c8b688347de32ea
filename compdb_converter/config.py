"""Configuration defaults and .env loading.

WHY: The default database filename, the default on-disk command encoding
and the JSON indentation are plain settings that users override per project
without touching code.

HOW: python-dotenv loads the .env file on import. Constants are read from
the environment with defaults. load_json_indent() validates the one numeric
setting with a clear error.

RULES:
- COMPDB_FILENAME: default database filename (compile_commands.json)
- COMPDB_COMMAND_AS_ARRAY: "true" writes arguments arrays, anything else
  writes command strings (default: true)
- COMPDB_JSON_INDENT: non-negative integer indent for saved documents (default: 2)
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from compdb_converter.errors import ConfigError

# Load .env from the directory the tool is run from
load_dotenv()

DEFAULT_DATABASE_FILENAME = os.getenv("COMPDB_FILENAME", "compile_commands.json")
DEFAULT_COMMAND_AS_ARRAY = os.getenv("COMPDB_COMMAND_AS_ARRAY", "true").lower() == "true"


def load_json_indent() -> int:
    """Read the JSON indent width from the environment.

    RULES:
    - Missing or empty value means 2
    - Raises ConfigError (a ValueError) for a non-integer or negative value
    """
    raw = os.getenv("COMPDB_JSON_INDENT", "").strip()
    if not raw:
        return 2
    try:
        indent = int(raw)
    except ValueError:
        raise ConfigError(
            "COMPDB_JSON_INDENT must be an integer, got {!r}".format(raw)
        ) from None
    if indent < 0:
        raise ConfigError("COMPDB_JSON_INDENT must not be negative, got {}".format(indent))
    return indent
