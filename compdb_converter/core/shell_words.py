"""Shell-word tokenizer: command line <-> argument vector.

WHY: Older compilation databases store each command as one shell-quoted
string, newer ones as a list of arguments. Both must map onto the same
token sequence, and the string form must be reproducible on save.

HOW: split() first folds the escapes shlex does not know about (line
continuations, and an escaped dollar sign or backtick inside double quotes),
then drives shlex in POSIX mode with whitespace splitting and comment
handling disabled.
join() quotes only the tokens that need it with shlex.quote().

RULES:
- split(join(tokens)) == tokens for every token sequence
- join() leaves plain tokens untouched and separates with single spaces
- Unbalanced quoting (or a trailing backslash) raises QuoteError
- ``#`` is an ordinary character, never a comment
- Backslash-newline is removed outside single quotes
- Inside double quotes a backslash escapes a dollar sign, a backtick, a
  double quote or another backslash; before any other character it stays
  literal
"""

from __future__ import annotations

import shlex
from typing import Iterable

from compdb_converter.errors import QuoteError


def _fold_escapes(line: str) -> str:
    """Resolve the POSIX escapes that shlex leaves alone.

    Inside double quotes shlex keeps an escaped dollar sign or backtick as two
    characters, and anywhere it turns backslash-newline into a literal
    newline. Everything inside single quotes is copied as is. A trailing lone
    backslash is kept so shlex still reports it.
    """
    out: list[str] = []
    quote = None
    i = 0
    while i < len(line):
        char = line[i]
        if quote == "'":
            if char == "'":
                quote = None
            out.append(char)
            i += 1
            continue
        if char == "\\" and i + 1 < len(line):
            escaped = line[i + 1]
            if escaped == "\n":
                pass
            elif quote == '"' and escaped in "$`":
                out.append(escaped)
            else:
                out.append(char + escaped)
            i += 2
            continue
        if char == '"':
            quote = None if quote == '"' else '"'
        elif char == "'" and quote is None:
            quote = "'"
        out.append(char)
        i += 1
    return "".join(out)


def split(line: str) -> list[str]:
    """Split a command line into shell words.

    Args:
        line: A single command line, e.g. ``cc -DNAME="a b" -c x.c``.

    Returns:
        The unquoted tokens, in order. An empty or blank line gives [].

    Raises:
        QuoteError: If a quote is never closed or the line ends in an
            unescaped backslash.
    """
    lexer = shlex.shlex(_fold_escapes(line), posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as exc:
        raise QuoteError("{} in {!r}".format(exc, line)) from exc


def join(tokens: Iterable[str]) -> str:
    """Join tokens into one command line that split() reverses exactly."""
    return " ".join(shlex.quote(token) for token in tokens)
