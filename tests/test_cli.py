"""Tests for the command-line interface.

WHY: The CLI is how users normalize and merge databases by hand. Wrong
defaults (writing to the wrong file, the wrong encoding) or a swallowed
error would quietly damage a project's compile_commands.json.

HOW: main() is called with an explicit argv against files in tmp_path.
Status and error messages are read from stderr via capsys.

RULES:
- Errors must exit with status 1 and print "Error: ..." to stderr
- Nothing is written in --check mode
"""

import json

import pytest

from compdb_converter.cli import build_parser, main
from compdb_converter.database import Database


class TestParser:
    """build_parser() defaults."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.inputs == []
        assert args.output is None
        assert args.check is False
        assert args.verbose is False

    def test_no_command_as_array(self):
        args = build_parser().parse_args(["--no-command-as-array", "a.json"])
        assert args.command_as_array is False
        assert args.inputs == ["a.json"]


class TestConvert:
    """Loading, converting and writing databases."""

    def test_rewrites_in_place(self, write_db, string_document, expected_entries):
        path = write_db(string_document)
        main([str(path), "--command-as-array"])
        data = json.loads(path.read_text(encoding="utf-8"))
        assert all("arguments" in record for record in data)
        assert Database(path).load() == expected_entries

    def test_writes_command_strings(self, write_db, array_document, tmp_path):
        path = write_db(array_document)
        out = tmp_path / "out.json"
        main([str(path), "-o", str(out), "--no-command-as-array"])
        data = json.loads(out.read_text(encoding="utf-8"))
        assert all("command" in record for record in data)
        assert path.read_text(encoding="utf-8") == array_document

    def test_merges_inputs(self, tmp_path, capsys):
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        first.write_text(json.dumps([
            {"directory": "/d", "file": "a.c", "arguments": ["cc", "a.c"]},
        ]), encoding="utf-8")
        second.write_text(json.dumps([
            {"directory": "/d", "file": "a.c", "command": "cc a.c"},
            {"directory": "/d", "file": "b.c", "command": "cc b.c"},
        ]), encoding="utf-8")
        out = tmp_path / "merged.json"

        main([str(first), str(second), "--output", str(out)])

        assert len(Database(out).load()) == 2
        assert "Saved 2 entries" in capsys.readouterr().err

    def test_default_input(self, tmp_path, monkeypatch, array_document, expected_entries):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "compile_commands.json").write_text(array_document, encoding="utf-8")
        main(["--no-command-as-array"])
        assert Database(tmp_path / "compile_commands.json").load() == expected_entries


class TestCheck:
    """--check validates without writing."""

    def test_reports_count(self, write_db, array_document, capsys):
        path = write_db(array_document)
        main(["--check", str(path)])
        assert "OK: 2 unique entries" in capsys.readouterr().err
        assert path.read_text(encoding="utf-8") == array_document


class TestErrors:
    """Library errors become exit status 1."""

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1
        assert "Error: Failed to read" in capsys.readouterr().err

    def test_bad_records_listed(self, write_db, capsys):
        path = write_db(json.dumps([
            {"directory": "/d", "file": "a.c", "command": "cc 'a.c"},
            {"directory": "/d", "file": "b.c", "command": 'cc "b.c'},
        ]))
        with pytest.raises(SystemExit) as exc_info:
            main(["--check", str(path)])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "a.c" in err
        assert "b.c" in err

    def test_bad_input_leaves_output_untouched(self, write_db, tmp_path):
        path = write_db("this is not json")
        out = tmp_path / "out.json"
        with pytest.raises(SystemExit):
            main([str(path), "-o", str(out)])
        assert not out.exists()

    def test_bad_indent_setting(self, write_db, array_document, monkeypatch, capsys):
        path = write_db(array_document)
        monkeypatch.setenv("COMPDB_JSON_INDENT", "wide")
        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])
        assert exc_info.value.code == 1
        assert "Error: COMPDB_JSON_INDENT" in capsys.readouterr().err
        assert path.read_text(encoding="utf-8") == array_document
