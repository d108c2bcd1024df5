"""Tests for the CLI module: arg parsing, exit codes, output formats, REPL."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from loxscan.cli import CliOptions, build_parser, main, run, run_prompt


def _options(**overrides) -> CliOptions:
    values = {"script": None, "fmt": "text", "all_errors": False, "show_eof": True}
    values.update(overrides)
    return CliOptions(**values)


# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_no_script(self) -> None:
        ns = build_parser().parse_args([])
        assert ns.script is None
        assert ns.format is None
        assert ns.all_errors is None
        assert ns.show_eof is None

    def test_script(self) -> None:
        ns = build_parser().parse_args(["main.lox"])
        assert ns.script == "main.lox"

    def test_flags(self) -> None:
        ns = build_parser().parse_args(["main.lox", "--format", "json", "--all-errors", "--no-eof"])
        assert ns.format == "json"
        assert ns.all_errors is True
        assert ns.show_eof is False

    def test_too_many_arguments(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["a.lox", "b.lox"])
        assert exc_info.value.code == 2

    def test_bad_format(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.lox", "--format", "xml"])


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "ok.lox"
        script.write_text("print 1;\n")
        assert main([str(script)]) == 0
        out = capsys.readouterr().out
        assert "line 1: PRINT 'print'" in out
        assert "line 1: NUMBER '1' 1" in out
        assert out.rstrip().endswith("line 2: EOF ''")

    def test_lex_error_returns_1(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "bad.lox"
        script.write_text("var a = @;\n")
        assert main([str(script)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "unexpected character '@'" in captured.err
        assert f"{script}:1:9" in captured.err

    def test_missing_file_returns_2(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "nope.lox")]) == 2
        assert "cannot read" in capsys.readouterr().err

    def test_bad_config_returns_2(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "loxscan.toml").write_text('[scan]\nformat = "xml"\n')
        script = tmp_path / "a.lox"
        script.write_text("1")
        assert main([str(script)]) == 2
        assert "invalid format" in capsys.readouterr().err

    def test_malformed_config_returns_2(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "loxscan.toml").write_text("[scan\n")
        script = tmp_path / "a.lox"
        script.write_text("1")
        assert main([str(script)]) == 2
        assert "invalid config file" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Output options
# ---------------------------------------------------------------------------


class TestOutput:
    def test_json(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "a.lox"
        script.write_text('say("hi")')
        assert main([str(script), "--format", "json"]) == 0
        items = json.loads(capsys.readouterr().out)
        assert [i["type"] for i in items] == [
            "IDENTIFIER",
            "LEFT_PAREN",
            "STRING",
            "RIGHT_PAREN",
            "EOF",
        ]
        assert items[2] == {
            "type": "STRING",
            "lexeme": '"hi"',
            "literal": "hi",
            "line": 1,
            "column": 5,
            "start": 4,
            "end": 8,
        }

    def test_no_eof(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "a.lox"
        script.write_text("x")
        assert main([str(script), "--no-eof"]) == 0
        assert "EOF" not in capsys.readouterr().out

    def test_all_errors(self, tmp_path: Path, capsys) -> None:
        script = tmp_path / "a.lox"
        script.write_text("a @\nb $")
        assert main([str(script), "--all-errors"]) == 1
        captured = capsys.readouterr()
        assert "IDENTIFIER 'b'" in captured.out
        assert "'@'" in captured.err
        assert "'$'" in captured.err

    def test_run_short_errors(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        assert run("@", _options(), out=out, err=err, short_errors=True) == 1
        assert err.getvalue() == "line 1: unexpected character '@'\n"


# ---------------------------------------------------------------------------
# REPL
# ---------------------------------------------------------------------------


class TestPrompt:
    def test_scans_each_line(self, capsys) -> None:
        stdin = io.StringIO("var a;\nprint a;\n")
        assert run_prompt(_options(show_eof=False), stdin) == 0
        captured = capsys.readouterr()
        assert "Starting REPL" in captured.err
        lines = captured.out.splitlines()
        assert lines[0] == "line 1: VAR 'var'"
        assert lines[3] == "line 1: PRINT 'print'"

    def test_error_does_not_stop_loop(self, capsys) -> None:
        stdin = io.StringIO('"open\nok\n')
        assert run_prompt(_options(show_eof=False), stdin) == 1
        captured = capsys.readouterr()
        assert "line 1: unterminated string" in captured.err
        assert "IDENTIFIER 'ok' ok" in captured.out
