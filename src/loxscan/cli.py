"""Command-line interface for loxscan."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from loxscan.errors import LexError

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    script: Path | None
    fmt: str
    all_errors: bool
    show_eof: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="loxscan",
        description="Scan Lox source and print its tokens",
    )
    p.add_argument("script", nargs="?", help="Script to scan (default: interactive prompt)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover loxscan.toml)",
    )
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Token output format (default: text)",
    )
    p.add_argument(
        "--all-errors",
        action="store_true",
        default=None,
        help="Report every lexical error instead of stopping at the first",
    )
    p.add_argument(
        "--no-eof",
        dest="show_eof",
        action="store_false",
        default=None,
        help="Omit the end-of-input token from the output",
    )
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "loxscan.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    script = Path(args.script) if args.script else None
    search_dir = script.parent if script is not None else Path(".")
    if not search_dir.parts:
        search_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    cfg_scan = config.get("scan")
    if not isinstance(cfg_scan, dict):
        cfg_scan = {}

    fmt = "text"
    cfg_fmt = cfg_scan.get("format")
    if cfg_fmt is not None:
        if cfg_fmt not in FORMATS:
            raise argparse.ArgumentTypeError(
                f"invalid format in config (expected one of {', '.join(FORMATS)}): {cfg_fmt}"
            )
        fmt = cfg_fmt
    if args.format is not None:
        fmt = args.format

    all_errors = _config_bool(cfg_scan, "all_errors", False)
    if args.all_errors is not None:
        all_errors = args.all_errors

    show_eof = _config_bool(cfg_scan, "show_eof", True)
    if args.show_eof is not None:
        show_eof = args.show_eof

    return CliOptions(script=script, fmt=fmt, all_errors=all_errors, show_eof=show_eof)


def _config_bool(table: dict[str, Any], key: str, default: bool) -> bool:
    value = table.get(key, default)
    if not isinstance(value, bool):
        raise argparse.ArgumentTypeError(f"invalid {key} in config (expected true/false): {value}")
    return value


def run(
    source: str,
    options: CliOptions,
    *,
    filename: str = "<input>",
    out: TextIO | None = None,
    err: TextIO | None = None,
    short_errors: bool = False,
) -> int:
    """Scan one compilation unit and print its tokens. Returns 0 or 1."""
    from loxscan.debug import dump_tokens
    from loxscan.scanner import scan, tokenize

    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    if options.all_errors:
        result = scan(source)
        tokens, errors = result.tokens, result.errors
    else:
        try:
            tokens, errors = tokenize(source), []
        except LexError as exc:
            tokens, errors = [], [exc]

    if tokens:
        dump_tokens(tokens, fmt=options.fmt, show_eof=options.show_eof, file=out)
    for exc in errors:
        print(exc.summary() if short_errors else exc.format(filename), file=err)
    return 1 if errors else 0


def run_file(options: CliOptions) -> int:
    """Read and scan a whole script file."""
    assert options.script is not None
    try:
        source = options.script.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.script}: {exc}", file=sys.stderr)
        return 2
    return run(source, options, filename=str(options.script))


def run_prompt(options: CliOptions, stdin: TextIO | None = None) -> int:
    """Scan stdin line by line; lexical errors are reported and the loop continues."""
    stdin = stdin if stdin is not None else sys.stdin
    print("Starting REPL", file=sys.stderr)
    status = 0
    try:
        for line in stdin:
            if run(line.rstrip("\r\n"), options, filename="<stdin>", short_errors=True):
                status = 1
    except KeyboardInterrupt:
        pass
    return status


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.script is None:
        return run_prompt(options)
    return run_file(options)
