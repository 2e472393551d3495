"""Command-line interface for mini0."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mini0.parser import DEFAULT_MAX_NESTING, MAX_NESTING_LIMIT, CheckResult

SUCCESS_MESSAGE = "Syntax analysis successful!"
OUTPUT_FORMATS = ("full", "short")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    max_nesting: int
    output_format: str
    show_tokens: bool
    watch: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="mini0",
        description="mini0 syntax checker",
    )
    p.add_argument("input", help="Input .mini0 file")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover mini0.toml)",
    )
    p.add_argument(
        "--max-nesting",
        type=int,
        default=None,
        metavar="N",
        help=(
            f"Maximum block/expression nesting depth, 1 to {MAX_NESTING_LIMIT}"
            f" (default: {DEFAULT_MAX_NESTING})"
        ),
    )
    p.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Diagnostic format (default: full)",
    )
    p.add_argument("--tokens", action="store_true", help="Dump tokens to stderr")
    p.add_argument("--watch", action="store_true", help="Watch for changes and recheck")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "mini0.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    max_nesting = DEFAULT_MAX_NESTING
    cfg_check = config.get("check")
    if isinstance(cfg_check, dict) and "max_nesting" in cfg_check:
        value = cfg_check["max_nesting"]
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise argparse.ArgumentTypeError(
                f"check.max_nesting must be an integer, got {value!r}"
            )
        max_nesting = value
    if args.max_nesting is not None:
        max_nesting = args.max_nesting
    if not 1 <= max_nesting <= MAX_NESTING_LIMIT:
        raise argparse.ArgumentTypeError(
            f"max nesting must be between 1 and {MAX_NESTING_LIMIT}, got {max_nesting}"
        )

    output_format = "full"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict) and "format" in cfg_output:
        value = cfg_output["format"]
        if value not in OUTPUT_FORMATS:
            raise argparse.ArgumentTypeError(
                f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {value!r}"
            )
        output_format = value
    if args.format is not None:
        output_format = args.format

    return CliOptions(
        input_file=input_file,
        max_nesting=max_nesting,
        output_format=output_format,
        show_tokens=args.tokens,
        watch=args.watch,
    )


def check_file(options: CliOptions) -> tuple[str, CheckResult]:
    """Read and check a mini0 file. Returns the source and the verdict."""
    from mini0.debug import dump_tokens
    from mini0.lexer import tokenize
    from mini0.parser import check

    source = options.input_file.read_text(encoding="utf-8")

    if options.show_tokens:
        dump_tokens(tokenize(source))

    return source, check(source, max_nesting=options.max_nesting)


def report(source: str, result: CheckResult, options: CliOptions) -> None:
    """Print the success message, or every diagnostic to stderr."""
    if result.success:
        print(SUCCESS_MESSAGE)
        return

    filename = str(options.input_file)
    for diag in result.diagnostics:
        if options.output_format == "short":
            print(diag.format_short(filename), file=sys.stderr)
        else:
            print(diag.format(source, filename), file=sys.stderr)


def _read_error(options: CliOptions, exc: Exception) -> str:
    reason = getattr(exc, "strerror", None) or str(exc)
    return f"error: cannot read '{options.input_file}': {reason}"


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recheck on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    source, result = check_file(options)
                except (OSError, UnicodeDecodeError) as exc:
                    print(_read_error(options, exc), file=sys.stderr)
                else:
                    report(source, result, options)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        source, result = check_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(_read_error(options, exc), file=sys.stderr)
        return 1

    report(source, result, options)
    return 0 if result.success else 1
