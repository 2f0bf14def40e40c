"""Command-line interface: print the recovered text of every raw text node."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tagtext.errors import LexError, ParseError
from tagtext.raw_text import Strategy
from tagtext.tokens import SpanMode


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    strategy: Strategy
    span_mode: SpanMode
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="tagtext",
        description="Recover the original text of unquoted runs in tag documents",
    )
    p.add_argument("input", help="Input file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=None,
        help="Recovery strategy (default: best)",
    )
    p.add_argument(
        "--span-mode",
        choices=[m.value for m in SpanMode],
        default=None,
        help="How much source mapping the tokens keep (default: full)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover tagtext.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump node tree to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log recovery fallbacks")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "tagtext.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_strategy(value: str) -> Strategy:
    try:
        return Strategy(value)
    except ValueError:
        choices = ", ".join(s.value for s in Strategy)
        raise argparse.ArgumentTypeError(
            f"invalid strategy {value!r} (expected one of: {choices})"
        ) from None


def parse_span_mode(value: str) -> SpanMode:
    try:
        return SpanMode(value)
    except ValueError:
        choices = ", ".join(m.value for m in SpanMode)
        raise argparse.ArgumentTypeError(
            f"invalid span mode {value!r} (expected one of: {choices})"
        ) from None


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    strategy = Strategy.BEST
    span_mode = SpanMode.FULL
    cfg_recovery = config.get("recovery")
    if isinstance(cfg_recovery, dict):
        cfg_strategy = cfg_recovery.get("strategy")
        if cfg_strategy is not None:
            strategy = parse_strategy(str(cfg_strategy))
        cfg_mode = cfg_recovery.get("span_mode")
        if cfg_mode is not None:
            span_mode = parse_span_mode(str(cfg_mode))

    if args.strategy is not None:
        strategy = parse_strategy(args.strategy)
    if args.span_mode is not None:
        span_mode = parse_span_mode(args.span_mode)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        strategy=strategy,
        span_mode=span_mode,
        debug=args.debug,
        verbose=args.verbose,
    )


def extract_file(options: CliOptions) -> str:
    """Read and parse a file, then list each raw text node's recovered text."""
    from tagtext.debug import dump_tree
    from tagtext.nodes import iter_raw_text
    from tagtext.parser import parse

    source = options.input_file.read_text(encoding="utf-8")
    doc = parse(source, str(options.input_file), options.span_mode)

    if options.debug:
        dump_tree(doc)

    lines: list[str] = []
    for node in iter_raw_text(doc.children):
        if node.is_empty():
            continue
        pos = node.tokens[0].span.start
        text = node.recover(options.strategy)
        shown = "<unavailable>" if text is None else repr(text)
        lines.append(f"{pos.line}:{pos.column}: {shown}\n")
    return "".join(lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        output = extract_file(options)
    except (LexError, ParseError) as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
