"""Command-line interface for intcalc: the read-evaluate-print loop."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from intcalc.errors import EvalError, LexError, ParseError

DEFAULT_PROMPT = "calc> "
DEFAULT_BANNER = "Please insert the formula you want to calculate. Press CTRL-c to exit"
CONFIG_NAME = "intcalc.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    expressions: list[str]
    prompt: str
    banner: str
    allow_trailing: bool
    quiet: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="intcalc",
        description="Integer calculator for + - * / and parentheses",
    )
    p.add_argument(
        "input",
        nargs="?",
        help="File of expressions, one per line (default: read stdin)",
    )
    p.add_argument(
        "-e",
        "--expr",
        action="append",
        default=[],
        metavar="EXPR",
        help="Evaluate EXPR and exit (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--prompt", default=None, metavar="TEXT", help="Interactive prompt")
    p.add_argument(
        "--allow-trailing",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Ignore tokens after a complete expression instead of reporting them",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="No banner or prompt")
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))

    prompt = DEFAULT_PROMPT
    banner = DEFAULT_BANNER
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        if isinstance(cfg_repl.get("prompt"), str):
            prompt = cfg_repl["prompt"]
        if isinstance(cfg_repl.get("banner"), str):
            banner = cfg_repl["banner"]
    if args.prompt is not None:
        prompt = args.prompt

    allow_trailing = False
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_trailing = cfg_parser.get("allow_trailing")
        if isinstance(cfg_trailing, bool):
            allow_trailing = cfg_trailing
    if args.allow_trailing is not None:
        allow_trailing = args.allow_trailing

    input_file = Path(args.input) if args.input and args.input != "-" else None

    return CliOptions(
        input_file=input_file,
        expressions=list(args.expr),
        prompt=prompt,
        banner=banner,
        allow_trailing=allow_trailing,
        quiet=args.quiet,
        debug=args.debug,
    )


def process_line(
    source: str,
    options: CliOptions,
    *,
    line: int = 1,
    filename: str = "<stdin>",
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Evaluate one line and print its value or diagnostic.

    Returns the line's exit code: 0 on success, 1 for lex/parse errors,
    2 for evaluation errors. Calculator errors never reach the caller.
    """
    from intcalc.debug import dump_tokens
    from intcalc.lexer import Lexer
    from intcalc.parser import Parser

    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    try:
        if options.debug:
            dump_tokens(source, line=line, file=err)
        parser = Parser(Lexer(source, line), source, allow_trailing=options.allow_trailing)
        value = parser.evaluate()
    except (LexError, ParseError) as exc:
        print(exc.format(filename), file=err)
        return 1
    except EvalError as exc:
        print(exc.format(filename), file=err)
        return 2

    print(value, file=out)
    return 0


def run_loop(
    options: CliOptions,
    stream: TextIO,
    *,
    interactive: bool,
    filename: str = "<stdin>",
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Read lines until the stream closes or the user interrupts.

    Interactive sessions always return 0; batch runs return the worst
    exit code seen on any line.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    show_prompt = interactive and not options.quiet

    if show_prompt and options.banner:
        print(options.banner, file=out)

    status = 0
    line = 0
    try:
        while True:
            if show_prompt:
                out.write(options.prompt)
                out.flush()
            text = stream.readline()
            if not text:
                break
            line += 1
            if not text.strip():
                continue
            code = process_line(text, options, line=line, filename=filename, out=out, err=err)
            status = max(status, code)
    except KeyboardInterrupt:
        pass

    if show_prompt:
        out.write("\n")
    return 0 if interactive else status


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    if options.expressions:
        status = 0
        for source in options.expressions:
            status = max(status, process_line(source, options, filename="<expr>"))
        return status

    if options.input_file is not None:
        try:
            f = open(options.input_file, encoding="utf-8", errors="replace")
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        with f:
            return run_loop(options, f, interactive=False, filename=str(options.input_file))

    # Undecodable bytes become U+FFFD and are reported as invalid characters
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(errors="replace")
    return run_loop(options, sys.stdin, interactive=sys.stdin.isatty())


def run() -> None:
    """Console script wrapper around main()."""
    sys.exit(main())
