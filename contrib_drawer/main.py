#!/usr/bin/env python3
"""
Main driver script for the contributions drawer.

This script provides the command-line interface: it resolves the run
configuration, reads the drawing, validates it and writes a shell script
that creates the backdated commits.

Usage (example):
    python -m contrib_drawer -i heart.txt -o draw.sh -n "Jane Doe" -e jane@example.org
"""

import argparse
import contextlib
import datetime
import logging
import os
import sys
from typing import List, NoReturn, Optional, TextIO

from .dates import DateMapper
from .generator import CommitScriptGenerator, commit_count
from .models import DrawConfig, DrawError, ErrorKind
from .parser import GridParser

logger = logging.getLogger("contrib-drawer")

DEFAULT_NAME = "No One"
DEFAULT_EMAIL = "example@example.org"
DEFAULT_MESSAGES_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "commit_messages.txt")

EXIT_FAILURE = 1
EXIT_USAGE = 2


class DrawArgumentParser(argparse.ArgumentParser):
    """Report usage errors as ``prog: message`` followed by the full help."""

    def error(self, message: str) -> NoReturn:
        self.exit(EXIT_USAGE, f"{self.prog}: {message}\n\n{self.format_help()}")


def build_parser(prog: Optional[str] = None) -> DrawArgumentParser:
    parser = DrawArgumentParser(
        prog=prog,
        description="Draw ASCII art on the GitHub contributions graph with backdated empty commits.",
        epilog="Each input character is a base-36 digit (0-9, a-z) giving the number of commits "
               "for that day. Up to 7 lines (Sunday to Saturday), one column per week, 52 weeks. "
               "'|' characters are ignored.",
    )
    parser.add_argument("--input", "-i", metavar="INPUT", default=None,
                        help="Set input file. Default: STDIN.")
    parser.add_argument("--output", "-o", metavar="OUTPUT", default=None,
                        help="Set output file. Default: STDOUT.")
    parser.add_argument("--name", "-n", metavar="NAME", dest="names", action="append", default=[],
                        help="Set GIT_AUTHOR_NAME & GIT_COMMITTER_NAME. Allows multiple values. "
                             f"Default: `{DEFAULT_NAME}`.")
    parser.add_argument("--email", "-e", metavar="EMAIL", dest="emails", action="append", default=[],
                        help="Set GIT_AUTHOR_EMAIL & GIT_COMMITTER_EMAIL. Allows multiple values. "
                             f"Default: `{DEFAULT_EMAIL}`.")
    parser.add_argument("--message", "-m", metavar="MESSAGE", dest="messages", action="append", default=[],
                        help="Set commit message. Allows multiple values. If prefixed with @, the rest "
                             "is a file whose lines replace all messages given so far. "
                             "Default: the bundled commit_messages.txt.")
    parser.add_argument("--today", metavar="YYYY-MM-DD", type=_iso_date, default=None,
                        help="Anchor the graph on this day instead of the current date.")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Log progress to STDERR (repeat for debug output).")
    return parser


def _iso_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r}") from None


def read_lines(path: str) -> List[str]:
    """
    Read a text file as a list of lines without their terminators.

    Raises:
        DrawError: If the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return [line.rstrip("\n") for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise DrawError(ErrorKind.IO_FAILURE, f"cannot read {path}: {e}") from e


def resolve_messages(values: List[str]) -> List[str]:
    """
    Apply ``-m`` values in command-line order.

    Plain values are appended; ``@PATH`` replaces everything collected so
    far with the lines of PATH.
    """
    messages: List[str] = []
    for value in values:
        if value.startswith("@"):
            messages = read_lines(value[1:])
        else:
            messages.append(value)
    return messages


def resolve_config(args: argparse.Namespace) -> DrawConfig:
    """
    Turn parsed arguments into a complete configuration, applying defaults.

    Raises:
        DrawError: If a message file cannot be read
    """
    messages = resolve_messages(args.messages)
    if not messages:
        logger.debug("No commit messages given, loading %s", DEFAULT_MESSAGES_FILE)
        messages = read_lines(DEFAULT_MESSAGES_FILE)

    return DrawConfig(
        names=tuple(args.names or [DEFAULT_NAME]),
        emails=tuple(args.emails or [DEFAULT_EMAIL]),
        messages=tuple(messages),
        input_path=args.input,
        output_path=args.output,
        today=args.today,
        verbose=args.verbose,
    )


def configure_logging(prog: str, verbose: int) -> None:
    """Send log records to STDERR as single ``prog: message`` lines."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(f"{prog}: %(message)s"))
    logger.handlers[:] = [handler]
    logger.propagate = False
    if verbose >= 2:
        logger.setLevel(logging.DEBUG)
    elif verbose == 1:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)


def _open(stack: contextlib.ExitStack, path: str, mode: str) -> TextIO:
    try:
        return stack.enter_context(open(path, mode, encoding="utf-8"))
    except OSError as e:
        raise DrawError(ErrorKind.IO_FAILURE, f"cannot open {path}: {e}") from e


def run(config: DrawConfig) -> None:
    """
    Read, validate and draw according to config.

    The output is opened only once the grid is valid, so a rejected drawing
    leaves any existing output file untouched.

    Raises:
        DrawError: On invalid drawings and I/O failures
    """
    with contextlib.ExitStack() as stack:
        source = sys.stdin if config.input_path is None else _open(stack, config.input_path, "r")
        try:
            text = source.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DrawError(ErrorKind.IO_FAILURE, f"cannot read input: {e}") from e

        grid = GridParser.parse(text).unwrap()
        mapper = DateMapper(config.today)
        logger.info("Drawing %d commits on the graph starting %s", commit_count(grid), mapper.graph_origin)

        generator = CommitScriptGenerator(config.names, config.emails, config.messages, mapper)
        sink = sys.stdout if config.output_path is None else _open(stack, config.output_path, "w")
        try:
            generator.write_script(grid, sink)
        except OSError as e:
            raise DrawError(ErrorKind.IO_FAILURE, f"cannot write output: {e}") from e


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the contributions drawer.

    Exits with status 0 on success, 2 on usage errors and 1 on any other
    failure, after reporting it on STDERR.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(parser.prog, args.verbose)

    try:
        config = resolve_config(args)
        run(config)
    except DrawError as e:
        logger.error("%s", e.message)
        logger.debug("Failure kind: %s", e.kind.value)
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        logger.error("interrupted")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
