"""Command-line entry point: translate a JavaScript file to Go."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .api import dump_go, translate_estree_json
from .bindings import GO_SYSCALL_JS, load_bindings
from .errors import JsSyntaxError, TranslationError
from .formatter import BraceIndentFormatter, IdentityFormatter
from . import constants

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="js2go",
        description="Translate JavaScript into Go code driving syscall/js",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="JavaScript file to translate ('-' for stdin; default: built-in demo)",
    )
    parser.add_argument(
        "--estree",
        action="store_true",
        help="Treat the input as ESTree JSON instead of JavaScript source",
    )
    parser.add_argument(
        "--bindings",
        "-b",
        default=None,
        help="JSON file overriding the target interop tokens",
    )
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Print the raw generated lines without re-indenting",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatched node",
    )
    return parser


def _read_input(path: str | None) -> str:
    if path is None:
        print("No file provided. Using built-in demo:\n")
        print(constants.DEMO_SOURCE)
        return constants.DEMO_SOURCE
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    formatter = IdentityFormatter() if args.no_format else BraceIndentFormatter()
    try:
        bindings = load_bindings(args.bindings) if args.bindings else GO_SYSCALL_JS
        source = _read_input(args.file)
        if args.estree:
            output = formatter.format("\n".join(translate_estree_json(source, bindings)))
        else:
            output = dump_go(source, bindings, formatter)
    except (
        OSError,
        json.JSONDecodeError,
        ValidationError,
        JsSyntaxError,
        TranslationError,
    ) as exc:
        logger.debug("Translation failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
