"""Command-line entry point: cjbindgen HEADER OUTPUT."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .api import generate_bindings
from .config import GeneratorConfig, ParseConfig
from .errors import BindgenError
from . import constants

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with the generic failure code."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="cjbindgen",
        description="Generate Cangjie FFI declarations from a C header",
    )
    parser.add_argument("header", help="C header file to translate")
    parser.add_argument("output", help="Path of the generated Cangjie source file")
    parser.add_argument("-I", "--include-dir", action="append", default=[],
                        metavar="DIR", help="Add a user include directory")
    parser.add_argument("--isystem", action="append", default=[],
                        metavar="DIR",
                        help="Add a system include directory (its declarations are skipped)")
    parser.add_argument("-D", "--define", action="append", default=[],
                        metavar="NAME[=VALUE]", help="Define a preprocessor macro")
    parser.add_argument("--package", default=constants.DEFAULT_PACKAGE_NAME,
                        help=f"Package name of the output (default: {constants.DEFAULT_PACKAGE_NAME})")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on the first unmappable declaration instead of skipping it")
    parser.add_argument("--stats", action="store_true",
                        help="Print binding statistics after generation")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    config = GeneratorConfig(package_name=args.package, strict=args.strict)
    parse_config = ParseConfig(
        include_dirs=tuple(args.include_dir),
        system_include_dirs=tuple(args.isystem),
        defines=tuple(args.define),
    )

    try:
        stats = generate_bindings(args.header, args.output, config, parse_config)
    except BindgenError as exc:
        print(f"{constants.FAILURE_PREFIX}: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    print(constants.SUCCESS_MESSAGE)
    if args.stats:
        print()
        print(stats.report())
    return EXIT_SUCCESS
