"""Composable API functions for the binding generator.

Each function corresponds to a stage of the CLI workflow but is callable
programmatically without argparse.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Optional

from .c_ast import TranslationUnitNode
from .config import GenerationResult, GenerationStats, GeneratorConfig, ParseConfig
from .errors import IOFailure
from .frontend import HeaderFrontend
from .orchestrator import BindingGenerator
from .parser import ClangParserFactory, Parser

logger = logging.getLogger(__name__)


def parse_header(
    path: str,
    parse_config: Optional[ParseConfig] = None,
) -> TranslationUnitNode:
    """Parse a header file on disk into the C AST.

    Args:
        path: Path of the header to parse.
        parse_config: Include directories, defines and extra clang flags.

    Returns:
        The top-level declarations of the header and everything it includes.

    Raises:
        HeaderParseError: clang reported an error-severity diagnostic.
    """
    parse_config = parse_config or ParseConfig()
    logger.info("Parsing %s", path)
    tu = Parser(ClangParserFactory()).parse(path, parse_config.clang_args())
    return HeaderFrontend().convert(tu)


def parse_header_source(
    source: str,
    filename: str = "input.h",
    parse_config: Optional[ParseConfig] = None,
) -> TranslationUnitNode:
    """Parse header text held in memory, as if it were stored at *filename*."""
    parse_config = parse_config or ParseConfig()
    logger.info("Parsing in-memory header %s", filename)
    tu = Parser(ClangParserFactory()).parse(
        filename,
        parse_config.clang_args(),
        unsaved_files=[(filename, source)],
    )
    return HeaderFrontend().convert(tu)


def translate_unit(
    unit: TranslationUnitNode,
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    """Run the three emission passes over an already parsed unit.

    Args:
        unit: The resolved C declarations.
        config: Package name and error policy.

    Returns:
        The generated text together with run statistics.
    """
    return BindingGenerator(config).generate(unit)


def translate_header_source(
    source: str,
    filename: str = "input.h",
    config: Optional[GeneratorConfig] = None,
    parse_config: Optional[ParseConfig] = None,
) -> str:
    """Parse header text and return the generated bindings as a string."""
    unit = parse_header_source(source, filename, parse_config)
    return translate_unit(unit, config).text


def generate_bindings(
    header_path: str,
    output_path: str,
    config: Optional[GeneratorConfig] = None,
    parse_config: Optional[ParseConfig] = None,
) -> GenerationStats:
    """Parse *header_path* and write its bindings to *output_path*.

    The output is generated completely in memory first; the destination is
    only replaced once the whole text exists, so a failed run never leaves
    a truncated file behind.

    Raises:
        HeaderParseError: the header could not be parsed.
        DeclarationError: a declaration failed under the active error policy.
        IOFailure: the output could not be written.
    """
    unit = parse_header(header_path, parse_config)
    result = translate_unit(unit, config)
    write_output(output_path, result.text)
    logger.info("Wrote %d bytes to %s", len(result.text), output_path)
    return result.stats


def write_output(path: str, text: str) -> None:
    """Atomically replace *path* with *text*."""
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".cjbindgen-", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise IOFailure(path, exc.strerror or str(exc)) from exc
