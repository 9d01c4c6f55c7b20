"""libclang Parsing Layer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .errors import HeaderParseError

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Abstract factory for obtaining a C parsing index."""

    @abstractmethod
    def get_index(self): ...


class ClangParserFactory(ParserFactory):
    """Concrete factory that delegates to the libclang Python bindings."""

    def get_index(self):
        import clang.cindex

        return clang.cindex.Index.create()


class Parser:
    """Thin wrapper around a parser factory.

    Error-severity diagnostics abort the parse; anything milder is logged
    and the translation unit is returned as is.
    """

    def __init__(self, parser_factory: ParserFactory):
        self._factory = parser_factory

    def parse(
        self,
        path: str,
        args: list[str],
        unsaved_files: Optional[list[tuple[str, str]]] = None,
    ):
        import clang.cindex

        index = self._factory.get_index()
        try:
            tu = index.parse(
                path,
                args=args,
                unsaved_files=unsaved_files,
                options=clang.cindex.TranslationUnit.PARSE_SKIP_FUNCTION_BODIES,
            )
        except clang.cindex.TranslationUnitLoadError as exc:
            raise HeaderParseError(path, [str(exc)]) from exc

        errors = []
        for diag in tu.diagnostics:
            if diag.severity >= clang.cindex.Diagnostic.Error:
                errors.append(_format_diagnostic(diag))
            elif diag.severity >= clang.cindex.Diagnostic.Warning:
                logger.warning("%s", _format_diagnostic(diag))
        if errors:
            raise HeaderParseError(path, errors)
        return tu


def _format_diagnostic(diag) -> str:
    loc = diag.location
    if loc.file:
        return f"{loc.file.name}:{loc.line}:{loc.column}: {diag.spelling}"
    return diag.spelling
