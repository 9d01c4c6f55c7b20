"""Orchestrator: drives the three emission passes over a translation unit."""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from .c_ast import DeclKind, DeclNode, TranslationUnitNode
from .config import GenerationResult, GenerationStats, GeneratorConfig
from .declarations import build_enum, build_function, build_struct, build_typedef
from .emitters import (
    render_enum,
    render_function,
    render_header,
    render_placeholder,
    render_struct,
    render_typedef,
)
from .errors import DeclarationError, MisalignedBitfield, MissingName, UnsupportedCType
from .registry import SymbolRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BindingGenerator:
    """Turns a resolved C translation unit into one Cangjie source text.

    The passes run in a fixed order:

    1. enums and functions are emitted, typedefs are buffered;
    2. struct definitions are emitted, registering every record name;
    3. buffered typedefs that name a registered struct are emitted as aliases.

    Aliases can only be judged once the full set of record names is known,
    which is why pass 2 must finish before pass 3 starts. Declarations that
    come from system headers are skipped in every pass.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self._config = config or GeneratorConfig()
        self._registry = SymbolRegistry()
        self._out: list[str] = []
        self._stats = GenerationStats()
        self._PASSES: list[dict[DeclKind, Callable[[DeclNode], None]]] = [
            {
                DeclKind.ENUM: self._emit_enum,
                DeclKind.FUNCTION: self._emit_function,
                DeclKind.TYPEDEF: self._buffer_typedef,
            },
            {
                DeclKind.STRUCT: self._emit_struct,
                DeclKind.UNION: self._skip_union,
            },
        ]

    # ── entry point ──────────────────────────────────────────────

    def generate(self, unit: TranslationUnitNode) -> GenerationResult:
        self._registry = SymbolRegistry()
        self._out = [render_header(self._config.package_name)]
        self._stats = GenerationStats(header=unit.path)

        own = [d for d in unit.declarations if not d.in_system_header]
        self._stats.system_declarations = len(unit.declarations) - len(own)
        logger.info(
            "Generating bindings for %s (%d declarations, %d from system headers)",
            unit.path or "<memory>",
            len(own),
            self._stats.system_declarations,
        )

        for number, dispatch in enumerate(self._PASSES, start=1):
            logger.debug("Pass %d", number)
            for node in own:
                handler = dispatch.get(node.kind)
                if handler:
                    handler(node)

        logger.debug("Pass %d", len(self._PASSES) + 1)
        self._flush_aliases()

        logger.info(
            "Emitted %d enum(s), %d struct(s), %d function(s), %d alias(es)",
            self._stats.enums,
            self._stats.structs,
            self._stats.functions,
            self._stats.aliases,
        )
        return GenerationResult(text="".join(self._out), stats=self._stats)

    # ── pass 1 ───────────────────────────────────────────────────

    def _emit_enum(self, node: DeclNode):
        decl = self._build(node, build_enum)
        if decl is None:
            return
        if decl.name and not self._registry.register_enum(decl.name):
            self._stats.duplicates += 1
            return
        self._out.append(render_enum(decl))
        self._stats.enums += 1
        self._stats.enum_constants += len(decl.constants)

    def _emit_function(self, node: DeclNode):
        decl = self._build(node, build_function)
        if decl is None:
            return
        if not self._registry.register_function(decl.name):
            self._stats.duplicates += 1
            return
        if node.is_variadic:
            logger.warning(
                "%s: %s is variadic; only its fixed parameters are emitted",
                node.location,
                node.describe(),
            )
        self._out.append(render_function(decl))
        self._stats.functions += 1

    def _buffer_typedef(self, node: DeclNode):
        try:
            decl = build_typedef(node)
        except (UnsupportedCType, MissingName) as exc:
            if self._config.strict:
                raise DeclarationError(node.describe(), str(node.location), exc) from exc
            # aliases only ever name records, so this one would be dropped anyway
            logger.debug("%s: dropping %s: %s", node.location, node.describe(), exc)
            return
        self._registry.buffer_alias(decl)

    # ── pass 2 ───────────────────────────────────────────────────

    def _emit_struct(self, node: DeclNode):
        if not node.is_definition:
            logger.debug("Skipping forward declaration of %s", node.describe())
            return
        decl = self._build(node, build_struct)
        if decl is None:
            return
        if not self._registry.register_record(decl.name):
            self._stats.duplicates += 1
            return
        self._out.append(render_struct(decl))
        self._stats.structs += 1

    def _skip_union(self, node: DeclNode):
        if node.is_definition:
            logger.warning(
                "%s: %s has no C-layout equivalent and is not emitted",
                node.location,
                node.describe(),
            )

    # ── pass 3 ───────────────────────────────────────────────────

    def _flush_aliases(self):
        resolved = self._registry.resolve_aliases()
        for alias in resolved:
            self._out.append(render_typedef(alias))
        self._stats.aliases = len(resolved)
        self._stats.dropped_aliases = len(self._registry.pending_aliases) - len(resolved)

    # ── error policy ─────────────────────────────────────────────

    def _build(self, node: DeclNode, builder: Callable[[DeclNode], T]) -> Optional[T]:
        """Run *builder*, turning unmappable declarations into placeholders.

        Bit-field misalignment is always fatal: the struct's layout cannot be
        reproduced, and silently dropping it would break every struct that
        embeds it.
        """
        try:
            return builder(node)
        except MisalignedBitfield as exc:
            raise DeclarationError(node.describe(), str(node.location), exc) from exc
        except (UnsupportedCType, MissingName) as exc:
            if self._config.strict:
                raise DeclarationError(node.describe(), str(node.location), exc) from exc
            logger.warning("%s: skipping %s: %s", node.location, node.describe(), exc)
            self._out.append(render_placeholder(node.describe(), str(node.location), str(exc)))
            self._stats.placeholders += 1
            return None


def generate(unit: TranslationUnitNode, config: Optional[GeneratorConfig] = None) -> GenerationResult:
    """Run one generation over *unit* with a fresh registry."""
    return BindingGenerator(config).generate(unit)
