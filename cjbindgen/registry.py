"""Symbol Registry: emitted names and buffered typedef aliases for one run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .declarations import TypedefDecl
from . import target_types as tt

logger = logging.getLogger(__name__)


@dataclass
class SymbolRegistry:
    """Run-scoped record of what has been emitted so far.

    Registering a name twice is not an error: headers reachable through
    several include paths legitimately repeat declarations, and the second
    registration simply reports that the name was already seen.
    """

    record_names: set[str] = field(default_factory=set)
    enum_names: set[str] = field(default_factory=set)
    function_names: set[str] = field(default_factory=set)
    pending_aliases: list[TypedefDecl] = field(default_factory=list)

    def register_record(self, name: str) -> bool:
        return _register(self.record_names, name, "record")

    def register_enum(self, name: str) -> bool:
        return _register(self.enum_names, name, "enum")

    def register_function(self, name: str) -> bool:
        return _register(self.function_names, name, "function")

    def buffer_alias(self, alias: TypedefDecl) -> None:
        if alias.name == str(alias.underlying):
            logger.debug("Not buffering identity typedef '%s'", alias.name)
            return
        self.pending_aliases.append(alias)

    def is_resolvable(self, alias: TypedefDecl) -> bool:
        """True when *alias* names a registered record under a different name."""
        target = alias.underlying
        return (
            isinstance(target, tt.NamedRecord)
            and target.name in self.record_names
            and alias.name != target.name
        )

    def resolve_aliases(self) -> list[TypedefDecl]:
        """Buffered aliases that may be emitted, in declaration order."""
        resolved: list[TypedefDecl] = []
        for alias in self.pending_aliases:
            if self.is_resolvable(alias):
                resolved.append(alias)
            else:
                logger.debug(
                    "Dropping typedef '%s' -> %s", alias.name, alias.underlying
                )
        return resolved


def _register(names: set[str], name: str, what: str) -> bool:
    if name in names:
        logger.debug("Skipping duplicate %s '%s'", what, name)
        return False
    names.add(name)
    return True
