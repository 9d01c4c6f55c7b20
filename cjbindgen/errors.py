"""Error kinds raised while turning a C header into bindings."""

from __future__ import annotations


class BindgenError(Exception):
    """Base class for every failure the generator reports to its caller."""


class UnsupportedCType(BindgenError):
    """A C type has no target-language mapping."""

    def __init__(self, kind: str, spelling: str = ""):
        self.kind = kind
        self.spelling = spelling
        detail = f" ({spelling})" if spelling else ""
        super().__init__(f"unsupported C type '{kind}'{detail}")


class MissingName(BindgenError):
    """An anonymous record, enum or field reached a stage that needs a name."""

    def __init__(self, what: str):
        self.what = what
        super().__init__(f"anonymous {what} cannot be referenced by name")


class MisalignedBitfield(BindgenError):
    """A run of bit-fields does not add up to a whole number of bytes."""

    def __init__(self, total_bits: int):
        self.total_bits = total_bits
        super().__init__(
            f"bit-field run spans {total_bits} bits, which is not a multiple of 8"
        )


class IOFailure(BindgenError):
    """The output artifact could not be created or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write '{path}': {reason}")


class HeaderParseError(BindgenError):
    """The C frontend reported error-severity diagnostics."""

    def __init__(self, path: str, diagnostics: list[str]):
        self.path = path
        self.diagnostics = diagnostics
        first = diagnostics[0] if diagnostics else "unknown error"
        more = f" (+{len(diagnostics) - 1} more)" if len(diagnostics) > 1 else ""
        super().__init__(f"failed to parse '{path}': {first}{more}")


class DeclarationError(BindgenError):
    """Wraps a failure with the declaration it happened in."""

    def __init__(self, decl: str, location: str, cause: BindgenError):
        self.decl = decl
        self.location = location
        self.cause = cause
        super().__init__(f"{location}: {decl}: {cause}")
