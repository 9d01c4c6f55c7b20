"""Generation configuration and run data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field

from . import constants


@dataclass(frozen=True)
class GeneratorConfig:
    """Groups binding generation configuration.

    ``strict`` turns unmappable declarations into run-fatal errors instead
    of placeholder comments.
    """

    package_name: str = constants.DEFAULT_PACKAGE_NAME
    strict: bool = False


@dataclass(frozen=True)
class ParseConfig:
    """Groups the options handed to the C frontend."""

    include_dirs: tuple[str, ...] = ()
    system_include_dirs: tuple[str, ...] = ()
    defines: tuple[str, ...] = ()
    extra_args: tuple[str, ...] = ()
    language_standard: str = constants.DEFAULT_LANGUAGE_STANDARD

    def clang_args(self) -> list[str]:
        args = ["-x", "c", f"-std={self.language_standard}"]
        args.extend(f"-I{d}" for d in self.include_dirs)
        for d in self.system_include_dirs:
            args.extend(["-isystem", d])
        args.extend(f"-D{d}" for d in self.defines)
        args.extend(self.extra_args)
        return args


@dataclass
class GenerationStats:
    """Counts of what one run emitted, skipped and replaced."""

    header: str = ""
    enums: int = 0
    enum_constants: int = 0
    structs: int = 0
    functions: int = 0
    aliases: int = 0
    dropped_aliases: int = 0
    duplicates: int = 0
    system_declarations: int = 0
    placeholders: int = 0

    def report(self) -> str:
        rows = [
            ("Enums", f"{self.enums} ({self.enum_constants} constants)"),
            ("Structs", str(self.structs)),
            ("Functions", str(self.functions)),
            ("Type aliases", f"{self.aliases} ({self.dropped_aliases} dropped)"),
            ("Duplicates skipped", str(self.duplicates)),
            ("System declarations", str(self.system_declarations)),
            ("Placeholders", str(self.placeholders)),
        ]
        lines = [
            "═══ Binding Statistics ═══",
            f"  Header: {self.header or '<memory>'}",
            "",
        ]
        lines.extend(f"  {name:<20} {value}" for name, value in rows)
        return "\n".join(lines)


@dataclass
class GenerationResult:
    text: str
    stats: GenerationStats = field(default_factory=GenerationStats)
