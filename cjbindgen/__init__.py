"""C header to Cangjie FFI binding generator."""

from .api import (  # noqa: F401
    parse_header,
    parse_header_source,
    translate_unit,
    translate_header_source,
    generate_bindings,
)
from .config import GeneratorConfig, ParseConfig  # noqa: F401
