"""kiwischema: Kiwi Binary Schema Decoder

A Python library for reading schemas in the Kiwi binary format, the compact
schema encoding used by Kiwi message formats, and for generating Python
decoders from them.

Key Features:
- Exact Kiwi primitive codec (varints, zigzag integers, packed floats, strings)
- Forward-reference-tolerant type resolution
- Immutable Pydantic-based schema model
- Python decoder generation and Kiwi text rendering

Quick Start:
    >>> from kiwischema import decode_schema, compile_python
    >>>
    >>> with open("schema.bin", "rb") as f:
    ...     schema = decode_schema(f.read())
    >>> for definition in schema.definitions:
    ...     print(definition.kind.value, definition.name)
    >>> source = compile_python(schema)
"""

from __future__ import annotations

from .codec import (
    Buffer,
    Definition,
    DefinitionKind,
    Field,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    Schema,
    SchemaIndex,
    decode_schema,
)
from .exceptions import (
    BoundsError,
    CompileError,
    DecodeError,
    InvalidDefinitionKind,
    InvalidTypeReference,
    KiwiError,
    SchemaError,
)
from .export import CompileConfig, ExtraField, compile_python, format_schema, parse_extra_field

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Buffer",
    "decode_schema",
    # Schema model
    "Schema",
    "SchemaIndex",
    "Definition",
    "DefinitionKind",
    "Field",
    "PrimitiveKind",
    "PrimitiveType",
    "ReferenceType",
    # Exceptions
    "KiwiError",
    "DecodeError",
    "BoundsError",
    "SchemaError",
    "InvalidTypeReference",
    "InvalidDefinitionKind",
    "CompileError",
    # Export
    "compile_python",
    "CompileConfig",
    "ExtraField",
    "parse_extra_field",
    "format_schema",
    # Version
    "__version__",
]
