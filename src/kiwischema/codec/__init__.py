"""Kiwi binary codec for kiwischema.

This module provides the primitive byte reader and the binary schema decoder.
"""

from __future__ import annotations

from .buffer import Buffer
from .decoder import decode_schema
from .schema import (
    Definition,
    DefinitionKind,
    Field,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    Schema,
    SchemaIndex,
)

__all__ = [
    "Buffer",
    "decode_schema",
    "Schema",
    "SchemaIndex",
    "Definition",
    "DefinitionKind",
    "Field",
    "PrimitiveKind",
    "PrimitiveType",
    "ReferenceType",
]
