"""Binary schema decoder.

This module provides decode_schema(), which reads a binary Kiwi schema into
an immutable Schema. Decoding runs in two passes: the first reads every
definition and keeps each field's raw type code, the second resolves those
codes once the whole definition table is known, so fields may reference
definitions that appear later in the stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from ..exceptions import BoundsError, InvalidDefinitionKind, InvalidTypeReference
from .buffer import Buffer, BytesLike
from .schema import (
    DEFINITION_KINDS,
    PRIMITIVE_KINDS,
    Definition,
    DefinitionKind,
    Field,
    FieldType,
    PrimitiveType,
    ReferenceType,
    Schema,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _RawField:
    name: str
    raw_type: Optional[int]
    is_array: bool
    value: int


@dataclass(frozen=True)
class _RawDefinition:
    name: str
    kind: DefinitionKind
    fields: tuple[_RawField, ...]


def decode_schema(data: BytesLike) -> Schema:
    """Decode a binary Kiwi schema.

    Args:
        data: Encoded schema bytes

    Returns:
        Schema with every field type resolved

    Raises:
        BoundsError: If the data is truncated
        InvalidDefinitionKind: If a definition has an unknown kind byte
        InvalidTypeReference: If a field type points outside the primitive
            or definition table

    Example:
        >>> schema = decode_schema(data)
        >>> [d.name for d in schema.definitions]
        ['Color', 'Point']
    """
    buf = Buffer(data)

    count = _read(buf.read_var_uint, "definition count")
    logger.debug("Decoding %d definitions from %d bytes", count, buf.length)

    raw_definitions = [_read_definition(buf, index) for index in range(count)]

    if buf.remaining:
        logger.debug("Ignoring %d trailing bytes after schema", buf.remaining)

    definitions = _resolve(raw_definitions)
    return Schema(definitions=definitions)


def _read(read: Callable[[], T], what: str) -> T:
    """Run a primitive read, naming what was being decoded if it runs out of bytes."""
    try:
        return read()
    except BoundsError as e:
        raise BoundsError(f"Truncated data while decoding {what}: {e}") from e


def _read_definition(buf: Buffer, index: int) -> _RawDefinition:
    name = _read(buf.read_string, f"name of definition {index}")
    kind_byte = _read(buf.read_byte, f"kind of definition {name!r}")
    if kind_byte >= len(DEFINITION_KINDS):
        raise InvalidDefinitionKind(
            f"Definition {name!r}: invalid kind {kind_byte} (expected 0-{len(DEFINITION_KINDS) - 1})",
            kind=kind_byte,
            definition=name,
        )
    kind = DEFINITION_KINDS[kind_byte]
    field_count = _read(buf.read_var_uint, f"field count of definition {name!r}")

    fields = []
    for position in range(field_count):
        where = f"field {position} of definition {name!r}"
        field_name = _read(buf.read_string, f"name of {where}")
        where = f"field {field_name!r} of definition {name!r}"
        # Enum members carry a type code on the wire too; it is meaningless there.
        raw_type = _read(buf.read_var_int, f"type of {where}")
        array_flag = _read(buf.read_byte, f"array flag of {where}")
        value = _read(buf.read_var_uint, f"value of {where}")
        fields.append(
            _RawField(
                name=field_name,
                raw_type=None if kind is DefinitionKind.ENUM else raw_type,
                is_array=bool(array_flag & 1),
                value=value,
            )
        )

    return _RawDefinition(name=name, kind=kind, fields=tuple(fields))


def _resolve(raw_definitions: Sequence[_RawDefinition]) -> tuple[Definition, ...]:
    names = [raw.name for raw in raw_definitions]
    definitions = []
    for raw in raw_definitions:
        fields = tuple(
            Field(
                name=raw_field.name,
                raw_type=raw_field.raw_type,
                type=_resolve_type(raw_field, raw.name, names),
                is_array=raw_field.is_array,
                value=raw_field.value,
            )
            for raw_field in raw.fields
        )
        definitions.append(Definition(name=raw.name, kind=raw.kind, fields=fields))

    logger.debug("Resolved field types for %d definitions", len(definitions))
    return tuple(definitions)


def _resolve_type(
    raw_field: _RawField, definition: str, names: Sequence[str]
) -> Optional[FieldType]:
    raw_type = raw_field.raw_type
    if raw_type is None:
        return None

    if raw_type < 0:
        primitive = ~raw_type
        if primitive >= len(PRIMITIVE_KINDS):
            raise InvalidTypeReference(
                f"Field {definition}.{raw_field.name}: invalid type {raw_type} "
                f"(primitive index {primitive}, only {len(PRIMITIVE_KINDS)} primitives)",
                raw_type=raw_type,
                definition=definition,
                field=raw_field.name,
            )
        return PrimitiveType(kind=PRIMITIVE_KINDS[primitive])

    if raw_type >= len(names):
        raise InvalidTypeReference(
            f"Field {definition}.{raw_field.name}: invalid type {raw_type} "
            f"(only {len(names)} definitions)",
            raw_type=raw_type,
            definition=definition,
            field=raw_field.name,
        )
    return ReferenceType(index=raw_type, name=names[raw_type])
