"""Immutable model of a decoded Kiwi schema.

This module defines the definition tree returned by decode_schema(): a
Schema holds Definitions in stream order, each Definition holds Fields, and
every non-enum Field carries a resolved type (a primitive or a reference to
another definition).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, NonNegativeInt
from pydantic import Field as ModelField


class PrimitiveKind(str, enum.Enum):
    """Built-in Kiwi types, in wire order (raw type -1 is BOOL, -2 is BYTE, ...)."""

    BOOL = "bool"
    BYTE = "byte"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STRING = "string"
    INT64 = "int64"
    UINT64 = "uint64"


class DefinitionKind(str, enum.Enum):
    """Kind of a definition, in wire order (kind byte 0, 1, 2)."""

    ENUM = "ENUM"
    STRUCT = "STRUCT"
    MESSAGE = "MESSAGE"


PRIMITIVE_KINDS: tuple[PrimitiveKind, ...] = tuple(PrimitiveKind)
DEFINITION_KINDS: tuple[DefinitionKind, ...] = tuple(DefinitionKind)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PrimitiveType(_Frozen):
    """A built-in type such as ``uint`` or ``string``."""

    category: Literal["primitive"] = "primitive"
    kind: PrimitiveKind

    def __str__(self) -> str:
        return self.kind.value


class ReferenceType(_Frozen):
    """A reference to another definition of the same schema.

    Attributes:
        index: Position of the target in Schema.definitions
        name: Name of the target definition
    """

    category: Literal["reference"] = "reference"
    index: NonNegativeInt
    name: str

    def __str__(self) -> str:
        return self.name


FieldType = Annotated[Union[PrimitiveType, ReferenceType], ModelField(discriminator="category")]


class Field(_Frozen):
    """A single field of a definition.

    Attributes:
        name: Field name
        raw_type: Type code as read from the wire (None for enum members)
        type: Resolved type (None for enum members)
        is_array: Whether the field holds a list of values
        value: Enum ordinal, or field index for structs and messages
    """

    name: str
    raw_type: Optional[int] = None
    type: Optional[FieldType] = None
    is_array: bool = False
    value: NonNegativeInt = 0


class Definition(_Frozen):
    """An enum, struct or message definition."""

    name: str
    kind: DefinitionKind
    fields: tuple[Field, ...] = ()

    @property
    def is_enum(self) -> bool:
        return self.kind is DefinitionKind.ENUM

    def field(self, name: str) -> Field:
        """Return the field with the given name.

        Raises:
            KeyError: If the definition has no such field
        """
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        raise KeyError(f"{self.name} has no field {name!r}")


class Schema(_Frozen):
    """A decoded schema: definitions in the order they appear on the wire."""

    package: Optional[str] = None
    definitions: tuple[Definition, ...] = ()

    def definition(self, name: str) -> Definition:
        """Return the definition with the given name.

        Raises:
            KeyError: If no definition has that name
        """
        for candidate in self.definitions:
            if candidate.name == name:
                return candidate
        raise KeyError(f"No definition named {name!r}")


@dataclass(frozen=True)
class SchemaIndex:
    """Read-only name lookups over a schema, built once and passed explicitly.

    Example:
        >>> index = SchemaIndex.from_schema(schema)
        >>> index.is_enum("Color")
        True
    """

    enums: frozenset[str]
    structs: frozenset[str]
    messages: frozenset[str]

    @classmethod
    def from_schema(cls, schema: Schema) -> SchemaIndex:
        """Build the lookup tables from a decoded schema."""
        names: dict[DefinitionKind, set[str]] = {kind: set() for kind in DefinitionKind}
        for definition in schema.definitions:
            names[definition.kind].add(definition.name)
        return cls(
            enums=frozenset(names[DefinitionKind.ENUM]),
            structs=frozenset(names[DefinitionKind.STRUCT]),
            messages=frozenset(names[DefinitionKind.MESSAGE]),
        )

    def is_enum(self, name: str) -> bool:
        return name in self.enums

    def is_struct(self, name: str) -> bool:
        return name in self.structs

    def is_message(self, name: str) -> bool:
        return name in self.messages
