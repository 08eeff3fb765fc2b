"""Schema analysis CLI command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..codec.schema import Definition, DefinitionKind, Schema, SchemaIndex

WIDTH = 54


def analyze_schema(schema: Schema, source: Optional[Path] = None) -> None:
    """Print a summary of every definition in a decoded schema.

    Args:
        schema: Decoded schema
        source: Path the schema was read from, for the header line
    """
    count = len(schema.definitions)
    print("|" * 7, "kiwischema: Kiwi Binary Schema Decoder", "|" * 7)
    origin = f" from {source}" if source is not None else ""
    print(f"{count} definition{'s' if count != 1 else ''} loaded{origin}.")
    print()

    index = SchemaIndex.from_schema(schema)
    print(
        f"enums: {len(index.enums)}  structs: {len(index.structs)}  "
        f"messages: {len(index.messages)}"
    )
    print()

    for position, definition in enumerate(schema.definitions):
        analyze_definition(definition, position)


def analyze_definition(definition: Definition, position: int) -> None:
    """Print one definition with its fields.

    Args:
        definition: Definition to describe
        position: Index of the definition in the schema (its type code)
    """
    print(f"{'=' * 19} {position}: {definition.kind.value} {definition.name} {'=' * 19}")

    for i, item in enumerate(definition.fields, 1):
        field_desc = f"{i}. {item.name}"
        if definition.kind is DefinitionKind.ENUM:
            info = f"= {item.value}"
        else:
            info = str(item.type) + ("[]" if item.is_array else "")
            if definition.kind is DefinitionKind.MESSAGE:
                info += f" (index {item.value})"

        dots = "." * max(1, WIDTH - len(field_desc) - len(info))
        print(f"        {field_desc}{dots}{info}")

    if not definition.fields:
        print("        (no fields)")
    print()
