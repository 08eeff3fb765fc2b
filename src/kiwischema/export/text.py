"""Render decoded schemas back to Kiwi text syntax."""

from __future__ import annotations

from ..codec.schema import Definition, DefinitionKind, Field, Schema

_KEYWORDS = {
    DefinitionKind.ENUM: "enum",
    DefinitionKind.STRUCT: "struct",
    DefinitionKind.MESSAGE: "message",
}


def format_schema(schema: Schema) -> str:
    """Render a schema as ``.kiwi`` source.

    Args:
        schema: Decoded schema

    Returns:
        Schema text, one block per definition

    Example:
        >>> print(format_schema(schema))
        enum Color {
          RED = 0;
        }
        <BLANKLINE>
        struct Point {
          float x;
        }
    """
    blocks = []
    if schema.package is not None:
        blocks.append(f"package {schema.package};")
    blocks.extend(format_definition(definition) for definition in schema.definitions)
    return "\n\n".join(blocks) + "\n"


def format_definition(definition: Definition) -> str:
    lines = [f"{_KEYWORDS[definition.kind]} {definition.name} {{"]
    for item in definition.fields:
        lines.append(f"  {_format_field(definition.kind, item)}")
    lines.append("}")
    return "\n".join(lines)


def _format_field(kind: DefinitionKind, item: Field) -> str:
    if kind is DefinitionKind.ENUM:
        return f"{item.name} = {item.value};"

    type_text = str(item.type)
    if item.is_array:
        type_text += "[]"
    # Struct fields are positional
    if kind is DefinitionKind.STRUCT:
        return f"{type_text} {item.name};"
    return f"{type_text} {item.name} = {item.value};"
