"""Basic usage example for kiwischema.

This example demonstrates:
1. Decoding a binary Kiwi schema
2. Inspecting definitions and resolved field types
3. Rendering the schema as Kiwi text
4. Generating a Python decoder module
"""

from __future__ import annotations

import sys
from pathlib import Path

from kiwischema import DefinitionKind, KiwiError, compile_python, decode_schema, format_schema

# A tiny schema, already encoded:
#
#   enum Color { RED = 0; GREEN = 1; }
#   struct Point { float x; float y; Color color; }
SCHEMA = bytes(
    [0x02]
    + list(b"Color\x00") + [0x00, 0x02]
    + list(b"RED\x00") + [0x00, 0x00, 0x00]
    + list(b"GREEN\x00") + [0x00, 0x00, 0x01]
    + list(b"Point\x00") + [0x01, 0x03]
    + list(b"x\x00") + [0x09, 0x00, 0x01]
    + list(b"y\x00") + [0x09, 0x00, 0x02]
    + list(b"color\x00") + [0x00, 0x00, 0x03]
)


def main() -> int:
    print("=" * 60)
    print("kiwischema Basic Usage Example")
    print("=" * 60)
    print()

    source = Path(sys.argv[1]).read_bytes() if len(sys.argv) > 1 else SCHEMA
    try:
        schema = decode_schema(source)
    except KiwiError as e:
        print(f"Failed decoding schema: {e}")
        return 1

    # Inspect
    print(f"Decoded {len(schema.definitions)} definitions ({len(source)} bytes)")
    for definition in schema.definitions:
        print(f"  {definition.kind.value:<8} {definition.name}")
        for field in definition.fields:
            if definition.kind is DefinitionKind.ENUM:
                print(f"      {field.name} = {field.value}")
            else:
                suffix = "[]" if field.is_array else ""
                print(f"      {field.name}: {field.type}{suffix}")
    print()

    # Text form
    print("Kiwi text:")
    print(format_schema(schema))

    # Python decoders
    print("Generated Python:")
    print(compile_python(schema))
    return 0


if __name__ == "__main__":
    sys.exit(main())
