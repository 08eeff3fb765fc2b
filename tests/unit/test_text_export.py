"""Unit tests for Kiwi text rendering."""

from __future__ import annotations

from conftest import ENUM, MESSAGE, STRUCT, encode_schema

from kiwischema import Schema, decode_schema, format_schema
from kiwischema.export import format_definition


def test_format_sample_schema(sample_schema_bytes: bytes) -> None:
    text = format_schema(decode_schema(sample_schema_bytes))

    assert text == (
        "enum Color {\n"
        "  RED = 0;\n"
        "  GREEN = 1;\n"
        "  BLUE = 2;\n"
        "}\n"
        "\n"
        "struct Point {\n"
        "  float x;\n"
        "  float y;\n"
        "  Tag tag;\n"
        "}\n"
        "\n"
        "message Shape {\n"
        "  string name = 1;\n"
        "  Color color = 2;\n"
        "  Point[] points = 3;\n"
        "  bool visible = 4;\n"
        "  uint64 id = 5;\n"
        "  int offset = 6;\n"
        "  byte[] data = 7;\n"
        "}\n"
        "\n"
        "struct Tag {\n"
        "  string label;\n"
        "  int64 weight;\n"
        "}\n"
    )


def test_format_package() -> None:
    schema = Schema(package="demo", definitions=decode_schema(encode_schema([("E", ENUM, [])])).definitions)
    assert format_schema(schema) == "package demo;\n\nenum E {\n}\n"


def test_format_empty_schema() -> None:
    assert format_schema(decode_schema(b"\x00")) == "\n"


def test_format_definition() -> None:
    data = encode_schema(
        [("M", MESSAGE, [("items", 1, True, 4)]), ("S", STRUCT, [("n", ~3, False, 1)])]
    )
    message, struct = decode_schema(data).definitions

    assert format_definition(message) == "message M {\n  S[] items = 4;\n}"
    assert format_definition(struct) == "struct S {\n  uint n;\n}"
