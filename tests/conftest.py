"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import struct
from typing import Sequence

import pytest

# (name, raw type, is_array, value)
FieldSpec = tuple[str, int, bool, int]


class KiwiWriter:
    """Builds Kiwi wire bytes for tests. The library itself only decodes."""

    def __init__(self) -> None:
        self._data = bytearray()

    def write_byte(self, value: int) -> KiwiWriter:
        self._data.append(value & 0xFF)
        return self

    def write_raw(self, data: bytes) -> KiwiWriter:
        self._data.extend(data)
        return self

    def write_byte_array(self, data: bytes) -> KiwiWriter:
        self.write_var_uint(len(data))
        return self.write_raw(data)

    def write_var_uint(self, value: int) -> KiwiWriter:
        while True:
            byte = value & 0x7F
            value >>= 7
            if not value:
                return self.write_byte(byte)
            self.write_byte(byte | 0x80)

    def write_var_int(self, value: int) -> KiwiWriter:
        return self.write_var_uint(zigzag(value))

    def write_var_uint64(self, value: int) -> KiwiWriter:
        groups = 0
        while value > 0x7F and groups < 8:
            self.write_byte((value & 0x7F) | 0x80)
            value >>= 7
            groups += 1
        return self.write_byte(value)

    def write_var_int64(self, value: int) -> KiwiWriter:
        return self.write_var_uint64(zigzag(value))

    def write_var_float(self, value: float) -> KiwiWriter:
        bits = struct.unpack("<I", struct.pack("<f", value))[0]
        bits = ((bits >> 23) | (bits << 9)) & 0xFFFFFFFF
        if not bits & 0xFF:
            return self.write_byte(0)
        return self.write_raw(bits.to_bytes(4, "little"))

    def write_string(self, text: str) -> KiwiWriter:
        for char in text:
            code_point = ord(char)
            if code_point < 0x80:
                self.write_byte(code_point)
            elif code_point < 0x800:
                self.write_byte(0xC0 | (code_point >> 6))
                self.write_byte(0x80 | (code_point & 0x3F))
            elif code_point < 0x10000:
                self.write_byte(0xE0 | (code_point >> 12))
                self.write_byte(0x80 | ((code_point >> 6) & 0x3F))
                self.write_byte(0x80 | (code_point & 0x3F))
            else:
                self.write_byte(0xF0 | (code_point >> 18))
                self.write_byte(0x80 | ((code_point >> 12) & 0x3F))
                self.write_byte(0x80 | ((code_point >> 6) & 0x3F))
                self.write_byte(0x80 | (code_point & 0x3F))
        return self.write_byte(0)

    def write_definition(self, name: str, kind: int, fields: Sequence[FieldSpec]) -> KiwiWriter:
        self.write_string(name)
        self.write_byte(kind)
        self.write_var_uint(len(fields))
        for field_name, raw_type, is_array, value in fields:
            self.write_string(field_name)
            self.write_var_int(raw_type)
            self.write_byte(1 if is_array else 0)
            self.write_var_uint(value)
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._data)


def zigzag(value: int) -> int:
    return value << 1 if value >= 0 else ((-value) << 1) - 1


def encode_schema(definitions: Sequence[tuple[str, int, Sequence[FieldSpec]]]) -> bytes:
    writer = KiwiWriter().write_var_uint(len(definitions))
    for name, kind, fields in definitions:
        writer.write_definition(name, kind, fields)
    return writer.to_bytes()


# Raw type codes for primitives: ~index
BOOL, BYTE, INT, UINT, FLOAT, STRING, INT64, UINT64 = (~i for i in range(8))
ENUM, STRUCT, MESSAGE = 0, 1, 2


@pytest.fixture
def writer() -> KiwiWriter:
    """Fresh wire writer."""
    return KiwiWriter()


@pytest.fixture
def sample_schema_bytes() -> bytes:
    """Enum, struct and message, with a forward reference from Point to Tag."""
    return encode_schema(
        [
            ("Color", ENUM, [("RED", 0, False, 0), ("GREEN", 0, False, 1), ("BLUE", 0, False, 2)]),
            (
                "Point",
                STRUCT,
                [
                    ("x", FLOAT, False, 1),
                    ("y", FLOAT, False, 2),
                    ("tag", 3, False, 3),
                ],
            ),
            (
                "Shape",
                MESSAGE,
                [
                    ("name", STRING, False, 1),
                    ("color", 0, False, 2),
                    ("points", 1, True, 3),
                    ("visible", BOOL, False, 4),
                    ("id", UINT64, False, 5),
                    ("offset", INT, False, 6),
                    ("data", BYTE, True, 7),
                ],
            ),
            ("Tag", STRUCT, [("label", STRING, False, 1), ("weight", INT64, False, 2)]),
        ]
    )
