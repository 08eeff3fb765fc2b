"""Source generation from decoded schemas.

This module provides Python decoder generation and Kiwi text rendering.
"""

from __future__ import annotations

from .python import CompileConfig, ExtraField, compile_python, parse_extra_field
from .text import format_definition, format_schema

__all__ = [
    "compile_python",
    "CompileConfig",
    "ExtraField",
    "parse_extra_field",
    "format_schema",
    "format_definition",
]
