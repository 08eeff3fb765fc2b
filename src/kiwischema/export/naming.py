"""Identifier conventions for generated Python source."""

from __future__ import annotations

import keyword
import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[_\-\s]+")


def safe_identifier(name: str) -> str:
    """Append an underscore to names that are Python keywords."""
    return f"{name}_" if keyword.iskeyword(name) else name


def upper_camel(name: str) -> str:
    """Convert ``some_name`` or ``someName`` to ``SomeName``."""
    parts = [part for part in _SEPARATORS.split(name) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def maybe_camel(name: str) -> str:
    """Keep names that already start uppercase, camel-case the rest."""
    if name and name[0].isupper():
        return name
    return upper_camel(name)


def snake_case(name: str) -> str:
    """Convert ``someName`` or ``HTTPServer`` to ``some_name`` / ``http_server``."""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return _SEPARATORS.sub("_", name).lower()


def class_name(name: str) -> str:
    return safe_identifier(maybe_camel(name))


def attribute_name(name: str) -> str:
    return safe_identifier(snake_case(name))
