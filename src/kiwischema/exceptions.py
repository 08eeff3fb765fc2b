"""Exception hierarchy for kiwischema.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from KiwiError for easy catching of any kiwischema-specific error.
"""

from __future__ import annotations

from typing import Optional


class KiwiError(Exception):
    """Base exception for all kiwischema errors."""

    pass


class DecodeError(KiwiError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Unknown field index inside a message
    """

    pass


class BoundsError(DecodeError):
    """Raised when a read needs more bytes than remain in the buffer.

    No partial value is produced and the buffer must not be read from again.
    """

    pass


class SchemaError(KiwiError):
    """Raised when a decoded schema is structurally invalid."""

    pass


class InvalidTypeReference(SchemaError):
    """Raised when a field's raw type code points outside the primitive
    table or the definition table."""

    def __init__(
        self,
        message: str,
        *,
        raw_type: int,
        definition: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.raw_type = raw_type
        self.definition = definition
        self.field = field


class InvalidDefinitionKind(SchemaError):
    """Raised when a definition's kind byte is not ENUM (0), STRUCT (1) or MESSAGE (2)."""

    def __init__(self, message: str, *, kind: int, definition: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.definition = definition


class CompileError(KiwiError):
    """Raised when source generation is asked for something the schema cannot satisfy.

    Examples:
        - Extra field targeting an unknown definition
        - Malformed extra field specification
    """

    pass
