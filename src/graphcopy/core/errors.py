"""Error taxonomy for graph copies.

Every error aborts the whole top-level copy; no partial copy is returned.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from graphcopy.core.types import describe_type


class CopyError(Exception):
    """Base class for failures while copying an object graph."""

    pass


class StructuralMismatch(CopyError):
    """Raised when the destination type lacks a field present on the source."""

    def __init__(self, field_name: str, target_type: type, available: Iterable[str]) -> None:
        self.field_name = field_name
        self.target_type = target_type
        self.available = tuple(available)
        super().__init__(
            f"Field {field_name} is not available in copy of type {describe_type(target_type)}. "
            f"Available fields: {', '.join(self.available)}"
        )


class UnsupportedContainerType(CopyError):
    """Raised when a field is declared as a container or mapping kind that cannot be copied."""

    def __init__(self, field_name: str, declared_type: Any, expected: Iterable[str]) -> None:
        self.field_name = field_name
        self.declared_type = declared_type
        self.expected = tuple(expected)
        super().__init__(
            f"Unsupported type {describe_type(declared_type)} on field {field_name}, "
            f"expected {' or '.join(self.expected)}"
        )


class CopyFailure(CopyError):
    """Raised when introspecting, allocating, or assigning a field fails.

    The original exception is chained as __cause__.
    """

    def __init__(self, field_name: str | None, owner_type: type, detail: str | None = None) -> None:
        self.field_name = field_name
        self.owner_type = owner_type
        where = describe_type(owner_type)
        if field_name is not None:
            where = f"field {field_name} of {where}"
        message = f"Error while copying {where}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
