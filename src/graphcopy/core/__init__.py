"""Core functionalities: stateless building blocks for graph copies.

Architecture Note:
    core/ contains the capability marker, type introspection, wrappers and
    the error taxonomy. The recursive copy algorithm lives in engine/.
"""

from graphcopy.core.copyable import (
    CopyableRegistry,
    FieldKind,
    FieldSpec,
    LazyRef,
    Reifiable,
    copyable,
    excluded_fields,
    get_registry,
    is_copyable,
    reify,
)
from graphcopy.core.errors import CopyError, CopyFailure, StructuralMismatch, UnsupportedContainerType
from graphcopy.core.identity import AuditedEntity, new_entity_id
from graphcopy.core.types import Copy

__all__ = [
    # Types
    "Copy",
    # Copyable
    "copyable",
    "get_registry",
    "CopyableRegistry",
    "FieldKind",
    "FieldSpec",
    "excluded_fields",
    "is_copyable",
    # Wrappers
    "LazyRef",
    "Reifiable",
    "reify",
    # Identity
    "AuditedEntity",
    "new_entity_id",
    # Errors
    "CopyError",
    "CopyFailure",
    "StructuralMismatch",
    "UnsupportedContainerType",
]
