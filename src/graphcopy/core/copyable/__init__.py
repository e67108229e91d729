"""Copyable functionality: capability marker, registry, introspection, and wrappers."""

from graphcopy.core.copyable.core import (
    CopyableRegistry,
    copyable,
    excluded_fields,
    fields_declared_by,
    filter_fields_from,
    get_all_fields,
    get_registry,
)
from graphcopy.core.copyable.introspection import (
    allocate_blank,
    classify,
    get_field,
    is_collection,
    is_copyable,
    is_map,
    is_other_copyable,
    set_field,
)
from graphcopy.core.copyable.models import CopyableTypeMeta, FieldKind, FieldSpec
from graphcopy.core.copyable.wrapper import LazyRef, Reifiable, get_type, reify

__all__ = [
    # Models
    "CopyableTypeMeta",
    "FieldKind",
    "FieldSpec",
    # Core
    "copyable",
    "get_registry",
    "CopyableRegistry",
    "excluded_fields",
    "fields_declared_by",
    "filter_fields_from",
    "get_all_fields",
    # Introspection
    "allocate_blank",
    "classify",
    "get_field",
    "set_field",
    "is_copyable",
    "is_map",
    "is_collection",
    "is_other_copyable",
    # Wrappers
    "LazyRef",
    "Reifiable",
    "reify",
    "get_type",
]
