"""Copyable models: field kinds, field descriptors, and type metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class FieldKind(Enum):
    """How a field's value is resolved during a copy."""

    MAPPING = auto()  # dict-like, re-materialized as a fresh dict
    SEQUENCE = auto()  # list-like, re-materialized as a fresh list
    SET = auto()  # set-like, re-materialized as a fresh set
    UNSUPPORTED_CONTAINER = auto()  # tuple, frozenset, deque, OrderedDict, ...
    COPYABLE = auto()  # declared type carries the copy capability
    PLAIN = auto()  # shared by assignment
    DYNAMIC = auto()  # Any or unresolved annotation, classified from the value


@dataclass(slots=True, frozen=True)
class FieldSpec:
    """Introspected description of one field on a copyable type."""

    name: str
    declared_type: Any
    kind: FieldKind


@dataclass(slots=True, frozen=True)
class CopyableTypeMeta:
    """Metadata for types registered with @copyable."""

    type_name: str
    excluded: frozenset[str]
