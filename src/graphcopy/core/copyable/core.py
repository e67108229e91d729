"""Copyable registry, decorator, and excluded-field policy.

Usage:
    @copyable
    @dataclass
    class Address:
        street: str
        city: str

    # With fields that must never be copied:
    @copyable(exclude=("id", "version"))
    @dataclass
    class Order:
        id: UUID | None = None
        version: int = 0
        lines: list[OrderLine] = field(default_factory=list)
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import is_dataclass
from typing import overload

from graphcopy.core.copyable.introspection import (
    COPY_META_ATTR,
    raw_fields,
    build_field_table,
    is_pydantic,
)
from graphcopy.core.copyable.models import CopyableTypeMeta, FieldSpec
from graphcopy.core.errors import CopyFailure
from graphcopy.core.types import describe_type


class CopyableRegistry:
    """Process-local registry of copyable types and their field tables.

    Field tables are built lazily on first lookup of each concrete type
    (subclasses of a registered type get their own table) and never change
    afterwards, so concurrent readers only contend while a table is built.
    """

    def __init__(self) -> None:
        """Initialize empty copyable registry."""
        self._by_type: dict[type, CopyableTypeMeta] = {}
        self._tables: dict[type, tuple[FieldSpec, ...]] = {}
        self._excluded: dict[type, frozenset[str]] = {}
        self._lock = threading.Lock()

    def register(self, cls: type, exclude: Iterable[str] = ()) -> CopyableTypeMeta:
        """Register a copyable type and return its metadata.

        Args:
            cls: Dataclass or Pydantic model to register.
            exclude: Field names that must never be copied.

        Returns:
            Metadata for the type.

        Raises:
            ValueError: If an excluded name is not a field of cls.
        """
        if cls in self._by_type:
            return self._by_type[cls]

        excluded = frozenset(exclude)
        known = {name for name, _ in raw_fields(cls)}
        unknown = sorted(excluded - known)
        if unknown:
            raise ValueError(
                f"Cannot exclude {', '.join(unknown)} from {cls.__name__}: "
                f"not a field (fields: {', '.join(sorted(known))})"
            )

        meta = CopyableTypeMeta(type_name=describe_type(cls), excluded=excluded)
        with self._lock:
            self._by_type[cls] = meta
        return meta

    def get_meta(self, cls: type) -> CopyableTypeMeta | None:
        """Get metadata for a type registered directly (not inherited)."""
        return self._by_type.get(cls)

    def is_registered(self, cls: type) -> bool:
        return cls in self._by_type

    def fields(self, cls: type) -> tuple[FieldSpec, ...]:
        """Get the field table of a type, building it on first use.

        Args:
            cls: Dataclass or Pydantic model type.

        Returns:
            Field specs for every field across the type hierarchy.
        """
        table = self._tables.get(cls)
        if table is None:
            with self._lock:
                table = self._tables.get(cls)
                if table is None:
                    table = build_field_table(cls)
                    self._tables[cls] = table
        return table

    def excluded_fields(self, cls: type) -> frozenset[str]:
        """Union of the excluded names declared anywhere on the type's MRO."""
        excluded = self._excluded.get(cls)
        if excluded is None:
            names: set[str] = set()
            for base in cls.__mro__:
                meta = self.get_meta(base)
                if meta is not None:
                    names |= meta.excluded
            excluded = frozenset(names)
            with self._lock:
                self._excluded[cls] = excluded
        return excluded


# Module-level registry instance
_registry = CopyableRegistry()


def get_registry() -> CopyableRegistry:
    """Access the global copyable registry.

    Returns:
        The process-local CopyableRegistry instance.
    """
    return _registry


def excluded_fields(cls: type) -> frozenset[str]:
    """Default excluded-field policy backed by the global registry."""
    return _registry.excluded_fields(cls)


def fields_declared_by(cls: type) -> frozenset[str]:
    """Names of every field the given type declares, including inherited ones."""
    return frozenset(name for name, _ in raw_fields(cls))


def filter_fields_from(base: type) -> Callable[[FieldSpec], bool]:
    """Predicate that drops the fields declared by base.

    Example:
        >>> keep = filter_fields_from(AuditedEntity)
        >>> [spec.name for spec in get_registry().fields(Order) if keep(spec)]
    """
    dropped = fields_declared_by(base)

    def keep(spec: FieldSpec) -> bool:
        return spec.name not in dropped

    return keep


def get_all_fields(cls: type) -> tuple[FieldSpec, ...]:
    """Field table of cls from the global registry.

    Raises:
        CopyFailure: If cls cannot be introspected.
    """
    try:
        return _registry.fields(cls)
    except TypeError as e:
        raise CopyFailure(None, cls, str(e)) from e


@overload
def copyable(cls: type) -> type: ...


@overload
def copyable(cls: None = None, *, exclude: Iterable[str] = ()) -> Callable[[type], type]: ...


def copyable(
    cls: type | None = None, *, exclude: Iterable[str] = ()
) -> type | Callable[[type], type]:
    """Mark a dataclass or Pydantic model as participating in graph copies.

    Supports three forms:
        @copyable                         # bare decorator
        @copyable()                       # parenthesized, no args
        @copyable(exclude=("id",))        # with excluded fields

    Subclasses inherit the capability and the excluded fields.

    Args:
        cls: The class to mark, or None if called with arguments.
        exclude: Field names that must never be copied.

    Returns:
        Decorated class or decorator function.

    Raises:
        TypeError: If class is neither a dataclass nor Pydantic model.
        ValueError: If an excluded name is not a field of the class.

    Note:
        Apply @copyable AFTER @dataclass:

        >>> @copyable
        ... @dataclass
        ... class Note:
        ...     text: str
    """
    names = (exclude,) if isinstance(exclude, str) else tuple(exclude)

    def decorator(c: type) -> type:
        if not (is_dataclass(c) or is_pydantic(c)):
            raise TypeError(
                f"Copyable {c.__name__} must be a dataclass or Pydantic model. "
                f"Did you forget @dataclass decorator?"
            )
        meta = _registry.register(c, exclude=names)
        setattr(c, COPY_META_ATTR, meta)
        return c

    if cls is None:
        return decorator
    else:
        return decorator(cls)
