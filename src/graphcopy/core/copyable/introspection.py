"""Type and field introspection for copyable types.

Builds the per-type field tables the engine walks: which fields a type
declares across its hierarchy, what abstraction each field is declared
as, and how to read, write, and blank-allocate instances without running
their initialization or validation logic.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import (
    Collection,
    Mapping,
    MutableMapping,
    MutableSequence,
    MutableSet,
    Sequence,
)
from collections.abc import Set as AbstractSet
from typing import Any, ForwardRef, TypeVar, Union, get_args, get_origin

from graphcopy.core.copyable.models import FieldKind, FieldSpec
from graphcopy.core.copyable.wrapper import get_type

COPY_META_ATTR = "__copy_meta__"

MAPPING_TYPES: frozenset[type] = frozenset({dict, Mapping, MutableMapping})
SEQUENCE_TYPES: frozenset[type] = frozenset({list, Sequence, MutableSequence})
SET_TYPES: frozenset[type] = frozenset({set, AbstractSet, MutableSet})

_TEXT_TYPES = (str, bytes, bytearray)


def is_copyable(value_or_type: Any) -> bool:
    """Check whether a type (or the runtime type of a value) carries the copy capability.

    Wrapped values are checked by the type behind the wrapper.

    Args:
        value_or_type: A class, or any value.

    Returns:
        True if the type was decorated with @copyable or inherits from one that was.
    """
    tp = value_or_type if isinstance(value_or_type, type) else get_type(value_or_type)
    return getattr(tp, COPY_META_ATTR, None) is not None


def is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic."""
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def raw_fields(cls: type) -> list[tuple[str, Any]]:
    if dataclasses.is_dataclass(cls):
        return [(f.name, f.type) for f in dataclasses.fields(cls)]
    if is_pydantic(cls):
        return [(name, info.annotation) for name, info in cls.model_fields.items()]  # type: ignore[attr-defined]
    raise TypeError(f"{cls.__name__} must be a dataclass or Pydantic model to be introspected")


def _resolve_hints(cls: type) -> dict[str, Any]:
    # Locally defined classes can reference names get_type_hints cannot see;
    # those fields fall back to classification from the runtime value.
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        return {}


def _strip_optional(declared: Any) -> Any:
    origin = get_origin(declared)
    if origin is Union or origin is types.UnionType:
        arms = [arm for arm in get_args(declared) if arm is not type(None)]
        if len(arms) == 1:
            return _strip_optional(arms[0])
    if origin is typing.Annotated:
        return _strip_optional(get_args(declared)[0])
    return declared


def classify(declared: Any) -> FieldKind:
    """Classify a declared field type into the abstraction the engine copies it as.

    Optional types collapse to their single non-None arm. Mappings and
    collections are checked before the copy capability.

    Args:
        declared: The resolved annotation of a field.

    Returns:
        The FieldKind for the declared type.
    """
    declared = _strip_optional(declared)
    if declared is Any or isinstance(declared, (str, ForwardRef, TypeVar)):
        return FieldKind.DYNAMIC

    origin = get_origin(declared) or declared
    if origin is Union or origin is types.UnionType:
        return FieldKind.DYNAMIC
    if not isinstance(origin, type):
        return FieldKind.PLAIN
    if issubclass(origin, _TEXT_TYPES):
        return FieldKind.PLAIN
    if issubclass(origin, Mapping):
        return FieldKind.MAPPING if origin in MAPPING_TYPES else FieldKind.UNSUPPORTED_CONTAINER
    if issubclass(origin, Collection):
        if origin in SEQUENCE_TYPES:
            return FieldKind.SEQUENCE
        if origin in SET_TYPES:
            return FieldKind.SET
        return FieldKind.UNSUPPORTED_CONTAINER
    if is_copyable(origin):
        return FieldKind.COPYABLE
    return FieldKind.PLAIN


def classify_value(value: Any) -> FieldKind:
    """Classify a value whose field has no usable declared type."""
    if isinstance(value, dict):
        return FieldKind.MAPPING
    if isinstance(value, list):
        return FieldKind.SEQUENCE
    if isinstance(value, set):
        return FieldKind.SET
    if is_copyable(value):
        return FieldKind.COPYABLE
    return FieldKind.PLAIN


def resolve_kind(spec: FieldSpec, value: Any) -> FieldKind:
    """Kind to copy a field's current value as."""
    if spec.kind is FieldKind.DYNAMIC:
        return classify_value(value)
    return spec.kind


def build_field_table(cls: type) -> tuple[FieldSpec, ...]:
    """Enumerate all fields declared across a type's hierarchy.

    Args:
        cls: A dataclass or Pydantic model type.

    Returns:
        One FieldSpec per field, in declaration order.

    Raises:
        TypeError: If cls is neither a dataclass nor a Pydantic model.
    """
    hints = _resolve_hints(cls)
    table = []
    for name, raw in raw_fields(cls):
        declared = hints.get(name, raw)
        table.append(FieldSpec(name=name, declared_type=declared, kind=classify(declared)))
    return tuple(table)


def is_map(spec: FieldSpec) -> bool:
    return spec.kind is FieldKind.MAPPING or (
        spec.kind is FieldKind.UNSUPPORTED_CONTAINER and _declares(spec, Mapping)
    )


def is_collection(spec: FieldSpec) -> bool:
    return spec.kind in (FieldKind.SEQUENCE, FieldKind.SET) or (
        spec.kind is FieldKind.UNSUPPORTED_CONTAINER and not _declares(spec, Mapping)
    )


def is_other_copyable(spec: FieldSpec) -> bool:
    return spec.kind is FieldKind.COPYABLE


def _declares(spec: FieldSpec, abstraction: type) -> bool:
    declared = _strip_optional(spec.declared_type)
    origin = get_origin(declared) or declared
    return isinstance(origin, type) and issubclass(origin, abstraction)


def get_field(obj: Any, name: str) -> Any:
    return getattr(obj, name)


def set_field(obj: Any, name: str, value: Any) -> None:
    """Assign a field, bypassing frozen dataclasses and validate-on-assignment."""
    object.__setattr__(obj, name, value)


def mirror_fields_set(source: Any, destination: Any, excluded: frozenset[str]) -> None:
    """Mark on a Pydantic copy the fields explicitly set on its source.

    Excluded fields stay unset. A no-op for anything but Pydantic models.
    """
    fields_set = getattr(source, "__pydantic_fields_set__", None)
    if not isinstance(fields_set, set) or not hasattr(destination, "__pydantic_fields_set__"):
        return
    object.__setattr__(destination, "__pydantic_fields_set__", fields_set - excluded)


def allocate_blank(cls: type) -> Any:
    """Create an instance of cls without running its initializer or validators.

    Every field is reset to its declared default, or None when it has none.

    Args:
        cls: A dataclass or Pydantic model type.

    Returns:
        A new, blank instance of exactly cls.

    Raises:
        TypeError: If cls is neither a dataclass nor a Pydantic model.
    """
    if is_pydantic(cls):
        # model_construct skips validation and fills declared defaults
        instance = cls.model_construct()  # type: ignore[attr-defined]
        for name in cls.model_fields:  # type: ignore[attr-defined]
            if name not in instance.__dict__:
                object.__setattr__(instance, name, None)
        return instance

    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"Cannot allocate {cls.__name__}: not a dataclass or Pydantic model")

    instance = cls.__new__(cls)
    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING:
            value = f.default
        elif f.default_factory is not dataclasses.MISSING:
            value = f.default_factory()
        else:
            value = None
        set_field(instance, f.name, value)
    return instance
