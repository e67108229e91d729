"""Fresh container allocation matching a field's declared abstraction."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from graphcopy.core.copyable.models import FieldKind, FieldSpec
from graphcopy.core.errors import UnsupportedContainerType

COLLECTION_KINDS = ("list", "set")
MAPPING_KINDS = ("dict",)


class ContainerFactory:
    """Builds empty containers of the kind a field is declared as.

    Sequences become lists (order preserved by the caller), sets become
    hash sets and mappings become dicts. Copies never preserve any
    ordering guarantee of the source set or mapping type.
    """

    def new_collection(self, spec: FieldSpec, source: Any) -> list[Any] | set[Any] | None:
        """Allocate an empty collection for a list- or set-declared field.

        Args:
            spec: Field being copied.
            source: The field's current value.

        Returns:
            None if source is None, otherwise a new empty list or set.

        Raises:
            UnsupportedContainerType: If the field is declared as another container kind,
                or holds a value that is not a list-like or set-like collection.
        """
        if source is None:
            return None
        if spec.kind in (FieldKind.SEQUENCE, FieldKind.SET) and not _is_collection_value(source):
            raise UnsupportedContainerType(spec.name, type(source), COLLECTION_KINDS)
        if spec.kind is FieldKind.SEQUENCE:
            return []
        if spec.kind is FieldKind.SET:
            return set()
        raise UnsupportedContainerType(spec.name, spec.declared_type, COLLECTION_KINDS)

    def new_mapping(self, spec: FieldSpec, source: Any) -> dict[Any, Any] | None:
        """Allocate an empty dict for a mapping-declared field.

        Raises:
            UnsupportedContainerType: If the field is not declared as a supported mapping,
                or holds a value that is not a mapping.
        """
        if source is None:
            return None
        if spec.kind is FieldKind.MAPPING:
            if not isinstance(source, Mapping):
                raise UnsupportedContainerType(spec.name, type(source), MAPPING_KINDS)
            return {}
        raise UnsupportedContainerType(spec.name, spec.declared_type, MAPPING_KINDS)


def _is_collection_value(value: Any) -> bool:
    if isinstance(value, (Mapping, str, bytes, bytearray)):
        return False
    return isinstance(value, Collection)
