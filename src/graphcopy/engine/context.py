"""Copy context carried one level down the recursion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CopyContext:
    """Immutable (source parent, its type, copy of parent) triple.

    Created right before descending into a copyable field, collection
    element, or mapping entry. A child field that refers back to the
    source parent is redirected to the parent's copy instead of being
    copied again.

    Raises:
        ValueError: If any of the three parts is None.
    """

    origin_parent_object: Any
    origin_parent_type: type
    copy_of_parent_object: Any

    def __post_init__(self) -> None:
        for name in ("origin_parent_object", "origin_parent_type", "copy_of_parent_object"):
            if getattr(self, name) is None:
                raise ValueError(f"When creating a copy context, the {name} must not be None")

    @classmethod
    def for_parent(cls, source: Any, destination: Any) -> CopyContext:
        """Build the context for the fields of source being copied into destination."""
        return cls(source, type(source), destination)

    def is_back_reference(self, value: Any) -> bool:
        """Check whether value refers to the source parent.

        Identity is checked first; otherwise values of the parent's exact
        type are compared for equality.
        """
        if value is self.origin_parent_object:
            return True
        if type(value) is not self.origin_parent_type:
            return False
        return bool(value == self.origin_parent_object)
