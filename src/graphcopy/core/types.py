"""Core type definitions for graphcopy."""

from typing import Any

type Copy[T] = T
"""Type alias indicating a value was produced by a graph copy.

A `Copy[T]` shares no copyable node or container with its source: mutating
it never affects the original graph. Non-copyable leaves (strings, enums,
opaque objects) are still shared by reference.
"""


def describe_type(tp: Any) -> str:
    """Fully qualified name of a type, or its repr for typing constructs."""
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)
