"""Graph copy engine: recursive copy, copy context, and container allocation."""

from graphcopy.engine.containers import ContainerFactory
from graphcopy.engine.context import CopyContext
from graphcopy.engine.engine import GraphCopyEngine, copy, get_default_engine

__all__ = [
    "ContainerFactory",
    "CopyContext",
    "GraphCopyEngine",
    "copy",
    "get_default_engine",
]
