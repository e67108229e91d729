"""graphcopy: deep copies of entity graphs with back-reference fix-up.

Usage:
    from dataclasses import dataclass, field
    from graphcopy import AuditedEntity, copy, copyable

    @copyable
    @dataclass(eq=False, kw_only=True)
    class Child(AuditedEntity):
        name: str
        parent: "Parent | None" = None

    @copyable
    @dataclass(eq=False, kw_only=True)
    class Parent(AuditedEntity):
        children: list[Child] = field(default_factory=list)

    draft = copy(parent)
    assert all(child.parent is draft for child in draft.children)
    assert draft.id is None
"""

__version__ = "0.1.0"

# Configuration
from graphcopy.config import CopySettings, CycleStrategy

# Core primitives
from graphcopy.core import (
    AuditedEntity,
    Copy,
    CopyableRegistry,
    CopyError,
    CopyFailure,
    LazyRef,
    Reifiable,
    StructuralMismatch,
    UnsupportedContainerType,
    copyable,
    excluded_fields,
    get_registry,
    is_copyable,
    new_entity_id,
    reify,
)

# Engine
from graphcopy.engine import (
    ContainerFactory,
    CopyContext,
    GraphCopyEngine,
    copy,
    get_default_engine,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Copy",
    "copyable",
    "is_copyable",
    "excluded_fields",
    "get_registry",
    "CopyableRegistry",
    "LazyRef",
    "Reifiable",
    "reify",
    "AuditedEntity",
    "new_entity_id",
    # Errors
    "CopyError",
    "CopyFailure",
    "StructuralMismatch",
    "UnsupportedContainerType",
    # Engine
    "GraphCopyEngine",
    "CopyContext",
    "ContainerFactory",
    "copy",
    "get_default_engine",
    # Config
    "CopySettings",
    "CycleStrategy",
]
