"""Recursive graph copy engine.

Usage:
    from graphcopy import copy

    draft = copy(invoice)

    # With custom collaborators:
    engine = GraphCopyEngine(
        reify=session.unproxy,
        excluded_fields=lambda cls: frozenset({"id", "version"}),
        settings=CopySettings(cycle_strategy="identity"),
    )
    draft = engine.copy(invoice)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

import structlog

from graphcopy.config import CopySettings, CycleStrategy
from graphcopy.core.copyable import (
    CopyableRegistry,
    FieldSpec,
    allocate_blank,
    excluded_fields,
    get_field,
    get_registry,
    is_collection,
    is_copyable,
    is_map,
    is_other_copyable,
    reify,
    set_field,
)
from graphcopy.core.copyable.introspection import mirror_fields_set, resolve_kind
from graphcopy.core.errors import CopyError, CopyFailure, StructuralMismatch
from graphcopy.core.types import Copy, describe_type
from graphcopy.engine.containers import ContainerFactory
from graphcopy.engine.context import CopyContext

logger = structlog.get_logger(__name__)

# Source identity -> (source, copy); the source is held so its id is not reused.
type _Memo = dict[int, tuple[Any, Any]]


class GraphCopyEngine:
    """Copies object graphs of @copyable types into fresh, unsaved instances.

    Non-copyable values are shared, never cloned. Excluded fields keep the
    blank instance's default. A child that refers back to the parent being
    copied is pointed at the parent's copy.

    Args:
        reify: Resolves lazy wrappers to their concrete object.
        excluded_fields: Field names never copied for a given type.
        allocate_blank: Creates an uninitialized instance to copy into.
        settings: Engine configuration. Defaults to CopySettings() from environment.
        registry: Field-table registry. Defaults to the global registry.
        containers: Factory for fresh lists, sets and dicts.
    """

    def __init__(
        self,
        *,
        reify: Callable[[Any], Any] = reify,
        excluded_fields: Callable[[type], frozenset[str]] = excluded_fields,
        allocate_blank: Callable[[type], Any] = allocate_blank,
        settings: CopySettings | None = None,
        registry: CopyableRegistry | None = None,
        containers: ContainerFactory | None = None,
    ) -> None:
        self._reify = reify
        self._excluded_fields = excluded_fields
        self._allocate_blank = allocate_blank
        self._settings = settings if settings is not None else CopySettings()
        self._registry = registry if registry is not None else get_registry()
        self._containers = containers if containers is not None else ContainerFactory()

    @property
    def settings(self) -> CopySettings:
        return self._settings

    def copy[T](self, value: T, context: CopyContext | None = None) -> Copy[T]:
        """Copy value and every copyable node reachable from it.

        Args:
            value: Root of the graph. Non-copyable values are returned as-is.
            context: Parent pair when value is reached from an enclosing copy.

        Returns:
            The copy, or value itself if it is not copyable.

        Raises:
            StructuralMismatch: If the destination type lacks a source field.
            UnsupportedContainerType: If a field is declared as an unsupported container.
            CopyFailure: If introspection, allocation, or assignment fails.
        """
        source = self._reify(value)
        if not is_copyable(type(source)):
            return value

        strategy = self._settings.cycle_strategy
        memo: _Memo | None = {} if strategy is CycleStrategy.IDENTITY else None
        root_type = describe_type(type(source))
        logger.debug("Copying object graph", root_type=root_type, cycle_strategy=strategy.value)
        try:
            return self._copy_node(source, context, memo)  # type: ignore[no-any-return]
        except CopyError as e:
            logger.warning(
                "Graph copy aborted",
                root_type=root_type,
                error_type=type(e).__name__,
                field=getattr(e, "field_name", None),
            )
            raise

    def _copy(self, value: Any, context: CopyContext, memo: _Memo | None) -> Any:
        source = self._reify(value)
        if not is_copyable(type(source)):
            return value
        return self._copy_node(source, context, memo)

    def _copy_node(self, source: Any, context: CopyContext | None, memo: _Memo | None) -> Any:
        if memo is not None and id(source) in memo:
            return memo[id(source)][1]

        source_type = type(source)
        try:
            destination = self._allocate_blank(source_type)
        except (CopyError, RecursionError):
            raise
        except Exception as e:
            raise CopyFailure(None, source_type, f"cannot allocate blank instance: {e}") from e
        if memo is not None:
            memo[id(source)] = (source, destination)

        try:
            excluded = self._excluded_fields(source_type)
        except (CopyError, RecursionError):
            raise
        except Exception as e:
            raise CopyFailure(None, source_type, f"cannot resolve excluded fields: {e}") from e
        target_names = [spec.name for spec in self._field_table(type(destination))]
        target_fields = set(target_names)
        own_context = CopyContext.for_parent(source, destination)

        for spec in self._field_table(source_type):
            if spec.name in excluded:
                continue
            if spec.name not in target_fields:
                raise StructuralMismatch(spec.name, type(destination), target_names)
            try:
                copied = self._resolve(spec, source, context, own_context, memo)
                set_field(destination, spec.name, copied)
            except (CopyError, RecursionError):
                raise
            except Exception as e:
                raise CopyFailure(spec.name, source_type, str(e)) from e
        mirror_fields_set(source, destination, excluded)
        return destination

    def _resolve(
        self,
        spec: FieldSpec,
        source: Any,
        context: CopyContext | None,
        own_context: CopyContext,
        memo: _Memo | None,
    ) -> Any:
        """Apply the field resolution policy; the first matching rule wins."""
        raw = get_field(source, spec.name)
        if raw is None:
            return None

        value = self._reify(raw)
        if context is not None and context.is_back_reference(value):
            return context.copy_of_parent_object

        kind = resolve_kind(spec, value)
        if kind is not spec.kind:
            spec = dataclasses.replace(spec, kind=kind)

        if is_map(spec):
            return self._copy_mapping(spec, value, own_context, memo)
        if is_collection(spec):
            return self._copy_collection(spec, value, own_context, memo)
        if is_other_copyable(spec):
            return self._copy(value, own_context, memo)
        return raw

    def _copy_mapping(
        self, spec: FieldSpec, source: Any, context: CopyContext, memo: _Memo | None
    ) -> dict[Any, Any] | None:
        result = self._containers.new_mapping(spec, source)
        if result is None:
            return None
        copy_keys = self._settings.copy_map_keys
        for key, item in source.items():
            new_key = self._copy_member(key, context, memo) if copy_keys else key
            result[new_key] = self._copy_member(item, context, memo)
        return result

    def _copy_collection(
        self, spec: FieldSpec, source: Any, context: CopyContext, memo: _Memo | None
    ) -> list[Any] | set[Any] | None:
        result = self._containers.new_collection(spec, source)
        if result is None:
            return None
        add = result.append if isinstance(result, list) else result.add
        for element in source:
            add(self._copy_member(element, context, memo))
        return result

    def _copy_member(self, value: Any, context: CopyContext, memo: _Memo | None) -> Any:
        # Members that are the owning object itself resolve to the owner's copy.
        if value is None:
            return None
        if context.is_back_reference(self._reify(value)):
            return context.copy_of_parent_object
        return self._copy(value, context, memo)

    def _field_table(self, cls: type) -> tuple[FieldSpec, ...]:
        try:
            return self._registry.fields(cls)
        except TypeError as e:
            raise CopyFailure(None, cls, str(e)) from e


_default_engine: GraphCopyEngine | None = None


def get_default_engine() -> GraphCopyEngine:
    """Access the process-wide engine, built from environment settings on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = GraphCopyEngine()
    return _default_engine


def copy[T](value: T, context: CopyContext | None = None) -> Copy[T]:
    """Copy an object graph with the default engine.

    See GraphCopyEngine.copy.
    """
    return get_default_engine().copy(value, context)
