from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Reifiable(Protocol):
    """A reference that stands in for a concrete object (lazy proxies, handles)."""

    def __reify__(self) -> Any: ...


class LazyRef[T]:
    """Lazy reference resolved through a loader on first access."""

    __slots__ = ("_loader", "_target", "_loaded")

    def __init__(self, loader: Callable[[], T]) -> None:
        self._loader = loader
        self._target: T | None = None
        self._loaded = False

    @classmethod
    def of(cls, target: T) -> LazyRef[T]:
        """Return an already-resolved reference to target."""
        ref = cls(lambda: target)
        ref.unwrap()
        return ref

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def unwrap(self) -> T:
        """Return the concrete target, loading it on first call."""
        if not self._loaded:
            self._target = self._loader()
            self._loaded = True
        return self._target  # type: ignore[return-value]

    def __reify__(self) -> T:
        return self.unwrap()

    def __repr__(self) -> str:
        state = repr(self._target) if self._loaded else "unloaded"
        return f"LazyRef({state})"


def reify(value: Any) -> Any:
    """Resolve any chain of wrappers to the concrete object behind it."""
    while isinstance(value, Reifiable):
        value = value.__reify__()
    return value


def get_type(value: Any) -> type:
    """Get the runtime type behind any wrapper."""
    return type(reify(value))
