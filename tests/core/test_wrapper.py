"""Tests for lazy references and reification."""

from entities import ChildEntity

from graphcopy import LazyRef, Reifiable, reify
from graphcopy.core.copyable import get_type


def test_lazy_ref_loads_once():
    loads: list[int] = []

    def loader() -> ChildEntity:
        loads.append(1)
        return ChildEntity(string_field="loaded")

    ref = LazyRef(loader)

    assert not ref.is_loaded
    first = ref.unwrap()
    second = ref.unwrap()

    assert first is second
    assert loads == [1]
    assert ref.is_loaded


def test_reify_resolves_nested_wrappers():
    child = ChildEntity()
    ref = LazyRef.of(LazyRef.of(child))

    assert reify(ref) is child


def test_reify_is_noop_for_plain_values():
    child = ChildEntity()

    assert reify(child) is child
    assert reify(3) == 3
    assert reify(None) is None


def test_lazy_ref_satisfies_reifiable_protocol():
    assert isinstance(LazyRef.of(1), Reifiable)
    assert not isinstance(ChildEntity(), Reifiable)


def test_get_type_sees_through_wrapper():
    assert get_type(LazyRef.of(ChildEntity())) is ChildEntity
    assert get_type(5) is int


def test_repr_does_not_force_load():
    ref = LazyRef(lambda: ChildEntity())

    assert repr(ref) == "LazyRef(unloaded)"
    assert not ref.is_loaded
