"""Journey tests: copying persisted parent/child graphs into new drafts."""

from dataclasses import dataclass, field
from uuid import uuid4

from entities import ChildEntity, MapValue, Opaque, ParentEntity, Slot
from pydantic import BaseModel, ConfigDict

from graphcopy import AuditedEntity, LazyRef, copy, copyable


def _persisted_parent() -> ParentEntity:
    parent = ParentEntity(id=uuid4(), string_field="parent", int_field=1)
    parent.touch()
    return parent


def test_empty_children_collection_is_independent():
    """Scenario: a draft of a parent without children gets its own empty list."""
    parent = _persisted_parent()

    draft = copy(parent)
    draft.children.append(ChildEntity(string_field="new"))

    assert parent.children == []
    assert len(draft.children) == 1


def test_two_children_point_at_new_parent():
    """Scenario: both copied children refer to the draft, originals keep the source parent."""
    parent = _persisted_parent()
    parent.children = [
        ChildEntity(id=uuid4(), string_field="one", parent_entity=parent),
        ChildEntity(id=uuid4(), string_field="two", parent_entity=parent),
    ]

    draft = copy(parent)

    assert all(child.parent_entity is draft for child in draft.children)
    assert all(child.parent_entity is parent for child in parent.children)
    assert all(child.is_new() for child in draft.children)


def test_enum_keyed_map_values_lose_identity():
    """Scenario: map values are new entities under the same enum keys."""
    parent = _persisted_parent()
    parent.key_values = {
        Slot.FIRST: MapValue(id=uuid4(), string_value="one"),
        Slot.SECOND: MapValue(id=uuid4(), string_value="two"),
    }

    draft = copy(parent)

    assert draft.key_values.keys() == parent.key_values.keys()
    for slot, value in draft.key_values.items():
        assert value.id is None
        assert value.string_value == parent.key_values[slot].string_value


def test_opaque_reference_is_shared():
    """Scenario: non-copyable references are the very same object in the draft."""
    opaque = Opaque("settings")
    parent = _persisted_parent()
    parent.copy_not_supported = opaque

    draft = copy(parent)

    assert draft.copy_not_supported is opaque
    assert draft.id is None
    assert draft.opt_lock == 0


def test_lazy_loaded_children_are_materialized():
    """Lazy references are loaded and their targets copied, not the wrapper."""
    parent = _persisted_parent()
    child = ChildEntity(id=uuid4(), string_field="lazy", parent_entity=parent)
    parent.child = LazyRef(lambda: child)  # type: ignore[assignment]

    draft = copy(parent)

    assert isinstance(draft.child, ChildEntity)
    assert draft.child.parent_entity is draft
    assert draft.child.id is None


@copyable(exclude=("id",))
class Section(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    heading: str
    paragraphs: list[str] = []


@copyable(exclude=("id",))
class Document(BaseModel):
    id: int | None = None
    title: str
    sections: list[Section] = []


def test_pydantic_document_copy():
    document = Document(
        id=7,
        title="Guide",
        sections=[Section(id=1, heading="Intro", paragraphs=["a", "b"])],
    )

    draft = copy(document)

    assert draft.id is None
    assert draft.title == "Guide"
    assert draft.sections[0].id is None
    assert draft.sections[0].heading == "Intro"
    assert draft.sections[0].paragraphs == ["a", "b"]
    assert draft.sections[0].paragraphs is not document.sections[0].paragraphs
    assert draft.sections[0] is not document.sections[0]


def test_pydantic_copy_keeps_explicitly_set_fields():
    """Fields set on the source stay set on the copy; excluded ones do not."""
    document = Document(id=3, title="Guide", sections=[Section(heading="Intro")])

    draft = copy(document)

    assert draft.model_dump(exclude_unset=True) == {
        "title": "Guide",
        "sections": [{"heading": "Intro"}],
    }
    assert document.model_dump(exclude_unset=True)["id"] == 3


@copyable
@dataclass(eq=False, kw_only=True)
class Line(AuditedEntity):
    sku: str
    order: "PurchaseOrder | None" = None


@copyable
@dataclass(eq=False, kw_only=True)
class PurchaseOrder(AuditedEntity):
    lines: list[Line] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)


def test_purchase_order_reorder_flow():
    """Copying an order to re-place it yields an unsaved order with unsaved lines."""
    order = PurchaseOrder(id=uuid4(), tags={"rush"})
    order.lines = [Line(id=uuid4(), sku=sku, order=order) for sku in ("A", "B", "C")]
    order.touch()

    reorder = copy(order)

    assert reorder.is_new()
    assert reorder.opt_lock == 0
    assert [line.sku for line in reorder.lines] == ["A", "B", "C"]
    assert all(line.order is reorder and line.is_new() for line in reorder.lines)
    assert reorder.tags == {"rush"}
    assert reorder.tags is not order.tags
