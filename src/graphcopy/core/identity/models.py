"""Identity and audit models.

Usage:
    @copyable
    @dataclass(eq=False, kw_only=True)
    class Invoice(AuditedEntity):
        number: str
        lines: list[InvoiceLine] = field(default_factory=list)

    invoice = Invoice(id=new_entity_id(), number="2024-001")
    draft = copy(invoice)   # draft.id is None, draft.opt_lock == 0
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from graphcopy.core.copyable import copyable

AUDIT_FIELDS = ("id", "opt_lock", "created_at", "updated_at")


def new_entity_id() -> UUID:
    """Generate a fresh random entity identifier."""
    return uuid4()


@copyable(exclude=AUDIT_FIELDS)
@dataclass(eq=False, kw_only=True)
class AuditedEntity:
    """Base for entities carrying identity, optimistic-lock, and audit metadata.

    None of these fields are copied: a copy of an audited entity is a new,
    unsaved entity. Equality is identity, as for persisted entities.
    """

    id: UUID | None = None
    opt_lock: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_new(self) -> bool:
        """Check whether this entity has never been assigned an identity."""
        return self.id is None

    def touch(self) -> None:
        """Stamp the update time and bump the optimistic-lock counter."""
        now = datetime.now(UTC)
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now
        self.opt_lock += 1
