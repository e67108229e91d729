"""Entity identity functionality: audited base entity and identifiers."""

from graphcopy.core.identity.models import AUDIT_FIELDS, AuditedEntity, new_entity_id

__all__ = [
    "AUDIT_FIELDS",
    "AuditedEntity",
    "new_entity_id",
]
