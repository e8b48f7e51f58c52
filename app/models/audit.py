from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol


@dataclass(frozen=True)
class AuditFields:
    """Creation/modification metadata shared by user-authored rows."""
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    created_by: Optional[int]
    last_modified_by: Optional[int]


class HasAudit(Protocol):
    created_by: Optional[int]
    last_modified_by: Optional[int]

    @property
    def audit(self) -> AuditFields: ...


def audit_property() -> property:
    """Expose the four audit columns of a model as one AuditFields value."""
    def _get(self) -> AuditFields:
        return AuditFields(
            created_at=self.created_at,
            updated_at=self.updated_at,
            created_by=self.created_by,
            last_modified_by=self.last_modified_by,
        )
    return property(_get)


def stamp_created(row: HasAudit, user_id: int) -> None:
    row.created_by = user_id


def stamp_modified(row: HasAudit, user_id: int) -> None:
    row.last_modified_by = user_id
