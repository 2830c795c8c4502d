"""Audit event types and models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditAction(str, Enum):
    """Auditable resolver operations."""

    FIELD_ACCESSED = "field_accessed"
    SECRET_ACCESSED = "secret_accessed"
    RECORD_SEARCHED = "record_searched"
    RECORDS_LISTED = "records_listed"
    VALIDATION_REJECTED = "validation_rejected"


class AuditStatus(str, Enum):
    """Audit event status."""

    SUCCESS = "success"
    FAILURE = "failure"
    DENIED = "denied"


@dataclass
class AuditEvent:
    """A single audit event.

    Metadata describes the request (masking, field names, counts) and
    never carries secret values.

    Args:
        action: The action that occurred (enum or custom string).
        actor: Who performed the action.
        resource: What was acted upon (notation, record UID, query).
        status: Outcome of the action.
        timestamp: When the event occurred.
        metadata: Additional key-value data.
        trace_id: Correlation ID for distributed tracing.
    """

    action: AuditAction | str
    actor: str
    resource: str
    status: AuditStatus
    timestamp: datetime = field(default_factory=_utcnow)
    metadata: dict[str, Any] = field(default_factory=dict)
    trace_id: str | None = None

    @property
    def action_name(self) -> str:
        return self.action.value if isinstance(self.action, AuditAction) else self.action

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "action": self.action_name,
            "actor": self.actor,
            "resource": self.resource,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
            "trace_id": self.trace_id,
        }
