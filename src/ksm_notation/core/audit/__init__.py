"""Audit event types, sinks, and metadata filters."""

from ksm_notation.core.audit.filters import DetailFilter
from ksm_notation.core.audit.sinks import (
    AuditSink,
    CompositeAuditSink,
    FileAuditSink,
    LoggingAuditSink,
    NullAuditSink,
)
from ksm_notation.core.audit.types import (
    AuditAction,
    AuditEvent,
    AuditStatus,
)

__all__ = [
    "AuditAction",
    "AuditEvent",
    "AuditSink",
    "AuditStatus",
    "CompositeAuditSink",
    "DetailFilter",
    "FileAuditSink",
    "LoggingAuditSink",
    "NullAuditSink",
]
