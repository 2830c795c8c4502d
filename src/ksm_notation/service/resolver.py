"""Caller-facing notation resolver.

Wires the input validator, notation grammar, vault client, field
extractor, audit sink and metrics registry together::

    resolver = NotationResolver(InMemoryVaultClient.from_file("records.json"))
    resolver.get_field("My Database/field/password")   # 'sup***123'
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from typing import Any

from ksm_notation.core.audit.filters import DetailFilter
from ksm_notation.core.audit.sinks import AuditSink, NullAuditSink
from ksm_notation.core.audit.types import AuditAction, AuditEvent, AuditStatus
from ksm_notation.core.exceptions import (
    AmbiguousRecordError,
    FieldNotFoundError,
    NotationResolverError,
    RecordNotFoundError,
    ValidationRejectedError,
)
from ksm_notation.core.metrics.registry import InMemoryRegistry, MeterRegistry, ResolverMetric
from ksm_notation.core.notation.grammar import parse_notation
from ksm_notation.core.notation.types import Locator
from ksm_notation.core.records.extractor import FieldExtractor
from ksm_notation.core.records.shapes import is_multi_element, redact_element, redact_property
from ksm_notation.core.records.types import Record, RecordMetadata
from ksm_notation.core.utils import safe_call
from ksm_notation.core.validation.validator import InputValidator
from ksm_notation.core.vault.base import VaultClient

logger = logging.getLogger(__name__)

SEARCHABLE_FIELD_TYPES: tuple[str, ...] = ("login", "url", "host", "address")


class NotationResolver:
    """Resolve notations and record lookups against a vault client.

    Every operation validates its input first, emits one audit event,
    and returns masked values unless ``unmask=True`` is passed.  Audit
    and metric failures are logged and never change the outcome.

    Args:
        client: Record store to read from.
        validator: Input validator. Defaults to a new :class:`InputValidator`.
        extractor: Field extractor. Defaults to a lenient :class:`FieldExtractor`.
        sink: Audit sink. Defaults to :class:`NullAuditSink`.
        metrics: Metrics registry. Defaults to :class:`InMemoryRegistry`.
        actor: Actor name recorded in audit events.
    """

    def __init__(
        self,
        client: VaultClient,
        validator: InputValidator | None = None,
        extractor: FieldExtractor | None = None,
        sink: AuditSink | None = None,
        metrics: MeterRegistry | None = None,
        actor: str = "notation_resolver",
    ) -> None:
        self._client = client
        self._validator = validator or InputValidator()
        self._extractor = extractor or FieldExtractor()
        self._sink = sink or NullAuditSink()
        self._metrics = metrics if metrics is not None else InMemoryRegistry()
        self._actor = actor

    @property
    def metrics(self) -> MeterRegistry:
        return self._metrics

    # ------------------------------------------------------------------
    # Field lookup
    # ------------------------------------------------------------------

    def get_field(self, notation: str, unmask: bool = False) -> Any:
        """Return the value *notation* addresses.

        The vault client's native lookup is tried first.  When it reports
        several records sharing the title, the first matching record in
        enumeration order is used.

        Raises:
            ValidationRejectedError: If *notation* fails validation.
            RecordNotFoundError: If no record matches.
            FieldNotFoundError: If the record lacks the field.
            VaultClientError: If the backend fails.
        """
        self._validate(notation, self._validator.validate_notation)
        locator = parse_notation(notation)
        metadata = {"masked": not unmask, "kind": locator.kind.value}

        start = time.perf_counter()
        try:
            value = self._resolve(notation, locator, unmask)
        except NotationResolverError as exc:
            failure = {**metadata, "error": type(exc).__name__}
            self._audit(AuditAction.FIELD_ACCESSED, notation, AuditStatus.FAILURE, failure)
            self._count(ResolverMetric.FIELD_RESOLVED, {"status": "failure"})
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            safe_call(
                lambda: self._metrics.timer(ResolverMetric.FIELD_DURATION.value, elapsed_ms),
                logger,
                "Failed to record timer %s",
                ResolverMetric.FIELD_DURATION.value,
            )

        self._audit(AuditAction.FIELD_ACCESSED, notation, AuditStatus.SUCCESS, metadata)
        self._count(ResolverMetric.FIELD_RESOLVED, {"status": "success"})
        return value

    def _resolve(self, notation: str, locator: Locator, unmask: bool) -> Any:
        try:
            results = self._client.resolve_notation(notation)
        except AmbiguousRecordError as exc:
            logger.info("%s; using the first match", exc)
            return self._resolve_from_duplicates(locator, unmask)

        if not results:
            raise FieldNotFoundError(locator.field_name or locator.file_name or "", "no value")
        if not (unmask or locator.is_file):
            results = _redact_native(locator, results)
        if locator.index is None and not locator.property and is_multi_element(locator.field_name or ""):
            return results
        return results[0] if len(results) == 1 else results

    def _resolve_from_duplicates(self, locator: Locator, unmask: bool) -> Any:
        records = self._fetch_all("get_field")
        for record in records:
            if (locator.uid and record.uid == locator.uid) or (locator.title and record.title == locator.title):
                return self._extractor.extract(record, locator, unmask)
        raise RecordNotFoundError(locator.record_ref)

    # ------------------------------------------------------------------
    # Record lookup
    # ------------------------------------------------------------------

    def get_secret(
        self,
        uid: str,
        fields: list[str] | None = None,
        unmask: bool = False,
    ) -> dict[str, Any]:
        """Return the fields of record *uid*.

        Without *fields* every present field is returned.  Requested
        fields that the record lacks are left out.

        Raises:
            ValidationRejectedError: If *uid* or a field name is invalid.
            RecordNotFoundError: If no record has this UID.
        """
        self._validate(uid, self._validator.validate_uid)
        for field_name in fields or []:
            self._validate(field_name, self._validator.validate_json_field)

        metadata = {"masked": not unmask, "fields": list(fields or [])}
        records = self._client.fetch_records_by_uid([uid])
        self._count(ResolverMetric.RECORD_FETCHED, {"operation": "get_secret"}, len(records))
        if not records:
            self._audit(AuditAction.SECRET_ACCESSED, uid, AuditStatus.FAILURE, metadata)
            raise RecordNotFoundError(uid)

        record = records[0]
        if not fields:
            result = self._extractor.extract_all(record, unmask)
        else:
            result = {"uid": record.uid, "title": record.title, "type": record.record_type}
            for field_name in fields:
                value, found = self._extractor.extract_field(record, field_name, unmask)
                if found:
                    result[field_name] = value

        self._audit(AuditAction.SECRET_ACCESSED, uid, AuditStatus.SUCCESS, metadata)
        return result

    def search_records(self, query: str) -> list[RecordMetadata]:
        """Case-insensitive search over titles, notes, types, common
        field values and attachment names.
        """
        self._validate(query, self._validator.validate_search_query)
        needle = query.casefold()
        matches = [
            record.metadata
            for record in self._fetch_all("search_records")
            if any(needle in text.casefold() for text in _searchable_text(record))
        ]
        self._audit(
            AuditAction.RECORD_SEARCHED,
            "records",
            AuditStatus.SUCCESS,
            {"query_length": len(query), "matches": len(matches)},
        )
        return matches

    def list_records(self, folder_uid: str | None = None) -> list[RecordMetadata]:
        """List record metadata, optionally limited to one folder."""
        if folder_uid:
            self._validate(folder_uid, self._validator.validate_uid)
        listing = [
            record.metadata
            for record in self._fetch_all("list_records")
            if not folder_uid or record.folder_uid == folder_uid
        ]
        self._audit(
            AuditAction.RECORDS_LISTED,
            folder_uid or "records",
            AuditStatus.SUCCESS,
            {"count": len(listing)},
        )
        return listing

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fetch_all(self, operation: str) -> list[Record]:
        records = self._client.fetch_all_records()
        self._count(ResolverMetric.RECORD_FETCHED, {"operation": operation}, len(records))
        return records

    def _validate(self, value: str, check: Callable[[str], None]) -> None:
        try:
            check(value)
        except ValidationRejectedError as exc:
            self._audit(AuditAction.VALIDATION_REJECTED, exc.purpose, AuditStatus.DENIED, {"reason": exc.reason})
            self._count(ResolverMetric.VALIDATION_REJECTED, {"purpose": exc.purpose})
            raise

    def _audit(self, action: AuditAction, resource: str, status: AuditStatus, metadata: dict[str, Any]) -> None:
        event = AuditEvent(
            action=action,
            actor=self._actor,
            resource=resource,
            status=status,
            metadata=DetailFilter.scrub(metadata),
        )
        safe_call(lambda: self._sink.emit(event), logger, "Failed to emit audit event for %s", action.value)

    def _count(self, metric: ResolverMetric, tags: dict[str, str], value: float = 1.0) -> None:
        safe_call(
            lambda: self._metrics.counter(metric.value, value, tags),
            logger,
            "Failed to record counter %s",
            metric.value,
        )


def _searchable_text(record: Record) -> Iterator[str]:
    yield record.title
    yield record.notes
    yield record.record_type
    for field_type in SEARCHABLE_FIELD_TYPES:
        for record_field in record.fields_of_type(field_type):
            for value in record_field.value:
                if isinstance(value, str):
                    yield value
                elif isinstance(value, dict):
                    yield from (str(v) for v in value.values() if isinstance(v, (str, int)))
    for attachment in record.files:
        yield attachment.name
        yield attachment.title


def _redact_native(locator: Locator, results: list[Any]) -> list[Any]:
    field_name = locator.field_name or ""
    if locator.property:
        return [redact_property(field_name, locator.property, value) for value in results]
    return [redact_element(field_name, value, name=field_name) for value in results]
