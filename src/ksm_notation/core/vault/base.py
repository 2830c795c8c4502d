"""Vault client abstractions.

A vault client returns :class:`Record` objects and offers a native
notation lookup that reports ambiguity instead of guessing.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from ksm_notation.core.exceptions import (
    AmbiguousRecordError,
    FieldNotFoundError,
    RecordNotFoundError,
    VaultClientError,
)
from ksm_notation.core.notation.grammar import parse_notation
from ksm_notation.core.notation.types import Locator
from ksm_notation.core.records.types import Record

logger = logging.getLogger(__name__)


class VaultClient(ABC):
    """Base class for record stores.

    Subclasses fetch records from a specific backend (memory, HashiCorp
    Vault, AWS Secrets Manager, etc.).
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Unique name for this backend (e.g. ``"memory"``, ``"aws"``)."""
        ...

    @abstractmethod
    def fetch_records_by_uid(self, uids: list[str]) -> list[Record]:
        """Fetch the records with the given UIDs; all records if empty."""
        ...

    @abstractmethod
    def fetch_all_records(self) -> list[Record]:
        """Fetch every record visible to this client."""
        ...

    @abstractmethod
    def resolve_notation(self, notation: str) -> list[Any]:
        """Resolve *notation* natively and return the raw values.

        Raises:
            AmbiguousRecordError: If several records share the title.
            RecordNotFoundError: If no record matches.
            FieldNotFoundError: If the record lacks the field.
        """
        ...


class KeyValueVaultClient(VaultClient):
    """Vault client built on a single :meth:`_load_records` primitive.

    Records are loaded on every call; nothing is cached between calls.
    Backend failures are wrapped in :class:`VaultClientError`.
    """

    @abstractmethod
    def _load_records(self) -> list[Record]:
        """Load every record from the backend."""
        ...

    def fetch_all_records(self) -> list[Record]:
        try:
            records = self._load_records()
        except VaultClientError:
            raise
        except Exception as exc:
            raise VaultClientError("fetch_all_records", exc) from exc
        logger.debug("Loaded %d record(s) from %s backend", len(records), self.backend_name)
        return records

    def fetch_records_by_uid(self, uids: list[str]) -> list[Record]:
        records = self.fetch_all_records()
        if not uids:
            return records
        wanted = set(uids)
        return [record for record in records if record.uid in wanted]

    def resolve_notation(self, notation: str) -> list[Any]:
        locator = parse_notation(notation)
        record = self._single_record(locator)

        if locator.is_file:
            for attachment in record.files:
                if locator.file_name in (attachment.name, attachment.title, attachment.uid):
                    return [attachment.to_dict()]
            raise FieldNotFoundError(locator.file_name or "", f"record {record.uid} has no such file")

        field_name = locator.field_name or ""
        values = self._raw_values(record, locator)
        if locator.index is not None:
            if locator.index >= len(values):
                raise FieldNotFoundError(field_name, f"index {locator.index} out of range")
            values = [values[locator.index]]
        if locator.property:
            values = [v[locator.property] for v in values if isinstance(v, dict) and locator.property in v]
            if not values:
                raise FieldNotFoundError(f"{field_name}[{locator.property}]", "no such property")
        return values

    def _single_record(self, locator: Locator) -> Record:
        if locator.uid:
            matches = self.fetch_records_by_uid([locator.uid])
        else:
            matches = [record for record in self.fetch_all_records() if record.title == locator.title]
        if not matches:
            raise RecordNotFoundError(locator.record_ref)
        if len(matches) > 1:
            raise AmbiguousRecordError(locator.record_ref, len(matches))
        return matches[0]

    @staticmethod
    def _raw_values(record: Record, locator: Locator) -> list[Any]:
        field_name = locator.field_name or ""
        if locator.is_custom:
            custom_field = record.find_custom(field_name)
            if custom_field is not None and custom_field.value:
                return list(custom_field.value)
        else:
            record_field = record.find_field(field_name)
            if record_field is not None:
                return list(record_field.value)
        raise FieldNotFoundError(field_name, f"record {record.uid} has no such field")
