"""Field extraction with per-type decoding and masking."""

from __future__ import annotations

import logging
from typing import Any

from ksm_notation.core.exceptions import FieldNotFoundError, UnsupportedFieldShapeError
from ksm_notation.core.notation.types import Locator
from ksm_notation.core.records.catalog import field_types_for
from ksm_notation.core.records.masking import is_sensitive, mask_value
from ksm_notation.core.records.shapes import decode_element, decode_values
from ksm_notation.core.records.types import Record

logger = logging.getLogger(__name__)


class FieldExtractor:
    """Resolve field names and locators against a :class:`Record`.

    Values are masked unless ``unmask=True`` is passed.  The extractor
    holds no per-call state and may be shared between threads.

    Args:
        strict_index: Raise :class:`FieldNotFoundError` for an index past
            the end of a field's values.  When ``False`` the first element
            is used instead.

    Example:
        >>> extractor = FieldExtractor()
        >>> value, found = extractor.extract_field(record, "password")
    """

    def __init__(self, strict_index: bool = False) -> None:
        self.strict_index = strict_index

    # ------------------------------------------------------------------
    # Whole record
    # ------------------------------------------------------------------

    def extract_all(self, record: Record, unmask: bool = False) -> dict[str, Any]:
        """Extract every present field of *record*.

        Field types come from the record-type catalog.  Missing or
        malformed fields are left out of the result.
        """
        result: dict[str, Any] = {
            "uid": record.uid,
            "title": record.title,
            "type": record.record_type,
        }

        for field_type in field_types_for(record.record_type):
            record_field = record.find_field(field_type)
            if record_field is None:
                continue
            try:
                result[field_type] = decode_values(field_type, record_field.value, unmask)
            except UnsupportedFieldShapeError as exc:
                logger.debug("Skipping field '%s' of record %s: %s", field_type, record.uid, exc)

        if record.notes:
            result["notes"] = record.notes

        custom_fields: dict[str, Any] = {}
        for custom_field in record.custom:
            if custom_field.key in custom_fields or not custom_field.value:
                continue
            try:
                custom_fields[custom_field.key] = decode_values(
                    custom_field.type, custom_field.value, unmask, name=custom_field.key
                )
            except UnsupportedFieldShapeError as exc:
                logger.debug("Skipping custom field '%s' of record %s: %s", custom_field.key, record.uid, exc)
        if custom_fields:
            result["custom_fields"] = custom_fields

        if record.files:
            result["files"] = [attachment.to_dict() for attachment in record.files]

        return result

    # ------------------------------------------------------------------
    # Single field
    # ------------------------------------------------------------------

    def extract_field(
        self,
        record: Record,
        field_name: str,
        unmask: bool = False,
        index: int | None = None,
    ) -> tuple[Any, bool]:
        """Extract one field by name.

        Lookup order: ``notes``, the native password accessor, standard
        fields by type, custom fields by label then type, and finally
        :meth:`Record.get_string_value`.

        Returns:
            ``(value, True)`` when found, ``(None, False)`` otherwise.

        Raises:
            FieldNotFoundError: If ``strict_index`` is set and *index* is
                out of range.
        """
        if field_name == "notes":
            return (record.notes, True) if record.notes else (None, False)

        if field_name == "password" and index is None:
            password = record.password
            if password:
                return (password if unmask else mask_value(password)), True

        record_field = record.find_field(field_name)
        if record_field is not None:
            try:
                return self.decode_field(field_name, record_field.value, unmask, index), True
            except UnsupportedFieldShapeError as exc:
                logger.debug("Field '%s' of record %s not decodable: %s", field_name, record.uid, exc)

        custom_field = record.find_custom(field_name)
        if custom_field is not None:
            try:
                return self.decode_field(custom_field.type, custom_field.value, unmask, index, name=field_name), True
            except UnsupportedFieldShapeError as exc:
                logger.debug("Custom field '%s' of record %s not decodable: %s", field_name, record.uid, exc)

        value = record.get_string_value(field_name)
        if value is not None:
            if not unmask and is_sensitive(field_name):
                value = mask_value(value)
            return value, True

        return None, False

    def extract(self, record: Record, locator: Locator, unmask: bool = False) -> Any:
        """Resolve *locator* against *record*.

        File locators return attachment metadata, never content.

        Raises:
            FieldNotFoundError: If the field, index, property or file is
                not present.
        """
        if locator.is_file:
            return self._extract_file(record, locator.file_name or "")

        field_name = locator.field_name or ""
        if locator.is_custom:
            custom_field = record.find_custom(field_name)
            if custom_field is None:
                raise FieldNotFoundError(field_name, f"record {record.uid} has no such custom field")
            try:
                value = self.decode_field(custom_field.type, custom_field.value, unmask, locator.index, name=field_name)
            except UnsupportedFieldShapeError as exc:
                raise FieldNotFoundError(field_name, exc.reason) from exc
        else:
            value, found = self.extract_field(record, field_name, unmask, locator.index)
            if not found:
                raise FieldNotFoundError(field_name, f"record {record.uid} has no such field")

        if locator.property:
            return self._select_property(field_name, value, locator.property)
        return value

    def decode_field(
        self,
        field_type: str,
        values: list[Any],
        unmask: bool,
        index: int | None = None,
        name: str | None = None,
    ) -> Any:
        """Decode a field value list, optionally narrowed to one element.

        Raises:
            UnsupportedFieldShapeError: If the value does not fit the type.
            FieldNotFoundError: If ``strict_index`` is set and *index* is
                out of range.
        """
        if index is None:
            return decode_values(field_type, values, unmask, name)
        if not values:
            raise UnsupportedFieldShapeError(field_type, "field has no value")
        position = self._resolve_index(name or field_type, index, len(values))
        return decode_element(field_type, values[position], unmask, name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_index(self, field_name: str, index: int, size: int) -> int:
        if index < size:
            return index
        if self.strict_index:
            raise FieldNotFoundError(field_name, f"index {index} out of range for {size} value(s)")
        logger.debug("Index %d out of range for '%s' (%d values), using 0", index, field_name, size)
        return 0

    @staticmethod
    def _select_property(field_name: str, value: Any, prop: str) -> Any:
        if isinstance(value, list) and value:
            value = value[0]
        if isinstance(value, dict) and prop in value:
            return value[prop]
        raise FieldNotFoundError(f"{field_name}[{prop}]", "no such property")

    @staticmethod
    def _extract_file(record: Record, file_name: str) -> dict[str, Any]:
        for attachment in record.files:
            if file_name in (attachment.name, attachment.title, attachment.uid):
                return attachment.to_dict()
        raise FieldNotFoundError(file_name, f"record {record.uid} has no such file")
