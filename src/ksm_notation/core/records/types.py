"""Read-only record model produced by vault clients."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RecordField:
    """A typed field; ``value`` is always a list since fields may repeat."""

    type: str
    value: list[Any] = field(default_factory=list)
    label: str | None = None


@dataclass(frozen=True)
class CustomField:
    """A user-defined field, addressed by label."""

    label: str | None
    type: str
    value: list[Any] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Label when set, otherwise the field type."""
        return self.label or self.type


@dataclass(frozen=True)
class FileAttachment:
    """Attachment metadata.  File content is never part of a record."""

    uid: str
    name: str
    title: str = ""
    size: int = 0
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "title": self.title, "size": self.size, "type": self.type}


@dataclass(frozen=True)
class RecordMetadata:
    """Listing entry: identifies a record without exposing values."""

    uid: str
    title: str
    record_type: str
    folder_uid: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "title": self.title,
            "type": self.record_type,
            "folder_uid": self.folder_uid,
        }


@dataclass(frozen=True)
class Record:
    """A stored secret record.

    Args:
        uid: Record UID.
        title: Human-readable title; not unique.
        record_type: Template name such as ``login`` or ``bankCard``.
        notes: Free-form notes.
        folder_uid: Containing folder, if known.
        fields: Standard typed fields, in record order.
        custom: Custom fields, in record order.
        files: Attachment metadata.
    """

    uid: str
    title: str
    record_type: str = ""
    notes: str = ""
    folder_uid: str | None = None
    fields: tuple[RecordField, ...] = ()
    custom: tuple[CustomField, ...] = ()
    files: tuple[FileAttachment, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], uid: str | None = None) -> Record:
        """Build a record from Keeper's record JSON layout.

        ``uid`` overrides a ``uid`` key in *data*; one of them must be
        present.  Malformed field entries are skipped.

        Raises:
            ValueError: If no UID is available.
        """
        record_uid = uid or data.get("uid")
        if not record_uid:
            raise ValueError("record data has no uid")
        return cls(
            uid=str(record_uid),
            title=str(data.get("title") or ""),
            record_type=str(data.get("type") or ""),
            notes=str(data.get("notes") or ""),
            folder_uid=data.get("folderUid") or data.get("folder_uid"),
            fields=tuple(
                RecordField(type=str(item["type"]), value=_as_list(item.get("value")), label=item.get("label"))
                for item in _entries(data.get("fields"))
            ),
            custom=tuple(
                CustomField(label=item.get("label"), type=str(item["type"]), value=_as_list(item.get("value")))
                for item in _entries(data.get("custom"))
            ),
            files=tuple(
                FileAttachment(
                    uid=str(item.get("fileUid") or item.get("uid") or ""),
                    name=str(item["name"]),
                    title=str(item.get("title") or ""),
                    size=_file_size(item.get("size")),
                    type=str(item.get("type") or ""),
                )
                for item in _file_entries(data.get("files"))
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Inverse of :meth:`from_dict`."""
        return {
            "uid": self.uid,
            "title": self.title,
            "type": self.record_type,
            "notes": self.notes,
            "folderUid": self.folder_uid,
            "fields": [_field_dict(f.type, f.label, f.value) for f in self.fields],
            "custom": [_field_dict(f.type, f.label, f.value) for f in self.custom],
            "files": [{"fileUid": f.uid, **f.to_dict()} for f in self.files],
        }

    @property
    def metadata(self) -> RecordMetadata:
        return RecordMetadata(self.uid, self.title, self.record_type, self.folder_uid)

    @property
    def password(self) -> str | None:
        """First non-empty password value, or ``None``."""
        for record_field in self.fields_of_type("password"):
            for value in record_field.value:
                if isinstance(value, str) and value:
                    return value
        return None

    def fields_of_type(self, field_type: str) -> list[RecordField]:
        return [f for f in self.fields if f.type == field_type]

    def find_field(self, field_type: str) -> RecordField | None:
        """First standard field of *field_type* with a non-empty value."""
        for record_field in self.fields:
            if record_field.type == field_type and record_field.value:
                return record_field
        return None

    def find_custom(self, name: str) -> CustomField | None:
        """First custom field labelled *name*, else the first of type *name*."""
        for custom_field in self.custom:
            if custom_field.label == name:
                return custom_field
        for custom_field in self.custom:
            if custom_field.type == name:
                return custom_field
        return None

    def get_string_value(self, name: str) -> str | None:
        """Simple string accessor over standard and custom fields.

        Returns the first string value of the first field whose type or
        label matches *name* case-insensitively.
        """
        wanted = name.casefold()
        candidates: list[RecordField | CustomField] = [*self.fields, *self.custom]
        for candidate in candidates:
            names = {candidate.type.casefold(), (candidate.label or "").casefold()}
            if wanted not in names:
                continue
            for value in candidate.value:
                if isinstance(value, str):
                    return value
        return None


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def _entries(raw: Any) -> list[Mapping[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, Mapping) and isinstance(item.get("type"), str)]


def _file_entries(raw: Any) -> list[Mapping[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, Mapping) and item.get("name")]


def _field_dict(field_type: str, label: str | None, value: list[Any]) -> dict[str, Any]:
    entry: dict[str, Any] = {"type": field_type, "value": list(value)}
    if label:
        entry["label"] = label
    return entry


def _file_size(raw: Any) -> int:
    # sizes that are not a byte count ("2 KB", None) are reported as 0
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int) or (isinstance(raw, float) and math.isfinite(raw)):
        return max(int(raw), 0)
    if isinstance(raw, str) and raw.strip().isdecimal():
        return int(raw.strip())
    return 0
