"""Structured form of a notation string."""

from __future__ import annotations

import builtins
import re
from dataclasses import dataclass
from enum import Enum

UID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,32}$")
"""Record UID: 16-32 URL-safe characters."""


class NotationKind(str, Enum):
    """Second segment of a notation: what the payload addresses."""

    FIELD = "field"
    CUSTOM_FIELD = "custom_field"
    FILE = "file"


@dataclass(frozen=True)
class Locator:
    """Parsed notation.

    Exactly one of ``uid`` and ``title`` is set.  ``file_name`` is set iff
    ``kind`` is :attr:`NotationKind.FILE`; otherwise ``field_name`` is set
    and ``index``/``property`` optionally narrow the field value.

    Args:
        kind: What the payload addresses.
        uid: Record UID, when the reference looks like one.
        title: Record title, otherwise.
        field_name: Standard field type or custom field label.
        index: Element of a multi-value field; ``None`` when absent.
        property: Named sub-property of a structured field value.
        file_name: Attachment name for file notations.
    """

    kind: NotationKind
    uid: str | None = None
    title: str | None = None
    field_name: str | None = None
    index: int | None = None
    property: str | None = None
    file_name: str | None = None

    def __post_init__(self) -> None:
        if bool(self.uid) == bool(self.title):
            raise ValueError("exactly one of uid and title must be set")
        if self.kind is NotationKind.FILE:
            if not self.file_name:
                raise ValueError("file_name is required for file locators")
            if self.field_name or self.index is not None or self.property:
                raise ValueError("file locators cannot address a field")
        else:
            if not self.field_name:
                raise ValueError("field_name is required for field locators")
            if self.file_name:
                raise ValueError("file_name is only valid for file locators")
        if self.index is not None and self.index < 0:
            raise ValueError("index must be non-negative")

    @builtins.property
    def record_ref(self) -> str:
        """The UID or title this locator refers to."""
        return self.uid or self.title or ""

    @builtins.property
    def is_custom(self) -> bool:
        return self.kind is NotationKind.CUSTOM_FIELD

    @builtins.property
    def is_file(self) -> bool:
        return self.kind is NotationKind.FILE
