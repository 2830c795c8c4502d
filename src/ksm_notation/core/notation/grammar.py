"""Parse and build ``<uid-or-title>/<kind>/<payload>`` notation strings.

Grammar::

    notation       := ref "/" kind "/" payload
    kind           := "field" | "custom_field" | "file"
    payload(file)  := filename              (verbatim, may contain "/")
    payload(field) := name ["[" index "]"] ["[" property "]"]

Field payloads are matched nested-first: ``name[0][prop]``, then
``name[0]``, then ``name[prop]``, and finally a bare ``name``.  Indexes
are written without leading zeros so that :func:`build_notation` always
reproduces the string :func:`parse_notation` accepted.

Examples::

    >>> parse_notation("NJ_xXSkk3xYI1h9ql5lAiQ/field/url[0]").index
    0
    >>> build_notation(parse_notation("My Secret/custom_field/phone[0][number]"))
    'My Secret/custom_field/phone[0][number]'
"""

from __future__ import annotations

import re

from ksm_notation.core.exceptions import (
    EmptyNotationError,
    InvalidIndexError,
    MalformedNotationError,
    MissingPayloadError,
    UnknownNotationKindError,
)
from ksm_notation.core.notation.types import UID_PATTERN, Locator, NotationKind

_IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"

NESTED_PATTERN = re.compile(rf"(.*)\[([0-9]+)\]\[({_IDENTIFIER})\]", re.DOTALL)
ARRAY_PATTERN = re.compile(r"(.*)\[([0-9]+)\]", re.DOTALL)
PROPERTY_PATTERN = re.compile(rf"(.*)\[({_IDENTIFIER})\]", re.DOTALL)
BRACKET_PATTERN = re.compile(r"(.*)\[([^\[\]]*)\]", re.DOTALL)


def is_valid_uid(value: str) -> bool:
    """Return ``True`` if *value* has the shape of a record UID."""
    return UID_PATTERN.match(value) is not None


def parse_notation(notation: str) -> Locator:
    """Parse a notation string into a :class:`Locator`.

    Raises:
        EmptyNotationError: If *notation* is empty.
        MalformedNotationError: If it has fewer than two ``/`` parts or
            an empty record reference.
        UnknownNotationKindError: If the kind segment is unknown.
        MissingPayloadError: If the field name or file name is missing.
        InvalidIndexError: If a bracket group is not a valid index or
            property name.
    """
    if not notation:
        raise EmptyNotationError(notation)

    parts = notation.split("/", 2)
    if len(parts) < 2:
        raise MalformedNotationError(
            notation, "invalid notation format: expected at least 2 parts separated by '/'"
        )

    ref, kind_segment = parts[0], parts[1]
    if not ref:
        raise MalformedNotationError(notation, "record UID or title cannot be empty")

    try:
        kind = NotationKind(kind_segment)
    except ValueError:
        raise UnknownNotationKindError(notation, kind_segment) from None

    payload = parts[2] if len(parts) == 3 else ""
    ref_fields = {"uid": ref} if is_valid_uid(ref) else {"title": ref}

    if kind is NotationKind.FILE:
        if not payload:
            raise MissingPayloadError(notation, "file notation requires filename")
        return Locator(kind=kind, file_name=payload, **ref_fields)

    if not payload:
        raise MissingPayloadError(notation, f"{kind.value} notation requires field name")
    field_name, index, prop = _parse_field_payload(notation, payload)
    return Locator(kind=kind, field_name=field_name, index=index, property=prop, **ref_fields)


def _parse_field_payload(notation: str, payload: str) -> tuple[str, int | None, str | None]:
    match = NESTED_PATTERN.fullmatch(payload)
    if match is not None:
        name, raw_index, prop = match.groups()
        return _require_name(notation, name), _parse_index(notation, raw_index), prop

    match = ARRAY_PATTERN.fullmatch(payload)
    if match is not None:
        name, raw_index = match.groups()
        return _require_name(notation, name), _parse_index(notation, raw_index), None

    match = PROPERTY_PATTERN.fullmatch(payload)
    if match is not None:
        name, prop = match.groups()
        return _require_name(notation, name), None, prop

    match = BRACKET_PATTERN.fullmatch(payload)
    if match is not None:
        raise InvalidIndexError(notation, match.group(2))

    return payload, None, None


def _require_name(notation: str, name: str) -> str:
    if not name:
        raise MissingPayloadError(notation, "field name cannot be empty")
    return name


def _parse_index(notation: str, raw: str) -> int:
    # "007" would not survive a round trip through build_notation
    if len(raw) > 1 and raw.startswith("0"):
        raise InvalidIndexError(notation, raw)
    return int(raw)


def build_notation(locator: Locator) -> str:
    """Build the notation string for *locator*.

    Inverse of :func:`parse_notation`.
    """
    ref = locator.record_ref
    if locator.kind is NotationKind.FILE:
        return f"{ref}/{NotationKind.FILE.value}/{locator.file_name}"
    return f"{ref}/{locator.kind.value}/{_field_path(locator)}"


def _field_path(locator: Locator) -> str:
    path = locator.field_name or ""
    if locator.index is not None and locator.property:
        return f"{path}[{locator.index}][{locator.property}]"
    if locator.index is not None:
        return f"{path}[{locator.index}]"
    if locator.property:
        return f"{path}[{locator.property}]"
    return path


def validate_notation_syntax(notation: str) -> None:
    """Raise a :class:`NotationError` if *notation* does not parse."""
    parse_notation(notation)


def extract_field_path(notation: str) -> str:
    """Return the ``field/...`` or ``custom_field/...`` part of *notation*.

    File notations return ``file/<name>``.
    """
    locator = parse_notation(notation)
    if locator.is_file:
        return f"{NotationKind.FILE.value}/{locator.file_name}"
    return f"{locator.kind.value}/{_field_path(locator)}"


def is_file_notation(notation: str) -> bool:
    parts = notation.split("/")
    return len(parts) >= 2 and parts[1] == NotationKind.FILE.value


def is_custom_field_notation(notation: str) -> bool:
    parts = notation.split("/")
    return len(parts) >= 2 and parts[1] == NotationKind.CUSTOM_FIELD.value


def split_notation_parts(notation: str) -> tuple[str, str, str]:
    """Split *notation* into ``(ref, kind, remainder)`` without parsing.

    The remainder keeps any further ``/`` characters.

    Raises:
        MalformedNotationError: If there are fewer than three parts.
    """
    parts = notation.split("/", 2)
    if len(parts) < 3:
        raise MalformedNotationError(notation, "invalid notation: expected at least 3 parts")
    return parts[0], parts[1], parts[2]
