"""Exceptions raised by notation parsing, validation, and field extraction."""

from __future__ import annotations


class NotationResolverError(Exception):
    """Base exception for all ksm-notation errors."""

    pass


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------


class NotationError(NotationResolverError):
    """A notation string could not be parsed.

    Args:
        notation: The offending notation string.
        reason: Human-readable failure description.
    """

    def __init__(self, notation: str, reason: str) -> None:
        self.notation = notation
        self.reason = reason
        super().__init__(reason)


class EmptyNotationError(NotationError):
    """The notation string is empty."""

    def __init__(self, notation: str = "") -> None:
        super().__init__(notation, "notation cannot be empty")


class MalformedNotationError(NotationError):
    """The notation does not have the ``ref/kind/payload`` structure."""

    pass


class UnknownNotationKindError(NotationError):
    """The second segment is not ``field``, ``custom_field`` or ``file``."""

    def __init__(self, notation: str, kind: str) -> None:
        self.kind = kind
        super().__init__(notation, f"unknown notation type: {kind!r}")


class MissingPayloadError(NotationError):
    """The field name or file name after the kind segment is missing."""

    pass


class InvalidIndexError(NotationError):
    """A bracket group is neither a non-negative integer nor an identifier."""

    def __init__(self, notation: str, index: str) -> None:
        self.index = index
        super().__init__(notation, f"invalid array index: {index!r}")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationRejectedError(NotationResolverError):
    """User input was rejected by the input validator.

    Args:
        purpose: What the input was validated as (e.g. ``"uid"``).
        reason: Human-readable rejection reason.
    """

    def __init__(self, purpose: str, reason: str) -> None:
        self.purpose = purpose
        self.reason = reason
        super().__init__(f"invalid {purpose}: {reason}")


# ---------------------------------------------------------------------------
# Records and extraction
# ---------------------------------------------------------------------------


class RecordNotFoundError(NotationResolverError):
    """No record matches the requested UID or title."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"record not found: {reference}")


class FieldNotFoundError(NotationResolverError):
    """The record exists but does not expose the requested field."""

    def __init__(self, field_name: str, reason: str | None = None) -> None:
        self.field_name = field_name
        message = f"field {field_name!r} not found"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class AmbiguousRecordError(NotationResolverError):
    """Several records share the title a notation refers to.

    Raised by vault clients; the resolver handles it by picking the first
    matching record, so it never reaches callers of the resolver.
    """

    def __init__(self, reference: str, count: int) -> None:
        self.reference = reference
        self.count = count
        super().__init__(f"found multiple records ({count}) matching {reference!r}")


class UnsupportedFieldShapeError(NotationResolverError):
    """A raw field value does not have the structure its type implies."""

    def __init__(self, field_type: str, reason: str) -> None:
        self.field_type = field_type
        self.reason = reason
        super().__init__(f"unsupported value for field type {field_type!r}: {reason}")


class VaultClientError(NotationResolverError):
    """The vault backend failed to return records."""

    def __init__(self, operation: str, cause: Exception) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"vault operation '{operation}' failed: {cause}")
        self.__cause__ = cause
