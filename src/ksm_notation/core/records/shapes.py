"""Typed views over structured field values.

Each structured field type decodes into one dataclass.  A sub-property
is ``None`` when it was absent from the raw value and is then left out of
:meth:`FieldShape.to_dict`, so callers only see keys the record holds.

Decoding is dispatched through :data:`SHAPE_DECODERS`, keyed by field
type.  Types listed in :data:`BOOLEAN_FIELD_TYPES` decode to a ``bool``;
every other type is coerced to a string.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any

from ksm_notation.core.exceptions import UnsupportedFieldShapeError
from ksm_notation.core.records.masking import MASKED_MARKER, is_sensitive, mask_structure, mask_value


class Redaction(str, Enum):
    """How a sensitive sub-property is hidden."""

    NONE = "none"
    PARTIAL = "partial"
    MARKER = "marker"


def _prop(key: str, redaction: Redaction = Redaction.NONE) -> Any:
    return field(default=None, metadata={"key": key, "redaction": redaction})


def _redact(key: str, value: Any, redaction: Redaction) -> Any:
    if value is None:
        return None
    if redaction is Redaction.NONE:
        # nested objects (pam connection settings) may still hold secrets
        return mask_structure(value, key, REDACTED_PROPERTIES)
    if redaction is Redaction.PARTIAL and isinstance(value, str):
        return mask_value(value)
    return MASKED_MARKER


@dataclass(frozen=True)
class FieldShape:
    """Base class for structured field values."""

    @classmethod
    def from_raw(cls, raw: Any, field_type: str) -> FieldShape:
        """Build the shape from one raw value element.

        Raises:
            UnsupportedFieldShapeError: If *raw* is not a mapping.
        """
        if not isinstance(raw, Mapping):
            raise UnsupportedFieldShapeError(field_type, f"expected an object, got {type(raw).__name__}")
        kwargs = {f.name: raw[f.metadata["key"]] for f in fields(cls) if f.metadata["key"] in raw}
        return cls(**kwargs)

    @classmethod
    def redaction_of(cls, key: str) -> Redaction | None:
        """Redaction of sub-property *key*, or ``None`` if the shape lacks it."""
        for f in fields(cls):
            if f.metadata["key"] == key:
                return f.metadata["redaction"]
        return None

    def masked(self) -> FieldShape:
        """Return a copy with sensitive sub-properties redacted."""
        changes = {
            f.name: _redact(f.metadata["key"], getattr(self, f.name), f.metadata["redaction"])
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {f.metadata["key"]: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class PaymentCard(FieldShape):
    card_number: Any = _prop("cardNumber", Redaction.PARTIAL)
    card_expiration_date: Any = _prop("cardExpirationDate")
    card_security_code: Any = _prop("cardSecurityCode", Redaction.PARTIAL)


@dataclass(frozen=True)
class Address(FieldShape):
    street1: Any = _prop("street1")
    street2: Any = _prop("street2")
    city: Any = _prop("city")
    state: Any = _prop("state")
    country: Any = _prop("country")
    zip: Any = _prop("zip")


@dataclass(frozen=True)
class Phone(FieldShape):
    region: Any = _prop("region")
    number: Any = _prop("number")
    ext: Any = _prop("ext")
    type: Any = _prop("type")


@dataclass(frozen=True)
class BankAccount(FieldShape):
    account_type: Any = _prop("accountType")
    routing_number: Any = _prop("routingNumber", Redaction.PARTIAL)
    account_number: Any = _prop("accountNumber", Redaction.PARTIAL)
    other_type: Any = _prop("otherType")


@dataclass(frozen=True)
class KeyPair(FieldShape):
    public_key: Any = _prop("publicKey")
    private_key: Any = _prop("privateKey", Redaction.PARTIAL)


@dataclass(frozen=True)
class Host(FieldShape):
    host_name: Any = _prop("hostName")
    port: Any = _prop("port")


@dataclass(frozen=True)
class Name(FieldShape):
    first: Any = _prop("first")
    middle: Any = _prop("middle")
    last: Any = _prop("last")


@dataclass(frozen=True)
class SecurityQuestion(FieldShape):
    question: Any = _prop("question")
    answer: Any = _prop("answer", Redaction.PARTIAL)


@dataclass(frozen=True)
class PamResource(FieldShape):
    controller_uid: Any = _prop("controllerUid")
    folder_uid: Any = _prop("folderUid")
    resource_ref: Any = _prop("resourceRef")
    allowed_settings: Any = _prop("allowedSettings")


@dataclass(frozen=True)
class PamSettings(FieldShape):
    port_forward: Any = _prop("portForward")
    connection: Any = _prop("connection")


@dataclass(frozen=True)
class PamRemoteBrowserSettings(FieldShape):
    connection: Any = _prop("connection")


@dataclass(frozen=True)
class Script(FieldShape):
    file_ref: Any = _prop("fileRef")
    command: Any = _prop("command", Redaction.PARTIAL)
    record_ref: Any = _prop("recordRef")


@dataclass(frozen=True)
class Passkey(FieldShape):
    credential_id: Any = _prop("credentialId")
    user_id: Any = _prop("userId")
    relying_party: Any = _prop("relyingParty")
    username: Any = _prop("username")
    created_date: Any = _prop("createdDate")
    sign_count: Any = _prop("signCount")
    private_key: Any = _prop("privateKey", Redaction.MARKER)


@dataclass(frozen=True)
class AppFiller(FieldShape):
    application_title: Any = _prop("applicationTitle")
    content_filter: Any = _prop("contentFilter")
    macro_sequence: Any = _prop("macroSequence", Redaction.PARTIAL)


@dataclass(frozen=True)
class Schedule(FieldShape):
    type: Any = _prop("type")
    cron: Any = _prop("cron")
    time: Any = _prop("time")
    tz: Any = _prop("tz")
    weekday: Any = _prop("weekday")
    interval_count: Any = _prop("intervalCount")


@dataclass(frozen=True)
class ShapeDecoder:
    """Dispatch entry: the shape class and whether every element is kept."""

    shape: type[FieldShape]
    many: bool = False


SHAPE_DECODERS: MappingProxyType[str, ShapeDecoder] = MappingProxyType(
    {
        "paymentCard": ShapeDecoder(PaymentCard),
        "bankCard": ShapeDecoder(PaymentCard),
        "address": ShapeDecoder(Address),
        "phone": ShapeDecoder(Phone),
        "bankAccount": ShapeDecoder(BankAccount),
        "keyPair": ShapeDecoder(KeyPair),
        "host": ShapeDecoder(Host),
        "pamHostname": ShapeDecoder(Host),
        "name": ShapeDecoder(Name),
        "securityQuestion": ShapeDecoder(SecurityQuestion),
        "pamResources": ShapeDecoder(PamResource, many=True),
        "pamSettings": ShapeDecoder(PamSettings),
        "pamRemoteBrowserSettings": ShapeDecoder(PamRemoteBrowserSettings),
        "script": ShapeDecoder(Script, many=True),
        "passkey": ShapeDecoder(Passkey, many=True),
        "appFiller": ShapeDecoder(AppFiller, many=True),
        "schedule": ShapeDecoder(Schedule, many=True),
    }
)

BOOLEAN_FIELD_TYPES: frozenset[str] = frozenset({"isSSIDHidden", "checkbox"})

REDACTED_PROPERTIES: frozenset[str] = frozenset(
    f.metadata["key"]
    for decoder in SHAPE_DECODERS.values()
    for f in fields(decoder.shape)
    if f.metadata["redaction"] is not Redaction.NONE
)
"""Sub-property names some shape redacts, whatever their field type."""


def is_multi_element(field_type: str) -> bool:
    """Return ``True`` for shapes whose decoded value keeps every element."""
    decoder = SHAPE_DECODERS.get(field_type)
    return decoder is not None and decoder.many


def decode_element(field_type: str, raw: Any, unmask: bool, name: str | None = None) -> Any:
    """Decode one element of a field value.

    Args:
        field_type: Declared field type; selects the decoder.
        raw: One element of the field's value list.
        unmask: Return sensitive values in clear.
        name: Extra name checked for sensitivity of simple values,
            typically a custom field label.

    Raises:
        UnsupportedFieldShapeError: If *raw* does not fit the type.
    """
    decoder = SHAPE_DECODERS.get(field_type)
    if decoder is not None:
        shape = decoder.shape.from_raw(raw, field_type)
        return (shape if unmask else shape.masked()).to_dict()

    if field_type in BOOLEAN_FIELD_TYPES:
        if not isinstance(raw, bool):
            raise UnsupportedFieldShapeError(field_type, "expected a boolean")
        return raw

    text = coerce_to_string(field_type, raw)
    if not unmask and (is_sensitive(field_type) or (name is not None and is_sensitive(name))):
        return mask_value(text)
    return text


def coerce_to_string(field_type: str, raw: Any) -> str:
    """Render a scalar field value as text.

    Booleans become ``"true"``/``"false"`` and numbers are formatted
    without a fractional part.
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        return f"{raw:.0f}"
    raise UnsupportedFieldShapeError(field_type, f"cannot render {type(raw).__name__} as text")


def decode_values(field_type: str, values: list[Any], unmask: bool, name: str | None = None) -> Any:
    """Decode a whole value list.

    Multi-element shapes return a list with one entry per element; all
    other types decode the first element only.

    Raises:
        UnsupportedFieldShapeError: If *values* is empty or malformed.
    """
    if not values:
        raise UnsupportedFieldShapeError(field_type, "field has no value")
    if is_multi_element(field_type):
        return [decode_element(field_type, raw, unmask, name) for raw in values]
    return decode_element(field_type, values[0], unmask, name)


def redact_element(field_type: str, raw: Any, name: str | None = None) -> Any:
    """Mask one raw element without decoding it.

    Used for values returned by a vault client's native lookup.  Every
    raw key is kept; sub-properties are redacted exactly as
    :meth:`FieldShape.masked` would redact them, and values outside the
    shape table fall back to :func:`mask_structure`.

    Args:
        field_type: Field type, or custom field label, of the element.
        raw: The element as stored.
        name: Extra name checked for sensitivity, typically a label.
    """
    decoder = SHAPE_DECODERS.get(field_type)
    if decoder is not None and isinstance(raw, Mapping):
        return {str(key): redact_property(field_type, str(key), item) for key, item in raw.items()}
    if name is not None and is_sensitive(name):
        return mask_structure(raw, name, REDACTED_PROPERTIES)
    return mask_structure(raw, field_type, REDACTED_PROPERTIES)


def redact_property(field_type: str, key: str, value: Any) -> Any:
    """Mask the value of sub-property *key* of a *field_type* element."""
    decoder = SHAPE_DECODERS.get(field_type)
    redaction = decoder.shape.redaction_of(key) if decoder is not None else None
    if redaction is None:
        return mask_structure(value, key, REDACTED_PROPERTIES)
    return _redact(key, value, redaction)
