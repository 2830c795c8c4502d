"""Sensitivity classification and value masking.

A field is sensitive when any keyword in :data:`SENSITIVE_KEYWORDS` is a
substring of its case-folded name.  The rule applies equally to standard
field types, custom field labels, and sub-properties of structured
values.  Masking slices Unicode code points, not bytes.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

SENSITIVE_KEYWORDS: frozenset[str] = frozenset(
    {
        "password",
        "secret",
        "privatekey",
        "cardnumber",
        "securitycode",
        "accountnumber",
        "routingnumber",
        "licensenumber",
        "pin",
        "passphrase",
        "otp",
        "onetimecode",
        "answer",
        "keypair",
        "bankaccount",
        "paymentcard",
        "token",
        "apikey",
    }
)

MASK_PLACEHOLDER = "******"
MASKED_MARKER = "***MASKED***"
"""Replaces structured secrets wholesale instead of slicing them."""


def is_sensitive(name: str) -> bool:
    """Return ``True`` if *name* contains a sensitive keyword.

    >>> is_sensitive("PrivateKey")
    True
    >>> is_sensitive("username")
    False
    """
    folded = name.casefold()
    return any(keyword in folded for keyword in SENSITIVE_KEYWORDS)


def mask_value(value: str) -> str:
    """Partially redact *value*.

    Six code points or fewer become :data:`MASK_PLACEHOLDER`; longer
    values keep their first and last three code points.

    >>> mask_value("password123")
    'pas***123'
    """
    if len(value) <= 6:
        return MASK_PLACEHOLDER
    return f"{value[:3]}***{value[-3:]}"


def mask_structure(value: Any, field_name: str, sensitive_keys: Collection[str] = frozenset()) -> Any:
    """Mask a raw value returned for *field_name* by a vault client.

    A name is sensitive when :func:`is_sensitive` says so or it is one of
    *sensitive_keys*.  Under a sensitive name strings and numbers are
    masked and mappings are replaced by :data:`MASKED_MARKER`.  Lists are
    masked element-wise under the same name, and inside mappings each key
    is judged on its own name.
    """
    sensitive = is_sensitive(field_name) or field_name in sensitive_keys
    if isinstance(value, str):
        return mask_value(value) if sensitive else value
    if isinstance(value, (int, float)) and not isinstance(value, bool) and sensitive:
        return mask_value(str(value))
    if isinstance(value, list):
        return [mask_structure(item, field_name, sensitive_keys) for item in value]
    if isinstance(value, Mapping) and sensitive:
        return MASKED_MARKER
    if isinstance(value, Mapping):
        return {str(key): mask_structure(item, str(key), sensitive_keys) for key, item in value.items()}
    return value
