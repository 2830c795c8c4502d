"""Tests for the record-type catalog."""

from __future__ import annotations

import pytest

from ksm_notation.core.records.catalog import (
    FALLBACK_FIELD_TYPES,
    FIELD_TYPES_BY_RECORD_TYPE,
    field_types_for,
)


class TestFieldTypesFor:
    @pytest.mark.parametrize(
        ("record_type", "expected"),
        [
            ("login", ("login", "password", "url", "oneTimeCode", "otp")),
            ("sshKeys", ("login", "host", "keyPair", "passphrase", "password")),
            ("bankCard", ("paymentCard", "text", "pinCode", "addressRef", "cardRef")),
            ("wireless", ("text", "password", "wifiEncryption", "isSSIDHidden")),
        ],
    )
    def test_known_types(self, record_type: str, expected: tuple[str, ...]) -> None:
        assert field_types_for(record_type) == expected

    @pytest.mark.parametrize(
        "record_type",
        ["pamUser", "pamMachine", "pamDatabase", "pamDirectory", "pamRemoteBrowser", "pamNetworkConfiguration"],
    )
    def test_pam_types_present(self, record_type: str) -> None:
        assert record_type in FIELD_TYPES_BY_RECORD_TYPE

    def test_pam_resources_on_pam_user(self) -> None:
        assert "pamResources" in field_types_for("pamUser")

    def test_unknown_type_uses_fallback(self) -> None:
        assert field_types_for("myCustomTemplate") is FALLBACK_FIELD_TYPES
        assert field_types_for("") is FALLBACK_FIELD_TYPES

    def test_fallback_covers_common_types(self) -> None:
        for field_type in ("login", "password", "paymentCard", "securityQuestion", "passkey", "checkbox"):
            assert field_type in FALLBACK_FIELD_TYPES

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            FIELD_TYPES_BY_RECORD_TYPE["login"] = ()  # type: ignore[index]
