"""Tests for FieldExtractor."""

from __future__ import annotations

import pytest

from ksm_notation.core.exceptions import FieldNotFoundError
from ksm_notation.core.notation import parse_notation
from ksm_notation.core.records.extractor import FieldExtractor
from ksm_notation.core.records.masking import MASKED_MARKER
from tests.factories import (
    CARD_UID,
    LOGIN_UID,
    SERVER_UID,
    field,
    make_card_record,
    make_login_record,
    make_record,
)


@pytest.fixture
def extractor() -> FieldExtractor:
    return FieldExtractor()


# ---------------------------------------------------------------------------
# extract_all
# ---------------------------------------------------------------------------


class TestExtractAll:
    def test_login_masked(self, extractor: FieldExtractor) -> None:
        result = extractor.extract_all(make_login_record())
        assert result == {
            "uid": LOGIN_UID,
            "title": "My Database",
            "type": "login",
            "login": "admin",
            "password": "sup***123",
            "url": "https://db.example.com",
            "notes": "Primary database",
            "custom_fields": {
                "environment": "prod",
                "apiKey": "sk-***456",
                "phone": {"region": "US", "number": "555-123-4567", "type": "Mobile"},
            },
            "files": [{"name": "document.pdf", "title": "Runbook", "size": 2048, "type": "application/pdf"}],
        }

    def test_login_unmasked(self, extractor: FieldExtractor) -> None:
        result = extractor.extract_all(make_login_record(), unmask=True)
        assert result["password"] == "supersecret123"
        assert result["custom_fields"]["apiKey"] == "sk-live-abcdef123456"

    def test_bank_card(self, extractor: FieldExtractor) -> None:
        result = extractor.extract_all(make_card_record())
        assert result["paymentCard"] == {
            "cardNumber": "411***111",
            "cardExpirationDate": "12/25",
            "cardSecurityCode": "******",
        }
        assert result["text"] == "Jane Smith"
        assert result["pinCode"] == "******"
        assert "login" not in result

    def test_minimal_record(self, extractor: FieldExtractor) -> None:
        record = make_record(SERVER_UID, "Empty", "login")
        assert extractor.extract_all(record) == {"uid": SERVER_UID, "title": "Empty", "type": "login"}

    def test_unknown_type_uses_fallback(self, extractor: FieldExtractor) -> None:
        record = make_record(
            SERVER_UID,
            "Custom",
            "myTemplate",
            fields=[
                field("email", "ops@example.com"),
                field("securityQuestion", {"question": "q", "answer": "Johnson"}),
            ],
        )
        result = extractor.extract_all(record)
        assert result["email"] == "ops@example.com"
        assert result["securityQuestion"] == {"question": "q", "answer": "Joh***son"}

    def test_fields_outside_catalog_ignored(self, extractor: FieldExtractor) -> None:
        record = make_record(fields=[field("login", "admin"), field("email", "ops@example.com")])
        assert "email" not in extractor.extract_all(record)

    def test_malformed_field_skipped(self, extractor: FieldExtractor) -> None:
        record = make_card_record()
        broken = make_record(CARD_UID, "Card", "bankCard", fields=[field("paymentCard", "4111"), field("text", "x")])
        assert "paymentCard" in extractor.extract_all(record)
        result = extractor.extract_all(broken)
        assert "paymentCard" not in result
        assert result["text"] == "x"

    def test_wireless_boolean(self, extractor: FieldExtractor) -> None:
        record = make_record(
            SERVER_UID, "Office WiFi", "wireless", fields=[field("text", "office"), field("isSSIDHidden", True)]
        )
        assert extractor.extract_all(record)["isSSIDHidden"] is True

    def test_wireless_non_boolean_skipped(self, extractor: FieldExtractor) -> None:
        record = make_record(SERVER_UID, "Office WiFi", "wireless", fields=[field("isSSIDHidden", "yes")])
        assert "isSSIDHidden" not in extractor.extract_all(record)

    def test_pam_resources_keep_every_element(self, extractor: FieldExtractor) -> None:
        record = make_record(
            SERVER_UID,
            "PAM",
            "pamUser",
            fields=[field("pamResources", {"controllerUid": "c1"}, {"controllerUid": "c2"})],
        )
        assert extractor.extract_all(record)["pamResources"] == [{"controllerUid": "c1"}, {"controllerUid": "c2"}]

    def test_first_custom_label_wins(self, extractor: FieldExtractor) -> None:
        record = make_record(custom=[field("text", "first", label="env"), field("text", "second", label="env")])
        assert extractor.extract_all(record)["custom_fields"] == {"env": "first"}

    def test_custom_keyed_by_type_without_label(self, extractor: FieldExtractor) -> None:
        record = make_record(custom=[field("url", "https://a.example")])
        assert extractor.extract_all(record)["custom_fields"] == {"url": "https://a.example"}

    def test_passkey_record(self, extractor: FieldExtractor) -> None:
        record = make_record(
            SERVER_UID,
            "Passkey",
            "passkey",
            fields=[field("passkey", {"credentialId": "c1", "privateKey": "-----BEGIN-----"})],
        )
        assert extractor.extract_all(record)["passkey"] == [{"credentialId": "c1", "privateKey": MASKED_MARKER}]


# ---------------------------------------------------------------------------
# extract_field
# ---------------------------------------------------------------------------


class TestExtractField:
    def test_notes(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "notes") == ("Primary database", True)

    def test_empty_notes_not_found(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_record(), "notes") == (None, False)

    def test_password_masked(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "password") == ("sup***123", True)

    def test_password_unmasked(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "password", unmask=True) == ("supersecret123", True)

    def test_password_with_index(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "password", index=0) == ("sup***123", True)

    def test_url_index(self, extractor: FieldExtractor) -> None:
        value, found = extractor.extract_field(make_login_record(), "url", index=1)
        assert found is True
        assert value == "https://db-replica.example.com"

    def test_index_out_of_range_falls_back_to_first(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "url", index=5) == ("https://db.example.com", True)

    def test_index_out_of_range_strict(self) -> None:
        with pytest.raises(FieldNotFoundError, match="index 5 out of range"):
            FieldExtractor(strict_index=True).extract_field(make_login_record(), "url", index=5)

    def test_custom_by_label(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "environment") == ("prod", True)

    def test_custom_sensitive_label(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "apiKey") == ("sk-***456", True)

    def test_structured_field(self, extractor: FieldExtractor) -> None:
        value, found = extractor.extract_field(make_card_record(), "paymentCard", unmask=True)
        assert found is True
        assert value["cardNumber"] == "4111111111111111"

    def test_string_accessor_fallback(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "LOGIN") == ("admin", True)

    def test_missing(self, extractor: FieldExtractor) -> None:
        assert extractor.extract_field(make_login_record(), "nonexistent") == (None, False)


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------


class TestExtract:
    def test_field(self, extractor: FieldExtractor) -> None:
        locator = parse_notation(f"{LOGIN_UID}/field/login")
        assert extractor.extract(make_login_record(), locator) == "admin"

    def test_custom_property(self, extractor: FieldExtractor) -> None:
        locator = parse_notation(f"{LOGIN_UID}/custom_field/phone[0][number]")
        assert extractor.extract(make_login_record(), locator) == "555-123-4567"

    def test_custom_property_without_index(self, extractor: FieldExtractor) -> None:
        locator = parse_notation(f"{LOGIN_UID}/custom_field/phone[region]")
        assert extractor.extract(make_login_record(), locator) == "US"

    def test_structured_property_masked(self, extractor: FieldExtractor) -> None:
        locator = parse_notation(f"{CARD_UID}/field/paymentCard[cardNumber]")
        assert extractor.extract(make_card_record(), locator) == "411***111"

    def test_multi_element_property_uses_first(self, extractor: FieldExtractor) -> None:
        resources = field("pamResources", {"controllerUid": "c1"}, {"controllerUid": "c2"})
        record = make_record(SERVER_UID, "PAM", "pamUser", fields=[resources])
        locator = parse_notation(f"{SERVER_UID}/field/pamResources[controllerUid]")
        assert extractor.extract(record, locator) == "c1"

    def test_missing_property(self, extractor: FieldExtractor) -> None:
        locator = parse_notation(f"{LOGIN_UID}/custom_field/phone[extension]")
        with pytest.raises(FieldNotFoundError, match="no such property"):
            extractor.extract(make_login_record(), locator)

    def test_property_on_string(self, extractor: FieldExtractor) -> None:
        locator = parse_notation(f"{LOGIN_UID}/field/login[first]")
        with pytest.raises(FieldNotFoundError):
            extractor.extract(make_login_record(), locator)

    def test_missing_field(self, extractor: FieldExtractor) -> None:
        with pytest.raises(FieldNotFoundError, match="has no such field"):
            extractor.extract(make_login_record(), parse_notation(f"{LOGIN_UID}/field/oneTimeCode"))

    def test_missing_custom_field(self, extractor: FieldExtractor) -> None:
        with pytest.raises(FieldNotFoundError, match="custom field"):
            extractor.extract(make_login_record(), parse_notation(f"{LOGIN_UID}/custom_field/region"))

    def test_undecodable_custom_field(self, extractor: FieldExtractor) -> None:
        record = make_record(custom=[field("paymentCard", "4111", label="card")])
        with pytest.raises(FieldNotFoundError):
            extractor.extract(record, parse_notation(f"{LOGIN_UID}/custom_field/card"))

    @pytest.mark.parametrize("name", ["document.pdf", "Runbook", "file-uid-000000000001"])
    def test_file_by_name_title_or_uid(self, extractor: FieldExtractor, name: str) -> None:
        locator = parse_notation(f"{LOGIN_UID}/file/{name}")
        assert extractor.extract(make_login_record(), locator)["name"] == "document.pdf"

    def test_missing_file(self, extractor: FieldExtractor) -> None:
        with pytest.raises(FieldNotFoundError, match="no such file"):
            extractor.extract(make_login_record(), parse_notation(f"{LOGIN_UID}/file/other.pdf"))

    def test_strict_index_on_custom_field(self) -> None:
        locator = parse_notation(f"{LOGIN_UID}/custom_field/environment[3]")
        assert FieldExtractor().extract(make_login_record(), locator) == "prod"
        with pytest.raises(FieldNotFoundError):
            FieldExtractor(strict_index=True).extract(make_login_record(), locator)
