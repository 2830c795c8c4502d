"""Tests for the record model."""

from __future__ import annotations

import pytest

from ksm_notation.core.records.types import CustomField, FileAttachment, Record, RecordMetadata
from tests.factories import FOLDER_UID, LOGIN_UID, field, make_login_record, make_record


class TestFromDict:
    def test_full_record(self) -> None:
        record = make_login_record()
        assert record.uid == LOGIN_UID
        assert record.title == "My Database"
        assert record.record_type == "login"
        assert record.notes == "Primary database"
        assert record.folder_uid == FOLDER_UID
        assert [f.type for f in record.fields] == ["login", "password", "url"]
        assert record.custom[0] == CustomField(label="environment", type="text", value=["prod"])
        assert record.files[0] == FileAttachment(
            uid="file-uid-000000000001", name="document.pdf", title="Runbook", size=2048, type="application/pdf"
        )

    def test_uid_argument_overrides(self) -> None:
        record = Record.from_dict({"uid": "ignored", "title": "x"}, uid="from-key-0000000001")
        assert record.uid == "from-key-0000000001"

    def test_missing_uid(self) -> None:
        with pytest.raises(ValueError, match="no uid"):
            Record.from_dict({"title": "x"})

    def test_snake_case_folder(self) -> None:
        assert Record.from_dict({"uid": "u", "folder_uid": "f"}).folder_uid == "f"

    def test_scalar_value_wrapped(self) -> None:
        record = Record.from_dict({"uid": "u", "fields": [{"type": "login", "value": "admin"}]})
        assert record.fields[0].value == ["admin"]

    def test_malformed_entries_skipped(self) -> None:
        record = Record.from_dict(
            {
                "uid": "u",
                "fields": [{"value": ["no type"]}, "not-a-dict", {"type": "login", "value": ["admin"]}],
                "custom": None,
                "files": [{"title": "no name"}, {"name": "ok.txt"}],
            }
        )
        assert [f.type for f in record.fields] == ["login"]
        assert record.custom == ()
        assert [f.name for f in record.files] == ["ok.txt"]

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(2048, 2048), ("4096", 4096), (12.7, 12), ("2 KB", 0), ("", 0), (None, 0), (True, 0), (-5, 0),
         (float("nan"), 0), ({"bytes": 1}, 0)],
    )
    def test_attachment_size_coerced(self, size: object, expected: int) -> None:
        record = Record.from_dict({"uid": "u", "files": [{"name": "a.bin", "size": size}, {"name": "b.bin"}]})
        assert [f.size for f in record.files] == [expected, 0]

    def test_to_dict_round_trip(self) -> None:
        record = make_login_record()
        assert Record.from_dict(record.to_dict()) == record


class TestAccessors:
    def test_metadata(self) -> None:
        metadata = make_login_record().metadata
        assert metadata == RecordMetadata(LOGIN_UID, "My Database", "login", FOLDER_UID)
        assert metadata.to_dict() == {
            "uid": LOGIN_UID,
            "title": "My Database",
            "type": "login",
            "folder_uid": FOLDER_UID,
        }

    def test_password(self) -> None:
        assert make_login_record(password="hunter2hunter2").password == "hunter2hunter2"

    def test_password_skips_empty(self) -> None:
        record = make_record(fields=[field("password"), field("password", "", "second")])
        assert record.password == "second"

    def test_no_password(self) -> None:
        assert make_record(fields=[field("login", "admin")]).password is None

    def test_find_field_skips_empty(self) -> None:
        record = make_record(fields=[field("url"), field("url", "https://a.example")])
        found = record.find_field("url")
        assert found is not None
        assert found.value == ["https://a.example"]

    def test_find_custom_prefers_label(self) -> None:
        record = make_record(custom=[field("apiKey", "by-type"), field("text", "by-label", label="apiKey")])
        found = record.find_custom("apiKey")
        assert found is not None
        assert found.value == ["by-label"]

    def test_find_custom_by_type(self) -> None:
        record = make_record(custom=[field("phone", {"number": "1"})])
        found = record.find_custom("phone")
        assert found is not None
        assert found.key == "phone"

    def test_get_string_value_case_insensitive(self) -> None:
        record = make_login_record()
        assert record.get_string_value("LOGIN") == "admin"
        assert record.get_string_value("Environment") == "prod"
        assert record.get_string_value("phone") is None
        assert record.get_string_value("missing") is None

    def test_attachment_to_dict(self) -> None:
        attachment = make_login_record().files[0]
        assert attachment.to_dict() == {
            "name": "document.pdf",
            "title": "Runbook",
            "size": 2048,
            "type": "application/pdf",
        }
