"""Tests for the CLI entrypoint."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from ksm_notation.service.cli import _build_parser, main
from tests.factories import CARD_UID, LOGIN_UID, make_card_record, make_login_record


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Iterator[None]:
    with patch("ksm_notation.service.cli.configure_logging"):
        yield


@pytest.fixture
def records_file(tmp_path: Path) -> Path:
    path = tmp_path / "records.json"
    path.write_text(
        json.dumps({"records": [make_login_record().to_dict(), make_card_record().to_dict()]}),
        encoding="utf-8",
    )
    return path


class TestBuildParser:
    def test_requires_command(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args([])

    def test_get_defaults(self) -> None:
        args = _build_parser().parse_args(["get", "My Database/field/login"])
        assert args.records is None
        assert args.unmask is False
        assert args.config is None

    def test_rejects_unknown_purpose(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["validate", "nonsense", "x"])
        assert exc_info.value.code == 2


class TestParseCommand:
    def test_prints_locator(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["parse", f"{LOGIN_UID}/custom_field/phone[0][number]"])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {
            "kind": "custom_field",
            "uid": LOGIN_UID,
            "field_name": "phone",
            "index": 0,
            "property": "number",
        }

    def test_invalid_notation(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["parse", f"{LOGIN_UID}/bogus/password"])

        assert code == 1
        assert "error: invalid notation: unknown notation type" in capsys.readouterr().err


class TestValidateCommand:
    def test_ok(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", "uid", LOGIN_UID]) == 0
        assert capsys.readouterr().out.strip() == "ok"

    def test_rejected(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", "file_path", "../../etc/passwd"]) == 1
        assert "invalid file_path" in capsys.readouterr().err


class TestGetCommand:
    def test_masked(self, records_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["get", "My Database/field/password", "--records", str(records_file)]) == 0
        assert capsys.readouterr().out.strip() == "sup***123"

    def test_unmasked(self, records_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["get", "My Database/field/password", "--records", str(records_file), "--unmask"]) == 0
        assert capsys.readouterr().out.strip() == "supersecret123"

    def test_structured_as_json(self, records_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["get", f"{CARD_UID}/field/paymentCard", "--records", str(records_file)]) == 0
        assert json.loads(capsys.readouterr().out)["cardNumber"] == "411***111"

    def test_record_not_found(self, records_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["get", "Nothing Here/field/password", "--records", str(records_file)]) == 1
        assert "record not found" in capsys.readouterr().err

    def test_missing_records_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["get", "My Database/field/login", "--records", str(tmp_path / "absent.json")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_records_from_config(self, records_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_file = tmp_path / "resolver.conf"
        config_file.write_text(f'{{ vault {{ records_file: "{records_file}" }}, audit.enabled: false }}')

        assert main(["--config", str(config_file), "get", f"{LOGIN_UID}/field/login"]) == 0
        assert capsys.readouterr().out.strip() == "admin"

    def test_bad_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--config", str(tmp_path / "missing.conf"), "parse", f"{LOGIN_UID}/field/login"]) == 1
        assert "failed to load configuration" in capsys.readouterr().err
