"""Tests for Locator invariants."""

from __future__ import annotations

import importlib

import pytest

from ksm_notation.core.notation import Locator, NotationKind


class TestLocator:
    def test_record_ref_prefers_uid(self) -> None:
        locator = Locator(kind=NotationKind.FIELD, uid="NJ_xXSkk3xYI1h9ql5lAiQ", field_name="login")
        assert locator.record_ref == "NJ_xXSkk3xYI1h9ql5lAiQ"

    def test_record_ref_title(self) -> None:
        assert Locator(kind=NotationKind.FIELD, title="Server", field_name="login").record_ref == "Server"

    def test_property_field_alongside_accessors(self) -> None:
        locator = Locator(kind=NotationKind.FIELD, title="Server", field_name="host", index=0, property="port")
        assert locator.property == "port"
        assert locator.record_ref == "Server"
        assert locator.is_custom is False
        assert locator.is_file is False

    @pytest.mark.parametrize(
        "module",
        [
            "ksm_notation.core.notation",
            "ksm_notation.core.validation",
            "ksm_notation.core.records.extractor",
            "ksm_notation.core.vault",
            "ksm_notation.service.resolver",
            "ksm_notation.service.cli",
        ],
    )
    def test_dependent_modules_import(self, module: str) -> None:
        assert importlib.import_module(module) is not None

    def test_kind_predicates(self) -> None:
        custom = Locator(kind=NotationKind.CUSTOM_FIELD, title="Server", field_name="apiKey")
        attachment = Locator(kind=NotationKind.FILE, title="Server", file_name="a.pdf")
        assert custom.is_custom is True
        assert custom.is_file is False
        assert attachment.is_file is True

    def test_frozen(self) -> None:
        locator = Locator(kind=NotationKind.FIELD, title="Server", field_name="login")
        with pytest.raises(AttributeError):
            locator.index = 1  # type: ignore[misc]

    def test_requires_exactly_one_ref(self) -> None:
        with pytest.raises(ValueError, match="exactly one"):
            Locator(kind=NotationKind.FIELD, field_name="login")
        with pytest.raises(ValueError, match="exactly one"):
            Locator(kind=NotationKind.FIELD, uid="a" * 16, title="Server", field_name="login")

    def test_file_requires_file_name(self) -> None:
        with pytest.raises(ValueError, match="file_name is required"):
            Locator(kind=NotationKind.FILE, title="Server")

    def test_file_cannot_address_field(self) -> None:
        with pytest.raises(ValueError):
            Locator(kind=NotationKind.FILE, title="Server", file_name="a.pdf", index=0)

    def test_field_requires_field_name(self) -> None:
        with pytest.raises(ValueError, match="field_name is required"):
            Locator(kind=NotationKind.FIELD, title="Server")

    def test_field_rejects_file_name(self) -> None:
        with pytest.raises(ValueError):
            Locator(kind=NotationKind.FIELD, title="Server", field_name="login", file_name="a.pdf")

    def test_negative_index(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Locator(kind=NotationKind.FIELD, title="Server", field_name="url", index=-1)
