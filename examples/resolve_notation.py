"""Resolve notations against the bundled example records.

Demonstrates parsing, validation, masked and unmasked lookups, duplicate
title resolution, and the metrics a resolver records, without any
external services.

Usage:
    python examples/resolve_notation.py
"""

from __future__ import annotations

import json
from pathlib import Path

from ksm_notation.core.audit import LoggingAuditSink
from ksm_notation.core.exceptions import NotationResolverError
from ksm_notation.core.metrics import InMemoryRegistry
from ksm_notation.core.notation import build_notation, parse_notation
from ksm_notation.core.validation import InputValidator, ValidationPurpose
from ksm_notation.core.vault import InMemoryVaultClient
from ksm_notation.service import NotationResolver

RECORDS_FILE = Path(__file__).parent / "records.json"

NOTATIONS = [
    "Production Database/field/password",
    "NJ_xXSkk3xYI1h9ql5lAiQ/field/host[hostName]",
    "NJ_xXSkk3xYI1h9ql5lAiQ/custom_field/replicationToken",
    "NJ_xXSkk3xYI1h9ql5lAiQ/file/ca.pem",
    "Corporate Card/field/paymentCard",
    "Shared Login/field/login",
    "Shared Login/field/url[5]",
    "Missing Record/field/password",
]


def main() -> None:
    """Parse, validate and resolve a handful of notations."""
    # 1. Grammar round trip
    locator = parse_notation("Corporate Card/custom_field/cardholderName[0]")
    print(f"Parsed  : {locator}")
    print(f"Rebuilt : {build_notation(locator)}\n")

    # 2. Adversarial input is rejected before any lookup
    validator = InputValidator()
    for value in ["UID/field/password[0]['; DROP TABLE; --']", "../../etc/passwd"]:
        purpose = ValidationPurpose.NOTATION if "/field/" in value else ValidationPurpose.FILE_PATH
        print(f"{purpose.value:<10} {value!r}: valid={validator.is_valid(purpose, value)}")
    print()

    # 3. Resolve against the example records
    metrics = InMemoryRegistry()
    resolver = NotationResolver(
        InMemoryVaultClient.from_file(RECORDS_FILE),
        sink=LoggingAuditSink(),
        metrics=metrics,
        actor="example",
    )
    for notation in NOTATIONS:
        try:
            value = resolver.get_field(notation)
        except NotationResolverError as exc:
            value = f"<{type(exc).__name__}: {exc}>"
        print(f"{notation}\n  -> {json.dumps(value) if not isinstance(value, str) else value}")

    print(f"\nUnmasked password: {resolver.get_field('Production Database/field/password', unmask=True)}")

    # 4. Record-level operations
    print(f"\nSearch 'shared': {[m.uid for m in resolver.search_records('shared')]}")
    print(f"Card fields: {json.dumps(resolver.get_secret('UID1234567890123456'), indent=2)}")

    # 5. Metrics
    print(f"\nMetrics: {json.dumps(metrics.get_metrics(), indent=2)}")


if __name__ == "__main__":
    main()
