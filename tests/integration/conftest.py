"""Shared fixtures for integration tests that run against the bundled example records."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from ksm_notation.core.config import ResolverConfig, load_from_file
from ksm_notation.service import NotationResolver, build_resolver
from tests.factories import RecordingSink

EXAMPLES_DIR = Path(__file__).resolve().parents[2] / "examples"


@pytest.fixture(scope="module")
def example_config() -> ResolverConfig:
    """Load ``examples/resolver.conf`` with the records path made absolute."""
    config = load_from_file(str(EXAMPLES_DIR / "resolver.conf"), ResolverConfig)
    config.vault = replace(config.vault, records_file=str(EXAMPLES_DIR / "records.json"))
    return config


@pytest.fixture
def audit_events() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def example_resolver(example_config: ResolverConfig, audit_events: RecordingSink) -> NotationResolver:
    resolver = build_resolver(example_config)
    resolver._sink = audit_events
    return resolver
