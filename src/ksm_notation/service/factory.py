"""Build a :class:`NotationResolver` from a :class:`ResolverConfig`."""

from __future__ import annotations

import logging

from ksm_notation.core.audit.sinks import (
    AuditSink,
    CompositeAuditSink,
    FileAuditSink,
    LoggingAuditSink,
    NullAuditSink,
)
from ksm_notation.core.config.base import LogFormat, MetricsBackend, VaultBackend
from ksm_notation.core.config.settings import (
    AuditConfig,
    LoggingConfig,
    MetricsConfig,
    ResolverConfig,
    VaultConfig,
)
from ksm_notation.core.metrics.exporters import PrometheusRegistry
from ksm_notation.core.metrics.registry import InMemoryRegistry, MeterRegistry
from ksm_notation.core.records.extractor import FieldExtractor
from ksm_notation.core.vault.base import VaultClient
from ksm_notation.core.vault.providers import (
    AwsVaultClient,
    HashiCorpVaultClient,
    InMemoryVaultClient,
)
from ksm_notation.service.resolver import NotationResolver

logger = logging.getLogger(__name__)

TEXT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_LOG_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'


def build_client(config: VaultConfig) -> VaultClient:
    """Create the vault client selected by ``config.backend``."""
    if config.backend == VaultBackend.VAULT:
        return HashiCorpVaultClient(
            url=config.vault_url or "",
            token=config.vault_token,
            mount_point=config.mount_point,
            path=config.path,
        )
    if config.backend == VaultBackend.AWS_SECRETS_MANAGER:
        return AwsVaultClient(region_name=config.aws_region, prefix=config.secret_prefix)
    if config.records_file:
        return InMemoryVaultClient.from_file(config.records_file)
    return InMemoryVaultClient()


def build_sink(config: AuditConfig) -> AuditSink:
    """Create the audit sink(s) enabled in *config*."""
    if not config.enabled:
        return NullAuditSink()
    sinks: list[AuditSink] = []
    if config.log_events:
        sinks.append(LoggingAuditSink())
    if config.audit_trail_path:
        sinks.append(FileAuditSink(config.audit_trail_path))
    if not sinks:
        return NullAuditSink()
    if len(sinks) == 1:
        return sinks[0]
    return CompositeAuditSink(*sinks)


def build_metrics(config: MetricsConfig) -> MeterRegistry:
    if config.enabled and config.backend == MetricsBackend.PROMETHEUS:
        return PrometheusRegistry()
    return InMemoryRegistry()


def configure_logging(config: LoggingConfig) -> None:
    """Apply *config* to the root logger."""
    logging.basicConfig(
        level=getattr(logging, config.level.value),
        format=JSON_LOG_FORMAT if config.format == LogFormat.JSON else TEXT_LOG_FORMAT,
        force=True,
    )


def build_resolver(config: ResolverConfig, client: VaultClient | None = None) -> NotationResolver:
    """Assemble a resolver.

    Args:
        config: Resolver configuration.
        client: Vault client to use instead of the configured backend.
    """
    vault_client = client if client is not None else build_client(config.vault)
    logger.debug("Building resolver on %s backend", vault_client.backend_name)
    return NotationResolver(
        vault_client,
        extractor=FieldExtractor(strict_index=config.strict_index),
        sink=build_sink(config.audit),
        metrics=build_metrics(config.metrics),
        actor=config.actor,
    )
