"""Resolver configuration models."""

from dataclasses import dataclass, field

from .base import LogFormat, LogLevel, MetricsBackend, VaultBackend


@dataclass
class VaultConfig:
    """Where records are read from."""

    backend: VaultBackend = VaultBackend.MEMORY
    """Record store (default: memory)"""

    records_file: str | None = None
    """JSON export loaded by the memory backend (optional)"""

    vault_url: str | None = None
    """HashiCorp Vault URL (required for vault backend)"""

    vault_token: str | None = None
    """Vault token (optional, can use env var VAULT_TOKEN)"""

    mount_point: str = "secret"
    """KV v2 mount point (default: secret)"""

    path: str = "ksm"
    """Folder under the mount point holding one secret per record (default: ksm)"""

    aws_region: str | None = None
    """AWS region for Secrets Manager (required for aws_secrets_manager backend)"""

    secret_prefix: str = "ksm/"
    """Secret name prefix for Secrets Manager records (default: ksm/)"""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.backend == VaultBackend.VAULT and not self.vault_url:
            raise ValueError("vault_url is required when backend is vault")

        if self.backend == VaultBackend.AWS_SECRETS_MANAGER and not self.aws_region:
            raise ValueError("aws_region is required when backend is aws_secrets_manager")


@dataclass
class AuditConfig:
    """Configuration for the audit trail."""

    enabled: bool = True
    """Enable audit events (default: True)"""

    log_events: bool = True
    """Send events to the ``ksm_notation.audit`` logger (default: True)"""

    audit_trail_path: str | None = None
    """JSON-lines file receiving events (optional)"""


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""

    level: LogLevel = LogLevel.WARNING
    """Logging level (default: WARNING)"""

    format: LogFormat = LogFormat.TEXT
    """Log output format (default: text)"""


@dataclass
class MetricsConfig:
    """Configuration for metrics collection."""

    enabled: bool = True
    """Enable metrics collection (default: True)"""

    backend: MetricsBackend = MetricsBackend.MEMORY
    """Metrics backend to use (default: memory)"""


@dataclass
class ResolverConfig:
    """Top-level configuration for a notation resolver."""

    strict_index: bool = False
    """Treat an out-of-range index as a missing field instead of using element 0"""

    actor: str = "notation_resolver"
    """Actor recorded on audit events (default: notation_resolver)"""

    vault: VaultConfig = field(default_factory=VaultConfig)
    """Record store configuration"""

    audit: AuditConfig = field(default_factory=AuditConfig)
    """Audit configuration"""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    """Logging configuration"""

    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    """Metrics configuration"""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.actor:
            raise ValueError("actor is required")
