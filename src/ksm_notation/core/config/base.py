"""Enums shared by configuration models."""

from enum import Enum


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    TEXT = "text"


class VaultBackend(str, Enum):
    """Record stores the resolver can read from."""

    MEMORY = "memory"
    VAULT = "vault"
    AWS_SECRETS_MANAGER = "aws_secrets_manager"


class MetricsBackend(str, Enum):
    """Metrics collection backends."""

    MEMORY = "memory"
    PROMETHEUS = "prometheus"
