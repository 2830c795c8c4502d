"""Configuration models for ksm-notation.

Resolver settings are plain dataclasses loaded from HOCON with dataconf.
"""

from ksm_notation.core.config.base import LogFormat, LogLevel, MetricsBackend, VaultBackend
from ksm_notation.core.config.loader import load_from_env, load_from_file, load_from_string
from ksm_notation.core.config.settings import (
    AuditConfig,
    LoggingConfig,
    MetricsConfig,
    ResolverConfig,
    VaultConfig,
)

__all__ = [
    "AuditConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "MetricsBackend",
    "MetricsConfig",
    "ResolverConfig",
    "VaultBackend",
    "VaultConfig",
    "load_from_env",
    "load_from_file",
    "load_from_string",
]
