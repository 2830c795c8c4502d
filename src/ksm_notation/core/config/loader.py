"""HOCON configuration loader using dataconf."""

from typing import TypeVar, cast

import dataconf

T = TypeVar("T")


def load_from_file(path: str, config_class: type[T]) -> T:
    """Load configuration from a HOCON file.

    Args:
        path: Path to the HOCON configuration file
        config_class: The configuration dataclass type to load into

    Example:
        >>> config = load_from_file("resolver.conf", ResolverConfig)
    """
    return cast(T, dataconf.file(path, config_class))


def load_from_string(hocon_str: str, config_class: type[T]) -> T:
    """Load configuration from a HOCON string.

    Example:
        >>> config = load_from_string('{ strict_index: true }', ResolverConfig)
    """
    return cast(T, dataconf.string(hocon_str, config_class))


def load_from_env(prefix: str, config_class: type[T]) -> T:
    """Load configuration from environment variables.

    Args:
        prefix: Prefix for environment variables (e.g., ``"KSM_"``)
        config_class: The configuration dataclass type to load into

    Example:
        >>> # With KSM_ACTOR=deploy-bot
        >>> config = load_from_env("KSM_", ResolverConfig)
    """
    return cast(T, dataconf.env(prefix, config_class))
