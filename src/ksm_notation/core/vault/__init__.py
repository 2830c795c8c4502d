"""Vault clients: record stores with a native notation lookup."""

from ksm_notation.core.vault.base import KeyValueVaultClient, VaultClient
from ksm_notation.core.vault.providers import (
    AwsVaultClient,
    HashiCorpVaultClient,
    InMemoryVaultClient,
)

__all__ = [
    "AwsVaultClient",
    "HashiCorpVaultClient",
    "InMemoryVaultClient",
    "KeyValueVaultClient",
    "VaultClient",
]
