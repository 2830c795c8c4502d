"""Built-in vault client implementations."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ksm_notation.core.records.types import Record
from ksm_notation.core.vault.base import KeyValueVaultClient


def _parse_document(raw: Any, uid: str) -> Record:
    data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    if not isinstance(data, Mapping):
        raise ValueError(f"record {uid!r} is not a JSON object")
    return Record.from_dict(data, uid=uid)


class InMemoryVaultClient(KeyValueVaultClient):
    """Serve records held in memory.

    No external dependencies required.  Records keep their given order,
    which is the enumeration order duplicate resolution relies on.

    Args:
        records: :class:`Record` objects or Keeper record dicts.
    """

    def __init__(self, records: Iterable[Record | Mapping[str, Any]] = ()) -> None:
        self._records = [r if isinstance(r, Record) else Record.from_dict(r) for r in records]

    @classmethod
    def from_file(cls, path: str | Path) -> InMemoryVaultClient:
        """Load records from a JSON export.

        The file holds either a list of record objects or an object with
        a ``records`` list.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, Mapping):
            data = data.get("records", [])
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of records")
        return cls(data)

    @property
    def backend_name(self) -> str:
        return "memory"

    def _load_records(self) -> list[Record]:
        return list(self._records)


class HashiCorpVaultClient(KeyValueVaultClient):
    """Read records from HashiCorp Vault (KV v2 engine).

    Requires ``hvac`` to be installed. The client is created lazily
    on first use.

    Each record is one secret at ``<path>/<uid>`` whose ``record`` key
    holds the record JSON (as a string or an object).

    Args:
        url: Vault server URL.
        token: Vault token. Defaults to ``VAULT_TOKEN`` environment variable.
        mount_point: KV v2 mount point. Defaults to ``"secret"``.
        path: Folder under the mount point that holds the records.
    """

    RECORD_KEY = "record"

    def __init__(
        self,
        url: str,
        token: str | None = None,
        mount_point: str = "secret",
        path: str = "ksm",
    ) -> None:
        if not url:
            raise ValueError("url is required")
        self._url = url
        self._token = token or os.environ.get("VAULT_TOKEN")
        self._mount_point = mount_point
        self._path = path.strip("/")
        self._client: Any = None

    @property
    def backend_name(self) -> str:
        return "vault"

    def _get_client(self) -> Any:
        if self._client is None:
            import hvac  # type: ignore[import-untyped]

            self._client = hvac.Client(url=self._url, token=self._token)
        return self._client

    def _load_records(self) -> list[Record]:
        kv = self._get_client().secrets.kv.v2
        listing = kv.list_secrets(path=self._path, mount_point=self._mount_point)
        records = []
        for key in listing.get("data", {}).get("keys", []):
            if key.endswith("/"):
                continue
            response = kv.read_secret_version(path=f"{self._path}/{key}", mount_point=self._mount_point)
            data = response.get("data", {}).get("data", {})
            if self.RECORD_KEY not in data:
                raise ValueError(f"secret '{self._path}/{key}' has no '{self.RECORD_KEY}' key")
            records.append(_parse_document(data[self.RECORD_KEY], key))
        return records


class AwsVaultClient(KeyValueVaultClient):
    """Read records from AWS Secrets Manager.

    Requires ``boto3`` to be installed. The client is created lazily
    on first use.

    Each record is one secret named ``<prefix><uid>`` whose
    ``SecretString`` holds the record JSON.

    Args:
        region_name: AWS region. Defaults to boto3's default region.
        prefix: Secret name prefix shared by all records.
    """

    def __init__(self, region_name: str | None = None, prefix: str = "ksm/") -> None:
        self._region = region_name
        self._prefix = prefix
        self._client: Any = None

    @property
    def backend_name(self) -> str:
        return "aws"

    def _get_client(self) -> Any:
        if self._client is None:
            import boto3  # type: ignore[import-untyped]

            self._client = boto3.client("secretsmanager", region_name=self._region)
        return self._client

    def _load_records(self) -> list[Record]:
        client = self._get_client()
        paginator = client.get_paginator("list_secrets")
        records = []
        for page in paginator.paginate(Filters=[{"Key": "name", "Values": [self._prefix]}]):
            for entry in page.get("SecretList", []):
                name = entry["Name"]
                if not name.startswith(self._prefix):
                    continue
                response = client.get_secret_value(SecretId=name)
                records.append(_parse_document(response["SecretString"], name[len(self._prefix):]))
        return records
