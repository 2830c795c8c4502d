"""Redaction of sensitive audit metadata."""

from __future__ import annotations

from typing import Any

from ksm_notation.core.records.masking import is_sensitive

REDACTED = "***REDACTED***"


class DetailFilter:
    """Scrub sensitive entries from audit metadata.

    A key is sensitive by the same keyword rule that drives field
    masking, so ``password``, ``apiKey`` and ``cardNumber`` entries never
    reach a sink in clear.
    """

    @classmethod
    def scrub(cls, data: dict[str, Any], replacement: str = REDACTED) -> dict[str, Any]:
        """Recursively scrub sensitive values from *data*."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if is_sensitive(str(k)):
                result[k] = replacement
            elif isinstance(v, dict):
                result[k] = cls.scrub(v, replacement)
            elif isinstance(v, list):
                result[k] = [cls.scrub(item, replacement) if isinstance(item, dict) else item for item in v]
            else:
                result[k] = v
        return result
