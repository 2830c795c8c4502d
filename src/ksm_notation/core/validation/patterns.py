"""Compiled detection patterns shared by all validators.

The tables are built once at import time and never mutated, so the
helpers in this module are safe to call from any number of threads.
"""

from __future__ import annotations

import re
import unicodedata

from ksm_notation.core.notation.types import UID_PATTERN

TOKEN_PATTERN = re.compile(r"^(US|EU|AU|JP|CA|GOV):([A-Za-z0-9+/=_-]+)$")
"""One-time access token: ``REGION:payload``."""

PROFILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

COMMAND_INJECTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[;&|]"),
    re.compile(r"`"),
    re.compile(r"\$\("),
    re.compile(r"\$\{"),
    re.compile(r"<<|>>"),
    re.compile(r"\|\||&&"),
    re.compile(r"[\r\n]"),
    re.compile(r"[<>]"),
    re.compile(r"\x00"),
)

PATH_TRAVERSAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\.\.[\\/]"),
    re.compile(r"%2e%2e|%252e%252e", re.IGNORECASE),
    re.compile(r"\.\.%2f|\.\.%5c", re.IGNORECASE),
    re.compile(r"\x00"),
)

FILE_PATH_DANGEROUS: tuple[str, ...] = (
    ";", "|", "&", "$", "`", "(", ")", "{", "}", "<", ">", "\n", "\r", "%00", "\x00",
)

HTML_MARKERS: tuple[str, ...] = (
    "<script",
    "</script>",
    "<iframe",
    "<object",
    "<embed",
    "<img",
    "onerror=",
    "onclick=",
    "onload=",
    "javascript:",
    "<!entity",
    "<![cdata[",
    "<?xml",
)

BIDI_OVERRIDES = frozenset("\u202a\u202b\u202c\u202d\u202e")


def contains_command_injection(value: str) -> bool:
    """Return ``True`` if *value* contains a shell metacharacter sequence."""
    return any(pattern.search(value) for pattern in COMMAND_INJECTION_PATTERNS)


def contains_path_traversal(value: str) -> bool:
    """Return ``True`` if *value* contains an upward path segment.

    Absolute paths are not traversal; only ``..`` followed by a separator
    (literal or percent-encoded) and NUL bytes are.
    """
    return any(pattern.search(value) for pattern in PATH_TRAVERSAL_PATTERNS)


def contains_file_path_injection(value: str) -> bool:
    """Like :func:`contains_command_injection` but allows path separators."""
    if any(marker in value for marker in FILE_PATH_DANGEROUS):
        return True
    return any(unicodedata.category(ch) == "Cc" for ch in value)


def contains_html(value: str) -> bool:
    """Return ``True`` for markup-looking content."""
    lowered = value.lower()
    if any(marker in lowered for marker in HTML_MARKERS):
        return True
    return "<" in value and ">" in value


def contains_dangerous_unicode(value: str) -> bool:
    """Return ``True`` for bidi overrides and other format characters."""
    return any(ch in BIDI_OVERRIDES or unicodedata.category(ch) == "Cf" for ch in value)
