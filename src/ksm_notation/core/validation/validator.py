"""Input validation gate for every user-supplied string.

Each ``validate_*`` method returns ``None`` when the input is acceptable
and raises :class:`ValidationRejectedError` otherwise.  Validators never
truncate or rewrite their input; see :func:`truncate_string` and
:func:`sanitize_string` for explicit transformations.

Lengths are counted in Unicode code points.
"""

from __future__ import annotations

import logging
import posixpath
import unicodedata
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from ksm_notation.core.exceptions import NotationError, ValidationRejectedError
from ksm_notation.core.notation.grammar import parse_notation
from ksm_notation.core.validation.patterns import (
    PROFILE_NAME_PATTERN,
    TOKEN_PATTERN,
    UID_PATTERN,
    contains_command_injection,
    contains_dangerous_unicode,
    contains_file_path_injection,
    contains_html,
    contains_path_traversal,
)

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255
MAX_NOTES_LENGTH = 10_000
MAX_SEARCH_QUERY_LENGTH = 256
MAX_URL_LENGTH = 2048
MAX_USERNAME_LENGTH = 255
MAX_PROFILE_NAME_LENGTH = 64
MIN_TOKEN_PAYLOAD_LENGTH = 20
MIN_PASSWORD_LENGTH = 12

RESERVED_PROFILE_NAMES = frozenset({"default", "system", "root", "admin", "config", "test"})

SQL_MARKERS: tuple[str, ...] = (
    "--", "/*", "*/", "xp_", "sp_", "';", '";',
    "union", "select", "insert", "update", "delete", "drop",
)
LDAP_MARKERS: tuple[str, ...] = ("*)(", ")(|")
NOSQL_MARKERS: tuple[str, ...] = ("$ne", "$regex", "$gt", "$lt")
LDAP_USERNAME_CHARS: tuple[str, ...] = ("*", "(", ")", "\\", "/", "\x00")
DANGEROUS_URL_SCHEMES: tuple[str, ...] = ("javascript:", "data:", "vbscript:", "file:")


class ValidationPurpose(str, Enum):
    """What a string is being validated as."""

    UID = "uid"
    TOKEN = "token"
    PROFILE_NAME = "profile_name"
    FILE_PATH = "file_path"
    NOTATION = "notation"
    SEARCH_QUERY = "search_query"
    TITLE = "title"
    NOTES = "notes"
    URL = "url"
    USERNAME = "username"


def _reject(purpose: ValidationPurpose | str, reason: str) -> ValidationRejectedError:
    name = purpose.value if isinstance(purpose, ValidationPurpose) else purpose
    logger.debug("Rejected %s: %s", name, reason)
    return ValidationRejectedError(name, reason)


class InputValidator:
    """Stateless validator for UIDs, tokens, notations, and free text.

    Instances hold no mutable state; one validator may be shared by any
    number of threads.
    """

    def __init__(self) -> None:
        self._dispatch: dict[ValidationPurpose, Callable[[str], None]] = {
            ValidationPurpose.UID: self.validate_uid,
            ValidationPurpose.TOKEN: self.validate_token,
            ValidationPurpose.PROFILE_NAME: self.validate_profile_name,
            ValidationPurpose.FILE_PATH: self.validate_file_path,
            ValidationPurpose.NOTATION: self.validate_notation,
            ValidationPurpose.SEARCH_QUERY: self.validate_search_query,
            ValidationPurpose.TITLE: self.validate_title,
            ValidationPurpose.NOTES: self.validate_notes,
            ValidationPurpose.URL: self.validate_url,
            ValidationPurpose.USERNAME: self.validate_username,
        }

    def validate(self, purpose: ValidationPurpose | str, value: str) -> None:
        """Validate *value* with the validator registered for *purpose*.

        Raises:
            ValidationRejectedError: If the input is rejected.
            ValueError: If *purpose* is not a known validation purpose.
        """
        self._dispatch[ValidationPurpose(purpose)](value)

    def is_valid(self, purpose: ValidationPurpose | str, value: str) -> bool:
        """Return ``True`` if :meth:`validate` accepts *value*."""
        try:
            self.validate(purpose, value)
        except ValidationRejectedError:
            return False
        return True

    # -- identifiers ---------------------------------------------------------

    def validate_uid(self, uid: str) -> None:
        purpose = ValidationPurpose.UID
        if not uid:
            raise _reject(purpose, "UID cannot be empty")
        if len(uid) < 16 or len(uid) > 32:
            raise _reject(purpose, "UID must be between 16 and 32 characters")
        if not UID_PATTERN.match(uid) or contains_command_injection(uid):
            raise _reject(
                purpose,
                "UID must contain only alphanumeric characters, underscores, and hyphens",
            )

    def validate_token(self, token: str) -> None:
        purpose = ValidationPurpose.TOKEN
        if not token:
            raise _reject(purpose, "token cannot be empty")
        match = TOKEN_PATTERN.match(token)
        if match is None:
            raise _reject(purpose, "expected format REGION:TOKEN (e.g. US:TOKEN_HERE)")
        if len(match.group(2)) < MIN_TOKEN_PAYLOAD_LENGTH:
            raise _reject(purpose, "token appears to be too short")

    def validate_profile_name(self, name: str) -> None:
        purpose = ValidationPurpose.PROFILE_NAME
        if not name:
            raise _reject(purpose, "profile name cannot be empty")
        if len(name) > MAX_PROFILE_NAME_LENGTH:
            raise _reject(purpose, f"profile name too long: maximum {MAX_PROFILE_NAME_LENGTH} characters")
        if not PROFILE_NAME_PATTERN.match(name):
            raise _reject(
                purpose,
                "profile name must contain only alphanumeric characters, dots, underscores, and hyphens",
            )
        if name.lower() in RESERVED_PROFILE_NAMES:
            raise _reject(purpose, f"profile name {name!r} is reserved")

    # -- paths and notations -------------------------------------------------

    def validate_file_path(self, path: str) -> None:
        purpose = ValidationPurpose.FILE_PATH
        if not path:
            raise _reject(purpose, "file path cannot be empty")
        if contains_path_traversal(path):
            raise _reject(purpose, "file path contains path traversal patterns")
        if contains_file_path_injection(path):
            raise _reject(purpose, "file path contains invalid characters")
        normalized = posixpath.normpath(path.replace("\\", "/"))
        if normalized.split("/", 1)[0] == "..":
            raise _reject(purpose, "file path cannot traverse to parent directories")

    def validate_notation(self, notation: str) -> None:
        purpose = ValidationPurpose.NOTATION
        if not notation:
            raise _reject(purpose, "notation cannot be empty")
        if contains_command_injection(notation):
            raise _reject(purpose, "notation contains invalid characters")
        parts = notation.split("/")
        if len(parts) < 2:
            raise _reject(purpose, "expected at least 2 parts separated by '/'")
        if any(".." in part for part in parts):
            raise _reject(purpose, "notation contains path traversal patterns")
        try:
            parse_notation(notation)
        except NotationError as exc:
            raise _reject(purpose, exc.reason) from exc

    # -- free text -----------------------------------------------------------

    def validate_search_query(self, query: str) -> None:
        purpose = ValidationPurpose.SEARCH_QUERY
        if not query:
            raise _reject(purpose, "search query cannot be empty")
        if len(query) > MAX_SEARCH_QUERY_LENGTH:
            raise _reject(purpose, f"search query too long: maximum {MAX_SEARCH_QUERY_LENGTH} characters")
        if contains_command_injection(query):
            raise _reject(purpose, "search query contains invalid characters")
        lowered = query.lower()
        if any(marker in lowered for marker in SQL_MARKERS):
            raise _reject(purpose, "search query contains suspicious patterns")
        if any(marker in query for marker in LDAP_MARKERS):
            raise _reject(purpose, "search query contains invalid characters")
        if any(marker in query for marker in NOSQL_MARKERS):
            raise _reject(purpose, "search query contains invalid characters")

    def validate_title(self, title: str) -> None:
        purpose = ValidationPurpose.TITLE
        if not title:
            raise _reject(purpose, "title cannot be empty")
        if len(title) > MAX_TITLE_LENGTH:
            raise _reject(purpose, f"title cannot exceed {MAX_TITLE_LENGTH} characters")
        self._check_text(purpose, title)

    def validate_notes(self, notes: str) -> None:
        purpose = ValidationPurpose.NOTES
        if len(notes) > MAX_NOTES_LENGTH:
            raise _reject(purpose, f"notes cannot exceed {MAX_NOTES_LENGTH} characters")
        self._check_text(purpose, notes)
        if "%n" in notes:
            raise _reject(purpose, "notes contain invalid format specifiers")

    def validate_url(self, url: str) -> None:
        purpose = ValidationPurpose.URL
        if not url:
            return
        if len(url) > MAX_URL_LENGTH:
            raise _reject(purpose, f"URL cannot exceed {MAX_URL_LENGTH} characters")
        lowered = url.lower()
        if lowered.startswith(DANGEROUS_URL_SCHEMES):
            raise _reject(purpose, "URL contains dangerous protocol")
        if contains_command_injection(url):
            raise _reject(purpose, "URL contains invalid characters")

    def validate_username(self, username: str) -> None:
        purpose = ValidationPurpose.USERNAME
        if not username:
            return
        if len(username) > MAX_USERNAME_LENGTH:
            raise _reject(purpose, f"username cannot exceed {MAX_USERNAME_LENGTH} characters")
        if contains_command_injection(username):
            raise _reject(purpose, "username contains invalid characters")
        if any(char in username for char in LDAP_USERNAME_CHARS):
            raise _reject(purpose, "username contains invalid characters")

    # -- structured input ----------------------------------------------------

    def validate_map_keys(self, data: Mapping[str, Any]) -> None:
        """Reject mappings whose keys carry shell metacharacters."""
        for key in data:
            if contains_command_injection(key):
                raise _reject("map_key", f"map key {key!r} contains invalid characters")

    def validate_json_field(self, field_name: str) -> None:
        """Reject JSON field names that could address nested properties."""
        if not field_name:
            raise _reject("json_field", "field name cannot be empty")
        if "." in field_name:
            raise _reject("json_field", "field name cannot contain dots")
        if "[" in field_name or "]" in field_name:
            raise _reject("json_field", "field name cannot contain brackets")
        if '"' in field_name or "'" in field_name:
            raise _reject("json_field", "field name cannot contain quotes")

    def validate_password_strength(self, password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise _reject("password", f"password must be at least {MIN_PASSWORD_LENGTH} characters long")
        has_upper = any(ch.isupper() for ch in password)
        has_lower = any(ch.islower() for ch in password)
        has_digit = any(ch.isdigit() for ch in password)
        has_special = any(unicodedata.category(ch)[0] in ("P", "S") for ch in password)
        if not (has_upper and has_lower and has_digit and has_special):
            raise _reject(
                "password",
                "password must contain uppercase, lowercase, digits, and special characters",
            )

    @staticmethod
    def _check_text(purpose: ValidationPurpose, value: str) -> None:
        if contains_command_injection(value):
            raise _reject(purpose, f"{purpose.value} contains invalid characters")
        if contains_html(value):
            raise _reject(purpose, f"{purpose.value} cannot contain HTML")
        if contains_dangerous_unicode(value):
            raise _reject(purpose, f"{purpose.value} contains invalid Unicode characters")


# ---------------------------------------------------------------------------
# Explicit transformations (never applied by the validators above)
# ---------------------------------------------------------------------------


def escape_shell_arg(value: str) -> str:
    """Quote *value* for use as a single POSIX shell argument."""
    return "'" + value.replace("'", "'\\''") + "'"


def sanitize_for_shell(value: str) -> str:
    """Backslash-escape characters that are special inside double quotes."""
    result = value.replace("\\", "\\\\")
    result = result.replace("`", "\\`")
    result = result.replace("$", "\\$")
    result = result.replace('"', '\\"')
    result = result.replace("\n", "\\n")
    return result.replace("\r", "\\r")


def sanitize_string(value: str) -> str:
    """Drop NUL bytes and control characters other than tab, CR, and LF."""
    return "".join(
        ch for ch in value if ch in "\t\r\n" or unicodedata.category(ch) != "Cc"
    )


def truncate_string(value: str, max_length: int) -> str:
    """Shorten *value* to *max_length* code points, ending with ``...``.

    Limits too small for the suffix cut the value without it.
    """
    if len(value) <= max_length:
        return value
    if max_length < 3:
        return value[: max(max_length, 0)]
    return value[: max_length - 3] + "..."


def is_alphanumeric(value: str) -> bool:
    """Return ``True`` if every character is a letter or a digit."""
    return all(ch.isalpha() or ch.isdigit() for ch in value)
