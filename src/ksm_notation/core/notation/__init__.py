"""Notation grammar: ``<uid-or-title>/<field|custom_field|file>/<payload>``."""

from ksm_notation.core.notation.grammar import (
    build_notation,
    extract_field_path,
    is_custom_field_notation,
    is_file_notation,
    is_valid_uid,
    parse_notation,
    split_notation_parts,
    validate_notation_syntax,
)
from ksm_notation.core.notation.types import Locator, NotationKind

__all__ = [
    "Locator",
    "NotationKind",
    "build_notation",
    "extract_field_path",
    "is_custom_field_notation",
    "is_file_notation",
    "is_valid_uid",
    "parse_notation",
    "split_notation_parts",
    "validate_notation_syntax",
]
