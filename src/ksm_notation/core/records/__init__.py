"""Record model, field-type catalog, shape decoding, masking and extraction."""

from ksm_notation.core.records.catalog import (
    FALLBACK_FIELD_TYPES,
    FIELD_TYPES_BY_RECORD_TYPE,
    field_types_for,
)
from ksm_notation.core.records.extractor import FieldExtractor
from ksm_notation.core.records.masking import (
    MASKED_MARKER,
    SENSITIVE_KEYWORDS,
    is_sensitive,
    mask_structure,
    mask_value,
)
from ksm_notation.core.records.shapes import (
    BOOLEAN_FIELD_TYPES,
    SHAPE_DECODERS,
    FieldShape,
    decode_element,
    decode_values,
)
from ksm_notation.core.records.types import (
    CustomField,
    FileAttachment,
    Record,
    RecordField,
    RecordMetadata,
)

__all__ = [
    "BOOLEAN_FIELD_TYPES",
    "CustomField",
    "FALLBACK_FIELD_TYPES",
    "FIELD_TYPES_BY_RECORD_TYPE",
    "FieldExtractor",
    "FieldShape",
    "FileAttachment",
    "MASKED_MARKER",
    "Record",
    "RecordField",
    "RecordMetadata",
    "SENSITIVE_KEYWORDS",
    "SHAPE_DECODERS",
    "decode_element",
    "decode_values",
    "field_types_for",
    "is_sensitive",
    "mask_structure",
    "mask_value",
]
