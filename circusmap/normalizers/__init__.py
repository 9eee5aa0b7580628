from .pipeline import get_default_normalizer, process_file
from .parser import IngestionError, TabularParseError, UnsupportedFormatError, parse_table
from .fields import FIELD_CANDIDATES, extract_coordinates, resolve_field, resolve_value
from .rules import RuleNormalizer
from .types import CanonicalShow, IngestionResult, MANUAL_ENTRY, RawRow, RejectReason
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "process_file",
    "parse_table",
    "IngestionError",
    "TabularParseError",
    "UnsupportedFormatError",
    "FIELD_CANDIDATES",
    "extract_coordinates",
    "resolve_field",
    "resolve_value",
    "RuleNormalizer",
    "CanonicalShow",
    "IngestionResult",
    "MANUAL_ENTRY",
    "RawRow",
    "RejectReason",
    "Normalizer",
]
