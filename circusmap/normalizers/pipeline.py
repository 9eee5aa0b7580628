import logging
from collections import Counter
from typing import List, Optional

from .base import Normalizer
from .parser import TabularParseError, UnsupportedFormatError, parse_table
from .rules import RuleNormalizer
from .types import CanonicalShow, IngestionResult

log = logging.getLogger(__name__)

MSG_UNSUPPORTED = "Unsupported file format. Please upload a CSV or Excel file."
MSG_EMPTY = "The file contains no data."
MSG_NO_VALID = "No valid records found in the file."


def get_default_normalizer() -> Normalizer:
    """Factory for the row normalizer used by uploads and manual entry."""
    return RuleNormalizer()


def process_file(
    buffer: bytes, file_name: str, normalizer: Optional[Normalizer] = None
) -> IngestionResult:
    """
    Run one uploaded file through parse -> normalize.

    Whole-file problems (format, unreadable content, no rows, no valid rows)
    come back as a failed result, never as an exception. Bad rows are
    dropped and logged; they do not fail the batch. Nothing is persisted here.
    """
    normalizer = normalizer or get_default_normalizer()

    try:
        rows = parse_table(buffer, file_name)
    except UnsupportedFormatError:
        log.warning("upload rejected: unsupported format file=%s", file_name)
        return IngestionResult(False, MSG_UNSUPPORTED)
    except TabularParseError as e:
        log.warning("upload rejected: parse error file=%s: %s", file_name, e)
        return IngestionResult(False, f"Error processing file: {e}")

    if not rows:
        return IngestionResult(False, MSG_EMPTY)

    accepted: List[CanonicalShow] = []
    rejected: Counter = Counter()
    for row in rows:
        show, reason = normalizer.normalize_row(row, file_name)
        if show is None:
            rejected[reason.value if reason else "unknown"] += 1
            continue
        accepted.append(show)

    if rejected:
        log.info("file=%s rejected %d of %d row(s): %s",
                 file_name, sum(rejected.values()), len(rows), dict(rejected))

    if not accepted:
        return IngestionResult(False, MSG_NO_VALID)

    return IngestionResult(True, f"Successfully processed {len(accepted)} records.", accepted)
