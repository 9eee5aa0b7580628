import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Optional, Tuple

from dateutil import parser as date_parser

from .base import Normalizer
from .fields import FIELD_CANDIDATES, cell_to_str, extract_coordinates, resolve_field, resolve_value
from .types import CanonicalShow, RawRow, RejectReason

log = logging.getLogger(__name__)

class RuleNormalizer(Normalizer):
    """
    Rule-based row normalizer:
    turns one raw spreadsheet row into a CanonicalShow, or rejects it.

    Circus name, both coordinates and a parseable show date are mandatory.
    Venue/address fields may be unknown and default to "".
    """
    def normalize_row(
        self, row: RawRow, file_name: str
    ) -> Tuple[Optional[CanonicalShow], Optional[RejectReason]]:
        latitude, longitude = extract_coordinates(row)

        raw_date = resolve_value(row, FIELD_CANDIDATES["show_date"])
        if raw_date is None:
            log.warning("row rejected (%s): no show date field", RejectReason.MISSING_DATE.value)
            return None, RejectReason.MISSING_DATE
        show_date = parse_show_date(raw_date)
        if show_date is None:
            log.warning("row rejected (%s): unparseable date %r", RejectReason.INVALID_DATE.value, raw_date)
            return None, RejectReason.INVALID_DATE

        circus_name = resolve_field(row, FIELD_CANDIDATES["circus_name"])
        if not circus_name or not latitude or not longitude:
            log.warning(
                "row rejected (%s): circus_name=%r latitude=%r longitude=%r",
                RejectReason.MISSING_REQUIRED_FIELDS.value, circus_name, latitude, longitude,
            )
            return None, RejectReason.MISSING_REQUIRED_FIELDS
        if not is_decimal(latitude) or not is_decimal(longitude):
            log.warning(
                "row rejected (%s): latitude=%r longitude=%r",
                RejectReason.INVALID_COORDINATES.value, latitude, longitude,
            )
            return None, RejectReason.INVALID_COORDINATES

        show = CanonicalShow(
            circus_name=circus_name,
            venue_name=resolve_field(row, FIELD_CANDIDATES["venue_name"]),
            address=resolve_field(row, FIELD_CANDIDATES["address"]),
            city=resolve_field(row, FIELD_CANDIDATES["city"]),
            state=resolve_field(row, FIELD_CANDIDATES["state"]),
            zip=resolve_field(row, FIELD_CANDIDATES["zip"]),
            latitude=latitude,
            longitude=longitude,
            show_date=show_date,
            file_name=file_name,
        )
        return show, None


# --- Individual field helpers ---

_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)

def parse_show_date(value: Any) -> Optional[datetime]:
    """
    Parse a date cell into a naive datetime (UTC if it carried a zone).
    Spreadsheet cells may already be dates; text goes through dateutil and
    must name a year, month and day.
    """
    if isinstance(value, datetime):
        dt = value.to_pydatetime() if hasattr(value, "to_pydatetime") else value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = cell_to_str(value)
        try:
            dt = date_parser.parse(text, default=_DEFAULT_A)
            # partial dates ("Sat", "15", "4/15") borrow from the default; refuse them
            if date_parser.parse(text, default=_DEFAULT_B).date() != dt.date():
                return None
        except (ValueError, OverflowError):
            return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt

def is_decimal(s: str) -> bool:
    """True for finite decimal numbers like "40.7736" or "-73.9566"."""
    try:
        return math.isfinite(float(s))
    except ValueError:
        return False
