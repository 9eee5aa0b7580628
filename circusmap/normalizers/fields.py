"""
Header-spelling tolerant field lookup.

Uploaded sheets are hand-exported, so the same column shows up as
"CIRCUS NAME", "Circus Name", "circusName" and so on. Every logical field has
an ordered list of spellings; `resolve_value` tries them exactly first, then
case-insensitively against the row's actual headers.
"""
import math
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence, Tuple

from .types import RawRow

# Priority-ordered header spellings per logical field.
FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "circus_name": ("CIRCUS NAME", "Circus Name", "circusName", "Circus"),
    "venue_name":  ("VENUE NAME", "Venue Name", "venueName", "Venue"),
    "address":     ("ADDRESS", "Address", "address"),
    "city":        ("CITY", "City", "city"),
    "state":       ("STATE", "State", "state"),
    "zip":         ("ZIP", "Zip", "zip", "ZIP CODE", "Zip Code", "zipCode"),
    "coords":      ("COORDS", "Coords", "coords"),
    "latitude":    ("LATITUDE", "Latitude", "latitude", "Lat"),
    "longitude":   ("LONGITUDE", "Longitude", "longitude", "Lng", "Lon"),
    "show_date":   ("Show Date", "SHOW DATE", "showDate", "Show date", "Date", "date", "DATE"),
}


def is_blank(value: Any) -> bool:
    """Falsy cells (None, "", 0, NaN, whitespace) count as absent."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (datetime, date)):
        return False
    return not value


def resolve_value(row: RawRow, candidates: Sequence[str]) -> Optional[Any]:
    """
    Return the first non-blank cell for any of `candidates`, or None.

    Exact header matches are tried in candidate order before any
    case-insensitive match, so the list order is the tie-break.
    """
    for name in candidates:
        if name in row and not is_blank(row[name]):
            return row[name]

    lowered: Dict[str, list] = {}
    for key, value in row.items():
        lowered.setdefault(str(key).strip().lower(), []).append(value)
    for name in candidates:
        for value in lowered.get(name.lower(), ()):
            if not is_blank(value):
                return value
    return None


def resolve_field(row: RawRow, candidates: Sequence[str]) -> str:
    """Like `resolve_value` but always a string ("" when absent)."""
    value = resolve_value(row, candidates)
    if value is None:
        return ""
    return cell_to_str(value)


def cell_to_str(value: Any) -> str:
    # Excel hands back 10022.0 for a zip typed as a number
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def extract_coordinates(row: RawRow) -> Tuple[str, str]:
    """
    Return (latitude, longitude) as strings, possibly both empty.

    A combined "lat, lon" column wins over separate columns whenever it has a
    value. A combined value that does not split into exactly two parts leaves
    both coordinates empty; separate columns are not consulted in that case.
    """
    combined = resolve_field(row, FIELD_CANDIDATES["coords"])
    if combined:
        parts = [p.strip() for p in combined.split(",")]
        if len(parts) != 2:
            return "", ""
        return parts[0], parts[1]

    return (
        resolve_field(row, FIELD_CANDIDATES["latitude"]),
        resolve_field(row, FIELD_CANDIDATES["longitude"]),
    )
