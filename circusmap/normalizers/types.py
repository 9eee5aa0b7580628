# circusmap/normalizers/types.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

# One parsed data row, keyed by the header text found in the file.
RawRow = Dict[str, Any]

# file_name recorded for shows typed in by hand rather than uploaded
MANUAL_ENTRY = "manual-entry"


class RejectReason(str, Enum):
    """Why a row did not become a show. Logged, never shown per row."""
    MISSING_DATE = "MissingDate"
    INVALID_DATE = "InvalidDate"
    MISSING_REQUIRED_FIELDS = "MissingRequiredFields"
    INVALID_COORDINATES = "InvalidCoordinates"


@dataclass(frozen=True)
class CanonicalShow:
    circus_name: str
    venue_name: str
    address: str
    city: str
    state: str
    zip: str
    latitude: str
    longitude: str
    show_date: datetime
    file_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "circus_name": self.circus_name,
            "venue_name": self.venue_name,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "show_date": self.show_date.isoformat(),
            "file_name": self.file_name,
        }


@dataclass
class IngestionResult:
    success: bool
    message: str
    data: List[CanonicalShow] = field(default_factory=list)
