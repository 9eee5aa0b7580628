# circusmap/normalizers/base.py
from typing import Optional, Protocol, Tuple
from .types import CanonicalShow, RawRow, RejectReason

class Normalizer(Protocol):
    def normalize_row(
        self, row: RawRow, file_name: str
    ) -> Tuple[Optional[CanonicalShow], Optional[RejectReason]]:
        """Return (show, None) for an accepted row, (None, reason) otherwise. Do not mutate `row`."""
        ...
