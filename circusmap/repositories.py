import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, StatementError
from sqlalchemy.orm import Session

from circusmap.aggregates import compute_date_range, group_venues, with_coords
from circusmap.models import CircusShow, FileUpload
from circusmap.normalizers import CanonicalShow

log = logging.getLogger(__name__)


class ShowRepository:
    """
    Storage for shows and upload history, bound to one session.

    Build one per request (or per test); it holds no state of its own.
    Callers own the transaction and commit.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---- writes ----

    def add_shows(self, shows: Iterable[CanonicalShow]) -> Tuple[int, List[Dict[str, Any]]]:
        """
        Insert one row per show. No de-duplication: uploading the same file
        twice stores the shows twice.
        """
        ok = 0
        errors: List[Dict[str, Any]] = []
        for s in shows:
            try:
                # per-record savepoint so one bad record doesn’t poison the batch
                with self.db.begin_nested():
                    self.db.add(CircusShow(**_show_columns(s)))
                ok += 1
            except (IntegrityError, StatementError, TypeError, ValueError) as e:
                log.exception("show insert failed: circus=%s date=%s file=%s",
                              s.circus_name, s.show_date, s.file_name)
                errors.append({"circus_name": s.circus_name, "show_date": s.show_date.isoformat(),
                               "error": str(e)})
        return ok, errors

    def add_show(self, show: CanonicalShow) -> CircusShow:
        row = CircusShow(**_show_columns(show))
        self.db.add(row)
        self.db.flush()
        return row

    def record_upload(self, file_name: str, status: str, record_count: int) -> FileUpload:
        entry = FileUpload(file_name=file_name, status=status, record_count=record_count,
                           upload_date=datetime.utcnow())
        self.db.add(entry)
        self.db.flush()
        log.info("upload recorded: file=%s status=%s records=%d", file_name, status, record_count)
        return entry

    def delete_upload(self, file_name: str) -> int:
        """Drop the upload's history entries and every show it produced."""
        self.db.execute(delete(FileUpload).where(FileUpload.file_name == file_name))
        res = self.db.execute(delete(CircusShow).where(CircusShow.file_name == file_name))
        log.info("upload deleted: file=%s shows_removed=%d", file_name, res.rowcount)
        return res.rowcount

    # ---- reads ----

    def all_shows(self) -> List[CircusShow]:
        return list(self.db.execute(select(CircusShow).order_by(CircusShow.id)).scalars())

    def shows_on_date(self, day: date) -> List[CircusShow]:
        start = datetime(day.year, day.month, day.day)
        q = (
            select(CircusShow)
            .where(CircusShow.show_date >= start, CircusShow.show_date < start + timedelta(days=1))
            .order_by(CircusShow.id)
        )
        return list(self.db.execute(q).scalars())

    def date_range(self) -> Dict[str, str]:
        return compute_date_range(self.all_shows())

    def venues(self) -> List[Dict[str, Any]]:
        return group_venues(self.all_shows())

    def list_uploads(self) -> List[FileUpload]:
        q = select(FileUpload).order_by(FileUpload.upload_date.desc(), FileUpload.id.desc())
        return list(self.db.execute(q).scalars())

    # ---- serializers ----

    @staticmethod
    def show_to_dict(row: CircusShow) -> Dict[str, Any]:
        return with_coords(row)

    @staticmethod
    def upload_to_dict(u: FileUpload) -> Dict[str, Any]:
        return {
            "file_name": u.file_name,
            "upload_date": u.upload_date.isoformat(),
            "status": u.status,
            "record_count": u.record_count,
        }


def _show_columns(s: CanonicalShow) -> Dict[str, Any]:
    return {
        "circus_name": s.circus_name,
        "venue_name": s.venue_name,
        "address": s.address,
        "city": s.city,
        "state": s.state,
        "zip": s.zip,
        "latitude": s.latitude,
        "longitude": s.longitude,
        "show_date": s.show_date,
        "file_name": s.file_name,
    }
