from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime
from .db import Base

# -----------------------------
# ORM models (tables) for the show map
# -----------------------------
class CircusShow(Base):
    __tablename__ = "circus_shows"
    # One accepted row from an uploaded file (or a manual entry)
    id          = Column(Integer, primary_key=True, autoincrement=True)
    circus_name = Column(String(100), nullable=False)
    venue_name  = Column(String(255), nullable=False, default="")
    address     = Column(String(255), nullable=False, default="")
    city        = Column(String(100), nullable=False, default="")
    state       = Column(String(50), nullable=False, default="")
    zip         = Column(String(20), nullable=False, default="")
    latitude    = Column(String, nullable=False)                 # decimal string
    longitude   = Column(String, nullable=False)                 # decimal string
    show_date   = Column(DateTime, index=True, nullable=False)
    uploaded_at = Column(DateTime, default=datetime.utcnow)
    file_name   = Column(String(255), index=True)                # owning upload

    def __repr__(self):
        return f"<CircusShow(id={self.id}, circus_name={self.circus_name}, show_date={self.show_date})>"


class FileUpload(Base):
    __tablename__ = "file_uploads"
    # Upload history: one row per ingestion attempt, success or not
    id           = Column(Integer, primary_key=True, autoincrement=True)
    file_name    = Column(String(255), index=True, nullable=False)
    upload_date  = Column(DateTime, default=datetime.utcnow, nullable=False)
    status       = Column(String(10), nullable=False)             # success/error
    record_count = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<FileUpload(file_name={self.file_name}, status={self.status}, record_count={self.record_count})>"
