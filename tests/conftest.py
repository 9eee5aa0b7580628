# tests/conftest.py
import io
import os
import tempfile
from datetime import datetime

# keep the app's own engine off the working tree
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from circusmap.main import app
from circusmap.db import Base, get_db
from circusmap.models import CircusShow
from circusmap.repositories import ShowRepository
from circusmap.settings import ADMIN_PASSWORD


# --- Temporary SQLite DB file for the whole test session ---
@pytest.fixture(scope="session")
def tmp_db_url():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(tmp_db_url):
    eng = create_engine(tmp_db_url, connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=eng)
    return eng


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    db = TestingSession()
    _clear_all(db)
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture
def repo(db_session):
    return ShowRepository(db_session)


# --- Override FastAPI's DB dependency to use our test session ---
@pytest.fixture(autouse=True)
def override_get_db(db_session):
    def _get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"X-Admin-Password": ADMIN_PASSWORD}


def _clear_all(db):
    db.execute(text("DELETE FROM circus_shows"))
    db.execute(text("DELETE FROM file_uploads"))
    db.commit()


# --- File builders ---
HEADER = "CIRCUS NAME,VENUE NAME,ADDRESS,CITY,STATE,ZIP,COORDS,Show Date"


def csv_bytes(*lines: str, header: str = HEADER) -> bytes:
    return ("\n".join([header, *lines]) + "\n").encode("utf-8")


def make_xlsx(rows, sheets=None) -> bytes:
    """Build an .xlsx in memory. `rows` is a list of lists, header first."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Shows"
    for r in rows:
        ws.append(r)
    for title, extra in (sheets or {}).items():
        other = wb.create_sheet(title)
        for r in extra:
            other.append(r)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def seed_shows(db_session):
    """Three shows at two venues across two files."""
    shows = [
        CircusShow(circus_name="Big Top", venue_name="Central Park", address="5th Ave",
                   city="New York", state="NY", zip="10022",
                   latitude="40.7736", longitude="-73.9566",
                   show_date=datetime(2025, 4, 15), file_name="spring.csv"),
        CircusShow(circus_name="Big Top", venue_name="Central Park", address="5th Ave",
                   city="New York", state="NY", zip="10022",
                   latitude="40.7736", longitude="-73.9566",
                   show_date=datetime(2025, 4, 18), file_name="spring.csv"),
        CircusShow(circus_name="Cirque Lumen", venue_name="Grant Park", address="337 E Randolph St",
                   city="Chicago", state="IL", zip="60601",
                   latitude="41.8826", longitude="-87.6226",
                   show_date=datetime(2025, 6, 2), file_name="summer.xlsx"),
    ]
    db_session.add_all(shows)
    db_session.commit()
    return shows
