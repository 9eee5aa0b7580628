from circusmap import settings
from conftest import csv_bytes

ROW = 'Big Top,Central Park,5th Ave,New York,NY,10022,"40.7736, -73.9566",2025-04-15'
ROW2 = 'Big Top,Central Park,5th Ave,New York,NY,10022,"40.7736, -73.9566",2025-04-16'


def _upload(client, headers, name="spring.csv", data=None, content_type="text/csv"):
    data = csv_bytes(ROW, ROW2) if data is None else data
    return client.post("/api/uploads", files={"file": (name, data, content_type)}, headers=headers)


def test_upload_then_read_shows(client, admin_headers):
    r = _upload(client, admin_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body == {"success": True, "message": "Successfully processed 2 records.", "record_count": 2}

    shows = client.get("/api/shows").json()
    assert len(shows) == 2
    assert shows[0]["circus_name"] == "Big Top"
    assert shows[0]["coords"] == [40.7736, -73.9566]
    assert shows[0]["file_name"] == "spring.csv"

    history = client.get("/api/uploads").json()
    assert history[0]["file_name"] == "spring.csv"
    assert history[0]["status"] == "success"
    assert history[0]["record_count"] == 2


def test_upload_requires_admin_password(client):
    r = _upload(client, {"X-Admin-Password": "wrong"})
    assert r.status_code == 401
    assert client.get("/api/shows").json() == []


def test_upload_rejects_other_file_types(client, admin_headers):
    r = _upload(client, admin_headers, name="notes.txt", data=b"hello", content_type="text/plain")
    assert r.status_code == 400
    assert "Only CSV and Excel" in r.json()["detail"]


def test_failed_upload_is_recorded(client, admin_headers):
    r = _upload(client, admin_headers, name="empty.csv", data=csv_bytes())
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "The file contains no data."}

    history = client.get("/api/uploads").json()
    assert history[0]["status"] == "error"
    assert history[0]["record_count"] == 0


def test_garbled_upload_returns_error_payload(client, admin_headers):
    r = _upload(client, admin_headers, name="renamed.csv", data=b"\x89PNG\x00\xff\xfe\x00")
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"].startswith("Error processing file:")


def test_mime_type_alone_does_not_bypass_extension_check(client, admin_headers):
    r = _upload(client, admin_headers, name="shows.dat", data=csv_bytes(ROW), content_type="text/csv")
    assert r.status_code == 400
    assert r.json()["message"] == "Unsupported file format. Please upload a CSV or Excel file."


def test_oversized_upload(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 16)
    r = _upload(client, admin_headers)
    assert r.status_code == 413
    assert r.json()["success"] is False


def test_duplicate_uploads_are_not_deduplicated(client, admin_headers):
    assert _upload(client, admin_headers).status_code == 200
    assert _upload(client, admin_headers).status_code == 200
    assert len(client.get("/api/shows").json()) == 4
    assert len(client.get("/api/uploads").json()) == 2


def test_delete_upload_cascades_to_shows(client, admin_headers):
    _upload(client, admin_headers, name="spring.csv")
    _upload(client, admin_headers, name="fall.csv", data=csv_bytes(ROW.replace("2025-04-15", "2025-10-01")))

    r = client.delete("/api/uploads/spring.csv", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "deleted": 2}

    shows = client.get("/api/shows").json()
    assert [s["file_name"] for s in shows] == ["fall.csv"]
    assert [u["file_name"] for u in client.get("/api/uploads").json()] == ["fall.csv"]


def test_delete_requires_admin(client):
    assert client.delete("/api/uploads/spring.csv").status_code == 401


def test_manual_entry(client, admin_headers):
    payload = {"Circus Name": "Tiny Top", "Latitude": "41.88", "Longitude": "-87.62", "Show Date": "2025-06-02"}
    r = client.post("/api/shows", json=payload, headers=admin_headers)
    assert r.status_code == 201, r.text
    assert r.json()["file_name"] == "manual-entry"
    assert r.json()["coords"] == [41.88, -87.62]

    r = client.post("/api/shows", json={"Circus Name": "No Date", "COORDS": "1, 2"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "MissingDate"}


def test_admin_login(client):
    assert client.post("/api/auth/admin", json={"password": settings.ADMIN_PASSWORD}).json() == {"success": True}
    r = client.post("/api/auth/admin", json={"password": "nope"})
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_storage_failure_is_recorded_in_history(client, admin_headers, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from circusmap.repositories import ShowRepository

    def broken_add_shows(self, shows):
        raise OperationalError("INSERT INTO circus_shows", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ShowRepository, "add_shows", broken_add_shows)
    r = _upload(client, admin_headers)
    assert r.status_code == 500
    assert r.json()["success"] is False

    history = client.get("/api/uploads").json()
    assert len(history) == 1
    assert history[0]["status"] == "error"
    assert history[0]["record_count"] == 0
    assert client.get("/api/shows").json() == []


def test_record_count_reflects_stored_shows(client, admin_headers, monkeypatch):
    from circusmap.repositories import ShowRepository

    original = ShowRepository.add_shows

    def store_first_only(self, shows):
        shows = list(shows)
        ok, _ = original(self, shows[:1])
        return ok, [{"circus_name": s.circus_name, "error": "insert failed"} for s in shows[1:]]

    monkeypatch.setattr(ShowRepository, "add_shows", store_first_only)
    r = _upload(client, admin_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Successfully processed 1 records.", "record_count": 1}
    assert len(client.get("/api/shows").json()) == 1
    assert client.get("/api/uploads").json()[0]["record_count"] == 1


def test_delete_upload_with_slash_in_name(client, admin_headers, repo):
    from datetime import datetime
    from circusmap.normalizers import CanonicalShow

    name = "2025/spring.csv"
    repo.add_shows([CanonicalShow("Big Top", "Central Park", "5th Ave", "New York", "NY", "10022",
                                  "40.7736", "-73.9566", datetime(2025, 4, 15), name)])
    repo.record_upload(name, "success", 1)
    repo.db.commit()

    r = client.delete("/api/uploads/2025%2Fspring.csv", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "deleted": 1}
    assert client.get("/api/uploads").json() == []
