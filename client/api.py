import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:8000")
S = requests.Session()

def _admin(password): return {"X-Admin-Password": password}

def healthz():     r=S.get(f"{API}/healthz",timeout=10); r.raise_for_status(); return r.json()
def shows():       r=S.get(f"{API}/api/shows",timeout=30); r.raise_for_status(); return r.json()
def shows_on(day): r=S.get(f"{API}/api/shows/date/{day}",timeout=30); r.raise_for_status(); return r.json()
def date_range():  r=S.get(f"{API}/api/shows/date-range",timeout=10); r.raise_for_status(); return r.json()
def venues():      r=S.get(f"{API}/api/shows/venues",timeout=30); r.raise_for_status(); return r.json()
def uploads():     r=S.get(f"{API}/api/uploads",timeout=30); r.raise_for_status(); return r.json()

def login(password: str) -> bool:
    r = S.post(f"{API}/api/auth/admin", json={"password": password}, timeout=10)
    return r.status_code == 200 and r.json().get("success") is True

def upload(file_name: str, data: bytes, content_type: str | None, password: str):
    """Returns the JSON body for both success and refused files (400)."""
    files = {"file": (file_name, data, content_type or "application/octet-stream")}
    r = S.post(f"{API}/api/uploads", files=files, headers=_admin(password), timeout=120)
    if r.status_code in (400, 413):
        return r.json()
    r.raise_for_status()
    return r.json()

def delete_upload(file_name: str, password: str):
    r = S.delete(f"{API}/api/uploads/{requests.utils.quote(file_name, safe='')}",
                 headers=_admin(password), timeout=30)
    r.raise_for_status()
    return r.json()
