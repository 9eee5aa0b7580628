# circusmap/settings.py
import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_ROOT / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{PROJECT_ROOT / 'circusmap.sqlite3'}")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Single shared admin password; there is no user model.
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Upload limits (10 MiB)
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
ALLOWED_EXTENSIONS = (".csv", ".xlsx", ".xls")
ALLOWED_CONTENT_TYPES = {
    "text/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

# Shown on the map when nothing has been uploaded yet
DEFAULT_START_DATE = "2025-04-01"
DEFAULT_END_DATE = "2025-10-31"
