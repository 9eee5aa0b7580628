"""
Shared FastAPI dependencies: store construction, admin check, upload filter.
"""
import secrets
from pathlib import PurePath

from fastapi import Depends, File, Header, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from circusmap import settings
from circusmap.db import get_db
from circusmap.repositories import ShowRepository


def get_repository(db: Session = Depends(get_db)) -> ShowRepository:
    return ShowRepository(db)


def check_admin_password(password: str | None) -> bool:
    if not password:
        return False
    return secrets.compare_digest(password, settings.ADMIN_PASSWORD)


def require_admin(x_admin_password: str | None = Header(None, alias="X-Admin-Password")) -> None:
    if not check_admin_password(x_admin_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_show_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Accept the upload when either the extension or the MIME type says
    CSV/Excel. The parser makes the final call on the extension.
    """
    ext = PurePath(file.filename or "").suffix.lower()
    content_type = (file.content_type or "").strip().lower()

    if ext not in settings.ALLOWED_EXTENSIONS and content_type not in settings.ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only CSV and Excel files are allowed.",
        )
    return file
