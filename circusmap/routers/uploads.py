import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, UploadFile, status
from fastapi.responses import JSONResponse

from circusmap import settings
from circusmap.dependencies import get_repository, get_show_upload, require_admin
from circusmap.normalizers import get_default_normalizer, process_file
from circusmap.repositories import ShowRepository

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/api/uploads", tags=["uploads"])


def _failure(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"success": False, "message": message})


@router.post("", dependencies=[Depends(require_admin)])
def upload_file(
    file: UploadFile = Depends(get_show_upload),
    repo: ShowRepository = Depends(get_repository),
):
    """
    Ingest one CSV/Excel file of shows.

    Behavior:
        * The file is parsed and normalized; malformed rows are skipped.
        * Accepted shows are stored with the file name as provenance.
        * Every attempt, good or bad, leaves an upload-history entry.

    Returns:
        200 {"success": True, "message": ..., "record_count": n}
        400 {"success": False, "message": <why the file was refused>}
        413 when the file is over the size limit.
    """
    file_name = file.filename or "upload"
    buffer = file.file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(buffer) > settings.MAX_UPLOAD_BYTES:
        log.warning("upload too large: file=%s", file_name)
        repo.record_upload(file_name, "error", 0)
        repo.db.commit()
        return _failure(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        f"File exceeds the {settings.MAX_UPLOAD_BYTES} byte limit.")

    result = process_file(buffer, file_name, normalizer=get_default_normalizer())

    if not result.success:
        log.warning("upload failed: file=%s reason=%s", file_name, result.message)
        repo.record_upload(file_name, "error", 0)
        repo.db.commit()
        return _failure(status.HTTP_400_BAD_REQUEST, result.message)

    try:
        ok, errors = repo.add_shows(result.data)
        if errors:
            log.warning("upload %s: %d show(s) failed to store", file_name, len(errors))
        if not ok:
            raise RuntimeError("no records could be stored")
        repo.record_upload(file_name, "success", ok)
        repo.db.commit()
    except Exception as e:
        repo.db.rollback()
        log.exception("upload persistence failed: file=%s", file_name)
        repo.record_upload(file_name, "error", 0)
        repo.db.commit()
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Upload failed: {e}")

    # count what was stored, not what was parsed
    message = result.message if not errors else f"Successfully processed {ok} records."
    return {"success": True, "message": message, "record_count": ok}


@router.get("")
def list_uploads(repo: ShowRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
    """Upload history, newest first."""
    return [repo.upload_to_dict(u) for u in repo.list_uploads()]


@router.delete("/{file_name:path}", dependencies=[Depends(require_admin)])
def delete_upload(file_name: str, repo: ShowRepository = Depends(get_repository)) -> Dict[str, Any]:
    """Remove an upload and every show that came from it."""
    deleted = repo.delete_upload(file_name)
    repo.db.commit()
    return {"success": True, "deleted": deleted}
