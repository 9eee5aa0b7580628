import logging
from datetime import date
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from circusmap.dependencies import get_repository, require_admin
from circusmap.normalizers import MANUAL_ENTRY, get_default_normalizer
from circusmap.repositories import ShowRepository

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shows", tags=["shows"])

# -------------------------------------------------------------------
# Read endpoints
# -------------------------------------------------------------------
@router.get("")
def list_shows(repo: ShowRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
    """All shows, each with a numeric `coords` pair for the map."""
    return [repo.show_to_dict(s) for s in repo.all_shows()]

@router.get("/date-range")
def get_date_range(repo: ShowRepository = Depends(get_repository)) -> Dict[str, str]:
    """Earliest to latest show date, used to bound the timeline slider."""
    return repo.date_range()

@router.get("/venues")
def list_venues(repo: ShowRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
    """Shows grouped by venue/city/state with their date span."""
    return repo.venues()

@router.get("/date/{day}")
def list_shows_on_date(day: str, repo: ShowRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
    """Shows on one calendar day (YYYY-MM-DD)."""
    try:
        target = date.fromisoformat(day)
    except ValueError:
        raise HTTPException(400, f"Invalid date {day!r}; expected YYYY-MM-DD")
    return [repo.show_to_dict(s) for s in repo.shows_on_date(target)]

# -------------------------------------------------------------------
# Manual entry
# -------------------------------------------------------------------
@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_show(
    payload: Dict[str, Any] = Body(...),
    repo: ShowRepository = Depends(get_repository),
):
    """
    Add one show typed in by an admin. The payload is a single row in any of
    the header spellings a file may use; it goes through the same rules as
    uploaded rows and is stored with file_name "manual-entry".
    """
    show, reason = get_default_normalizer().normalize_row(payload, MANUAL_ENTRY)
    if show is None:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                            content={"success": False, "message": reason.value})
    row = repo.add_show(show)
    repo.db.commit()
    log.info("manual show added: id=%s circus=%s", row.id, row.circus_name)
    return repo.show_to_dict(row)
