from typing import Any, Dict

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from circusmap.dependencies import check_admin_password

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/admin")
def admin_login(payload: Dict[str, Any] = Body(...)):
    """
    Check the shared admin password. There are no sessions: the client keeps
    the password and sends it as X-Admin-Password on admin calls.
    """
    if check_admin_password(str(payload.get("password") or "")):
        return {"success": True}
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED,
                        content={"success": False, "message": "Invalid password"})
