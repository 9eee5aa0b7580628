from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI

from .db import engine, Base
from .models import CircusShow, FileUpload  # noqa: F401  (register tables)
from .routers.auth import router as auth_router
from .routers.shows import router as shows_router
from .routers.uploads import router as uploads_router
from circusmap.setup_logging import setup_logging

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging() # Init Logging
log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs once at startup: create database tables if they don’t exist.
    There is no migration system; new columns need a fresh database.
    """
    Base.metadata.create_all(bind=engine)
    log.info("circusmap ready (db=%s)", engine.url.render_as_string(hide_password=True))
    yield

# Create the FastAPI app instance
app = FastAPI(title="Circus Show Map", lifespan=lifespan)

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """Simple health probe for monitoring."""
    return {"ok": True, "service": "circusmap", "version": 1}

# Register API routers:
app.include_router(auth_router)
app.include_router(uploads_router)
app.include_router(shows_router)
