from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from schemaguard.db.base import get_db
from schemaguard.core.config import settings
from schemaguard.core.logging import configure_logging
from schemaguard.routers import schemas as schemas_router
from schemaguard.core.errors import (
    SchemaGuardException,
    schemaguard_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="schemaguard API",
    description=(
        "**Schema registry and structural validator**\n\n"
        "Stores named, versioned attribute schemas and checks whether a host type's "
        "field inventory conforms to them (STRICT or MATCHING).\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(SchemaGuardException, schemaguard_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(schemas_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception:
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
