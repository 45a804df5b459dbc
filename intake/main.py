from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import engine, Base
from .errors import EnquiryNotFound, StoreUnavailable
from .ids import get_default_id_generator
from .repositories import MemoryEnquiryStore
from .routers.enquiries import router as enquiries_router
from .routers.admin import router as admin_router
from .schemas import HealthResponse
from intake import settings
from intake.setup_logging import setup_logging

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
    Runs once at startup and once at shutdown.
    Picks the store backend:
      STORE_BACKEND=sql    -> enquiries table (created if missing), session per request
      STORE_BACKEND=memory -> one process-lifetime store, lost on restart
    """
    app.state.id_generator = get_default_id_generator()
    if settings.STORE_BACKEND == "memory":
        app.state.memory_store = MemoryEnquiryStore(id_generator=app.state.id_generator)
        log.warning("using in-memory enquiry store; nothing survives a restart")
    else:
        app.state.memory_store = None
        # Create database tables if they don’t exist.
        Base.metadata.create_all(bind=engine)
    log.info("enquiry service up: env=%s backend=%s school=%s",
             settings.ENV, settings.STORE_BACKEND, settings.SCHOOL_ID)
    yield
    # No special shutdown logic needed

# Create the FastAPI app instance
app = FastAPI(title="Enquiry Intake", lifespan=lifespan)

# --------------------------------------------------------------------
# Error envelopes: always {"success": false, "error": ...}
# --------------------------------------------------------------------
def _fail(status: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "error": error})

@app.exception_handler(EnquiryNotFound)
async def _not_found(request: Request, exc: EnquiryNotFound):
    log.info("enquiry not found: %s", exc.enquiry_id)
    return _fail(404, "Enquiry not found")

@app.exception_handler(StoreUnavailable)
async def _store_down(request: Request, exc: StoreUnavailable):
    # detail was already logged by the store; the client only gets a generic message
    log.error("store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return _fail(500, "Could not process enquiry, please try again later")

@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _fail(404, "Route not found")
    return _fail(exc.status_code, str(exc.detail))

@app.exception_handler(RequestValidationError)
async def _bad_params(request: Request, exc: RequestValidationError):
    return _fail(422, "Invalid request parameters")

@app.exception_handler(Exception)
async def _unexpected(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return _fail(500, "Internal server error")

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/health", response_model=HealthResponse)
def health():
    """Liveness probe: no dependency checks, just proves the process answers."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc)}

# Register API routers:
app.include_router(enquiries_router)
app.include_router(admin_router)
