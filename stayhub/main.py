import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import settings
from .db import SessionLocal, init_db
from .errors import StayHubError, NotFound, InvalidRange, Conflict, InvalidStatus, InvalidRating, GuestLimitExceeded, Forbidden, StorageError
from .limiter import limiter
from .routers import auth, properties, bookings, favorites, reviews
from .seed import seed_sample_data
from .storage import KeyedLocks, MemoryStore, SqlStorage

# --- Logging configuration ---
_level = logging.DEBUG if settings.DEBUG else logging.INFO
logging.basicConfig(
    level=_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# Align uvicorn loggers with our level (useful under Docker Compose)
for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).setLevel(_level)
logger = logging.getLogger("stayhub.startup")
logger.info("Starting %s (DEBUG=%s, storage=%s)", settings.APP_NAME, settings.DEBUG, settings.STORAGE_BACKEND)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    description=f"{settings.APP_NAME}: short-term rental listings, bookings and reviews.",
)

# Per-property locks shared by every request-scoped store
app.state.property_locks = KeyedLocks()

# HTTP status for each domain failure kind
ERROR_STATUS = {
    NotFound: 404,
    InvalidRange: 400,
    Conflict: 400,
    InvalidStatus: 400,
    InvalidRating: 400,
    GuestLimitExceeded: 400,
    Forbidden: 403,
}


@app.on_event("startup")
def startup_event():
    """Sets up the entity store for the configured backend."""
    logger.info("Running startup tasks...")
    if settings.STORAGE_BACKEND == "memory":
        app.state.store = MemoryStore(locks=app.state.property_locks)
        logger.info("Using in-memory store.")
    else:
        # Requests open their own session-backed store
        app.state.store = None
        init_db()
        logger.info("Database schema ensured.")

    def _seed_sample_data():
        if app.state.store is not None:
            seed_sample_data(app.state.store, settings.SEED_HOST_USERNAME, settings.SEED_HOST_PASSWORD)
            return
        db = SessionLocal()
        try:
            store = SqlStorage(db, locks=app.state.property_locks)
            seed_sample_data(store, settings.SEED_HOST_USERNAME, settings.SEED_HOST_PASSWORD)
        finally:
            db.close()

    if settings.SEED_SAMPLE_DATA:
        _seed_sample_data()
    logger.info("Startup tasks complete.")


@app.exception_handler(StayHubError)
def domain_error_handler(request: Request, exc: StayHubError):
    status = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 400)
    return JSONResponse(status_code=status, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(StorageError)
def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable", "code": "storage_error"})


# Add the limiter to the app state
app.state.limiter = limiter
# Add the exception handler for rate limit exceeded errors
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(auth.router)
app.include_router(properties.router)
app.include_router(bookings.router)
app.include_router(favorites.router)
app.include_router(reviews.router)


@app.get("/healthz")
@limiter.exempt
def healthz():
    return {"status": "ok"}
