import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ALLOWED_ORIGINS
from .database import Base, engine
from .domain.appointments.router import router as appointments_router
from .domain.catalog.router import router as catalog_router
from .domain.directory.router import router as directory_router
from .domain.patients.router import router as patients_router
from .domain.reports.router import router as reports_router
from .domain.staff.router import router as staff_router
from .errors import DomainError
from .shared.responses import fail

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

LOCATION_PARTS = {"body", "query", "path", "header"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Hospital Operations API", version="1.0.0", lifespan=lifespan)


def validation_message(error: dict) -> str:
    """Single human readable message for the first validation error"""
    fields = [str(part) for part in error.get("loc", ()) if str(part) not in LOCATION_PARTS]
    if not fields:
        # Model level validators report on the whole body
        return str(error.get("msg", "invalid input")).removeprefix("Value error, ")
    field = fields[-1]
    if error.get("type") == "missing":
        return f"{field} is required"
    return f"invalid input in {field}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    message = validation_message(errors[0]) if errors else "invalid input"
    return JSONResponse(status_code=422, content=fail(message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Authentication failures, unknown routes and wrong methods"""
    logger.info(f"⚠️ {request.method} {request.url.path} returned {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.info(f"⚠️ {request.method} {request.url.path} failed: {exc.kind.value} - {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=fail(exc.message))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.error(f"❌ Constraint violation on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=500, content=fail("internal server error"))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=fail("internal server error"))


# CORS Configuration
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(appointments_router)
app.include_router(patients_router)
app.include_router(directory_router)
app.include_router(catalog_router)
app.include_router(staff_router)
app.include_router(reports_router)


@app.get("/")
def root():
    return {"message": "Hospital Operations API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
