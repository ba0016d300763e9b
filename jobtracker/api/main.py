"""
FastAPI Application

HTTP API for job tracking, resume analysis and interview preparation.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobtracker.services.container import (
    config,
    auth_service,
    gemini_client,
    job_service,
)
from jobtracker.utils.exceptions import AnalysisError
from jobtracker.utils.limiter import limiter
from jobtracker.utils.logger import get_logger

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Tracker API",
    description="API for job tracking, ATS resume analysis and interview preparation",
    version="1.0.0",
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

_cors_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
if config.server.frontend_url:
    _cors_origins.append(config.server.frontend_url.rstrip("/"))
for _origin in config.server.cors_origins:
    if _origin not in _cors_origins:
        _cors_origins.append(_origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"[API] {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.details or exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg", "Invalid request"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "details": str(errors)},
    )


@app.on_event("startup")
async def startup_ensure_indexes():
    """Ensure MongoDB indexes exist for common queries."""
    try:
        auth_service.ensure_indexes()
        job_service.ensure_indexes()
        logger.info(f"[API] MongoDB database in use: {auth_service.db.name}")
    except Exception as e:
        logger.warning(f"[API] Could not ensure MongoDB indexes: {e}")


@app.on_event("shutdown")
async def shutdown_close_clients():
    await gemini_client.aclose()


@app.get("/health")
async def health():
    return {"status": "ok"}
