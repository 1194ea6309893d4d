# parking_api/main.py
"""
FastAPI application entry point.
Includes CORS, request timing, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from parking_api.routers import auth, users, parkings, entries, reports, logs, health
from parking_api.database import create_tables
from parking_api.config import settings
from parking_api.errors import ParkingError
from parking_api.utils import response
from parking_api.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Parking Management System API",
    description="Parking lots, vehicle entries/exits, billing and reports.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (dashboard origin) ──────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    resp = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {resp.status_code} ({duration}ms)")
    return resp


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(ParkingError)
async def parking_error_handler(request: Request, exc: ParkingError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} → {exc.status_code}: {exc.message}")
    return response.error(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Bad request")
    else:
        message = "Bad request"
    return response.error(message, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return response.error(str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return response.error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(auth.router,     prefix="/api", tags=["🔑 Auth"])
app.include_router(users.router,    prefix="/api", tags=["👤 Users"])
app.include_router(parkings.router, prefix="/api", tags=["🅿️  Parkings"])
app.include_router(entries.router,  prefix="/api", tags=["🚗 Entries"])
app.include_router(reports.router,  prefix="/api", tags=["📊 Reports"])
app.include_router(logs.router,     prefix="/api", tags=["📜 Activity Log"])
app.include_router(health.router,   prefix="/api", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Parking API starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Parking API shutting down...")
