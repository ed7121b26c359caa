# app/main.py
"""
FastAPI application entry point.
Includes security middleware, registry error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import vehicles, health
from app.database import create_tables
from app.config import settings
from app.services.errors import AdmissionError, VehicleNotFound, ENTITY_NAME
from app.utils.alert_headers import failure_alert
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Parking Vehicle Registry API",
    description="Vehicle registration with duplicate-plate and per-type capacity admission control.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (allow dashboard on same LAN to call the API) ──────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to dashboard origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", f"X-{settings.APP_NAME}-alert",
                    f"X-{settings.APP_NAME}-error", f"X-{settings.APP_NAME}-params"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth. Health check and docs stay open.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Registry Error Handlers ──────────────────────────────────────────────────
@app.exception_handler(AdmissionError)
async def admission_error_handler(request: Request, exc: AdmissionError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "title": exc.message,
            "status": status.HTTP_400_BAD_REQUEST,
            "entityName": exc.entity_name,
            "errorKey": exc.error_key,
        },
        headers=failure_alert(exc.entity_name, exc.error_key),
    )


@app.exception_handler(VehicleNotFound)
async def not_found_handler(request: Request, exc: VehicleNotFound):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "entityName": ENTITY_NAME},
    )


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(vehicles.router, prefix="/api/v1", tags=["🚗 Vehicles"])
app.include_router(health.router,   prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Parking Registry starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"🅿️  Capacity: {settings.CAPACITIES}")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Parking Registry shutting down...")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.BACKEND_IP, port=settings.BACKEND_PORT)
