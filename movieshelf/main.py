# movieshelf/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import time
from typing import Callable

from .config import settings
from .api.v1.router import api_router
from .crud.exceptions import MovieShelfError
from .database import init_db, close_db, check_db_health

# ============================================================
# Setup Logging
# ============================================================
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================
# Startup/Shutdown Events
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ✅ STARTUP
    logger.info("🚀 Starting MovieShelf API...")
    logger.info(f"🔒 Debug mode: {settings.DEBUG}")

    init_db()
    logger.info("✅ Application startup complete!")

    yield  # Application runs

    # ❌ SHUTDOWN
    logger.info("🛑 Shutting down MovieShelf API...")
    close_db()
    logger.info("👋 Goodbye!")


# ============================================================
# Create FastAPI Application
# ============================================================

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Movies, directors and categories",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

# ============================================================
# Middleware Configuration
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next: Callable):
    """Log all requests with timing"""
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} "
        f"[{response.status_code}] {duration:.3f}s"
    )
    response.headers["X-Process-Time"] = str(duration)
    return response

# ============================================================
# API Routers
# ============================================================

app.include_router(api_router)

# ============================================================
# Health
# ============================================================

@app.get("/health", tags=["Health"])
def health_check() -> dict:
    """Health check including database connectivity"""
    db_healthy = check_db_health()
    return {
        "status": "healthy" if db_healthy else "degraded",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "database": "connected" if db_healthy else "disconnected",
    }

# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a client error like any missing field: 400, not 422"""
    errors = exc.errors()
    location = [str(part) for part in errors[0].get("loc", ()) if part != "body"] if errors else []
    detail = f"Invalid value for {'.'.join(location)}" if location else "Invalid request body"
    logger.info(f"{request.method} {request.url.path} rejected: {detail}")
    return JSONResponse(
        status_code=400,
        content={"detail": detail},
    )


@app.exception_handler(MovieShelfError)
async def movieshelf_error_handler(request: Request, exc: MovieShelfError):
    """Repository errors carry their own status code"""
    logger.info(f"{request.method} {request.url.path} rejected: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"❌ Unhandled exception: {str(exc)}", exc_info=True)

    # Hide internal errors in production
    error_detail = str(exc) if settings.DEBUG else "Internal server error"

    return JSONResponse(
        status_code=500,
        content={"detail": error_detail},
    )

# ============================================================
# Run Application
# ============================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "movieshelf.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info",
        access_log=settings.DEBUG,
    )
