"""Main FastAPI application"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import auth, lists, movies, stats, system
from .config import settings
from .database import engine, init_db
from .services.log_service import log_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    await init_db()
    log_service.info("FlixVault server started")
    try:
        yield
    except asyncio.CancelledError:
        pass  # Suppress CancelledError during shutdown
    finally:
        await engine.dispose()


app = FastAPI(
    title="FlixVault",
    description="Movie watchlists with per-user statistics",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
# If ALLOWED_ORIGINS is not set, default to ["*"] for maximum compatibility
allowed_origins = ["*"]
allow_credentials = False  # Credentials cannot be used with "*"

if settings.ALLOWED_ORIGINS:
    allowed_origins = settings.ALLOWED_ORIGINS.split(",")
    allow_credentials = True  # Credentials allowed with specific origins (auth cookie)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(auth.router)
app.include_router(lists.router)
app.include_router(stats.router)
app.include_router(movies.router)
app.include_router(system.router)


# Root API endpoint
@app.get("/api")
async def api_root():
    """API root"""
    return {
        "name": "FlixVault API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler: log and answer with a generic 500"""
    log_service.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
