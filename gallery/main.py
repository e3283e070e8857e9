"""Main FastAPI application with all middleware"""

from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from gallery.core.config import settings
from gallery.core.database import close_db
from gallery.core.exceptions import register_exception_handlers
from gallery.core.middleware import setup_middleware
from gallery.core.rate_limit import limiter
from gallery.api.v1 import api_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Starting up {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Art gallery storefront: catalog, cart pricing, checkout and back office",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan
)

# Add rate limiter
app.state.limiter = limiter

register_exception_handlers(app)
setup_middleware(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "docs": "/api/docs",
        "health": "/health"
    }
