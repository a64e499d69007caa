"""
Kondate Planner FastAPI application.

Main application entry point with route registration, CORS, and rate limiting.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from kondate.config import settings
from kondate.api.routes import features, recipes, schedule
from kondate.clients.openai_client import OpenAIClient

# Configure logging with configurable level
_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(
    level=_log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    if not OpenAIClient().is_configured:
        logger.warning("OPENAI_API_KEY is not set; /api/generate-recipe will return 503")

    yield

    # Shutdown
    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Cooking step scheduling and recipe generation API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add rate limiter to app state and exception handler
app.state.limiter = recipes.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(schedule.router)
app.include_router(recipes.router)
app.include_router(features.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint reporting LLM availability."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "llm": "configured" if OpenAIClient().is_configured else "not_configured",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kondate.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
