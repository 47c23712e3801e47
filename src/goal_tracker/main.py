"""FastAPI application for the Goal Tracker."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .api.routes import goals, programs, workouts
from .api.exception_handlers import register_exception_handlers
from .utils.log_sanitizer import configure_logging, install_log_sanitizer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    install_log_sanitizer()
    logger.info(f"Starting Goal Tracker v{__version__}")
    logger.info(f"Goals DB: {settings.goals_db_path}")
    yield
    # Shutdown
    logger.info("Shutting down Goal Tracker")


app = FastAPI(
    title="Goal Tracker API",
    description="Fitness goal scheduling, progress tracking and realism checks",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(goals.router, prefix="/api/v1/goals", tags=["goals"])
app.include_router(workouts.router, prefix="/api/v1/workouts", tags=["workouts"])
app.include_router(programs.router, prefix="/api/v1/programs", tags=["programs"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Goal Tracker API",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
