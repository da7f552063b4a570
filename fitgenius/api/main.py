"""Reference FastAPI backend for FitGenius data (profile, logs, weight, plan)."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitgenius.api.auth_routes import router as auth_router
from fitgenius.api.routes import router
from fitgenius.api.store import store
from fitgenius.config.settings import settings
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    logger.info("Starting FitGenius backend...")
    yield
    logger.info(f"Shutting down, dropping {len(store.accounts)} in-memory accounts")
    store.clear()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="FitGenius data backend with in-memory storage",
    lifespan=lifespan,
)

# Remove duplicates while preserving order
unique_origins = list(dict.fromkeys(settings.cors_origins))
logger.info(f"CORS configured with origins: {unique_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=unique_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)

app.include_router(auth_router)
app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"{settings.app_name} API",
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fitgenius.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
