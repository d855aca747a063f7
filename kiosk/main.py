"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kiosk.config import get_settings
from kiosk.infrastructure.database import engine, init_db
from kiosk.core.logging import configure_logging
from kiosk.core.middleware import setup_middleware
from kiosk.core.exceptions import register_exception_handlers
from kiosk.domain.repositories.checkin_repository import CheckInRepository
from kiosk.interfaces.deps import get_checkin_repository

# Import routers
from kiosk.interfaces.api.admin import router as admin_router
from kiosk.interfaces.api.checkins import router as checkins_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — the engine is owned here and disposed on shutdown."""
    logger.info("Starting Portaria check-in kiosk...", env=settings.ENVIRONMENT, database=engine.url.render_as_string())

    init_db()
    logger.info("Database tables created/verified")

    if settings.ADMIN_PIN == "1818" or settings.SECRET_KEY == "change-me":
        logger.warning("Default admin PIN or SECRET_KEY in use; set ADMIN_PIN and SECRET_KEY")

    yield

    engine.dispose()
    logger.info("Portaria check-in kiosk stopped")


app = FastAPI(
    title="Portaria — Check-in de visitantes",
    description="API do quiosque de check-in: registro, lista, exportação e limpeza",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging)
setup_middleware(app)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(checkins_router)
app.include_router(admin_router)


@app.get("/")
def root():
    return {
        "name": "Portaria Check-in Kiosk",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health(repo: CheckInRepository = Depends(get_checkin_repository)):
    return {"status": "healthy", "checkins": repo.count()}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("kiosk.main:app", host=settings.HOST, port=settings.PORT)
