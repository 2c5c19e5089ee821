"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from projektmester.config import get_settings
from projektmester.api import auth, users, statuses, projects, tasks, finance, files, reports
from projektmester.database import Base, SessionLocal, engine
from projektmester.records import RecordStore
from projektmester.services.project_data_service import ProjectDataService

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_log = logging.getLogger(__name__)

# Guard: reject default dev secret key in production
_DEV_SECRET = "dev-secret-key-change-in-production"
if settings.secret_key == _DEV_SECRET:
    if settings.app_env == "production":
        raise RuntimeError(
            "Refusing to start: secret_key is the dev default. "
            "Set SECRET_KEY in .env or environment."
        )
    _log.warning("Running with default dev secret key. Do not use in production.")

# Create database tables
Base.metadata.create_all(bind=engine)


def bootstrap_admin():
    """Create the configured admin account if there are no users yet."""
    db = SessionLocal()
    try:
        ProjectDataService(RecordStore(db)).ensure_bootstrap_admin(
            settings.bootstrap_admin_email,
            settings.bootstrap_admin_password,
            settings.bootstrap_admin_name,
        )
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    bootstrap_admin()
    yield


app = FastAPI(
    title="ProjektMester",
    description="Project management back end for renovation contractors",
    version="1.0.0",
    redirect_slashes=False,  # Prevent 307 redirects that drop Authorization headers
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(statuses.router, prefix="/api/statuses", tags=["statuses"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(tasks.router, prefix="/api/projects", tags=["tasks"])
app.include_router(finance.router, prefix="/api/projects", tags=["finance"])
app.include_router(files.router, prefix="/api", tags=["files"])
app.include_router(reports.router, prefix="/api", tags=["reports"])
app.include_router(files.download_router, tags=["files"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "projektmester"}


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": "ProjektMester",
        "version": "1.0.0",
        "docs": "/docs"
    }
