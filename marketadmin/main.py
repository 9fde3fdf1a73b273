# marketadmin/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketadmin import models  # noqa: F401  (registers tables on Base.metadata)
from marketadmin.api import admins, audit_log, auth, dashboard, feedback, listings, reports, system, users
from marketadmin.config import settings
from marketadmin.database import Base, engine

logger = logging.getLogger("marketadmin")


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Alembic owns the schema in production; this only fills in a fresh dev database.
    Base.metadata.create_all(bind=engine)
    logger.info("Marketplace admin API started (env=%s)", settings.APP_ENV)
    yield
    logger.info("Marketplace admin API shutting down")


# Initialize FastAPI app
app = FastAPI(title="Marketplace Admin API", version="1.0.0", lifespan=lifespan)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(auth.router)       # /auth/me
app.include_router(dashboard.router)  # /dashboard/*
app.include_router(users.router)      # /users/*
app.include_router(listings.router)   # /listings/*
app.include_router(reports.router)    # /reports/*
app.include_router(feedback.router)   # /feedback/*
app.include_router(audit_log.router)  # /audit-log
app.include_router(admins.router)     # /admins/*
app.include_router(system.router)     # /settings


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "Marketplace admin API is running",
        "version": "1.0.0",
    }
