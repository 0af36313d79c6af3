from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .database import engine, Base
from .routers import estimations, lines, templates, lookups, recalculation

logger = logging.getLogger("effort_estimator")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)


def _run_migrations():
    """Run pending Alembic migrations on startup.

    Databases created by Base.metadata.create_all() before Alembic was set up
    get the initial revision stamped first, so the upgrade does not try to
    recreate existing tables.
    """
    try:
        from alembic.config import Config
        from alembic import command
        from sqlalchemy import inspect

        alembic_ini = os.path.join(os.path.dirname(__file__), "..", "alembic.ini")
        if not os.path.exists(alembic_ini):
            logger.info("alembic.ini not found, skipping migrations")
            return

        alembic_cfg = Config(alembic_ini)
        alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

        insp = inspect(engine)
        has_alembic = "alembic_version" in insp.get_table_names()
        has_estimations = "estimations" in insp.get_table_names()

        if not has_alembic and has_estimations:
            logger.info("Stamping initial migration 5b2f0c8e41a7 (tables already exist)")
            command.stamp(alembic_cfg, "5b2f0c8e41a7")

        logger.info("Running pending Alembic migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")

    except Exception as e:
        # Never let migration errors prevent app startup
        logger.warning(f"Alembic migration warning: {e}")


app = FastAPI(
    title=settings.APP_NAME,
    description="Project effort estimation — lines, templates and hour totals",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimations.router, prefix="/api")
app.include_router(lines.router, prefix="/api")
app.include_router(templates.router, prefix="/api")
app.include_router(lookups.router, prefix="/api")
app.include_router(recalculation.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "effort-estimator"}


@app.on_event("startup")
def auto_migrate():
    """Run pending Alembic migrations on startup."""
    _run_migrations()


@app.on_event("startup")
def auto_seed():
    """Seed the activity type vocabulary on first run."""
    from .database import SessionLocal
    from .vocabulary import seed_activity_types
    db = SessionLocal()
    try:
        seed_activity_types(db)
    finally:
        db.close()
