import os
import logging
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

logger = logging.getLogger(__name__)

# ── Paths are relative to this file (…/backend/order_analytics/db/session.py)
_THIS = Path(__file__).resolve()
APP_DIR = _THIS.parents[1]             # backend/order_analytics
DB_DIR = APP_DIR / "data"              # backend/order_analytics/data

# Default DB: backend/order_analytics/data/analytics.db
DEFAULT_DB_PATH = DB_DIR / "analytics.db"
DEFAULT_DB_URL = f"sqlite:///{DEFAULT_DB_PATH.as_posix()}"

DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DB_URL)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, echo=False, future=True, connect_args=connect_args)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _sqlite_path() -> Path | None:
    if engine.url.get_backend_name() != "sqlite" or not engine.url.database:
        return None
    if engine.url.database == ":memory:":
        return None
    return Path(engine.url.database)

def bootstrap_db() -> None:
    """Create the analytics tables (orders, refunds and their lookups) if missing."""
    # Allow forced rebuild
    db_path = _sqlite_path()
    if os.getenv("RESET_DB", "0") == "1" and db_path is not None and db_path.exists():
        db_path.unlink()
        logger.info("Removed database file %s", db_path)

    # Skip auto-bootstrap if disabled
    if os.getenv("AUTO_BOOTSTRAP_DB", "1") != "1":
        return

    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)

    # Register the mapped classes on Base.metadata before create_all
    from order_analytics import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", engine.url.get_backend_name())
