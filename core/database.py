from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from typing import Generator, Optional
from dotenv import load_dotenv
import logging

from core.config import settings

load_dotenv()
logger = logging.getLogger(__name__)


# ============================================================
# ✅ Engine factory
# ============================================================
def build_engine(database_url: Optional[str] = None, **engine_kwargs) -> Engine:
    """
    Build an engine for ``database_url`` (defaults to settings.DATABASE_URL).
    SQLite connections are shared with FastAPI's worker threads.
    """
    url = database_url or settings.DATABASE_URL
    engine_kwargs.setdefault("echo", settings.DATABASE_ECHO)

    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        # server databases drop idle connections
        engine_kwargs.setdefault("pool_pre_ping", True)

    return create_engine(url, **engine_kwargs)


if settings.IS_SQLITE:
    logger.warning("⚠️ Using local SQLite database: %s", settings.DATABASE_URL)
else:
    logger.info("✅ Using database from environment.")

engine = build_engine()


# ============================================================
# ✅ Schema
# ============================================================
def create_db_and_tables(bind: Optional[Engine] = None) -> None:
    """Create every table registered by models.models (no migrations)."""
    import models.models  # noqa: F401

    try:
        SQLModel.metadata.create_all(bind or engine)
        logger.info("✅ Community CMS tables are in place.")
    except Exception as e:
        logger.error(f"❌ Failed to create tables: {e}")
        raise


# ============================================================
# ✅ Dependency: one session per request
# ============================================================
def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
