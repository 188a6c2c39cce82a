# =====================================================
# FILE: task_manager/core/database.py
# Database Connection and Session Management
# =====================================================

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool, QueuePool, StaticPool
from contextlib import contextmanager
from typing import Generator
from fastapi import HTTPException
from urllib.parse import quote_plus
import logging

from task_manager.core.config import settings

logger = logging.getLogger(__name__)


def build_database_url() -> str:
    """
    Use DATABASE_URL when configured, otherwise build the MySQL URL from components.
    The password is URL-encoded to handle special characters like @ # $ etc.
    """
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    encoded_password = quote_plus(settings.DB_PASSWORD)
    return (
        f"mysql+pymysql://{settings.DB_USER}:{encoded_password}"
        f"@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
    )


DATABASE_URL = build_database_url()

engine_args = {
    "echo": settings.DB_ECHO,
}

if DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared with the threadpool FastAPI runs sync code in
    engine_args["connect_args"] = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_args["poolclass"] = StaticPool
    logger.info(" Using SQLite database")
else:
    engine_args["pool_pre_ping"] = settings.DB_POOL_PRE_PING
    if settings.DEBUG:
        engine_args["poolclass"] = NullPool
    else:
        engine_args["pool_size"] = settings.DB_POOL_SIZE
        engine_args["max_overflow"] = settings.DB_MAX_OVERFLOW
        engine_args["poolclass"] = QueuePool
    logger.info(f" Connecting to: {settings.DB_USER}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}")

try:
    engine = create_engine(DATABASE_URL, **engine_args)
except Exception as e:
    logger.error(f" Failed to create database engine: {str(e)}")
    raise

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI
    """
    db = SessionLocal()
    try:
        yield db
    except HTTPException:
        # Expected API errors (401/403/404/422)
        db.rollback()
        raise
    except Exception as e:
        logger.error(f" Database session error: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_session():
    """
    Context manager for database operations outside of FastAPI requests
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception as e:
        logger.error(f" Database operation failed: {str(e)}")
        session.rollback()
        raise
    finally:
        session.close()


def init_db():
    """
    Create all tables that do not exist yet
    """
    try:
        # Register models on Base.metadata
        from task_manager.models import User, Task, AuditLog  # noqa: F401

        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info(" Database tables created successfully")
    except Exception as e:
        logger.error(f" Failed to create database tables: {str(e)}")
        raise
