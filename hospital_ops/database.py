"""Engine, session factory and the request-scoped session dependency"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import (
    DATABASE_URL,
    DB_MAX_OVERFLOW,
    DB_POOL_RECYCLE,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
    DB_SLOW_QUERY_SECONDS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolSettings:
    size: int = DB_POOL_SIZE
    max_overflow: int = DB_MAX_OVERFLOW
    timeout: int = DB_POOL_TIMEOUT
    recycle: int = DB_POOL_RECYCLE


def build_engine(url: str, pool: Optional[PoolSettings] = None) -> Engine:
    """Create an engine. Pool settings only apply to server databases."""
    if url.startswith("sqlite"):
        # Appointment lookups run on worker threads, each with its own session
        return create_engine(url, connect_args={"check_same_thread": False})

    pool = pool or PoolSettings()
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=pool.size,
        max_overflow=pool.max_overflow,
        pool_timeout=pool.timeout,
        pool_recycle=pool.recycle,
    )


def log_slow_queries(target: Engine, threshold_seconds: float) -> None:
    """Warn about every statement on ``target`` that runs for at least ``threshold_seconds``"""

    @event.listens_for(target, "before_cursor_execute")
    def start_timer(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("statement_started", []).append(time.perf_counter())

    @event.listens_for(target, "after_cursor_execute")
    def report_if_slow(conn, cursor, statement, parameters, context, executemany):
        elapsed = time.perf_counter() - conn.info["statement_started"].pop()
        if elapsed >= threshold_seconds:
            logger.warning(f"🐌 Slow query ({elapsed:.2f}s): {' '.join(statement.split())[:200]}")


try:
    engine = build_engine(DATABASE_URL)
except Exception as e:
    logger.error(f"❌ Failed to create database engine: {e}")
    raise

if DB_SLOW_QUERY_SECONDS > 0:
    log_slow_queries(engine, DB_SLOW_QUERY_SECONDS)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """One session per request, closed when the response is sent"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Session factory for lookups that run outside the request session"""
    return SessionLocal
