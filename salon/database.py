import logging
import time

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import (
    DATABASE_URL,
    DB_LOG_SLOW_QUERIES,
    DB_MAX_OVERFLOW,
    DB_POOL_RECYCLE,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
    DB_SLOW_QUERY_THRESHOLD,
)

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Pool settings for the configured backend"""
    if url.startswith("sqlite"):
        # SQLite connections are shared across FastAPI worker threads
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            return options
    else:
        options = {"pool_pre_ping": True}  # Test connections before using

    options.update(
        pool_size=DB_POOL_SIZE,
        max_overflow=DB_MAX_OVERFLOW,
        pool_timeout=DB_POOL_TIMEOUT,  # Wait at most this long for a free connection
        pool_recycle=DB_POOL_RECYCLE,
    )
    return options


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection"""

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def enable_sqlite_immediate_transactions(target: Engine) -> None:
    """
    Open every transaction with BEGIN IMMEDIATE.

    SQLite does not render FOR UPDATE, and pysqlite defers BEGIN until the
    first write, so two bookings could both pass the conflict scan before
    either inserts. Taking the write lock at BEGIN makes the second one wait
    until the first commits.
    """

    @event.listens_for(target, "connect")
    def _disable_pysqlite_begin(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(target, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def enable_slow_query_logging(target: Engine, threshold: float = DB_SLOW_QUERY_THRESHOLD) -> None:
    @event.listens_for(target, "before_cursor_execute")
    def before_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
        conn.info.setdefault("query_start_time", []).append(time.time())

    @event.listens_for(target, "after_cursor_execute")
    def after_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
        total = time.time() - conn.info["query_start_time"].pop(-1)
        if total > threshold:
            logger.warning(f"🐌 Slow query ({total:.2f}s): {statement[:200]}...")


try:
    engine = create_engine(DATABASE_URL, echo=False, **_engine_options(DATABASE_URL))
    logger.info("✅ Database engine created successfully")
    logger.info(
        f"📊 Connection pool: size={DB_POOL_SIZE}, max_overflow={DB_MAX_OVERFLOW}, timeout={DB_POOL_TIMEOUT}s"
    )
except Exception as e:
    logger.error(f"❌ Failed to create database engine: {e}")
    raise

if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)
    enable_sqlite_immediate_transactions(engine)

if DB_LOG_SLOW_QUERIES:
    enable_slow_query_logging(engine)
    logger.info(f"📊 Slow query logging enabled (threshold: {DB_SLOW_QUERY_THRESHOLD}s)")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dispose_engine() -> None:
    """Close every pooled connection; called once on process shutdown"""
    engine.dispose()
    logger.info("Database connection pool closed")
