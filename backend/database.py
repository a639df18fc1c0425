from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.engine import Engine

from config.app_config import AppConfig


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections get foreign key enforcement and a busy timeout;
    in-memory SQLite is shared across threads with a single connection.
    """
    if url.startswith("sqlite"):
        from sqlalchemy.pool import StaticPool

        kwargs = {'connect_args': {'check_same_thread': False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs['poolclass'] = StaticPool
        new_engine = create_engine(url, echo=echo, **kwargs)

        @event.listens_for(new_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
            cursor.close()

        return new_engine

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections are alive before using
        pool_recycle=3600
    )


engine = build_engine(AppConfig.DATABASE_URL, echo=AppConfig.SQL_ECHO)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()

def get_db():
    """Dependency for FastAPI routes"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
