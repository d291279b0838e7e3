# backend/database.py
from datetime import datetime, timezone

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings


def normalize_database_url(url: str) -> str:
    # Hosted Postgres providers still hand out postgres://, SQLAlchemy wants postgresql://
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def make_engine(url: str, **kwargs):
    url = normalize_database_url(url)
    if "sqlite" not in url:
        return create_engine(url, **kwargs)

    engine = create_engine(url, connect_args={"check_same_thread": False}, **kwargs)

    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT; take over
    # transaction control and turn foreign keys on. SQLite ignores FOR UPDATE,
    # so BEGIN IMMEDIATE takes the write lock at the start of each transaction.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


SQLALCHEMY_DATABASE_URL = normalize_database_url(settings.DATABASE_URL)

engine = make_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    # Models must be imported so their tables are registered on Base.metadata
    import models.users  # noqa: F401
    import models.project  # noqa: F401
    import models.achievement  # noqa: F401
    import models.comment  # noqa: F401
    import models.like  # noqa: F401
    import models.tool  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
