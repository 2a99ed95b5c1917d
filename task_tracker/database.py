from contextlib import contextmanager

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel, create_engine

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task, User  # noqa: F401

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(url: str = DATABASE_URL):
    """Build an engine for ``url``.

    SQLite connections are shared across FastAPI's worker threads; an
    in-memory database keeps one connection so every session sees it.
    Postgres runs without pooling and with pre-ping.
    """
    if url in _IN_MEMORY_URLS:
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
    )


def make_session_factory(bind) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = create_db_engine()

SessionLocal = make_session_factory(engine)


def get_db():
    """Request-scoped session dependency; shared by every dependency of one request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_session():
    """Session for code running outside a request, such as ``add_user.py``."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_tables(bind=None):
    """Create any missing tables on ``bind`` (the app engine by default)."""
    SQLModel.metadata.create_all(bind=bind or engine)
