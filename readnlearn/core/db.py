from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from contextlib import contextmanager
from typing import Optional

from readnlearn.config import DatabaseSettings, get_settings

# SQLAlchemy declarative base for models
Base = declarative_base()


def build_engine(db_settings: Optional[DatabaseSettings] = None) -> Engine:
    db_settings = db_settings or get_settings().database
    connect_args = {}
    if db_settings.url.startswith("sqlite"):
        # Sessions are handed to the event loop's worker threads
        connect_args["check_same_thread"] = False
    return create_engine(
        db_settings.url,
        echo=db_settings.echo,
        pool_pre_ping=db_settings.pool_pre_ping,
        connect_args=connect_args,
        future=True,
    )


engine = build_engine()
SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create missing tables."""
    from readnlearn.models import phrase  # noqa: F401  (registers the table)

    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def db_session(factory: Optional[sessionmaker] = None):
    session = (factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

