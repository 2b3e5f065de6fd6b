"""Engine and session factory for the configured database"""

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import IN_MEMORY_DATABASE_URL, Settings
from src.db.schema import Base


def build_engine(settings: Settings) -> Engine:
    """An in-memory SQLite database only lives as long as its single connection, so share that one."""
    if settings.database_url == IN_MEMORY_DATABASE_URL:
        return create_engine(
            settings.database_url,
            echo=settings.echo_sql,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(settings.database_url, echo=settings.echo_sql)


def build_session_factory(settings: Settings) -> sessionmaker[Session]:
    engine = build_engine(settings)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)
