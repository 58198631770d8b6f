"""Async SQLAlchemy database setup."""

from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from herbtrace.config import DATABASE_PATH


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_database_url(database_path: str | Path = DATABASE_PATH) -> str:
    """Get the SQLite database URL, ensuring the data directory exists."""
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{db_path.resolve()}"


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by the service components."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = create_async_engine(
    get_database_url(),
    echo=False,
)

async_session = build_session_factory(engine)


async def create_tables(target: AsyncEngine = engine) -> None:
    """Create all tables registered on Base.metadata."""
    # Model modules register their tables on import
    import herbtrace.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(target: AsyncEngine = engine) -> None:
    """Drop all tables registered on Base.metadata."""
    import herbtrace.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
