from collections.abc import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from perks.config import settings

# Predictable constraint names so alembic migrations can refer to them.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for the perk store.

    ``Perk`` is registered on ``Base.metadata``, which alembic autogenerate and
    the test fixtures (``create_all``) both read. The naming convention yields
    ``uq_perks_title`` and ``ck_perks_*`` names that the migration uses.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=settings.db_pool_recycle,
    pool_pre_ping=settings.db_pool_pre_ping,
    echo=settings.db_echo,
    connect_args={"command_timeout": settings.db_statement_timeout},
)

# expire_on_commit=False: perks returned by a handler stay readable after the
# dependency commits, without a lazy reload outside the event loop.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield the session one perk request runs in.

    Commits when the handler returns and rolls back on any exception. That
    includes ``DuplicateKeyError`` and ``NotFoundError`` from the perk service,
    so a rejected create or title update leaves nothing behind. The perk
    repository only flushes, so this is the single transaction boundary.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def shutdown() -> None:
    """Dispose of pooled connections; called from the app lifespan."""
    await engine.dispose()
