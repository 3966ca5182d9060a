from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from witti.core.settings import settings

T = TypeVar("T")


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str):
    if _is_sqlite(url):
        # aiosqlite connections are bound to the loop that opened them.
        eng = create_async_engine(url, poolclass=NullPool)
        event.listen(eng.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return eng
    return create_async_engine(url, pool_pre_ping=True)


engine = build_engine(settings.database_url)
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with SessionLocal() as session:
        yield session


async def with_transaction(session: AsyncSession, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """Run ``work`` and commit, or roll back everything it wrote and re-raise.

    Works whether or not the session already has a transaction open (e.g. after
    the auth dependency loaded the current user).
    """
    try:
        result = await work(session)
        await session.commit()
    except BaseException:
        await session.rollback()
        raise
    return result
