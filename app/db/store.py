from typing import Any, Awaitable, Callable, Optional, TypeVar

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from app.core.exceptions import DataStoreError
from app.core.retry import RetryPolicy
from app.db.session import getDB_session

T = TypeVar("T")


def _describe(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class DataStore:
    """
    Row-oriented access to the booking tables.

    Every call is committed on its own: nothing here spans several writes, so a
    workflow built from these calls has no atomicity across its steps. Each call
    is one unit for the injected retry policy.
    """

    def __init__(self, session: AsyncSession, retry_policy: Optional[RetryPolicy] = None):
        self.session = session
        self.retry_policy = retry_policy or RetryPolicy.no_retry()

    async def first(self, stmt: Executable) -> Any:
        async def op():
            result = await self.session.execute(stmt)
            return result.scalars().first()
        return await self._run(op)

    async def all(self, stmt: Executable) -> list:
        async def op():
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        return await self._run(op)

    async def rows(self, stmt: Executable) -> list:
        async def op():
            result = await self.session.execute(stmt)
            return list(result.mappings().all())
        return await self._run(op)

    async def insert(self, row: T) -> T:
        async def op():
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
            return row
        return await self._run(op)

    async def update(self, stmt: Executable) -> int:
        async def op():
            result = await self.session.execute(stmt)
            await self.session.commit()
            return result.rowcount
        return await self._run(op)

    async def _run(self, operation: Callable[[], Awaitable[T]]) -> T:
        async def attempt():
            try:
                return await operation()
            except SQLAlchemyError:
                await self.session.rollback()
                raise
        try:
            return await self.retry_policy.run(attempt)
        except SQLAlchemyError as e:
            raise DataStoreError(_describe(e)) from e


async def get_store(db: AsyncSession = Depends(getDB_session)) -> DataStore:
    return DataStore(db, RetryPolicy.from_settings())
