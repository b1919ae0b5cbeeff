from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import getDB_session


router = APIRouter()


@router.get("/health", summary="Basic health check endpoint")
async def health_check():
    return {"status": "ok"}


@router.get("/health/db", summary="Checks that the database answers a trivial query")
async def db_health_check(db: AsyncSession = Depends(getDB_session)):
    await db.execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}
