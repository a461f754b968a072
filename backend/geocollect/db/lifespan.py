import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from sqlmodel import SQLModel

from geocollect.db.base import engine

# 匯入資料表模型，讓 SQLModel.metadata 知道 device_data 表
from geocollect.domains.device_data.models.device_record_model import DeviceRecord  # noqa: F401

logger = logging.getLogger(__name__)


async def create_db_and_tables():
    """Creates database tables if they don't exist."""
    async with engine.begin() as conn:
        logger.info("Creating database tables...")
        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables created (if they didn't exist).")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Context manager for FastAPI startup and shutdown logic."""
    logger.info("Application startup sequence initiated...")

    try:
        await create_db_and_tables()
    except Exception as e:
        logger.error(f"Error during database initialization: {e}", exc_info=True)
        raise

    logger.info("Application startup complete.")

    yield

    logger.info("Disposing database engine...")
    await engine.dispose()
    logger.info("Application shutdown complete.")
