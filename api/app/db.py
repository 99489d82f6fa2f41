from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from api.app.config import settings

engine = create_async_engine(settings.database_url, future=True)

SessionLocal = async_sessionmaker(bind=engine)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session
