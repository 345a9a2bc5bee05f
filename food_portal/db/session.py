from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from food_portal.core.config import settings


class Base(DeclarativeBase):
	pass


def create_engine(url: str | None = None) -> AsyncEngine:
	return create_async_engine(url or settings.database_url, echo=False, pool_pre_ping=True)


def create_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
	return async_sessionmaker(bind=bind, expire_on_commit=False)


engine: AsyncEngine = create_engine()
SessionLocal: async_sessionmaker[AsyncSession] = create_sessionmaker(engine)
