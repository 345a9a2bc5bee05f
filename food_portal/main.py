import asyncio
import sys

import uvicorn
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine

from food_portal.api.app import create_app
from food_portal.bot.notifier import TelegramNotifier
from food_portal.core.config import settings
from food_portal.db.session import Base, SessionLocal, engine
from food_portal.services.catalog import CatalogService
from food_portal.services.users import UserService


def setup_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)


async def main() -> None:
    setup_logging()
    # ensure DB is up and metadata loaded; create tables if not exist
    async def _init_db(db_engine: AsyncEngine) -> None:
        async with db_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    await _init_db(engine)
    await UserService(SessionLocal).seed_admin()
    await CatalogService(SessionLocal).seed_categories()

    notifier = TelegramNotifier.from_token(settings.bot_token) if settings.bot_token else None
    if notifier is None or settings.notify_chat_id is None:
        logger.warning("Order notifications disabled: bot_token or notify_chat_id not set")

    app = create_app(SessionLocal, notifier=notifier)
    server = uvicorn.Server(uvicorn.Config(app, host=settings.webapp_host, port=settings.webapp_port))
    logger.info("Portal started on {}:{}", settings.webapp_host, settings.webapp_port)
    try:
        await server.serve()
    finally:
        if notifier is not None:
            await notifier.close()
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
