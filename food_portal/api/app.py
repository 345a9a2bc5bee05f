from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from food_portal.api.handlers.admin.catalog import router as admin_catalog_router
from food_portal.api.handlers.admin.users import router as admin_users_router
from food_portal.api.handlers.user.auth import router as auth_router
from food_portal.api.handlers.user.cart import router as cart_router
from food_portal.api.handlers.user.catalog import router as catalog_router
from food_portal.api.handlers.user.orders import router as orders_router
from food_portal.bot.notifier import Notifier
from food_portal.core.config import Settings, settings as default_settings
from food_portal.core.errors import PortalError
from food_portal.services.cart import CartRegistry
from food_portal.services.catalog import CatalogService
from food_portal.services.orders import OrderService
from food_portal.services.users import UserService


async def _portal_error(request: Request, exc: PortalError) -> JSONResponse:
	if exc.status_code >= 500:
		logger.error("{} {} failed: {}", request.method, request.url.path, exc.message)
	return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _request_invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
	first = exc.errors()[0] if exc.errors() else {}
	where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
	message = f"{where}: {first.get('msg', 'invalid')}" if where else first.get("msg", "Invalid input")
	return JSONResponse(status_code=400, content={"error": message})


def create_app(
	session_factory: async_sessionmaker[AsyncSession],
	notifier: Notifier | None = None,
	config: Settings | None = None,
) -> FastAPI:
	config = config or default_settings
	app = FastAPI(title="Food ordering portal")

	app.state.users = UserService(session_factory)
	app.state.catalog = CatalogService(session_factory)
	app.state.orders = OrderService(
		session_factory,
		notifier=notifier,
		notify_chat_id=config.notify_chat_id,
		notify_timeout=config.notify_timeout,
		currency_symbol=config.currency_symbol,
	)
	app.state.carts = CartRegistry()

	app.add_exception_handler(PortalError, _portal_error)
	app.add_exception_handler(RequestValidationError, _request_invalid)

	app.include_router(auth_router)
	app.include_router(catalog_router)
	app.include_router(admin_catalog_router)
	app.include_router(admin_users_router)
	app.include_router(cart_router)
	app.include_router(orders_router)
	return app
