from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from food_portal.core.errors import AuthError, AuthorizationError, InvalidTokenError
from food_portal.core.security import decode_token
from food_portal.models.user import User
from food_portal.services.cart import Cart, CartRegistry
from food_portal.services.catalog import CatalogService
from food_portal.services.orders import OrderService
from food_portal.services.users import UserService


bearer = HTTPBearer(auto_error=False)


def get_users(request: Request) -> UserService:
	return request.app.state.users


def get_catalog(request: Request) -> CatalogService:
	return request.app.state.catalog


def get_orders(request: Request) -> OrderService:
	return request.app.state.orders


def get_carts(request: Request) -> CartRegistry:
	return request.app.state.carts


async def current_user(
	credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
	users: UserService = Depends(get_users),
) -> User:
	if credentials is None or not credentials.credentials:
		raise AuthError("No token provided")
	payload = decode_token(credentials.credentials)
	user = await users.get_user(payload["sub"])
	if user is None:
		# token outlived its user
		raise InvalidTokenError()
	return user


async def admin_user(user: User = Depends(current_user)) -> User:
	if not user.is_admin:
		raise AuthorizationError()
	return user


def current_cart(user: User = Depends(current_user), carts: CartRegistry = Depends(get_carts)) -> Cart:
	return carts.get(user.id)
