import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from food_portal.core.config import settings
from food_portal.core.errors import AuthError, NotFoundError, StorageError, ValidationError
from food_portal.core.security import hash_password, verify_password
from food_portal.models.user import PriceTier, User


_UNSET = object()


class UserService:
	"""Stored users are the single authority for price tier and admin flag."""

	def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
		self._session = session_factory

	async def authenticate(self, username: str, password: str) -> User:
		try:
			async with self._session() as session:
				result = await session.execute(select(User).where(User.username == (username or "").strip()))
				user = result.scalars().first()
		except SQLAlchemyError as exc:
			logger.exception("Failed to look up user {!r}", username)
			raise StorageError() from exc
		# same error for unknown user and wrong password
		if user is None or not verify_password(password or "", user.password_hash):
			logger.info("Login failed for {!r}", username)
			raise AuthError("Invalid credentials")
		logger.info("Login: {}", user.username)
		return user

	async def get_user(self, user_id: str) -> User | None:
		try:
			async with self._session() as session:
				return await session.get(User, user_id)
		except SQLAlchemyError as exc:
			logger.exception("Failed to load user {}", user_id)
			raise StorageError() from exc

	async def list_users(self) -> list[User]:
		try:
			async with self._session() as session:
				result = await session.execute(select(User).order_by(User.username))
				return list(result.scalars().all())
		except SQLAlchemyError as exc:
			logger.exception("Failed to list users")
			raise StorageError() from exc

	async def create_user(
		self,
		username: str,
		password: str,
		category: PriceTier | str,
		company_name: str,
		address: str | None = None,
		contact_number: str | None = None,
		email: str | None = None,
		is_admin: bool = False,
	) -> User:
		username = (username or "").strip()
		company_name = (company_name or "").strip()
		if not username or not password:
			raise ValidationError("Username and password are required")
		if not company_name:
			raise ValidationError("Company name is required")
		user = User(
			id=uuid.uuid4().hex,
			username=username,
			password_hash=hash_password(password),
			category=_tier(category),
			company_name=company_name,
			address=address,
			contact_number=contact_number,
			email=email,
			is_admin=is_admin,
		)
		try:
			async with self._session() as session:
				async with session.begin():
					existing = await session.execute(select(User.id).where(User.username == username))
					if existing.scalars().first() is not None:
						raise ValidationError("Username already exists")
					session.add(user)
		except IntegrityError as exc:
			raise ValidationError("Username already exists") from exc
		except SQLAlchemyError as exc:
			logger.exception("Failed to create user {}", username)
			raise StorageError() from exc
		logger.info("User created: {} (tier {})", user.username, user.category.value)
		return user

	async def update_user(
		self,
		user_id: str,
		*,
		username: str | None = None,
		password: str | None = None,
		category: PriceTier | str | None = None,
		company_name: str | None = None,
		address=_UNSET,
		contact_number=_UNSET,
		email=_UNSET,
		is_admin: bool | None = None,
	) -> User:
		try:
			async with self._session() as session:
				async with session.begin():
					user = await session.get(User, user_id)
					if user is None:
						raise NotFoundError("User not found")
					if username is not None and username.strip() != user.username:
						username = username.strip()
						if not username:
							raise ValidationError("Username is required")
						clash = await session.execute(select(User.id).where(User.username == username))
						if clash.scalars().first() is not None:
							raise ValidationError("Username already exists")
						user.username = username
					if password:
						user.password_hash = hash_password(password)
					if category is not None:
						user.category = _tier(category)
					if company_name is not None:
						if not company_name.strip():
							raise ValidationError("Company name is required")
						user.company_name = company_name.strip()
					if address is not _UNSET:
						user.address = address
					if contact_number is not _UNSET:
						user.contact_number = contact_number
					if email is not _UNSET:
						user.email = email
					if is_admin is not None:
						user.is_admin = is_admin
		except SQLAlchemyError as exc:
			logger.exception("Failed to update user {}", user_id)
			raise StorageError() from exc
		return user

	async def delete_user(self, user_id: str) -> None:
		try:
			async with self._session() as session:
				async with session.begin():
					user = await session.get(User, user_id)
					if user is None:
						raise NotFoundError("User not found")
					await session.delete(user)
		except SQLAlchemyError as exc:
			logger.exception("Failed to delete user {}", user_id)
			raise StorageError() from exc
		logger.info("User deleted: {}", user_id)

	async def seed_admin(self) -> None:
		async with self._session() as session:
			result = await session.execute(select(User.id).where(User.username == settings.admin_username))
			if result.scalars().first() is not None:
				return
		await self.create_user(
			username=settings.admin_username,
			password=settings.admin_password,
			category=PriceTier.A,
			company_name="Admin",
			is_admin=True,
		)


def _tier(value: PriceTier | str) -> PriceTier:
	try:
		return PriceTier(value)
	except ValueError as exc:
		raise ValidationError("Price category must be one of A, B, C") from exc
