import asyncio
from decimal import Decimal

import httpx
import pytest
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from food_portal.api.app import create_app
from food_portal.core.config import Settings, settings
from food_portal.core.errors import NotifyError
from food_portal.core.security import issue_token
from food_portal.db.session import Base, create_sessionmaker
from food_portal.models.user import PriceTier
from food_portal.services.catalog import CatalogService, VariantInput
from food_portal.services.orders import OrderService
from food_portal.services.users import UserService


class RecordingNotifier:
	def __init__(self, fail: bool = False, delay: float = 0) -> None:
		self.fail = fail
		self.delay = delay
		self.sent: list[tuple[int | str, str, str]] = []

	async def send(self, recipient: int | str, subject: str, body: str) -> None:
		if self.delay:
			await asyncio.sleep(self.delay)
		if self.fail:
			raise NotifyError("relay unavailable")
		self.sent.append((recipient, subject, body))

	async def close(self) -> None:
		pass


def variant(size: str, a: str, b: str, c: str) -> VariantInput:
	return VariantInput(size, Decimal(a), Decimal(b), Decimal(c))


async def count_rows(session_factory, model, *criteria) -> int:
	stmt = select(func.count()).select_from(model)
	if criteria:
		stmt = stmt.where(*criteria)
	async with session_factory() as session:
		return await session.scalar(stmt)


async def drop_table(session_factory, name: str) -> None:
	async with session_factory() as session:
		async with session.begin():
			await session.execute(text(f"DROP TABLE {name}"))


def auth_headers(user) -> dict[str, str]:
	return {"Authorization": f"Bearer {issue_token(user.id, user.is_admin)}"}


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
	monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest.fixture
async def engine():
	engine = create_async_engine(
		"sqlite+aiosqlite:///:memory:",
		poolclass=StaticPool,
		connect_args={"check_same_thread": False},
	)
	async with engine.begin() as conn:
		await conn.run_sync(Base.metadata.create_all)
	yield engine
	await engine.dispose()


@pytest.fixture
def session_factory(engine):
	return create_sessionmaker(engine)


@pytest.fixture
def catalog(session_factory):
	return CatalogService(session_factory)


@pytest.fixture
def users(session_factory):
	return UserService(session_factory)


@pytest.fixture
def notifier():
	return RecordingNotifier()


@pytest.fixture
def orders(session_factory, notifier):
	return OrderService(session_factory, notifier=notifier, notify_chat_id=42, notify_timeout=1.0)


@pytest.fixture
async def drinks(catalog):
	return await catalog.create_category("Drinks", "drinks")


@pytest.fixture
async def cola(catalog, drinks):
	return await catalog.create_product(
		"Cola",
		"drinks",
		"https://cdn.example.com/cola.png",
		[variant("0.33l", "1.20", "1.10", "1.00"), variant("1.5l", "2.40", "2.20", "2.00")],
	)


@pytest.fixture
async def customer(users):
	return await users.create_user(
		username="bistro",
		password="secret-pass",
		category=PriceTier.B,
		company_name="Bistro <Central>",
		address="1 Market St",
		contact_number="+30 210 000 0000",
		email="orders@bistro.example",
	)


@pytest.fixture
async def admin(users):
	return await users.create_user(
		username="boss", password="admin-pass", category=PriceTier.A, company_name="Admin", is_admin=True
	)


@pytest.fixture
def app(session_factory, notifier):
	config = Settings(_env_file=None, notify_chat_id=42, notify_timeout=1.0)
	return create_app(session_factory, notifier=notifier, config=config)


@pytest.fixture
async def client(app):
	async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
		yield c
