import asyncio
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from food_portal.bot.notifier import Notifier, format_order_message
from food_portal.core.errors import NotFoundError, OrderSubmissionFailed, StorageError, ValidationError
from food_portal.models.order import Order, OrderItem
from food_portal.models.user import User
from food_portal.services.cart import CENTS, Cart


class OrderService:
	def __init__(
		self,
		session_factory: async_sessionmaker[AsyncSession],
		notifier: Notifier | None = None,
		notify_chat_id: int | str | None = None,
		notify_timeout: float = 10.0,
		currency_symbol: str = "€",
	) -> None:
		self._session = session_factory
		self._notifier = notifier
		self._notify_chat_id = notify_chat_id
		self._notify_timeout = notify_timeout
		self._currency = currency_symbol

	async def submit(self, cart: Cart, principal: User) -> str:
		"""Persist the cart as a pending order, notify, then drop the ordered lines.

		The cart is left untouched when persistence fails so the caller can
		retry. Notification problems never fail the order.
		"""
		lines = cart.items()
		if not lines:
			raise ValidationError("empty cart")

		items = [
			OrderItem(
				product_id=line.product_id,
				product_name=line.product_name,
				variant_id=line.variant_id,
				size=line.size,
				quantity=line.quantity,
				price=line.price,
				line_total=(line.price * line.quantity).quantize(CENTS),
			)
			for line in lines
		]
		total = sum((item.line_total for item in items), Decimal("0")).quantize(CENTS)
		order = Order(
			id=uuid.uuid4().hex,
			user_id=principal.id,
			created_at=datetime.now(timezone.utc),
			status="pending",
			company_name=principal.company_name,
			address=principal.address or "",
			contact_number=principal.contact_number or "",
			email=principal.email,
			category=principal.category,
			total=total,
			items=items,
		)
		try:
			async with self._session() as session:
				async with session.begin():
					session.add(order)
		except SQLAlchemyError as exc:
			logger.exception("Failed to persist order for user {}", principal.id)
			raise OrderSubmissionFailed() from exc
		logger.info("Order placed: {} by {} ({} lines, total {})", order.id, principal.username, len(items), total)

		await self._notify(order)
		# lines set while the order was in flight stay for the next order
		for line in lines:
			if cart.get(line.product_id, line.variant_id) == line:
				cart.remove_item(line.product_id, line.variant_id)
		return order.id

	async def _notify(self, order: Order) -> None:
		if self._notifier is None or self._notify_chat_id is None:
			return
		subject, body = format_order_message(order, self._currency)
		try:
			await asyncio.wait_for(
				self._notifier.send(self._notify_chat_id, subject, body), timeout=self._notify_timeout
			)
		except asyncio.TimeoutError:
			logger.warning("Order {} notification timed out", order.id)
		except Exception as exc:
			logger.warning("Order {} notification failed: {}", order.id, exc)

	async def list_orders(self, user_id: str | None = None) -> list[Order]:
		stmt = select(Order).options(selectinload(Order.items)).order_by(Order.created_at.desc())
		if user_id is not None:
			stmt = stmt.where(Order.user_id == user_id)
		try:
			async with self._session() as session:
				result = await session.execute(stmt)
				return list(result.scalars().all())
		except SQLAlchemyError as exc:
			logger.exception("Failed to list orders")
			raise StorageError() from exc

	async def get_order(self, order_id: str) -> Order:
		try:
			async with self._session() as session:
				result = await session.execute(
					select(Order).options(selectinload(Order.items)).where(Order.id == order_id)
				)
				order = result.scalars().first()
		except SQLAlchemyError as exc:
			logger.exception("Failed to load order {}", order_id)
			raise StorageError() from exc
		if order is None:
			raise NotFoundError("Order not found")
		return order
