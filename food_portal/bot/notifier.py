from html import escape
from typing import Protocol

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError

from food_portal.core.errors import NotifyError
from food_portal.models.order import Order


class Notifier(Protocol):
	async def send(self, recipient: int | str, subject: str, body: str) -> None: ...

	async def close(self) -> None: ...


class TelegramNotifier:
	"""Delivers order summaries to a Telegram chat."""

	def __init__(self, bot: Bot) -> None:
		self._bot = bot

	@classmethod
	def from_token(cls, token: str) -> "TelegramNotifier":
		return cls(Bot(token=token, default=DefaultBotProperties(parse_mode=ParseMode.HTML)))

	async def send(self, recipient: int | str, subject: str, body: str) -> None:
		text = f"<b>{escape(subject)}</b>\n\n{body}"
		try:
			await self._bot.send_message(recipient, text)
		except TelegramAPIError as exc:
			raise NotifyError(str(exc)) from exc

	async def close(self) -> None:
		await self._bot.session.close()


def format_order_message(order: Order, currency: str = "€") -> tuple[str, str]:
	"""Build (subject, HTML body) for a freshly placed order."""
	subject = f"New order #{order.id}"
	lines: list[str] = [
		f"Order ID: <code>{escape(order.id)}</code>",
		"",
		"<b>Company details</b>",
		f"Company name: {escape(order.company_name)}",
		f"Address: {escape(order.address or 'N/A')}",
		f"Contact number: {escape(order.contact_number or 'N/A')}",
		f"Email: {escape(order.email or 'N/A')}",
		f"Category: {order.category.value}",
		"",
		"<b>Order summary</b>",
	]
	for item in order.items:
		lines.append(
			f"{escape(item.product_name)} ({escape(item.size)}) - Quantity: {item.quantity}"
			f" - Price: {currency}{item.line_total:.2f}"
		)
	lines.append("")
	lines.append(f"<b>Total: {currency}{order.total:.2f}</b>")
	return subject, "\n".join(lines)
