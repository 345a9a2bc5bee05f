"""In-memory cart: one per logged-in user, never persisted.

Prices are snapshotted when a line is set. Later catalog price changes do
not touch lines already in the cart.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

CENTS = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
	# str() first so floats keep their printed value instead of binary noise
	return Decimal(str(value)).quantize(CENTS)


@dataclass(frozen=True)
class CartItem:
	product_id: str
	product_name: str
	variant_id: str
	size: str
	quantity: int
	price: Decimal

	@property
	def line_total(self) -> Decimal:
		return (self.price * self.quantity).quantize(CENTS)


class Cart:
	def __init__(self) -> None:
		self._items: dict[tuple[str, str], CartItem] = {}

	def set_quantity(
		self,
		product_id: str,
		product_name: str,
		variant_id: str,
		size: str,
		unit_price: Decimal | int | float | str,
		quantity: int,
	) -> bool:
		"""Set the quantity of one (product, variant) line.

		Returns False and leaves the cart untouched for negative or
		non-integer quantities. Zero removes the line.
		"""
		if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
			return False
		key = (product_id, variant_id)
		# an edited line moves to the end
		self._items.pop(key, None)
		if quantity == 0:
			return True
		self._items[key] = CartItem(
			product_id=product_id,
			product_name=product_name,
			variant_id=variant_id,
			size=size,
			quantity=quantity,
			price=to_money(unit_price),
		)
		return True

	def remove_item(self, product_id: str, variant_id: str) -> None:
		self._items.pop((product_id, variant_id), None)

	def get(self, product_id: str, variant_id: str) -> CartItem | None:
		return self._items.get((product_id, variant_id))

	def items(self) -> list[CartItem]:
		return list(self._items.values())

	def total(self) -> Decimal:
		return sum((item.line_total for item in self._items.values()), Decimal("0")).quantize(CENTS)

	def item_count(self) -> int:
		return len(self._items)

	def clear(self) -> None:
		self._items.clear()

	@property
	def is_empty(self) -> bool:
		return not self._items

	def __len__(self) -> int:
		return len(self._items)

	def __iter__(self) -> Iterator[CartItem]:
		return iter(list(self._items.values()))


class CartRegistry:
	"""Owns the active cart of every user for the lifetime of the app."""

	def __init__(self) -> None:
		self._carts: dict[str, Cart] = {}

	def get(self, user_id: str) -> Cart:
		cart = self._carts.get(user_id)
		if cart is None:
			cart = Cart()
			self._carts[user_id] = cart
		return cart

	def discard(self, user_id: str) -> None:
		self._carts.pop(user_id, None)
