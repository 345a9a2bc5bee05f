"""Request/response bodies of the HTTP API."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from food_portal.models.order import Order
from food_portal.models.product import Product
from food_portal.models.user import PriceTier, User
from food_portal.services.cart import Cart
from food_portal.services.catalog import VariantInput


Price = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class ErrorResponse(BaseModel):
	error: str


# --- auth / users ---

class LoginRequest(BaseModel):
	username: str
	password: str


class UserOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	username: str
	category: PriceTier
	company_name: str
	address: str | None = None
	contact_number: str | None = None
	email: str | None = None
	is_admin: bool


class LoginResponse(BaseModel):
	token: str
	user: UserOut


class UserCreate(BaseModel):
	username: str = Field(min_length=1, max_length=128)
	password: str = Field(min_length=1, max_length=72)
	category: PriceTier
	company_name: str = Field(min_length=1, max_length=255)
	address: str | None = None
	contact_number: str | None = None
	email: str | None = None
	is_admin: bool = False


class UserUpdate(BaseModel):
	username: str | None = Field(default=None, min_length=1, max_length=128)
	password: str | None = Field(default=None, max_length=72)
	category: PriceTier | None = None
	company_name: str | None = None
	address: str | None = None
	contact_number: str | None = None
	email: str | None = None
	is_admin: bool | None = None


class IdResponse(BaseModel):
	id: str


# --- catalog ---

class CategoryIn(BaseModel):
	id: str | None = Field(default=None, max_length=64)
	name: str = Field(min_length=1, max_length=128)


class CategoryRename(BaseModel):
	name: str = Field(min_length=1, max_length=128)


class CategoryOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	name: str


class Prices(BaseModel):
	A: Price
	B: Price
	C: Price


class VariantIn(BaseModel):
	size: str = Field(min_length=1, max_length=128)
	prices: Prices

	def to_input(self) -> VariantInput:
		return VariantInput(self.size, self.prices.A, self.prices.B, self.prices.C)


class VariantOut(BaseModel):
	id: str
	size: str
	prices: Prices


class ProductIn(BaseModel):
	name: str = Field(min_length=1, max_length=255)
	category: str = Field(min_length=1, max_length=64)
	icon: str = ""
	variants: list[VariantIn] = Field(min_length=1)


class ProductOut(BaseModel):
	id: str
	name: str
	category: str
	icon: str
	variants: list[VariantOut]

	@classmethod
	def from_product(cls, product: Product) -> "ProductOut":
		return cls(
			id=product.id,
			name=product.name,
			category=product.category,
			icon=product.icon,
			variants=[
				VariantOut(id=v.id, size=v.size, prices=Prices(A=v.price_a, B=v.price_b, C=v.price_c))
				for v in product.variants
			],
		)


# --- cart / orders ---

class SetQuantityRequest(BaseModel):
	product_id: str
	variant_id: str
	quantity: int


class CartItemOut(BaseModel):
	product_id: str
	product_name: str
	variant_id: str
	size: str
	quantity: int
	price: Decimal
	total: Decimal


class CartOut(BaseModel):
	items: list[CartItemOut]
	item_count: int
	total: Decimal

	@classmethod
	def from_cart(cls, cart: Cart) -> "CartOut":
		return cls(
			items=[
				CartItemOut(
					product_id=i.product_id,
					product_name=i.product_name,
					variant_id=i.variant_id,
					size=i.size,
					quantity=i.quantity,
					price=i.price,
					total=i.line_total,
				)
				for i in cart
			],
			item_count=cart.item_count(),
			total=cart.total(),
		)


class OrderItemOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	product_id: str
	product_name: str
	variant_id: str
	size: str
	quantity: int
	price: Decimal
	line_total: Decimal


class OrderOut(BaseModel):
	id: str
	user_id: str
	status: str
	company_name: str
	address: str
	contact_number: str
	email: str | None
	category: PriceTier
	total: Decimal
	created_at: datetime
	items: list[OrderItemOut]

	@classmethod
	def from_order(cls, order: Order) -> "OrderOut":
		return cls(
			id=order.id,
			user_id=order.user_id,
			status=order.status,
			company_name=order.company_name,
			address=order.address,
			contact_number=order.contact_number,
			email=order.email,
			category=order.category,
			total=order.total,
			created_at=order.created_at,
			items=[OrderItemOut.model_validate(i) for i in order.items],
		)


def user_out(user: User) -> UserOut:
	return UserOut.model_validate(user)
