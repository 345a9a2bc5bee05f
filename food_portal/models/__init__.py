from .user import PriceTier, User
from .product import Category, Product, Variant
from .order import Order, OrderItem

__all__ = [
	"PriceTier",
	"User",
	"Category",
	"Product",
	"Variant",
	"Order",
	"OrderItem",
]
