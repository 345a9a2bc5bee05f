from decimal import Decimal

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from food_portal.db.session import Base
from food_portal.models.user import PriceTier


class Category(Base):
	__tablename__ = "categories"

	id: Mapped[str] = mapped_column(String(64), primary_key=True)
	name: Mapped[str] = mapped_column(String(128))

	# Relationships
	products: Mapped[list["Product"]] = relationship("Product", back_populates="category_ref")


class Product(Base):
	__tablename__ = "products"

	id: Mapped[str] = mapped_column(String(64), primary_key=True)
	name: Mapped[str] = mapped_column(String(255))
	category: Mapped[str] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"), index=True)
	icon: Mapped[str] = mapped_column(String(1024), default="")

	# Relationships
	variants: Mapped[list["Variant"]] = relationship(
		"Variant", back_populates="product", cascade="all, delete-orphan", order_by="Variant.position"
	)
	category_ref: Mapped["Category"] = relationship("Category", back_populates="products")


class Variant(Base):
	__tablename__ = "variants"

	id: Mapped[str] = mapped_column(String(64), primary_key=True)
	product_id: Mapped[str] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)
	position: Mapped[int] = mapped_column(default=0)
	size: Mapped[str] = mapped_column(String(128))
	price_a: Mapped[Decimal] = mapped_column(Numeric(10, 2))
	price_b: Mapped[Decimal] = mapped_column(Numeric(10, 2))
	price_c: Mapped[Decimal] = mapped_column(Numeric(10, 2))

	product: Mapped[Product] = relationship(back_populates="variants")

	def price_for(self, tier: PriceTier | str) -> Decimal:
		tier = PriceTier(tier)
		if tier is PriceTier.A:
			return self.price_a
		if tier is PriceTier.B:
			return self.price_b
		return self.price_c
