from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from food_portal.db.session import Base
from food_portal.models.user import PriceTier


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class Order(Base):
	__tablename__ = "orders"

	id: Mapped[str] = mapped_column(String(64), primary_key=True)
	user_id: Mapped[str] = mapped_column(String(64), index=True)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
	status: Mapped[str] = mapped_column(String(32), default="pending")
	# profile snapshot at submission time
	company_name: Mapped[str] = mapped_column(String(255))
	address: Mapped[str] = mapped_column(String(512), default="")
	contact_number: Mapped[str] = mapped_column(String(64), default="")
	email: Mapped[str | None] = mapped_column(String(255), nullable=True)
	category: Mapped[PriceTier] = mapped_column(Enum(PriceTier, native_enum=False, length=1))
	total: Mapped[Decimal] = mapped_column(Numeric(12, 2))

	items: Mapped[list["OrderItem"]] = relationship(
		back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id"
	)


class OrderItem(Base):
	__tablename__ = "order_items"

	id: Mapped[int] = mapped_column(primary_key=True)
	order_id: Mapped[str] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), index=True)
	# no foreign keys to the catalog: orders outlive deleted products
	product_id: Mapped[str] = mapped_column(String(64))
	product_name: Mapped[str] = mapped_column(String(255))
	variant_id: Mapped[str] = mapped_column(String(64))
	size: Mapped[str] = mapped_column(String(128))
	quantity: Mapped[int]
	price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
	line_total: Mapped[Decimal] = mapped_column(Numeric(12, 2))

	order: Mapped[Order] = relationship(back_populates="items")
