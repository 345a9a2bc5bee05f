import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column
from food_portal.db.session import Base


class PriceTier(str, enum.Enum):
	A = "A"
	B = "B"
	C = "C"


class User(Base):
	__tablename__ = "users"

	id: Mapped[str] = mapped_column(String(64), primary_key=True)
	username: Mapped[str] = mapped_column(String(128), unique=True)
	password_hash: Mapped[str] = mapped_column(String(128))
	# price tier; named "category" in the wholesale price lists
	category: Mapped[PriceTier] = mapped_column(Enum(PriceTier, native_enum=False, length=1))
	company_name: Mapped[str] = mapped_column(String(255))
	address: Mapped[str | None] = mapped_column(String(512), nullable=True)
	contact_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
	email: Mapped[str | None] = mapped_column(String(255), nullable=True)
	is_admin: Mapped[bool] = mapped_column(default=False)
