import uuid
from dataclasses import dataclass
from decimal import Decimal

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from food_portal.core.errors import NotFoundError, StorageError, ValidationError
from food_portal.models.product import Category, Product, Variant
from food_portal.services.cart import to_money


DEFAULT_CATEGORIES = [
	("drinks", "Drinks"),
	("main-dishes", "Main Dishes"),
	("desserts", "Desserts"),
	("appetizers", "Appetizers"),
	("sides", "Sides"),
]


@dataclass(frozen=True)
class VariantInput:
	size: str
	price_a: Decimal
	price_b: Decimal
	price_c: Decimal


def _new_id() -> str:
	return uuid.uuid4().hex


def _clean_variants(variants: list[VariantInput]) -> list[VariantInput]:
	if not variants:
		raise ValidationError("At least one variant is required")
	cleaned: list[VariantInput] = []
	for v in variants:
		size = (v.size or "").strip()
		if not size:
			raise ValidationError("Variant size is required")
		prices = []
		for raw in (v.price_a, v.price_b, v.price_c):
			if raw is None:
				raise ValidationError("All three variant prices are required")
			price = to_money(raw)
			if price < 0:
				raise ValidationError("Variant prices must not be negative")
			prices.append(price)
		cleaned.append(VariantInput(size, *prices))
	return cleaned


def _build_variants(variants: list[VariantInput]) -> list[Variant]:
	return [
		Variant(id=_new_id(), position=i, size=v.size, price_a=v.price_a, price_b=v.price_b, price_c=v.price_c)
		for i, v in enumerate(variants)
	]


class CatalogService:
	def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
		self._session = session_factory

	# --- reads ---

	async def list_categories(self) -> list[Category]:
		try:
			async with self._session() as session:
				result = await session.execute(select(Category).order_by(Category.name))
				return list(result.scalars().all())
		except SQLAlchemyError as exc:
			logger.exception("Failed to list categories")
			raise StorageError() from exc

	async def list_products(self, category_id: str | None = None) -> list[Product]:
		stmt = select(Product).options(selectinload(Product.variants)).order_by(Product.name)
		if category_id:
			stmt = stmt.where(Product.category == category_id)
		try:
			async with self._session() as session:
				result = await session.execute(stmt)
				return list(result.scalars().all())
		except SQLAlchemyError as exc:
			logger.exception("Failed to list products")
			raise StorageError() from exc

	async def get_product(self, product_id: str) -> Product:
		try:
			async with self._session() as session:
				product = await self._load_product(session, product_id)
		except SQLAlchemyError as exc:
			logger.exception("Failed to load product {}", product_id)
			raise StorageError() from exc
		if product is None:
			raise NotFoundError("Product not found")
		return product

	async def get_variant(self, product_id: str, variant_id: str) -> tuple[Product, Variant]:
		product = await self.get_product(product_id)
		for variant in product.variants:
			if variant.id == variant_id:
				return product, variant
		raise NotFoundError("Variant not found")

	async def _load_product(self, session: AsyncSession, product_id: str) -> Product | None:
		result = await session.execute(
			select(Product).options(selectinload(Product.variants)).where(Product.id == product_id)
		)
		return result.scalars().first()

	async def _require_category(self, session: AsyncSession, category_id: str) -> None:
		if await session.get(Category, category_id) is None:
			raise ValidationError(f"Unknown category: {category_id}")

	# --- categories ---

	async def create_category(self, name: str, category_id: str | None = None) -> Category:
		name = (name or "").strip()
		if not name:
			raise ValidationError("Category name is required")
		category = Category(id=(category_id or "").strip() or _new_id(), name=name)
		try:
			async with self._session() as session:
				async with session.begin():
					if await session.get(Category, category.id) is not None:
						raise ValidationError("Category already exists")
					session.add(category)
		except SQLAlchemyError as exc:
			logger.exception("Failed to create category {}", category.id)
			raise StorageError() from exc
		logger.info("Category created: {} ({})", category.id, category.name)
		return category

	async def rename_category(self, category_id: str, name: str) -> Category:
		name = (name or "").strip()
		if not name:
			raise ValidationError("Category name is required")
		try:
			async with self._session() as session:
				async with session.begin():
					category = await session.get(Category, category_id)
					if category is None:
						raise NotFoundError("Category not found")
					category.name = name
		except SQLAlchemyError as exc:
			logger.exception("Failed to rename category {}", category_id)
			raise StorageError() from exc
		return category

	async def delete_category(self, category_id: str) -> None:
		"""Delete a category together with its products and their variants."""
		try:
			async with self._session() as session:
				async with session.begin():
					if await session.get(Category, category_id) is None:
						raise NotFoundError("Category not found")
					product_ids = select(Product.id).where(Product.category == category_id)
					await session.execute(delete(Variant).where(Variant.product_id.in_(product_ids)))
					await session.execute(delete(Product).where(Product.category == category_id))
					await session.execute(delete(Category).where(Category.id == category_id))
		except SQLAlchemyError as exc:
			logger.exception("Failed to delete category {}", category_id)
			raise StorageError() from exc
		logger.info("Category deleted: {}", category_id)

	# --- products ---

	async def create_product(
		self, name: str, category_id: str, icon: str | None, variants: list[VariantInput]
	) -> Product:
		name = (name or "").strip()
		category_id = (category_id or "").strip()
		if not name:
			raise ValidationError("Product name is required")
		if not category_id:
			raise ValidationError("Product category is required")
		cleaned = _clean_variants(variants)
		product = Product(id=_new_id(), name=name, category=category_id, icon=icon or "")
		try:
			async with self._session() as session:
				async with session.begin():
					await self._require_category(session, category_id)
					product.variants = _build_variants(cleaned)
					session.add(product)
		except SQLAlchemyError as exc:
			logger.exception("Failed to create product {}", name)
			raise StorageError("Failed to create product") from exc
		logger.info("Product created: {} with {} variants", product.id, len(cleaned))
		return product

	async def update_product(
		self, product_id: str, name: str, category_id: str, icon: str | None, variants: list[VariantInput]
	) -> Product:
		"""Overwrite a product; its variant set is replaced as a whole."""
		name = (name or "").strip()
		category_id = (category_id or "").strip()
		if not name:
			raise ValidationError("Product name is required")
		if not category_id:
			raise ValidationError("Product category is required")
		cleaned = _clean_variants(variants)
		try:
			async with self._session() as session:
				async with session.begin():
					product = await self._load_product(session, product_id)
					if product is None:
						raise NotFoundError("Product not found")
					await self._require_category(session, category_id)
					product.name = name
					product.category = category_id
					product.icon = icon or ""
					product.variants = _build_variants(cleaned)
		except SQLAlchemyError as exc:
			logger.exception("Failed to update product {}", product_id)
			raise StorageError("Failed to update product") from exc
		logger.info("Product updated: {}", product_id)
		return product

	async def delete_product(self, product_id: str) -> None:
		try:
			async with self._session() as session:
				async with session.begin():
					if await session.get(Product, product_id) is None:
						raise NotFoundError("Product not found")
					await session.execute(delete(Variant).where(Variant.product_id == product_id))
					await session.execute(delete(Product).where(Product.id == product_id))
		except SQLAlchemyError as exc:
			logger.exception("Failed to delete product {}", product_id)
			raise StorageError() from exc
		logger.info("Product deleted: {}", product_id)

	async def seed_categories(self) -> None:
		async with self._session() as session:
			async with session.begin():
				for category_id, name in DEFAULT_CATEGORIES:
					if await session.get(Category, category_id) is None:
						session.add(Category(id=category_id, name=name))
