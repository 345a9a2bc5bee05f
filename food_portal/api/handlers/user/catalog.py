from fastapi import APIRouter, Depends

from food_portal.api.deps import get_catalog
from food_portal.api.schemas import CategoryOut, ProductOut
from food_portal.services.catalog import CatalogService


router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=list[CategoryOut])
async def list_categories(catalog: CatalogService = Depends(get_catalog)) -> list[CategoryOut]:
	return [CategoryOut.model_validate(c) for c in await catalog.list_categories()]


@router.get("/products", response_model=list[ProductOut])
async def list_products(category: str | None = None, catalog: CatalogService = Depends(get_catalog)) -> list[ProductOut]:
	return [ProductOut.from_product(p) for p in await catalog.list_products(category)]


@router.get("/products/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, catalog: CatalogService = Depends(get_catalog)) -> ProductOut:
	return ProductOut.from_product(await catalog.get_product(product_id))
