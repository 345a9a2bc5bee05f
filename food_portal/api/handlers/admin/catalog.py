from fastapi import APIRouter, Depends, Response

from food_portal.api.deps import admin_user, get_catalog
from food_portal.api.schemas import CategoryIn, CategoryOut, CategoryRename, IdResponse, ProductIn, ProductOut
from food_portal.services.catalog import CatalogService


router = APIRouter(tags=["admin"], dependencies=[Depends(admin_user)])


@router.post("/categories", status_code=201, response_model=IdResponse)
async def admin_category_create(body: CategoryIn, catalog: CatalogService = Depends(get_catalog)) -> IdResponse:
	category = await catalog.create_category(body.name, body.id)
	return IdResponse(id=category.id)


@router.put("/categories/{category_id}", response_model=CategoryOut)
async def admin_category_rename(
	category_id: str, body: CategoryRename, catalog: CatalogService = Depends(get_catalog)
) -> CategoryOut:
	return CategoryOut.model_validate(await catalog.rename_category(category_id, body.name))


@router.delete("/categories/{category_id}", status_code=204)
async def admin_category_delete(category_id: str, catalog: CatalogService = Depends(get_catalog)) -> Response:
	await catalog.delete_category(category_id)
	return Response(status_code=204)


@router.post("/products", status_code=201, response_model=IdResponse)
async def admin_product_create(body: ProductIn, catalog: CatalogService = Depends(get_catalog)) -> IdResponse:
	product = await catalog.create_product(body.name, body.category, body.icon, [v.to_input() for v in body.variants])
	return IdResponse(id=product.id)


@router.put("/products/{product_id}", response_model=ProductOut)
async def admin_product_update(
	product_id: str, body: ProductIn, catalog: CatalogService = Depends(get_catalog)
) -> ProductOut:
	product = await catalog.update_product(
		product_id, body.name, body.category, body.icon, [v.to_input() for v in body.variants]
	)
	return ProductOut.from_product(product)


@router.delete("/products/{product_id}", status_code=204)
async def admin_product_delete(product_id: str, catalog: CatalogService = Depends(get_catalog)) -> Response:
	await catalog.delete_product(product_id)
	return Response(status_code=204)
