from fastapi import APIRouter, Depends

from food_portal.api.deps import current_cart, current_user, get_catalog
from food_portal.api.schemas import CartOut, SetQuantityRequest
from food_portal.models.user import User
from food_portal.services.cart import Cart
from food_portal.services.catalog import CatalogService


router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
async def cart_view(cart: Cart = Depends(current_cart)) -> CartOut:
	return CartOut.from_cart(cart)


@router.put("/items", response_model=CartOut)
async def cart_set_quantity(
	body: SetQuantityRequest,
	user: User = Depends(current_user),
	cart: Cart = Depends(current_cart),
	catalog: CatalogService = Depends(get_catalog),
) -> CartOut:
	if body.quantity < 0:
		return CartOut.from_cart(cart)
	if body.quantity == 0:
		# removing does not need the product to still exist
		cart.remove_item(body.product_id, body.variant_id)
		return CartOut.from_cart(cart)
	product, variant = await catalog.get_variant(body.product_id, body.variant_id)
	# price is fixed at the moment the line is set
	cart.set_quantity(
		product.id, product.name, variant.id, variant.size, variant.price_for(user.category), body.quantity
	)
	return CartOut.from_cart(cart)


@router.delete("/items/{product_id}/{variant_id}", response_model=CartOut)
async def cart_remove_item(product_id: str, variant_id: str, cart: Cart = Depends(current_cart)) -> CartOut:
	cart.remove_item(product_id, variant_id)
	return CartOut.from_cart(cart)


@router.delete("", response_model=CartOut)
async def cart_clear(cart: Cart = Depends(current_cart)) -> CartOut:
	cart.clear()
	return CartOut.from_cart(cart)
