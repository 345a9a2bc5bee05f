from fastapi import APIRouter, Depends

from food_portal.api.deps import current_cart, current_user, get_orders
from food_portal.api.schemas import IdResponse, OrderOut
from food_portal.core.errors import NotFoundError
from food_portal.models.user import User
from food_portal.services.cart import Cart
from food_portal.services.orders import OrderService


router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201, response_model=IdResponse)
async def order_submit(
	user: User = Depends(current_user),
	cart: Cart = Depends(current_cart),
	orders: OrderService = Depends(get_orders),
) -> IdResponse:
	order_id = await orders.submit(cart, user)
	return IdResponse(id=order_id)


@router.get("", response_model=list[OrderOut])
async def order_list(user: User = Depends(current_user), orders: OrderService = Depends(get_orders)) -> list[OrderOut]:
	found = await orders.list_orders(None if user.is_admin else user.id)
	return [OrderOut.from_order(o) for o in found]


@router.get("/{order_id}", response_model=OrderOut)
async def order_get(
	order_id: str, user: User = Depends(current_user), orders: OrderService = Depends(get_orders)
) -> OrderOut:
	order = await orders.get_order(order_id)
	if not user.is_admin and order.user_id != user.id:
		# other users' orders are invisible rather than forbidden
		raise NotFoundError("Order not found")
	return OrderOut.from_order(order)
