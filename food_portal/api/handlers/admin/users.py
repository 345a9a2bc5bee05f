from fastapi import APIRouter, Depends, Response

from food_portal.api.deps import admin_user, get_carts, get_users
from food_portal.api.schemas import IdResponse, UserCreate, UserOut, UserUpdate, user_out
from food_portal.services.cart import CartRegistry
from food_portal.services.users import UserService


router = APIRouter(prefix="/users", tags=["admin"], dependencies=[Depends(admin_user)])


@router.get("", response_model=list[UserOut])
async def admin_user_list(users: UserService = Depends(get_users)) -> list[UserOut]:
	return [user_out(u) for u in await users.list_users()]


@router.post("", status_code=201, response_model=IdResponse)
async def admin_user_create(body: UserCreate, users: UserService = Depends(get_users)) -> IdResponse:
	user = await users.create_user(**body.model_dump())
	return IdResponse(id=user.id)


@router.put("/{user_id}", response_model=UserOut)
async def admin_user_update(user_id: str, body: UserUpdate, users: UserService = Depends(get_users)) -> UserOut:
	user = await users.update_user(user_id, **body.model_dump(exclude_unset=True))
	return user_out(user)


@router.delete("/{user_id}", status_code=204)
async def admin_user_delete(
	user_id: str, users: UserService = Depends(get_users), carts: CartRegistry = Depends(get_carts)
) -> Response:
	await users.delete_user(user_id)
	carts.discard(user_id)
	return Response(status_code=204)
