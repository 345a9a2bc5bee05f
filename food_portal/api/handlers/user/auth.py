from fastapi import APIRouter, Depends

from food_portal.api.deps import get_users
from food_portal.api.schemas import LoginRequest, LoginResponse, user_out
from food_portal.core.security import issue_token
from food_portal.services.users import UserService


router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, users: UserService = Depends(get_users)) -> LoginResponse:
	user = await users.authenticate(body.username, body.password)
	return LoginResponse(token=issue_token(user.id, user.is_admin), user=user_out(user))
