from fastapi import APIRouter

from thinkscope.auth import CurrentAuth
from thinkscope.schemas import Envelope
from thinkscope.users.schemas import UserResponse, UserUpdate
from thinkscope.users.service import UserService


router = APIRouter(prefix="/api/users", tags=["users"])


@router.patch("/me")
async def update_profile(data: UserUpdate, auth: CurrentAuth) -> Envelope[UserResponse]:
    """Edit the authenticated user's profile."""
    service = UserService(auth.session)
    user = await service.update_user(auth.user, data)
    return Envelope[UserResponse](data=UserResponse.model_validate(user))
