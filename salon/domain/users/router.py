"""User router - Profile and account administration endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import Actor, Capability, get_current_user, require_capability
from ...database import get_db
from ...models import User
from .schemas import AdminUserUpdate, ManicuristResponse, ProfileUpdate, UserResponse
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


def to_response(u: User) -> UserResponse:
    return UserResponse(
        user_id=u.id,
        role_id=u.role_id,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
        phone_number=u.phone_number,
        created_at=u.created_at,
    )


# ============================================================================
# PROFILE
# ============================================================================


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    actor: Actor = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return to_response(service.get_user(actor.user_id))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    actor: Actor = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return to_response(service.update_profile(actor, data))


@router.get("/manicurists", response_model=list[ManicuristResponse])
async def get_manicurists(
    actor: Actor = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Manicurists a client can book with"""
    return [
        ManicuristResponse(
            user_id=m.id, first_name=m.first_name, last_name=m.last_name, phone_number=m.phone_number
        )
        for m in service.get_manicurists()
    ]


# ============================================================================
# ADMINISTRATION
# ============================================================================


@router.get("/all", response_model=list[UserResponse])
async def get_all_users(
    role_id: Optional[int] = Query(None),
    actor: Actor = Depends(require_capability(Capability.MANAGE_USERS)),
    service: UserService = Depends(get_user_service),
):
    return [to_response(u) for u in service.get_users(role_id)]


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: AdminUserUpdate,
    actor: Actor = Depends(require_capability(Capability.MANAGE_USERS)),
    service: UserService = Depends(get_user_service),
):
    return to_response(service.update_user(user_id, data))


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    actor: Actor = Depends(require_capability(Capability.MANAGE_USERS)),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id, actor)
    return {"message": "User deleted successfully"}
