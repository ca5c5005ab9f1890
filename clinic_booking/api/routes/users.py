import logging
from typing import List
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from clinic_booking.api.deps import get_settings_dep, get_store, verify_admin, verify_jwt
from clinic_booking.api.schemas import (
    AccessTokenResponse,
    AdminCheckResponse,
    InsertAck,
    UpdateAck,
    UserCreate,
    UserResponse,
)
from clinic_booking.config import Settings
from clinic_booking.database import ClinicStore, User, UserRole
from clinic_booking.errors import NotFound
from clinic_booking.services.tokens import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/jwt", response_model=AccessTokenResponse)
async def issue_access_token(
    email: str = Query(..., description="User email"),
    store: ClinicStore = Depends(get_store),
    settings: Settings = Depends(get_settings_dep),
):
    """Issue a bearer token for a known user."""
    user = await store.get_user_by_email(email)
    if not user:
        return JSONResponse(status_code=403, content={"accessToken": ""})

    return AccessTokenResponse(access_token=create_access_token(user.email, settings))


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    _: str = Depends(verify_jwt),
    store: ClinicStore = Depends(get_store),
):
    return await store.list_users()


@router.post("/users", response_model=InsertAck, response_model_exclude_none=True)
async def create_or_update_user(
    user_data: UserCreate,
    store: ClinicStore = Depends(get_store),
):
    """Create a new user or update the name of an existing one."""
    user = await store.get_user_by_email(user_data.email)

    if user:
        if user_data.name:
            user.name = user_data.name
        await store.commit()
        return InsertAck(acknowledged=True, inserted_id=user.id)

    user = await store.add_user(
        User(email=user_data.email, name=user_data.name, role=UserRole.USER)
    )
    await store.commit()
    logger.info("User %s registered", user.email)

    return InsertAck(acknowledged=True, inserted_id=user.id)


@router.get("/users/admin/{email}", response_model=AdminCheckResponse)
async def check_admin(email: str, store: ClinicStore = Depends(get_store)):
    user = await store.get_user_by_email(email)
    return AdminCheckResponse(is_admin=bool(user and user.role == UserRole.ADMIN))


@router.put("/users/admin/{user_id}", response_model=UpdateAck)
async def make_admin(
    user_id: str,
    _: str = Depends(verify_admin),
    store: ClinicStore = Depends(get_store),
):
    """Promote a user to admin."""
    user = await store.get_user(user_id)
    if not user:
        raise NotFound("User not found")

    modified = 0
    if user.role != UserRole.ADMIN:
        user.role = UserRole.ADMIN
        modified = 1
        await store.commit()
        logger.info("User %s promoted to admin", user.email)

    return UpdateAck(acknowledged=True, matched_count=1, modified_count=modified)
