from __future__ import annotations

from fastapi import APIRouter, Depends

from invoicing.api.deps import get_current_user_id, get_user_service
from invoicing.core import messages
from invoicing.schemas.common import ErrorResponse, MessageResponse
from invoicing.schemas.user import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UpdateUserRequest,
    UserResponse,
)
from invoicing.services.users import UpdateUserInput, UserService

router = APIRouter(prefix="/user", tags=["user"])


@router.post(
    "/signup",
    status_code=201,
    response_model=AuthResponse,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Register a new user",
)
async def signup(payload: SignupRequest, users: UserService = Depends(get_user_service)):
    token = await users.signup(str(payload.email), payload.password)
    return AuthResponse(message=messages.SIGNED_UP, jwt=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Exchange credentials for a session token",
)
async def login(payload: LoginRequest, users: UserService = Depends(get_user_service)):
    token = await users.login(str(payload.email), payload.password)
    return AuthResponse(message=messages.LOGGED_IN, jwt=token)


@router.get("", response_model=UserResponse, summary="Current user profile")
async def get_user(
    user_id: str = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
):
    return UserResponse(user=await users.get_profile(user_id))


@router.put("", response_model=UserResponse, summary="Update the current user")
async def update_user(
    payload: UpdateUserRequest,
    user_id: str = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
):
    dto = UpdateUserInput(
        id=user_id,
        email=str(payload.email) if payload.email is not None else None,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        birth_date=payload.birth_date,
    )
    return UserResponse(user=await users.update(dto))


@router.delete("", response_model=MessageResponse, summary="Delete the current user")
async def delete_user(
    user_id: str = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
):
    await users.delete(user_id)
    return MessageResponse(message=messages.USER_DELETED)
