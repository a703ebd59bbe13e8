"""
Users routes.

Defines REST endpoints for registering, listing and deleting users.
Mounted under /api by the application factory.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_app_settings, get_user_service
from src.api.errors import error_response, server_error_response
from src.api.models import (
    CreateUserResponse,
    ErrorResponse,
    MessageResponse,
    UserListResponse,
    UserResponse,
)
from src.config.settings import Settings
from src.domain.exceptions import (
    EmailAlreadyRegistered,
    StoreUnavailable,
    UserNotFound,
    UserValidationError,
)
from src.domain.ports import FieldViolation
from src.domain.registration import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

EMAIL_TAKEN = "Email already registered"


@router.post(
    "",
    response_model=CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error or email already registered"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
    summary="Register a new user",
    description="Submit name, email, contact number and address. "
    "Every field rule violation is reported at once.",
)
def create_user(
    payload: dict[str, Any] | None = Body(default=None),
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
) -> CreateUserResponse | JSONResponse:
    """
    Register a new user.

    - **name**: 2-50 letters and spaces
    - **email**: unique, stored lowercase
    - **contactNo**: 10-15 of digits, `+`, `-`, spaces, parentheses
    - **address**: 10-200 characters
    """
    try:
        user = service.register(payload or {})
    except UserValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", errors=e.errors)
    except EmailAlreadyRegistered:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            EMAIL_TAKEN,
            errors=[FieldViolation("email", EMAIL_TAKEN)],
        )
    except StoreUnavailable as e:
        logger.error(f"Registration error: {e}")
        return server_error_response("Server error. Please try again later.", e, settings)

    return CreateUserResponse(
        message="User registered successfully",
        user=UserResponse.from_user(user),
    )


@router.get(
    "",
    response_model=UserListResponse,
    responses={500: {"model": ErrorResponse, "description": "Store failure"}},
    summary="List all users",
    description="Returns every registered user, most recently created first.",
)
def list_users(
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
) -> UserListResponse | JSONResponse:
    try:
        users = service.list_users()
    except StoreUnavailable as e:
        logger.error(f"Fetch error: {e}")
        return server_error_response("Error fetching users", e, settings)

    return UserListResponse(users=[UserResponse.from_user(user) for user in users])


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
    summary="Delete a user",
)
def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse | JSONResponse:
    try:
        service.delete_user(user_id)
    except UserNotFound:
        return error_response(status.HTTP_404_NOT_FOUND, "User not found")
    except StoreUnavailable as e:
        logger.error(f"Delete error: {e}")
        return server_error_response("Error deleting user", e, settings)

    return MessageResponse(message="User deleted successfully")
