"""
API response models.

Pydantic models for FastAPI response serialization and OpenAPI schema
generation. Incoming user payloads are checked by the domain's field rules,
not by these models, so that every violation is reported in one envelope.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.domain.ports import FieldViolation, User


class UserResponse(BaseModel):
    """Stored user as returned to clients (camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    contact_no: str = Field(..., alias="contactNo")
    address: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            contact_no=user.contact_no,
            address=user.address,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class CreateUserResponse(BaseModel):
    """Response model for successful registration."""

    success: bool = True
    message: str
    user: UserResponse


class UserListResponse(BaseModel):
    """Response model for the user listing, newest first."""

    success: bool = True
    users: list[UserResponse]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class FieldError(BaseModel):
    """A single field-scoped error in the error envelope."""

    field: str
    message: str

    @classmethod
    def from_violation(cls, violation: FieldViolation) -> "FieldError":
        return cls(field=violation.field, message=violation.message)


class ErrorResponse(BaseModel):
    """Standard error envelope. Optional keys are omitted when unset."""

    success: bool = False
    message: str
    errors: list[FieldError] | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check payload."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    store_status: str = Field(..., alias="storeStatus")
    timestamp: str
