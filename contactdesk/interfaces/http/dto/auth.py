from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from contactdesk.shared.errors.validation_types import ValidationErrorType


class LoginRequestDTO(BaseModel):
    # Any stored username is accepted; unknown names end in invalid_credentials.
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    model_config = ConfigDict(str_strip_whitespace=False)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(
                ValidationErrorType.EMPTY,
                "Username cannot be empty",
                {}
            )
        return value


class LoginSuccessDTO(BaseModel):
    success: bool = True
    message: str = "Logged in successfully"
    token: str
    expires_at: datetime


class AdminProfileDTO(BaseModel):
    id: str
    username: str | None
    role: str
    issued_at: datetime
    expires_at: datetime
