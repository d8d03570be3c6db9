# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Validation rules for each resource kind."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from contactdesk.shared.errors.validation_types import ValidationErrorType

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_INVALID,
            "Email address is not valid",
            {}
        )
    return value


class RecordSchema(BaseModel):
    """Base for record payloads: strings are stripped, unknown keys dropped."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def blank_optional_to_none(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name)
        if field is not None and not field.is_required():
            if isinstance(value, str) and not value.strip():
                return None
        return value

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ContactSchema(RecordSchema):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=5000)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)


class PortfolioSchema(RecordSchema):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)
    message: str = Field(min_length=1, max_length=5000)
    company: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, max_length=32)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)


class DiarySchema(RecordSchema):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=20000)
    mood: str | None = Field(None, max_length=32)


__all__ = [
    "ContactSchema",
    "DiarySchema",
    "EMAIL_PATTERN",
    "PortfolioSchema",
    "RecordSchema",
]
