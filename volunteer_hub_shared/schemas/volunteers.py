"""Volunteer request/response schemas."""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import CamelModel, check_password_bytes
from .views import CompanyPublic


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class VolunteerSignupRequest(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    user_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone_number: str = Field(min_length=1, max_length=32)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class VolunteerUpdateRequest(CamelModel):
    """Fields a volunteer may change about themselves. Anything else is rejected."""

    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    user_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, min_length=1, max_length=32)
    password: Optional[str] = Field(default=None, min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class CompanyRef(CamelModel):
    company_id: uuid.UUID


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class VolunteerProfileResponse(CamelModel):
    first_name: str
    last_name: str
    user_name: str
    email: str
    phone_number: str
    token: Optional[str] = None  # only when the handle or password changed


class VolunteerPendingResponse(CamelModel):
    pending_companies: list[CompanyPublic]


class VolunteerActiveResponse(CamelModel):
    active_companies: list[CompanyPublic]


class VolunteerEngagementsResponse(CamelModel):
    pending_companies: list[CompanyPublic]
    active_companies: list[CompanyPublic]
