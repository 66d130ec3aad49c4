"""Company request/response schemas."""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import CamelModel, check_password_bytes
from .views import CompanyPublic, VolunteerPublic


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class CompanySignupRequest(CamelModel):
    company_name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone_number: str = Field(min_length=1, max_length=32)
    website: str = Field(min_length=1, max_length=500)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class CompanyUpdateRequest(CamelModel):
    """Fields a company may change about itself. Anything else is rejected."""

    model_config = ConfigDict(extra="forbid")

    company_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, min_length=1, max_length=32)
    website: Optional[str] = Field(default=None, min_length=1, max_length=500)
    password: Optional[str] = Field(default=None, min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class VolunteerRef(CamelModel):
    volunteer_id: uuid.UUID


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class CompanyListResponse(CamelModel):
    companies: list[CompanyPublic]


class CompanyProfileResponse(CamelModel):
    company_name: str
    email: str
    phone_number: str
    website: str
    token: Optional[str] = None  # only when the handle or password changed


class CompanyPendingResponse(CamelModel):
    pending_volunteers: list[VolunteerPublic]


class CompanyActiveResponse(CamelModel):
    active_volunteers: list[VolunteerPublic]


class CompanyEngagementsResponse(CamelModel):
    pending_volunteers: list[VolunteerPublic]
    active_volunteers: list[VolunteerPublic]


class ApprovalResponse(CompanyEngagementsResponse):
    sid: Optional[str] = None  # SMS delivery id, null when delivery failed
