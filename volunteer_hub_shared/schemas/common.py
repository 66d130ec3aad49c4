"""Shared building blocks for request/response schemas."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format uses camelCase keys; snake_case is accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EngagementStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"


# Valid transitions for a (volunteer, company) pair. ``None`` is "no relation".
ENGAGEMENT_TRANSITIONS: dict[EngagementStatus | None, list[EngagementStatus | None]] = {
    None: [EngagementStatus.PENDING],
    EngagementStatus.PENDING: [EngagementStatus.ACTIVE, None],
    EngagementStatus.ACTIVE: [None],
}


class TokenResponse(CamelModel):
    token: str


class ErrorResponse(CamelModel):
    status_code: int
    message: str


# bcrypt only looks at the first 72 bytes and refuses anything longer.
PASSWORD_MAX_BYTES = 72


def check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value
