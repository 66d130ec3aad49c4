"""Base mixins for SQLModel tables."""

from datetime import datetime, timezone
from typing import ClassVar
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin(SQLModel):
    created_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now(), "onupdate": _utcnow},
        sa_type=sa.DateTime(timezone=True),
    )


class UUIDMixin(SQLModel):
    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
        nullable=False,
    )


class CredentialMixin(SQLModel):
    """Login credentials shared by every actor type.

    ``login_field`` names the column holding the account's handle and
    ``actor_kind`` is embedded in issued tokens so a volunteer token never
    resolves against the company table (and vice versa).
    """

    login_field: ClassVar[str]
    actor_kind: ClassVar[str]

    email: str = Field(unique=True, index=True, nullable=False)
    password_hash: str = Field(nullable=False)  # bcrypt
    token_seed: str = Field(unique=True, index=True, nullable=False)
