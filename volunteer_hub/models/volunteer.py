"""Volunteer model."""

from typing import ClassVar

from sqlmodel import Field, SQLModel

from .base import CredentialMixin, TimestampMixin, UUIDMixin


class Volunteer(UUIDMixin, CredentialMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "volunteers"

    login_field: ClassVar[str] = "user_name"
    actor_kind: ClassVar[str] = "volunteer"

    first_name: str = Field(nullable=False)
    last_name: str = Field(nullable=False)
    user_name: str = Field(unique=True, index=True, nullable=False)
    phone_number: str = Field(nullable=False)
