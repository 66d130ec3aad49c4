"""Company model."""

from typing import ClassVar

from sqlmodel import Field, SQLModel

from .base import CredentialMixin, TimestampMixin, UUIDMixin


class Company(UUIDMixin, CredentialMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "companies"

    login_field: ClassVar[str] = "company_name"
    actor_kind: ClassVar[str] = "company"

    company_name: str = Field(unique=True, index=True, nullable=False)
    phone_number: str = Field(nullable=False)
    website: str = Field(nullable=False)
