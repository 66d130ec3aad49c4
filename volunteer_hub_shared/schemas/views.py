"""Censored (public-safe) projections of accounts. Credential fields never appear here."""

from __future__ import annotations

import uuid

from .common import CamelModel


class CompanyPublic(CamelModel):
    company_id: uuid.UUID
    company_name: str
    email: str
    phone_number: str
    website: str


class VolunteerPublic(CamelModel):
    volunteer_id: uuid.UUID
    first_name: str
    last_name: str
    user_name: str
    email: str
    phone_number: str
