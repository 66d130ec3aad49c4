"""
Volunteer service: signup, profile updates, applications and account removal.
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from volunteer_hub.core.errors import NotFoundError, ValidationError
from volunteer_hub.models.company import Company
from volunteer_hub.models.volunteer import Volunteer
from volunteer_hub.services import credentials, engagements
from volunteer_hub_shared.schemas.common import EngagementStatus
from volunteer_hub_shared.schemas.views import CompanyPublic
from volunteer_hub_shared.schemas.volunteers import (
    VolunteerProfileResponse,
    VolunteerSignupRequest,
    VolunteerUpdateRequest,
)

log = structlog.get_logger()

UPDATABLE_FIELDS = ("first_name", "last_name", "user_name", "email", "phone_number")


def censor_company(company: Company) -> CompanyPublic:
    return CompanyPublic(
        company_id=company.id,
        company_name=company.company_name,
        email=company.email,
        phone_number=company.phone_number,
        website=company.website,
    )


async def signup(req: VolunteerSignupRequest, session: AsyncSession) -> str:
    """Create a volunteer and return its first session token."""
    volunteer = await credentials.create_account(
        Volunteer,
        req.model_dump(exclude={"password"}),
        req.password,
        session,
    )
    return await credentials.issue_token(volunteer, session)


async def update(
    volunteer: Volunteer, req: VolunteerUpdateRequest, session: AsyncSession
) -> VolunteerProfileResponse:
    """Apply an allow-listed profile update.

    A new token is issued (and every older one revoked) when the handle or
    the password is part of the update.
    """
    changes = req.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError(
            "<userName>, <email>, <phoneNumber>, <firstName>, <lastName> or <password> "
            "are required to update volunteer info"
        )

    await credentials.ensure_unique(
        Volunteer,
        session,
        handle=changes.get("user_name"),
        email=changes.get("email"),
        exclude=volunteer,
    )

    for field in UPDATABLE_FIELDS:
        if field in changes:
            setattr(volunteer, field, changes[field])
    await credentials.save_account(volunteer, session)

    if "password" in changes:
        await credentials.change_password(volunteer, changes["password"], session)

    token = None
    if "user_name" in changes or "password" in changes:
        token = await credentials.issue_token(volunteer, session)

    log.info("volunteer.updated", volunteer_id=str(volunteer.id), fields=sorted(changes))
    return VolunteerProfileResponse(
        first_name=volunteer.first_name,
        last_name=volunteer.last_name,
        user_name=volunteer.user_name,
        email=volunteer.email,
        phone_number=volunteer.phone_number,
        token=token,
    )


async def list_opportunities(session: AsyncSession) -> list[CompanyPublic]:
    """Every company, in signup order."""
    result = await session.execute(select(Company).order_by(Company.created_at))
    return [censor_company(company) for company in result.scalars().all()]


async def list_companies(
    volunteer: Volunteer, status: EngagementStatus, session: AsyncSession
) -> list[CompanyPublic]:
    companies = await engagements.list_companies(volunteer.id, status, session)
    return [censor_company(company) for company in companies]


async def relationship_view(volunteer: Volunteer, session: AsyncSession) -> dict:
    """Censored pending + active companies for a volunteer."""
    return {
        "pending_companies": await list_companies(volunteer, EngagementStatus.PENDING, session),
        "active_companies": await list_companies(volunteer, EngagementStatus.ACTIVE, session),
    }


async def apply_to_company(
    volunteer: Volunteer, company_id: uuid.UUID, session: AsyncSession
) -> dict:
    await engagements.apply(volunteer, company_id, session)
    return await relationship_view(volunteer, session)


async def leave_company(
    volunteer: Volunteer, company_id: uuid.UUID, session: AsyncSession
) -> dict:
    """End the volunteer's relation with a company. Idempotent."""
    company = await session.get(Company, company_id)
    if company is None:
        raise NotFoundError("company not found.")

    if await engagements.end(volunteer.id, company_id, session):
        log.info("volunteer.left_company", volunteer_id=str(volunteer.id), company_id=str(company_id))
    return await relationship_view(volunteer, session)


async def delete_volunteer(volunteer: Volunteer, session: AsyncSession) -> None:
    """Remove the volunteer's own account after detaching it from every company."""
    detached = await engagements.detach_volunteer(volunteer.id, session)
    await session.delete(volunteer)
    await session.flush()
    log.info("volunteer.deleted", volunteer_id=str(volunteer.id), engagements_removed=detached)
