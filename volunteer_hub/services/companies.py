"""
Company service: signup, profile updates, approvals, terminations and
account removal.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from volunteer_hub.core.errors import NotFoundError, ValidationError
from volunteer_hub.core.sms import SmsDeliveryError, SmsNotifier
from volunteer_hub.models.company import Company
from volunteer_hub.models.volunteer import Volunteer
from volunteer_hub.services import credentials, engagements
from volunteer_hub_shared.schemas.common import EngagementStatus
from volunteer_hub_shared.schemas.companies import (
    CompanyProfileResponse,
    CompanySignupRequest,
    CompanyUpdateRequest,
)
from volunteer_hub_shared.schemas.views import VolunteerPublic

log = structlog.get_logger()

UPDATABLE_FIELDS = ("company_name", "email", "phone_number", "website")

ACCEPTANCE_MESSAGE = "Congratulations {first_name}, you've been accepted as a volunteer by {company_name}!"


def censor_volunteer(volunteer: Volunteer) -> VolunteerPublic:
    return VolunteerPublic(
        volunteer_id=volunteer.id,
        first_name=volunteer.first_name,
        last_name=volunteer.last_name,
        user_name=volunteer.user_name,
        email=volunteer.email,
        phone_number=volunteer.phone_number,
    )


async def signup(req: CompanySignupRequest, session: AsyncSession) -> str:
    """Create a company and return its first session token."""
    company = await credentials.create_account(
        Company,
        req.model_dump(exclude={"password"}),
        req.password,
        session,
    )
    return await credentials.issue_token(company, session)


async def update(
    company: Company, req: CompanyUpdateRequest, session: AsyncSession
) -> CompanyProfileResponse:
    """Apply an allow-listed profile update; re-issue the token on handle or password change."""
    changes = req.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError(
            "<companyName>, <email>, <phoneNumber>, <website> or <password> "
            "are required to update company info"
        )

    await credentials.ensure_unique(
        Company,
        session,
        handle=changes.get("company_name"),
        email=changes.get("email"),
        exclude=company,
    )

    for field in UPDATABLE_FIELDS:
        if field in changes:
            setattr(company, field, changes[field])
    await credentials.save_account(company, session)

    if "password" in changes:
        await credentials.change_password(company, changes["password"], session)

    token = None
    if "company_name" in changes or "password" in changes:
        token = await credentials.issue_token(company, session)

    log.info("company.updated", company_id=str(company.id), fields=sorted(changes))
    return CompanyProfileResponse(
        company_name=company.company_name,
        email=company.email,
        phone_number=company.phone_number,
        website=company.website,
        token=token,
    )


async def list_volunteers(
    company: Company, status: EngagementStatus, session: AsyncSession
) -> list[VolunteerPublic]:
    volunteers = await engagements.list_volunteers(company.id, status, session)
    return [censor_volunteer(volunteer) for volunteer in volunteers]


async def relationship_view(company: Company, session: AsyncSession) -> dict:
    """Censored pending + active volunteers for a company."""
    return {
        "pending_volunteers": await list_volunteers(company, EngagementStatus.PENDING, session),
        "active_volunteers": await list_volunteers(company, EngagementStatus.ACTIVE, session),
    }


async def approve_volunteer(
    company: Company,
    volunteer_id: uuid.UUID,
    notifier: SmsNotifier,
    session: AsyncSession,
) -> dict:
    """Approve a pending volunteer, then text them.

    The approval is committed before the SMS goes out; a failed delivery is
    logged and reported as ``sid=None`` but never undoes the approval.
    """
    volunteer = await session.get(Volunteer, volunteer_id)
    if volunteer is None:
        raise NotFoundError("volunteer does not exist in pending volunteers")
    await engagements.approve(company, volunteer_id, session)
    await session.commit()

    sid = await _notify_acceptance(company, volunteer, notifier)
    view = await relationship_view(company, session)
    return {"sid": sid, **view}


async def _notify_acceptance(
    company: Company, volunteer: Volunteer, notifier: SmsNotifier
) -> Optional[str]:
    body = ACCEPTANCE_MESSAGE.format(
        first_name=volunteer.first_name, company_name=company.company_name
    )
    try:
        sid = await notifier.send(volunteer.phone_number, body)
    except SmsDeliveryError as exc:
        log.warning(
            "sms.delivery_failed",
            company_id=str(company.id),
            volunteer_id=str(volunteer.id),
            error=str(exc),
        )
        return None
    return sid


async def terminate_volunteer(
    company: Company, volunteer_id: uuid.UUID, session: AsyncSession
) -> dict:
    """End the company's relation with a volunteer. Idempotent."""
    volunteer = await session.get(Volunteer, volunteer_id)
    if volunteer is None:
        raise NotFoundError("volunteer not found.")

    if await engagements.end(volunteer_id, company.id, session):
        log.info("company.terminated_volunteer", company_id=str(company.id), volunteer_id=str(volunteer_id))
    return await relationship_view(company, session)


async def delete_company(company: Company, session: AsyncSession) -> None:
    """Remove the company's own account after detaching it from every volunteer."""
    detached = await engagements.detach_company(company.id, session)
    await session.delete(company)
    await session.flush()
    log.info("company.deleted", company_id=str(company.id), engagements_removed=detached)
