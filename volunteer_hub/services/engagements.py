"""
Relationship ledger: the (volunteer, company) engagement lifecycle.

NONE -> PENDING (apply) -> ACTIVE (approve); PENDING|ACTIVE -> NONE (leave,
terminate, account delete). A pair is stored as a single row, so both sides
always see the same state.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from volunteer_hub.core.errors import ConflictError, NotFoundError
from volunteer_hub.models.company import Company
from volunteer_hub.models.engagement import Engagement
from volunteer_hub.models.volunteer import Volunteer
from volunteer_hub_shared.schemas.common import ENGAGEMENT_TRANSITIONS, EngagementStatus

log = structlog.get_logger()


def _can_transition(current: Optional[EngagementStatus], target: Optional[EngagementStatus]) -> bool:
    return target in ENGAGEMENT_TRANSITIONS.get(current, [])


async def get_engagement(
    volunteer_id: uuid.UUID, company_id: uuid.UUID, session: AsyncSession
) -> Optional[Engagement]:
    return await session.get(Engagement, (volunteer_id, company_id))


async def get_status(
    volunteer_id: uuid.UUID, company_id: uuid.UUID, session: AsyncSession
) -> Optional[EngagementStatus]:
    engagement = await get_engagement(volunteer_id, company_id, session)
    return EngagementStatus(engagement.status) if engagement else None


async def apply(
    volunteer: Volunteer, company_id: uuid.UUID, session: AsyncSession
) -> Engagement:
    """Volunteer applies to a company: NONE -> PENDING."""
    company = await session.get(Company, company_id)
    if company is None:
        raise NotFoundError("company not found.")

    current = await get_status(volunteer.id, company_id, session)
    if not _can_transition(current, EngagementStatus.PENDING):
        raise ConflictError("duplicate volunteer.")

    engagement = Engagement(
        volunteer_id=volunteer.id,
        company_id=company_id,
        status=EngagementStatus.PENDING.value,
    )
    session.add(engagement)
    try:
        await session.flush()
    except IntegrityError:
        # Another request inserted the same pair first.
        raise ConflictError("duplicate volunteer.")

    log.info("engagement.applied", volunteer_id=str(volunteer.id), company_id=str(company_id))
    return engagement


async def approve(
    company: Company, volunteer_id: uuid.UUID, session: AsyncSession
) -> Engagement:
    """Company approves a pending volunteer: PENDING -> ACTIVE."""
    engagement = await get_engagement(volunteer_id, company.id, session)
    if engagement is None or engagement.status != EngagementStatus.PENDING.value:
        raise NotFoundError("volunteer does not exist in pending volunteers")

    engagement.status = EngagementStatus.ACTIVE.value
    engagement.approved_at = datetime.now(timezone.utc)
    session.add(engagement)
    await session.flush()

    log.info("engagement.approved", volunteer_id=str(volunteer_id), company_id=str(company.id))
    return engagement


async def end(
    volunteer_id: uuid.UUID, company_id: uuid.UUID, session: AsyncSession
) -> bool:
    """Drop the pair back to NONE. Returns False when there was nothing to end."""
    engagement = await get_engagement(volunteer_id, company_id, session)
    if engagement is None:
        return False

    await session.delete(engagement)
    await session.flush()

    log.info(
        "engagement.ended",
        volunteer_id=str(volunteer_id),
        company_id=str(company_id),
        previous_status=engagement.status,
    )
    return True


async def detach_volunteer(volunteer_id: uuid.UUID, session: AsyncSession) -> int:
    """Remove the volunteer from every company it is linked to."""
    result = await session.execute(
        delete(Engagement).where(Engagement.volunteer_id == volunteer_id)
    )
    await session.flush()
    return result.rowcount or 0


async def detach_company(company_id: uuid.UUID, session: AsyncSession) -> int:
    """Remove the company from every volunteer it is linked to."""
    result = await session.execute(
        delete(Engagement).where(Engagement.company_id == company_id)
    )
    await session.flush()
    return result.rowcount or 0


async def list_companies(
    volunteer_id: uuid.UUID, status: EngagementStatus, session: AsyncSession
) -> list[Company]:
    """Companies linked to a volunteer with the given status, oldest application first."""
    result = await session.execute(
        select(Company)
        .join(Engagement, Engagement.company_id == Company.id)
        .where(Engagement.volunteer_id == volunteer_id, Engagement.status == status.value)
        .order_by(Engagement.applied_at)
    )
    return list(result.scalars().all())


async def list_volunteers(
    company_id: uuid.UUID, status: EngagementStatus, session: AsyncSession
) -> list[Volunteer]:
    """Volunteers linked to a company with the given status, oldest application first."""
    result = await session.execute(
        select(Volunteer)
        .join(Engagement, Engagement.volunteer_id == Volunteer.id)
        .where(Engagement.company_id == company_id, Engagement.status == status.value)
        .order_by(Engagement.applied_at)
    )
    return list(result.scalars().all())
