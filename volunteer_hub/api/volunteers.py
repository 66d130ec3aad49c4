"""
Volunteer API endpoints.

POST   /volunteer/signup         Create account, returns a token
GET    /volunteer/login          Basic auth, returns a fresh token
GET    /volunteer/opportunities  Every company (public view)
GET    /volunteer/pending        Companies applied to, awaiting approval
GET    /volunteer/active         Companies that approved this volunteer
PUT    /volunteer/update         Update own profile
PUT    /volunteer/apply          Apply to a company
PUT    /volunteer/leave          Leave a company (pending or active)
DELETE /volunteer/delete         Delete own account
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from volunteer_hub.core.auth import get_current_volunteer, login_volunteer
from volunteer_hub.core.database import get_session
from volunteer_hub.models.volunteer import Volunteer
from volunteer_hub.services import credentials
from volunteer_hub.services import volunteers as volunteer_service
from volunteer_hub_shared.schemas.common import EngagementStatus, TokenResponse
from volunteer_hub_shared.schemas.companies import CompanyListResponse
from volunteer_hub_shared.schemas.volunteers import (
    CompanyRef,
    VolunteerActiveResponse,
    VolunteerEngagementsResponse,
    VolunteerPendingResponse,
    VolunteerProfileResponse,
    VolunteerSignupRequest,
    VolunteerUpdateRequest,
)

router = APIRouter()


@router.post("/signup", response_model=TokenResponse)
async def signup(
    body: VolunteerSignupRequest,
    session: AsyncSession = Depends(get_session),
):
    """Register a volunteer and return its first session token."""
    token = await volunteer_service.signup(body, session)
    return TokenResponse(token=token)


@router.get("/login", response_model=TokenResponse)
async def login(
    volunteer: Volunteer = Depends(login_volunteer),
    session: AsyncSession = Depends(get_session),
):
    """Exchange basic credentials for a new token (older tokens stop working)."""
    token = await credentials.issue_token(volunteer, session)
    return TokenResponse(token=token)


@router.get("/opportunities", response_model=CompanyListResponse)
async def opportunities(
    volunteer: Volunteer = Depends(get_current_volunteer),
    session: AsyncSession = Depends(get_session),
):
    """List every company a volunteer could apply to."""
    companies = await volunteer_service.list_opportunities(session)
    return CompanyListResponse(companies=companies)


@router.get("/pending", response_model=VolunteerPendingResponse)
async def pending(
    volunteer: Volunteer = Depends(get_current_volunteer),
    session: AsyncSession = Depends(get_session),
):
    companies = await volunteer_service.list_companies(volunteer, EngagementStatus.PENDING, session)
    return VolunteerPendingResponse(pending_companies=companies)


@router.get("/active", response_model=VolunteerActiveResponse)
async def active(
    volunteer: Volunteer = Depends(get_current_volunteer),
    session: AsyncSession = Depends(get_session),
):
    companies = await volunteer_service.list_companies(volunteer, EngagementStatus.ACTIVE, session)
    return VolunteerActiveResponse(active_companies=companies)


@router.put("/update", response_model=VolunteerProfileResponse, response_model_exclude_none=True)
async def update(
    body: VolunteerUpdateRequest,
    volunteer: Volunteer = Depends(get_current_volunteer),
    session: AsyncSession = Depends(get_session),
):
    """Update own profile. A new token is returned when userName or password changed."""
    return await volunteer_service.update(volunteer, body, session)


@router.put("/apply", response_model=VolunteerEngagementsResponse)
async def apply(
    body: CompanyRef,
    volunteer: Volunteer = Depends(get_current_volunteer),
    session: AsyncSession = Depends(get_session),
):
    """Apply to a company. 409 if already pending or active there."""
    view = await volunteer_service.apply_to_company(volunteer, body.company_id, session)
    return VolunteerEngagementsResponse(**view)


@router.put("/leave", response_model=VolunteerEngagementsResponse)
async def leave(
    body: CompanyRef,
    volunteer: Volunteer = Depends(get_current_volunteer),
    session: AsyncSession = Depends(get_session),
):
    """Withdraw an application or leave an active company."""
    view = await volunteer_service.leave_company(volunteer, body.company_id, session)
    return VolunteerEngagementsResponse(**view)


@router.delete("/delete", status_code=204)
async def delete(
    volunteer: Volunteer = Depends(get_current_volunteer),
    session: AsyncSession = Depends(get_session),
):
    """Delete own account and drop it from every company's lists."""
    await volunteer_service.delete_volunteer(volunteer, session)
    return Response(status_code=204)
