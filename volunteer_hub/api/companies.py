"""
Company API endpoints.

POST   /company/signup     Create account, returns a token
GET    /company/login      Basic auth, returns a fresh token
GET    /company/pending    Volunteers awaiting approval
GET    /company/active     Approved volunteers
PUT    /company/update     Update own profile
PUT    /company/approve    Approve a pending volunteer (sends SMS)
PUT    /company/terminate  Drop a volunteer (pending or active)
DELETE /company/delete     Delete own account
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from volunteer_hub.core.auth import get_current_company, login_company
from volunteer_hub.core.database import get_session
from volunteer_hub.core.sms import SmsNotifier, get_notifier
from volunteer_hub.models.company import Company
from volunteer_hub.services import companies as company_service
from volunteer_hub.services import credentials
from volunteer_hub_shared.schemas.common import EngagementStatus, TokenResponse
from volunteer_hub_shared.schemas.companies import (
    ApprovalResponse,
    CompanyActiveResponse,
    CompanyEngagementsResponse,
    CompanyPendingResponse,
    CompanyProfileResponse,
    CompanySignupRequest,
    CompanyUpdateRequest,
    VolunteerRef,
)

router = APIRouter()


@router.post("/signup", response_model=TokenResponse)
async def signup(
    body: CompanySignupRequest,
    session: AsyncSession = Depends(get_session),
):
    """Register a company and return its first session token."""
    token = await company_service.signup(body, session)
    return TokenResponse(token=token)


@router.get("/login", response_model=TokenResponse)
async def login(
    company: Company = Depends(login_company),
    session: AsyncSession = Depends(get_session),
):
    token = await credentials.issue_token(company, session)
    return TokenResponse(token=token)


@router.get("/pending", response_model=CompanyPendingResponse)
async def pending(
    company: Company = Depends(get_current_company),
    session: AsyncSession = Depends(get_session),
):
    volunteers = await company_service.list_volunteers(company, EngagementStatus.PENDING, session)
    return CompanyPendingResponse(pending_volunteers=volunteers)


@router.get("/active", response_model=CompanyActiveResponse)
async def active(
    company: Company = Depends(get_current_company),
    session: AsyncSession = Depends(get_session),
):
    volunteers = await company_service.list_volunteers(company, EngagementStatus.ACTIVE, session)
    return CompanyActiveResponse(active_volunteers=volunteers)


@router.put("/update", response_model=CompanyProfileResponse, response_model_exclude_none=True)
async def update(
    body: CompanyUpdateRequest,
    company: Company = Depends(get_current_company),
    session: AsyncSession = Depends(get_session),
):
    """Update own profile. A new token is returned when companyName or password changed."""
    return await company_service.update(company, body, session)


@router.put("/approve", response_model=ApprovalResponse)
async def approve(
    body: VolunteerRef,
    company: Company = Depends(get_current_company),
    notifier: SmsNotifier = Depends(get_notifier),
    session: AsyncSession = Depends(get_session),
):
    """Approve a pending volunteer and text them the good news."""
    result = await company_service.approve_volunteer(company, body.volunteer_id, notifier, session)
    return ApprovalResponse(**result)


@router.put("/terminate", response_model=CompanyEngagementsResponse)
async def terminate(
    body: VolunteerRef,
    company: Company = Depends(get_current_company),
    session: AsyncSession = Depends(get_session),
):
    view = await company_service.terminate_volunteer(company, body.volunteer_id, session)
    return CompanyEngagementsResponse(**view)


@router.delete("/delete", status_code=204)
async def delete(
    company: Company = Depends(get_current_company),
    session: AsyncSession = Depends(get_session),
):
    """Delete own account and drop it from every volunteer's lists."""
    await company_service.delete_company(company, session)
    return Response(status_code=204)
