"""
API router

Two parallel families: /volunteer/* and /company/*.
"""

from fastapi import APIRouter

from volunteer_hub_shared.schemas.common import ErrorResponse

from . import companies, volunteers

ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 404, 409)
}

router = APIRouter(responses=ERROR_RESPONSES)

router.include_router(volunteers.router, prefix="/volunteer", tags=["Volunteers"])
router.include_router(companies.router, prefix="/company", tags=["Companies"])
