from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from waitlist_api.core.deps import get_registration_service
from waitlist_api.schemas.waitlist import (
    MessageResponse,
    WaitlistJoinRequest,
    WaitlistJoinResponse,
    WaitlistStatsResponse,
)
from waitlist_api.services.registration_service import RegistrationService

router = APIRouter(prefix="/waitlist", tags=["waitlist"])


@router.post(
    "",
    status_code=201,
    response_model=WaitlistJoinResponse,
    responses={
        400: {"model": MessageResponse, "description": "Invalid email"},
        409: {"model": MessageResponse, "description": "Already registered"},
        500: {"model": MessageResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": WaitlistJoinRequest.model_json_schema()}},
        }
    },
)
async def join_waitlist(request: Request, service: RegistrationService = Depends(get_registration_service)):
    """Join the waitlist.

    The body is validated by the service rather than FastAPI so malformed
    input maps to 400 instead of 422.
    """
    payload: Any
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    result = await run_in_threadpool(service.register, payload)
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get(
    "/stats",
    response_model=WaitlistStatsResponse,
    responses={500: {"model": MessageResponse}},
)
async def waitlist_stats(service: RegistrationService = Depends(get_registration_service)):
    result = await run_in_threadpool(service.get_stats)
    return JSONResponse(status_code=result.status_code, content=result.body)
