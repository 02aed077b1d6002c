from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from habit_api.core.rate_limiter import rate_limit_ip
from habit_api.routers.responses import error_response
from habit_api.schemas import LoginRequest, SignupRequest
from habit_api.services.account_service import AccountService
from habit_api.services.errors import ServiceError, UnexpectedError

router = APIRouter(prefix="/api", tags=["accounts"])
logger = logging.getLogger(__name__)


def _get_account_service(request: Request) -> AccountService:
    svc = getattr(getattr(request.app, "state", None), "account_service", None)
    if not svc:
        raise RuntimeError("AccountService not configured")
    return svc


@router.post("/signup", status_code=201)
def signup(payload: SignupRequest, request: Request):
    settings = request.app.state.settings
    rate_limit_ip(
        request,
        "auth:signup",
        limit=settings.signup_rate_limit,
        window_seconds=settings.signup_rate_window_seconds,
    )
    svc = _get_account_service(request)
    try:
        result = svc.signup(payload.full_name, payload.email, payload.password)
    except ServiceError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Signup failed")
        return error_response(UnexpectedError("Something went wrong", detail=str(exc)))
    return JSONResponse({"message": result.message}, status_code=201)


@router.post("/login")
def login(payload: LoginRequest, request: Request):
    settings = request.app.state.settings
    rate_limit_ip(
        request,
        "auth:login",
        limit=settings.login_rate_limit,
        window_seconds=settings.login_rate_window_seconds,
    )
    svc = _get_account_service(request)
    try:
        result = svc.login(payload.email, payload.password)
    except ServiceError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Login failed")
        return error_response(UnexpectedError("Something went wrong", detail=str(exc)))
    return {"message": result.message, "user": result.user, "habits": result.habits}
