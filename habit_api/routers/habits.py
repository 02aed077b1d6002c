from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from habit_api.routers.responses import error_response
from habit_api.schemas import CreateHabitRequest
from habit_api.services.errors import ServiceError, UnexpectedError
from habit_api.services.habit_service import HabitService

router = APIRouter(prefix="/api/habits", tags=["habits"])
logger = logging.getLogger(__name__)


def _get_habit_service(request: Request) -> HabitService:
    svc = getattr(getattr(request.app, "state", None), "habit_service", None)
    if not svc:
        raise RuntimeError("HabitService not configured")
    return svc


@router.post("", status_code=201)
def create_habit(payload: CreateHabitRequest, request: Request):
    svc = _get_habit_service(request)
    habit = payload.habit.model_dump(exclude_none=True) if payload.habit else {}
    try:
        record = svc.create_habit(payload.user_email, habit)
    except ServiceError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Error saving habit")
        return error_response(UnexpectedError("Error saving habit", detail=str(exc)))
    return JSONResponse(record, status_code=201)


@router.get("")
def list_habits(request: Request, user_email: Optional[str] = Query(default=None, alias="userEmail")):
    svc = _get_habit_service(request)
    try:
        return svc.list_habits(user_email)
    except ServiceError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Error fetching habits")
        return error_response(UnexpectedError("Error fetching habits", detail=str(exc)))
