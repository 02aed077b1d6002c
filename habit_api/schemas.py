"""Request bodies accepted by the JSON endpoints.

Every field is optional at the parsing layer: missing values are reported by
the services with the API's own 400 messages rather than pydantic's 422.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SignupRequest(APIModel):
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(APIModel):
    email: Optional[str] = None
    password: Optional[str] = None


class HabitPayload(APIModel):
    text: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    streak: Optional[int] = None
    completed: Optional[bool] = None


class CreateHabitRequest(APIModel):
    habit: Optional[HabitPayload] = None
    user_email: Optional[str] = Field(default=None, alias="userEmail")
