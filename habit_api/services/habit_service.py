"""
Habit use cases: create a habit for an account and list an account's habits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
import logging

from habit_api.db.models import Habit
from habit_api.domain.emails import normalize_email
from habit_api.repositories.sql_repository import MissingAccountError, SQLRepository
from habit_api.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
# largest value a signed 64-bit BIGINT column holds
MAX_STREAK = 2**63 - 1


def habit_to_dict(entity: Habit, owner_email: str) -> dict:
    created = entity.created_at
    return {
        "id": entity.id,
        "text": entity.text,
        "description": entity.description or "",
        "category": entity.category,
        "streak": int(entity.streak or 0),
        "completed": bool(entity.completed),
        "userEmail": owner_email,
        "createdAt": created.isoformat() if created else None,
    }


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _streak(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_STREAK:
        raise ValidationError("Streak must be a non-negative integer")
    return value


@dataclass
class HabitService:
    """Creates and lists habits, always scoped to an existing account."""

    repository: SQLRepository = field(default_factory=SQLRepository)

    def _require_account(self, owner_email: Optional[str]):
        if not _clean(owner_email):
            raise ValidationError("User email is required")
        email = normalize_email(owner_email)
        account = self.repository.get_account_by_email(email)
        if not account:
            raise NotFoundError(USER_NOT_FOUND)
        return account

    def create_habit(self, owner_email: Optional[str], habit: Optional[Mapping[str, Any]]) -> dict:
        habit = habit or {}
        text = _clean(habit.get("text"))
        if not text:
            raise ValidationError("Habit text is required")
        category = _clean(habit.get("category"))
        if not category:
            raise ValidationError("Category is required")
        if not _clean(owner_email):
            raise ValidationError("User email is required")
        streak = _streak(habit.get("streak"))
        description = habit.get("description") or ""
        if not isinstance(description, str):
            raise ValidationError("Description must be a string")

        account = self._require_account(owner_email)
        try:
            entity = self.repository.create_habit(
                account.id,
                text=text,
                category=category,
                description=description,
                streak=streak,
                completed=bool(habit.get("completed") or False),
            )
        except MissingAccountError:
            raise NotFoundError(USER_NOT_FOUND)
        logger.info("Habit %s created for %s", entity.id, account.email)
        return habit_to_dict(entity, account.email)

    def list_habits(self, owner_email: Optional[str]) -> list[dict]:
        account = self._require_account(owner_email)
        return [habit_to_dict(h, account.email) for h in self.repository.get_habits_for_account(account.id)]
