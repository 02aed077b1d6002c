"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from habit_api.db.models import Account, Habit
from habit_api.db.session import get_session


class StoreError(Exception):
    """Base class for constraint violations reported by the store."""


class DuplicateEmailError(StoreError):
    """Raised when the unique index on accounts.email rejects an insert."""


class MissingAccountError(StoreError):
    """Raised when a habit insert references an account that no longer exists."""


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def __init__(self, session_factory: Callable[[], AbstractContextManager[Session]] = get_session) -> None:
        self._session_factory = session_factory

    # -------------------------- accounts --------------------------
    def get_account_by_email(self, email: str) -> Optional[Account]:
        with self._session_factory() as session:
            stmt = select(Account).where(Account.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def create_account(self, email: str, full_name: str, password_hash: str) -> Account:
        entity = Account(
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        with self._session_factory() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateEmailError(email) from exc
            session.refresh(entity)
            return entity

    # -------------------------- habits --------------------------
    def get_habits_for_account(self, account_id: str) -> list[Habit]:
        with self._session_factory() as session:
            stmt = select(Habit).where(Habit.account_id == account_id).order_by(Habit.id)
            return list(session.execute(stmt).scalars().all())

    def create_habit(
        self,
        account_id: str,
        *,
        text: str,
        category: str,
        description: str = "",
        streak: int = 0,
        completed: bool = False,
    ) -> Habit:
        habits = self.create_habits(
            account_id,
            [
                {
                    "text": text,
                    "category": category,
                    "description": description,
                    "streak": streak,
                    "completed": completed,
                }
            ],
        )
        return habits[0]

    def create_habits(self, account_id: str, items: Iterable[Mapping]) -> list[Habit]:
        """Insert several habits for one account in a single transaction."""
        now = datetime.now(timezone.utc)
        entities = [
            Habit(
                account_id=account_id,
                text=item["text"],
                category=item["category"],
                description=item.get("description") or "",
                streak=int(item.get("streak") or 0),
                completed=bool(item.get("completed", False)),
                created_at=now,
            )
            for item in items
        ]
        if not entities:
            return []
        with self._session_factory() as session:
            session.add_all(entities)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if session.get(Account, account_id) is None:
                    raise MissingAccountError(account_id) from exc
                raise
            for entity in entities:
                session.refresh(entity)
            return entities
