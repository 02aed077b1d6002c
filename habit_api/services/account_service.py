"""
Account use cases: signup and login (with first-login habit seeding).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional
import logging

from habit_api.core.config import DefaultHabit, get_settings
from habit_api.core.security import burn_verification, hash_password, verify_password
from habit_api.domain.emails import normalize_email
from habit_api.domain.passwords import password_error
from habit_api.repositories.sql_repository import DuplicateEmailError, SQLRepository
from habit_api.services.errors import AuthError, ConflictError, ValidationError
from habit_api.services.habit_service import habit_to_dict

logger = logging.getLogger(__name__)

EMAIL_EXISTS = "Email already exists"
INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class SignupResult:
    message: str


@dataclass
class LoginResult:
    message: str
    user: dict
    habits: list[dict]


@dataclass
class AccountService:
    """Handles registration and login flows."""

    repository: SQLRepository = field(default_factory=SQLRepository)
    default_habits: Optional[tuple[DefaultHabit, ...]] = None

    def __post_init__(self):
        if self.default_habits is None:
            self.default_habits = get_settings().default_habits

    # -------------------------------------- signup --------------------------------------
    def signup(self, full_name: Optional[str], email: Optional[str], password: Optional[str]) -> SignupResult:
        problem = password_error(password)
        if problem:
            raise ValidationError(problem)
        raw_email = normalize_email(email)
        if not raw_email:
            raise ValidationError("Email is required")
        name = (full_name or "").strip()
        if not name:
            raise ValidationError("Full name is required")
        if self.repository.get_account_by_email(raw_email):
            raise ConflictError(EMAIL_EXISTS)
        try:
            self.repository.create_account(raw_email, name, hash_password(password))
        except DuplicateEmailError:
            # another signup for the same email committed between the check and the insert
            raise ConflictError(EMAIL_EXISTS)
        logger.info("Account created for %s", raw_email)
        return SignupResult(message="Signup successful")

    # -------------------------------------- login --------------------------------------
    def login(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        raw_email = normalize_email(email)
        account = self.repository.get_account_by_email(raw_email) if raw_email else None
        if not account:
            burn_verification(password or "")
            logger.warning("Login failed for %s", raw_email or "<empty>")
            raise AuthError(INVALID_CREDENTIALS)
        if not verify_password(password or "", account.password_hash):
            logger.warning("Login failed for %s", raw_email)
            raise AuthError(INVALID_CREDENTIALS)

        habits = self.repository.get_habits_for_account(account.id)
        if not habits and self.default_habits:
            habits = self.repository.create_habits(account.id, [asdict(h) for h in self.default_habits])
            logger.info("Seeded %d default habit(s) for %s", len(habits), account.email)

        logger.info("Login succeeded for %s", account.email)
        return LoginResult(
            message="Login successful",
            user={"fullName": account.full_name, "email": account.email},
            habits=[habit_to_dict(h, account.email) for h in habits],
        )
