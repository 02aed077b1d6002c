"""Password strength rules applied on signup."""
from __future__ import annotations

MIN_PASSWORD_LENGTH = 6
SPECIAL_CHARACTERS = frozenset('!@#$%^&*(),.?":{}|<>')


def validate_password(password: str | None) -> list[str]:
    """Return every rule the password breaks; an empty list means it is valid."""
    value = password or ""
    errors = []
    if len(value) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not any("A" <= ch <= "Z" for ch in value):
        errors.append("Password must contain at least one uppercase letter")
    if not any(ch in SPECIAL_CHARACTERS for ch in value):
        errors.append("Password must contain at least one special character")
    return errors


def password_error(password: str | None) -> str | None:
    """Join the violations into a single message, or None when valid."""
    errors = validate_password(password)
    return ", ".join(errors) if errors else None
