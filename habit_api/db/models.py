"""SQLAlchemy models for accounts and their habits."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


def _new_account_id() -> str:
    return uuid.uuid4().hex


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True, default=_new_account_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    habits = relationship("Habit", back_populates="account", cascade="all,delete-orphan", passive_deletes=True)


class Habit(Base):
    __tablename__ = "habits"
    __table_args__ = (CheckConstraint("streak >= 0", name="ck_habits_streak_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(String(32), ForeignKey("accounts.id", ondelete="CASCADE"), index=True, nullable=False)
    text = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(64), nullable=False)
    streak = Column(BigInteger, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    account = relationship("Account", back_populates="habits")
