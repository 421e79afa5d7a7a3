"""
Jotter Backend — User SQLAlchemy Model
========================================

What:  ORM model representing the `users` table (the credential store).
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by UserRepository, AuthService and the auth guard.

Record shape:
    - email: unique, stored trimmed and lower-cased
    - password_hash: only ever set for email-provider accounts (nullable)
    - google_id: Google subject id for google-provider accounts (nullable, unique)
    - otp / otp_expiry: transient; present only between issuance and
      consumption, cleared together after a successful verification
    - is_verified: an unverified user never receives a session token

Lifecycle:
    1. Created unverified on signup, or pre-verified on first Google sign-in
    2. Mutated on OTP issuance/consumption and on Google linking
    3. Never hard-deleted by any flow
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from jotter.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthProvider(str, enum.Enum):
    EMAIL = "email"
    GOOGLE = "google"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    google_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ── Pending one-time passcode ─────────────────────────────────────────
    otp: Mapped[Optional[str]] = mapped_column(String(6), nullable=True)
    otp_expiry: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    auth_provider: Mapped[AuthProvider] = mapped_column(
        Enum(
            AuthProvider,
            name="auth_provider",
            native_enum=False,
            length=20,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=AuthProvider.EMAIL,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    @property
    def has_pending_otp(self) -> bool:
        return self.otp is not None and self.otp_expiry is not None

    def clear_otp(self) -> None:
        self.otp = None
        self.otp_expiry = None

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, email='{self.email}', "
            f"provider='{self.auth_provider.value}', verified={self.is_verified})>"
        )
