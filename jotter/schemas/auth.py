"""
Jotter Backend — Auth Request/Response Schemas
================================================

What:  Bodies accepted by the /auth routes and the payloads they return.
How:   Request fields are all Optional[str]; `jotter.validation` turns them
       into typed inputs or a 400 with a specific message.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from jotter.models.user import AuthProvider
from jotter.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SignupRequest(BaseModel):
    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Email address to verify")


class EmailRequest(BaseModel):
    """Body for /auth/login and /auth/resend-otp."""

    email: Optional[str] = Field(default=None)


class OTPRequest(BaseModel):
    """Body for /auth/verify and /auth/verify-login."""

    email: Optional[str] = Field(default=None)
    otp: Optional[str] = Field(default=None, description="6-digit code from the email")


class GoogleAuthRequest(BaseModel):
    token: Optional[str] = Field(default=None, description="Google ID token (credential)")


# ══════════════════════════════════════════════════════════════════════════
# Response Payloads
# ══════════════════════════════════════════════════════════════════════════


class UserProfile(CamelModel):
    """Public view of a user. Never includes OTP or password fields."""

    id: uuid.UUID
    name: str
    email: str
    auth_provider: AuthProvider
    is_verified: bool
    created_at: Optional[datetime] = None


class UserData(CamelModel):
    user: UserProfile


class AuthData(CamelModel):
    """Returned whenever a session token is issued."""

    token: str
    user: UserProfile


class OTPSentData(CamelModel):
    email: str
    otp_sent: bool = True
