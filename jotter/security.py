"""
Jotter Backend — Auth Guard
=============================

What:  Resolves `Authorization: Bearer <token>` into an AuthContext.
How:   FastAPI dependency: extract token → verify signature/expiry → load user
       → require verified. Route handlers receive the context as an explicit
       argument; nothing is attached to the request object.
Who:   Every /notes route and GET /auth/me.

Failure mapping:
    no/malformed header     → 401 "Access token required"
    bad or expired token    → 401 "Invalid or expired token"
    user no longer exists   → 404 "User not found"
    user not verified       → 403 "Please verify your email address first"
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.database import get_db_session
from jotter.dependencies import get_token_service
from jotter.exceptions import AuthenticationError, ForbiddenError, NotFoundError
from jotter.models.user import User
from jotter.repositories import UserRepository
from jotter.services.token_service import TokenService

# auto_error=False: absence is reported through our own envelope, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False, description="Session token from /auth/verify")


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller. Only `require_auth` creates these."""

    user: User

    @property
    def user_id(self) -> uuid.UUID:
        return self.user.id


async def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db_session),
) -> AuthContext:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")

    user_id = tokens.verify(credentials.credentials)
    if user_id is None:
        raise AuthenticationError("Invalid or expired token")

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFoundError(resource="user", message="User not found")

    if not user.is_verified:
        raise ForbiddenError("Please verify your email address first")

    return AuthContext(user=user)
