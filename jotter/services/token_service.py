"""
Jotter Backend — Session Token Service
========================================

What:  Issues and verifies signed, time-bound session tokens (JWT, HS256).
How:   python-jose encodes {sub: <user id>, iat, exp}; decoding checks the
       signature and expiry. Tokens are never stored server-side.
Who:   AuthService issues tokens; the auth guard verifies them per request.
"""

import logging
import uuid
from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt

from jotter.models.user import utcnow

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 7):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(days=expire_days)

    def issue(self, user_id: uuid.UUID) -> str:
        now = utcnow()
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.lifetime).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[uuid.UUID]:
        """
        Return the user id embedded in `token`, or None when the token is
        forged, expired, malformed, or carries no usable subject.
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            return uuid.UUID(claims["sub"])
        except (JWTError, KeyError, ValueError, TypeError) as e:
            logger.debug("Rejected session token: %s", type(e).__name__)
            return None
