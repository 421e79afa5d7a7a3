"""
Jotter Backend — External Identity Verification
=================================================

What:  Verifies Google ID tokens presented by the frontend's Sign-In button.
How:   google-auth checks signature (against Google's published certs),
       issuer, expiry and audience. The blocking certificate fetch runs in
       Starlette's threadpool.
Who:   AuthService.google_sign_in() receives an IdentityVerifier.

Error mapping:
    "Token expired"        → ValidationError (400) with a sign-in-again message
    "Token used too early" → ValidationError (400) asking to retry
    any other ValueError   → ValidationError (400) "Invalid Google token"
    TransportError         → UpstreamError (500)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from starlette.concurrency import run_in_threadpool

from jotter.exceptions import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityClaims:
    """The subset of ID-token claims the auth flow consumes."""

    subject: str
    email: str
    email_verified: bool
    name: Optional[str] = None


class IdentityVerifier(ABC):
    @abstractmethod
    async def verify(self, token: str) -> IdentityClaims:
        """Return verified claims, or raise ValidationError / UpstreamError."""
        ...


class GoogleIdentityVerifier(IdentityVerifier):
    def __init__(self, client_id: str):
        self.client_id = client_id
        self._request = google_requests.Request()

    async def verify(self, token: str) -> IdentityClaims:
        if not self.client_id:
            # verify_oauth2_token skips the audience check when it is None
            raise UpstreamError(
                message="Google authentication failed. Please try again.",
                context={"reason": "GOOGLE_CLIENT_ID not configured"},
            )

        try:
            payload = await run_in_threadpool(
                id_token.verify_oauth2_token, token, self._request, self.client_id
            )
        except google_exceptions.TransportError as e:
            logger.error("Could not reach Google to verify ID token: %s", e)
            raise UpstreamError(
                message="Google authentication failed. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        except ValueError as e:
            raise self._translate(e) from e

        if not payload or not payload.get("sub") or not payload.get("email"):
            raise ValidationError("Invalid Google token", field="token")

        return IdentityClaims(
            subject=str(payload["sub"]),
            email=str(payload["email"]),
            email_verified=payload.get("email_verified") in (True, "true"),
            name=payload.get("name"),
        )

    @staticmethod
    def _translate(error: ValueError) -> ValidationError:
        detail = str(error)
        logger.info("Rejected Google ID token: %s", detail)
        if "Token used too early" in detail:
            return ValidationError("Google token is not yet valid. Please try again.", field="token")
        if "Token expired" in detail:
            return ValidationError("Google token has expired. Please sign in again.", field="token")
        return ValidationError("Invalid Google token", field="token")
