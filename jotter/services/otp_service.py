"""
Jotter Backend — One-Time Passcode Issuer/Verifier
====================================================

What:  Generates 6-digit email codes, stamps their expiry, and checks submissions.
How:   Codes live on the User row (otp, otp_expiry). Issuing overwrites any
       previous code; a successful verification clears both fields. The
       caller persists the user afterwards, together with any other change,
       as one row update.
Who:   Used by AuthService for signup verification, login and resend.

Verification order:
    1. No code stored          → OTPNotPendingError
    2. now > otp_expiry        → OTPExpiredError
    3. trimmed input != code   → OTPMismatchError
    4. otherwise               → clear code + expiry
"""

import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

from jotter.exceptions import OTPExpiredError, OTPMismatchError, OTPNotPendingError
from jotter.models.user import User, utcnow

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

OTP_MIN = 100_000
OTP_MAX = 999_999


def as_utc(moment: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class OTPService:
    def __init__(self, ttl_minutes: int = 10, clock: Clock = utcnow):
        self.ttl = timedelta(minutes=ttl_minutes)
        self.clock = clock

    @staticmethod
    def generate_code() -> str:
        """Uniform over 100000..999999, from the OS CSPRNG."""
        return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))

    def issue(self, user: User) -> str:
        """Attach a fresh code to `user` and return it for mailing."""
        code = self.generate_code()
        user.otp = code
        user.otp_expiry = self.clock() + self.ttl
        logger.info("Issued OTP for %s (expires %s)", user.email, user.otp_expiry.isoformat())
        return code

    def verify(self, user: User, submitted_code: str, *, for_login: bool = False) -> None:
        again = "a new login OTP" if for_login else "a new OTP"

        if not user.has_pending_otp:
            raise OTPNotPendingError(f"No OTP found. Please request {again}.")

        if self.clock() > as_utc(user.otp_expiry):
            logger.info("Expired OTP submitted for %s", user.email)
            raise OTPExpiredError(f"OTP has expired. Please request {again}.")

        # bytes: compare_digest rejects non-ASCII str operands
        if not hmac.compare_digest(user.otp.encode(), submitted_code.strip().encode("utf-8")):
            logger.info("Mismatched OTP submitted for %s", user.email)
            raise OTPMismatchError()

        user.clear_otp()
