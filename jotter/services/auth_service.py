"""
Jotter Backend — Auth Service (Account Lifecycle Orchestrator)
================================================================

What:  Signup, email verification, OTP login, OTP resend and Google sign-in.
How:   Composes the credential store, OTP issuer/verifier, token service,
       mailer and identity verifier, all passed into the constructor.
Who:   Built per request by the get_auth_service dependency; called by
       the /auth route handlers.

Account state machine:
    (none) ──signup──▶ Unverified ──verify(otp)──▶ Verified
    (none) ──google──────────────────────────────▶ Verified
    Unverified ──resend──▶ Unverified (fresh code)
    Verified ──login──▶ Verified (login code pending) ──verify-login──▶ token

Tokens are only ever issued to verified users. Email sends are not retried:
an UpstreamError from the mailer aborts the request and rolls back the
transaction, and the client asks again.
"""

import logging
from typing import Tuple

from jotter.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from jotter.models.user import AuthProvider, User
from jotter.repositories import UserRepository
from jotter.schemas.auth import AuthData, OTPSentData, UserProfile
from jotter.services.identity import IdentityVerifier
from jotter.services.mailer_base import Mailer
from jotter.services.otp_service import OTPService
from jotter.services.token_service import TokenService
from jotter.validation import (
    NAME_MAX_LENGTH,
    normalize_email,
    validate_email_only,
    validate_google_token,
    validate_otp_submission,
    validate_signup,
)

logger = logging.getLogger(__name__)

DEFAULT_GOOGLE_NAME = "Google User"


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        otp: OTPService,
        tokens: TokenService,
        mailer: Mailer,
        identity: IdentityVerifier,
    ):
        self.users = users
        self.otp = otp
        self.tokens = tokens
        self.mailer = mailer
        self.identity = identity

    # ── Email signup ──────────────────────────────────────────────────────

    async def signup(self, name: str, email: str) -> OTPSentData:
        """
        Create (or refresh) an unverified account and email it a code.

        An unverified record for the same email is reused: its name is
        replaced and a new code overwrites the old one.

        Raises:
            ValidationError: missing name/email or malformed email
            ConflictError: a verified account already owns the email
            UpstreamError: the OTP email could not be sent
        """
        data = validate_signup(name, email)

        user = await self.users.get_by_email(data.email)
        if user is not None and user.is_verified:
            raise ConflictError(
                "User with this email already exists", context={"email": data.email}
            )

        if user is None:
            user = User(
                name=data.name,
                email=data.email,
                auth_provider=AuthProvider.EMAIL,
                is_verified=False,
            )
            self.users.add(user)
            logger.info("Created unverified account for %s", data.email)
        else:
            user.name = data.name

        code = self.otp.issue(user)
        await self.users.save()
        await self.mailer.send_otp(data.email, code, data.name)
        return OTPSentData(email=data.email)

    async def verify_signup(self, email: str, otp: str) -> AuthData:
        """
        Consume the signup code, mark the account verified and issue a token.

        Raises:
            NotFoundError: no account for the email
            ConflictError: account already verified
            OTPError: no code pending, code expired, or code mismatch
        """
        submission = validate_otp_submission(email, otp)
        user = await self._require_user(submission.email, "User not found. Please sign up first.")

        if user.is_verified:
            raise ConflictError("Account is already verified. Please login.")

        self.otp.verify(user, submission.otp)
        # verification flag and OTP clearing land in the same row update
        user.is_verified = True
        await self.users.save()

        logger.info("Verified account %s", user.id)
        return self._session_for(user)

    # ── OTP login ─────────────────────────────────────────────────────────

    async def login(self, email: str) -> OTPSentData:
        """Send a login code to a verified account."""
        address = validate_email_only(email)
        user = await self._require_user(address, "User not found. Please sign up first.")

        if not user.is_verified:
            raise ForbiddenError(
                "Please verify your email address first. Check your inbox for the OTP."
            )

        code = self.otp.issue(user)
        await self.users.save()
        await self.mailer.send_otp(address, code, user.name)
        return OTPSentData(email=address)

    async def verify_login(self, email: str, otp: str) -> AuthData:
        """Consume a login code and issue a token; verification state is untouched."""
        submission = validate_otp_submission(email, otp)
        user = await self._require_user(submission.email, "User not found. Please sign up first.")

        if not user.is_verified:
            raise ForbiddenError("Please verify your email address first.")

        self.otp.verify(user, submission.otp, for_login=True)
        await self.users.save()

        logger.info("User %s logged in with OTP", user.id)
        return self._session_for(user)

    async def resend_otp(self, email: str) -> str:
        """Re-issue the signup code. Only allowed while unverified."""
        address = validate_email_only(email)
        user = await self._require_user(address, "User not found")

        if user.is_verified:
            raise ConflictError("Account is already verified. Please login.")

        code = self.otp.issue(user)
        await self.users.save()
        await self.mailer.send_otp(address, code, user.name)
        return address

    # ── Google sign-in ────────────────────────────────────────────────────

    async def google_sign_in(self, token: str) -> Tuple[AuthData, bool]:
        """
        Sign in (or sign up) with a Google ID token.

        Matching:
            - an account with the same google_id, or the same email, is reused
            - an email account with no google_id is linked and switched to Google
            - an account linked to a *different* google_id is a conflict
            - otherwise a new, already-verified Google account is created

        Returns:
            (AuthData, created) where created is True for a brand-new account.
        """
        raw_token = validate_google_token(token)
        claims = await self.identity.verify(raw_token)

        if not claims.email_verified:
            raise ValidationError("Google email not verified")

        email = normalize_email(claims.email)
        user = await self.users.get_by_email_or_google_id(email, claims.subject)
        created = False

        if user is None:
            display_name = (claims.name or "").strip()[:NAME_MAX_LENGTH]
            user = User(
                name=display_name or DEFAULT_GOOGLE_NAME,
                email=email,
                google_id=claims.subject,
                auth_provider=AuthProvider.GOOGLE,
                is_verified=True,
            )
            self.users.add(user)
            created = True
            logger.info("Created Google account for %s", email)
        elif user.google_id is None:
            user.google_id = claims.subject
            user.auth_provider = AuthProvider.GOOGLE
            user.is_verified = True
            user.clear_otp()
            logger.info("Linked Google identity to account %s", user.id)
        elif user.google_id != claims.subject:
            raise ConflictError(
                "This email is associated with a different Google account",
                context={"user_id": str(user.id)},
            )

        await self.users.save()
        return self._session_for(user), created

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _require_user(self, email: str, message: str) -> User:
        user = await self.users.get_by_email(email)
        if user is None:
            raise NotFoundError(resource="user", message=message)
        return user

    def _session_for(self, user: User) -> AuthData:
        return AuthData(token=self.tokens.issue(user.id), user=UserProfile.model_validate(user))
