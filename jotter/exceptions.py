"""
Jotter Backend — Custom Exception Hierarchy
=============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a user-facing message and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and return the `{status: "ERROR", message}` envelope with the
       HTTP status code declared on the class.
Who:   Raised by validation, services and the auth guard; caught by handlers.

Exception Hierarchy:
    JotterError (base)                 → 500
    ├── ValidationError                → 400 Bad Request
    │   └── OTPError
    │       ├── OTPNotPendingError     → 400 (no code outstanding)
    │       ├── OTPExpiredError        → 400 (code past its expiry)
    │       └── OTPMismatchError       → 400 (wrong code)
    ├── ConflictError                  → 400 (duplicate / already verified)
    ├── AuthenticationError            → 401 Unauthorized
    ├── ForbiddenError                 → 403 Forbidden
    ├── NotFoundError                  → 404 Not Found
    ├── UpstreamError                  → 500 (email / identity provider)
    └── DatabaseError                  → 500
"""

from typing import Any, Dict, Optional


class JotterError(Exception):
    """
    Base exception for all Jotter application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(JotterError):
    """Raised when client input fails validation (missing or malformed fields)."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class OTPError(ValidationError):
    """Base for one-time passcode verification failures."""


class OTPNotPendingError(OTPError):
    """When: verify called with no code outstanding. HTTP: 400."""

    def __init__(self, message: str = "No OTP found. Please request a new OTP."):
        super().__init__(message=message, field="otp")


class OTPExpiredError(OTPError):
    """When: the stored code is past otp_expiry. HTTP: 400."""

    def __init__(self, message: str = "OTP has expired. Please request a new OTP."):
        super().__init__(message=message, field="otp")


class OTPMismatchError(OTPError):
    """When: the trimmed submission differs from the stored code. HTTP: 400."""

    def __init__(self, message: str = "Invalid OTP. Please check and try again."):
        super().__init__(message=message, field="otp")


class ConflictError(JotterError):
    """
    Raised when the request clashes with existing state.

    When:    Signup for an email that already has a verified account, verifying
             an account twice, or a Google id that differs from the linked one.
    HTTP:    400 Bad Request (the client contract has no 409)
    """

    status_code = 400


class AuthenticationError(JotterError):
    """Missing, malformed, expired or forged bearer token."""

    status_code = 401

    def __init__(
        self,
        message: str = "Access token required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(JotterError):
    """The caller is known but not allowed to proceed (unverified account)."""

    status_code = 403

    def __init__(
        self,
        message: str = "Please verify your email address first",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(JotterError):
    """
    Raised when a requested resource does not exist.

    For notes this also covers "exists but belongs to someone else" and
    malformed ids, so callers cannot probe for other users' note ids.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=message or f"{resource.capitalize()} not found", context=ctx)
        self.resource = resource


class UpstreamError(JotterError):
    """
    Raised when an external collaborator (SMTP server, Google) fails.

    HTTP:    500 Internal Server Error. The message is generic; the underlying
             error is kept in context for the server log.
    """

    def __init__(
        self,
        message: str = "An upstream service failed. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(JotterError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; detailed error info
    is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
