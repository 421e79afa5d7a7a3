"""
Jotter Backend — Explicit Input Validation
============================================

What:  Pure functions that turn raw request bodies into typed, normalised
       inputs before any store access.
How:   Each function either returns a frozen dataclass or raises
       ValidationError with the message the client displays.
Who:   Called by AuthService and NoteService at the top of every operation.
"""

import re
import uuid
from dataclasses import dataclass
from typing import Optional

from jotter.exceptions import NotFoundError, ValidationError
from jotter.models.note import TITLE_MAX_LENGTH

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class SignupInput:
    name: str
    email: str


@dataclass(frozen=True)
class OTPSubmission:
    email: str
    otp: str


@dataclass(frozen=True)
class NoteFields:
    title: str
    content: str


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


def normalize_email(email: str) -> str:
    """Trim and lower-case; emails are unique case-insensitively."""
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_signup(name: Optional[str], email: Optional[str]) -> SignupInput:
    clean_name, clean_email = _clean(name), _clean(email)
    if not clean_name or not clean_email:
        raise ValidationError("Name and email are required")
    if not is_valid_email(clean_email):
        raise ValidationError("Please enter a valid email address", field="email")
    if len(clean_name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name must be at most {NAME_MAX_LENGTH} characters", field="name"
        )
    return SignupInput(name=clean_name, email=normalize_email(clean_email))


def validate_email_only(email: Optional[str]) -> str:
    """Used by /auth/login and /auth/resend-otp."""
    clean_email = _clean(email)
    if not clean_email:
        raise ValidationError("Email is required", field="email")
    if not is_valid_email(clean_email):
        raise ValidationError("Please enter a valid email address", field="email")
    return normalize_email(clean_email)


def validate_otp_submission(email: Optional[str], otp: Optional[str]) -> OTPSubmission:
    clean_email, clean_otp = _clean(email), _clean(otp)
    if not clean_email or not clean_otp:
        raise ValidationError("Email and OTP are required")
    return OTPSubmission(email=normalize_email(clean_email), otp=clean_otp)


def validate_google_token(token: Optional[str]) -> str:
    clean_token = _clean(token)
    if not clean_token:
        raise ValidationError("Google token is required", field="token")
    return clean_token


def validate_note_fields(title: Optional[str], content: Optional[str]) -> NoteFields:
    clean_title, clean_content = _clean(title), _clean(content)
    if not clean_title or not clean_content:
        raise ValidationError("Title and content are required")
    if len(clean_title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
        )
    return NoteFields(title=clean_title, content=clean_content)


def parse_note_id(raw_id: str) -> uuid.UUID:
    """Malformed ids are indistinguishable from ids that do not exist."""
    try:
        return uuid.UUID(raw_id)
    except (ValueError, AttributeError, TypeError):
        raise NotFoundError(resource="note", context={"note_id": raw_id})
