"""
Jotter Backend — Dependency Providers
=======================================

What:  FastAPI dependencies that assemble the services from settings.
How:   Stateless collaborators (token signer, mailer, identity verifier) are
       built once per process via lru_cache; the flow handlers are built per
       request around that request's AsyncSession.
Who:   Route handlers declare `Depends(get_auth_service)` etc. Tests swap any
       provider through `app.dependency_overrides`.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.config import settings
from jotter.database import get_db_session
from jotter.repositories import NoteRepository, UserRepository
from jotter.services.auth_service import AuthService
from jotter.services.identity import GoogleIdentityVerifier, IdentityVerifier
from jotter.services.mailer_base import Mailer
from jotter.services.note_service import NoteService
from jotter.services.otp_service import OTPService
from jotter.services.smtp_mailer import SMTPMailer
from jotter.services.token_service import TokenService


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.jwt_expire_days,
    )


@lru_cache
def get_mailer() -> Mailer:
    return SMTPMailer(
        hostname=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.mail_from_address,
        sender_name=settings.mail_from_name,
        username=settings.smtp_username,
        password=settings.smtp_password,
        start_tls=settings.smtp_start_tls,
        timeout=settings.smtp_timeout,
        ttl_minutes=settings.otp_ttl_minutes,
    )


@lru_cache
def get_identity_verifier() -> IdentityVerifier:
    return GoogleIdentityVerifier(client_id=settings.google_client_id)


def get_otp_service() -> OTPService:
    return OTPService(ttl_minutes=settings.otp_ttl_minutes)


def get_auth_service(
    db: AsyncSession = Depends(get_db_session),
    otp: OTPService = Depends(get_otp_service),
    tokens: TokenService = Depends(get_token_service),
    mailer: Mailer = Depends(get_mailer),
    identity: IdentityVerifier = Depends(get_identity_verifier),
) -> AuthService:
    return AuthService(
        users=UserRepository(db),
        otp=otp,
        tokens=tokens,
        mailer=mailer,
        identity=identity,
    )


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(notes=NoteRepository(db))
