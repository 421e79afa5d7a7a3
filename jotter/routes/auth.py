"""
Jotter Backend — Auth Route Handlers
======================================

What:  /auth/signup, /auth/verify, /auth/login, /auth/verify-login,
       /auth/resend-otp, /auth/google and /auth/me.
How:   Thin handlers: read the body, call AuthService, wrap the result in the
       SUCCESS envelope. Errors are raised as exceptions and rendered by the
       global handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends

from jotter.config import settings
from jotter.dependencies import get_auth_service
from jotter.schemas.auth import (
    AuthData,
    EmailRequest,
    GoogleAuthRequest,
    OTPRequest,
    OTPSentData,
    SignupRequest,
    UserData,
    UserProfile,
)
from jotter.schemas.common import ApiResponse, ErrorResponse, MessageResponse
from jotter.security import AuthContext, require_auth
from jotter.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

_client_errors = {
    400: {"description": "Invalid input or state", "model": ErrorResponse},
    500: {"description": "Server or upstream error", "model": ErrorResponse},
}


@router.post(
    "/signup",
    response_model=ApiResponse[OTPSentData],
    responses=_client_errors,
    summary="Start email signup and send an OTP",
)
async def signup(
    payload: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[OTPSentData]:
    data = await service.signup(payload.name, payload.email)
    return ApiResponse[OTPSentData](
        message=(
            f"OTP sent successfully to {data.email}. "
            f"Please check your email and verify within {settings.otp_ttl_minutes} minutes."
        ),
        data=data,
    )


@router.post(
    "/verify",
    response_model=ApiResponse[AuthData],
    responses={**_client_errors, 404: {"description": "Unknown email", "model": ErrorResponse}},
    summary="Verify the signup OTP and receive a session token",
)
async def verify(
    payload: OTPRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthData]:
    data = await service.verify_signup(payload.email, payload.otp)
    return ApiResponse[AuthData](
        message="Account verified successfully! Welcome to Jotter.",
        data=data,
    )


@router.post(
    "/login",
    response_model=ApiResponse[OTPSentData],
    responses={
        **_client_errors,
        403: {"description": "Account not verified", "model": ErrorResponse},
        404: {"description": "Unknown email", "model": ErrorResponse},
    },
    summary="Send a login OTP to a verified account",
)
async def login(
    payload: EmailRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[OTPSentData]:
    data = await service.login(payload.email)
    return ApiResponse[OTPSentData](
        message=(
            f"Login OTP sent successfully to {data.email}. "
            f"Please check your email and verify within {settings.otp_ttl_minutes} minutes."
        ),
        data=data,
    )


@router.post(
    "/verify-login",
    response_model=ApiResponse[AuthData],
    responses={
        **_client_errors,
        403: {"description": "Account not verified", "model": ErrorResponse},
        404: {"description": "Unknown email", "model": ErrorResponse},
    },
    summary="Verify a login OTP and receive a session token",
)
async def verify_login(
    payload: OTPRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthData]:
    data = await service.verify_login(payload.email, payload.otp)
    return ApiResponse[AuthData](message="Login successful! Welcome back.", data=data)


@router.post(
    "/resend-otp",
    response_model=MessageResponse,
    responses={**_client_errors, 404: {"description": "Unknown email", "model": ErrorResponse}},
    summary="Re-send the signup OTP to an unverified account",
)
async def resend_otp(
    payload: EmailRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    email = await service.resend_otp(payload.email)
    return MessageResponse(message=f"New OTP sent successfully to {email}. Please check your email.")


@router.post(
    "/google",
    response_model=ApiResponse[AuthData],
    responses=_client_errors,
    summary="Sign in or sign up with a Google ID token",
)
async def google_auth(
    payload: GoogleAuthRequest,
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthData]:
    data, created = await service.google_sign_in(payload.token)
    message = (
        "Account created successfully with Google! Welcome to Jotter."
        if created
        else "Login successful! Welcome back."
    )
    return ApiResponse[AuthData](message=message, data=data)


@router.get(
    "/me",
    response_model=ApiResponse[UserData],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Account not verified", "model": ErrorResponse},
        404: {"description": "User no longer exists", "model": ErrorResponse},
    },
    summary="Current user profile",
)
async def me(ctx: AuthContext = Depends(require_auth)) -> ApiResponse[UserData]:
    return ApiResponse[UserData](
        message="User information retrieved successfully",
        data=UserData(user=UserProfile.model_validate(ctx.user)),
    )
