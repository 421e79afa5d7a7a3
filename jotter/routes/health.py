"""
Jotter Backend — Health Check Route
=====================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs `SELECT 1` against the store and reports aggregate status, plus a
       short overview of the API surface.
Who:   Called by container health checks and uptime monitors.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from jotter import __version__
from jotter.database import engine
from jotter.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()

ENDPOINTS = {
    "auth": {
        "signup": "POST /auth/signup",
        "verify": "POST /auth/verify",
        "login": "POST /auth/login",
        "verifyLogin": "POST /auth/verify-login",
        "resendOtp": "POST /auth/resend-otp",
        "google": "POST /auth/google",
        "me": "GET /auth/me (requires JWT)",
    },
    "notes": {
        "getAll": "GET /notes (requires JWT)",
        "create": "POST /notes (requires JWT)",
        "getOne": "GET /notes/:id (requires JWT)",
        "update": "PUT /notes/:id (requires JWT)",
        "delete": "DELETE /notes/:id (requires JWT)",
    },
}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
        endpoints=ENDPOINTS,
    )
