"""
Jotter Backend — Middleware Package
=====================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: generate the correlation id used by every log line
    2. Logging: one access line with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles browser preflight)
"""
