"""
Jotter Backend — API Routes Package
=====================================

Route Inventory:
    - auth.py:    POST /auth/signup, /auth/verify, /auth/login,
                  /auth/verify-login, /auth/resend-otp, /auth/google
                  GET  /auth/me
    - notes.py:   GET/POST /notes, GET/PUT/DELETE /notes/{id}  (bearer token)
    - health.py:  GET  /health

Routes stay thin: read the body, call a service, wrap the result in the
{status: "SUCCESS", message, data} envelope.
"""
