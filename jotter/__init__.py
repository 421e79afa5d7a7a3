"""
Jotter Backend — Application Package
======================================

What: Personal note-taking API with email-OTP and Google sign-in.
Who:  Imported by uvicorn (jotter.main:app), Alembic, pytest and `python -m jotter`.

Architecture Note:
    ┌─────────────────────────────────────┐
    │    Routes (/auth, /notes, /health)  │  ← envelope + status codes
    ├─────────────────────────────────────┤
    │   Services (auth, notes, OTP, JWT)  │  ← account lifecycle, ownership
    ├─────────────────────────────────────┤
    │  Stores (UserRepository, Notes…)    │  ← owner-scoped queries
    ├─────────────────────────────────────┤
    │   Models & Schemas (ORM, Pydantic)  │
    └─────────────────────────────────────┘

    Outbound collaborators (SMTP mailer, Google identity verifier) sit behind
    small abstract interfaces in jotter.services so tests can replace them.
"""

__version__ = "1.0.0"
