"""
Jotter Backend — Stores
=========================

What:  Thin async repositories over the ORM: the credential store (users)
       and the notes store.
How:   Each repository wraps the request's AsyncSession. Writes are flushed,
       not committed; the session dependency commits once per request.
Who:   Constructed by AuthService / NoteService and the auth guard.

Ownership rule:
    NoteRepository has no "get by id" method. Every single-note lookup takes
    both the note id and the owner id, so a foreign note and a missing note
    look identical to the caller.
"""

import uuid
from typing import List, Optional

from sqlalchemy import desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.models.note import Note
from jotter.models.user import User
from jotter.validation import normalize_email


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def get_by_email_or_google_id(self, email: str, google_id: str) -> Optional[User]:
        """
        Find the account a Google identity maps to.

        An exact google_id match wins over an email match, so a user whose
        email changed at Google still lands on their own account.
        """
        result = await self.session.execute(
            select(User).where(
                or_(User.email == normalize_email(email), User.google_id == google_id)
            )
        )
        candidates = list(result.scalars().all())
        for user in candidates:
            if user.google_id == google_id:
                return user
        return candidates[0] if candidates else None

    def add(self, user: User) -> None:
        self.session.add(user)

    async def save(self) -> None:
        await self.session.flush()


class NoteRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_owner(self, owner_id: uuid.UUID) -> List[Note]:
        result = await self.session.execute(
            select(Note)
            .where(Note.user_id == owner_id)
            .order_by(desc(Note.updated_at), desc(Note.created_at))
        )
        return list(result.scalars().all())

    async def get_owned(self, note_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Note]:
        result = await self.session.execute(
            select(Note).where(Note.id == note_id, Note.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    def add(self, note: Note) -> None:
        self.session.add(note)

    async def delete(self, note: Note) -> None:
        await self.session.delete(note)
        await self.session.flush()

    async def save(self) -> None:
        await self.session.flush()
