"""
Jotter Backend — Note Service (Owner-Scoped CRUD)
===================================================

What:  List, create, read, update and delete the caller's notes.
How:   Validates input explicitly, then delegates to NoteRepository with the
       owner id taken from the AuthContext. Returns response payload models.
Who:   Built per request by the get_note_service dependency.

Ownership:
    Every operation takes the owner id from the authenticated context and
    passes it to the store. A note id belonging to someone else, a deleted
    id and a malformed id all produce the same NotFoundError.

Error Handling Strategy:
    Application exceptions propagate unchanged. SQLAlchemy errors are logged
    and wrapped in DatabaseError, which hides internal details from clients.
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from jotter.exceptions import DatabaseError, NotFoundError
from jotter.models.note import Note
from jotter.models.user import utcnow
from jotter.repositories import NoteRepository
from jotter.schemas.note import (
    DeletedNoteData,
    DeletedNoteSummary,
    NoteData,
    NoteListData,
    NoteOut,
)
from jotter.validation import parse_note_id, validate_note_fields

logger = logging.getLogger(__name__)


class NoteService:
    def __init__(self, notes: NoteRepository):
        self.notes = notes

    async def list_notes(self, owner_id: uuid.UUID) -> NoteListData:
        """All of the owner's notes, most recently updated first."""
        try:
            rows = await self.notes.list_for_owner(owner_id)
        except SQLAlchemyError as e:
            logger.error("Database error listing notes for %s: %s", owner_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve notes",
                context={"error_type": type(e).__name__},
            ) from e

        notes = [NoteOut.model_validate(note) for note in rows]
        return NoteListData(notes=notes, count=len(notes))

    async def create_note(self, owner_id: uuid.UUID, title: str, content: str) -> NoteData:
        """
        Persist a new note for `owner_id`.

        Raises:
            ValidationError: title or content missing/blank after trimming
            DatabaseError: insert failed
        """
        fields = validate_note_fields(title, content)
        note = Note(user_id=owner_id, title=fields.title, content=fields.content)
        try:
            self.notes.add(note)
            await self.notes.save()
        except SQLAlchemyError as e:
            logger.error("Database error creating note for %s: %s", owner_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to create note",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created for user %s", note.id, owner_id)
        return NoteData(note=NoteOut.model_validate(note))

    async def get_note(self, owner_id: uuid.UUID, raw_note_id: str) -> NoteData:
        note = await self._owned(owner_id, raw_note_id)
        return NoteData(note=NoteOut.model_validate(note))

    async def update_note(
        self, owner_id: uuid.UUID, raw_note_id: str, title: str, content: str
    ) -> NoteData:
        """
        Replace title and content of an owned note and bump updated_at.

        Fields are validated before the lookup, so a bad body on a foreign id
        is a 400, not a 404.
        """
        fields = validate_note_fields(title, content)
        note = await self._owned(owner_id, raw_note_id)

        note.title = fields.title
        note.content = fields.content
        note.updated_at = utcnow()
        try:
            await self.notes.save()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note.id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to update note",
                context={"note_id": str(note.id)},
            ) from e

        return NoteData(note=NoteOut.model_validate(note))

    async def delete_note(self, owner_id: uuid.UUID, raw_note_id: str) -> DeletedNoteData:
        note = await self._owned(owner_id, raw_note_id)
        summary = DeletedNoteSummary(id=note.id, title=note.title)
        try:
            await self.notes.delete(note)
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note.id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to delete note",
                context={"note_id": str(note.id)},
            ) from e

        logger.info("Note %s deleted by user %s", summary.id, owner_id)
        return DeletedNoteData(deleted_note=summary)

    async def _owned(self, owner_id: uuid.UUID, raw_note_id: str) -> Note:
        note_id = parse_note_id(raw_note_id)
        try:
            note = await self.notes.get_owned(note_id, owner_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve note",
                context={"note_id": str(note_id)},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", context={"note_id": str(note_id)})
        return note
