"""
Jotter Backend — Note Service Unit Tests
===========================================

What:  Tests for NoteService business logic without a database.
How:   NoteRepository wraps the mock AsyncSession from conftest.py; query
       results are set on the mocked execute() return value.

What we test:
    ✅ Validation runs before any store access
    ✅ Owner id is stamped on new notes
    ✅ Missing / foreign / malformed ids raise NotFoundError
    ✅ SQLAlchemy errors are wrapped in DatabaseError
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from jotter.exceptions import DatabaseError, NotFoundError, ValidationError
from jotter.models.note import Note
from jotter.repositories import NoteRepository
from jotter.services.note_service import NoteService


def make_note(owner_id, title="Groceries", content="milk"):
    now = datetime.now(timezone.utc)
    return Note(
        id=uuid.uuid4(),
        user_id=owner_id,
        title=title,
        content=content,
        created_at=now,
        updated_at=now,
    )


def returns_one(session, value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    session.execute.return_value = result


class TestCreateNote:
    @pytest.mark.asyncio
    async def test_stamps_owner_and_trims(self, mock_db_session):
        owner = uuid.uuid4()
        service = NoteService(NoteRepository(mock_db_session))

        def assign_defaults(note):
            note.id = uuid.uuid4()
            note.created_at = note.updated_at = datetime.now(timezone.utc)

        mock_db_session.add.side_effect = assign_defaults

        result = await service.create_note(owner, "  Title ", " Body ")

        added = mock_db_session.add.call_args.args[0]
        assert added.user_id == owner
        assert result.note.title == "Title"
        assert result.note.content == "Body"
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_blank_fields_never_reach_store(self, mock_db_session):
        service = NoteService(NoteRepository(mock_db_session))
        with pytest.raises(ValidationError):
            await service.create_note(uuid.uuid4(), "", "Body")
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_flush_failure_is_database_error(self, mock_db_session):
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        service = NoteService(NoteRepository(mock_db_session))
        with pytest.raises(DatabaseError) as exc_info:
            await service.create_note(uuid.uuid4(), "Title", "Body")
        assert exc_info.value.message == "Failed to create note"


class TestOwnedLookups:
    @pytest.mark.asyncio
    async def test_get_owned_note(self, mock_db_session):
        owner = uuid.uuid4()
        note = make_note(owner)
        returns_one(mock_db_session, note)

        result = await NoteService(NoteRepository(mock_db_session)).get_note(owner, str(note.id))
        assert result.note.id == note.id

    @pytest.mark.asyncio
    async def test_missing_or_foreign_note(self, mock_db_session):
        returns_one(mock_db_session, None)
        with pytest.raises(NotFoundError) as exc_info:
            await NoteService(NoteRepository(mock_db_session)).get_note(uuid.uuid4(), str(uuid.uuid4()))
        assert exc_info.value.message == "Note not found"

    @pytest.mark.asyncio
    async def test_malformed_id_skips_query(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await NoteService(NoteRepository(mock_db_session)).get_note(uuid.uuid4(), "abc")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_validates_before_lookup(self, mock_db_session):
        with pytest.raises(ValidationError):
            await NoteService(NoteRepository(mock_db_session)).update_note(
                uuid.uuid4(), str(uuid.uuid4()), "Title", "   "
            )
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_bumps_timestamp(self, mock_db_session):
        owner = uuid.uuid4()
        note = make_note(owner)
        before = note.updated_at
        returns_one(mock_db_session, note)

        result = await NoteService(NoteRepository(mock_db_session)).update_note(
            owner, str(note.id), "New", "Text"
        )
        assert result.note.title == "New"
        assert note.updated_at >= before
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_returns_summary(self, mock_db_session):
        owner = uuid.uuid4()
        note = make_note(owner, title="Bye")
        returns_one(mock_db_session, note)

        result = await NoteService(NoteRepository(mock_db_session)).delete_note(owner, str(note.id))
        assert result.deleted_note.id == note.id
        assert result.deleted_note.title == "Bye"
        mock_db_session.delete.assert_awaited_once_with(note)

    @pytest.mark.asyncio
    async def test_query_failure_is_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))
        with pytest.raises(DatabaseError):
            await NoteService(NoteRepository(mock_db_session)).list_notes(uuid.uuid4())
