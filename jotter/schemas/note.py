"""
Jotter Backend — Note Request/Response Schemas
================================================

What:  Pydantic models defining the /notes contract.
How:   FastAPI serializes the response models by alias (camelCase), so the
       wire format is {id, userId, title, content, createdAt, updatedAt}.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from jotter.schemas.common import CamelModel


class NoteRequest(BaseModel):
    """Body for POST /notes and PUT /notes/{id}. Both fields are required."""

    title: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)


class NoteOut(CamelModel):
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    user_id: uuid.UUID = Field(description="Owning user")
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


class NoteData(CamelModel):
    note: NoteOut


class NoteListData(CamelModel):
    """Every note the caller owns, most recently updated first."""

    notes: List[NoteOut]
    count: int


class DeletedNoteSummary(CamelModel):
    id: uuid.UUID
    title: str


class DeletedNoteData(CamelModel):
    deleted_note: DeletedNoteSummary
