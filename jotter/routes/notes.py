"""
Jotter Backend — Notes Route Handlers
=======================================

What:  Owner-scoped CRUD on /notes.
How:   Each handler takes the AuthContext produced by the auth guard and
       passes its user id to NoteService. Handlers never look at a note
       without the owner id.

Caching:
    Responses carry `Cache-Control: private, no-store`; notes are personal
    and mutable.
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from jotter.dependencies import get_note_service
from jotter.schemas.common import ApiResponse, ErrorResponse
from jotter.schemas.note import DeletedNoteData, NoteData, NoteListData, NoteRequest
from jotter.security import AuthContext, require_auth
from jotter.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])

NO_STORE = "private, no-store"

_auth_errors = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Account not verified", "model": ErrorResponse},
}
_not_found = {404: {"description": "Note not found", "model": ErrorResponse}}
_bad_body = {400: {"description": "Title and content are required", "model": ErrorResponse}}


@router.get(
    "",
    response_model=ApiResponse[NoteListData],
    responses=_auth_errors,
    summary="List the caller's notes (most recently updated first)",
)
async def list_notes(
    response: Response,
    ctx: AuthContext = Depends(require_auth),
    service: NoteService = Depends(get_note_service),
) -> ApiResponse[NoteListData]:
    data = await service.list_notes(ctx.user_id)
    response.headers["X-Total-Count"] = str(data.count)
    response.headers["Cache-Control"] = NO_STORE
    return ApiResponse[NoteListData](message="Notes retrieved successfully", data=data)


@router.post(
    "",
    response_model=ApiResponse[NoteData],
    status_code=status.HTTP_201_CREATED,
    responses={**_auth_errors, **_bad_body},
    summary="Create a note",
)
async def create_note(
    payload: NoteRequest,
    ctx: AuthContext = Depends(require_auth),
    service: NoteService = Depends(get_note_service),
) -> ApiResponse[NoteData]:
    data = await service.create_note(ctx.user_id, payload.title, payload.content)
    return ApiResponse[NoteData](message="Note created successfully", data=data)


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteData],
    responses={**_auth_errors, **_not_found},
    summary="Get one of the caller's notes",
)
async def get_note(
    note_id: str,
    response: Response,
    ctx: AuthContext = Depends(require_auth),
    service: NoteService = Depends(get_note_service),
) -> ApiResponse[NoteData]:
    data = await service.get_note(ctx.user_id, note_id)
    response.headers["Cache-Control"] = NO_STORE
    return ApiResponse[NoteData](message="Note retrieved successfully", data=data)


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteData],
    responses={**_auth_errors, **_bad_body, **_not_found},
    summary="Replace the title and content of one of the caller's notes",
)
async def update_note(
    note_id: str,
    payload: NoteRequest,
    ctx: AuthContext = Depends(require_auth),
    service: NoteService = Depends(get_note_service),
) -> ApiResponse[NoteData]:
    data = await service.update_note(ctx.user_id, note_id, payload.title, payload.content)
    return ApiResponse[NoteData](message="Note updated successfully", data=data)


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[DeletedNoteData],
    responses={**_auth_errors, **_not_found},
    summary="Delete one of the caller's notes",
)
async def delete_note(
    note_id: str,
    ctx: AuthContext = Depends(require_auth),
    service: NoteService = Depends(get_note_service),
) -> ApiResponse[DeletedNoteData]:
    data = await service.delete_note(ctx.user_id, note_id)
    return ApiResponse[DeletedNoteData](message="Note deleted successfully", data=data)
