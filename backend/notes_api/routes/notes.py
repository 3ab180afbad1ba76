"""
Notes API — Notes Route Handlers
==================================

What:  CRUD endpoints under /api/notes.
How:   FastAPI validates path and body parameters against the declared
       schemas first (violations → 400, the store is never touched), then the
       handler delegates to NoteService with the process-wide gateway.

Route Inventory:
    GET    /api/notes                 list all notes
    GET    /api/notes/title/{title}   notes with an exact title
    GET    /api/notes/{id}            single note (id not validated)
    POST   /api/notes                 create
    PUT    /api/notes/{id}            full replace
    PATCH  /api/notes/{id}            partial update
    DELETE /api/notes/{id}            delete
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path

from notes_api.database import PersistenceGateway, get_gateway
from notes_api.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteCreatedResponse,
    NOTE_ID_PATTERN,
    NoteResponse,
    NoteUpdate,
)
from notes_api.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

_SERVER_ERRORS = {
    500: {"description": "Server error", "model": ErrorResponse},
    503: {"description": "Connection pool exhausted", "model": ErrorResponse},
}


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses=_SERVER_ERRORS,
    summary="Retrieve all notes",
)
async def list_notes(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> List[NoteResponse]:
    return await note_service.list_notes(gateway)


@router.get(
    "/notes/title/{title}",
    response_model=List[NoteResponse],
    responses={
        404: {"description": "No notes with this title", "model": ErrorResponse},
        **_SERVER_ERRORS,
    },
    summary="Get notes by title",
)
async def get_notes_by_title(
    title: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> List[NoteResponse]:
    """Exact match against the stored (escaped) title."""
    return await note_service.get_notes_by_title(gateway, title)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        **_SERVER_ERRORS,
    },
    summary="Get a note by ID",
)
async def get_note(
    note_id: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> NoteResponse:
    """
    Args:
        note_id: Taken as a plain string. A non-integer id answers 404,
                 never 400.
    """
    return await note_service.get_note(gateway, note_id)


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteCreatedResponse,
    responses={
        400: {"description": "Invalid title or content", "model": ErrorResponse},
        **_SERVER_ERRORS,
    },
    summary="Create a new note",
)
async def create_note(
    payload: NoteCreate,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> NoteCreatedResponse:
    return await note_service.create_note(gateway, payload)


@router.put(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid ID or body", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **_SERVER_ERRORS,
    },
    summary="Update a note by ID",
    description="Full replace: a field omitted from the body is stored as null.",
)
async def replace_note(
    note_id: str = Path(..., pattern=NOTE_ID_PATTERN),
    payload: Optional[NoteUpdate] = None,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> MessageResponse:
    return await note_service.replace_note(gateway, note_id, payload or NoteUpdate())


@router.patch(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid ID or body", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **_SERVER_ERRORS,
    },
    summary="Partially update a note by ID",
    description="A field omitted from the body keeps its stored value.",
)
async def patch_note(
    note_id: str = Path(..., pattern=NOTE_ID_PATTERN),
    payload: Optional[NoteUpdate] = None,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> MessageResponse:
    return await note_service.patch_note(gateway, note_id, payload or NoteUpdate())


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid ID", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **_SERVER_ERRORS,
    },
    summary="Delete a note by ID",
)
async def delete_note(
    note_id: str = Path(..., pattern=NOTE_ID_PATTERN),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> MessageResponse:
    return await note_service.delete_note(gateway, note_id)
