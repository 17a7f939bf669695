"""Notes API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..core.models.user import User
from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.schemas.notes import (
    NoteCreate,
    NoteDetailResponse,
    NoteEnvelope,
    NoteListResponse,
    NoteSearchResponse,
    NoteUpdate,
)
from ..core.services import NoteStore
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)


def parse_note_id(note_id: str) -> UUID:
    """Unknown ids are 404s, whatever their shape."""
    try:
        return UUID(note_id)
    except ValueError:
        raise NotFoundError("Note not found")


@router.get("", response_model=NoteListResponse)
async def list_notes(
    page: int = Query(1),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's notes, newest first, 10 per page."""
    return await NoteStore(session).list_notes(current_user, page)


@router.post("", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a note owned by the caller."""
    note = await NoteStore(session).create_note(current_user, request)
    return NoteEnvelope(message="Note created successfully", note=note)


# registered before /{note_id} so "search" is not taken for an id
@router.get("/search", response_model=NoteSearchResponse)
async def search_notes(
    query: str = Query("", description="Title substring"),
    page: int = Query(1),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Search the caller's notes by title."""
    notes = await NoteStore(session).search_notes(current_user, query, page)
    return NoteSearchResponse(notes=notes)


@router.get("/{note_id}", response_model=NoteDetailResponse)
async def get_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    note = await NoteStore(session).get_note(current_user, parse_note_id(note_id))
    return NoteDetailResponse(note=note)


@router.put("/{note_id}", response_model=NoteEnvelope)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Update title and/or content of one of the caller's notes."""
    note = await NoteStore(session).update_note(current_user, parse_note_id(note_id), request)
    return NoteEnvelope(message="Note updated successfully", note=note)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    await NoteStore(session).delete_note(current_user, parse_note_id(note_id))
    return MessageResponse(message="Note deleted successfully")
