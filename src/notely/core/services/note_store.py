"""Note store: owner-scoped CRUD and search over notes."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..exceptions import ForbiddenError, NotFoundError
from ..logging import get_logger
from ..models.note import Note
from ..models.user import User
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from .interfaces import INoteStore

logger = get_logger("notes")

# largest offset a signed 64-bit column accepts
_MAX_OFFSET = 2**63 - 1


class NoteStore(INoteStore):
    """Note access scoped to the authenticated caller.

    Every method takes the ``user`` resolved by ``AuthService.verify``;
    ownership is checked here, never inferred from request state.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.per_page = get_settings().notes_per_page
        self.max_page = _MAX_OFFSET // self.per_page

    async def list_notes(self, user: User, page: int = 1) -> NoteListResponse:
        """Caller's notes, newest first, fixed page size."""
        page = self._clamp_page(page)
        notes, total = await self.note_repo.list_user_notes(user.id, page, self.per_page)
        return self._page(notes, total, page)

    async def create_note(self, user: User, request: NoteCreate) -> NoteResponse:
        """Create a note; the owner is always the caller."""
        note = await self.note_repo.create_note(
            {"title": request.title, "content": request.content, "user_id": user.id}
        )
        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user.id)})
        return NoteResponse.model_validate(note)

    async def get_note(self, user: User, note_id: UUID) -> NoteResponse:
        note = await self._get_owned_note(user, note_id)
        return NoteResponse.model_validate(note)

    async def update_note(self, user: User, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Apply title/content changes to one of the caller's notes."""
        note = await self._get_owned_note(user, note_id)

        changes = request.changes()
        if changes:
            note = await self.note_repo.update_note(note, changes)
            logger.info(
                "Note updated",
                extra={"note_id": str(note_id), "fields": sorted(changes)},
            )
        return NoteResponse.model_validate(note)

    async def delete_note(self, user: User, note_id: UUID) -> bool:
        note = await self._get_owned_note(user, note_id)
        await self.note_repo.delete_note(note)
        logger.info("Note deleted", extra={"note_id": str(note_id), "user_id": str(user.id)})
        return True

    async def search_notes(self, user: User, query: str, page: int = 1) -> NoteListResponse:
        """Title substring search. A blank query matches nothing."""
        page = self._clamp_page(page)
        query = (query or "").strip()
        if not query:
            return self._page([], 0, page)

        notes, total = await self.note_repo.search_user_notes(user.id, query, page, self.per_page)
        return self._page(notes, total, page)

    async def _get_owned_note(self, user: User, note_id: UUID) -> Note:
        """Load a note, distinguishing missing (404) from foreign (403)."""
        note = await self.note_repo.get_by_id(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        if not note.is_owned_by(user.id):
            logger.warning(
                "Cross-owner note access denied",
                extra={"note_id": str(note_id), "user_id": str(user.id)},
            )
            raise ForbiddenError()
        return note

    def _clamp_page(self, page: int) -> int:
        return min(max(page, 1), self.max_page)

    def _page(self, notes: list[Note], total: int, page: int) -> NoteListResponse:
        return NoteListResponse.create(
            items=[NoteResponse.model_validate(n) for n in notes],
            total=total,
            page=page,
            per_page=self.per_page,
        )
