"""Note repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note


class NoteRepository:
    """Repository for note database operations.

    Listing and search are always filtered by owner; single-note lookups are
    not, so the service layer can tell "missing" from "someone else's".
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID regardless of owner."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_note(self, note: Note, update_data: dict) -> Note:
        """Apply column updates to a loaded note in one commit."""
        for key, value in update_data.items():
            setattr(note, key, value)

        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note: Note) -> None:
        """Delete a loaded note."""
        await self.session.delete(note)
        await self.session.commit()

    async def list_user_notes(
        self, user_id: UUID, page: int = 1, per_page: int = 10
    ) -> tuple[List[Note], int]:
        """List a user's notes, newest first."""
        return await self._paginate(user_id, None, page, per_page)

    async def search_user_notes(
        self, user_id: UUID, query: str, page: int = 1, per_page: int = 10
    ) -> tuple[List[Note], int]:
        """Search a user's notes by title substring."""
        return await self._paginate(user_id, query, page, per_page)

    async def _paginate(
        self, user_id: UUID, title_query: Optional[str], page: int, per_page: int
    ) -> tuple[List[Note], int]:
        conditions = [Note.user_id == user_id]
        if title_query is not None:
            # LIKE wildcards in the query are matched literally
            conditions.append(Note.title.contains(title_query, autoescape=True))

        count_stmt = select(func.count(Note.id)).where(*conditions)
        total_result = await self.session.execute(count_stmt)
        total_count = total_result.scalar() or 0

        offset = (page - 1) * per_page
        if offset >= total_count:
            # past the end; also keeps huge offsets away from the database
            return [], total_count

        stmt = (
            select(Note)
            .where(*conditions)
            .order_by(desc(Note.created_at), desc(Note.id))
            .offset(offset)
            .limit(per_page)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total_count
