"""Async Data Access Layer for the DOCUMENT table.

Provides DocumentDAL with the catalogue operations the dashboard needs,
compatible with `utils.database_init.AsyncDatabaseInitializer`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from models.document_record import Document, Registration
from models.session_models import AnswerSource
from utils.database_init import AsyncDatabaseInitializer


class DocumentDAL:
    """Data access layer for registered documents.

    Several uploads may share the placeholder id in offline mode; the latest
    registration for an id replaces the earlier row.
    """

    _COLUMNS = ("id", "name", "size_bytes", "page_count", "source", "uploaded_at")
    _COLUMN_LIST = ", ".join(_COLUMNS)

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def save_registration(self, registration: Registration) -> None:
        """Insert or replace the DOCUMENT row for a registration."""
        doc = registration.document
        async with self._db.connection() as conn:
            await conn.execute(
                f"INSERT OR REPLACE INTO DOCUMENT ({self._COLUMN_LIST}) VALUES (?, ?, ?, ?, ?, ?)",
                (doc.id, doc.name, doc.size_bytes, doc.page_count, registration.source.value, doc.uploaded_at),
            )
            await conn.commit()

    async def get_document(self, document_id: str) -> Optional[Registration]:
        """Return the registration for `document_id`, or None if not found."""
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"SELECT {self._COLUMN_LIST} FROM DOCUMENT WHERE id = ?",
                (document_id,),
            )
            row = await cur.fetchone()
            return self._row_to_registration(row) if row else None

    async def list_documents(self, limit: int = 100, offset: int = 0) -> List[Registration]:
        """List registrations, newest first.

        Args:
            limit: Maximum number of rows to return.
            offset: Rows to skip.
        """
        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"SELECT {self._COLUMN_LIST} FROM DOCUMENT ORDER BY uploaded_at DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cur.fetchall()
            return [self._row_to_registration(r) for r in rows]

    @staticmethod
    def _row_to_registration(row: Sequence[object]) -> Registration:
        """Convert a DB row tuple into a Registration."""
        document = Document(
            id=row[0],
            name=row[1],
            size_bytes=int(row[2]),
            page_count=int(row[3]),
            uploaded_at=float(row[5]),
        )
        return Registration(document=document, source=AnswerSource(row[4]))
