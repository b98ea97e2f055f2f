import os
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite


class AsyncDatabaseInitializer:
    """
    Manage the async SQLite document catalogue.

    - The database file is located at: <DATABASE_DIR>/documents.db
    - The directory comes from the `db_dir` argument or, when omitted, the
      DATABASE_DIR environment variable. A RuntimeError is raised if neither
      is set or the path is not a usable directory.
    - On the first call to `ensure_database()` for a given instance:
        * Any existing database file at that path is deleted.
        * A new database file is created with the DOCUMENT table.
      Registered documents therefore never outlive the process.
    - Subsequent calls to `ensure_database()` on the same instance are no-ops,
      so it is safe for `connection()` to call it.
    """

    def __init__(self, db_dir: Optional[Path | str] = None) -> None:
        raw_dir = str(db_dir) if db_dir is not None else os.getenv("DATABASE_DIR")

        if raw_dir is None or not raw_dir.strip():
            raise RuntimeError(
                "DATABASE_DIR environment variable must be set to a writable "
                "directory path where the SQLite database file will be stored."
            )

        path = Path(raw_dir).expanduser()

        if path.exists() and not path.is_dir():
            raise RuntimeError(
                f"DATABASE_DIR={raw_dir!r} points to a file, not a directory "
                f"({path}). Please set DATABASE_DIR to a directory path."
            )

        try:
            path.mkdir(parents=True, exist_ok=True)
        except Exception as exc:
            raise RuntimeError(
                f"Failed to create or access database directory at {path}"
            ) from exc

        self.db_dir = path
        self.db_path = self.db_dir / "documents.db"
        self._initialized = False

    async def ensure_database(self) -> None:
        """
        Ensure a fresh SQLite database exists at `self.db_path`.

        Subsequent calls on the same instance are no-ops.
        """
        if self._initialized:
            return

        # Start clean on every startup; documents are scoped to the process.
        if self.db_path.exists():
            try:
                self.db_path.unlink()
            except Exception as exc:
                raise RuntimeError(
                    f"Failed to delete existing database at {self.db_path}"
                ) from exc

        max_attempts = 3
        for attempt in range(1, max_attempts + 1):
            try:
                async with aiosqlite.connect(self.db_path) as db:
                    await db.execute(
                        """
                        CREATE TABLE IF NOT EXISTS DOCUMENT (
                            id TEXT PRIMARY KEY,
                            name TEXT NOT NULL,
                            size_bytes INTEGER NOT NULL,
                            page_count INTEGER NOT NULL DEFAULT 0,
                            source TEXT NOT NULL,
                            uploaded_at REAL NOT NULL
                        )
                        """
                    )
                    await db.commit()
                break
            except FileNotFoundError:
                # On some platforms a transient missing file error may occur; retry a few times.
                if attempt >= max_attempts:
                    raise
                await asyncio.sleep(0.1 * attempt)

        self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Async context manager yielding an `aiosqlite.Connection`.

        The database is created/reset on the first use via `ensure_database()`.
        """
        await self.ensure_database()
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()
