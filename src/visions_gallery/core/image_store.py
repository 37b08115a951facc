"""SQLite storage for gallery image records.

The gallery keeps a single ``images`` table:

- ``id`` is assigned by SQLite (``AUTOINCREMENT``, so ids are never reused
  after a delete)
- ``created_at`` defaults to the insertion instant (UTC)
- list order is reverse-chronological (newest first), ties broken by id

Each operation runs on its own connection and commits before returning.  An
in-memory store (``":memory:"``) keeps one shared connection instead, since
every new in-memory connection would otherwise see an empty database.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import closing, contextmanager
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from .config import IN_MEMORY_DATABASE

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the underlying database operation fails."""


@dataclass(frozen=True)
class ImageRecord:
    """A single persisted gallery image."""

    id: int
    url: str
    title: str | None = None
    description: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Return the record as a plain dictionary."""
        return asdict(self)


def _parse_timestamp(value) -> datetime | None:
    """Convert a stored ``created_at`` value to an aware UTC datetime."""
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        # Rows written outside the API may carry arbitrary text here.
        logger.warning(f"Unparseable created_at value: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _row_to_record(row: sqlite3.Row) -> ImageRecord:
    return ImageRecord(
        id=row["id"],
        url=row["url"],
        title=row["title"],
        description=row["description"],
        created_at=_parse_timestamp(row["created_at"]),
    )


class ImageStore:
    """Manage gallery image records using SQLite.

    Supports listing, inserting, updating, and deleting records.  All
    database failures surface as :class:`StoreError`; nothing is retried.
    """

    def __init__(self, db_path: str | Path):
        """Open the store and make sure the schema exists.

        Args:
            db_path: Path to SQLite database file, or ``":memory:"``
        """
        self.db_path = db_path
        self._lock = threading.Lock()
        self._shared_conn: sqlite3.Connection | None = None

        if str(db_path) == IN_MEMORY_DATABASE:
            self._shared_conn = sqlite3.connect(IN_MEMORY_DATABASE, check_same_thread=False)
            self._shared_conn.row_factory = sqlite3.Row
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self.initialize()
        logger.info(f"Initialized image store at {self.db_path}")

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside a committed-or-rolled-back transaction.

        Raises:
            StoreError: If SQLite reports any error.
        """
        with self._lock:
            try:
                if self._shared_conn is not None:
                    conn = self._shared_conn
                    with conn:
                        yield conn.cursor()
                else:
                    with closing(sqlite3.connect(self.db_path)) as conn:
                        conn.row_factory = sqlite3.Row
                        with conn:
                            yield conn.cursor()
            except sqlite3.Error as e:
                logger.error(f"Image store error on {self.db_path}: {e}")
                raise StoreError(str(e)) from e

    def initialize(self) -> None:
        """Create the images table if it doesn't exist.

        Safe to call on every start; existing rows are never touched.
        """
        with self._transaction() as cursor:
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS images (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT NOT NULL,
                    title TEXT,
                    description TEXT,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
                """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_images_created_at
                ON images(created_at DESC)
                """)

    def list(self) -> list[ImageRecord]:
        """Get all image records.

        Returns:
            Records sorted by creation time, newest first
        """
        with self._transaction() as cursor:
            cursor.execute("""
                SELECT id, url, title, description, created_at
                FROM images
                ORDER BY created_at DESC, id DESC
                """)
            rows = cursor.fetchall()
        return [_row_to_record(row) for row in rows]

    def get(self, image_id: int) -> ImageRecord | None:
        """Get a single record by id, or None if it does not exist."""
        with self._transaction() as cursor:
            cursor.execute(
                """
                SELECT id, url, title, description, created_at
                FROM images WHERE id = ?
                """,
                (image_id,),
            )
            row = cursor.fetchone()
        return _row_to_record(row) if row is not None else None

    def count(self) -> int:
        """Get total count of image records."""
        with self._transaction() as cursor:
            cursor.execute("SELECT COUNT(*) FROM images")
            result = cursor.fetchone()
        return result[0] if result else 0

    def insert(
        self, url: str, title: str | None = None, description: str | None = None
    ) -> ImageRecord:
        """Add a new image record.

        Args:
            url: External image URL (required, non-empty)
            title: Optional title
            description: Optional description

        Returns:
            The stored record, including its assigned id and created_at

        Raises:
            ValueError: If url is empty
            StoreError: If the insert fails
        """
        if not url:
            raise ValueError("url is required")

        with self._transaction() as cursor:
            cursor.execute(
                "INSERT INTO images (url, title, description) VALUES (?, ?, ?)",
                (url, title, description),
            )
            image_id = cursor.lastrowid
            cursor.execute(
                """
                SELECT id, url, title, description, created_at
                FROM images WHERE id = ?
                """,
                (image_id,),
            )
            row = cursor.fetchone()

        logger.info(f"Added image {image_id}: {url}")
        return _row_to_record(row)

    def update(
        self,
        image_id: int,
        url: str | None,
        title: str | None = None,
        description: str | None = None,
    ) -> bool:
        """Replace url, title, and description of an existing record.

        id and created_at are never modified.

        Returns:
            True if a record matched, False if no record has this id
        """
        with self._transaction() as cursor:
            cursor.execute(
                "UPDATE images SET url = ?, title = ?, description = ? WHERE id = ?",
                (url, title, description, image_id),
            )
            was_updated = cursor.rowcount > 0

        if was_updated:
            logger.info(f"Updated image {image_id}")
        else:
            logger.debug(f"No image to update with id {image_id}")
        return was_updated

    def delete(self, image_id: int) -> bool:
        """Remove a record.

        Returns:
            True if a record was removed, False if no record has this id
        """
        with self._transaction() as cursor:
            cursor.execute("DELETE FROM images WHERE id = ?", (image_id,))
            was_deleted = cursor.rowcount > 0

        if was_deleted:
            logger.info(f"Deleted image {image_id}")
        else:
            logger.debug(f"No image to delete with id {image_id}")
        return was_deleted

    def close(self) -> None:
        """Release the shared in-memory connection, if any."""
        if self._shared_conn is not None:
            self._shared_conn.close()
            self._shared_conn = None
