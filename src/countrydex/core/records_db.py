"""SQLite database for the visited-countries collection."""

import logging
import sqlite3
from datetime import UTC, datetime, timedelta
from pathlib import Path

from countrydex.core.errors import StoreError

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, image_path, created_at"


class RecordsDB:
    """Manage the ``countries`` table using SQLite.

    Each row is one collection entry: a user-supplied name, the generated
    filename of its photo inside the content directory, and the insertion
    timestamp. Rows are returned as plain dictionaries so they can be handed
    straight to the API response models.

    A fresh connection is opened per operation, so a single instance can be
    shared between request handlers.
    """

    def __init__(self, db_path: Path):
        """Initialize the records database.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize_db()
        logger.info(f"Initialized records database at {self.db_path}")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize_db(self) -> None:
        """Create database schema if it doesn't exist."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                # AUTOINCREMENT keeps ids from being reused after deletes
                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS countries (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        image_path TEXT NOT NULL,
                        created_at TIMESTAMP NOT NULL
                    )
                    """)

                cursor.execute("""
                    CREATE INDEX IF NOT EXISTS idx_countries_created_at
                    ON countries(created_at DESC)
                    """)

                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error initializing records database {self.db_path}: {e}")
            raise StoreError(str(e)) from e

    def list_entries(self) -> list[dict]:
        """Get every collection entry.

        Returns:
            List of entry dictionaries, newest first
        """
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(f"""
                    SELECT {_COLUMNS} FROM countries
                    ORDER BY created_at DESC, id DESC
                    """)
                return [dict(row) for row in cursor.fetchall()]

        except sqlite3.Error as e:
            logger.error(f"Error listing countries: {e}")
            raise StoreError(str(e)) from e

    def get(self, entry_id: int) -> dict | None:
        """Look up a single entry.

        Args:
            entry_id: Primary key of the entry

        Returns:
            Entry dictionary, or None if no row has that id
        """
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"SELECT {_COLUMNS} FROM countries WHERE id = ? LIMIT 1",
                    (entry_id,),
                )
                row = cursor.fetchone()
                return dict(row) if row is not None else None

        except sqlite3.Error as e:
            logger.error(f"Error reading country {entry_id}: {e}")
            raise StoreError(str(e)) from e

    def insert(self, name: str, image_path: str) -> dict:
        """Add a new entry.

        The creation timestamp is always later than every stored one, so
        two back-to-back inserts can never share a ``created_at`` value.

        Args:
            name: Country name as entered by the user
            image_path: Generated filename of the stored photo

        Returns:
            The newly created entry
        """
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT MAX(created_at) FROM countries")
                latest = cursor.fetchone()[0]

                created = datetime.now(UTC)
                if latest is not None:
                    floor = datetime.fromisoformat(latest) + timedelta(microseconds=1)
                    created = max(created, floor)
                created_at = created.isoformat()

                cursor.execute(
                    """
                    INSERT INTO countries (name, image_path, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (name, image_path, created_at),
                )
                conn.commit()
                entry_id = cursor.lastrowid

        except sqlite3.Error as e:
            logger.error(f"Error inserting country {name!r}: {e}")
            raise StoreError(str(e)) from e

        logger.info(f"Added country {entry_id}: {name!r} ({image_path})")
        return {
            "id": entry_id,
            "name": name,
            "image_path": image_path,
            "created_at": created_at,
        }

    def update_name(self, entry_id: int, name: str) -> bool:
        """Rename an existing entry.

        Args:
            entry_id: Primary key of the entry
            name: New country name

        Returns:
            True if a row was updated, False if the id does not exist
        """
        return self._update(entry_id, {"name": name})

    def update_image(self, entry_id: int, image_path: str, name: str | None = None) -> bool:
        """Point an existing entry at a new photo, optionally renaming it too.

        Args:
            entry_id: Primary key of the entry
            image_path: Generated filename of the replacement photo
            name: New country name, or None to keep the current one

        Returns:
            True if a row was updated, False if the id does not exist
        """
        changes = {"image_path": image_path}
        if name is not None:
            changes["name"] = name
        return self._update(entry_id, changes)

    def _update(self, entry_id: int, changes: dict[str, str]) -> bool:
        # Column names come from the two public callers above, never from input
        assignments = ", ".join(f"{column} = ?" for column in changes)
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"UPDATE countries SET {assignments} WHERE id = ?",
                    (*changes.values(), entry_id),
                )
                conn.commit()
                was_updated = cursor.rowcount > 0

        except sqlite3.Error as e:
            logger.error(f"Error updating country {entry_id}: {e}")
            raise StoreError(str(e)) from e

        if was_updated:
            logger.info(f"Updated country {entry_id}: {sorted(changes)}")
        else:
            logger.debug(f"No country to update with id {entry_id}")
        return was_updated

    def delete(self, entry_id: int) -> bool:
        """Remove an entry.

        Args:
            entry_id: Primary key of the entry

        Returns:
            True if a row was removed, False if the id did not exist
        """
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM countries WHERE id = ?", (entry_id,))
                conn.commit()
                was_deleted = cursor.rowcount > 0

        except sqlite3.Error as e:
            logger.error(f"Error deleting country {entry_id}: {e}")
            raise StoreError(str(e)) from e

        if was_deleted:
            logger.info(f"Deleted country {entry_id}")
        else:
            logger.debug(f"No country to delete with id {entry_id}")
        return was_deleted

    def count(self) -> int:
        """Get total number of entries.

        Returns:
            Number of stored countries
        """
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT COUNT(*) FROM countries")
                result = cursor.fetchone()
                return result[0] if result else 0

        except sqlite3.Error as e:
            logger.error(f"Error counting countries: {e}")
            raise StoreError(str(e)) from e
