"""Short-lived storage of an in-progress booking across a login redirect."""

import logging
import sqlite3
from datetime import datetime, timedelta
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class PendingSelection(BaseModel):
    """What the user had picked when they were sent to log in."""

    slug: str = Field(..., description="Restaurant slug the selection belongs to")
    date: str
    guest_count: int = Field(..., ge=1)
    place_id: int | None = None
    time: str | None = None
    notes: str = ""
    saved_at: datetime = Field(default_factory=datetime.now)


class PendingSelectionStore:
    """Keeps at most one pending selection per restaurant in SQLite.

    Entries older than ``ttl_minutes`` are treated as absent.
    """

    def __init__(self, db_path: Path, ttl_minutes: int = 30) -> None:
        self.db_path = Path(db_path)
        self.ttl = timedelta(minutes=ttl_minutes)
        self._init_db()

    def _init_db(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS pending_selections (
                slug TEXT PRIMARY KEY,
                payload TEXT NOT NULL,
                saved_at TEXT NOT NULL
            )
        """)

        conn.commit()
        conn.close()
        logger.debug(f"Pending selection database initialized at {self.db_path}")

    def save(self, selection: PendingSelection) -> None:
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute(
            """
            INSERT OR REPLACE INTO pending_selections (slug, payload, saved_at)
            VALUES (?, ?, ?)
        """,
            (selection.slug, selection.model_dump_json(), selection.saved_at.isoformat()),
        )

        conn.commit()
        conn.close()
        logger.info(f"Saved pending selection for {selection.slug}")

    def load(self, slug: str) -> PendingSelection | None:
        """Return the unexpired selection for ``slug``, if any."""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute(
            "SELECT payload FROM pending_selections WHERE slug = ?",
            (slug,),
        )
        row = cursor.fetchone()
        conn.close()

        if row is None:
            return None

        selection = PendingSelection.model_validate_json(row[0])
        if datetime.now() - selection.saved_at > self.ttl:
            logger.info(f"Pending selection for {slug} expired")
            self.delete(slug)
            return None
        return selection

    def delete(self, slug: str) -> None:
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()
        cursor.execute("DELETE FROM pending_selections WHERE slug = ?", (slug,))
        conn.commit()
        conn.close()

    def cleanup_expired(self) -> int:
        """Remove expired selections.

        Returns:
            Number of selections removed
        """
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cutoff = (datetime.now() - self.ttl).isoformat()
        cursor.execute("DELETE FROM pending_selections WHERE saved_at < ?", (cutoff,))

        deleted = cursor.rowcount
        conn.commit()
        conn.close()

        if deleted > 0:
            logger.info(f"Cleaned up {deleted} expired pending selections")
        return deleted
