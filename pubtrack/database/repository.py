"""Paper repository for the live document store (SQLite)."""

import logging
import sqlite3
import threading
from collections.abc import Callable, Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

from pubtrack.errors import PaperNotFoundError
from pubtrack.models.paper import DEFAULT_STATUS, PaperRecord, StoredPaper

logger = logging.getLogger(__name__)

# Called as listener(event, paper) after every committed change.
# event is one of "added", "updated", "deleted", "replaced".
ChangeListener = Callable[[str, Optional[StoredPaper]], None]

_COLUMNS = "key, paper_id, title, status, color, font_color, highlight"

_UPDATABLE = {
    "id": "paper_id",
    "title": "title",
    "status": "status",
    "color": "color",
    "font_color": "font_color",
    "highlight": "highlight",
}


class PaperRepository:
    """Repository for paper CRUD operations using SQLite."""

    def __init__(self, db_path: Path):
        """Initialize repository with database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self._listeners: list[ChangeListener] = []
        self._listeners_lock = threading.Lock()
        self._init_db()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._connection() as conn:
            cursor = conn.cursor()
            # BLOB affinity: ints stay ints and text stays text
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS papers (
                    key INTEGER PRIMARY KEY AUTOINCREMENT,
                    created_at TEXT NOT NULL,
                    paper_id BLOB NOT NULL,
                    title TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'Yet to start',
                    color TEXT,
                    font_color TEXT,
                    highlight INTEGER NOT NULL DEFAULT 0
                );
            """)
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_paper_id ON papers(paper_id);")
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS meta (
                    name TEXT PRIMARY KEY,
                    value INTEGER NOT NULL
                );
            """)
            cursor.execute("INSERT OR IGNORE INTO meta (name, value) VALUES ('revision', 0)")
            conn.commit()

    # ── Change feed ───────────────────────────────────────────────────

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register *listener* for change events.

        Returns:
            A callable that removes the listener again.
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, paper: Optional[StoredPaper]) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event, paper)
            except Exception:
                logger.exception("Change listener failed for %s event", event)

    @staticmethod
    def _bump_revision(cursor: sqlite3.Cursor) -> None:
        cursor.execute("UPDATE meta SET value = value + 1 WHERE name = 'revision'")

    def revision(self) -> int:
        """Monotonic counter incremented by every committed change."""
        with self._connection() as conn:
            row = conn.execute("SELECT value FROM meta WHERE name = 'revision'").fetchone()
        return int(row["value"]) if row else 0

    # ── Queries ───────────────────────────────────────────────────────

    @staticmethod
    def _row_to_paper(row: sqlite3.Row) -> StoredPaper:
        return StoredPaper(
            key=row["key"],
            id=row["paper_id"],
            title=row["title"],
            status=row["status"],
            color=row["color"],
            font_color=row["font_color"],
            highlight=bool(row["highlight"]),
        )

    def find_all(self) -> list[StoredPaper]:
        """Return all papers ordered by paper id (then insertion order)."""
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM papers ORDER BY paper_id ASC, key ASC"
            ).fetchall()
        return [self._row_to_paper(row) for row in rows]

    def find_by_key(self, key: int) -> Optional[StoredPaper]:
        """Find a single paper by store key.

        Returns:
            StoredPaper if found, None otherwise
        """
        with self._connection() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM papers WHERE key = ?", (key,)
            ).fetchone()
        return self._row_to_paper(row) if row is not None else None

    def next_paper_id(self) -> int:
        """One past the largest numeric paper id, or 1 for an empty store."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT MAX(paper_id) AS top FROM papers "
                "WHERE typeof(paper_id) IN ('integer', 'real')"
            ).fetchone()
        top = row["top"] if row else None
        return int(top) + 1 if top is not None else 1

    def get_counts(self) -> dict[str, int]:
        """Return total / published / pending counts."""
        with self._connection() as conn:
            row = conn.execute(
                """
                SELECT COUNT(*) AS total,
                       SUM(CASE WHEN LOWER(status) LIKE '%published%' THEN 1 ELSE 0 END) AS published
                FROM papers
                """
            ).fetchone()
        total = row["total"] or 0
        published = row["published"] or 0
        return {"total": total, "published": published, "pending": total - published}

    # ── Mutations ─────────────────────────────────────────────────────

    def add(self, title: str, status: str = "") -> StoredPaper:
        """Add a paper with the next free id.

        Args:
            title: Paper title (must not be blank)
            status: Status text; blank becomes "Yet to start"

        Raises:
            ValueError: *title* is blank
        """
        title = (title or "").strip()
        if not title:
            raise ValueError("Paper title must not be empty")

        paper_id = self.next_paper_id()
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO papers (created_at, paper_id, title, status, highlight)
                VALUES (?, ?, ?, ?, 0)
                """,
                (now, paper_id, title, (status or "").strip() or DEFAULT_STATUS),
            )
            key = cursor.lastrowid
            self._bump_revision(cursor)
            conn.commit()

        paper = self.find_by_key(key)
        logger.info("Added paper %s (key=%s)", paper_id, key)
        self._notify("added", paper)
        return paper

    def update(self, key: int, **fields: Any) -> StoredPaper:
        """Update the given fields of one paper.

        Accepted fields: ``id``, ``title``, ``status``, ``color``,
        ``font_color``, ``highlight``.

        Raises:
            PaperNotFoundError: no paper has *key*
        """
        unknown = set(fields) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Unknown paper fields: {sorted(unknown)}")
        if "highlight" in fields:
            fields["highlight"] = 1 if fields["highlight"] else 0

        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM papers WHERE key = ?", (key,))
            if cursor.fetchone() is None:
                raise PaperNotFoundError(key)
            if fields:
                assignments = ", ".join(f"{_UPDATABLE[name]} = ?" for name in fields)
                cursor.execute(
                    f"UPDATE papers SET {assignments} WHERE key = ?",
                    (*fields.values(), key),
                )
                self._bump_revision(cursor)
                conn.commit()

        paper = self.find_by_key(key)
        if fields:
            self._notify("updated", paper)
        return paper

    def delete(self, key: int) -> None:
        """Delete one paper.

        Raises:
            PaperNotFoundError: no paper has *key*
        """
        paper = self.find_by_key(key)
        if paper is None:
            raise PaperNotFoundError(key)
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM papers WHERE key = ?", (key,))
            self._bump_revision(cursor)
            conn.commit()
        logger.info("Deleted paper %s (key=%s)", paper.id, key)
        self._notify("deleted", paper)

    def replace_all(self, papers: Sequence[PaperRecord]) -> int:
        """Replace the whole store with *papers* (sheet import).

        Returns:
            Number of papers stored
        """
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM papers")
            cursor.executemany(
                """
                INSERT INTO papers
                (created_at, paper_id, title, status, color, font_color, highlight)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        now,
                        p.id,
                        p.title,
                        p.status or DEFAULT_STATUS,
                        p.color,
                        p.font_color,
                        1 if p.highlight else 0,
                    )
                    for p in papers
                ],
            )
            self._bump_revision(cursor)
            conn.commit()
        self._notify("replaced", None)
        return len(papers)
