"""Database module for the short links service.

This module implements the link store on top of SQLite. Every operation is
serialized on one connection; the read-and-expire lookup runs inside a
single write transaction so a link cannot be served after it was found
expired.
"""

import sqlite3
import logging
from threading import RLock
from typing import Optional

from ..models.link import ShortLink
from .exceptions import SlugConflict, StoreFailure
from .store import LinkStore, Lookup

logger = logging.getLogger(__name__)


class Database(LinkStore):
    """SQLite-backed link store."""

    def __init__(self, db_path: str):
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        self.db_path = db_path
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = RLock()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        The connection is shared between the event loop and worker threads,
        access to it is guarded by the store lock.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            self._connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                isolation_level=None,
            )
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def init_db(self) -> None:
        """Initialize database tables."""
        create_table_sql = """
        CREATE TABLE IF NOT EXISTS short_links (
            slug TEXT PRIMARY KEY,
            url TEXT NOT NULL,
            created_at INTEGER NOT NULL,
            expires_at INTEGER NOT NULL
        )
        """
        create_index_sql = (
            "CREATE INDEX IF NOT EXISTS idx_short_links_expires_at "
            "ON short_links(expires_at)"
        )
        with self._lock:
            try:
                conn = self._get_connection()
                conn.execute(create_table_sql)
                conn.execute(create_index_sql)
                logger.info("Database initialized successfully")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise StoreFailure() from e

    @staticmethod
    def _to_link(row: Optional[sqlite3.Row]) -> Optional[ShortLink]:
        if row is None:
            return None
        return ShortLink(
            slug=row["slug"],
            url=row["url"],
            created_at=row["created_at"],
            expires_at=row["expires_at"],
        )

    def insert(self, link: ShortLink) -> None:
        """Write a new short link.

        Args:
            link: The record to store.

        Raises:
            SlugConflict: The slug is already stored.
            StoreFailure: The write failed.
        """
        query = """
        INSERT INTO short_links (slug, url, created_at, expires_at)
        VALUES (?, ?, ?, ?)
        """
        with self._lock:
            try:
                conn = self._get_connection()
                conn.execute(
                    query, (link.slug, link.url, link.created_at, link.expires_at)
                )
            except sqlite3.IntegrityError as e:
                raise SlugConflict() from e
            except sqlite3.Error as e:
                logger.error(f"Insert failed: {e}")
                raise StoreFailure() from e

    def get(self, slug: str) -> Optional[ShortLink]:
        """Get a short link by exact slug.

        Args:
            slug: The slug.

        Returns:
            Stored record or None if not found.
        """
        query = "SELECT * FROM short_links WHERE slug = ?"
        with self._lock:
            try:
                conn = self._get_connection()
                row = conn.execute(query, (slug,)).fetchone()
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise StoreFailure() from e
        return self._to_link(row)

    def delete(self, slug: str) -> bool:
        """Delete a short link.

        Args:
            slug: The slug.

        Returns:
            True if deleted, False if not found.
        """
        query = "DELETE FROM short_links WHERE slug = ?"
        with self._lock:
            try:
                conn = self._get_connection()
                cursor = conn.execute(query, (slug,))
            except sqlite3.Error as e:
                logger.error(f"Delete failed: {e}")
                raise StoreFailure() from e
        return cursor.rowcount > 0

    def lookup(self, slug: str, now: int) -> Lookup:
        """Read a short link and delete it if it has expired.

        Args:
            slug: The slug.
            now: Current time in epoch milliseconds.

        Returns:
            The record (or None) and whether it was found expired.
        """
        with self._lock:
            try:
                conn = self._get_connection()
                conn.execute("BEGIN IMMEDIATE")
                try:
                    row = conn.execute(
                        "SELECT * FROM short_links WHERE slug = ?", (slug,)
                    ).fetchone()
                    link = self._to_link(row)
                    expired = link is not None and link.is_expired(now)
                    if expired:
                        conn.execute("DELETE FROM short_links WHERE slug = ?", (slug,))
                    conn.execute("COMMIT")
                except BaseException:
                    conn.execute("ROLLBACK")
                    raise
            except sqlite3.Error as e:
                logger.error(f"Lookup failed: {e}")
                raise StoreFailure() from e
        if expired:
            logger.info(f"Deleted expired short link: {slug}")
        return Lookup(link, expired=expired)

    def count(self) -> int:
        """Count stored short links.

        Returns:
            Number of records, live or expired.
        """
        with self._lock:
            try:
                conn = self._get_connection()
                row = conn.execute("SELECT COUNT(*) FROM short_links").fetchone()
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise StoreFailure() from e
        return row[0]
