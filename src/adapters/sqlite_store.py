"""SQLite storage adapter.

Implements the core EntryStorePort on the t_expl table. Every operation opens
its own connection, so one store instance can be shared by concurrent
handlers; SQLite's locking provides the isolation between them.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

from core.models import Entry, EntryIndices
from core.ranking import indices_from_counts

LOGGER = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _from_epoch_ms(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def _row_to_entry(row: sqlite3.Row) -> Entry:
    return Entry(
        id=int(row["id"]),
        author=row["nick"],
        term=row["item"],
        term_key=row["item_norm"],
        explanation=row["expl"],
        created_at=_from_epoch_ms(row["datetime"]),
        enabled=row["enabled"] != 0,
    )


class SQLiteEntryStore:
    """Append-only glossary table that satisfies the EntryStorePort contract."""

    def __init__(self, db_path: str, now: Optional[Callable[[], datetime]] = None) -> None:
        self._db_path = db_path
        self._now = now or _utc_now
        self._init_lock = threading.Lock()
        self._initialized = False
        self.init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        # Autocommit mode; write paths manage their transactions explicitly.
        conn = sqlite3.connect(self._db_path, isolation_level=None, timeout=30)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def _write_transaction(self) -> Iterator[sqlite3.Connection]:
        with self._connect() as conn:
            # IMMEDIATE takes the write lock up front so the insert and the
            # ranking read see the same table state.
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def init_db(self) -> None:
        """Create the table and index if they do not exist.

        Runs at most once per store instance; the DDL itself is idempotent so
        several processes opening the same file are safe as well.
        """

        with self._init_lock:
            if self._initialized:
                return
            with self._connect() as conn:
                # t_expl is append-only; rows are only ever disabled.
                # Fields:
                # - id: AUTOINCREMENT, never reused, defines history order
                # - nick: submitting user (NULL in legacy rows)
                # - item: display term as submitted
                # - item_norm: normalized lookup key
                # - expl: explanation text
                # - datetime: epoch milliseconds, UTC (NULL in legacy rows)
                # - enabled: 0 for soft-deleted rows
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS t_expl (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        nick TEXT,
                        item TEXT NOT NULL,
                        item_norm TEXT NOT NULL,
                        expl TEXT NOT NULL,
                        datetime INTEGER,
                        enabled INTEGER NOT NULL
                    )
                    """
                )
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_expl_item_norm ON t_expl (item_norm)"
                )
            self._initialized = True
            LOGGER.debug("Schema ready in %s", self._db_path)

    @staticmethod
    def _insert(
        conn: sqlite3.Connection,
        term: str,
        term_key: str,
        explanation: str,
        author: Optional[str],
        created_at: datetime,
    ) -> int:
        cur = conn.execute(
            """
            INSERT INTO t_expl (nick, item, item_norm, expl, datetime, enabled)
            VALUES (?, ?, ?, ?, ?, 1)
            """,
            (author, term, term_key, explanation, _to_epoch_ms(created_at)),
        )
        return int(cur.lastrowid)

    def append(
        self, term: str, term_key: str, explanation: str, author: Optional[str] = None
    ) -> int:
        """Insert one enabled entry and return its new id."""

        with self._write_transaction() as conn:
            return self._insert(conn, term, term_key, explanation, author, self._now())

    def append_ranked(
        self, term: str, term_key: str, explanation: str, author: Optional[str] = None
    ) -> EntryIndices:
        """Insert one entry and rank it within the same transaction.

        The prior-entry count is bounded by the new id rather than by the
        current row count, so concurrent adds for one term never share ranks.
        """

        with self._write_transaction() as conn:
            entry_id = self._insert(conn, term, term_key, explanation, author, self._now())
            rows = conn.execute(
                """
                SELECT enabled != 0 AS is_enabled, count(1) AS n
                FROM t_expl
                WHERE item_norm = ? AND id < ?
                GROUP BY 1
                """,
                (term_key, entry_id),
            ).fetchall()
        normal_index, permanent_index = indices_from_counts(
            (bool(row["is_enabled"]), int(row["n"])) for row in rows
        )
        return EntryIndices(
            entry_id=entry_id,
            normal_index=normal_index,
            permanent_index=permanent_index,
        )

    def query_by_key(self, term_key: str) -> Iterator[Entry]:
        """Return all entries for a term key, ascending by id."""

        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, nick, item, item_norm, expl, datetime, enabled
                FROM t_expl
                WHERE item_norm = ?
                ORDER BY id
                """,
                (term_key,),
            ).fetchall()
        return iter([_row_to_entry(row) for row in rows])

    def get(self, entry_id: int) -> Optional[Entry]:
        """Return a single entry by id, if any."""

        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT id, nick, item, item_norm, expl, datetime, enabled
                FROM t_expl
                WHERE id = ?
                """,
                (entry_id,),
            ).fetchone()
        return _row_to_entry(row) if row else None

    def set_enabled(self, entry_id: int, enabled: bool) -> bool:
        """Soft-delete or restore an entry. Returns False for unknown ids."""

        with self._write_transaction() as conn:
            cur = conn.execute(
                "UPDATE t_expl SET enabled = ? WHERE id = ?",
                (1 if enabled else 0, entry_id),
            )
            changed = cur.rowcount > 0
        if changed:
            LOGGER.info("Entry %s %s", entry_id, "enabled" if enabled else "disabled")
        return changed

    def count(self) -> int:
        """Return the total number of rows, disabled ones included."""

        with self._connect() as conn:
            row = conn.execute("SELECT count(1) AS n FROM t_expl").fetchone()
        return int(row["n"])
