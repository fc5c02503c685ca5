# Area: Engine
"""
naval_referee._engine.database — SQLite store backend
=====================================================

Handles SQLite database initialization and connection management
for persisting the instance singletons and match records.
"""

import sqlite3
import logging
from pathlib import Path
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .enums import StorageNamespace
from .store import Store, StoreKey

logger = logging.getLogger("naval_referee.engine.database")

# Path to schema file
SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def get_connection(db_path: str = "naval_referee.db", timeout: float = 5.0) -> sqlite3.Connection:
    """
    Get a database connection.

    Args:
        db_path: Path to the SQLite database file
        timeout: Seconds to wait for a lock held by another connection

    Returns:
        SQLite connection with row factory set
    """
    conn = sqlite3.connect(db_path, timeout=timeout)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = "naval_referee.db") -> None:
    """
    Initialize the database with schema.

    Args:
        db_path: Path to the SQLite database file
    """
    conn = get_connection(db_path)
    try:
        with open(SCHEMA_PATH, "r") as f:
            schema = f.read()
        conn.executescript(schema)
        conn.commit()
        logger.info(f"Database initialized at {db_path}")
    finally:
        conn.close()


UPSERT_QUERY = """
    INSERT INTO kv_store (namespace, key, value)
    VALUES (?, ?, ?)
    ON CONFLICT(namespace, key)
    DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
"""


def _rows(writes: Dict[StoreKey, str]) -> List[tuple]:
    return [(ns.value, key, value) for (ns, key), value in writes.items()]


class SqliteStore(Store):
    """
    Store backed by the kv_store table.

    A transaction holds one connection from ``BEGIN IMMEDIATE`` to
    ``COMMIT``, so reads and writes of one operation see a single
    snapshot and other connections (including other processes) wait
    for the write lock. Outside a transaction each call uses a short
    lived connection.
    """

    def __init__(
        self,
        db_path: str = "naval_referee.db",
        initialize: bool = True,
        timeout: float = 5.0,
    ):
        """
        Initialize store.

        Args:
            db_path: Path to the SQLite database file
            initialize: Create the schema if it does not exist yet
            timeout: Seconds to wait for another writer's lock
        """
        super().__init__()
        self.db_path = db_path
        self.timeout = timeout
        self._conn: Optional[sqlite3.Connection] = None
        if initialize:
            init_database(db_path)

    def _get_conn(self) -> sqlite3.Connection:
        """Get a database connection."""
        return get_connection(self.db_path, timeout=self.timeout)

    @contextmanager
    def _reader(self) -> Iterator[sqlite3.Connection]:
        if self._conn is not None and self.in_transaction():
            yield self._conn
            return
        conn = self._get_conn()
        try:
            yield conn
        finally:
            conn.close()

    # ── Transaction hooks ─────────────────────────────────────

    def _begin(self) -> None:
        conn = self._get_conn()
        conn.isolation_level = None
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error:
            conn.close()
            raise
        self._conn = conn

    def _commit(self, writes: Dict[StoreKey, str]) -> None:
        conn, self._conn = self._conn, None
        try:
            if writes:
                conn.executemany(UPSERT_QUERY, _rows(writes))
            conn.execute("COMMIT")
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()

    def _rollback(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
        finally:
            conn.close()

    # ── Reads and writes ──────────────────────────────────────

    def _read(self, namespace: StorageNamespace, key: str) -> Optional[str]:
        with self._reader() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE namespace = ? AND key = ?",
                (namespace.value, key),
            ).fetchone()
        return row["value"] if row is not None else None

    def _write_all(self, writes: Dict[StoreKey, str]) -> None:
        conn = self._get_conn()
        try:
            with conn:
                conn.executemany(UPSERT_QUERY, _rows(writes))
        finally:
            conn.close()

    def keys(self, namespace: StorageNamespace) -> list:
        """List committed keys in a namespace."""
        with self._reader() as conn:
            cursor = conn.execute(
                "SELECT key FROM kv_store WHERE namespace = ? ORDER BY key",
                (namespace.value,),
            )
            return [row["key"] for row in cursor.fetchall()]
