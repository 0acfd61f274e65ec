import sqlite3
import json
import threading
from contextlib import contextmanager
from typing import Callable, List, Tuple, Optional, Set

from loguru import logger
from pydantic import ValidationError

from models import ENTRY_LIST, WorkoutEntry


class Database:
    """Provides SQLite connection management and schema initialization."""

    _TABLE_DEFINITIONS = {
        "kv_store": (
            """CREATE TABLE kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );""",
            ["key", "value"],
        ),
    }

    def __init__(self, db_path: str = "workout_log.db") -> None:
        self._db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connection(self):
        connection = sqlite3.connect(self._db_path)
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            for table, (sql, columns) in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql, columns)

    def _ensure_table(
        self, conn: sqlite3.Connection, table: str, sql: str, columns: List[str]
    ) -> None:
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (table,)
        )
        if cur.fetchone() is None:
            conn.execute(sql)
            return

        cur = conn.execute(f"PRAGMA table_info({table});")
        existing_cols = [row[1] for row in cur.fetchall()]
        if existing_cols == columns:
            return

        conn.execute(f"DROP TABLE IF EXISTS {table}_old;")
        conn.execute(f"ALTER TABLE {table} RENAME TO {table}_old;")
        conn.execute(sql)
        common = [c for c in existing_cols if c in columns]
        if common:
            cols = ", ".join(common)
            conn.execute(
                f"INSERT INTO {table} ({cols}) SELECT {cols} FROM {table}_old;"
            )
        conn.execute(f"DROP TABLE {table}_old;")


class BaseRepository(Database):
    """Base repository providing helper methods."""

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()


class KeyValueRepository(BaseRepository):
    """String values stored under string keys."""

    def get(self, key: str) -> Optional[str]:
        rows = self.fetch_all("SELECT value FROM kv_store WHERE key = ?;", (key,))
        return rows[0][0] if rows else None

    def set(self, key: str, value: str) -> None:
        self.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value;",
            (key, value),
        )

    def keys(self) -> List[str]:
        return [r[0] for r in self.fetch_all("SELECT key FROM kv_store ORDER BY key;")]


class WorkoutEntryRepository:
    """In-memory collection of workout entries persisted as one JSON value.

    The whole collection is written back to the key-value store after every
    mutation; there are no partial writes. Mutations and flushes share one
    lock so concurrent request handlers cannot interleave them.
    """

    STORAGE_KEY = "workout_app_v3"

    def __init__(
        self,
        db_path: str = "workout_log.db",
        storage_key: str = STORAGE_KEY,
        kv: KeyValueRepository | None = None,
    ) -> None:
        self._kv = kv if kv is not None else KeyValueRepository(db_path)
        self._key = storage_key
        self._lock = threading.Lock()
        self._entries: list[WorkoutEntry] = []
        self.load()

    def load(self) -> List[WorkoutEntry]:
        """Read the stored collection, falling back to empty when unreadable."""
        raw = self._kv.get(self._key)
        entries: list[WorkoutEntry] = []
        if raw:
            try:
                entries = ENTRY_LIST.validate_json(raw)
            except ValidationError as e:
                logger.warning(
                    f"Stored workouts under {self._key!r} are unreadable, starting empty: "
                    f"{e.error_count()} error(s)"
                )
                entries = []
        with self._lock:
            self._entries = entries
        logger.debug(f"Loaded {len(entries)} workout entries")
        return list(entries)

    def serialize(self) -> str:
        with self._lock:
            return self._serialize(self._entries)

    @staticmethod
    def _serialize(entries: List[WorkoutEntry]) -> str:
        return json.dumps([e.to_dict() for e in entries], ensure_ascii=False)

    def _replace_all(self, entries: List[WorkoutEntry]) -> None:
        # memory only follows once the write has succeeded
        self._kv.set(self._key, self._serialize(entries))
        self._entries = entries
        logger.debug(f"Flushed {len(entries)} workout entries")

    def _find(self, entry_id: str) -> Optional[WorkoutEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def _upsert_locked(self, entry: WorkoutEntry) -> None:
        entries = list(self._entries)
        for idx, existing in enumerate(entries):
            if existing.id == entry.id:
                entries[idx] = entry
                break
        else:
            entries.append(entry)
        self._replace_all(entries)

    def all(self) -> List[WorkoutEntry]:
        with self._lock:
            return list(self._entries)

    def fetch(self, entry_id: str) -> Optional[WorkoutEntry]:
        with self._lock:
            return self._find(entry_id)

    def entries_on(self, date: str) -> List[WorkoutEntry]:
        """Return entries logged on ``date`` in insertion order."""
        with self._lock:
            return [e for e in self._entries if e.date == date]

    def dates_with_entries(self, year: int, month0: int) -> Set[str]:
        prefix = f"{year:04d}-{month0 + 1:02d}-"
        with self._lock:
            return {e.date for e in self._entries if e.date.startswith(prefix)}

    def upsert(self, entry: WorkoutEntry) -> None:
        """Replace the entry with the same id or append a new one."""
        with self._lock:
            self._upsert_locked(entry)

    def upsert_built(
        self,
        entry_id: Optional[str],
        build: Callable[
            [Optional[WorkoutEntry], Callable[[str], bool]], WorkoutEntry
        ],
    ) -> WorkoutEntry:
        """Build an entry and store it without releasing the lock in between.

        ``build`` receives the stored entry with ``entry_id`` (``None`` when
        there is none or no id was given) and a predicate telling whether an
        id is already taken. It must not call back into the repository.
        """
        with self._lock:
            existing = self._find(entry_id) if entry_id is not None else None
            entry = build(existing, lambda other: self._find(other) is not None)
            self._upsert_locked(entry)
        return entry

    def delete(self, entry_id: str) -> None:
        with self._lock:
            remaining = [e for e in self._entries if e.id != entry_id]
            if len(remaining) == len(self._entries):
                raise ValueError("entry not found")
            self._replace_all(remaining)
        logger.info(f"Deleted workout entry {entry_id}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
