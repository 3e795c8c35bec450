"""
Embedded key‑value record store backed by a single SQLite file.

SQLite is used as a plain key‑value database: each bucket is a table
with a ``key`` primary key and a ``value`` column holding the JSON
encoded record.  The registry only uses one bucket, ``members``, keyed
by member ID.

Every public method opens its own connection and runs inside exactly
one transaction (a deferred ``BEGIN`` for reads, ``BEGIN IMMEDIATE``
for writes) and closes the connection on exit.  No multi‑operation
transactions are exposed.  ``modify`` and ``delete`` perform their
existence check inside the same write transaction as the mutation, so
an update can never resurrect a record deleted concurrently.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional

import pydantic

from .errors import StorageError, ValidationError
from ..schemas.member import Member


logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "members"


class MemberStore:
    """Record store for members, one JSON value per ID."""

    def __init__(self, path: str, bucket: str = DEFAULT_BUCKET) -> None:
        self.path = path
        self.bucket = bucket
        # Bucket names are quoted identifiers; embedded quotes are doubled.
        self._table = '"' + bucket.replace('"', '""') + '"'

    # ------------------------------------------------------------------
    # Connection and transaction helpers
    # ------------------------------------------------------------------
    def get_connection(self) -> sqlite3.Connection:
        """Open a new connection with transactions under explicit control."""
        return sqlite3.connect(self.path, isolation_level=None)

    @contextmanager
    def transaction(self, write: bool = False) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside one transaction, committing on success.

        Driver errors are re‑raised as :class:`StorageError`; any
        exception rolls the transaction back.
        """
        try:
            conn = self.get_connection()
        except sqlite3.Error as exc:
            raise StorageError(f"failed to open database {self.path}: {exc}") from exc
        try:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE" if write else "BEGIN")
            try:
                yield cursor
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def _has_bucket(self, cursor: sqlite3.Cursor) -> bool:
        row = cursor.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (self.bucket,),
        ).fetchone()
        return row is not None

    def _create_bucket(self, cursor: sqlite3.Cursor) -> None:
        cursor.execute(
            f"CREATE TABLE IF NOT EXISTS {self._table} (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )

    @staticmethod
    def _encode(member: Member) -> str:
        return member.model_dump_json(by_alias=True)

    @staticmethod
    def _decode(value: str) -> Member:
        return Member.model_validate_json(value)

    def ensure_bucket(self) -> None:
        """Create the database directory, file and bucket if they are missing."""
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        with self.transaction(write=True) as cursor:
            self._create_bucket(cursor)
        logger.info("Using database %s (bucket %s)", self.path, self.bucket)

    # ------------------------------------------------------------------
    # Record operations
    # ------------------------------------------------------------------
    def list(self) -> Dict[str, Member]:
        """Return every decodable member, keyed by ID.

        Entries that fail to decode, or that decode to a record without
        an ID, are skipped rather than failing the whole scan.  A fresh
        dict is built on every call.
        """
        members: Dict[str, Member] = {}
        with self.transaction() as cursor:
            if not self._has_bucket(cursor):
                return members
            rows = cursor.execute(f"SELECT key, value FROM {self._table}").fetchall()
        for key, value in rows:
            try:
                member = self._decode(value)
            except pydantic.ValidationError as exc:
                logger.warning("Skipping undecodable record %s: %s", key, exc)
                continue
            if not member.id:
                logger.warning("Skipping record %s without an ID", key)
                continue
            members[member.id] = member
        return members

    def get(self, member_id: str) -> Optional[Member]:
        """Return the member stored under ``member_id`` or ``None``.

        A stored value that cannot be decoded raises :class:`StorageError`.
        """
        with self.transaction() as cursor:
            if not self._has_bucket(cursor):
                return None
            row = cursor.execute(
                f"SELECT value FROM {self._table} WHERE key = ?", (member_id,)
            ).fetchone()
        if row is None:
            return None
        try:
            return self._decode(row[0])
        except pydantic.ValidationError as exc:
            raise StorageError(f"failed to decode member {member_id}: {exc}") from exc

    def exists(self, member_id: str) -> bool:
        """Check whether a key is present without decoding its value."""
        with self.transaction() as cursor:
            if not self._has_bucket(cursor):
                return False
            row = cursor.execute(
                f"SELECT 1 FROM {self._table} WHERE key = ?", (member_id,)
            ).fetchone()
        return row is not None

    def put(self, member: Member) -> None:
        """Insert or overwrite the record keyed by ``member.id``."""
        if not member.id:
            raise ValidationError("cannot store a member without an ID")
        data = self._encode(member)
        with self.transaction(write=True) as cursor:
            self._create_bucket(cursor)
            cursor.execute(
                f"INSERT INTO {self._table} (key, value) VALUES (?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (member.id, data),
            )
        logger.debug("Stored member %s", member.id)

    def delete(self, member_id: str) -> bool:
        """Remove ``member_id``.  Absent keys are not an error.

        Returns ``True`` if a record was removed.
        """
        with self.transaction(write=True) as cursor:
            if not self._has_bucket(cursor):
                return False
            cursor.execute(f"DELETE FROM {self._table} WHERE key = ?", (member_id,))
            removed = cursor.rowcount > 0
        logger.debug("Delete member %s (existed=%s)", member_id, removed)
        return removed

    def modify(self, member_id: str, change: Callable[[Member], Member]) -> Optional[Member]:
        """Atomically replace an existing record.

        Reads the current record, passes it to ``change`` and writes the
        result back under the same key, all in one write transaction.
        The ID of the written record is always ``member_id``.  Returns
        the written record, or ``None`` without writing anything when
        no record exists.
        """
        with self.transaction(write=True) as cursor:
            if not self._has_bucket(cursor):
                return None
            row = cursor.execute(
                f"SELECT value FROM {self._table} WHERE key = ?", (member_id,)
            ).fetchone()
            if row is None:
                return None
            try:
                current = self._decode(row[0])
            except pydantic.ValidationError as exc:
                raise StorageError(f"failed to decode member {member_id}: {exc}") from exc
            updated = change(current).model_copy(update={"id": member_id})
            cursor.execute(
                f"UPDATE {self._table} SET value = ? WHERE key = ?",
                (self._encode(updated), member_id),
            )
        logger.debug("Modified member %s", member_id)
        return updated
