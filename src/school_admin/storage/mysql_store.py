from __future__ import annotations

import json
import logging

import mysql.connector

from ..core.enums import Collection
from ..core.exceptions import StorageError
from .connection import DatabaseConnection, db_cursor
from .repository import Record, RecordStore

logger = logging.getLogger(__name__)


class MySQLRecordStore(RecordStore):
    """Record store backed by a single ``records`` table (JSON payload per row).

    Driver errors surface as StorageError; callers abort, nothing is retried.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_all(self, collection: Collection) -> list[Record]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT payload
                    FROM records
                    WHERE collection=%s
                    ORDER BY created_at, record_id
                    """,
                    (collection.value,),
                )
                rows = cur.fetchall() or []
        except mysql.connector.Error as e:
            logger.error("Failed to read %s: %s", collection.value, e)
            raise StorageError(f"Could not read {collection.value}") from e
        return [json.loads(r["payload"]) for r in rows]

    def save_one(self, collection: Collection, record: Record) -> None:
        payload = json.dumps(record)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO records(collection, record_id, payload)
                    VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                    """,
                    (collection.value, str(record["id"]), payload),
                )
        except mysql.connector.Error as e:
            logger.error("Failed to save %s/%s: %s", collection.value, record.get("id"), e)
            raise StorageError(f"Could not save {collection.value} record") from e

    def delete_one(self, collection: Collection, record_id: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "DELETE FROM records WHERE collection=%s AND record_id=%s",
                    (collection.value, str(record_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            logger.error("Failed to delete %s/%s: %s", collection.value, record_id, e)
            raise StorageError(f"Could not delete {collection.value} record") from e
