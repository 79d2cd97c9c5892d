from __future__ import annotations

import json

import mysql.connector
import pytest

from school_admin.core.enums import Collection
from school_admin.core.exceptions import StorageError
from school_admin.storage.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from school_admin.storage.connection import DBConfig
from school_admin.storage.mysql_store import MySQLRecordStore


class FakeCursor:
    def __init__(self, rows=None, error=None, rowcount=0):
        self.rows = rows or []
        self.error = error
        self.rowcount = rowcount
        self.executed = []

    def execute(self, sql, params=None):
        if self.error:
            raise self.error
        self.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return self.rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, cursor: FakeCursor):
        self.cursor = cursor
        self.connections = []

    def connect(self):
        conn = FakeConnection(self.cursor)
        self.connections.append(conn)
        return conn


def test_get_all_decodes_json_payloads():
    cur = FakeCursor(rows=[{"payload": json.dumps({"id": "S1", "rollNo": 1001})}])
    store = MySQLRecordStore(FakeFactory(cur))

    assert store.get_all(Collection.STUDENTS) == [{"id": "S1", "rollNo": 1001}]
    assert cur.executed[0][1] == ("students",)


def test_save_one_upserts_by_collection_and_id():
    cur = FakeCursor()
    factory = FakeFactory(cur)
    store = MySQLRecordStore(factory)

    store.save_one(Collection.FEES, {"id": "S1-2023-2024", "transactions": []})

    sql, params = cur.executed[0]
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params[:2] == ("fees", "S1-2023-2024")
    assert json.loads(params[2]) == {"id": "S1-2023-2024", "transactions": []}
    assert factory.connections[0].committed
    assert factory.connections[0].closed


def test_delete_one_reports_whether_a_row_went_away():
    store = MySQLRecordStore(FakeFactory(FakeCursor(rowcount=1)))

    assert store.delete_one(Collection.EXAMS, "S1-Final-Science") is True


@pytest.mark.parametrize("call", ["get_all", "save_one", "delete_one"])
def test_driver_errors_become_storage_errors_and_roll_back(call):
    factory = FakeFactory(FakeCursor(error=mysql.connector.Error("connection lost")))
    store = MySQLRecordStore(factory)
    args = {
        "get_all": (Collection.FEES,),
        "save_one": (Collection.FEES, {"id": "X"}),
        "delete_one": (Collection.FEES, "X"),
    }[call]

    with pytest.raises(StorageError):
        getattr(store, call)(*args)

    conn = factory.connections[0]
    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed


def test_schema_splitter_skips_comments_and_database_statements():
    sql = """
    CREATE DATABASE IF NOT EXISTS school_admin_db;
    USE school_admin_db;
    -- one row per record; the id is unique within its collection
    CREATE TABLE records (payload JSON, note VARCHAR(10) DEFAULT 'a;b');
    """

    statements = list(_iter_sql_statements(_strip_create_db_and_use(sql)))

    assert statements == ["CREATE TABLE records (payload JSON, note VARCHAR(10) DEFAULT 'a;b')"]


def test_db_config_from_settings_fills_defaults():
    config = DBConfig.from_settings({"user": "school", "password": "pw", "port": "3307"})

    assert config == DBConfig(host="localhost", port=3307, user="school", password="pw", database="school_admin_db")
