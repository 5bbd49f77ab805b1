from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from .connection import DatabaseConnection

RETRYABLE_ERRNOS = frozenset(
    {
        errorcode.ER_DUP_ENTRY,
        errorcode.ER_LOCK_DEADLOCK,
        errorcode.ER_LOCK_WAIT_TIMEOUT,
    }
)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on any error."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cur.close()
    finally:
        conn.close()


def is_retryable(exc: BaseException) -> bool:
    """Duplicate key / deadlock errors raised by a concurrent writer on the same row."""

    return isinstance(exc, mysql.connector.Error) and exc.errno in RETRYABLE_ERRNOS


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as time, timedelta or 'HH:MM[:SS]' depending on the connector."""

    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + value % timedelta(days=1)).time()
    if isinstance(value, str):
        text = value.strip()
        fmt = "%H:%M:%S" if text.count(":") == 2 else "%H:%M"
        return datetime.strptime(text, fmt).time()
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
