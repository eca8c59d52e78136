from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Connector failures (unreachable server, timeouts, rejected statements) surface as
    StorageError; any other exception propagates unchanged after rollback.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StorageError(f"Banco de dados indisponível: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise StorageError(f"Falha ao acessar o banco de dados: {e}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def load_json(value: Any, default: Any = None) -> Any:
    """Normalize MySQL JSON values across connector implementations.

    mysql-connector can return JSON as:
    - str
    - bytes / bytearray (C extension)
    - already-decoded dict/list
    """

    if value is None:
        return default

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    if isinstance(value, str):
        return json.loads(value) if value.strip() else default

    if isinstance(value, (dict, list)):
        return value

    raise TypeError(f"Unsupported MySQL JSON value type: {type(value)!r}")


def dump_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)
