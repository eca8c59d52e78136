from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import DEFAULT_DB_TIMEOUT_SECONDS


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout: int = DEFAULT_DB_TIMEOUT_SECONDS


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Every connection is bounded: connect honours ``timeout`` and each SELECT is capped
    by the server through MAX_EXECUTION_TIME.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        conn = mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.timeout),
        )
        try:
            cur = conn.cursor()
            try:
                cur.execute("SET SESSION MAX_EXECUTION_TIME=%s", (int(self._config.timeout) * 1000,))
            finally:
                cur.close()
        except Exception:
            conn.close()
            raise
        return conn
