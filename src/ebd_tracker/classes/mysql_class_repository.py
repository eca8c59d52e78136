from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, load_json
from .model import ClassGroup
from .repository import ClassRepository


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, atributos, criado_em FROM turmas ORDER BY id ASC")
            return [
                ClassGroup(
                    class_id=int(r["id"]),
                    atributos=load_json(r.get("atributos"), {}),
                    criado_em=r.get("criado_em"),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, atributos: Mapping[str, Any]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO turmas(atributos) VALUES(%s)", (dump_json(dict(atributos)),))
            return int(cur.lastrowid)
