from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_by_class(self, turma_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(
        self,
        *,
        nome: str,
        turma_id: Optional[str],
        ativo: bool,
        data_nascimento: Optional[date],
        criado_em: datetime,
        extras: Mapping[str, Any],
    ) -> int:
        raise NotImplementedError

    def update(self, *, student_id: int, fields: Mapping[str, Any], extras: Mapping[str, Any]) -> bool:
        """Overwrite the given columns and merge ``extras`` into the stored extras."""

        raise NotImplementedError
