from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Student:
    student_id: int
    nome: str
    turma_id: Optional[str]
    ativo: bool
    data_nascimento: Optional[date]
    criado_em: datetime
    extras: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            **self.extras,
            "id": self.student_id,
            "nome": self.nome,
            "turma_id": self.turma_id,
            "ativo": self.ativo,
            "data_nascimento": self.data_nascimento.isoformat() if self.data_nascimento else None,
            "criado_em": self.criado_em.isoformat(),
        }
