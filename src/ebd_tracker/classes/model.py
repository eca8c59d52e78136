from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class ClassGroup:
    """A turma: an id plus whatever attributes the admin supplied (name, schedule, ...)."""

    class_id: int
    atributos: dict[str, Any] = field(default_factory=dict)
    criado_em: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {**self.atributos, "id": self.class_id}
